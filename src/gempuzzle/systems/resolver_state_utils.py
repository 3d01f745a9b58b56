from esper import World

from gempuzzle.components.resolver_state import ResolverState


def get_or_create_resolver_state(world: World) -> ResolverState:
    """Return the shared ResolverState component, creating it if absent."""
    existing = list(world.get_component(ResolverState))
    if existing:
        return existing[0][1]
    world.create_entity(ResolverState())
    return list(world.get_component(ResolverState))[0][1]


def is_processing(world: World) -> bool:
    for _, state in world.get_component(ResolverState):
        return state.processing
    return False
