from __future__ import annotations

from esper import World

from gempuzzle.components.session import Session


def get_session(world: World) -> Session | None:
    for _, session in world.get_component(Session):
        return session
    return None


def replace_session(world: World, session: Session) -> Session:
    """Drop any previous session and register ``session`` as the active one."""
    for entity, _ in list(world.get_component(Session)):
        world.delete_entity(entity, immediate=True)
    world.create_entity(session)
    return session
