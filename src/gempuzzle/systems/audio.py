"""Fire-and-forget sound cues for gem selection and matches."""
from __future__ import annotations

import logging
from typing import Protocol

from gempuzzle.events.bus import EventBus, EVENT_TILE_CLICK, EVENT_TILE_SWIPE, EVENT_MATCH_FOUND

logger = logging.getLogger(__name__)

SELECT_SOUND = ":resources:sounds/coin1.wav"
MATCH_SOUND = ":resources:sounds/upgrade1.wav"


class SoundPlayer(Protocol):
    def on_select(self) -> None: ...

    def on_match(self, count: int) -> None: ...


class ArcadeSoundPlayer:
    """Plays arcade's bundled sounds; bigger matches play at a higher pitch."""

    def __init__(self, *, volume: float = 0.3) -> None:
        import arcade

        self._arcade = arcade
        self.volume = volume
        try:
            self._select = arcade.load_sound(SELECT_SOUND)
            self._match = arcade.load_sound(MATCH_SOUND)
        except Exception as exc:
            # No audio backend (CI, headless servers): stay silent.
            logger.warning("Sound disabled: %s", exc)
            self._select = None
            self._match = None

    def on_select(self) -> None:
        if self._select is not None:
            self._arcade.play_sound(self._select, volume=self.volume * 0.5)

    def on_match(self, count: int) -> None:
        if self._match is not None:
            # 440 Hz base plus 50 Hz per gem, expressed as a playback speed.
            speed = (440 + count * 50) / 440
            self._arcade.play_sound(self._match, volume=self.volume, speed=speed)


class AudioSystem:
    def __init__(self, event_bus: EventBus, player: SoundPlayer):
        self.event_bus = event_bus
        self.player = player
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_select)
        self.event_bus.subscribe(EVENT_TILE_SWIPE, self.on_select)
        self.event_bus.subscribe(EVENT_MATCH_FOUND, self.on_match)

    def on_select(self, sender, **kwargs):
        self.player.on_select()

    def on_match(self, sender, **kwargs):
        self.player.on_match(int(kwargs.get('size', 0)))
