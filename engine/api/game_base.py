from __future__ import annotations

from typing import Optional

import pygame

from engine.app.context import Context

from .frame_data import FrameData


class Game:
    """
    Plugin interface for anything under games/<id>/main.py.

    The loop calls on_event for every pygame event, then on_update and
    on_draw once per frame. Read time from ctx.ticks so event handling and
    frame updates share one clock.
    """

    def on_load(self, ctx: Context, manifest: dict) -> None:
        """Called once with the parsed manifest.yaml."""
        ...

    def on_update(self, dt_ms: float, frame: FrameData) -> None:
        """Called every frame; frame.timestamp_ms is the current tick."""
        ...

    def on_draw(self, surface: pygame.Surface) -> None:
        ...

    def on_event(self, event: pygame.event.Event) -> Optional[bool]:
        """Return True to consume the event (the loop then skips ESC-to-quit)."""
        ...

    def on_unload(self) -> None:
        ...
