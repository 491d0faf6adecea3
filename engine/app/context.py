from __future__ import annotations
from dataclasses import dataclass, field
import pygame
from typing import Any, Callable, Tuple
from engine.api.config import EngineConfig


@dataclass
class Context:
    screen: pygame.Surface
    clock: pygame.time.Clock
    cfg: EngineConfig
    game_id: str
    screen_size: Tuple[int, int]
    # monotonic milliseconds; the same source stamps FrameData
    ticks: Callable[[], int] = pygame.time.get_ticks
    resources: dict[str, Any] = field(default_factory=dict)
