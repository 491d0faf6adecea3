from __future__ import annotations
from dataclasses import dataclass


@dataclass
class FrameData:
    # monotonic milliseconds (pygame ticks) sampled once per frame
    timestamp_ms: int
    frame_index: int = 0
