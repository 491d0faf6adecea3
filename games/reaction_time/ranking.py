from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .const import RANKING_SIZE, PLAYER_ID_LENGTH

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankingEntry:
    player_id: str
    reaction_time_ms: int

    def __str__(self) -> str:
        return f"{self.player_id}: {self.reaction_time_ms} ms"


def normalize_player_id(raw: Optional[str], length: int = PLAYER_ID_LENGTH) -> Optional[str]:
    """
    Returns the stored form of a player id, or None if it should be rejected.
    Only blank input is rejected; anything else is cut to `length` characters
    and uppercased as typed.
    """
    if raw is None or not raw.strip():
        return None
    return raw[:length].upper()


class Ranking:
    """In-memory best-N leaderboard, fastest first."""

    def __init__(self, capacity: int = RANKING_SIZE, player_id_length: int = PLAYER_ID_LENGTH):
        self.capacity = capacity
        self.player_id_length = player_id_length
        self._entries: List[RankingEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def submit(self, player_id: Optional[str], reaction_time_ms: int) -> Optional[RankingEntry]:
        pid = normalize_player_id(player_id, self.player_id_length)
        if pid is None:
            log.debug("Ignoring blank player id")
            return None

        entry = RankingEntry(player_id=pid, reaction_time_ms=max(0, int(reaction_time_ms)))
        self._entries.append(entry)
        # sort() is stable, so equal times keep insertion order
        self._entries.sort(key=lambda e: e.reaction_time_ms)
        del self._entries[self.capacity:]
        log.info("Recorded %s", entry)
        return entry

    def snapshot(self) -> Tuple[RankingEntry, ...]:
        return tuple(self._entries)

    def render_lines(self) -> List[str]:
        if not self._entries:
            return ["Ranking: (empty)"]
        return ["Ranking:"] + [f"{i}. {e}" for i, e in enumerate(self._entries, start=1)]
