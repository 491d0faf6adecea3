from __future__ import annotations
import logging
import random
from dataclasses import dataclass, fields
from typing import List, Optional

from engine.app.timers import Scheduler, TimerHandle

from . import session as rt
from .const import (
    ALPHABET, DELAY_MIN_MS, DELAY_MAX_MS, TICK_MS, RANKING_SIZE, PLAYER_ID_LENGTH,
)
from .ranking import Ranking, RankingEntry
from .session import Phase, Session

log = logging.getLogger(__name__)


@dataclass
class ReactionOptions:
    delay_min_ms: int = DELAY_MIN_MS
    delay_max_ms: int = DELAY_MAX_MS
    tick_ms: int = TICK_MS
    ranking_size: int = RANKING_SIZE
    player_id_length: int = PLAYER_ID_LENGTH

    def __post_init__(self):
        for f in fields(self):
            setattr(self, f.name, int(getattr(self, f.name)))
        if self.delay_min_ms < 0 or self.delay_min_ms >= self.delay_max_ms:
            raise ValueError(
                f"delay range must satisfy 0 <= min < max, got [{self.delay_min_ms}, {self.delay_max_ms})")
        if self.tick_ms <= 0:
            raise ValueError("tick_ms must be positive")
        if self.ranking_size <= 0:
            raise ValueError("ranking_size must be positive")
        if self.player_id_length <= 0:
            raise ValueError("player_id_length must be positive")

    @classmethod
    def from_manifest(cls, manifest: Optional[dict]) -> "ReactionOptions":
        opts = (manifest or {}).get("options") or {}
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in opts.items() if k in known})


class ReactionController:
    """
    Owns the current Session value, the ranking and the timers driving them.

    The presentation layer forwards three kinds of input: start requests, key
    presses and frame ticks. Everything it needs to draw is exposed as plain
    read-only properties.
    """

    def __init__(self, options: Optional[ReactionOptions] = None, rng=None,
                 scheduler: Optional[Scheduler] = None):
        self.options = options or ReactionOptions()
        self.rng = rng or random.Random()
        self.scheduler = scheduler or Scheduler()
        self.ranking = Ranking(capacity=self.options.ranking_size,
                               player_id_length=self.options.player_id_length)

        self.session: Session = Session()
        self.elapsed_display_ms: int = 0
        self.result_message: str = ""
        self.awaiting_player_id: bool = False

        self._delay_timer: Optional[TimerHandle] = None
        self._sample_timer: Optional[TimerHandle] = None

    # ---------- Inputs ----------
    def on_start_requested(self, now_ms: int) -> None:
        self._cancel_timers()
        self.awaiting_player_id = False
        self.elapsed_display_ms = 0
        self.result_message = ""

        self.session = rt.start(self.session, self.rng,
                                self.options.delay_min_ms, self.options.delay_max_ms)
        generation = self.session.generation
        self._delay_timer = self.scheduler.call_later(
            now_ms, self.session.pending_delay_ms,
            lambda fired_ms: self._on_delay_elapsed(generation, fired_ms))
        log.debug("Round %d armed, target in %d ms", generation, self.session.pending_delay_ms)

    def on_key_input(self, symbol: Optional[str], now_ms: int) -> bool:
        """Returns True if the key finished the round."""
        before = self.session
        self.session = rt.check_input(self.session, symbol, now_ms)
        if self.session is before:
            return False

        self._cancel_timers()
        self.elapsed_display_ms = self.session.reaction_time_ms
        self.result_message = f"Reaction time: {self.session.reaction_time_ms} ms"
        self.awaiting_player_id = True
        log.debug("Round %d finished in %d ms", self.session.generation, self.session.reaction_time_ms)
        return True

    def on_tick(self, now_ms: int) -> None:
        self.scheduler.run_due(now_ms)

    def submit_player_id(self, raw: Optional[str]) -> Optional[RankingEntry]:
        if not self.awaiting_player_id:
            return None
        self.awaiting_player_id = False
        return self.ranking.submit(raw, self.session.reaction_time_ms)

    def skip_player_id(self) -> None:
        self.awaiting_player_id = False

    # ---------- Timer callbacks ----------
    def _on_delay_elapsed(self, generation: int, now_ms: int) -> None:
        before = self.session
        self.session = rt.activate(self.session, generation, now_ms, self.rng, ALPHABET)
        if self.session is before:
            log.debug("Ignoring stale delay from round %d", generation)
            return
        self._delay_timer = None
        self.elapsed_display_ms = 0
        self._sample_timer = self.scheduler.call_every(now_ms, self.options.tick_ms, self._on_sample)
        log.debug("Round %d active, target %s", generation, self.session.target_symbol)

    def _on_sample(self, now_ms: int) -> None:
        self.elapsed_display_ms = rt.elapsed_ms(self.session, now_ms)

    def _cancel_timers(self) -> None:
        for handle in (self._delay_timer, self._sample_timer):
            if handle is not None:
                handle.cancel()
        self._delay_timer = None
        self._sample_timer = None

    # ---------- View ----------
    @property
    def phase(self) -> Phase:
        return self.session.phase

    @property
    def target_symbol(self) -> str:
        return self.session.target_symbol or ""

    @property
    def elapsed_display(self) -> str:
        return rt.format_elapsed(self.elapsed_display_ms)

    @property
    def instruction(self) -> str:
        phase = self.session.phase
        if phase in (Phase.Armed, Phase.Delaying):
            return "Get ready..."
        if phase == Phase.Active:
            return f"Press the key: {self.session.target_symbol}"
        if phase == Phase.Finished:
            return "Press START to play again"
        return "Press START to begin"

    @property
    def ranking_lines(self) -> List[str]:
        return self.ranking.render_lines()
