"""
Timing state machine for one reaction round.

A round is an immutable Session value; every transition is a plain function
returning a new Session (or the same one when the call does not apply to the
current phase). The caller owns the current value and the timers that drive
it.

    Idle -> Armed -> Delaying -> Active -> Finished
                ^                            |
                +------------ start ---------+
"""
from __future__ import annotations
import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from .const import ALPHABET, DELAY_MIN_MS, DELAY_MAX_MS


class Phase(Enum):
    Idle = 1
    Armed = 2
    Delaying = 3
    Active = 4      # target shown, clock running
    Finished = 5


@dataclass(frozen=True)
class Session:
    phase: Phase = Phase.Idle
    # bumped on every arm(); timer callbacks carry it so stale ones are ignored
    generation: int = 0
    pending_delay_ms: int = 0
    # set only from Active onwards
    target_symbol: Optional[str] = None
    start_instant_ms: Optional[int] = None
    # set only in Finished
    reaction_time_ms: Optional[int] = None


def draw_delay_ms(rng, min_ms: int = DELAY_MIN_MS, max_ms: int = DELAY_MAX_MS) -> int:
    """Uniform integer delay in [min_ms, max_ms)."""
    return rng.randrange(min_ms, max_ms)


def arm(session: Session) -> Session:
    return Session(phase=Phase.Armed, generation=session.generation + 1)


def begin_delay(session: Session, rng, min_ms: int = DELAY_MIN_MS, max_ms: int = DELAY_MAX_MS) -> Session:
    if session.phase != Phase.Armed:
        return session
    return dataclasses.replace(session, phase=Phase.Delaying,
                               pending_delay_ms=draw_delay_ms(rng, min_ms, max_ms))


def start(session: Session, rng, min_ms: int = DELAY_MIN_MS, max_ms: int = DELAY_MAX_MS) -> Session:
    """Arm a fresh round from any phase and roll its delay."""
    return begin_delay(arm(session), rng, min_ms, max_ms)


def activate(session: Session, generation: int, now_ms: int, rng,
             alphabet: Sequence[str] = ALPHABET) -> Session:
    """Delay elapsed: show a target and start the clock."""
    if session.phase != Phase.Delaying or generation != session.generation:
        return session
    return dataclasses.replace(session, phase=Phase.Active,
                               target_symbol=rng.choice(alphabet),
                               start_instant_ms=now_ms)


def matches_target(session: Session, symbol: Optional[str]) -> bool:
    if session.phase != Phase.Active or not symbol:
        return False
    return symbol.upper() == session.target_symbol.upper()


def check_input(session: Session, symbol: Optional[str], now_ms: int) -> Session:
    if not matches_target(session, symbol):
        return session
    # clamp: a clock that steps backwards must not produce a negative time
    reaction = max(0, now_ms - session.start_instant_ms)
    return dataclasses.replace(session, phase=Phase.Finished, reaction_time_ms=reaction)


def elapsed_ms(session: Session, now_ms: int) -> int:
    """Read-only sample for the live display."""
    if session.phase == Phase.Active:
        return max(0, now_ms - session.start_instant_ms)
    if session.phase == Phase.Finished:
        return session.reaction_time_ms
    return 0


def format_elapsed(ms: int) -> str:
    ms = max(0, int(ms))
    return f"{ms // 1000:02d}:{ms % 1000:03d}"
