"""
Pomodoro-style focus timer and the coin/streak ledger it pays into.

The timer is a small state machine over three phases:

    focus -> break        (most cycles)
    focus -> long_break   (every ``cycles_for_long_break``-th cycle)
    break | long_break -> focus

It is driven by one tick() per second from whatever clock the host runs.
Finishing a focus phase awards coins, updates the daily streak, and logs
the session against the currently selected task.
"""

from __future__ import annotations

import datetime
import enum
import time
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Callable, Mapping

from sparkplug.tasks.model import new_task_id

COINS_PER_FOCUS = 10

SETTING_RANGES: dict[str, tuple[int, int]] = {
    "focus_len": (15, 60),
    "break_len": (3, 15),
    "long_break_len": (10, 30),
    "cycles_for_long_break": (3, 6),
}


class Phase(str, enum.Enum):
    FOCUS = "focus"
    BREAK = "break"
    LONG_BREAK = "long_break"


@dataclass(frozen=True)
class TimerSettings:
    """Phase lengths in minutes plus the long-break interval in cycles."""

    focus_len: int = 25
    break_len: int = 5
    long_break_len: int = 15
    cycles_for_long_break: int = 4

    def __post_init__(self) -> None:
        for name, (lo, hi) in SETTING_RANGES.items():
            object.__setattr__(self, name, int(max(lo, min(hi, getattr(self, name)))))

    def minutes(self, phase: Phase) -> int:
        if phase is Phase.FOCUS:
            return self.focus_len
        if phase is Phase.BREAK:
            return self.break_len
        return self.long_break_len

    def to_dict(self) -> dict[str, int]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> TimerSettings:
        known = {f.name for f in fields(cls)}
        return cls(**{k: int(v) for k, v in (data or {}).items() if k in known})


@dataclass(frozen=True)
class Rewards:
    coins: int = 0
    streak: int = 0
    last_day: str = ""

    def award_focus(self, today: str) -> Rewards:
        """Pay out a completed focus phase on ISO date ``today``.

        The streak is unchanged for another session on the same day, grows
        when the previous session was on an earlier day, and restarts at 1
        otherwise.
        """
        if self.last_day == today:
            streak = self.streak
        elif self.last_day and self.last_day < today:
            streak = self.streak + 1
        else:
            streak = 1
        return Rewards(coins=self.coins + COINS_PER_FOCUS, streak=streak, last_day=today)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Rewards:
        data = dict(data or {})
        return cls(
            coins=int(data.get("coins", 0)),
            streak=int(data.get("streak", 0)),
            last_day=str(data.get("last_day", data.get("lastDay", "")) or ""),
        )


@dataclass(frozen=True)
class SessionLog:
    """One finished focus phase. Times are epoch milliseconds."""

    id: str
    start: int
    end: int | None = None
    task_id: str | None = None
    cycles: int = 1

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SessionLog:
        return cls(
            id=str(data["id"]),
            start=int(data["start"]),
            end=None if data.get("end") is None else int(data["end"]),
            task_id=data.get("task_id", data.get("taskId")),
            cycles=int(data.get("cycles", 1)),
        )


def _today() -> str:
    return datetime.date.today().isoformat()


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class FocusTimer:
    """Focus/break countdown.

    Attributes:
        settings: Phase lengths.
        rewards: Coin and streak ledger, replaced on every payout.
        logs: Finished focus sessions, oldest first.
        phase: Current phase.
        seconds_left: Remaining seconds in the current phase.
        cycles: Focus phases completed since the last reset.
        running: Whether ticks currently count down.
        current_task_id: Task the focus time is logged against.
    """

    settings: TimerSettings = field(default_factory=TimerSettings)
    rewards: Rewards = field(default_factory=Rewards)
    logs: list[SessionLog] = field(default_factory=list)
    today: Callable[[], str] = _today
    now_ms: Callable[[], int] = _now_ms
    phase: Phase = Phase.FOCUS
    seconds_left: int = 0
    cycles: int = 0
    running: bool = False
    current_task_id: str | None = None

    def __post_init__(self) -> None:
        if self.seconds_left == 0:
            self.seconds_left = self.phase_length()

    def phase_length(self, phase: Phase | None = None) -> int:
        """Length of ``phase`` (default: the current phase) in seconds."""
        return self.settings.minutes(phase or self.phase) * 60

    def start(self) -> None:
        self.running = True

    def pause(self) -> None:
        self.running = False

    def reset(self) -> None:
        """Stop and go back to a full focus phase with zero cycles."""
        self.running = False
        self.phase = Phase.FOCUS
        self.seconds_left = self.phase_length()
        self.cycles = 0

    def tick(self) -> bool:
        """Count down one second.

        Returns:
            True if this tick ended a phase.
        """
        if not self.running:
            return False
        if self.seconds_left <= 1:
            self.seconds_left = 0
            self._end_phase()
            return True
        self.seconds_left -= 1
        return False

    def progress(self) -> float:
        """Fraction of the current phase still remaining, in [0, 1]."""
        return self.seconds_left / self.phase_length()

    def _end_phase(self) -> None:
        if self.phase is Phase.FOCUS:
            self._award_focus()
            self.cycles += 1
            if self.cycles % self.settings.cycles_for_long_break == 0:
                self.phase = Phase.LONG_BREAK
            else:
                self.phase = Phase.BREAK
        else:
            self.phase = Phase.FOCUS
        self.seconds_left = self.phase_length()

    def _award_focus(self) -> None:
        self.rewards = self.rewards.award_focus(self.today())
        end = self.now_ms()
        self.logs.append(SessionLog(
            id=new_task_id(),
            start=end - self.settings.focus_len * 60 * 1000,
            end=end,
            task_id=self.current_task_id,
        ))


def format_clock(seconds: int) -> str:
    """Format a second count as MM:SS."""
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"
