from __future__ import annotations

import time
from dataclasses import dataclass, field


def format_eta(seconds: float | None) -> str:
    if seconds is None:
        return "--:--"
    bounded = max(0, int(round(seconds)))
    hours, remainder = divmod(bounded, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


@dataclass
class BatchProgress:
    """Progress of one worker run, fed one resolved item at a time.

    The ETA assumes the remaining items take as long on average as the
    ones already resolved.
    """

    total: int
    stage: str
    started_at: float = field(default_factory=time.perf_counter)
    done: int = 0

    def advance(self, count: int = 1) -> None:
        self.done = min(self.total, self.done + count)

    @property
    def percent(self) -> float:
        if self.total <= 0:
            return 100.0
        return (self.done / self.total) * 100.0

    def eta_seconds(self, now: float | None = None) -> float | None:
        if self.done <= 0 or self.total <= 0:
            return None
        current = time.perf_counter() if now is None else now
        elapsed = max(0.0, current - self.started_at)
        return (elapsed / self.done) * (self.total - self.done)

    def status_line(self, now: float | None = None) -> str:
        return f"{self.stage} {self.done}/{self.total} ETA {format_eta(self.eta_seconds(now))}"
