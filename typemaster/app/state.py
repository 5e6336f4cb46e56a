from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional
import time

from typemaster.app.calculation import SessionMetrics, calculate


def wall_clock_ms() -> float:
    return time.time() * 1000.0


class Status(Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETE = "complete"


@dataclass
class TypingAttempt:
    target_text: str
    clock: Callable[[], float] = wall_clock_ms
    user_input: str = ""
    started_at: Optional[float] = None
    ended_at: Optional[float] = None
    status: Status = Status.IDLE
    result: Optional[SessionMetrics] = None

    def reset(self):
        self.user_input = ""
        self.started_at = None
        self.ended_at = None
        self.status = Status.IDLE
        self.result = None

    @property
    def is_running(self) -> bool:
        return self.status is Status.RUNNING

    @property
    def is_complete(self) -> bool:
        return self.status is Status.COMPLETE

    def accept(self, value: str) -> bool:
        """
        Store `value` as the current input. Over-length input is rejected
        outright and input after completion is ignored.
        """
        if self.status is Status.COMPLETE:
            return False
        if len(value) > len(self.target_text):
            return False
        if self.status is Status.IDLE and value:
            self.started_at = self.clock()
            self.status = Status.RUNNING
        self.user_input = value
        return True

    @property
    def reached_end(self) -> bool:
        return self.status is Status.RUNNING and len(self.user_input) == len(self.target_text)

    def complete(self) -> SessionMetrics:
        if self.status is Status.RUNNING:
            self.ended_at = self.clock()
            self.status = Status.COMPLETE
            self.result = self.metrics()
        return self.result

    def elapsed_ms(self) -> float:
        if self.started_at is None:
            return 0.0
        end = self.ended_at if self.ended_at is not None else self.clock()
        return max(0.0, end - self.started_at)

    def metrics(self) -> SessionMetrics:
        return calculate(self.target_text, self.user_input, self.elapsed_ms())
