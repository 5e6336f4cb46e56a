# services/typing_engine.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal, Slot

from typemaster.app.calculation import SessionMetrics
from typemaster.app.classification import CharFeedback
from typemaster.app.models import Identity, Lesson, SessionPayload
from typemaster.app.state import Status, TypingAttempt, wall_clock_ms
from typemaster.core.chrono import SessionClock
from typemaster.core.threads import SaveSessionWorker, Workers
from typemaster.utils.db_helper import insert_session

logger = logging.getLogger(__name__)


class PersistStatus(Enum):
    SKIPPED = "skipped"
    PENDING = "pending"
    SAVED = "saved"
    FAILED = "failed"


@dataclass
class CompletionResult:
    """Outcome of one completed attempt. `persistence` moves on as the write finishes."""
    lesson_id: str
    metrics: SessionMetrics
    payload: Optional[SessionPayload] = None
    persistence: PersistStatus = PersistStatus.SKIPPED
    record_id: Optional[int] = None
    error: str = ""
    _listeners: list = field(default_factory=list, repr=False, compare=False)

    def on_persisted(self, callback: Callable[["CompletionResult"], None]):
        if self.persistence is PersistStatus.PENDING:
            self._listeners.append(callback)
        else:
            callback(self)

    def _settle(self, status: PersistStatus, record_id=None, error=""):
        self.persistence = status
        self.record_id = record_id
        self.error = error
        listeners, self._listeners = self._listeners, []
        for cb in listeners:
            cb(self)


class TypingEngine(QObject):
    """
    Drives one attempt at one lesson: input acceptance, the live tick,
    completion and the hand-off of the finished session to storage.
    """

    started = Signal()
    elapsedChanged = Signal(float)
    inputChanged = Signal(str)
    completed = Signal(object)
    persisted = Signal(object)
    restarted = Signal()

    def __init__(
        self,
        lesson: Lesson,
        identity: Optional[Identity] = None,
        save=insert_session,
        dispatch: Optional[Callable] = None,
        clock: Callable[[], float] = wall_clock_ms,
        tick_ms: int = 100,
        parent=None,
    ):
        super().__init__(parent)
        self.lesson = lesson
        self.identity = identity
        self._save = save
        self._dispatch = dispatch or Workers.start
        self._in_flight = {}
        self.result: Optional[CompletionResult] = None

        self.attempt = TypingAttempt(lesson.content, clock=clock)
        self.ticker = SessionClock(tick_ms=tick_ms, parent=self)
        self.ticker.ticked.connect(self.tick)

    # ---------------- State ----------------
    @property
    def status(self) -> Status:
        return self.attempt.status

    @property
    def user_input(self) -> str:
        return self.attempt.user_input

    @property
    def target_text(self) -> str:
        return self.attempt.target_text

    def elapsed_ms(self) -> float:
        return self.attempt.elapsed_ms()

    def metrics(self) -> SessionMetrics:
        if self.attempt.result is not None:
            return self.attempt.result
        return self.attempt.metrics()

    def feedback(self) -> CharFeedback:
        return CharFeedback(self.attempt.target_text, self.attempt.user_input)

    # ---------------- Events ----------------
    def handle_input(self, value: str) -> bool:
        was_idle = self.attempt.status is Status.IDLE
        if not self.attempt.accept(value):
            return False

        if was_idle and self.attempt.is_running:
            logger.info("Attempt at lesson %s started", self.lesson.id)
            self.ticker.start()
            self.started.emit()

        self.inputChanged.emit(self.attempt.user_input)
        if self.attempt.reached_end:
            self._complete()
        return True

    def type_char(self, ch: str) -> bool:
        return self.handle_input(self.attempt.user_input + ch)

    def backspace(self) -> bool:
        if not self.attempt.user_input:
            return False
        return self.handle_input(self.attempt.user_input[:-1])

    def tick(self):
        if not self.attempt.is_running:
            self.ticker.stop()
            return
        self.elapsedChanged.emit(self.attempt.elapsed_ms())

    def restart(self):
        self.ticker.stop()
        self.attempt.reset()
        self.result = None
        self.restarted.emit()

    def shutdown(self):
        """Stop ticking when the view showing this attempt goes away."""
        self.ticker.stop()

    # ---------------- Completion ----------------
    def _complete(self):
        metrics = self.attempt.complete()
        self.ticker.stop()
        result = CompletionResult(lesson_id=self.lesson.id, metrics=metrics)
        self.result = result
        logger.info(
            "Lesson %s complete: %d wpm, %d%% accuracy, %ds",
            self.lesson.id, metrics.wpm, metrics.accuracy, metrics.elapsed_seconds,
        )

        if self.identity is not None:
            result.payload = SessionPayload(
                user_id=self.identity.id,
                lesson_id=self.lesson.id,
                wpm=metrics.wpm,
                accuracy=metrics.accuracy,
                time_taken=metrics.elapsed_seconds,
                completed=True,
            )
            result.persistence = PersistStatus.PENDING

        self.completed.emit(result)
        if result.payload is not None:
            self._submit(result)

    def _submit(self, result: CompletionResult):
        worker = SaveSessionWorker(result.payload, save=self._save)
        self._in_flight[id(result.payload)] = (worker, result)
        worker.signals.saved.connect(self._on_saved)
        worker.signals.failed.connect(self._on_failed)
        self._dispatch(worker)

    @Slot(object, int)
    def _on_saved(self, payload, row_id: int):
        _, result = self._in_flight.pop(id(payload))
        result._settle(PersistStatus.SAVED, record_id=row_id)
        logger.info("Saved session %d for lesson %s", row_id, result.lesson_id)
        self.persisted.emit(result)

    @Slot(object, str)
    def _on_failed(self, payload, msg: str):
        _, result = self._in_flight.pop(id(payload))
        result._settle(PersistStatus.FAILED, error=msg)
        self.persisted.emit(result)
