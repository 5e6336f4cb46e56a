# core/threads.py
import logging

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal

from typemaster.utils.db_helper import insert_session

logger = logging.getLogger(__name__)


class SaveSessionWorkerSignals(QObject):
    saved = Signal(object, int)
    failed = Signal(object, str)


class SaveSessionWorker(QRunnable):
    """Writes one completed session off the UI thread."""

    def __init__(self, payload, save=insert_session):
        super().__init__()
        self.payload = payload
        self._save = save
        self.signals = SaveSessionWorkerSignals()

    def run(self):
        try:
            row_id = self._save(self.payload)
        except Exception as e:
            logger.warning("Saving session for lesson %s failed: %s", self.payload.lesson_id, e)
            self.signals.failed.emit(self.payload, str(e))
            return
        self.signals.saved.emit(self.payload, int(row_id))


class Workers:
    pool = QThreadPool.globalInstance()

    @classmethod
    def start(cls, worker: QRunnable):
        cls.pool.start(worker)
