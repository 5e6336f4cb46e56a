from typemaster.app.errors import DatabaseError
from typemaster.app.models import SessionPayload
from typemaster.core.threads import SaveSessionWorker
from typemaster.utils import db_helper

PAYLOAD = SessionPayload(user_id=1, lesson_id="cat", wpm=10, accuracy=100, time_taken=6)


def test_worker_reports_saved_row(db_path) -> None:
    worker = SaveSessionWorker(PAYLOAD, save=lambda p: db_helper.insert_session(p, db_path=db_path))
    saved, failed = [], []
    worker.signals.saved.connect(lambda payload, row_id: saved.append((payload, row_id)))
    worker.signals.failed.connect(lambda payload, msg: failed.append(msg))
    worker.run()

    assert failed == []
    assert saved[0][0] == PAYLOAD
    assert db_helper.recent_sessions(1, db_path=db_path)[0].id == saved[0][1]


def test_worker_reports_failure() -> None:
    def broken(_payload):
        raise DatabaseError("read-only database")

    worker = SaveSessionWorker(PAYLOAD, save=broken)
    failed = []
    worker.signals.failed.connect(lambda payload, msg: failed.append(msg))
    worker.run()
    assert failed == ["read-only database"]


def test_worker_reports_filesystem_failure(tmp_path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    worker = SaveSessionWorker(
        PAYLOAD, save=lambda p: db_helper.insert_session(p, db_path=str(blocker / "sub" / "t.db"))
    )
    saved, failed = [], []
    worker.signals.saved.connect(lambda payload, row_id: saved.append(row_id))
    worker.signals.failed.connect(lambda payload, msg: failed.append(payload))
    worker.run()
    assert saved == []
    assert failed == [PAYLOAD]
