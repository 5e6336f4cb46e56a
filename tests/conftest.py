from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import QCoreApplication  # noqa: E402

from typemaster.app.models import Difficulty, Identity, Lesson  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def qt_app() -> Iterator[QCoreApplication]:
    """QObjects with timers need an application instance; no display is required."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def lesson() -> Lesson:
    return Lesson(id="cat", title="Cat", content="cat", difficulty=Difficulty.BEGINNER)


@pytest.fixture
def identity() -> Identity:
    return Identity(id=7, username="alice")


@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / "data" / "test.db")
