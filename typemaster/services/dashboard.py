# services/dashboard.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from typemaster.app.calculation import round_half_up
from typemaster.app.models import SessionRecord


@dataclass(frozen=True)
class DashboardStats:
    avg_wpm: int = 0
    avg_accuracy: int = 0
    total_time: int = 0
    total_sessions: int = 0

    @property
    def minutes_practiced(self) -> int:
        return round_half_up(self.total_time / 60)


def summarize(records: Sequence[SessionRecord]) -> DashboardStats:
    if not records:
        return DashboardStats()
    n = len(records)
    return DashboardStats(
        avg_wpm=round_half_up(sum(r.wpm for r in records) / n),
        avg_accuracy=round_half_up(sum(r.accuracy for r in records) / n),
        total_time=sum(r.time_taken for r in records),
        total_sessions=n,
    )


def format_session_date(created_at: str) -> str:
    """'2026-10-18 14:05:09' -> 'Oct 18, 02:05 PM'; unparseable input is returned as-is."""
    try:
        dt = datetime.fromisoformat(created_at)
    except ValueError:
        return created_at
    return f"{dt:%b} {dt.day}, {dt:%I:%M %p}"


def wpm_trend(records: Sequence[SessionRecord]) -> list[int]:
    """Oldest to newest, for plotting."""
    return [r.wpm for r in reversed(records)]
