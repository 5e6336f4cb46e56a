# ui/dashboard_view.py
import logging

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QTableWidget, QTableWidgetItem,
)
import pyqtgraph as pg

from typemaster.app.errors import DatabaseError
from typemaster.services.dashboard import format_session_date, summarize, wpm_trend
from typemaster.utils.db_helper import recent_sessions
from typemaster.utils.graph_helper import setup_wpm_plot, update_curve
from typemaster.ui.widgets.stat_card import StatCard

logger = logging.getLogger(__name__)


class DashboardView(QWidget):
    def __init__(self, db_path: str, limit: int = 10, parent=None):
        super().__init__(parent)
        self.db_path = db_path
        self.limit = limit
        self.identity = None

        root = QVBoxLayout(self)
        title = QLabel("Your Progress", self)
        title.setStyleSheet("font-size: 28px; font-weight: bold;")
        root.addWidget(title)

        cards = QHBoxLayout()
        self.cardWpm = StatCard("0", "Average WPM", "#3b82f6", self)
        self.cardAcc = StatCard("0%", "Average Accuracy", "#22c55e", self)
        self.cardTime = StatCard("0", "Minutes Practiced", "#f97316", self)
        self.cardCount = StatCard("0", "Total Sessions", "#ef4444", self)
        for c in (self.cardWpm, self.cardAcc, self.cardTime, self.cardCount):
            cards.addWidget(c)
        root.addLayout(cards)

        self.plot = pg.PlotWidget()
        self._curve = setup_wpm_plot(self.plot, "#3b82f6")
        root.addWidget(self.plot, stretch=1)

        root.addWidget(QLabel("Recent Sessions", self))
        self.table = QTableWidget(0, 6)
        self.table.setHorizontalHeaderLabels(["Lesson", "Difficulty", "WPM", "Accuracy", "Time", "Date"])
        self.table.horizontalHeader().setStretchLastSection(True)
        root.addWidget(self.table, stretch=1)

        self.lblEmpty = QLabel("No sessions yet. Start practicing to see your progress!", self)
        root.addWidget(self.lblEmpty)

    def set_identity(self, identity):
        self.identity = identity
        self.refresh()

    def refresh(self):
        records = []
        if self.identity is not None:
            try:
                records = recent_sessions(self.identity.id, self.limit, db_path=self.db_path)
            except DatabaseError as e:
                logger.warning("Could not load sessions: %s", e)
        stats = summarize(records)

        self.cardWpm.set_value(str(stats.avg_wpm))
        self.cardAcc.set_value(f"{stats.avg_accuracy}%")
        self.cardTime.set_value(str(stats.minutes_practiced))
        self.cardCount.set_value(str(stats.total_sessions))
        update_curve(self._curve, wpm_trend(records))

        self.table.setRowCount(len(records))
        for i, r in enumerate(records):
            difficulty = r.lesson_difficulty.label if r.lesson_difficulty else ""
            self.table.setItem(i, 0, QTableWidgetItem(r.lesson_title or r.lesson_id))
            self.table.setItem(i, 1, QTableWidgetItem(difficulty))
            self.table.setItem(i, 2, QTableWidgetItem(str(r.wpm)))
            self.table.setItem(i, 3, QTableWidgetItem(f"{r.accuracy}%"))
            self.table.setItem(i, 4, QTableWidgetItem(f"{r.time_taken}s"))
            self.table.setItem(i, 5, QTableWidgetItem(format_session_date(r.created_at)))
        self.lblEmpty.setVisible(not records)
