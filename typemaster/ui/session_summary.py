# ui/session_summary.py
from __future__ import annotations
from PySide6.QtWidgets import QDialog, QVBoxLayout, QHBoxLayout, QLabel, QPushButton
import pyqtgraph as pg

from typemaster.app.calculation import SessionMetrics, smooth
from typemaster.utils.graph_helper import setup_wpm_plot, update_curve
from typemaster.ui.widgets.stat_card import StatCard


class SessionSummary(QDialog):
    """
    Final stats of a completed attempt and the WPM-over-time graph sampled by
    the live ticks.
    """

    TRY_AGAIN = "try_again"
    CHOOSE_ANOTHER = "choose_another"

    def __init__(
        self,
        metrics: SessionMetrics,
        times: list[float],
        wpms: list[float],
        parent=None,
    ):
        super().__init__(parent)
        self.setWindowTitle("Great Job!")
        self.resize(720, 420)
        self.choice = self.CHOOSE_ANOTHER

        root = QVBoxLayout(self)
        cards = QHBoxLayout()
        cards.addWidget(StatCard(str(metrics.wpm), "WPM", "#2563eb", self))
        cards.addWidget(StatCard(f"{metrics.accuracy}%", "Accuracy", "#16a34a", self))
        cards.addWidget(StatCard(f"{metrics.elapsed_seconds}s", "Time", "#9333ea", self))
        root.addLayout(cards)

        if times and len(times) == len(wpms):
            plot = pg.PlotWidget()
            curve = setup_wpm_plot(plot, "#c8c8ff", bottom_label="Time (s)")
            update_curve(curve, smooth([float(v) for v in wpms]), x=[float(t) for t in times])
            root.addWidget(plot, stretch=1)

        btns = QHBoxLayout()
        btns.addStretch(1)
        retry = QPushButton("Try Again", self)
        retry.clicked.connect(self._try_again)
        other = QPushButton("Choose Another Lesson", self)
        other.clicked.connect(self.accept)
        btns.addWidget(retry)
        btns.addWidget(other)
        root.addLayout(btns)

    def _try_again(self):
        self.choice = self.TRY_AGAIN
        self.accept()
