from __future__ import annotations
from collections import deque
import html

from PySide6.QtCore import Qt, QTimer, Slot, Signal
from PySide6.QtWidgets import QWidget, QLabel, QVBoxLayout, QHBoxLayout, QPushButton, QSizePolicy

from typemaster.app.calculation import format_clock
from typemaster.app.classification import CharState
from typemaster.services.typing_engine import TypingEngine, CompletionResult
from typemaster.ui.session_summary import SessionSummary


_COLORS = {
    CharState.CORRECT: "color:#16a34a; background:#f0fdf4",
    CharState.INCORRECT: "color:#dc2626; background:#fef2f2",
    CharState.CURRENT: "color:#1f2937; background:#dbeafe; border-bottom:2px solid #3b82f6",
    CharState.UNTYPED: "color:#9ca3af",
}


def render_feedback_html(pairs) -> str:
    """One styled span per target character."""
    parts: list[str] = []
    for ch, state in pairs:
        txt = "<br/>" if ch == "\n" else html.escape(ch).replace(" ", "&nbsp;")
        parts.append(f'<span style="{_COLORS[state]}">{txt}</span>')
    return "".join(parts)


class TypingView(QWidget):
    leaveRequested = Signal()

    def __init__(self, engine: TypingEngine, parent=None):
        super().__init__(parent)
        self.setFocusPolicy(Qt.StrongFocus)
        self.engine = engine
        lesson = engine.lesson

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 30, 0, 30)
        root.setSpacing(20)

        lblTitle = QLabel(lesson.title, self)
        lblTitle.setObjectName("lblTitle")
        lblTitle.setStyleSheet("font-size: 24px; font-weight: bold;")
        root.addWidget(lblTitle)

        stats = QHBoxLayout()
        stats.setSpacing(40)
        self.lblTimer = QLabel("Time: 0:00", self)
        self.lblDifficulty = QLabel(f"Difficulty: {lesson.difficulty.label}", self)
        self.lblWPM = QLabel("0 WPM", self)
        self.lblAcc = QLabel("0 %", self)
        for lab in (self.lblTimer, self.lblDifficulty, self.lblWPM, self.lblAcc):
            stats.addWidget(lab)
        stats.addStretch(1)
        root.addLayout(stats)

        self.lblLine = QLabel("", self)
        self.lblLine.setObjectName("lblLine")
        self.lblLine.setTextFormat(Qt.RichText)
        self.lblLine.setWordWrap(True)
        self.lblLine.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.lblLine.setMinimumHeight(140)
        self.lblLine.setStyleSheet("font-family: monospace; font-size: 22px; line-height: 1.4;")
        root.addWidget(self.lblLine, stretch=1)

        bottom = QHBoxLayout()
        self.lblProgress = QLabel("", self)
        bottom.addWidget(self.lblProgress)
        bottom.addStretch(1)
        btnRestart = QPushButton("Restart", self)
        btnRestart.setFocusPolicy(Qt.NoFocus)
        btnRestart.clicked.connect(self.restart)
        bottom.addWidget(btnRestart)
        root.addLayout(bottom)

        self._wpm_time = deque(maxlen=3600)
        self._wpm_vals = deque(maxlen=3600)

        engine.elapsedChanged.connect(self.on_elapsed_changed)
        engine.inputChanged.connect(self._on_input_changed)
        engine.completed.connect(self._on_completed)
        engine.restarted.connect(self._render)
        self._render()

    def restart(self):
        self.engine.restart()
        self._wpm_time.clear()
        self._wpm_vals.clear()
        self.setFocus()

    def closeEvent(self, ev):
        self.engine.shutdown()
        super().closeEvent(ev)

    @Slot(float)
    def on_elapsed_changed(self, ms: float):
        self.lblTimer.setText(f"Time: {format_clock(ms)}")
        self.refresh_metrics()
        self._wpm_time.append(ms / 1000.0)
        self._wpm_vals.append(float(self.engine.metrics().wpm))

    def refresh_metrics(self):
        m = self.engine.metrics()
        self.lblWPM.setText(f"{m.wpm} WPM")
        self.lblAcc.setText(f"{m.accuracy} %")

    @Slot(str)
    def _on_input_changed(self, _value: str):
        self._render()

    def _render(self):
        self.lblLine.setText(render_feedback_html(self.engine.feedback().pairs()))
        self.lblProgress.setText(
            f"Progress: {len(self.engine.user_input)} / {len(self.engine.target_text)} characters"
        )
        self.lblTimer.setText(f"Time: {format_clock(self.engine.elapsed_ms())}")
        self.refresh_metrics()

    @Slot(object)
    def _on_completed(self, result: CompletionResult):
        self._render()
        # modal, so open it after the save has been dispatched
        QTimer.singleShot(0, lambda: self._show_summary(result))

    def _show_summary(self, result: CompletionResult):
        dlg = SessionSummary(
            result.metrics,
            times=list(self._wpm_time),
            wpms=list(self._wpm_vals),
            parent=self,
        )
        dlg.exec()
        if dlg.choice == SessionSummary.TRY_AGAIN:
            self.restart()
        else:
            self.leaveRequested.emit()

    def keyPressEvent(self, ev):
        nk = self._normalize_key(ev)
        if nk is None:
            return super().keyPressEvent(ev)
        if nk == "<BACKSPACE>":
            self.engine.backspace()
        else:
            self.engine.type_char(nk)
        ev.accept()

    def _normalize_key(self, ev) -> str | None:
        if ev.modifiers() & (Qt.ControlModifier | Qt.AltModifier | Qt.MetaModifier):
            return None
        key = ev.key()
        t = ev.text()
        if key == Qt.Key_Backspace:
            return "<BACKSPACE>"
        if key in (Qt.Key_Return, Qt.Key_Enter):
            return "\n"
        if t and (t >= " " or t == "\t"):
            return t
        return None
