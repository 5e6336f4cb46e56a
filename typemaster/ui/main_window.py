# ui/main_window.py
from functools import partial

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QStackedWidget,
)
from PySide6.QtCore import Qt

from typemaster.app.config import Settings
from typemaster.services.lessons import LessonCatalog
from typemaster.services.typing_engine import TypingEngine
from typemaster.ui.dashboard_view import DashboardView
from typemaster.ui.lesson_selector import LessonSelector
from typemaster.ui.login_dialog import LoginDialog
from typemaster.ui.typing_view import TypingView
from typemaster.utils.db_helper import insert_session


class MainWindow(QMainWindow):
    def __init__(self, settings: Settings, catalog: LessonCatalog, identity=None):
        super().__init__()
        self.settings = settings
        self.catalog = catalog
        self.identity = identity
        self.setWindowTitle("TypeMaster")
        self.resize(1200, 720)

        root = QWidget(self)
        root_v = QVBoxLayout(root)
        root_v.setContentsMargins(16, 16, 16, 16)
        root_v.setSpacing(24)
        self._build_top_bar(root_v)

        self.stack = QStackedWidget(self)
        self.lessons = LessonSelector(catalog, self)
        self.lessons.lessonSelected.connect(self.open_lesson)
        self.dashboard = DashboardView(settings.db_path, settings.recent_sessions_limit, self)
        self.stack.addWidget(self.lessons)
        self.stack.addWidget(self.dashboard)
        self.typing = None
        root_v.addWidget(self.stack, 1)
        self.setCentralWidget(root)

        self._apply_identity()
        self.show_lessons()

    # ---------------- Top Bar ----------------
    def _build_top_bar(self, parent_layout):
        bar = QWidget(self)
        bar.setObjectName("TopBar")
        h = QHBoxLayout(bar)
        h.setContentsMargins(14, 12, 14, 12)
        h.setSpacing(10)

        brand = QLabel("TypeMaster", bar)
        brand.setStyleSheet("font-size: 20px; font-weight: bold;")
        h.addWidget(brand)
        h.addStretch(1)

        for text, handler in [("Lessons", self.show_lessons), ("Dashboard", self.show_dashboard)]:
            btn = QPushButton(text, bar)
            btn.clicked.connect(handler)
            btn.setObjectName("TopBtn")
            btn.setFocusPolicy(Qt.NoFocus)
            h.addWidget(btn)

        self.lblUser = QLabel("", bar)
        h.addWidget(self.lblUser)
        btn_out = QPushButton("Sign out", bar)
        btn_out.clicked.connect(self.sign_out)
        btn_out.setObjectName("TopBtn")
        btn_out.setFocusPolicy(Qt.NoFocus)
        h.addWidget(btn_out)

        parent_layout.addWidget(bar)

    # ---------------- Navigation ----------------
    def show_lessons(self):
        self._close_typing()
        self.stack.setCurrentWidget(self.lessons)

    def show_dashboard(self):
        self._close_typing()
        self.dashboard.refresh()
        self.stack.setCurrentWidget(self.dashboard)

    def open_lesson(self, lesson):
        self._close_typing()
        engine = TypingEngine(
            lesson,
            identity=self.identity,
            save=partial(insert_session, db_path=self.settings.db_path),
            tick_ms=self.settings.tick_ms,
        )
        engine.persisted.connect(self._on_persisted)
        self.typing = TypingView(engine, self)
        self.typing.leaveRequested.connect(self.show_lessons)
        self.stack.addWidget(self.typing)
        self.stack.setCurrentWidget(self.typing)
        self.typing.setFocus()

    def _close_typing(self):
        if self.typing is None:
            return
        self.typing.engine.shutdown()
        self.stack.removeWidget(self.typing)
        self.typing.deleteLater()
        self.typing = None

    def _on_persisted(self, result):
        if result.error:
            self.statusBar().showMessage(f"Result not saved: {result.error}", 5000)
        else:
            self.statusBar().showMessage("Result saved", 3000)

    # ---------------- Identity ----------------
    def _apply_identity(self):
        if self.identity is None:
            self.lblUser.setText("Guest (results are not saved)")
        else:
            self.lblUser.setText(self.identity.username)
        self.dashboard.set_identity(self.identity)

    def sign_out(self):
        self._close_typing()
        self.identity = None
        dlg = LoginDialog(self.settings.db_path, self)
        if not dlg.exec():
            self.close()
            return
        self.identity = dlg.identity
        self._apply_identity()
        self.show_lessons()
