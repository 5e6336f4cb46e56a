# ui/lesson_selector.py
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QListWidget, QListWidgetItem,
)
from PySide6.QtCore import Qt, Signal

from typemaster.app.models import Difficulty
from typemaster.services.lessons import ALL, LessonCatalog

_FILTERS = [("All Levels", ALL)] + [(d.label, d) for d in Difficulty]


class LessonSelector(QWidget):
    lessonSelected = Signal(object)

    def __init__(self, catalog: LessonCatalog, parent=None):
        super().__init__(parent)
        self.catalog = catalog
        self.selected_difficulty = ALL

        root = QVBoxLayout(self)
        title = QLabel("Choose Your Lesson", self)
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet("font-size: 28px; font-weight: bold;")
        root.addWidget(title)
        sub = QLabel("Select a lesson to start improving your typing skills", self)
        sub.setAlignment(Qt.AlignCenter)
        root.addWidget(sub)

        bar = QHBoxLayout()
        bar.addStretch(1)
        self._filter_buttons = {}
        for label, value in _FILTERS:
            btn = QPushButton(label, self)
            btn.setCheckable(True)
            btn.setFocusPolicy(Qt.NoFocus)
            btn.clicked.connect(lambda _, v=value: self.set_filter(v))
            bar.addWidget(btn)
            self._filter_buttons[value] = btn
        bar.addStretch(1)
        root.addLayout(bar)

        self.list = QListWidget(self)
        self.list.itemClicked.connect(self._on_activated)
        root.addWidget(self.list, stretch=1)

        self.lblEmpty = QLabel("No lessons found for this difficulty level", self)
        self.lblEmpty.setAlignment(Qt.AlignCenter)
        root.addWidget(self.lblEmpty)

        self.set_filter(ALL)

    def set_filter(self, difficulty):
        self.selected_difficulty = difficulty
        for value, btn in self._filter_buttons.items():
            btn.setChecked(value == difficulty)
        self.refresh()

    def refresh(self):
        lessons = self.catalog.lessons(self.selected_difficulty)
        self.list.clear()
        for lesson in lessons:
            text = (
                f"{lesson.title}  [{lesson.difficulty.label} · {lesson.category}]\n"
                f"{lesson.preview()}\n"
                f"{lesson.length} chars"
            )
            item = QListWidgetItem(text)
            item.setData(Qt.UserRole, lesson)
            self.list.addItem(item)
        self.lblEmpty.setVisible(not lessons)

    def _on_activated(self, item: QListWidgetItem):
        self.lessonSelected.emit(item.data(Qt.UserRole))
