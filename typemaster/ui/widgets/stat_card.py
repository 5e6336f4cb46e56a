# ui/widgets/stat_card.py
from PySide6.QtWidgets import QFrame, QLabel, QVBoxLayout
from PySide6.QtCore import Qt


class StatCard(QFrame):
    def __init__(self, value: str, caption: str, color: str = "#2563eb", parent=None):
        super().__init__(parent)
        self.setObjectName("StatCard")
        self.setStyleSheet(
            f"QFrame#StatCard {{ border-left: 4px solid {color}; border-radius: 10px; padding: 12px; }}"
        )
        v = QVBoxLayout(self)
        self.lblValue = QLabel(value, self)
        self.lblValue.setAlignment(Qt.AlignCenter)
        self.lblValue.setStyleSheet(f"font-size: 30px; font-weight: bold; color: {color};")
        lblCaption = QLabel(caption, self)
        lblCaption.setAlignment(Qt.AlignCenter)
        v.addWidget(self.lblValue)
        v.addWidget(lblCaption)

    def set_value(self, value: str):
        self.lblValue.setText(value)
