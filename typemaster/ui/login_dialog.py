from PySide6.QtWidgets import QDialog, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit, QPushButton, QMessageBox

from typemaster.app.errors import DatabaseError
from typemaster.app.models import Identity
from typemaster.app.validation import MAX_USERNAME_LEN, sanitize_username
from typemaster.utils.db_helper import upsert_user


class LoginDialog(QDialog):
    """
    Sets .identity after accept(): an Identity, or None when the user
    continues as a guest (results are then not saved).
    """
    def __init__(self, db_path: str, parent=None):
        super().__init__(parent)
        self.setWindowTitle("TypeMaster - Sign in")
        self.resize(420, 180)
        self.db_path = db_path
        self.identity = None

        root = QVBoxLayout(self)
        root.addWidget(QLabel("Master the art of typing"))

        row = QHBoxLayout()
        row.addWidget(QLabel("Username:"))
        self.username = QLineEdit()
        self.username.setMaxLength(MAX_USERNAME_LEN)
        self.username.returnPressed.connect(self._sign_in)
        row.addWidget(self.username, stretch=1)
        root.addLayout(row)

        btns = QHBoxLayout()
        btns.addStretch(1)
        ok = QPushButton("Sign in"); ok.clicked.connect(self._sign_in)
        guest = QPushButton("Continue as guest"); guest.clicked.connect(self._guest)
        btns.addWidget(ok); btns.addWidget(guest)
        root.addLayout(btns)

    def _sign_in(self):
        name = sanitize_username(self.username.text())
        if not name:
            QMessageBox.warning(self, "Sign in", "Use letters, digits, '_' or '-'.")
            return
        try:
            user_id = upsert_user(name, db_path=self.db_path)
        except DatabaseError as e:
            QMessageBox.critical(self, "Sign in", f"Could not open profile: {e}")
            return
        self.identity = Identity(id=user_id, username=name)
        self.accept()

    def _guest(self):
        self.identity = None
        self.accept()
