# main.py
from __future__ import annotations
import sys
import logging

from PySide6.QtWidgets import QApplication, QMessageBox

from typemaster.app.config import Settings, load_settings
from typemaster.app.errors import ConfigError, TypemasterError
from typemaster.services.lessons import LessonCatalog
from typemaster.ui.login_dialog import LoginDialog
from typemaster.ui.main_window import MainWindow
from typemaster.utils.file_handler import ensure_app_files


def setup_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.log_file, encoding="utf-8"),
        ],
    )

    # Log any uncaught exceptions rather than silently dying
    def excepthook(exctype, value, tb):
        logging.exception("Unhandled exception", exc_info=(exctype, value, tb))
        if QApplication.instance() is not None:
            QMessageBox.critical(
                None, "Application Error", f"{exctype.__name__}: {value}"
            )
        sys.exit(1)

    sys.excepthook = excepthook


def main() -> int:
    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("TypeMaster")
    app.setOrganizationName("TypeMaster")

    try:
        settings = load_settings()
    except ConfigError as e:
        setup_logging(Settings.model_construct())
        logging.error("Could not load settings: %s", e)
        QMessageBox.critical(None, "TypeMaster", f"Could not load settings: {e}")
        return 1
    setup_logging(settings)
    ensure_app_files(settings.db_path)

    catalog = LessonCatalog(settings.db_path, seed_file=settings.lessons_file)
    try:
        catalog.load()
    except TypemasterError as e:
        logging.error("Could not load lessons: %s", e)
        QMessageBox.critical(None, "TypeMaster", f"Could not load lessons: {e}")
        return 1

    login = LoginDialog(settings.db_path)
    if not login.exec():
        return 0

    win = MainWindow(settings, catalog, identity=login.identity)
    win.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
