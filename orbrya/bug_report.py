import sys
import os
import logging
import traceback
from datetime import datetime
from PyQt5.QtWidgets import QApplication, QMessageBox

LOG_DIR = os.path.join(os.path.expanduser("~"), "orbrya_logs")
LOG_FILE = os.path.join(LOG_DIR, "orbrya.log")

logger = logging.getLogger(__name__)


def write_report(exc_type, exc_value, exc_tb, path=LOG_FILE):
    """Append a timestamped traceback to ``path`` and return the path."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write(f"\n=== {datetime.now().isoformat()} ===\n")
        traceback.print_exception(exc_type, exc_value, exc_tb, file=f)
    return path


def _excepthook(exc_type, exc_value, exc_tb):
    """Write the traceback to the crash log and tell the user where it is."""
    try:
        path = write_report(exc_type, exc_value, exc_tb)
    except OSError:
        logger.exception("Could not write crash report")
        path = None
    logger.critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_tb))

    app = QApplication.instance()
    if app is not None and path is not None:
        try:
            msg = QMessageBox()
            msg.setIcon(QMessageBox.Critical)
            msg.setWindowTitle("Orbrya - Error")
            msg.setText(
                "An unexpected error occurred. "
                f"A report was written to:\n{path}"
            )
            details = "".join(
                traceback.format_exception(exc_type, exc_value, exc_tb)
            )
            msg.setDetailedText(details)
            msg.exec_()
        except Exception:
            logger.exception("Could not show the error dialog")

    sys.__excepthook__(exc_type, exc_value, exc_tb)


def install_excepthook():
    """Install global exception handler that logs uncaught exceptions."""
    sys.excepthook = _excepthook
