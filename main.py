#!/usr/bin/env python3
import sys
from PyQt5.QtWidgets import QApplication, QSplashScreen
from PyQt5.QtGui import QPixmap, QPainter, QColor, QFont
from PyQt5.QtCore import Qt, QSettings
from orbrya.__main__ import MainWindow
from orbrya.bug_report import install_excepthook
from orbrya.logger import setup_logging


def main():
    install_excepthook()
    setup_logging()
    app = QApplication(sys.argv)
    settings = QSettings("orbrya", "orbrya")
    show_splash = settings.value("show_splash", True, type=bool)
    splash = None
    if show_splash:
        pix = QPixmap(400, 300)
        pix.fill(QColor("#1e1e1e"))
        painter = QPainter(pix)
        painter.setPen(QColor("#0078d7"))
        f = QFont()
        f.setPointSize(32)
        painter.setFont(f)
        painter.drawText(pix.rect(), Qt.AlignCenter, "Orbrya")
        painter.end()
        splash = QSplashScreen(pix)
        splash.show()
        app.processEvents()

    window = MainWindow(settings)
    if splash:
        splash.finish(window)
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
