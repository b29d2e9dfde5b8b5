from PyQt5.QtWidgets import QWidget
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QPainter, QPen


class CornerHandle(QWidget):
    """Grip painted in the bottom right corner of resizable panels.

    The grip is decoration only: presses fall through to the panel frame,
    whose hit test turns them into a south-east resize.
    """

    def __init__(self, parent=None, size=12):
        super().__init__(parent)
        self.setObjectName("corner_handle")
        self.setFixedSize(size, size)
        self.setAttribute(Qt.WA_TransparentForMouseEvents)
        self.setCursor(Qt.SizeFDiagCursor)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        pen = QPen(self.palette().color(self.foregroundRole()), 1)
        painter.setPen(pen)
        for i in range(3):
            offset = 3 + i * 3
            painter.drawLine(self.width() - offset, self.height(), self.width(), self.height() - offset)
        painter.end()
