from PyQt5.QtWidgets import QFrame, QWidget, QLabel, QToolButton, QHBoxLayout, QVBoxLayout
from PyQt5.QtCore import Qt

from .corner_handle import CornerHandle


class PanelHeader(QWidget):
    """Title bar of a panel: icon, title and the window buttons."""

    def __init__(self, panel, height, parent=None):
        super().__init__(parent)
        self.setObjectName("panel_header")
        self.setFixedHeight(int(height))
        layout = QHBoxLayout(self)
        layout.setContentsMargins(8, 2, 4, 2)
        layout.setSpacing(4)

        self.icon_label = QLabel(panel.icon, self)
        self.icon_label.setObjectName("panel_icon")
        layout.addWidget(self.icon_label)

        self.title_label = QLabel(panel.title or panel.id, self)
        self.title_label.setObjectName("panel_title")
        layout.addWidget(self.title_label, 1)

        self.min_btn = QToolButton(self)
        self.min_btn.setObjectName("panel_min")
        self.min_btn.setText("−")
        self.min_btn.setToolTip("Minimize")
        layout.addWidget(self.min_btn)

        self.max_btn = QToolButton(self)
        self.max_btn.setObjectName("panel_max")
        self.max_btn.setText("□")
        self.max_btn.setToolTip("Maximize")
        layout.addWidget(self.max_btn)

        self.close_btn = None
        if panel.closable:
            self.close_btn = QToolButton(self)
            self.close_btn.setObjectName("panel_close")
            self.close_btn.setText("×")
            self.close_btn.setToolTip("Close")
            layout.addWidget(self.close_btn)

    def set_maximized(self, maximized: bool):
        self.max_btn.setText("❐" if maximized else "□")
        self.max_btn.setToolTip("Restore" if maximized else "Maximize")


class PanelFrame(QFrame):
    """Widget drawn for one engine panel.

    Pointer presses, moves and releases are handed to the workspace in its
    own coordinates; the engine decides whether they drag, resize or focus.
    """

    def __init__(self, workspace, panel):
        super().__init__(workspace)
        self.workspace = workspace
        self.panel_id = panel.id
        self.setObjectName("panel")
        self.setFrameShape(QFrame.StyledPanel)
        self.setMouseTracking(True)

        config = workspace.manager.config
        self.header = PanelHeader(panel, config.header_height, self)
        self.header.setMouseTracking(True)
        self.header.min_btn.clicked.connect(
            lambda: workspace.manager.minimize_panel(self.panel_id)
        )
        self.header.max_btn.clicked.connect(
            lambda: workspace.manager.toggle_maximize(self.panel_id)
        )
        if self.header.close_btn is not None:
            self.header.close_btn.clicked.connect(
                lambda: workspace.manager.close_panel(self.panel_id)
            )

        self.content = QWidget(self)
        self.content.setObjectName("panel_content")
        content_layout = QVBoxLayout(self.content)
        content_layout.setContentsMargins(0, 0, 0, 0)
        if isinstance(panel.content, QWidget):
            content_layout.addWidget(panel.content)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(1, 1, 1, 1)
        layout.setSpacing(0)
        layout.addWidget(self.header)
        layout.addWidget(self.content, 1)

        self.handle = None
        if panel.resizable:
            self.handle = CornerHandle(self, int(config.corner_region))
            self.handle.raise_()

    def sync_state(self, panel):
        self.setVisible(not panel.state.minimized)
        self.setProperty("focused", panel.state.focused)
        self.header.set_maximized(panel.state.maximized)
        if self.handle is not None:
            self.handle.setVisible(not panel.state.maximized)
        # re-polish so the "focused" property selector applies
        self.style().unpolish(self)
        self.style().polish(self)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        if self.handle is not None:
            self.handle.move(self.width() - self.handle.width(), self.height() - self.handle.height())
            self.handle.raise_()

    def _workspace_pos(self, event):
        return self.workspace.mapFromGlobal(event.globalPos())

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.workspace.pointer_press(self._workspace_pos(event))
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        pos = self._workspace_pos(event)
        if event.buttons() & Qt.LeftButton:
            self.workspace.pointer_move(pos)
        else:
            self.setCursor(self.workspace.cursor_at(pos))
        event.accept()

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.workspace.pointer_release(self._workspace_pos(event))
            event.accept()
            return
        super().mouseReleaseEvent(event)
