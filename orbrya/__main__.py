# orbrya/__main__.py
import sys
import logging
from PyQt5.QtWidgets import QApplication, QMainWindow, QLabel, QShortcut
from PyQt5.QtGui import QKeySequence
from PyQt5.QtCore import Qt, QSettings

from orbrya.bug_report import install_excepthook
from orbrya.config import load_config
from orbrya.logger import setup_logging
from orbrya.persistence import QSettingsStorage
from orbrya.ui import LogsWidget, WorkspaceWidget

logger = logging.getLogger(__name__)

WINDOW_SIZE = (1280, 800)


def _placeholder(text):
    label = QLabel(text)
    label.setAlignment(Qt.AlignCenter)
    label.setStyleSheet("color: #9a9a9a")
    return label


class MainWindow(QMainWindow):
    """IDE window: one workspace holding the default panels."""

    def __init__(self, settings=None):
        super().__init__()
        self.setWindowTitle("Orbrya")
        self.resize(*WINDOW_SIZE)
        self.settings = settings or QSettings("orbrya", "orbrya")
        config = load_config(self.settings)
        self.workspace = WorkspaceWidget(
            storage=QSettingsStorage(self.settings, config.storage_key), config=config
        )
        self.setCentralWidget(self.workspace)
        self.workspace.resize(*WINDOW_SIZE)
        self.workspace.manager.set_workspace_bounds(*WINDOW_SIZE)
        self._create_panels()
        self._build_menu()

        self.viewport_shortcut = QShortcut(QKeySequence("F11"), self)
        self.viewport_shortcut.activated.connect(
            lambda: self.workspace.manager.toggle_maximize("viewport-panel")
        )

    def _default(self, panel_id, **defaults):
        """Saved geometry wins over the computed defaults."""
        saved = self.workspace.manager.get_saved_state(panel_id) or {}
        return {key: saved.get(key, value) for key, value in defaults.items()}

    def _create_panels(self):
        ws_w, ws_h = WINDOW_SIZE
        add = self.workspace.add_panel

        vw = min(800, ws_w * 0.5)
        vh = min(600, ws_h * 0.8)
        add(
            id="viewport-panel", title="Scene Viewport", icon="🎮",
            min_width=400, min_height=300, closable=False,
            content=_placeholder("3D viewport"),
            **self._default(
                "viewport-panel",
                x=(ws_w - vw) / 2 - 100, y=(ws_h - vh) / 2, width=vw, height=vh,
            ),
        )
        add(
            id="code-editor-panel", title="Code Editor", icon="📝",
            min_width=350, min_height=250,
            content=_placeholder("Code editor"),
            **self._default(
                "code-editor-panel", x=ws_w - 560, y=50, width=450, height=500,
            ),
        )
        add(
            id="profiler-panel", title="Performance", icon="📊",
            min_width=220, min_height=300,
            content=_placeholder("Profiler"),
            **self._default(
                "profiler-panel", x=ws_w - 280, y=50, width=260, height=480,
            ),
        )
        add(
            id="hierarchy-panel", title="Hierarchy", icon="🌲",
            min_width=200, min_height=200,
            content=_placeholder("Scene hierarchy"),
            **self._default(
                "hierarchy-panel", x=10, y=50, width=220, height=400,
            ),
        )
        add(
            id="logs-panel", title="Logs", icon="📜",
            min_width=300, min_height=120,
            content=LogsWidget(),
            **self._default(
                "logs-panel", x=10, y=ws_h - 220, width=600, height=180,
            ),
        )

    def _build_menu(self):
        menu = self.menuBar().addMenu("Window")
        manager = self.workspace.manager
        for panel in list(manager.panels()):
            act = menu.addAction(panel.title)
            act.triggered.connect(lambda _=False, pid=panel.id: manager.show_panel(pid))

    def closeEvent(self, event):
        self.workspace.manager.save_layout()
        super().closeEvent(event)


def main():
    # Ensure uncaught exceptions are logged and reported
    install_excepthook()
    setup_logging()
    app = QApplication(sys.argv)
    win = MainWindow()
    win.show()
    logger.info("Orbrya started")
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
