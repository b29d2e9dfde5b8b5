import logging
from PyQt5.QtWidgets import QWidget, QFrame
from PyQt5.QtCore import Qt, QRect, pyqtSignal

from ..interaction import InteractionState, Region, ResizeHandle
from ..manager import PanelManager
from ..panels import Size
from .panel_frame import PanelFrame

logger = logging.getLogger(__name__)

_HANDLE_CURSORS = {
    ResizeHandle.N: Qt.SizeVerCursor,
    ResizeHandle.S: Qt.SizeVerCursor,
    ResizeHandle.E: Qt.SizeHorCursor,
    ResizeHandle.W: Qt.SizeHorCursor,
    ResizeHandle.NW: Qt.SizeFDiagCursor,
    ResizeHandle.SE: Qt.SizeFDiagCursor,
    ResizeHandle.NE: Qt.SizeBDiagCursor,
    ResizeHandle.SW: Qt.SizeBDiagCursor,
}

STYLE = (
    "#workspace { background: #1e1e1e; }"
    "#panel { background: #252526; border: 1px solid #3c3c3c; }"
    "#panel[focused=\"true\"] { border: 1px solid #0078d7; }"
    "#panel_header { background: #2d2d30; color: white; }"
    "#snap_guide { background: #0078d7; }"
)


def _rect(rect):
    return QRect(round(rect.x), round(rect.y), round(rect.width), round(rect.height))


class WorkspaceWidget(QWidget):
    """Container hosting engine panels as child frames.

    Relays the engine's resize notification as ``panelResized(id, w, h)`` so
    content widgets can re-fit their own drawing surfaces.
    """

    panelResized = pyqtSignal(str, float, float)

    def __init__(self, storage=None, config=None, parent=None):
        super().__init__(parent)
        self.setObjectName("workspace")
        self.setAttribute(Qt.WA_StyledBackground)
        self.setStyleSheet(STYLE)
        self.manager = PanelManager(
            Size(max(self.width(), 0), max(self.height(), 0)), storage=storage, config=config
        )
        self.frames = {}

        self.v_guide = QFrame(self)
        self.v_guide.setObjectName("snap_guide")
        self.v_guide.hide()
        self.h_guide = QFrame(self)
        self.h_guide.setObjectName("snap_guide")
        self.h_guide.hide()

        m = self.manager
        m.panel_created.connect(self._on_panel_created)
        m.panel_closed.connect(self._on_panel_closed)
        m.panel_state_changed.connect(self._on_state_changed)
        m.geometry_changed.connect(self._on_geometry_changed)
        m.guides_changed.connect(self._on_guides_changed)
        m.panel_resized.connect(
            lambda evt: self.panelResized.emit(evt.panel_id, evt.width, evt.height)
        )

    # ------------------------------------------------------------------
    def add_panel(self, config=None, **options):
        return self.manager.create_panel(config, **options)

    def frame(self, panel_id):
        return self.frames.get(panel_id)

    # --- pointer input, workspace coordinates ---------------------------
    def pointer_press(self, pos):
        self.manager.pointer_down(pos.x(), pos.y())
        if self.manager.interaction_state is InteractionState.DRAGGING:
            self.setCursor(Qt.SizeAllCursor)

    def pointer_move(self, pos):
        self.manager.pointer_move(pos.x(), pos.y())

    def pointer_release(self, pos):
        self.manager.pointer_up(pos.x(), pos.y())
        self.unsetCursor()

    def cursor_at(self, pos):
        target = self.manager.hit_test(pos.x(), pos.y())
        if target is None:
            return Qt.ArrowCursor
        if target.region is Region.RESIZE:
            return _HANDLE_CURSORS[target.handle]
        if target.region is Region.HEADER:
            return Qt.OpenHandCursor
        return Qt.ArrowCursor

    # --- engine signals ---------------------------------------------------
    def _on_panel_created(self, panel_id):
        panel = self.manager.get_panel(panel_id)
        frame = PanelFrame(self, panel)
        self.frames[panel_id] = frame
        frame.setGeometry(_rect(self.manager.display_rect(panel_id)))
        frame.sync_state(panel)
        self._restack()
        logger.debug("Mounted frame for panel %s", panel_id)

    def _on_panel_closed(self, panel_id):
        frame = self.frames.pop(panel_id, None)
        if frame is not None:
            frame.hide()
            frame.deleteLater()

    def _on_state_changed(self, panel_id):
        panel = self.manager.get_panel(panel_id)
        frame = self.frames.get(panel_id)
        if panel is None or frame is None:
            return
        frame.sync_state(panel)
        frame.setGeometry(_rect(self.manager.display_rect(panel_id)))
        self._restack()

    def _on_geometry_changed(self, panel_id, rect):
        frame = self.frames.get(panel_id)
        if frame is not None:
            frame.setGeometry(_rect(self.manager.display_rect(panel_id)))

    def _on_guides_changed(self, guides):
        if guides.vertical is None:
            self.v_guide.hide()
        else:
            self.v_guide.setGeometry(round(guides.vertical), 0, 1, self.height())
            self.v_guide.show()
            self.v_guide.raise_()
        if guides.horizontal is None:
            self.h_guide.hide()
        else:
            self.h_guide.setGeometry(0, round(guides.horizontal), self.width(), 1)
            self.h_guide.show()
            self.h_guide.raise_()

    def _restack(self):
        for panel_id in self.manager.stacking_order():
            frame = self.frames.get(panel_id)
            if frame is not None:
                frame.raise_()
        self.v_guide.raise_()
        self.h_guide.raise_()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.manager.set_workspace_bounds(self.width(), self.height())
