import logging
import sys

import pytest

pytest.importorskip("PyQt5.QtWidgets")

from PyQt5.QtCore import QPoint, Qt
from PyQt5.QtWidgets import QApplication, QLabel

from orbrya.bug_report import write_report
from orbrya.logger import QtHandler, log_emitter
from orbrya.persistence import MemoryStorage
from orbrya.ui import LogsWidget, WorkspaceWidget


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def ws(qapp):
    widget = WorkspaceWidget(storage=MemoryStorage())
    widget.resize(1000, 800)
    # resize events are deferred until the widget is shown
    widget.manager.set_workspace_bounds(1000, 800)
    yield widget
    widget.deleteLater()


def geometry(frame):
    g = frame.geometry()
    return (g.x(), g.y(), g.width(), g.height())


def test_frame_follows_panel_geometry(ws):
    ws.add_panel(id="p", title="Viewport", x=100, y=100, width=300, height=200)
    frame = ws.frame("p")
    assert frame is not None
    assert geometry(frame) == (100, 100, 300, 200)
    assert frame.header.title_label.text() == "Viewport"


def test_content_widget_is_mounted(ws):
    label = QLabel("scene")
    ws.add_panel(id="p", content=label)
    assert ws.manager.get_panel_content("p") is label
    assert label.parent() is not None


def test_maximize_fills_workspace(ws):
    ws.add_panel(id="p", x=100, y=100, width=300, height=200)
    ws.frame("p").header.max_btn.click()
    assert geometry(ws.frame("p")) == (0, 0, 1000, 800)
    ws.manager.toggle_maximize("p")
    assert geometry(ws.frame("p")) == (100, 100, 300, 200)


def test_minimize_hides_frame(ws):
    ws.add_panel(id="p")
    ws.frame("p").header.min_btn.click()
    assert ws.frame("p").isHidden()
    ws.manager.show_panel("p")
    assert not ws.frame("p").isHidden()


def test_close_removes_frame(ws):
    ws.add_panel(id="p")
    ws.frame("p").header.close_btn.click()
    assert ws.frame("p") is None
    assert ws.manager.get_panel("p") is None


def test_fixed_panel_has_no_close_button(ws):
    ws.add_panel(id="p", closable=False, resizable=False)
    frame = ws.frame("p")
    assert frame.header.close_btn is None
    assert frame.handle is None


def test_panel_resized_is_relayed(ws):
    sizes = []
    ws.panelResized.connect(lambda pid, w, h: sizes.append((pid, w, h)))
    ws.add_panel(id="p", x=100, y=100, width=300, height=200)
    ws.manager.toggle_maximize("p")
    assert sizes == [("p", 1000.0, 800.0)]


def test_drag_through_pointer_forwarding(ws):
    ws.add_panel(id="p", x=100, y=100, width=300, height=200)
    ws.pointer_press(QPoint(150, 110))
    ws.pointer_move(QPoint(200, 160))
    ws.pointer_release(QPoint(200, 160))
    assert geometry(ws.frame("p")) == (150, 150, 300, 200)


def test_snap_guide_shown_while_dragging(ws):
    ws.add_panel(id="p", x=50, y=50, width=300, height=200)
    ws.pointer_press(QPoint(100, 60))
    ws.pointer_move(QPoint(62, 60))
    assert not ws.v_guide.isHidden()
    assert ws.v_guide.geometry().x() == 0
    assert ws.h_guide.isHidden()
    ws.pointer_release(QPoint(62, 60))
    assert ws.v_guide.isHidden()


def test_cursor_shapes(ws):
    ws.add_panel(id="p", x=100, y=100, width=300, height=200)
    assert ws.cursor_at(QPoint(101, 150)) == Qt.SizeHorCursor
    assert ws.cursor_at(QPoint(399, 299)) == Qt.SizeFDiagCursor
    assert ws.cursor_at(QPoint(250, 110)) == Qt.OpenHandCursor
    assert ws.cursor_at(QPoint(10, 10)) == Qt.ArrowCursor


def test_stacking_follows_focus(ws):
    ws.add_panel(id="a", x=100, y=100)
    ws.add_panel(id="b", x=150, y=150)
    ws.manager.focus_panel("a")
    children = [c for c in ws.children() if c in ws.frames.values()]
    assert children[-1] is ws.frame("a")
    assert ws.frame("a").property("focused") is True


def test_logs_widget_receives_records(qapp):
    widget = LogsWidget()
    log_emitter.log_record.emit("panel viewport mounted")
    assert "panel viewport mounted" in widget.text_edit.toPlainText()


def test_qt_handler_formats_and_emits(qapp):
    received = []
    log_emitter.log_record.connect(received.append)
    try:
        handler = QtHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s:%(message)s"))
        record = logging.LogRecord("orbrya", logging.INFO, __file__, 1, "saved %d", (3,), None)
        handler.emit(record)
    finally:
        log_emitter.log_record.disconnect(received.append)
    assert received == ["INFO:saved 3"]


def test_write_report(tmp_path):
    try:
        raise ValueError("bad layout")
    except ValueError:
        path = write_report(*sys.exc_info(), path=str(tmp_path / "logs" / "crash.log"))
    text = (tmp_path / "logs" / "crash.log").read_text(encoding="utf-8")
    assert path.endswith("crash.log")
    assert "ValueError: bad layout" in text
    assert text.startswith("\n=== ")
