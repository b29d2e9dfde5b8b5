import math

import pytest

from orbrya.interaction import (
    InteractionState,
    PointerTarget,
    Region,
    ResizeHandle,
    resize_rect,
)
from orbrya.panels import Rect


def header(panel_id):
    return PointerTarget(panel_id, Region.HEADER)


def handle(panel_id, direction):
    return PointerTarget(panel_id, Region.RESIZE, ResizeHandle(direction))


class TestResizeRect:
    origin = Rect(100, 100, 300, 200)

    def test_east_grows_width_only(self):
        assert resize_rect(self.origin, ResizeHandle.E, 40, 99, 200, 150) == Rect(100, 100, 340, 200)

    def test_south_grows_height_only(self):
        assert resize_rect(self.origin, ResizeHandle.S, 99, 40, 200, 150) == Rect(100, 100, 300, 240)

    def test_west_moves_left_edge(self):
        assert resize_rect(self.origin, ResizeHandle.W, -50, 0, 200, 150) == Rect(50, 100, 350, 200)

    def test_west_clamp_keeps_right_edge(self):
        rect = resize_rect(self.origin, ResizeHandle.W, 150, 0, 200, 150)
        assert rect.width == 200
        assert rect.left == 200
        assert rect.right == self.origin.right

    def test_north_clamp_keeps_bottom_edge(self):
        rect = resize_rect(self.origin, ResizeHandle.N, 0, 500, 200, 150)
        assert rect.height == 150
        assert rect.bottom == self.origin.bottom

    def test_corner_touches_both_axes(self):
        rect = resize_rect(self.origin, ResizeHandle.NW, -10, -20, 200, 150)
        assert rect == Rect(90, 80, 310, 220)
        rect = resize_rect(self.origin, ResizeHandle.SE, 10, 20, 200, 150)
        assert rect == Rect(100, 100, 310, 220)

    @pytest.mark.parametrize("direction", list(ResizeHandle))
    @pytest.mark.parametrize("dx,dy", [(1e9, 1e9), (-1e9, -1e9), (1e9, -1e9), (-1e9, 1e9)])
    def test_extreme_deltas_never_break_minimum(self, direction, dx, dy):
        rect = resize_rect(self.origin, direction, dx, dy, 200, 150)
        assert rect.width >= 200
        assert rect.height >= 150
        assert all(math.isfinite(v) for v in (rect.x, rect.y, rect.width, rect.height))


class TestDrag:
    def test_scenario_snap_to_workspace_left(self, manager):
        manager.create_panel(id="p", x=50, y=50, width=300, height=200)
        assert manager.pointer_down(100, 60, header("p"))
        assert manager.interaction_state is InteractionState.DRAGGING
        manager.pointer_move(62, 60)
        assert manager.get_panel("p").geometry == Rect(0, 50, 300, 200)
        assert manager.guides.vertical == 0
        assert manager.guides.horizontal is None

    def test_scenario_snap_to_sibling_right_edge(self, manager):
        manager.create_panel(id="a", x=0, y=0, width=300, height=200)
        manager.create_panel(id="b", x=290, y=0, width=300, height=200)
        manager.pointer_down(390, 10, header("b"))
        manager.pointer_move(405, 10)
        assert manager.get_panel("b").geometry.x == 300

    def test_drag_follows_pointer_without_snap(self, manager):
        manager.create_panel(id="p", x=200, y=200, width=300, height=200)
        manager.pointer_down(250, 210, header("p"))
        manager.pointer_move(330, 150)
        assert manager.get_panel("p").geometry == Rect(280, 140, 300, 200)

    def test_drag_focuses_panel(self, manager):
        manager.create_panel(id="a", x=500, y=500)
        manager.create_panel(id="b", x=100, y=100)
        manager.focus_panel("b")
        manager.pointer_down(550, 510, header("a"))
        assert manager.focused_panel() == "a"
        assert manager.get_panel("a").z_index > manager.get_panel("b").z_index

    def test_release_hides_guides_and_saves(self, manager, storage):
        manager.create_panel(id="p", x=50, y=50, width=300, height=200)
        guides = []
        manager.guides_changed.connect(guides.append)
        manager.pointer_down(100, 60, header("p"))
        manager.pointer_move(62, 60)
        assert storage.data is None
        manager.pointer_up(62, 60)
        assert manager.interaction_state is InteractionState.IDLE
        assert not guides[-1].visible
        assert manager.get_saved_state("p") is None  # cache is the startup layout
        assert b'"x": 0' in storage.data

    def test_dragging_flag_is_transient(self, manager):
        manager.create_panel(id="p")
        manager.pointer_down(150, 110, header("p"))
        assert manager.get_panel("p").state.dragging
        manager.pointer_up()
        assert not manager.get_panel("p").state.dragging

    def test_move_without_session_does_nothing(self, manager):
        panel = manager.create_panel(id="p", x=200, y=200)
        manager.pointer_move(900, 900)
        manager.pointer_up()
        assert panel.geometry.x == 200

    def test_non_finite_pointer_is_ignored(self, manager):
        manager.create_panel(id="p", x=200, y=200)
        manager.pointer_down(250, 210, header("p"))
        manager.pointer_move(math.nan, 300)
        manager.pointer_move(math.inf, 300)
        assert manager.get_panel("p").geometry.x == 200

    def test_maximized_panel_does_not_drag(self, manager):
        manager.create_panel(id="p", x=200, y=200)
        manager.toggle_maximize("p")
        assert not manager.pointer_down(10, 10, header("p"))
        assert manager.focused_panel() == "p"

    def test_minimized_panel_ignores_press(self, manager):
        manager.create_panel(id="p", x=200, y=200)
        manager.minimize_panel("p")
        assert not manager.pointer_down(250, 210, header("p"))
        assert manager.focused_panel() is None

    def test_body_press_only_focuses(self, manager):
        manager.create_panel(id="p", x=200, y=200)
        assert not manager.pointer_down(300, 400, PointerTarget("p", Region.BODY))
        assert manager.interaction_state is InteractionState.IDLE
        assert manager.focused_panel() == "p"


class TestResize:
    def test_scenario_west_handle(self, manager):
        manager.create_panel(id="p", x=100, y=100, width=300, height=200, min_width=200)
        manager.pointer_down(100, 200, handle("p", "w"))
        assert manager.interaction_state is InteractionState.RESIZING

        manager.pointer_move(50, 200)
        assert manager.get_panel("p").geometry == Rect(50, 100, 350, 200)

        manager.pointer_move(-50, 200)
        assert manager.get_panel("p").geometry == Rect(-50, 100, 450, 200)

        manager.pointer_move(250, 200)
        geometry = manager.get_panel("p").geometry
        assert geometry.width == 200
        assert geometry.left == 200
        assert geometry.right == 400

    def test_resize_emits_size(self, manager):
        manager.create_panel(id="p", x=100, y=100, width=300, height=200)
        sizes = []
        manager.panel_resized.connect(sizes.append)
        manager.pointer_down(400, 300, handle("p", "se"))
        manager.pointer_move(450, 340)
        assert sizes[-1].panel_id == "p"
        assert (sizes[-1].width, sizes[-1].height) == (350, 240)

    def test_resize_does_not_snap(self, manager):
        manager.create_panel(id="p", x=100, y=100, width=300, height=200)
        manager.pointer_down(400, 200, handle("p", "e"))
        # right edge ends 7px from the workspace edge
        manager.pointer_move(993, 200)
        assert manager.get_panel("p").geometry.right == 993
        assert manager.guides.vertical is None

    def test_release_saves(self, manager, storage):
        manager.create_panel(id="p", x=100, y=100, width=300, height=200)
        manager.pointer_down(400, 200, handle("p", "e"))
        manager.pointer_move(450, 200)
        manager.pointer_up()
        assert b'"width": 350' in storage.data
        assert not manager.get_panel("p").state.resizing

    def test_not_resizable_panel_only_focuses(self, manager):
        manager.create_panel(id="p", x=100, y=100, resizable=False)
        assert not manager.pointer_down(100, 200, handle("p", "w"))
        assert manager.interaction_state is InteractionState.IDLE
        assert manager.focused_panel() == "p"

    def test_handle_given_as_string(self, manager):
        manager.create_panel(id="p", x=100, y=100, width=300, height=200)
        manager.pointer_down(400, 200, PointerTarget("p", Region.RESIZE, "e"))
        manager.pointer_move(420, 200)
        assert manager.get_panel("p").geometry.width == 320


class TestMutualExclusion:
    def test_press_during_drag_is_ignored(self, manager):
        manager.create_panel(id="a", x=100, y=100)
        manager.create_panel(id="b", x=500, y=100)
        manager.pointer_down(150, 110, header("a"))
        assert not manager.pointer_down(500, 200, handle("b", "w"))
        assert manager.interaction_state is InteractionState.DRAGGING
        assert manager.focused_panel() == "a"
        assert not manager.get_panel("b").state.resizing

    def test_press_during_resize_is_ignored(self, manager):
        manager.create_panel(id="a", x=100, y=100)
        manager.create_panel(id="b", x=500, y=100)
        manager.pointer_down(100, 200, handle("a", "w"))
        assert not manager.pointer_down(550, 110, header("b"))
        assert manager.interaction_state is InteractionState.RESIZING

    def test_new_session_after_release(self, manager):
        manager.create_panel(id="a", x=100, y=100)
        manager.pointer_down(150, 110, header("a"))
        manager.pointer_up()
        assert manager.pointer_down(100, 200, handle("a", "w"))


class TestSessionTargetGone:
    def test_close_during_drag_ends_session(self, manager):
        manager.create_panel(id="a", x=100, y=100)
        guides = []
        manager.guides_changed.connect(guides.append)
        manager.pointer_down(150, 110, header("a"))
        manager.pointer_move(112, 110)
        manager.close_panel("a")
        assert manager.interaction_state is InteractionState.IDLE
        assert not manager.guides.visible
        manager.pointer_move(300, 300)
        manager.pointer_up()

    def test_minimize_during_resize_ends_session(self, manager):
        manager.create_panel(id="a", x=100, y=100)
        manager.pointer_down(100, 200, handle("a", "w"))
        manager.minimize_panel("a")
        assert manager.interaction_state is InteractionState.IDLE
        assert not manager.get_panel("a").state.resizing
