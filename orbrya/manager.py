# orbrya/manager.py
"""
PanelManager: the public face of the layout engine.

One manager owns one registry, one focus stack and one interaction
controller; several managers never share state. The host reports the
workspace size and forwards pointer events, and listens to the signals to
redraw panels and snap guides.
"""

import math
import logging
from typing import Iterator, Optional

from .config import EngineConfig
from .exceptions import InvalidWorkspaceBounds, WorkspaceMissing
from .focus import FocusStack
from .interaction import (
    InteractionController,
    InteractionState,
    PointerTarget,
    Region,
    ResizeHandle,
)
from .panels import Panel, PanelConfig, PanelRegistry, Rect, Size, build_panel
from .persistence import MemoryStorage, PersistenceStore
from .signals import PanelResize, Signal

logger = logging.getLogger(__name__)


def _as_size(workspace) -> Size:
    if isinstance(workspace, Size):
        size = workspace
    elif isinstance(workspace, (tuple, list)) and len(workspace) == 2:
        size = Size(*workspace)
    elif hasattr(workspace, "width") and hasattr(workspace, "height"):
        # QSize and friends expose width()/height() as methods
        w, h = workspace.width, workspace.height
        size = Size(w() if callable(w) else w, h() if callable(h) else h)
    else:
        raise InvalidWorkspaceBounds(f"unsupported workspace bounds {workspace!r}")
    for value in (size.width, size.height):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidWorkspaceBounds(f"workspace size must be numeric: {size}")
        if not math.isfinite(value) or value < 0:
            raise InvalidWorkspaceBounds(f"workspace size must be finite and positive: {size}")
    return size


class PanelManager:
    """Dockable panel layout engine.

    Signals:
        panel_created(panel_id)
        panel_closed(panel_id)
        panel_state_changed(panel_id) - focus, z-order, minimize, maximize
        geometry_changed(panel_id, Rect) - rectangle the host should draw
        panel_resized(PanelResize) - rendered size changed
        guides_changed(SnapGuides)
    """

    def __init__(self, workspace, storage=None, config: Optional[EngineConfig] = None):
        if workspace is None:
            raise WorkspaceMissing("a workspace container is required")
        self.config = config or EngineConfig()
        self.workspace = _as_size(workspace)
        self.registry = PanelRegistry()
        self.focus_stack = FocusStack(self.registry, self.config.base_z_index)
        self.store = PersistenceStore(storage if storage is not None else MemoryStorage())
        self.controller = InteractionController(
            self.registry, self.focus_stack, self.config, lambda: self.workspace, self
        )

        self.panel_created = Signal("panel_created")
        self.panel_closed = Signal("panel_closed")
        self.panel_state_changed = Signal("panel_state_changed")
        self.geometry_changed = Signal("geometry_changed")
        self.panel_resized = Signal("panel_resized")
        self.guides_changed = Signal("guides_changed")

        self.store.load()

    # --- panel lifecycle ---------------------------------------------------
    def create_panel(self, config: Optional[PanelConfig] = None, **options) -> Panel:
        """Register a new panel.

        Accepts a ``PanelConfig`` or its fields as keyword arguments. Geometry
        left unset comes from the saved layout, then from the defaults.
        Raises ``DuplicatePanelId`` when the id is taken.
        """
        if config is None:
            config = PanelConfig(**options)
        elif options:
            raise TypeError("pass either a PanelConfig or keyword options, not both")

        saved = self.store.saved_state(config.id) or {}
        cfg = self.config

        def pick(name, default):
            value = getattr(config, name)
            if value is not None:
                return value
            return saved.get(name, default)

        geometry = (
            pick("x", cfg.default_x),
            pick("y", cfg.default_y),
            pick("width", cfg.default_width),
            pick("height", cfg.default_height),
        )
        constraints = (
            config.min_width if config.min_width is not None else cfg.default_min_width,
            config.min_height if config.min_height is not None else cfg.default_min_height,
        )
        panel = self.registry.create(build_panel(config, geometry, constraints))
        self.focus_stack.raise_panel(panel.id)
        logger.debug("Created panel %s at %s", panel.id, panel.geometry)
        self.panel_created.emit(panel.id)
        self.geometry_changed.emit(panel.id, panel.geometry)
        return panel

    def close_panel(self, panel_id: str) -> bool:
        panel = self.registry.get(panel_id)
        if panel is None:
            logger.debug("close ignored, unknown panel %s", panel_id)
            return False
        self.controller.abandon(panel_id)
        self.registry.delete(panel_id)
        self.store.forget(panel_id)
        if self.config.persist_on_close:
            self.save_layout()
        logger.debug("Closed panel %s", panel_id)
        self.panel_closed.emit(panel_id)
        return True

    def show_panel(self, panel_id: str) -> bool:
        panel = self.registry.get(panel_id)
        if panel is None:
            return False
        panel.state.minimized = False
        self.focus_panel(panel_id)
        return True

    def minimize_panel(self, panel_id: str) -> bool:
        panel = self.registry.get(panel_id)
        if panel is None:
            return False
        self.controller.abandon(panel_id)
        panel.state.minimized = True
        self.panel_state_changed.emit(panel_id)
        return True

    def toggle_maximize(self, panel_id: str) -> bool:
        """Maximize the panel, or restore the exact pre-maximize geometry."""
        panel = self.registry.get(panel_id)
        if panel is None:
            return False
        self.controller.abandon(panel_id)
        state = panel.state
        if state.maximized:
            panel.geometry = state.previous_bounds
            state.previous_bounds = None
            state.maximized = False
        else:
            state.previous_bounds = panel.geometry
            state.maximized = True
        rect = self.display_rect(panel_id)
        self.panel_state_changed.emit(panel_id)
        self.geometry_changed.emit(panel_id, rect)
        self.panel_resized.emit(PanelResize(panel_id, rect.width, rect.height))
        return True

    def focus_panel(self, panel_id: str) -> bool:
        previous = self.focus_stack.focused
        if not self.focus_stack.focus(panel_id):
            return False
        if previous is not None and previous != panel_id:
            self.panel_state_changed.emit(previous)
        self.panel_state_changed.emit(panel_id)
        return True

    # --- queries -------------------------------------------------------------
    def get_panel(self, panel_id: str) -> Optional[Panel]:
        return self.registry.get(panel_id)

    def get_panel_content(self, panel_id: str):
        panel = self.registry.get(panel_id)
        return panel.content if panel is not None else None

    def get_saved_state(self, panel_id: str) -> Optional[dict]:
        return self.store.saved_state(panel_id)

    def focused_panel(self) -> Optional[str]:
        return self.focus_stack.focused

    def panels(self) -> Iterator[Panel]:
        return iter(self.registry)

    @property
    def interaction_state(self) -> InteractionState:
        return self.controller.state

    @property
    def guides(self):
        return self.controller.guides

    def display_rect(self, panel_id: str) -> Optional[Rect]:
        """Rectangle to draw: the whole workspace while maximized."""
        panel = self.registry.get(panel_id)
        if panel is None:
            return None
        if panel.state.maximized:
            return Rect(
                0,
                0,
                max(self.workspace.width, panel.constraints.width),
                max(self.workspace.height, panel.constraints.height),
            )
        return panel.geometry

    def stacking_order(self):
        """Panel ids bottom to top."""
        return [p.id for p in sorted(self.registry, key=lambda p: p.z_index)]

    def check_invariants(self):
        self.registry.check_invariants()

    # --- workspace -----------------------------------------------------------
    def set_workspace_bounds(self, width: float, height: float):
        self.workspace = _as_size((width, height))
        for panel in self.registry:
            if panel.state.maximized:
                rect = self.display_rect(panel.id)
                self.geometry_changed.emit(panel.id, rect)
                self.panel_resized.emit(PanelResize(panel.id, rect.width, rect.height))

    def hit_test(self, x: float, y: float) -> Optional[PointerTarget]:
        """Find the topmost visible panel under a workspace point."""
        cfg = self.config
        for panel in sorted(self.registry, key=lambda p: p.z_index, reverse=True):
            if not panel.visible:
                continue
            rect = self.display_rect(panel.id)
            if not rect.contains(x, y):
                continue
            lx, ly = x - rect.x, y - rect.y
            if panel.resizable and not panel.state.maximized:
                handle = self._handle_at(lx, ly, rect.width, rect.height)
                if handle is not None:
                    return PointerTarget(panel.id, Region.RESIZE, handle)
            if ly < cfg.header_height:
                if lx >= rect.width - cfg.controls_width:
                    return PointerTarget(panel.id, Region.CONTROLS)
                return PointerTarget(panel.id, Region.HEADER)
            return PointerTarget(panel.id, Region.BODY)
        return None

    def _handle_at(self, lx, ly, width, height) -> Optional[ResizeHandle]:
        margin, corner = self.config.handle_margin, self.config.corner_region
        west = lx < margin
        east = lx >= width - margin
        north = ly < margin
        south = ly >= height - margin
        # widen corner grips along the edges
        if west or east:
            north = north or ly < corner
            south = south or ly >= height - corner
        if north or south:
            west = west or lx < corner
            east = east or lx >= width - corner
        vertical = "n" if north else "s" if south else ""
        horizontal = "w" if west else "e" if east else ""
        if not (vertical or horizontal):
            return None
        return ResizeHandle(vertical + horizontal)

    # --- pointer input -------------------------------------------------------
    def pointer_down(self, x: float, y: float, target: Optional[PointerTarget] = None) -> bool:
        if target is None:
            target = self.hit_test(x, y)
        return self.controller.pointer_down(x, y, target)

    def pointer_move(self, x: float, y: float):
        self.controller.pointer_move(x, y)

    def pointer_up(self, x: Optional[float] = None, y: Optional[float] = None):
        self.controller.pointer_up(x, y)

    # --- persistence ---------------------------------------------------------
    def save_layout(self) -> bool:
        return self.store.save(self.registry)

    # --- controller sink -----------------------------------------------------
    def on_geometry_changed(self, panel):
        self.geometry_changed.emit(panel.id, panel.geometry)

    def on_panel_resized(self, panel):
        self.panel_resized.emit(PanelResize(panel.id, panel.geometry.width, panel.geometry.height))

    def on_guides_changed(self, guides):
        self.guides_changed.emit(guides)

    def on_state_changed(self, panel):
        self.panel_state_changed.emit(panel.id)

    def on_session_finished(self):
        self.save_layout()
