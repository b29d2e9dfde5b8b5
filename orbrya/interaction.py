# orbrya/interaction.py
"""
Pointer interaction state machine.

    IDLE --header press--> DRAGGING --release--> IDLE
    IDLE --handle press--> RESIZING --release--> IDLE

Only one session exists at a time; a press while a session is active is
ignored. Sessions end only on release (there is no cancel gesture), or when
the panel they act on goes away.
"""

import enum
import math
import logging
from dataclasses import dataclass
from typing import Optional

from .panels import Rect
from .snapping import HIDDEN_GUIDES, SnapGuides, calculate_snap, snap_targets

logger = logging.getLogger(__name__)


class InteractionState(enum.Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    RESIZING = "resizing"


class Region(enum.Enum):
    HEADER = "header"
    CONTROLS = "controls"
    BODY = "body"
    RESIZE = "resize"


class ResizeHandle(str, enum.Enum):
    N = "n"
    S = "s"
    E = "e"
    W = "w"
    NE = "ne"
    NW = "nw"
    SE = "se"
    SW = "sw"

    @property
    def north(self) -> bool:
        return "n" in self.value

    @property
    def south(self) -> bool:
        return "s" in self.value

    @property
    def east(self) -> bool:
        return "e" in self.value

    @property
    def west(self) -> bool:
        return "w" in self.value


@dataclass(frozen=True)
class PointerTarget:
    """What a pointer press landed on."""

    panel_id: str
    region: Region = Region.BODY
    handle: Optional[ResizeHandle] = None


@dataclass
class DragSession:
    panel_id: str
    start_x: float
    start_y: float
    origin: Rect


@dataclass
class ResizeSession:
    panel_id: str
    handle: ResizeHandle
    start_x: float
    start_y: float
    origin: Rect
    min_width: float
    min_height: float


def resize_rect(origin: Rect, handle: ResizeHandle, dx: float, dy: float,
                min_width: float, min_height: float) -> Rect:
    """Apply a pointer delta to ``origin`` through ``handle``.

    Sizes never drop below the minimum. When a west/north drag hits the
    minimum the opposite (east/south) edge stays where it was instead of
    being pushed along.
    """
    left, top = origin.x, origin.y
    width, height = origin.width, origin.height

    if handle.east:
        width = max(min_width, origin.width + dx)
    if handle.west:
        width = max(min_width, origin.width - dx)
        left = origin.x + (origin.width - width)
    if handle.south:
        height = max(min_height, origin.height + dy)
    if handle.north:
        height = max(min_height, origin.height - dy)
        top = origin.y + (origin.height - height)

    return Rect(left, top, width, height)


def _finite(*values) -> bool:
    return all(math.isfinite(v) for v in values)


class InteractionController:
    """Turns pointer events into drag and resize sessions.

    ``sink`` receives the results through ``on_geometry_changed(panel)``,
    ``on_guides_changed(guides)``, ``on_panel_resized(panel)``,
    ``on_state_changed(panel)`` and ``on_session_finished()``.
    """

    def __init__(self, registry, focus, config, workspace_size, sink):
        self.registry = registry
        self.focus = focus
        self.config = config
        # callable returning the current workspace Size
        self.workspace_size = workspace_size
        self.sink = sink
        self.session = None
        self.guides: SnapGuides = HIDDEN_GUIDES

    @property
    def state(self) -> InteractionState:
        if isinstance(self.session, DragSession):
            return InteractionState.DRAGGING
        if isinstance(self.session, ResizeSession):
            return InteractionState.RESIZING
        return InteractionState.IDLE

    # ------------------------------------------------------------------
    def pointer_down(self, x: float, y: float, target: Optional[PointerTarget]) -> bool:
        """Handle a press. Returns True when a session started."""
        if self.session is not None:
            logger.debug("press ignored, %s in progress", self.state.value)
            return False
        if target is None or not _finite(x, y):
            return False
        panel = self.registry.get(target.panel_id)
        if panel is None or panel.state.minimized:
            return False

        previous = self.registry.get(self.focus.focused or "")
        self.focus.focus(panel.id)
        if previous is not None and previous is not panel:
            self.sink.on_state_changed(previous)
        self.sink.on_state_changed(panel)

        if target.region is Region.HEADER:
            if panel.state.maximized:
                return False
            return self.start_drag(panel, x, y)
        if target.region is Region.RESIZE and target.handle is not None:
            if not panel.resizable or panel.state.maximized:
                return False
            return self.start_resize(panel, x, y, ResizeHandle(target.handle))
        return False

    def start_drag(self, panel, x, y) -> bool:
        self.session = DragSession(panel.id, x, y, panel.geometry)
        panel.state.dragging = True
        logger.debug("drag start %s at %s", panel.id, panel.geometry)
        return True

    def start_resize(self, panel, x, y, handle: ResizeHandle) -> bool:
        self.session = ResizeSession(
            panel.id,
            handle,
            x,
            y,
            panel.geometry,
            panel.constraints.width,
            panel.constraints.height,
        )
        panel.state.resizing = True
        logger.debug("resize start %s via %s", panel.id, handle.value)
        return True

    # ------------------------------------------------------------------
    def pointer_move(self, x: float, y: float):
        if self.session is None or not _finite(x, y):
            return
        panel = self.registry.get(self.session.panel_id)
        if panel is None:
            self.abandon(self.session.panel_id)
            return
        if isinstance(self.session, DragSession):
            self._drag(panel, x, y)
        else:
            self._resize(panel, x, y)

    def _drag(self, panel, x, y):
        s = self.session
        candidate = s.origin.translated(x - s.start_x, y - s.start_y)
        if not _finite(candidate.x, candidate.y):
            return
        snap = calculate_snap(
            panel.id,
            candidate,
            snap_targets(self.registry, panel.id),
            self.workspace_size(),
            self.config.snap_threshold,
        )
        panel.geometry = Rect(snap.snap_x, snap.snap_y, candidate.width, candidate.height)
        self.sink.on_geometry_changed(panel)
        self._set_guides(SnapGuides.from_result(snap))

    def _resize(self, panel, x, y):
        s = self.session
        rect = resize_rect(
            s.origin, s.handle, x - s.start_x, y - s.start_y, s.min_width, s.min_height
        )
        if not _finite(rect.x, rect.y, rect.width, rect.height):
            return
        panel.geometry = rect
        self.sink.on_geometry_changed(panel)
        self.sink.on_panel_resized(panel)

    def _set_guides(self, guides: SnapGuides):
        if guides != self.guides:
            self.guides = guides
            self.sink.on_guides_changed(guides)

    # ------------------------------------------------------------------
    def pointer_up(self, x: Optional[float] = None, y: Optional[float] = None):
        if self.session is None:
            return
        session, self.session = self.session, None
        panel = self.registry.get(session.panel_id)
        if panel is not None:
            panel.state.dragging = False
            panel.state.resizing = False
            self.sink.on_state_changed(panel)
        if isinstance(session, DragSession):
            self._set_guides(HIDDEN_GUIDES)
        logger.debug("%s end %s", type(session).__name__, session.panel_id)
        self.sink.on_session_finished()

    def abandon(self, panel_id: str):
        """Drop the active session if it acts on ``panel_id``, without saving."""
        if self.session is None or self.session.panel_id != panel_id:
            return
        self.session = None
        panel = self.registry.get(panel_id)
        if panel is not None:
            panel.state.dragging = False
            panel.state.resizing = False
        self._set_guides(HIDDEN_GUIDES)
