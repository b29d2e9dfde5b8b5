# orbrya/panels.py
"""
Panel entities and the registry that owns them.

The registry only stores panels and checks their invariants; moving,
focusing and persisting live in the other engine modules.
"""

import math
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, Optional, Tuple

from .exceptions import DuplicatePanelId, InvalidPanelConfig, InvariantViolation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rect:
    """Rectangle in workspace coordinates."""

    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def translated(self, dx: float, dy: float) -> "Rect":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def contains(self, px: float, py: float) -> bool:
        return self.left <= px < self.right and self.top <= py < self.bottom

    def as_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass
class PanelConfig:
    """Options accepted by ``PanelManager.create_panel``.

    ``x``, ``y``, ``width`` and ``height`` left at ``None`` fall back to the
    persisted layout, then to the engine defaults. ``title``, ``icon`` and
    ``content`` are carried for the host and never read by the engine.
    """

    id: str
    title: str = ""
    icon: str = "\U0001F4E6"
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    min_width: Optional[float] = None
    min_height: Optional[float] = None
    resizable: bool = True
    closable: bool = True
    content: Any = None


@dataclass
class PanelState:
    minimized: bool = False
    maximized: bool = False
    focused: bool = False
    previous_bounds: Optional[Rect] = None
    # transient, set while a drag/resize session targets the panel
    dragging: bool = False
    resizing: bool = False


@dataclass
class Panel:
    id: str
    geometry: Rect
    constraints: Size
    resizable: bool = True
    closable: bool = True
    title: str = ""
    icon: str = ""
    content: Any = None
    state: PanelState = field(default_factory=PanelState)
    z_index: int = 0

    @property
    def visible(self) -> bool:
        return not self.state.minimized

    def check_invariants(self):
        """Raise ``InvariantViolation`` when the panel is in an impossible state."""
        g = self.geometry
        if g.width < self.constraints.width or g.height < self.constraints.height:
            raise InvariantViolation(f"panel {self.id}: {g} is below {self.constraints}")
        if self.state.maximized != (self.state.previous_bounds is not None):
            raise InvariantViolation(f"panel {self.id}: maximized flag and saved bounds disagree: {self.state}")


def _number(name, value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidPanelConfig(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidPanelConfig(f"{name} must be finite, got {value!r}")
    return value


def build_panel(config: PanelConfig, geometry: Tuple[float, float, float, float],
                constraints: Tuple[float, float]) -> Panel:
    """Validate resolved values and build a ``Panel``.

    A size below the minimum is raised to the minimum.
    """
    if not isinstance(config.id, str) or not config.id:
        raise InvalidPanelConfig(f"panel id must be a non-empty string, got {config.id!r}")
    min_w = _number("min_width", constraints[0])
    min_h = _number("min_height", constraints[1])
    if min_w < 0 or min_h < 0:
        raise InvalidPanelConfig(f"minimum size must not be negative: {min_w}x{min_h}")
    x = _number("x", geometry[0])
    y = _number("y", geometry[1])
    w = _number("width", geometry[2])
    h = _number("height", geometry[3])
    if w < min_w or h < min_h:
        logger.debug("panel %s: %sx%s raised to minimum %sx%s", config.id, w, h, min_w, min_h)
    return Panel(
        id=config.id,
        geometry=Rect(x, y, max(w, min_w), max(h, min_h)),
        constraints=Size(min_w, min_h),
        resizable=bool(config.resizable),
        closable=bool(config.closable),
        title=config.title,
        icon=config.icon,
        content=config.content,
    )


class PanelRegistry:
    """Panels keyed by id, kept in insertion order.

    Insertion order drives snap tie-breaking so it must stay stable.
    """

    def __init__(self):
        self._panels: Dict[str, Panel] = {}

    def create(self, panel: Panel) -> Panel:
        if panel.id in self._panels:
            raise DuplicatePanelId(panel.id)
        self._panels[panel.id] = panel
        return panel

    def get(self, panel_id: str) -> Optional[Panel]:
        return self._panels.get(panel_id)

    def delete(self, panel_id: str) -> bool:
        return self._panels.pop(panel_id, None) is not None

    def all(self) -> Iterator[Tuple[str, Panel]]:
        return iter(list(self._panels.items()))

    def __contains__(self, panel_id) -> bool:
        return panel_id in self._panels

    def __len__(self) -> int:
        return len(self._panels)

    def __iter__(self) -> Iterator[Panel]:
        return iter(list(self._panels.values()))

    def check_invariants(self):
        focused = [p.id for p in self if p.state.focused]
        if len(focused) > 1:
            raise InvariantViolation(f"several focused panels: {focused}")
        z_values = [p.z_index for p in self]
        if len(z_values) != len(set(z_values)):
            raise InvariantViolation(f"shared z-index: {z_values}")
        for panel in self:
            panel.check_invariants()
