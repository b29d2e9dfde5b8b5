# orbrya/snapping.py
"""
Edge snapping for panels being dragged.

Every rule compares the *candidate* rectangle (never a partially snapped
one) against a target edge. A matching rule overwrites the previous result
instead of keeping the closest one, so when several rules match the last
rule evaluated wins. Evaluation order:

1. workspace left, workspace right, workspace top, workspace bottom
2. each sibling in registry order, horizontal then vertical axis:
   left->right, right->left, left->left, right->right
   (top->bottom, bottom->top, top->top, bottom->bottom)
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

from .panels import PanelRegistry, Rect, Size


@dataclass(frozen=True)
class SnapResult:
    snap_x: float
    snap_y: float
    snapped_vertical_guide: bool = False
    snapped_horizontal_guide: bool = False
    guide_x: float = 0
    guide_y: float = 0


@dataclass(frozen=True)
class SnapGuides:
    """Guide lines the host should draw; ``None`` hides a guide."""

    vertical: Optional[float] = None
    horizontal: Optional[float] = None

    @classmethod
    def from_result(cls, result: SnapResult) -> "SnapGuides":
        return cls(
            vertical=result.guide_x if result.snapped_vertical_guide else None,
            horizontal=result.guide_y if result.snapped_horizontal_guide else None,
        )

    @property
    def visible(self) -> bool:
        return self.vertical is not None or self.horizontal is not None


HIDDEN_GUIDES = SnapGuides()


def snap_targets(registry: PanelRegistry, moving_id: str) -> Iterator[Tuple[str, Rect]]:
    """Rectangles the moving panel may dock against.

    Minimized and maximized panels are skipped.
    """
    for panel_id, panel in registry.all():
        if panel_id == moving_id:
            continue
        if not panel.visible or panel.state.maximized:
            continue
        yield panel_id, panel.geometry


def _axis(start, length, edges, threshold):
    """Run the four edge rules of one axis for one target.

    ``edges`` is ``(near, far)`` of the target. Returns ``(position, guide)``
    of the last matching rule, or ``None``.
    """
    near, far = edges
    end = start + length
    hit = None
    if abs(start - far) < threshold:
        hit = (far, far)
    if abs(end - near) < threshold:
        hit = (near - length, near)
    if abs(start - near) < threshold:
        hit = (near, near)
    if abs(end - far) < threshold:
        hit = (far - length, far)
    return hit


def calculate_snap(
    moving_id: str,
    candidate: Rect,
    siblings: Iterable[Tuple[str, Rect]],
    workspace: Size,
    threshold: float,
) -> SnapResult:
    x, y = candidate.x, candidate.y
    width, height = candidate.width, candidate.height
    snap_x, snap_y = x, y
    snapped_v = snapped_h = False
    guide_x = guide_y = 0

    if abs(x) < threshold:
        snap_x, snapped_v, guide_x = 0, True, 0
    if abs(x + width - workspace.width) < threshold:
        snap_x, snapped_v, guide_x = workspace.width - width, True, workspace.width
    if abs(y) < threshold:
        snap_y, snapped_h, guide_y = 0, True, 0
    if abs(y + height - workspace.height) < threshold:
        snap_y, snapped_h, guide_y = workspace.height - height, True, workspace.height

    for sibling_id, rect in siblings:
        if sibling_id == moving_id:
            continue
        hit = _axis(x, width, (rect.left, rect.right), threshold)
        if hit is not None:
            snap_x, guide_x = hit
            snapped_v = True
        hit = _axis(y, height, (rect.top, rect.bottom), threshold)
        if hit is not None:
            snap_y, guide_y = hit
            snapped_h = True

    return SnapResult(snap_x, snap_y, snapped_v, snapped_h, guide_x, guide_y)
