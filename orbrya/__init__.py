"""Dockable panel layout engine: drag, resize, snap, focus and persist panels."""

from .config import EngineConfig, load_config
from .exceptions import (
    DuplicatePanelId,
    InvalidPanelConfig,
    InvalidWorkspaceBounds,
    InvariantViolation,
    OrbryaError,
    WorkspaceMissing,
)
from .interaction import InteractionState, PointerTarget, Region, ResizeHandle
from .manager import PanelManager
from .panels import Panel, PanelConfig, Rect, Size
from .persistence import JsonFileStorage, MemoryStorage, PersistenceStore, QSettingsStorage
from .signals import PanelResize, Signal
from .snapping import SnapGuides, SnapResult, calculate_snap

__version__ = "0.1.0"

__all__ = [
    "EngineConfig",
    "load_config",
    "DuplicatePanelId",
    "InvalidPanelConfig",
    "InvalidWorkspaceBounds",
    "InvariantViolation",
    "OrbryaError",
    "WorkspaceMissing",
    "InteractionState",
    "PointerTarget",
    "Region",
    "ResizeHandle",
    "PanelManager",
    "Panel",
    "PanelConfig",
    "Rect",
    "Size",
    "JsonFileStorage",
    "MemoryStorage",
    "PersistenceStore",
    "QSettingsStorage",
    "PanelResize",
    "Signal",
    "SnapGuides",
    "SnapResult",
    "calculate_snap",
]
