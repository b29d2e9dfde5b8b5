"""Expose the Qt host widgets for convenient imports."""

from .workspace import WorkspaceWidget
from .panel_frame import PanelFrame, PanelHeader
from .corner_handle import CornerHandle
from .logs_panel import LogsWidget

__all__ = [
    "WorkspaceWidget",
    "PanelFrame",
    "PanelHeader",
    "CornerHandle",
    "LogsWidget",
]
