"""Exceptions raised by the panel layout engine.

Hierarchy:
    OrbryaError (base)
    ├── DuplicatePanelId - a panel with this id already exists
    ├── InvalidPanelConfig - geometry or constraints that cannot be laid out
    ├── InvalidWorkspaceBounds - a workspace size that is not usable
    ├── WorkspaceMissing - the engine was started without a workspace
    └── InvariantViolation - a layout consistency check failed

Operations on unknown panel ids never raise; they are silent no-ops.
"""


class OrbryaError(Exception):
    """Base exception for all engine errors."""


class DuplicatePanelId(OrbryaError, KeyError):
    """Raised by ``create_panel`` when the id is already registered."""

    def __init__(self, panel_id: str):
        super().__init__(panel_id)
        self.panel_id = panel_id

    def __str__(self) -> str:
        return f"panel {self.panel_id!r} already exists"


class InvalidPanelConfig(OrbryaError, ValueError):
    """Raised when a panel configuration contains unusable values."""


class WorkspaceMissing(OrbryaError, RuntimeError):
    """The engine cannot run without a workspace container."""


class InvalidWorkspaceBounds(OrbryaError, ValueError):
    """Raised when the workspace size is not a finite, non-negative pair."""


class InvariantViolation(OrbryaError, AssertionError):
    """Raised by ``check_invariants`` when the layout is in an impossible state."""
