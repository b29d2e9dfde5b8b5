# orbrya/persistence.py
"""
Layout persistence.

The layout is one JSON document stored under a single key::

    {"<panel id>": {"x": 10, "y": 20, "width": 300, "height": 200,
                    "minimized": false, "maximized": false}, ...}

Storage backends only move bytes (``save(data)`` / ``load() -> bytes|None``)
so the medium can be a file, ``QSettings`` or memory.
"""

import os
import json
import math
import logging
import tempfile
from typing import Dict, Optional

from .config import STORAGE_KEY
from .panels import PanelRegistry

logger = logging.getLogger(__name__)

GEOMETRY_FIELDS = ("x", "y", "width", "height")
FLAG_FIELDS = ("minimized", "maximized")


class MemoryStorage:
    """Keeps the document in memory; share one instance to simulate a reload."""

    def __init__(self, data: Optional[bytes] = None):
        self.data = data

    def save(self, data: bytes):
        self.data = bytes(data)

    def load(self) -> Optional[bytes]:
        return self.data


class JsonFileStorage:
    """Stores the document in a JSON file, replaced atomically on save."""

    def __init__(self, path):
        self.path = os.fspath(path)

    def save(self, data: bytes):
        folder = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(folder, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=".layout-", suffix=".json", dir=folder)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def load(self) -> Optional[bytes]:
        try:
            with open(self.path, "rb") as f:
                return f.read()
        except FileNotFoundError:
            return None


class QSettingsStorage:
    """Stores the document as a string value of a ``QSettings`` object."""

    def __init__(self, settings, key: str = STORAGE_KEY):
        self.settings = settings
        self.key = key

    def save(self, data: bytes):
        self.settings.setValue(self.key, data.decode("utf-8"))
        self.settings.sync()

    def load(self) -> Optional[bytes]:
        value = self.settings.value(self.key)
        if value is None or value == "":
            return None
        if isinstance(value, bytes):
            return value
        if hasattr(value, "data"):
            # QByteArray
            return bytes(value.data())
        return str(value).encode("utf-8")


def _valid_number(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _parse_entry(panel_id, entry) -> Optional[dict]:
    if not isinstance(entry, dict):
        return None
    parsed = {}
    for name in GEOMETRY_FIELDS:
        value = entry.get(name)
        if not _valid_number(value):
            return None
        parsed[name] = value
    if parsed["width"] < 0 or parsed["height"] < 0:
        return None
    for name in FLAG_FIELDS:
        value = entry.get(name, False)
        if not isinstance(value, bool):
            return None
        parsed[name] = value
    return parsed


def serialize_layout(registry: PanelRegistry) -> Dict[str, dict]:
    states = {}
    for panel_id, panel in registry.all():
        states[panel_id] = {
            **panel.geometry.as_dict(),
            "minimized": panel.state.minimized,
            "maximized": panel.state.maximized,
        }
    return states


def parse_layout(data) -> Optional[Dict[str, dict]]:
    """Decode a stored document. Raises ``ValueError`` on a malformed one.

    Individual entries with missing or mistyped fields are dropped.
    """
    if isinstance(data, (bytes, bytearray)):
        data = data.decode("utf-8")
    document = json.loads(data)
    if not isinstance(document, dict):
        raise ValueError(f"layout must be an object, got {type(document).__name__}")
    layout = {}
    for panel_id, entry in document.items():
        parsed = _parse_entry(panel_id, entry)
        if parsed is None:
            logger.warning("Ignoring malformed saved state for panel %s: %r", panel_id, entry)
            continue
        layout[panel_id] = parsed
    return layout


class PersistenceStore:
    """Snapshots panel geometry and flags, and serves them back as defaults."""

    def __init__(self, storage):
        self.storage = storage
        self.saved_states: Optional[Dict[str, dict]] = None

    def save(self, registry: PanelRegistry) -> bool:
        states = serialize_layout(registry)
        try:
            self.storage.save(json.dumps(states).encode("utf-8"))
        except (OSError, ValueError, TypeError):
            logger.exception("Could not save panel states")
            return False
        logger.debug("Saved %d panel states", len(states))
        return True

    def load(self) -> Optional[Dict[str, dict]]:
        """Read the stored layout. Never raises; ``None`` means no saved layout."""
        try:
            data = self.storage.load()
            if data is None:
                self.saved_states = None
                return None
            self.saved_states = parse_layout(data)
        except (OSError, ValueError, TypeError, RecursionError) as exc:
            # JSONDecodeError and UnicodeDecodeError are ValueErrors, deeply
            # nested documents raise RecursionError
            logger.warning("Could not load saved panel states: %s", exc)
            self.saved_states = None
        return self.saved_states

    def saved_state(self, panel_id: str) -> Optional[dict]:
        if not self.saved_states:
            return None
        state = self.saved_states.get(panel_id)
        return dict(state) if state is not None else None

    def forget(self, panel_id: str):
        if self.saved_states:
            self.saved_states.pop(panel_id, None)
