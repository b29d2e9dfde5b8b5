# orbrya/config.py
"""
Engine settings.

Defaults match the desktop host; ``load_config`` reads overrides from a
``QSettings`` (or anything exposing the same ``value(key, default)`` call).
"""

import math
import logging
from dataclasses import dataclass, fields

logger = logging.getLogger(__name__)

STORAGE_KEY = "orbrya_panels"


@dataclass
class EngineConfig:
    # pixels at which an edge is pulled into alignment
    snap_threshold: float = 15
    default_x: float = 100
    default_y: float = 100
    default_width: float = 300
    default_height: float = 400
    default_min_width: float = 200
    default_min_height: float = 150
    base_z_index: int = 100
    storage_key: str = STORAGE_KEY
    # hit-test regions
    header_height: float = 28
    controls_width: float = 72
    handle_margin: float = 6
    corner_region: float = 12
    persist_on_close: bool = True


def load_config(settings, prefix: str = "panels/") -> EngineConfig:
    """Build an ``EngineConfig`` from ``settings``.

    Keys are the field names under ``prefix`` (``panels/snap_threshold``...).
    Unparsable values keep the default and are logged.
    """
    config = EngineConfig()
    if settings is None:
        return config
    for f in fields(EngineConfig):
        default = getattr(config, f.name)
        key = prefix + f.name
        try:
            value = settings.value(key, default, type=f.type)
        except TypeError:
            # QSettings raises when the stored value cannot be converted
            logger.warning("Invalid setting %s, using %r", key, default)
            continue
        if value is None:
            continue
        if f.type is float and not math.isfinite(value):
            logger.warning("Invalid setting %s=%r, using %r", key, value, default)
            continue
        setattr(config, f.name, value)
    if config.snap_threshold < 0:
        logger.warning("Negative snap threshold %s, snapping disabled", config.snap_threshold)
        config.snap_threshold = 0
    return config
