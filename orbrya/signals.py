import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PanelResize:
    """Payload of ``PanelManager.panel_resized``."""

    panel_id: str
    width: float
    height: float


class Signal:
    """Plain observer list with the ``connect``/``emit`` vocabulary of pyqtSignal.

    The engine stays usable without a Qt event loop; the Qt host relays these
    into real Qt signals.
    """

    def __init__(self, name: str = ""):
        self.name = name
        self._callbacks = []

    def connect(self, callback):
        if callback not in self._callbacks:
            self._callbacks.append(callback)

    def disconnect(self, callback):
        try:
            self._callbacks.remove(callback)
        except ValueError:
            pass

    def emit(self, *args):
        for callback in list(self._callbacks):
            try:
                callback(*args)
            except Exception:
                # subscriber errors never reach the engine
                logger.exception("Subscriber of %s failed", self.name or "signal")

    def __len__(self):
        return len(self._callbacks)
