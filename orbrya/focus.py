import logging

from .panels import PanelRegistry

logger = logging.getLogger(__name__)


class FocusStack:
    """Hands out stacking order and tracks the single focused panel.

    ``top`` only ever grows for the lifetime of the stack, so the most
    recently focused panel always carries the highest z-index.
    """

    def __init__(self, registry: PanelRegistry, base_z_index: int = 100):
        self.registry = registry
        self.top = int(base_z_index)

    def allocate(self) -> int:
        self.top += 1
        return self.top

    def raise_panel(self, panel_id: str) -> bool:
        """Put the panel on top without touching focus."""
        panel = self.registry.get(panel_id)
        if panel is None:
            return False
        panel.z_index = self.allocate()
        return True

    def focus(self, panel_id: str) -> bool:
        panel = self.registry.get(panel_id)
        if panel is None:
            logger.debug("focus ignored, unknown panel %s", panel_id)
            return False
        for other in self.registry:
            other.state.focused = False
        panel.state.focused = True
        panel.z_index = self.allocate()
        return True

    @property
    def focused(self):
        for panel in self.registry:
            if panel.state.focused:
                return panel.id
        return None
