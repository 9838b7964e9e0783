"""Finds cooldown icons under the tracked-ability viewers.

Icons are children of a viewer, or of a group one level down. A child counts as
an icon when it carries a `cooldown` sub-frame. Each icon is handed to the hook
manager and its spell to the charge tracker.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Optional

from src.engine import ChargeTracker
from src.hooks.frame_hooks import FrameHookManager, is_cooldown_frame
from src.host.api import call_host, capability, guarded_call
from src.models import HiderConfig

logger = logging.getLogger(__name__)


def _child_items(node: Any) -> list[Any]:
    return guarded_call(capability(node, "children_items")) or []


def iter_icons(viewer: Any) -> Iterator[Any]:
    """Yield cooldown-capable icons in a viewer, including one nested group level."""
    for child in _child_items(viewer):
        if is_cooldown_frame(getattr(child, "cooldown", None)):
            yield child
            continue
        for grandchild in _child_items(child):
            if is_cooldown_frame(getattr(grandchild, "cooldown", None)):
                yield grandchild


class ViewerScanner:
    def __init__(
        self,
        host: object,
        hooks: FrameHookManager,
        charges: ChargeTracker,
        scheduler: Any,
        config: Optional[HiderConfig] = None,
    ):
        self._host = host
        self._hooks = hooks
        self._charges = charges
        self._scheduler = scheduler
        self._config = config or HiderConfig()
        self._monitored: set[Any] = set()
        self._poll_timer: Optional[Any] = None

    @property
    def polling(self) -> bool:
        return self._poll_timer is not None

    def is_monitored(self, viewer: Any) -> bool:
        return viewer in self._monitored

    def scan(self) -> int:
        """Hook every icon currently present. Returns the number of newly hooked frames."""
        newly_hooked = 0
        for viewer in call_host(self._host, "viewers") or []:
            self._monitor(viewer)
            for icon in iter_icons(viewer):
                if self._hooks.hook_icon(icon):
                    newly_hooked += 1
                spell_id = guarded_call(capability(icon, "get_spell_id"))
                if spell_id is not None:
                    self._charges.observe(self._host, spell_id)
        if newly_hooked:
            logger.debug("Scan hooked %d new cooldown frames", newly_hooked)
        return newly_hooked

    def schedule_scan(self, delay_ms: Optional[int] = None) -> None:
        """Rescan after the host has had time to populate its viewers."""
        if delay_ms is None:
            delay_ms = self._config.rescan_delay_ms
        self._scheduler.call_later(delay_ms, self.scan)

    def start_polling(self) -> None:
        if self._poll_timer is not None:
            return
        self._poll_timer = self._scheduler.repeat(self._config.poll_interval_ms, self.scan)
        logger.debug("Viewer polling started (%d ms)", self._config.poll_interval_ms)

    def stop_polling(self) -> None:
        if self._poll_timer is None:
            return
        self._poll_timer.stop()
        self._poll_timer = None
        logger.debug("Viewer polling stopped")

    def _monitor(self, viewer: Any) -> None:
        if viewer in self._monitored:
            return
        shown = getattr(viewer, "shown", None)
        if shown is None:
            return
        self._monitored.add(viewer)
        shown.connect(lambda: self.schedule_scan())
