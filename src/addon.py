"""Wires the host event feed to the scanner, hooks and charge cache."""

from __future__ import annotations

import logging
from typing import Any, Optional

from src.engine import ChargeTracker, GcdClassifier
from src.hooks import FrameHookManager, ViewerScanner
from src.host.api import call_host
from src.models import HiderConfig

logger = logging.getLogger(__name__)


class GcdSweepHider:
    """Owns all add-on state: charge cache, hooked frames, monitored viewers, comparators."""

    def __init__(self, host: object, scheduler: Any, config: Optional[HiderConfig] = None):
        self._host = host
        self._config = config or HiderConfig()
        self.charges = ChargeTracker()
        self.classifier = GcdClassifier(host, self._config, self.charges)
        self.hooks = FrameHookManager(self.classifier, self._config, host)
        self.scanner = ViewerScanner(host, self.hooks, self.charges, scheduler, self._config)
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    def start(self) -> None:
        if self._started:
            return
        self._started = True
        events = getattr(self._host, "events", None)
        if events is not None:
            events.world_entered.connect(self.on_world_entered)
            events.loadout_changed.connect(self.on_loadout_changed)
            events.restricted_entered.connect(self.on_restricted_entered)
            events.restricted_left.connect(self.on_restricted_left)
            events.spell_data_refreshed.connect(self.on_spell_data_refreshed)
        else:
            logger.warning("Host exposes no event feed; only the initial scan will run")

        self.charges.prescan(self._host)
        self.scanner.scan()
        if call_host(self._host, "in_restricted_state") is True:
            self.scanner.start_polling()
        logger.info("GCD sweep hider loaded (%d frames hooked)", self.hooks.hooked_count)

    def on_world_entered(self) -> None:
        self.charges.prescan(self._host)
        self.scanner.schedule_scan()

    def on_loadout_changed(self) -> None:
        self.charges.clear()
        self.charges.prescan(self._host)
        self.scanner.schedule_scan()

    def on_restricted_entered(self) -> None:
        # Viewers can gain icons in combat without emitting `shown`
        self.scanner.scan()
        self.scanner.start_polling()

    def on_restricted_left(self) -> None:
        self.scanner.stop_polling()
        self.charges.prescan(self._host)
        self.scanner.schedule_scan()

    def on_spell_data_refreshed(self) -> None:
        self.charges.prescan(self._host)
        self.scanner.schedule_scan()
