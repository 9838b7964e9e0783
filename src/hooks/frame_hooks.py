"""Frame hook manager: instruments cooldown frames and keeps GCD sweeps suppressed.

Each cooldown frame gets four observers, installed once:
  - cooldown_set / cooldown_set_from_duration: classify the update and, on HIDE,
    force the swipe (and edge) off;
  - draw_swipe_changed / draw_edge_changed: when anyone else turns a flag back
    on, classify the frame's last update again and flip it off on HIDE.

Forced writes happen under the frame's `suppressing` latch so the flag
observers do not react to them.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from src.engine import GcdClassifier
from src.host.api import call_host, capability, guarded_call, read
from src.host.frames import CooldownFrame
from src.models import CooldownEvent, HiderConfig, Verdict, plain_or_none

logger = logging.getLogger(__name__)


def is_cooldown_frame(frame: object) -> bool:
    return all(
        hasattr(frame, name)
        for name in ("cooldown_set", "draw_swipe_changed", "set_draw_swipe")
    )


class FrameHookManager:
    def __init__(
        self,
        classifier: GcdClassifier,
        config: Optional[HiderConfig] = None,
        host: object = None,
    ):
        self._classifier = classifier
        self._config = config or classifier.config
        self._host = host
        self._hooked: set[CooldownFrame] = set()
        self._last_event: dict[CooldownFrame, CooldownEvent] = {}

    @property
    def hooked_count(self) -> int:
        return len(self._hooked)

    def is_hooked(self, frame: CooldownFrame) -> bool:
        return frame in self._hooked

    def hook_icon(self, icon: Any) -> bool:
        """Instrument the icon's cooldown frame. Returns False if it was already hooked or has none."""
        frame = getattr(icon, "cooldown", None)
        if frame is None or not is_cooldown_frame(frame):
            return False
        if frame in self._hooked:
            return False
        self._hooked.add(frame)

        frame.cooldown_set.connect(
            lambda _start, duration: self._on_cooldown_set(icon, frame, duration, None)
        )
        if hasattr(frame, "cooldown_set_from_duration"):
            frame.cooldown_set_from_duration.connect(
                lambda handle: self._on_cooldown_set(icon, frame, None, handle)
            )
        frame.draw_swipe_changed.connect(
            lambda enabled: self._on_flag_changed(icon, frame, enabled)
        )
        if hasattr(frame, "draw_edge_changed"):
            frame.draw_edge_changed.connect(
                lambda enabled: self._on_flag_changed(icon, frame, enabled, edge=True)
            )
        logger.debug("Hooked cooldown frame %s", frame.objectName() or frame)
        return True

    def verdict_for(self, icon: Any, event: CooldownEvent) -> Verdict:
        # Cooldowns the host drove from the charge timer are recharges, never GCD
        if getattr(icon, "was_set_from_charges", False) is True:
            return Verdict.SHOW
        return self._classifier.classify(event)

    def apply_suppression(self, frame: CooldownFrame) -> None:
        """Force the swipe (and edge, if configured) off. Safe to call repeatedly."""
        previous = frame.suppressing
        frame.suppressing = True
        try:
            if frame.draw_swipe:
                frame.set_draw_swipe(False)
            if self._config.hide_edge and getattr(frame, "draw_edge", False):
                frame.set_draw_edge(False)
        finally:
            frame.suppressing = previous

    def _on_cooldown_set(
        self, icon: Any, frame: CooldownFrame, duration: Any, handle: Any
    ) -> None:
        try:
            event = CooldownEvent(
                spell_id=guarded_call(capability(icon, "get_spell_id")),
                raw_duration=duration,
                duration_handle=handle,
            )
            self._last_event[frame] = event
            if self.verdict_for(icon, event).hides:
                self.apply_suppression(frame)
                if self._config.debug:
                    self._log_hidden(event)
        except Exception as e:
            logger.debug("Cooldown observer failed: %s", e, exc_info=True)

    def _on_flag_changed(
        self, icon: Any, frame: CooldownFrame, enabled: bool, edge: bool = False
    ) -> None:
        if frame.suppressing or not enabled:
            return
        if edge and not self._config.hide_edge:
            return
        try:
            event = self._last_event.get(frame)
            if event is None:
                return
            if self.verdict_for(icon, event).hides:
                self.apply_suppression(frame)
        except Exception as e:
            logger.debug("Draw-flag observer failed: %s", e, exc_info=True)

    def _log_hidden(self, event: CooldownEvent) -> None:
        name = plain_or_none(read(self._host, call_host(self._host, "get_spell_name", event.spell_id)))
        if name is None:
            name = "?"
        logger.debug(
            "HIDDEN - %s (id %s, dur %s)", name, event.spell_id, event.raw_duration
        )
