"""GCD classification engine — decides whether a cooldown update is only the global cooldown.

Inputs can be absent or redacted at any point, so the decision walks a fixed
list of tiers from most authoritative to most available, and the first tier
that can answer wins:

1. charge pre-check  (a ticking recharge is never GCD)
2. the host's direct "is on GCD" flag
3. the spell's readable cooldown duration
4. the raw duration carried by the event
5. opaque curve comparison of the duration handle
6. nothing determinable

Every uncertain path ends in SHOW: briefly showing a GCD sweep is cosmetic,
hiding a real cooldown is not.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from src.engine.charges import ChargeTracker, plain_charges
from src.engine.comparator import OpaqueComparator
from src.host.api import call_host, read
from src.models import (
    Comparison,
    CooldownEvent,
    HiderConfig,
    Plain,
    Redacted,
    Verdict,
    is_plain_number,
    plain_or_none,
)

logger = logging.getLogger(__name__)


class GcdClassifier:
    """Stateless apart from the shared ChargeTracker and the cached comparators."""

    def __init__(
        self,
        host: object,
        config: Optional[HiderConfig] = None,
        charges: Optional[ChargeTracker] = None,
    ):
        self._host = host
        self._config = config or HiderConfig()
        self.charges = charges if charges is not None else ChargeTracker()
        self._gcd_comparator = OpaqueComparator(host, self._config.gcd_threshold)
        self._zero_comparator = OpaqueComparator(host, self._config.near_zero_threshold)

    @property
    def config(self) -> HiderConfig:
        return self._config

    def classify_values(
        self,
        spell_id: Any = None,
        duration_handle: Any = None,
        raw_duration: Any = None,
    ) -> Verdict:
        return self.classify(CooldownEvent(spell_id, raw_duration, duration_handle))

    def classify(self, event: CooldownEvent) -> Verdict:
        try:
            return self._classify(event)
        except Exception as e:
            logger.debug("Classification failed, showing sweep: %s", e, exc_info=True)
            return Verdict.SHOW

    def _classify(self, event: CooldownEvent) -> Verdict:
        spell_id = plain_or_none(read(self._host, event.spell_id))
        if not isinstance(spell_id, int) or isinstance(spell_id, bool):
            spell_id = None

        if spell_id is not None:
            verdict = self._charge_verdict(spell_id)
            if verdict is not None:
                return verdict
            verdict = self._spell_cooldown_verdict(spell_id)
            if verdict is not None:
                return verdict

        verdict = self._raw_duration_verdict(event.raw_duration)
        if verdict is not None:
            return verdict

        handle = event.duration_handle
        if handle is None and spell_id is not None:
            handle = call_host(self._host, "get_cooldown_duration", spell_id)
        verdict = self._curve_verdict(handle)
        if verdict is not None:
            return verdict

        return Verdict.SHOW

    # --- tier 1 ---

    def _charge_verdict(self, spell_id: int) -> Optional[Verdict]:
        charges = plain_charges(self._host, call_host(self._host, "get_spell_charges", spell_id))
        if charges is not None:
            current, maximum = charges
            if maximum <= 1:
                return None
            self.charges.record(spell_id)
            if current < maximum:
                return Verdict.SHOW
            return Verdict.HIDE

        if not self.charges.is_known(spell_id):
            return None
        # Charges are withheld but this is a known charge spell. Whatever the
        # recharge handle says, show: an active recharge must stay visible, and
        # a near-zero one is left alone rather than clipping its last moment.
        handle = call_host(self._host, "get_charge_duration", spell_id)
        if handle is None:
            return Verdict.SHOW
        result = self._zero_comparator.compare(handle)
        logger.debug("Spell %s recharge vs near-zero: %s", spell_id, result.value)
        return Verdict.SHOW

    # --- tiers 2 and 3 ---

    def _gcd_baseline(self) -> Optional[float]:
        info = call_host(self._host, "get_spell_cooldown", self._config.gcd_spell_id)
        if info is None:
            return None
        duration = read(self._host, getattr(info, "duration", None))
        if is_plain_number(duration):
            return float(duration.value)
        return None

    def _spell_cooldown_verdict(self, spell_id: int) -> Optional[Verdict]:
        info = call_host(self._host, "get_spell_cooldown", spell_id)
        if info is None:
            return None

        on_gcd = read(self._host, getattr(info, "is_on_gcd", None))
        if isinstance(on_gcd, Plain) and isinstance(on_gcd.value, bool):
            return Verdict.from_gcd_flag(on_gcd.value)
        if not isinstance(on_gcd, Redacted):
            return None

        duration = read(self._host, getattr(info, "duration", None))
        if not is_plain_number(duration):
            return None
        d = float(duration.value)
        cfg = self._config
        if d < cfg.min_cooldown:
            return Verdict.SHOW
        if d <= cfg.gcd_floor_max:
            return Verdict.HIDE
        baseline = self._gcd_baseline()
        if baseline is not None and abs(d - baseline) <= cfg.baseline_tolerance:
            return Verdict.HIDE
        return Verdict.SHOW

    # --- tier 4 ---

    def _raw_duration_verdict(self, raw_duration: Any) -> Optional[Verdict]:
        duration = read(self._host, raw_duration)
        if not is_plain_number(duration):
            return None
        d = float(duration.value)
        cfg = self._config
        if d <= 0:
            return Verdict.SHOW
        if d <= cfg.raw_gcd_ceiling:
            return Verdict.HIDE
        baseline = self._gcd_baseline()
        if baseline is None:
            return Verdict.HIDE if d <= cfg.gcd_threshold else Verdict.SHOW
        if abs(d - baseline) <= cfg.raw_baseline_tolerance:
            return Verdict.HIDE
        return Verdict.SHOW

    # --- tier 5 ---

    def _curve_verdict(self, handle: Any) -> Optional[Verdict]:
        if handle is None:
            return None
        result = self._gcd_comparator.compare(handle)
        if result is Comparison.ABOVE:
            return Verdict.SHOW
        if result is Comparison.AT_OR_BELOW:
            return Verdict.HIDE
        return None
