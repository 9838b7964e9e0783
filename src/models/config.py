from __future__ import annotations

from dataclasses import dataclass


@dataclass
class HiderConfig:
    """Static add-on configuration. Read once at startup; not reconfigured at runtime."""
    # Durations at or below this are GCD-sized (seconds)
    gcd_threshold: float = 2.0
    # Recharge durations at or below this count as "fully charged"
    near_zero_threshold: float = 0.1
    # Spell whose cooldown is the live GCD baseline
    gcd_spell_id: int = 61304
    # Readable spell cooldown: below min_cooldown there is nothing to hide,
    # min_cooldown..gcd_floor_max is always GCD
    min_cooldown: float = 0.5
    gcd_floor_max: float = 1.0
    baseline_tolerance: float = 0.01
    # Raw event duration: looser window to absorb jitter at the moment of the update
    raw_gcd_ceiling: float = 1.8
    raw_baseline_tolerance: float = 0.05
    # Suppress the edge flash along with the sweep
    hide_edge: bool = True
    poll_interval_ms: int = 500
    rescan_delay_ms: int = 100
    # Diagnostic logging of every suppressed cooldown
    debug: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> HiderConfig:
        classification = data.get("classification", {}) or {}
        scanner = data.get("scanner", {}) or {}
        display = data.get("display", {}) or {}
        return cls(
            gcd_threshold=float(classification.get("gcd_threshold", 2.0)),
            near_zero_threshold=float(classification.get("near_zero_threshold", 0.1)),
            gcd_spell_id=int(classification.get("gcd_spell_id", 61304)),
            min_cooldown=float(classification.get("min_cooldown", 0.5)),
            gcd_floor_max=float(classification.get("gcd_floor_max", 1.0)),
            baseline_tolerance=float(classification.get("baseline_tolerance", 0.01)),
            raw_gcd_ceiling=float(classification.get("raw_gcd_ceiling", 1.8)),
            raw_baseline_tolerance=float(
                classification.get("raw_baseline_tolerance", 0.05)
            ),
            hide_edge=bool(display.get("hide_edge", True)),
            poll_interval_ms=max(1, int(scanner.get("poll_interval_ms", 500) or 500)),
            rescan_delay_ms=max(0, int(scanner.get("rescan_delay_ms", 100) or 0)),
            debug=bool(data.get("debug", False)),
        )

    def to_dict(self) -> dict:
        """Serialize to dict for JSON config file (round-trip with from_dict)."""
        return {
            "classification": {
                "gcd_threshold": self.gcd_threshold,
                "near_zero_threshold": self.near_zero_threshold,
                "gcd_spell_id": self.gcd_spell_id,
                "min_cooldown": self.min_cooldown,
                "gcd_floor_max": self.gcd_floor_max,
                "baseline_tolerance": self.baseline_tolerance,
                "raw_gcd_ceiling": self.raw_gcd_ceiling,
                "raw_baseline_tolerance": self.raw_baseline_tolerance,
            },
            "display": {"hide_edge": self.hide_edge},
            "scanner": {
                "poll_interval_ms": self.poll_interval_ms,
                "rescan_delay_ms": self.rescan_delay_ms,
            },
            "debug": self.debug,
        }
