"""An in-process stand-in for the game client.

Implements every host capability the add-on probes for: spell cooldown and
charge queries, duration handles, step curves, the redaction primitives, the
event feed, and the tracked-ability viewers. While the sandbox is in its
restricted state, the categories listed in `redacted_categories` come back as
Redacted values, the same way the real client withholds them in combat.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import time
from typing import Any, Iterable, Optional

import numpy as np

from src.host.events import HostEvents
from src.host.frames import CooldownIcon, ViewerContainer
from src.models import ChargeInfo, CooldownInfo, Redacted

logger = logging.getLogger(__name__)

GCD_SPELL_ID = 61304


@dataclass
class SpellState:
    """Mutable per-spell state held by the sandbox."""
    name: str = ""
    duration: float = 0.0
    on_gcd: bool = False
    max_charges: Optional[int] = None
    charges: Optional[int] = None
    recharge: float = 0.0


class DurationHandle:
    """Host duration object. Only the sandbox reads the seconds inside."""

    __slots__ = ("_remaining",)

    def __init__(self, remaining: float):
        self._remaining = float(remaining)

    def __repr__(self) -> str:
        return "<DurationHandle>"


class StepCurve:
    """Monotonic step curve: f(x) is the y of the last control point strictly left of x.

    At or before the first control point, f(x) is the first y.
    """

    def __init__(self, points: Iterable[tuple[float, float]]):
        pts = sorted((float(x), float(y)) for x, y in points)
        if not pts:
            raise ValueError("step curve needs at least one control point")
        arr = np.asarray(pts, dtype=np.float64)
        self._xs = arr[:, 0]
        self._ys = arr[:, 1]

    def evaluate(self, x: float) -> float:
        idx = int(np.searchsorted(self._xs, float(x), side="left")) - 1
        idx = max(0, min(idx, len(self._ys) - 1))
        return float(self._ys[idx])


def _unseal(value: Any) -> Any:
    if isinstance(value, Redacted):
        return object.__getattribute__(value, "_payload")
    return value


class SandboxHost:
    """Host environment with a spell table, viewers and a restricted (combat) state."""

    def __init__(self, redacted_categories: Iterable[str] = ("gcd_flag", "cooldown", "charges")):
        self.events = HostEvents()
        self.spells: dict[int, SpellState] = {GCD_SPELL_ID: SpellState(name="Global Cooldown")}
        self.redacted_categories = set(redacted_categories)
        self._restricted = False
        self._viewers: list[ViewerContainer] = []

    # --- state control ---

    def add_spell(self, spell_id: int, state: Optional[SpellState] = None) -> SpellState:
        state = state or SpellState(name=f"Spell {spell_id}")
        self.spells[int(spell_id)] = state
        return state

    def set_gcd(self, duration: float) -> None:
        self.spells[GCD_SPELL_ID].duration = float(duration)

    def add_viewer(self, viewer: ViewerContainer) -> ViewerContainer:
        self._viewers.append(viewer)
        return viewer

    def enter_world(self) -> None:
        self.events.world_entered.emit()

    def change_loadout(self) -> None:
        self.events.loadout_changed.emit()

    def enter_restricted(self) -> None:
        self._restricted = True
        logger.debug("Sandbox entering restricted state")
        self.events.restricted_entered.emit()

    def leave_restricted(self) -> None:
        self._restricted = False
        logger.debug("Sandbox leaving restricted state")
        self.events.restricted_left.emit()

    def _maybe_redact(self, category: str, value: Any) -> Any:
        if value is None:
            return None
        if self._restricted and category in self.redacted_categories:
            return Redacted(value)
        return value

    # --- queries ---

    def in_restricted_state(self) -> bool:
        return self._restricted

    def known_spell_ids(self) -> list[int]:
        return [sid for sid in self.spells if sid != GCD_SPELL_ID]

    def get_spell_name(self, spell_id: Any) -> Optional[str]:
        spell = self.spells.get(_unseal(spell_id))
        return spell.name if spell else None

    def get_spell_cooldown(self, spell_id: Any) -> Optional[CooldownInfo]:
        spell = self.spells.get(_unseal(spell_id))
        if spell is None:
            return None
        return CooldownInfo(
            is_on_gcd=self._maybe_redact("gcd_flag", spell.on_gcd),
            duration=self._maybe_redact("cooldown", spell.duration),
        )

    def get_spell_charges(self, spell_id: Any) -> Optional[ChargeInfo]:
        spell = self.spells.get(_unseal(spell_id))
        if spell is None or spell.max_charges is None:
            return None
        current = spell.max_charges if spell.charges is None else spell.charges
        return ChargeInfo(
            current=self._maybe_redact("charges", current),
            maximum=self._maybe_redact("charges", spell.max_charges),
        )

    def get_charge_duration(self, spell_id: Any) -> Optional[DurationHandle]:
        spell = self.spells.get(_unseal(spell_id))
        if spell is None or spell.max_charges is None:
            return None
        return DurationHandle(spell.recharge)

    def get_cooldown_duration(self, spell_id: Any) -> Optional[DurationHandle]:
        spell = self.spells.get(_unseal(spell_id))
        if spell is None:
            return None
        return DurationHandle(spell.duration)

    # --- primitives ---

    def create_curve(self, points: Iterable[tuple[float, float]]) -> StepCurve:
        return StepCurve(points)

    def evaluate_duration(self, handle: DurationHandle, curve: StepCurve) -> Any:
        """Evaluate a handle against a curve. Results above zero come back secret."""
        if not isinstance(handle, DurationHandle) or not isinstance(curve, StepCurve):
            raise TypeError("evaluate_duration needs a DurationHandle and a StepCurve")
        y = curve.evaluate(handle._remaining)
        if y > 0:
            return Redacted(y)
        return y

    def secret_when_nonzero(self, value: Any) -> Any:
        if isinstance(value, Redacted):
            return Redacted(_unseal(value))
        if value is None or value == 0:
            return None
        return Redacted(value)

    def is_secret(self, value: Any) -> bool:
        return isinstance(value, Redacted)

    # --- frames ---

    def viewers(self) -> list[ViewerContainer]:
        return list(self._viewers)

    def refresh_icon(self, icon: CooldownIcon) -> None:
        """Push the icon's current cooldown into its frame, the way the client does each update.

        The client re-enables the swipe after setting the cooldown, so suppression
        has to be re-asserted by the flag observers.
        """
        spell = self.spells.get(_unseal(icon.get_spell_id()))
        if spell is None:
            return
        from_charges = (
            spell.max_charges is not None
            and spell.charges is not None
            and spell.charges < spell.max_charges
            and spell.recharge > 0
        )
        icon.was_set_from_charges = from_charges
        duration = spell.recharge if from_charges else spell.duration
        icon.cooldown.set_cooldown(time.monotonic(), self._maybe_redact("cooldown", duration))
        icon.cooldown.set_draw_swipe(True)
        icon.cooldown.set_draw_edge(True)
