from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class Verdict(Enum):
    HIDE = "hide"
    SHOW = "show"

    @property
    def hides(self) -> bool:
        return self is Verdict.HIDE

    @classmethod
    def from_gcd_flag(cls, on_gcd: bool) -> Verdict:
        return cls.HIDE if on_gcd else cls.SHOW


class Comparison(Enum):
    """Tri-state answer of an opaque duration comparison."""
    ABOVE = "above"
    AT_OR_BELOW = "at_or_below"
    INDETERMINATE = "indeterminate"


@dataclass(frozen=True)
class CooldownEvent:
    """One host cooldown update, as seen by a frame's set-cooldown observer.

    Every field may be None (absent) or a Redacted host value.
    """
    spell_id: Any = None
    raw_duration: Any = None
    duration_handle: Optional[object] = None


@dataclass(frozen=True)
class CooldownInfo:
    """Result of the host's spell cooldown query."""
    is_on_gcd: Any = None
    duration: Any = None


@dataclass(frozen=True)
class ChargeInfo:
    """Result of the host's spell charge query."""
    current: Any = None
    maximum: Any = None
