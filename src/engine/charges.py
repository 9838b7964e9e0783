"""Remembers which spells have more than one charge.

Charge counts are only readable outside the restricted state, so the cache is
filled whenever they happen to be plain and consulted when they are not.
Entries are only ever added; a loadout change clears the whole cache because
a new loadout can put different spells behind the same slots.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from src.host.api import call_host, read
from src.models import ChargeInfo, is_plain_number, plain_or_none

logger = logging.getLogger(__name__)


def plain_charges(host: object, info: Optional[ChargeInfo]) -> Optional[tuple[float, float]]:
    """(current, maximum) when both counts are plainly readable, else None."""
    if info is None:
        return None
    current = read(host, getattr(info, "current", None))
    maximum = read(host, getattr(info, "maximum", None))
    if not (is_plain_number(current) and is_plain_number(maximum)):
        return None
    return current.value, maximum.value


class ChargeTracker:
    def __init__(self) -> None:
        self._known: set[int] = set()

    def is_known(self, spell_id: Any) -> bool:
        return isinstance(spell_id, int) and spell_id in self._known

    def record(self, spell_id: Any) -> None:
        if not isinstance(spell_id, int) or isinstance(spell_id, bool):
            return
        if spell_id not in self._known:
            self._known.add(spell_id)
            logger.debug("Spell %s recorded as a charge ability", spell_id)

    def clear(self) -> None:
        if self._known:
            logger.debug("Charge cache cleared (%d entries)", len(self._known))
        self._known.clear()

    def __contains__(self, spell_id: Any) -> bool:
        return self.is_known(spell_id)

    def __len__(self) -> int:
        return len(self._known)

    def observe(self, host: object, spell_id: Any) -> bool:
        """Record spell_id if its charges are plainly readable and max > 1. Returns True if recorded."""
        sid = plain_or_none(read(host, spell_id))
        if not isinstance(sid, int) or isinstance(sid, bool):
            return False
        charges = plain_charges(host, call_host(host, "get_spell_charges", sid))
        if charges is None:
            return False
        _, maximum = charges
        if maximum > 1:
            self.record(sid)
            return True
        return False

    def prescan(self, host: object, spell_ids: Optional[Iterable[Any]] = None) -> int:
        """Observe every spell the player knows. Returns the number of charge spells found."""
        if spell_ids is None:
            spell_ids = call_host(host, "known_spell_ids") or []
        found = 0
        for spell_id in spell_ids:
            if self.observe(host, spell_id):
                found += 1
        logger.debug("Charge prescan: %d charge abilities, %d cached", found, len(self._known))
        return found
