"""Host value model: every value read from the host is either Plain or Redacted.

The host may withhold numbers during restricted states. A withheld value can
only be passed back into host primitives or tested for opacity; it can never be
read, compared or used in arithmetic. Redacted enforces that by raising on
every such operation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Plain(Generic[T]):
    """A host value that was plainly readable when it was fetched."""

    value: T


class Redacted:
    """Opaque host value. Only host primitives may look inside."""

    __slots__ = ("_payload",)

    def __init__(self, payload: Any = None):
        object.__setattr__(self, "_payload", payload)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Redacted values are immutable")

    def _refuse(self, *_args: Any) -> Any:
        raise TypeError("Redacted host values cannot be read or compared")

    __eq__ = _refuse
    __ne__ = _refuse
    __lt__ = _refuse
    __le__ = _refuse
    __gt__ = _refuse
    __ge__ = _refuse
    __bool__ = _refuse
    __float__ = _refuse
    __int__ = _refuse
    __index__ = _refuse
    __add__ = _refuse
    __sub__ = _refuse
    __mul__ = _refuse
    __truediv__ = _refuse

    __hash__ = object.__hash__

    def __repr__(self) -> str:
        return "<Redacted>"


REDACTED = Redacted()

HostValue = Union[Plain[T], Redacted, None]


def read_value(raw: Any, is_secret: Optional[Callable[[Any], bool]] = None) -> HostValue:
    """Classify a raw host value once, at the boundary.

    None stays None (absent). Anything the host flags as secret, and any
    Redacted instance, becomes REDACTED. Everything else is wrapped in Plain.
    When the host has no opacity primitive it has no redaction, so every
    non-Redacted value is plain.
    """
    if raw is None:
        return None
    if isinstance(raw, Redacted):
        return REDACTED
    if is_secret is not None:
        try:
            secret = bool(is_secret(raw))
        except Exception:
            return REDACTED
        if secret:
            return REDACTED
    return Plain(raw)


def plain_or_none(value: HostValue) -> Any:
    """Unwrap a Plain value; Redacted and absent both give None."""
    if isinstance(value, Plain):
        return value.value
    return None


def is_plain_number(value: HostValue) -> bool:
    return isinstance(value, Plain) and isinstance(value.value, (int, float)) and not isinstance(
        value.value, bool
    )
