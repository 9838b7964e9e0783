"""Capability probing and guarded calls into the host.

Every host query or primitive may be missing in the running host version, and
any call may raise. Nothing here propagates: a missing capability or a failed
call both come back as None.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from src.models import HostValue, read_value

logger = logging.getLogger(__name__)


def capability(host: object, name: str) -> Optional[Callable[..., Any]]:
    """Return the host's callable named `name`, or None if it does not exist."""
    if host is None:
        return None
    fn = getattr(host, name, None)
    return fn if callable(fn) else None


def has_capability(host: object, name: str) -> bool:
    return capability(host, name) is not None


def guarded_call(fn: Optional[Callable[..., Any]], *args: Any) -> Any:
    """Call fn(*args); a missing fn or a raised exception both give None."""
    if fn is None:
        return None
    try:
        return fn(*args)
    except Exception as e:
        logger.debug("Host call %s failed: %s", getattr(fn, "__name__", fn), e)
        return None


def call_host(host: object, name: str, *args: Any) -> Any:
    return guarded_call(capability(host, name), *args)


def read(host: object, raw: Any) -> HostValue:
    """Classify a raw host value as Plain / Redacted / absent using the host's opacity test."""
    return read_value(raw, capability(host, "is_secret"))
