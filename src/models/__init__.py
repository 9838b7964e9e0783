from src.models.config import HiderConfig
from src.models.cooldown import (
    ChargeInfo,
    Comparison,
    CooldownEvent,
    CooldownInfo,
    Verdict,
)
from src.models.secret import (
    REDACTED,
    HostValue,
    Plain,
    Redacted,
    is_plain_number,
    plain_or_none,
    read_value,
)

__all__ = [
    "ChargeInfo",
    "Comparison",
    "CooldownEvent",
    "CooldownInfo",
    "HiderConfig",
    "HostValue",
    "Plain",
    "REDACTED",
    "Redacted",
    "Verdict",
    "is_plain_number",
    "plain_or_none",
    "read_value",
]
