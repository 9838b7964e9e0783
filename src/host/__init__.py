from src.host.api import call_host, capability, guarded_call, has_capability, read
from src.host.events import HostEvents
from src.host.frames import CooldownFrame, CooldownIcon, IconGroup, ViewerContainer
from src.host.scheduler import QtScheduler

__all__ = [
    "CooldownFrame",
    "CooldownIcon",
    "HostEvents",
    "IconGroup",
    "QtScheduler",
    "ViewerContainer",
    "call_host",
    "capability",
    "guarded_call",
    "has_capability",
    "read",
]
