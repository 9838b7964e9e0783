"""Host event feed: the game-state transitions the add-on reacts to."""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal


class HostEvents(QObject):
    world_entered = pyqtSignal()
    loadout_changed = pyqtSignal()
    restricted_entered = pyqtSignal()
    restricted_left = pyqtSignal()
    spell_data_refreshed = pyqtSignal()

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
