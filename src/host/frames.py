"""Qt-side model of the host's cooldown viewer frames.

Setters update state first and emit afterwards, so connected observers run as
post-hooks: they see the value the caller just wrote and may overwrite it.
"""

from __future__ import annotations

from typing import Any, Optional

from PyQt6.QtCore import QObject, pyqtSignal


class CooldownFrame(QObject):
    """A cooldown sweep widget with two draw flags (swipe, edge)."""

    cooldown_set = pyqtSignal(object, object)  # start, duration (either may be Redacted)
    cooldown_set_from_duration = pyqtSignal(object)  # duration handle
    draw_swipe_changed = pyqtSignal(bool)
    draw_edge_changed = pyqtSignal(bool)

    def __init__(self, name: str = "", parent: Optional[QObject] = None):
        super().__init__(parent)
        self.setObjectName(name)
        self._draw_swipe = True
        self._draw_edge = True
        self.start: Any = None
        self.duration: Any = None
        self.duration_handle: Any = None
        # Set while an observer forces a flag off so the flag observers ignore that write
        self.suppressing = False

    @property
    def draw_swipe(self) -> bool:
        return self._draw_swipe

    @property
    def draw_edge(self) -> bool:
        return self._draw_edge

    def set_cooldown(self, start: Any, duration: Any) -> None:
        self.start = start
        self.duration = duration
        self.duration_handle = None
        self.cooldown_set.emit(start, duration)

    def set_cooldown_from_duration(self, handle: Any) -> None:
        self.start = None
        self.duration = None
        self.duration_handle = handle
        self.cooldown_set_from_duration.emit(handle)

    def set_draw_swipe(self, enabled: bool) -> None:
        self._draw_swipe = bool(enabled)
        self.draw_swipe_changed.emit(self._draw_swipe)

    def set_draw_edge(self, enabled: bool) -> None:
        self._draw_edge = bool(enabled)
        self.draw_edge_changed.emit(self._draw_edge)


class CooldownIcon(QObject):
    """A tracked-ability icon: owns one CooldownFrame and knows its spell."""

    def __init__(
        self,
        spell_id: Any = None,
        name: str = "",
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self.setObjectName(name)
        self.spell_id = spell_id
        self.cooldown = CooldownFrame(f"{name}.Cooldown" if name else "", self)
        # True when the host last drove this icon's cooldown from the charge timer
        self.was_set_from_charges = False

    def get_spell_id(self) -> Any:
        return self.spell_id


class IconGroup(QObject):
    """One level of grouping inside a viewer (e.g. a row of icons)."""

    def __init__(self, name: str = "", parent: Optional[QObject] = None):
        super().__init__(parent)
        self.setObjectName(name)
        self._items: list[QObject] = []

    def add(self, item: QObject) -> QObject:
        self._items.append(item)
        return item

    def children_items(self) -> list[QObject]:
        return list(self._items)


class ViewerContainer(IconGroup):
    """A tracked-ability display container. Emits `shown` when it becomes visible."""

    shown = pyqtSignal()

    def __init__(self, name: str = "", parent: Optional[QObject] = None):
        super().__init__(name, parent)
        self._visible = False

    @property
    def visible(self) -> bool:
        return self._visible

    def show(self) -> None:
        self._visible = True
        self.shown.emit()

    def hide(self) -> None:
        self._visible = False
