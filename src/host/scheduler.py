"""Timer-deferred work on the Qt event loop.

Deferred callbacks are fire-once and never cancelled; everything scheduled
through here is idempotent, so a late or duplicate run only redoes correct work.
"""

from __future__ import annotations

from typing import Callable, Optional

from PyQt6.QtCore import QObject, QTimer


class QtScheduler(QObject):
    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> None:
        QTimer.singleShot(max(0, int(delay_ms)), callback)

    def repeat(self, interval_ms: int, callback: Callable[[], None]) -> QTimer:
        """Start a repeating timer; the caller stops it with timer.stop()."""
        timer = QTimer(self)
        timer.setInterval(max(1, int(interval_ms)))
        timer.timeout.connect(callback)
        timer.start()
        return timer
