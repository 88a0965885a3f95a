"""Shared notification stream for the selection and flash stores.

Both stores call :meth:`Store.notify` after every mutation. Observers get a
bare notification and re-read whatever state they need, so it does not
matter which store fired or how notifications interleave.
"""

import logging
from typing import Callable

from PySide6.QtCore import QObject, Signal

logger = logging.getLogger(__name__)


class Store(QObject):
    """Merged change notifications for all externally mutable page state."""

    changed = Signal()

    def notify(self) -> None:
        self.changed.emit()

    def observe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Call ``callback`` on every change. Returns the unsubscribe function."""
        self.changed.connect(callback)
        subscribed = True

        def unsubscribe() -> None:
            nonlocal subscribed
            if not subscribed:
                return
            subscribed = False
            try:
                self.changed.disconnect(callback)
            except (RuntimeError, TypeError):
                # Store already destroyed by Qt
                logger.debug("Store gone before unsubscribe")

        return unsubscribe
