"""Open links in the user's browser."""

import logging

from PySide6.QtCore import QUrl
from PySide6.QtGui import QDesktopServices

logger = logging.getLogger(__name__)


def open_url(url: str) -> None:
    """Fire-and-forget; a failure is logged and otherwise ignored."""
    if not QDesktopServices.openUrl(QUrl(url)):
        logger.warning("Could not open external link %s", url)
