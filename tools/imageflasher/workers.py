"""QThread workers for operations that must not block the UI thread."""

import logging

from PySide6.QtCore import QThread, QUrl, QUrlQuery, Signal

from .resources import (
    DEFAULT_FEATURED_PROJECT_ENDPOINT,
    FEATURED_PROJECT_DISPLAY_PARAMS,
    FEATURED_PROJECT_ENDPOINT_KEY,
)

logger = logging.getLogger(__name__)


def build_featured_project_url(endpoint) -> str:
    """Endpoint (or the default) with the display-hint query parameters."""
    if endpoint is None or endpoint == "":
        endpoint = DEFAULT_FEATURED_PROJECT_ENDPOINT
    if not isinstance(endpoint, str):
        raise ValueError(f"Featured project endpoint must be a string, got {endpoint!r}")

    url = QUrl(endpoint, QUrl.ParsingMode.StrictMode)
    if not url.isValid() or url.isRelative() or not url.host():
        raise ValueError(f"Invalid featured project endpoint: {endpoint!r}")

    query = QUrlQuery(url)
    for key, value in FEATURED_PROJECT_DISPLAY_PARAMS:
        query.addQueryItem(key, value)
    url.setQuery(query)
    return url.toString()


class FeaturedProjectWorker(QThread):
    """Resolves the promo panel URL from settings.

    Any failure is reported on ``failed`` and otherwise ignored: the promo
    panel is optional and simply never shows.
    """

    finished = Signal(str)
    failed = Signal(str)

    def __init__(self, settings, parent=None):
        super().__init__(parent)
        self.settings = settings

    def run(self):
        try:
            endpoint = self.settings.get(FEATURED_PROJECT_ENDPOINT_KEY)
            url = build_featured_project_url(endpoint)
        except Exception as e:
            logger.warning("Featured project unavailable: %s", e)
            self.failed.emit(str(e))
            return
        logger.debug("Featured project URL: %s", url)
        self.finished.emit(url)
