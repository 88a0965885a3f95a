"""Flashing lifecycle and progress, shared with the flashing engine."""

import logging
from dataclasses import dataclass, replace
from enum import Enum

from .errors import FlashStateError
from .store import Store

logger = logging.getLogger(__name__)


class FlashType(str, Enum):
    DECOMPRESSING = "decompressing"
    FLASHING = "flashing"
    VERIFYING = "verifying"
    FINISHED = "finished"


@dataclass(frozen=True)
class FlashSnapshot:
    type: FlashType | None = None
    percentage: float | None = None
    position: int | None = None
    failed: int = 0
    speed: float | None = None
    eta: float | None = None  # seconds


@dataclass(frozen=True)
class FlashResults:
    cancelled: bool = False
    error_code: str | None = None
    successful: int = 0
    failed: int = 0

    @property
    def succeeded(self) -> bool:
        return not self.cancelled and self.error_code is None and self.successful > 0


class FlashState:
    """Owned by the flashing engine; the page only reads it and resets it."""

    def __init__(self, store: Store):
        self._store = store
        self._flashing = False
        self._snapshot = FlashSnapshot()
        self._results: FlashResults | None = None

    def set_flashing_flag(self) -> None:
        self._flashing = True
        self._results = None
        self._snapshot = FlashSnapshot(type=FlashType.FLASHING, percentage=0.0, position=0)
        self._store.notify()

    def set_progress_state(self, **fields) -> None:
        if not self._flashing:
            raise FlashStateError("Cannot set progress state while not flashing")
        percentage = fields.get("percentage")
        if percentage is not None:
            fields["percentage"] = min(100.0, max(0.0, float(percentage)))
        if "type" in fields and fields["type"] is not None:
            fields["type"] = FlashType(fields["type"])
        self._snapshot = replace(self._snapshot, **fields)
        self._store.notify()

    def unset_flashing_flag(self, results: FlashResults) -> None:
        self._flashing = False
        self._results = results
        self._snapshot = replace(
            self._snapshot, type=FlashType.FINISHED, failed=results.failed
        )
        logger.info(
            "Flash ended: successful=%d failed=%d cancelled=%s error=%s",
            results.successful, results.failed, results.cancelled, results.error_code,
        )
        self._store.notify()

    def reset_state(self) -> None:
        self._flashing = False
        self._results = None
        self._snapshot = FlashSnapshot()
        self._store.notify()

    def is_flashing(self) -> bool:
        return self._flashing

    def get_flash_state(self) -> FlashSnapshot:
        return self._snapshot

    def get_flash_results(self) -> FlashResults | None:
        return self._results

    def was_last_flash_cancelled(self) -> bool:
        return bool(self._results and self._results.cancelled)
