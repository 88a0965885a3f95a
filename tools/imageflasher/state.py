"""Page-owned view state and the main/success phase machine."""

from dataclasses import dataclass, field
from enum import Enum

from .errors import PhaseTransitionError
from .viewmodel import SelectionSnapshot


class Phase(str, Enum):
    MAIN = "main"
    SUCCESS = "success"


_ALLOWED: dict[Phase, set[Phase]] = {
    Phase.MAIN: {Phase.SUCCESS},
    Phase.SUCCESS: {Phase.MAIN},
}


def check_transition(current: Phase, target: Phase) -> None:
    if target not in _ALLOWED.get(current, set()):
        raise PhaseTransitionError(current, target)


@dataclass
class PageViewState:
    """Mutable state owned by the main page.

    ``selection`` is replaced wholesale by the store bridge, never patched.
    ``promo_panel_visible`` is written only by the promo panel's own
    visibility report.
    """

    phase: Phase = Phase.MAIN
    promo_panel_visible: bool = False
    settings_visible: bool = False
    promo_url: str | None = None
    analytics_alert_visible: bool = True
    selection: SelectionSnapshot = field(default_factory=SelectionSnapshot)
