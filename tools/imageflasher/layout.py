"""Which surfaces of the main page are visible, evaluated once per render.

The rules are kept as an ordered table so precedence is explicit and can be
tested without any widgets. Order is bottom-to-top paint order: the
settings overlay is last and therefore drawn over everything else.
"""

from dataclasses import dataclass
from typing import Callable

from .state import PageViewState, Phase

SUCCESS_VIEW = "success_view"
STEPS_ROW = "steps_row"
REDUCED_FLASHING_INFOS = "reduced_flashing_infos"
PROMO_PANEL = "promo_panel"
FLASH_STEP = "flash_step"
ANALYTICS_ALERT = "analytics_alert"
SETTINGS_OVERLAY = "settings_overlay"


def _split_view(state: PageViewState) -> bool:
    return state.selection.is_flashing and state.promo_panel_visible


def _main(state: PageViewState) -> bool:
    return state.phase == Phase.MAIN


LAYOUT_RULES: tuple[tuple[str, Callable[[PageViewState], bool]], ...] = (
    (SUCCESS_VIEW, lambda s: s.phase == Phase.SUCCESS),
    (STEPS_ROW, lambda s: _main(s) and not _split_view(s)),
    (REDUCED_FLASHING_INFOS, lambda s: _main(s) and _split_view(s)),
    (PROMO_PANEL, lambda s: _main(s) and s.selection.is_flashing and bool(s.promo_url)),
    (FLASH_STEP, _main),
    (ANALYTICS_ALERT, lambda s: _main(s) and s.analytics_alert_visible),
    (SETTINGS_OVERLAY, lambda s: s.settings_visible),
)


@dataclass(frozen=True)
class LayoutPlan:
    layers: tuple[str, ...]
    split_view: bool

    def shows(self, surface: str) -> bool:
        return surface in self.layers


def plan_layout(state: PageViewState) -> LayoutPlan:
    layers = tuple(name for name, rule in LAYOUT_RULES if rule(state))
    return LayoutPlan(layers=layers, split_view=_main(state) and _split_view(state))
