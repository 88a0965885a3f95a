from imageflasher.layout import (
    ANALYTICS_ALERT,
    FLASH_STEP,
    PROMO_PANEL,
    REDUCED_FLASHING_INFOS,
    SETTINGS_OVERLAY,
    STEPS_ROW,
    SUCCESS_VIEW,
    plan_layout,
)
from imageflasher.state import PageViewState, Phase
from imageflasher.viewmodel import SelectionSnapshot

URL = "https://efp.balena.io/index.html?borderRight=false&darkBackground=true"


def make_state(flashing=False, **kwargs):
    return PageViewState(selection=SelectionSnapshot(is_flashing=flashing), **kwargs)


def test_idle_main_page():
    plan = plan_layout(make_state(analytics_alert_visible=False))
    assert plan.layers == (STEPS_ROW, FLASH_STEP)
    assert plan.split_view is False


def test_promo_requires_url_and_flashing():
    assert not plan_layout(make_state(flashing=True)).shows(PROMO_PANEL)
    assert not plan_layout(make_state(flashing=False, promo_url=URL)).shows(PROMO_PANEL)
    assert plan_layout(make_state(flashing=True, promo_url=URL)).shows(PROMO_PANEL)


def test_steps_row_stays_until_panel_reports_visible():
    plan = plan_layout(make_state(flashing=True, promo_url=URL))
    assert plan.shows(STEPS_ROW)
    assert not plan.shows(REDUCED_FLASHING_INFOS)


def test_split_view_swaps_steps_for_summary():
    plan = plan_layout(make_state(flashing=True, promo_url=URL, promo_panel_visible=True))
    assert plan.split_view is True
    assert not plan.shows(STEPS_ROW)
    assert plan.shows(REDUCED_FLASHING_INFOS)
    assert plan.shows(FLASH_STEP)


def test_panel_visible_but_not_flashing_is_not_split():
    plan = plan_layout(make_state(flashing=False, promo_panel_visible=True))
    assert plan.split_view is False
    assert plan.shows(STEPS_ROW)


def test_settings_overlay_is_topmost():
    plan = plan_layout(make_state(flashing=True, promo_url=URL, settings_visible=True))
    assert plan.layers[-1] == SETTINGS_OVERLAY


def test_success_phase_renders_only_success_view():
    state = make_state(flashing=True, promo_url=URL, promo_panel_visible=True, phase=Phase.SUCCESS)
    assert plan_layout(state).layers == (SUCCESS_VIEW,)
    assert plan_layout(state).split_view is False


def test_success_phase_still_allows_settings():
    state = make_state(phase=Phase.SUCCESS, settings_visible=True)
    assert plan_layout(state).layers == (SUCCESS_VIEW, SETTINGS_OVERLAY)


def test_alert_follows_flag():
    assert plan_layout(make_state()).shows(ANALYTICS_ALERT)
    assert not plan_layout(make_state(analytics_alert_visible=False)).shows(ANALYTICS_ALERT)
