"""Main page controller: store bridge, phase machine and overlay state.

The controller owns :class:`PageViewState` and is the only thing that
mutates it. Widgets read ``state``, ``gates``, ``layout()`` and
``flash_snapshot()`` on every ``changed`` signal and call the action
methods below in response to user input.
"""

import logging
from typing import Callable

from PySide6.QtCore import QObject, Signal, Slot

from .layout import LayoutPlan, plan_layout
from .resources import HOMEPAGE_URL, PRIVACY_POLICY_URL, SUPPORT_URL
from .state import PageViewState, Phase, check_transition
from .viewmodel import StepGates, gate_steps, project, reduced_flashing_infos
from .workers import FeaturedProjectWorker

logger = logging.getLogger(__name__)


class MainPageController(QObject):
    """State machine behind the three-step flash page."""

    changed = Signal()

    def __init__(
        self,
        store,
        selection,
        flash,
        settings,
        alert_preference,
        open_external: Callable[[str], None],
        worker_factory=FeaturedProjectWorker,
        parent=None,
    ):
        super().__init__(parent)
        self._store = store
        self._selection = selection
        self._flash = flash
        self.settings = settings
        self._alert_preference = alert_preference
        self._open_external = open_external
        self._worker_factory = worker_factory

        self._mounted = False
        self._unsubscribe: Callable[[], None] | None = None
        self.featured_project_worker = None

        self.state = PageViewState(
            analytics_alert_visible=alert_preference.read_bool(),
            selection=project(selection, flash),
        )

    # -- Lifecycle --

    @property
    def mounted(self) -> bool:
        return self._mounted

    def mount(self) -> None:
        if self._mounted:
            return
        self._mounted = True
        self._unsubscribe = self._store.observe(self._on_store_changed)
        # Catch up with anything that changed between construction and mount
        self._on_store_changed()

        worker = self._worker_factory(self.settings, parent=self)
        worker.finished.connect(self._on_featured_project_url)
        worker.failed.connect(self._on_featured_project_failed)
        self.featured_project_worker = worker
        worker.start()

    def unmount(self) -> None:
        if not self._mounted:
            return
        self._mounted = False
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        worker = self.featured_project_worker
        if worker is not None and worker.isRunning():
            # The QThread must finish before its parent can be destroyed
            worker.wait()
        logger.debug("Main page unmounted")

    # -- Store bridge --

    def _on_store_changed(self) -> None:
        self.state.selection = project(self._selection, self._flash)
        self.changed.emit()

    # -- Derived, read on every render --

    @property
    def gates(self) -> StepGates:
        return gate_steps(self.state.selection)

    def layout(self) -> LayoutPlan:
        return plan_layout(self.state)

    def flash_snapshot(self):
        """Live flash progress; deliberately not cached in page state."""
        return self._flash.get_flash_state()

    def flash_results(self):
        return self._flash.get_flash_results()

    def reduced_flashing_infos(self):
        return reduced_flashing_infos(self.state.selection)

    @property
    def help_link_visible(self) -> bool:
        return not self.settings.get_sync("disableExternalLinks")

    # -- Phase machine --

    def go_to_success(self) -> None:
        self._transition(Phase.SUCCESS)

    def go_to_main(self) -> None:
        check_transition(self.state.phase, Phase.MAIN)
        # Clear terminal progress before the workflow shows again
        self._flash.reset_state()
        self._transition(Phase.MAIN)

    def _transition(self, target: Phase) -> None:
        check_transition(self.state.phase, target)
        logger.info("Main page phase: %s -> %s", self.state.phase.value, target.value)
        self.state.phase = target
        self.changed.emit()

    # -- Overlays --

    def hide_analytics_alert(self) -> None:
        if not self.state.analytics_alert_visible:
            return
        if not self._alert_preference.write_bool(False):
            logger.warning("Alert dismissal not persisted; hiding for this session only")
        self.state.analytics_alert_visible = False
        self.changed.emit()

    def open_settings(self) -> None:
        self.set_settings_visible(True)

    def close_settings(self) -> None:
        self.set_settings_visible(False)

    def set_settings_visible(self, visible: bool) -> None:
        if visible == self.state.settings_visible:
            return
        self.state.settings_visible = visible
        if self.state.analytics_alert_visible:
            # Not persisted: the alert returns on next launch
            self.state.analytics_alert_visible = False
        self.changed.emit()

    def set_promo_panel_visible(self, visible: bool) -> None:
        if visible == self.state.promo_panel_visible:
            return
        self.state.promo_panel_visible = visible
        self.changed.emit()

    # -- Featured project loader --

    @Slot(str)
    def _on_featured_project_url(self, url: str) -> None:
        if not self._mounted:
            logger.debug("Featured project URL arrived after unmount; dropped")
            return
        self.state.promo_url = url
        self.changed.emit()

    @Slot(str)
    def _on_featured_project_failed(self, reason: str) -> None:
        logger.info("Promo panel disabled: %s", reason)

    # -- External links --

    def open_homepage(self) -> None:
        self._open_external(HOMEPAGE_URL)

    def open_privacy_policy(self) -> None:
        self._open_external(PRIVACY_POLICY_URL)

    def open_support(self) -> None:
        image = self._selection.get_image()
        url = image.support_url if image is not None and image.support_url else SUPPORT_URL
        self._open_external(url)
