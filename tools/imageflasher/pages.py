"""Widgets for the main flash page.

The widgets hold no workflow state of their own: :class:`MainPage` asks
the controller for a fresh layout plan on every ``changed`` signal and
pushes the result down into the step widgets.
"""

import logging
import os

from PySide6.QtCore import Qt, QTimer, QUrl, Signal
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QCheckBox,
    QDialog,
    QDialogButtonBox,
    QFileDialog,
    QFrame,
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QSpacerItem,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from .layout import (
    ANALYTICS_ALERT,
    FLASH_STEP,
    PROMO_PANEL,
    REDUCED_FLASHING_INFOS,
    SETTINGS_OVERLAY,
    STEPS_ROW,
    SUCCESS_VIEW,
)
from .resources import (
    ANALYTICS_ALERT_TEXT,
    APP_NAME,
    PRIVACY_POLICY_TEXT,
    SETTINGS_TOGGLES,
    STEP_TITLES,
)
from .selection import DriveInfo, SourceMetadata
from .theme import PROMO_PANEL_WIDTH, REDUCED_INFOS_WIDTH
from .viewmodel import pretty_bytes

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helper widgets
# ---------------------------------------------------------------------------


def _label(text: str, object_name: str = "") -> QLabel:
    lbl = QLabel(text)
    lbl.setAlignment(Qt.AlignCenter)
    lbl.setWordWrap(True)
    if object_name:
        lbl.setObjectName(object_name)
    return lbl


def _icon_button(text: str, tooltip: str) -> QPushButton:
    btn = QPushButton(text)
    btn.setObjectName("iconButton")
    btn.setToolTip(tooltip)
    btn.setCursor(Qt.PointingHandCursor)
    return btn


def _format_eta(seconds) -> str:
    if seconds is None:
        return ""
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}m{secs:02d}s left"


class ClickableLabel(QLabel):
    clicked = Signal()

    def __init__(self, text: str, parent=None):
        super().__init__(text, parent)
        self.setCursor(Qt.PointingHandCursor)

    def mousePressEvent(self, event):
        self.clicked.emit()
        super().mousePressEvent(event)


class HeaderBar(QWidget):
    """Logo in the middle, settings and help buttons on the right."""

    logo_clicked = Signal()
    settings_clicked = Signal()
    help_clicked = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setFixedHeight(50)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(20, 14, 20, 0)

        layout.addStretch()
        self._logo = ClickableLabel(APP_NAME)
        self._logo.setObjectName("logo")
        self._logo.clicked.connect(self.logo_clicked.emit)
        layout.addWidget(self._logo)
        layout.addStretch()

        self._settings_btn = _icon_button("⚙", "Settings")
        self._settings_btn.clicked.connect(self.settings_clicked.emit)
        layout.addWidget(self._settings_btn)

        self._help_btn = _icon_button("?", "Help")
        self._help_btn.clicked.connect(self.help_clicked.emit)
        layout.addWidget(self._help_btn)

    def set_help_visible(self, visible: bool) -> None:
        self._help_btn.setVisible(visible)


class StepCard(QFrame):
    """One column of the three-step row: title, detail text and a button."""

    clicked = Signal()

    def __init__(self, title: str, button_text: str, parent=None):
        super().__init__(parent)
        self.setFixedWidth(200)

        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignTop)
        layout.setSpacing(8)

        self._title = _label(title, "stepTitle")
        layout.addWidget(self._title)

        self._button = QPushButton(button_text)
        self._button.setObjectName("primaryButton")
        self._button.clicked.connect(self.clicked.emit)
        layout.addWidget(self._button)

        self._detail = _label("", "stepDetail")
        layout.addWidget(self._detail)

        self._secondary = QPushButton("Change")
        self._secondary.setFlat(True)
        self._secondary.setVisible(False)
        layout.addWidget(self._secondary)

    @property
    def secondary(self) -> QPushButton:
        return self._secondary

    def set_step_disabled(self, disabled: bool) -> None:
        self._button.setEnabled(not disabled)
        self._title.setEnabled(not disabled)

    def set_detail(self, text: str) -> None:
        self._detail.setText(text)


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------


class SourceStep(StepCard):
    """Step 1: pick an image file."""

    def __init__(self, selection, hide_alert, parent=None):
        super().__init__("Source", STEP_TITLES["source"], parent)
        self._selection = selection
        self._hide_alert = hide_alert
        self.clicked.connect(self._choose_image)
        self.secondary.setText("Remove")
        self.secondary.clicked.connect(self._selection.deselect_image)

    def _choose_image(self) -> None:
        self._hide_alert()
        path, _ = QFileDialog.getOpenFileName(
            self,
            "Select image",
            os.path.expanduser("~"),
            "Images (*.img *.iso *.zip *.gz *.xz *.bz2 *.raw *.dmg);;All files (*)",
        )
        if not path:
            return
        try:
            size = os.path.getsize(path)
        except OSError:
            size = None
        self._selection.select_image(
            SourceMetadata(path=path, name=os.path.basename(path), size=size)
        )

    def update_view(self, snapshot, flashing: bool) -> None:
        if snapshot.has_image:
            size = pretty_bytes(snapshot.image_size)
            self.set_detail(f"{snapshot.image_name}\n{size}" if size else snapshot.image_name)
        else:
            self.set_detail("")
        self.set_step_disabled(flashing)
        self.secondary.setVisible(snapshot.has_image and not flashing)


class TargetStep(StepCard):
    """Step 2: pick a target device node (or a file to write to)."""

    def __init__(self, selection, hide_alert, parent=None):
        super().__init__("Target", STEP_TITLES["target"], parent)
        self._selection = selection
        self._hide_alert = hide_alert
        self.clicked.connect(self._choose_target)
        self.secondary.clicked.connect(self._choose_target)

    def _choose_target(self) -> None:
        self._hide_alert()
        start_dir = "/dev" if os.path.isdir("/dev") else os.path.expanduser("~")
        path, _ = QFileDialog.getOpenFileName(self, "Select target", start_dir)
        if not path:
            return
        for drive in self._selection.get_selected_drives():
            self._selection.deselect_drive(drive.device)
        self._selection.select_drive(
            DriveInfo(device=path, description=os.path.basename(path), display_name=path)
        )

    def update_view(self, snapshot, disabled: bool, flashing: bool) -> None:
        if snapshot.has_drive:
            self.set_detail(f"{snapshot.drive_title}\n{snapshot.drive_label}")
        else:
            self.set_detail("")
        self.set_step_disabled(disabled or flashing)
        self.secondary.setVisible(snapshot.has_drive and not flashing)


class FlashStep(StepCard):
    """Step 3: start flashing and show live progress.

    Reports ``completed`` once when the flash store goes from flashing to
    not flashing with successful results.
    """

    completed = Signal()

    def __init__(self, parent=None):
        super().__init__("Flash", STEP_TITLES["flash"], parent)
        self._was_flashing = False

        self._progress = QProgressBar()
        self._progress.setRange(0, 100)
        self._progress.setVisible(False)
        self.layout().insertWidget(2, self._progress)

    def update_view(self, disabled: bool, flashing: bool, progress, results) -> None:
        self.set_step_disabled(disabled or flashing)
        self._progress.setVisible(flashing)
        if flashing:
            kind = progress.type.value.capitalize() if progress.type else "Starting"
            self._progress.setValue(int(progress.percentage or 0))
            self._progress.setFormat(f"{kind}... %p%")
            details = []
            if progress.speed is not None:
                details.append(f"{progress.speed:.2f} MB/s")
            if progress.eta is not None:
                details.append(_format_eta(progress.eta))
            if progress.failed:
                details.append(f"{progress.failed} failed")
            self.set_detail("  •  ".join(details))
        else:
            self.set_detail("")

        if self._was_flashing and not flashing and results is not None and results.succeeded:
            self.completed.emit()
        self._was_flashing = flashing


class ReducedFlashingInfos(QFrame):
    """Image and target summary shown next to the promo panel."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("reducedInfos")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(35, 72, 20, 20)
        layout.setAlignment(Qt.AlignTop)
        layout.setSpacing(12)

        self._image = QLabel()
        self._image.setWordWrap(True)
        layout.addWidget(self._image)
        self._drive = QLabel()
        self._drive.setWordWrap(True)
        layout.addWidget(self._drive)

    def update_view(self, infos) -> None:
        size = f"  {infos.image_size}" if infos.image_size else ""
        self._image.setText(f"<b>{infos.image_name}</b>{size}")
        self._drive.setText(f"<b>{infos.drive_title}</b>")
        self._drive.setToolTip(infos.drive_label)


class PromoPanel(QWidget):
    """Embedded featured-project page.

    Reports whether it is actually showing content; the page never assumes
    it is, since the remote content may fail to load. ``view`` is any widget
    with ``setUrl``, ``stop`` and a ``loadFinished(bool)`` signal and
    defaults to a ``QWebEngineView``.
    """

    visibility_changed = Signal(bool)

    def __init__(self, view=None, parent=None):
        super().__init__(parent)
        self._url = ""
        self._showing = False

        if view is None:
            # QtWebEngine pulls in Chromium; load it only when a panel is built
            from PySide6.QtWebEngineWidgets import QWebEngineView

            view = QWebEngineView()

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self._view = view
        self._view.loadFinished.connect(self._on_load_finished)
        layout.addWidget(self._view)

    @property
    def showing(self) -> bool:
        return self._showing

    def show_url(self, url: str) -> None:
        self.setVisible(True)
        if url == self._url:
            return
        self._url = url
        self._view.setUrl(QUrl(url))

    def take_down(self) -> None:
        self._view.stop()
        self.setVisible(False)
        self._url = ""
        self._report(False)

    def _on_load_finished(self, ok: bool) -> None:
        if not self._url or self.isHidden():
            logger.debug("Load result for a taken-down promo panel ignored")
            return
        if not ok:
            logger.warning("Featured project page failed to load: %s", self._url)
        self._report(ok)

    def _report(self, showing: bool) -> None:
        if showing != self._showing:
            self._showing = showing
            self.visibility_changed.emit(showing)


class AnalyticsAlert(QFrame):
    """Anonymous usage data notice with links to settings and privacy policy."""

    settings_link_clicked = Signal()
    privacy_link_clicked = Signal()
    dismissed = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("analyticsAlert")

        layout = QHBoxLayout(self)
        layout.setContentsMargins(16, 10, 10, 10)

        text = QVBoxLayout()
        for html in (ANALYTICS_ALERT_TEXT, PRIVACY_POLICY_TEXT):
            lbl = QLabel(html)
            lbl.setWordWrap(True)
            lbl.setTextFormat(Qt.RichText)
            lbl.linkActivated.connect(self._on_link)
            text.addWidget(lbl)
        layout.addLayout(text, stretch=1)

        close_btn = _icon_button("✕", "Dismiss")
        close_btn.clicked.connect(self.dismissed.emit)
        layout.addWidget(close_btn, alignment=Qt.AlignTop)

    def _on_link(self, href: str) -> None:
        if href == "settings":
            self.settings_link_clicked.emit()
        elif href == "privacy":
            self.privacy_link_clicked.emit()


class SettingsDialog(QDialog):
    """Modal settings overlay; each toggle writes through to the settings file."""

    def __init__(self, settings, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)
        self._settings = settings
        self._checkboxes: dict[str, QCheckBox] = {}

        layout = QVBoxLayout(self)
        layout.setSpacing(12)
        for key, text in SETTINGS_TOGGLES:
            cb = QCheckBox(text)
            cb.toggled.connect(lambda checked, k=key: self._on_toggled(k, checked))
            self._checkboxes[key] = cb
            layout.addWidget(cb)

        buttons = QDialogButtonBox(QDialogButtonBox.Close)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def refresh(self) -> None:
        for key, cb in self._checkboxes.items():
            cb.blockSignals(True)
            cb.setChecked(bool(self._settings.get_sync(key)))
            cb.blockSignals(False)

    def _on_toggled(self, key: str, checked: bool) -> None:
        try:
            self._settings.set(key, checked)
        except OSError as e:
            logger.warning("Could not save setting %s: %s", key, e)


class FinishPage(QWidget):
    """Success screen with a button to flash another image."""

    flash_another_clicked = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignCenter)
        layout.setSpacing(16)

        check = _label("✓")
        check.setStyleSheet("color: #1ac135; font-size: 72px;")
        layout.addWidget(check)

        title = _label("Flash Complete!", "finishTitle")
        font = QFont()
        font.setBold(True)
        title.setFont(font)
        layout.addWidget(title)

        self._summary = _label("")
        layout.addWidget(self._summary)

        layout.addSpacerItem(QSpacerItem(0, 24))

        again_btn = QPushButton("Flash another")
        again_btn.setObjectName("primaryButton")
        again_btn.setFixedWidth(200)
        again_btn.clicked.connect(self.flash_another_clicked.emit)
        layout.addWidget(again_btn, alignment=Qt.AlignCenter)

    def set_results(self, results) -> None:
        if results is None:
            self._summary.setText("")
            return
        text = f"{results.successful} successful"
        if results.failed:
            text += f", {results.failed} failed"
        self._summary.setText(text)


# ---------------------------------------------------------------------------
# Main page
# ---------------------------------------------------------------------------


class MainPage(QWidget):
    """Top-level window rendering the controller's layout plan."""

    flash_requested = Signal()

    def __init__(self, controller, selection, parent=None):
        super().__init__(parent)
        self._controller = controller

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(0)

        self._header = HeaderBar()
        self._header.logo_clicked.connect(controller.open_homepage)
        self._header.settings_clicked.connect(controller.open_settings)
        self._header.help_clicked.connect(controller.open_support)
        root.addWidget(self._header)

        self._stack = QStackedWidget()
        root.addWidget(self._stack, stretch=1)

        # -- main phase --
        self._main = QWidget()
        main_layout = QHBoxLayout(self._main)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        self._reduced = ReducedFlashingInfos()
        main_layout.addWidget(self._reduced)

        workflow = QWidget()
        self._workflow_layout = QVBoxLayout(workflow)
        self._workflow_layout.setContentsMargins(55, 110, 55, 18)

        row = QHBoxLayout()
        self._source = SourceStep(selection, controller.hide_analytics_alert)
        self._target = TargetStep(selection, controller.hide_analytics_alert)
        self._flash = FlashStep()
        self._flash.clicked.connect(self.flash_requested.emit)
        self._flash.completed.connect(self._on_flash_completed)
        row.addWidget(self._source)
        row.addStretch()
        row.addWidget(self._target)
        row.addStretch()
        row.addWidget(self._flash)
        self._workflow_layout.addLayout(row)
        self._workflow_layout.addStretch()

        self._alert = AnalyticsAlert()
        self._alert.settings_link_clicked.connect(controller.open_settings)
        self._alert.privacy_link_clicked.connect(controller.open_privacy_policy)
        self._alert.dismissed.connect(controller.hide_analytics_alert)
        self._workflow_layout.addWidget(self._alert)
        main_layout.addWidget(workflow, stretch=1)

        self._promo = PromoPanel()
        self._promo.visibility_changed.connect(
            controller.set_promo_panel_visible, Qt.QueuedConnection
        )
        main_layout.addWidget(self._promo)

        self._stack.addWidget(self._main)

        # -- success phase --
        self._finish = FinishPage()
        self._finish.flash_another_clicked.connect(controller.go_to_main)
        self._stack.addWidget(self._finish)

        self._settings_dialog = SettingsDialog(controller.settings, self)
        self._settings_dialog.finished.connect(lambda _: controller.close_settings())

        controller.changed.connect(self._render)
        controller.mount()
        self._render()

    def closeEvent(self, event):
        self._controller.unmount()
        super().closeEvent(event)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._apply_split_widths()

    def _apply_split_widths(self) -> None:
        width = self.width()
        self._reduced.setFixedWidth(int(width * REDUCED_INFOS_WIDTH))
        self._promo.setFixedWidth(int(width * PROMO_PANEL_WIDTH))

    def _on_flash_completed(self) -> None:
        # Deferred so the phase change does not re-enter the current render
        QTimer.singleShot(0, self._controller.go_to_success)

    def _render(self) -> None:
        c = self._controller
        state = c.state
        plan = c.layout()
        gates = c.gates
        snapshot = state.selection
        flashing = snapshot.is_flashing

        self._header.set_help_visible(c.help_link_visible)

        if plan.shows(SUCCESS_VIEW):
            self._finish.set_results(c.flash_results())
            self._stack.setCurrentWidget(self._finish)
        else:
            self._stack.setCurrentWidget(self._main)

        margin = 35 if state.promo_panel_visible else 55
        self._workflow_layout.setContentsMargins(margin, 110, margin, 18)

        steps_visible = plan.shows(STEPS_ROW)
        self._source.setVisible(steps_visible)
        self._target.setVisible(steps_visible)
        self._source.update_view(snapshot, flashing)
        self._target.update_view(snapshot, gates.drive_step_disabled, flashing)

        self._flash.setVisible(plan.shows(FLASH_STEP))
        self._flash.setFixedWidth(220 if state.promo_panel_visible else 200)
        self._flash.update_view(
            gates.flash_step_disabled, flashing, c.flash_snapshot(), c.flash_results()
        )

        self._reduced.setVisible(plan.shows(REDUCED_FLASHING_INFOS))
        if plan.split_view:
            self._reduced.update_view(c.reduced_flashing_infos())

        if plan.shows(PROMO_PANEL):
            self._promo.show_url(state.promo_url)
        elif not self._promo.isHidden():
            self._promo.take_down()

        self._alert.setVisible(plan.shows(ANALYTICS_ALERT))

        if plan.shows(SETTINGS_OVERLAY):
            if not self._settings_dialog.isVisible():
                self._settings_dialog.refresh()
                self._settings_dialog.open()
        elif self._settings_dialog.isVisible():
            self._settings_dialog.done(QDialog.Rejected)

        self._apply_split_widths()
