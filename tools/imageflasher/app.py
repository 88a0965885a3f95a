"""ImageFlasher application entry point."""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

from PySide6.QtCore import QStandardPaths
from PySide6.QtWidgets import QApplication, QMessageBox

from .controller import MainPageController
from .flash_state import FlashState
from .open_external import open_url
from .pages import MainPage
from .preferences import AlertPreference, PreferenceStore
from .resources import (
    APP_NAME,
    CONFIG_DIR_ENV,
    LOG_FILENAME,
    LOG_LEVEL_ENV,
    PREFERENCES_FILENAME,
    SETTINGS_FILENAME,
)
from .selection import SelectionState
from .settings import SettingsStore
from .store import Store
from .theme import GLOBAL_STYLESHEET

logger = logging.getLogger(__name__)


def resolve_config_dir() -> Path:
    env_dir = os.environ.get(CONFIG_DIR_ENV)
    if env_dir:
        return Path(env_dir)
    location = QStandardPaths.writableLocation(QStandardPaths.AppConfigLocation)
    if location:
        return Path(location)
    return Path.home() / ".config" / "imageflasher"


def configure_logging(config_dir: Path) -> None:
    level = getattr(logging, os.environ.get(LOG_LEVEL_ENV, "INFO").upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    config_dir.mkdir(parents=True, exist_ok=True)
    file_handler = logging.handlers.RotatingFileHandler(
        config_dir / LOG_FILENAME,
        maxBytes=1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ))
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console_handler)


def main():
    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setStyleSheet(GLOBAL_STYLESHEET)

    config_dir = resolve_config_dir()
    configure_logging(config_dir)
    logger.info("Config directory: %s", config_dir)

    settings = SettingsStore(config_dir / SETTINGS_FILENAME)
    settings.load()

    store = Store()
    selection = SelectionState(store)
    flash = FlashState(store)
    preference = AlertPreference(PreferenceStore(config_dir / PREFERENCES_FILENAME))

    controller = MainPageController(
        store, selection, flash, settings, preference, open_external=open_url
    )
    window = MainPage(controller, selection)
    window.setWindowTitle(APP_NAME)
    window.resize(800, 480)

    def on_flash_requested():
        # Writing images is done by a separate flashing engine
        logger.info("Flash requested with no flashing engine attached")
        QMessageBox.information(
            window, APP_NAME, "No flashing engine is attached to this build."
        )

    window.flash_requested.connect(on_flash_requested)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
