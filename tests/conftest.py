import os

import pytest
from PySide6.QtWidgets import QApplication

from imageflasher.controller import MainPageController
from imageflasher.flash_state import FlashState
from imageflasher.preferences import AlertPreference, MemoryPreferenceStore
from imageflasher.selection import SelectionState
from imageflasher.store import Store
from imageflasher.workers import FeaturedProjectWorker


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QApplication.instance() or QApplication([])
    yield app


class FakeSettings:
    """Settings double: ``get`` may be told to fail, ``get_sync`` never does."""

    def __init__(self, values=None, error=None):
        self.values = dict(values or {})
        self.error = error

    def get(self, key):
        if self.error is not None:
            raise self.error
        return self.values.get(key)

    def get_sync(self, key):
        return self.values.get(key)


class RecordingOpener:
    def __init__(self):
        self.urls = []

    def __call__(self, url):
        self.urls.append(url)


class ManualWorker(FeaturedProjectWorker):
    """Never starts a thread; tests call run() when they want it to resolve."""

    def start(self):
        self.start_requested = True


class CountingFlashState(FlashState):
    def __init__(self, store):
        super().__init__(store)
        self.reset_calls = 0

    def reset_state(self):
        self.reset_calls += 1
        super().reset_state()


@pytest.fixture
def store():
    return Store()


@pytest.fixture
def selection(store):
    return SelectionState(store)


@pytest.fixture
def flash(store):
    return CountingFlashState(store)


@pytest.fixture
def settings():
    return FakeSettings()


@pytest.fixture
def preference_store():
    return MemoryPreferenceStore()


@pytest.fixture
def opener():
    return RecordingOpener()


@pytest.fixture
def make_controller(store, selection, flash, settings, preference_store, opener):
    def make(**overrides):
        kwargs = dict(
            store=store,
            selection=selection,
            flash=flash,
            settings=settings,
            alert_preference=AlertPreference(preference_store),
            open_external=opener,
            worker_factory=ManualWorker,
        )
        kwargs.update(overrides)
        return MainPageController(**kwargs)

    return make
