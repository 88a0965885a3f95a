"""Exception hierarchy for the main page and its stores."""


class FlasherUIError(Exception):
    """Base exception for ImageFlasher UI failures."""


class SettingsError(FlasherUIError):
    """The settings file could not be read or parsed."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path


class PreferenceError(FlasherUIError):
    """A preference could not be read from or written to disk."""

    def __init__(self, message: str, key: str = ""):
        super().__init__(message)
        self.key = key


class FlashStateError(FlasherUIError):
    """Invalid flash store mutation (e.g. progress while not flashing)."""


class PhaseTransitionError(FlasherUIError):
    """Requested page phase transition is not allowed from the current phase."""

    def __init__(self, current, target):
        super().__init__(f"Cannot go from {current.value} to {target.value}")
        self.current = current
        self.target = target
