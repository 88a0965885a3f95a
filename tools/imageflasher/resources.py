"""Text constants, external URLs, settings keys and file names."""

APP_NAME = "ImageFlasher"
CONFIG_DIR_ENV = "IMAGEFLASHER_CONFIG_DIR"
LOG_LEVEL_ENV = "IMAGEFLASHER_LOG_LEVEL"
LOG_FILENAME = "imageflasher.log"
SETTINGS_FILENAME = "settings.json"
PREFERENCES_FILENAME = "preferences.ini"

# Persisted boolean preference: "false" once the user dismissed the alert
ANALYTICS_ALERT_VISIBILITY_KEY = "analytics_alert_visible"

FEATURED_PROJECT_ENDPOINT_KEY = "featuredProjectEndpoint"
DEFAULT_FEATURED_PROJECT_ENDPOINT = "https://efp.balena.io/index.html"
FEATURED_PROJECT_DISPLAY_PARAMS = (
    ("borderRight", "false"),
    ("darkBackground", "true"),
)

HOMEPAGE_URL = "https://www.balena.io/etcher?ref=etcher_footer"
SUPPORT_URL = "https://github.com/balena-io/etcher/blob/master/docs/SUPPORT.md"
PRIVACY_POLICY_URL = "https://www.balena.io/privacy-policy"

DEFAULT_SETTINGS = {
    "errorReporting": True,
    "updatesEnabled": True,
    "desktopNotifications": True,
    "autoBlockmapping": True,
    "decompressFirst": True,
    "disableExternalLinks": False,
}

# Toggles shown in the settings dialog: (key, label)
SETTINGS_TOGGLES = (
    ("errorReporting", "Anonymously report errors and usage statistics"),
    ("updatesEnabled", "Auto-updates enabled"),
    ("desktopNotifications", "Show desktop notifications"),
)

NO_TARGETS_TITLE = "No targets found"
UNTITLED_DEVICE_TITLE = "Untitled Device"

ANALYTICS_ALERT_TEXT = (
    "ImageFlasher collects a limited amount of anonymous data to help us "
    "improve user experience. You can opt out in the "
    '<a href="settings">settings</a>.'
)
PRIVACY_POLICY_TEXT = (
    "For more information about how we use this data, see our "
    '<a href="privacy">privacy policy</a>.'
)

STEP_TITLES = {
    "source": "Flash from file",
    "target": "Select target",
    "flash": "Flash!",
}
