from importlib.resources import files

from platformdirs import user_config_path

PACKAGE_NAME = "blockstream"  # Python package name

# -----------------------------------------------------------------------------
# User-writable directories & files
# -----------------------------------------------------------------------------

# Base config directory (e.g. ~/.config/blockstream/)
USER_CONFIG_DIR = user_config_path(PACKAGE_NAME, appauthor=False)

SETTING_PATH = USER_CONFIG_DIR / "settings.json"

# -----------------------------------------------------------------------------
# Embedded resources
# -----------------------------------------------------------------------------

RES = files("blockstream.resources")

# Config
DEFAULT_CONFIG_FILE = RES.joinpath("config", "settings.sample.toml")
