from __future__ import annotations

import json
import logging
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import IO, Any

from blockstream.infra.paths import DEFAULT_CONFIG_FILE, SETTING_PATH

logger = logging.getLogger(__name__)

LOCAL_FILENAMES = ("settings.toml", "settings.json")

# extension -> (open mode, parser)
_PARSERS: dict[str, tuple[str, Callable[[IO[Any]], Any]]] = {
    ".json": ("r", json.load),
    ".toml": ("rb", tomllib.load),
}


def _find_config(user_path: str | Path | None) -> Path | None:
    """
    Pick the configuration file to load.

    Lookup order:
        1. ``user_path``, if given and it exists
        2. ``settings.toml`` / ``settings.json`` in the working directory
        3. ``SETTING_PATH`` in the user config directory

    Args:
        user_path: Optional file path explicitly provided by the caller.

    Returns:
        The resolved path, or None when no candidate exists.
    """
    if user_path:
        path = Path(user_path).expanduser().resolve()
        if path.is_file():
            return path
        logger.warning("Specified config file not found: %s", path)

    for name in LOCAL_FILENAMES:
        local_path = (Path.cwd() / name).resolve()
        if local_path.is_file():
            logger.debug("Using local config file: %s", local_path)
            return local_path

    if SETTING_PATH.is_file():
        return SETTING_PATH.resolve()

    return None


def _parse_file(path: Path) -> dict[str, Any]:
    """
    Parse a ``.toml`` or ``.json`` configuration file.

    Raises:
        ValueError: On an unsupported extension, a parse failure, or a root
            element that is not a table/object.
    """
    ext = path.suffix.lower()
    if ext not in _PARSERS:
        raise ValueError(f"Unsupported config file extension: {ext}")

    mode, parser = _PARSERS[ext]
    encoding = None if "b" in mode else "utf-8"
    try:
        with path.open(mode, encoding=encoding) as f:
            data = parser(f)
    except (OSError, ValueError) as e:
        raise ValueError(f"Invalid {ext[1:].upper()} in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a dict, got {type(data)} in {path}")

    return data


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """
    Load the configuration mapping.

    Args:
        config_path: Optional explicit configuration file path.

    Returns:
        Parsed configuration as a dictionary.

    Raises:
        FileNotFoundError: If no configuration file is found.
        ValueError: If the file cannot be parsed.
    """
    path = _find_config(config_path)
    if not path:
        raise FileNotFoundError("No valid config file found.")

    logger.debug("Loading configuration from: %s", path)
    return _parse_file(path)


def copy_default_config(target: Path) -> None:
    """
    Write the bundled sample settings to ``target``.
    """
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(DEFAULT_CONFIG_FILE.read_bytes())


def save_config(
    config: dict[str, Any],
    output_path: str | Path = SETTING_PATH,
) -> None:
    """
    Save configuration data to disk as JSON.

    Args:
        config: Configuration mapping.
        output_path: Destination path for the JSON file.
    """
    output = Path(output_path).expanduser().resolve()
    output.parent.mkdir(parents=True, exist_ok=True)

    try:
        output.write_text(json.dumps(config, indent=2), encoding="utf-8")
    except OSError as e:
        logger.error("Failed to write config JSON '%s': %s", output, e)
        raise

    logger.info("Configuration saved to JSON: %s", output)


def save_config_file(
    source_path: str | Path, output_path: str | Path = SETTING_PATH
) -> None:
    """
    Convert a TOML/JSON configuration file into the JSON settings file.

    Raises:
        FileNotFoundError: If the source file does not exist.
        ValueError: If the source file cannot be parsed.
    """
    source = Path(source_path).expanduser().resolve()
    if not source.is_file():
        raise FileNotFoundError(f"Source file not found: {source}")

    save_config(_parse_file(source), output_path)
