"""Where specview keeps its settings, and how the layers combine.

Settings come from five places, highest priority first:

1. command-line flags (``--required-first``, ``--expand-responses``);
2. ``SPECVIEW_REQUIRED_PROPS_FIRST`` and ``SPECVIEW_EXPAND_RESPONSES``;
3. ``./specview.json`` next to the API document (project config);
4. ``config.json`` in the user config directory (global config);
5. the defaults of :class:`~specview.models.GlobalConfig`.

Linux and the BSDs follow the XDG base directory layout
(``$XDG_CONFIG_HOME/specview``, ``$XDG_DATA_HOME/specview``); other
platforms use ``~/.specview``. The global config file is only ever
replaced whole, through a temporary sibling file.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from specview.exceptions import ConfigError
from specview.models import GlobalConfig

_APP_NAME = "specview"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "specview.json"

ENV_REQUIRED_PROPS_FIRST = "SPECVIEW_REQUIRED_PROPS_FIRST"
ENV_EXPAND_RESPONSES = "SPECVIEW_EXPAND_RESPONSES"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})

# XDG variable and its default location relative to $HOME.
_XDG_DIRS: dict[str, tuple[str, str]] = {
    "config": ("XDG_CONFIG_HOME", ".config"),
    "data": ("XDG_DATA_HOME", ".local/share"),
}


# --- Directories ---


def _is_xdg_platform() -> bool:
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def _app_dir(kind: str) -> Path:
    if _is_xdg_platform():
        env_var, default = _XDG_DIRS[kind]
        root = Path(os.environ.get(env_var) or Path.home() / default)
        path = root / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """Directory holding ``config.json``; created on first use."""
    return _app_dir("config")


def get_data_dir() -> Path:
    """Directory for runtime data such as crash logs; created on first use."""
    return _app_dir("data")


def _atomic_write(path: Path, data: str) -> None:
    """Replace *path* with *data* so readers never see a partial file.

    The text goes to a hidden temporary file in the same directory, which
    is then renamed over *path*. The temporary file is removed if anything
    fails.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        except BaseException:
            tmp.close()
            tmp_path.unlink(missing_ok=True)
            raise
    try:
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


# --- Global config ---


def _read_json(path: Path, label: str) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigError(f"Invalid {label} at {path}: {exc}") from exc


def load_global_config() -> GlobalConfig:
    """Read the global config, or return the defaults when there is none.

    Raises:
        ConfigError: If the file is not valid JSON or holds invalid values.
    """
    path = get_config_dir() / _CONFIG_FILENAME
    if not path.is_file():
        return GlobalConfig()
    try:
        return GlobalConfig.model_validate(_read_json(path, "global config"))
    except ValidationError as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    text = json.dumps(config.model_dump(mode="json"), indent=2) + "\n"
    _atomic_write(get_config_dir() / _CONFIG_FILENAME, text)


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./specview.json``.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file is not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    data = _read_json(path, "project config")
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


# --- Precedence resolution ---


def _env_bool(name: str) -> Optional[bool]:
    raw = os.environ.get(name)
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"Environment variable {name} must be a boolean, got '{raw}'")


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def resolve_config(
    cli_required_first: Optional[bool] = None,
    cli_expand_responses: Optional[str] = None,
    cli_format: Optional[str] = None,
) -> GlobalConfig:
    """Merge every layer into the effective configuration.

    Arguments left as ``None`` do not override anything. The layer order is
    described in the module docstring.

    Raises:
        ConfigError: If any layer holds an invalid value.
    """
    data = load_global_config().model_dump(mode="json")

    project = load_project_config()
    if project is not None:
        data = _deep_merge(data, project)

    options = data.setdefault("options", {})
    env_required = _env_bool(ENV_REQUIRED_PROPS_FIRST)
    if env_required is not None:
        options["required_props_first"] = env_required
    env_expand = os.environ.get(ENV_EXPAND_RESPONSES)
    if env_expand is not None:
        options["expand_responses"] = env_expand

    if cli_required_first is not None:
        options["required_props_first"] = cli_required_first
    if cli_expand_responses is not None:
        options["expand_responses"] = cli_expand_responses
    if cli_format is not None:
        data.setdefault("output", {})["format"] = cli_format

    try:
        return GlobalConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
