"""Config commands -- view and modify the global configuration.

Provides the ``specview config`` sub-command group for reading and
updating :class:`~specview.models.GlobalConfig`.
"""

from __future__ import annotations

from typing import Any

import typer

from specview.output import error, format_data, info


config_app = typer.Typer(no_args_is_help=True)

_TRUE_WORDS = ("true", "1", "yes", "on")
_FALSE_WORDS = ("false", "0", "no", "off")


@config_app.command("show")
def config_show() -> None:
    """Show the effective configuration.

    Example::

        specview config show --json
    """
    from specview.config import get_config_dir, resolve_config
    from specview.exceptions import SpecviewError

    try:
        config = resolve_config()
    except SpecviewError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    info(f"Config directory: {get_config_dir()}")
    format_data(config.model_dump(mode="json"), title="Configuration")


def _apply_setting(data: dict[str, Any], key: str, value: str) -> None:
    """Set dotted *key* in *data*, coercing *value* to the current field type.

    Raises:
        InvalidUsageError: If the key does not exist or a boolean field
            receives something other than a boolean word.
    """
    from specview.exceptions import InvalidUsageError

    keys = key.split(".")
    target = data
    for k in keys[:-1]:
        if not isinstance(target.get(k), dict):
            raise InvalidUsageError(f"Invalid config key: {key}")
        target = target[k]

    leaf = keys[-1]
    if leaf not in target:
        raise InvalidUsageError(f"Invalid config key: {key}")

    coerced: object = value
    if isinstance(target[leaf], bool):
        lowered = value.lower()
        if lowered not in _TRUE_WORDS + _FALSE_WORDS:
            raise InvalidUsageError(f"Expected a boolean for {key}, got '{value}'")
        coerced = lowered in _TRUE_WORDS
    target[leaf] = coerced


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        help="Config key (dot notation, e.g., 'options.required_props_first')."
    ),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a global configuration value.

    The value is coerced to the type of the existing field and the result
    validated against :class:`~specview.models.GlobalConfig` before saving.

    Example::

        specview config set options.required_props_first true
        specview config set options.expand_responses 200,201
        specview config set output.format json
    """
    from pydantic import ValidationError

    from specview.config import load_global_config, save_global_config
    from specview.exceptions import InvalidUsageError, SpecviewError
    from specview.models import GlobalConfig

    try:
        data = load_global_config().model_dump(mode="json")
        _apply_setting(data, key, value)
        try:
            updated = GlobalConfig.model_validate(data)
        except ValidationError as exc:
            raise InvalidUsageError(f"Invalid value for {key}: {exc}") from exc
    except SpecviewError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    save_global_config(updated)
    info(f"Set {key} = {value}")
