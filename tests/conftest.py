"""Shared test fixtures for specview.

Provides the petstore document (raw and wrapped in a resolver), a built
menu of operation views, isolated configuration directories, and output
managers. Fixtures are discovered by pytest automatically.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest
from rich.logging import RichHandler

from specview.output import OutputFormat, OutputManager, reset_output, set_output
from specview.parser.resolver import SpecResolver


FIXTURES_DIR = Path(__file__).parent / "fixtures"

SPEC_URL = "https://example.com/docs/openapi.json"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager and log handlers after every test.

    The manager caches sys.stdout/sys.stderr at creation time; CliRunner
    swaps those streams, so a stale manager (or a RichHandler bound to its
    console) would write to closed files.
    """
    yield
    reset_output()
    logger = logging.getLogger("specview")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_path() -> Path:
    return FIXTURES_DIR / "petstore.json"


@pytest.fixture
def petstore_raw(petstore_path: Path) -> dict[str, Any]:
    """Load the raw petstore document."""
    with open(petstore_path) as f:
        return json.load(f)


@pytest.fixture
def resolver(petstore_raw: dict[str, Any]) -> SpecResolver:
    """Resolver over the petstore document, published at SPEC_URL."""
    return SpecResolver(petstore_raw, spec_url=SPEC_URL)


@pytest.fixture
def menu(resolver: SpecResolver) -> list[Any]:
    """Menu built from the petstore document with default options."""
    from specview.views import build_operation_views

    return build_operation_views(resolver)


@pytest.fixture
def empty_resolver() -> SpecResolver:
    """Resolver over a minimal document without servers, security or components."""
    return SpecResolver({"openapi": "3.0.3", "info": {"title": "t", "version": "1"}, "paths": {}})


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_CONFIG_HOME and XDG_DATA_HOME into tmp_path, forces the XDG
    layout, clears SPECVIEW_* variables and changes into tmp_path.
    """
    monkeypatch.setattr("specview.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ["SPECVIEW_REQUIRED_PROPS_FIRST", "SPECVIEW_EXPAND_RESPONSES"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def json_output() -> OutputManager:
    """Install a JSON-format OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.JSON)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
