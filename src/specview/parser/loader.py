"""Read an OpenAPI document from disk or stdin.

JSON and YAML are both accepted. A ``.json`` file must be valid JSON, a
``.yaml``/``.yml`` file is parsed as YAML directly, and anything else
(including stdin) is tried as JSON first and then as YAML.

Remote documents are never downloaded. Fetch the file yourself and pass
its local path; hand the original URL to
:class:`~specview.parser.resolver.SpecResolver` as ``spec_url`` so relative
server URLs still resolve against it.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import yaml

from specview.exceptions import SpecParseError

STDIN_SOURCE = "-"

_SUFFIX_HINTS = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}


def load_spec(source: str) -> dict[str, Any]:
    """Load the document at *source* (a file path, or ``-`` for stdin).

    Raises:
        SpecParseError: If *source* is a URL, cannot be read, is empty, or
            does not parse to a mapping.
    """
    if source.startswith(("http://", "https://")):
        raise SpecParseError(
            f"Remote documents are not fetched: {source}. "
            "Download the document and pass its local path."
        )
    content, hint = _read_source(source)
    return _parse_content(content, hint=hint)


def _read_source(source: str) -> tuple[str, str]:
    """Return the text of *source* and a format hint derived from its suffix."""
    if source == STDIN_SOURCE:
        try:
            content = sys.stdin.read()
        except OSError as exc:
            raise SpecParseError(f"Failed to read from stdin: {exc}") from exc
        if not content.strip():
            raise SpecParseError("No input received from stdin")
        return content, ""

    path = Path(source)
    if not path.is_file():
        raise SpecParseError(f"Spec file not found: {source}")
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SpecParseError(f"Cannot read {source}: {exc}") from exc
    if not content.strip():
        raise SpecParseError(f"Spec file is empty: {source}")
    return content, _SUFFIX_HINTS.get(path.suffix.lower(), "")


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Decode *content* into the top-level document mapping.

    With ``hint="json"`` a JSON error is final; with ``hint="yaml"`` JSON is
    not attempted at all.
    """
    json_error = None
    if hint != "yaml":
        try:
            return _as_document(json.loads(content))
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc
            json_error = exc

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        details = [f"YAML error: {exc}"]
        if json_error is not None:
            details.insert(0, f"JSON error: {json_error}")
        raise SpecParseError(
            "Failed to parse spec as JSON or YAML\n  " + "\n  ".join(details)
        ) from exc
    return _as_document(data)


def _as_document(data: Any) -> dict[str, Any]:
    if isinstance(data, dict):
        return data
    kind = "empty document" if data is None else type(data).__name__
    raise SpecParseError(f"Spec must be a JSON/YAML object (got {kind})")


def validate_openapi_version(spec: dict[str, Any]) -> str:
    """Return the document's ``openapi`` version if it is a 3.x version.

    Raises:
        SpecParseError: For Swagger 2.x documents, a missing ``openapi``
            field, or any major version other than 3.
    """
    if "swagger" in spec:
        raise SpecParseError(
            f"Swagger {spec['swagger']} is not supported; convert the document to OpenAPI 3.x."
        )
    if "openapi" not in spec or spec["openapi"] is None:
        raise SpecParseError("Missing 'openapi' field; is this an OpenAPI 3.x document?")

    version = str(spec["openapi"])
    if version.split(".", 1)[0] != "3":
        raise SpecParseError(f"Unsupported OpenAPI version {version}; expected 3.x.")
    return version
