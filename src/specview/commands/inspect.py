"""Inspect commands -- show the operation views of a document.

Provides the ``specview inspect`` sub-command group:

* ``specview inspect operations SPEC`` -- one row per operation.
* ``specview inspect operation SPEC KEY`` -- the full view of one
  operation, looked up by identifier or ``operationId``.
"""

from __future__ import annotations

from typing import Any, Optional

import typer

from specview.output import debug, error, format_data, info, print_table


inspect_app = typer.Typer(no_args_is_help=True)

_SPEC_URL_OPTION = typer.Option(
    None, "--spec-url", help="URL the document is published at (base for relative servers)."
)


def _build_menu(
    source: str,
    spec_url: Optional[str],
    required_first: Optional[bool] = None,
    expand_responses: Optional[str] = None,
):  # noqa: ANN202
    """Load *source* and build its menu of operation views.

    Raises:
        typer.Exit: With the error's exit code when the configuration or
            the document is invalid.
    """
    from specview.config import resolve_config
    from specview.exceptions import SpecviewError
    from specview.parser import SpecResolver, load_spec, validate_openapi_version
    from specview.views import build_operation_views

    try:
        config = resolve_config(
            cli_required_first=required_first,
            cli_expand_responses=expand_responses,
        )
        raw = load_spec(source)
        version = validate_openapi_version(raw)
        debug(f"Loaded OpenAPI {version} document from {source}")
        resolver = SpecResolver(raw, spec_url=spec_url)
        return build_operation_views(resolver, config.options)
    except SpecviewError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def _require_operation(menu: list[Any], key: str):  # noqa: ANN202
    """Look up *key* in *menu*.

    Raises:
        NotFoundError: If no operation has that identifier or operationId.
    """
    from specview.exceptions import NotFoundError
    from specview.views import find_operation

    view = find_operation(menu, key)
    if view is None:
        raise NotFoundError(f"Operation '{key}' not found")
    return view


def _media_to_dict(media: Any) -> dict[str, Any]:
    return {"type": media.name, "schema": media.schema}


def _operation_to_dict(view: Any) -> dict[str, Any]:
    """Flatten an :class:`~specview.views.OperationView` for display."""
    body = view.request_body
    return {
        "identifier": view.identifier,
        "pointer": view.pointer,
        "operation_id": view.operation_id,
        "name": view.name,
        "verb": view.verb,
        "path": view.path,
        "deprecated": view.deprecated,
        "description": view.description,
        "servers": [server.model_dump() for server in view.servers],
        "security": [
            [
                {
                    "id": scheme.id,
                    "type": scheme.scheme.type if scheme.scheme else None,
                    "scopes": scheme.scopes,
                }
                for scheme in requirement.schemes
            ]
            for requirement in view.security
        ],
        "parameters": [
            {
                "name": param.name,
                "in": param.raw_location,
                "required": param.required,
                "description": param.description,
                "schema": param.schema,
            }
            for param in view.parameters
        ],
        "request_body": None
        if body is None
        else {
            "required": body.required,
            "description": body.description,
            "content": [_media_to_dict(media) for media in body.content],
        },
        "responses": [
            {
                "code": response.code,
                "kind": response.kind,
                "description": response.description,
                "expanded": response.expanded,
                "content": [_media_to_dict(media) for media in response.content],
            }
            for response in view.responses
        ],
        "code_samples": [sample.model_dump() for sample in view.code_samples],
    }


@inspect_app.command("operations")
def inspect_operations(
    source: str = typer.Argument(help="Path to the OpenAPI document, or '-' for stdin."),
    spec_url: Optional[str] = _SPEC_URL_OPTION,
) -> None:
    """List every operation with its identifier.

    Example::

        specview inspect operations petstore.yaml
    """
    from specview.views import iter_operations

    menu = _build_menu(source, spec_url)
    rows = [
        [
            op.identifier,
            op.verb.upper(),
            op.path,
            op.name,
            "Yes" if op.deprecated else "",
        ]
        for op in iter_operations(menu)
    ]
    if not rows:
        info("No operations defined in this document.")
        return
    print_table(
        ["Identifier", "Verb", "Path", "Name", "Deprecated"],
        rows,
        title=f"Operations ({len(rows)})",
    )


@inspect_app.command("operation")
def inspect_operation(
    source: str = typer.Argument(help="Path to the OpenAPI document, or '-' for stdin."),
    key: str = typer.Argument(help="Operation identifier or operationId."),
    spec_url: Optional[str] = _SPEC_URL_OPTION,
    required_first: Optional[bool] = typer.Option(
        None,
        "--required-first/--no-required-first",
        help="List required parameters first.",
    ),
    expand_responses: Optional[str] = typer.Option(
        None,
        "--expand-responses",
        help="Comma separated response codes to expand, or 'all'.",
    ),
) -> None:
    """Show the full view of one operation.

    Example::

        specview inspect operation petstore.yaml listPets
        specview inspect operation petstore.yaml 'tag/pets/paths/~1pets/get' --json
    """
    from specview.exceptions import NotFoundError

    menu = _build_menu(source, spec_url, required_first, expand_responses)
    try:
        view = _require_operation(menu, key)
    except NotFoundError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    view.activate()
    format_data(_operation_to_dict(view), title=f"{view.verb.upper()} {view.path}")
