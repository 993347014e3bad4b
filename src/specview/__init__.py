"""specview -- Normalize OpenAPI operations into display-ready views.

This package turns one raw OpenAPI *Operation Object* plus the context it
inherits from its path item and document (path-level parameters, global
servers and security, the enclosing tag group) into an
:class:`~specview.views.OperationView`: a stable identifier, merged
parameters, classified responses and resolved security schemes.

Typical usage::

    from specview.parser import SpecResolver, load_spec
    from specview.views import build_operation_views

    resolver = SpecResolver(load_spec("petstore.yaml"), spec_url="https://example.com/openapi.yaml")
    items = build_operation_views(resolver)

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models for configuration and resolved details.
    config: XDG-aware configuration and option precedence.
    pointer: JSON Pointer compilation used for identifiers.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting with Rich support.
"""

__version__ = "0.1.0"
