"""OpenAPI document access -- load a document and resolve ``$ref`` pointers.

Typical usage::

    from specview.parser import SpecResolver, load_spec, validate_openapi_version

    raw = load_spec("petstore.yaml")
    validate_openapi_version(raw)
    resolver = SpecResolver(raw, spec_url="https://example.com/openapi.yaml")

Sub-modules:

* :mod:`~specview.parser.loader` -- file/stdin I/O, format detection and
  OpenAPI version validation.
* :mod:`~specview.parser.resolver` -- :class:`SpecResolver`, the read-only
  document collaborator shared by all operation views.
"""

from specview.parser.loader import load_spec, validate_openapi_version
from specview.parser.resolver import SpecResolver, is_ref

__all__ = ["SpecResolver", "is_ref", "load_spec", "validate_openapi_version"]
