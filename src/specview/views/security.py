"""Expand security requirements into resolved scheme details.

A *Security Requirement Object* maps scheme names to the scopes an
operation needs, e.g. ``{"petstore_auth": ["read:pets"]}``. Each name is
looked up in ``components/securitySchemes``. A name that is not declared
there is logged and kept with ``scheme=None`` so the display layer can
still show the requirement.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from specview.models import SecurityScheme
from specview.parser.resolver import SpecResolver

logger = logging.getLogger(__name__)

SECURITY_SCHEMES_SECTION_PREFIX = "section/Authentication/"
"""Identifier prefix of the document section describing a scheme."""


def select_security(
    operation_security: Optional[list[Any]],
    document_security: Optional[list[Any]],
) -> list[Any]:
    """Pick the requirement list that applies to an operation.

    The operation-level list wins whenever it is present, even when it is
    empty: ``security: []`` switches authentication off for that operation.
    """
    if operation_security is not None:
        return operation_security
    return document_security or []


class ResolvedScheme(BaseModel):
    """One scheme entry of a requirement, with its declaration looked up."""

    id: str
    section_id: str
    scopes: list[str] = Field(default_factory=list)
    scheme: Optional[SecurityScheme] = None

    @property
    def is_declared(self) -> bool:
        return self.scheme is not None


class SecurityRequirementView:
    """A single security requirement with every scheme resolved.

    All schemes listed in one requirement must be satisfied together;
    separate requirements in the operation's list are alternatives.

    Args:
        requirement: The raw requirement mapping.
        resolver: The shared document resolver. Kept for later lookups;
            the view does not own it.
    """

    def __init__(self, requirement: Any, resolver: SpecResolver) -> None:
        self._resolver = resolver
        if not isinstance(requirement, dict):
            logger.warning("Ignoring malformed security requirement: %r", requirement)
            requirement = {}
        self.schemes: list[ResolvedScheme] = [
            self._resolve(str(scheme_id), scopes)
            for scheme_id, scopes in requirement.items()
        ]

    def _resolve(self, scheme_id: str, scopes: Any) -> ResolvedScheme:
        declared = self._resolver.deref(self._resolver.security_schemes.get(scheme_id))
        scheme: Optional[SecurityScheme] = None
        if isinstance(declared, dict) and declared:
            try:
                scheme = SecurityScheme.model_validate(declared)
            except ValidationError as exc:
                logger.warning("Invalid security scheme '%s': %s", scheme_id, exc)
        else:
            logger.warning("Non existing security scheme referenced: %s", scheme_id)

        return ResolvedScheme(
            id=scheme_id,
            section_id=SECURITY_SCHEMES_SECTION_PREFIX + scheme_id,
            scopes=[str(scope) for scope in scopes] if isinstance(scopes, list) else [],
            scheme=scheme,
        )

    @property
    def is_anonymous(self) -> bool:
        """``True`` for the empty requirement ``{}`` (authentication optional)."""
        return not self.schemes

    def __repr__(self) -> str:
        return f"SecurityRequirementView({[s.id for s in self.schemes]!r})"


def resolve_security(
    resolver: SpecResolver, requirements: list[Any]
) -> list[SecurityRequirementView]:
    """Wrap each raw requirement in a :class:`SecurityRequirementView`."""
    return [SecurityRequirementView(requirement, resolver) for requirement in requirements]
