"""Canonical Pydantic models shared across all specview modules.

The models fall into three groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`ViewOptions`, :class:`OutputConfig` and :class:`GlobalConfig`.

**Input models** -- the raw operation as handed to the view layer:
    :class:`OperationFragment` (plus :class:`ExternalDocs` and
    :class:`CodeSample`). Input models are tolerant and keep unknown keys
    (vendor extensions) in ``model_extra``.

**Resolved detail models** -- produced by the view layer:
    :class:`HTTPMethod`, :class:`ParameterLocation`, :class:`StatusFamily`,
    :class:`NormalizedServer` and :class:`SecurityScheme`.
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


# --- Configuration ---


class ViewOptions(BaseModel):
    """Options that change how operation views are derived.

    Example::

        ViewOptions(required_props_first=True, expand_responses="200,201")
    """

    required_props_first: bool = Field(
        default=False,
        description="List required parameters before optional ones",
    )
    expand_responses: Union[Literal["all"], list[str]] = Field(
        default_factory=list,
        description="Response codes expanded by default: 'all' or a list of codes",
    )

    @field_validator("expand_responses", mode="before")
    @classmethod
    def _split_codes(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            if value.strip() == "all":
                return "all"
            return [code.strip() for code in value.split(",") if code.strip()]
        return value

    def is_expanded(self, code: str) -> bool:
        """Return whether the response for *code* starts out expanded."""
        if self.expand_responses == "all":
            return True
        return code in self.expand_responses


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: Literal["auto", "json", "plain", "rich"] = Field(
        default="auto",
        description="Format used when neither --json nor --plain is given",
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/specview/config.json``.

    Loaded and saved by :func:`~specview.config.load_global_config` and
    :func:`~specview.config.save_global_config`. See
    :func:`~specview.config.resolve_config` for the precedence chain.
    """

    options: ViewOptions = Field(default_factory=ViewOptions)
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- Enumerations ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised by OpenAPI 3.x path-item objects."""

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"


class ParameterLocation(str, enum.Enum):
    """Locations where an API parameter can appear, per OpenAPI ``in`` field."""

    QUERY = "query"
    HEADER = "header"
    PATH = "path"
    COOKIE = "cookie"


class StatusFamily(str, enum.Enum):
    """The five numeric ranges of HTTP status codes."""

    INFO = "info"
    SUCCESS = "success"
    REDIRECT = "redirect"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"

    @property
    def is_error(self) -> bool:
        return self in (StatusFamily.CLIENT_ERROR, StatusFamily.SERVER_ERROR)


# --- Input fragments ---


class ExternalDocs(BaseModel):
    """An OpenAPI *External Documentation Object*."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    url: Optional[str] = None
    description: Optional[str] = None


class CodeSample(BaseModel):
    """One entry of the ``x-code-samples`` vendor extension."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    lang: Optional[str] = None
    label: Optional[str] = None
    source: str = ""


class OperationFragment(BaseModel):
    """A raw operation plus the context inherited from its path item.

    Accepts both the snake_case field names and the camelCase keys used in
    OpenAPI documents (``operationId``, ``requestBody``, ...). ``verb`` and
    ``path`` are the only required fields; everything else may be missing
    or malformed. Numbers given as text are stringified, a ``null`` or
    wrongly typed optional field falls back to its default, and malformed
    list entries are dropped.

    ``servers`` and ``security`` stay ``None`` unless the document gives a
    list, so an explicit ``[]`` is still told apart from "not declared".

    Unknown keys (``x-*`` extensions, ``callbacks``) are kept in
    ``model_extra``.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    verb: str = Field(
        min_length=1, validation_alias=AliasChoices("verb", "httpVerb")
    )
    path: str = Field(
        min_length=1, validation_alias=AliasChoices("path", "pathName")
    )
    operation_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("operation_id", "operationId")
    )
    summary: Optional[str] = None
    description: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    external_docs: Optional[ExternalDocs] = Field(
        default=None, validation_alias=AliasChoices("external_docs", "externalDocs")
    )
    deprecated: bool = False
    parameters: Optional[list[Any]] = None
    path_parameters: Optional[list[Any]] = Field(
        default=None,
        validation_alias=AliasChoices("path_parameters", "pathParameters"),
    )
    request_body: Optional[dict[str, Any]] = Field(
        default=None, validation_alias=AliasChoices("request_body", "requestBody")
    )
    responses: dict[str, Any] = Field(default_factory=dict)
    security: Optional[list[Any]] = None
    servers: Optional[list[Any]] = None
    path_servers: Optional[list[Any]] = Field(
        default=None, validation_alias=AliasChoices("path_servers", "pathServers")
    )
    code_samples: Optional[list[CodeSample]] = Field(
        default=None,
        validation_alias=AliasChoices("code_samples", "x-code-samples", "x-codeSamples"),
    )

    @field_validator("verb")
    @classmethod
    def _lower_verb(cls, value: str) -> str:
        return value.lower()

    @field_validator("deprecated", mode="before")
    @classmethod
    def _truthy(cls, value: Any) -> bool:
        return bool(value)

    @field_validator("operation_id", "summary", "description", mode="before")
    @classmethod
    def _text(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (bool, int, float)):
            return str(value)
        return None

    @field_validator("tags", mode="before")
    @classmethod
    def _tag_names(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        return [str(tag) for tag in value if isinstance(tag, (str, int, float))]

    @field_validator(
        "parameters", "path_parameters", "security", "servers", "path_servers", mode="before"
    )
    @classmethod
    def _list_or_none(cls, value: Any) -> Optional[list[Any]]:
        # Entries are checked where they are used; only the container matters here.
        return value if isinstance(value, list) else None

    @field_validator("request_body", mode="before")
    @classmethod
    def _mapping_or_none(cls, value: Any) -> Optional[dict[str, Any]]:
        return value if isinstance(value, dict) else None

    @field_validator("external_docs", mode="before")
    @classmethod
    def _valid_docs(cls, value: Any) -> Optional[ExternalDocs]:
        if value is None:
            return None
        try:
            return ExternalDocs.model_validate(value)
        except ValidationError:
            logger.debug("Ignoring malformed externalDocs: %r", value)
            return None

    @field_validator("code_samples", mode="before")
    @classmethod
    def _valid_samples(cls, value: Any) -> Optional[list[CodeSample]]:
        if not isinstance(value, list):
            return None
        samples = []
        for sample in value:
            try:
                samples.append(CodeSample.model_validate(sample))
            except ValidationError:
                logger.debug("Skipping malformed code sample: %r", sample)
        return samples

    @field_validator("responses", mode="before")
    @classmethod
    def _stringify_codes(cls, value: Any) -> Any:
        # YAML loads unquoted status codes as integers.
        if isinstance(value, dict):
            return {str(code): response for code, response in value.items()}
        return {}

    @classmethod
    def from_path_item(
        cls,
        path: str,
        verb: str,
        operation: dict[str, Any],
        path_item: Optional[dict[str, Any]] = None,
    ) -> "OperationFragment":
        """Build a fragment for ``paths[path][verb]`` with its inherited context.

        Path-level ``parameters`` and ``servers`` are attached as
        ``path_parameters`` and ``path_servers``.
        """
        path_item = path_item or {}
        data = dict(operation)
        data["httpVerb"] = verb
        data["pathName"] = path
        data["pathParameters"] = path_item.get("parameters")
        data["pathServers"] = path_item.get("servers")
        return cls.model_validate(data)


# --- Resolved details ---


class NormalizedServer(BaseModel):
    """A server entry whose URL has been resolved to an absolute form.

    ``{variable}`` placeholders are kept verbatim; substituting them is a
    rendering concern.
    """

    url: str
    description: str = ""
    variables: dict[str, Any] = Field(default_factory=dict)


class SecurityScheme(BaseModel):
    """An OpenAPI *Security Scheme Object* declared in the document.

    The ``type`` field discriminates between ``apiKey``, ``http``, ``oauth2``,
    and ``openIdConnect`` schemes. Only the fields relevant to the active
    scheme type are populated; the rest remain ``None``.
    """

    model_config = ConfigDict(populate_by_name=True)

    type: str = ""  # apiKey, http, oauth2, openIdConnect
    description: Optional[str] = None
    # apiKey
    name: Optional[str] = None
    location: Optional[str] = Field(default=None, alias="in")
    # http
    scheme: Optional[str] = None
    bearer_format: Optional[str] = Field(default=None, alias="bearerFormat")
    # oauth2
    flows: dict[str, Any] = Field(default_factory=dict)
    # openIdConnect
    openid_connect_url: Optional[str] = Field(default=None, alias="openIdConnectUrl")

    @field_validator("flows", mode="before")
    @classmethod
    def _empty_flows(cls, value: Any) -> Any:
        return value or {}
