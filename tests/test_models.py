"""Tests for specview.models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from specview.models import (
    CodeSample,
    GlobalConfig,
    HTTPMethod,
    OperationFragment,
    SecurityScheme,
    ViewOptions,
)


class TestViewOptions:
    def test_defaults(self) -> None:
        options = ViewOptions()
        assert options.required_props_first is False
        assert options.expand_responses == []
        assert not options.is_expanded("200")

    def test_comma_separated_codes(self) -> None:
        options = ViewOptions(expand_responses=" 200, 404 ,")
        assert options.expand_responses == ["200", "404"]
        assert options.is_expanded("404")
        assert not options.is_expanded("500")

    def test_all(self) -> None:
        options = ViewOptions(expand_responses="all")
        assert options.is_expanded("default")

    def test_none_means_empty(self) -> None:
        assert ViewOptions(expand_responses=None).expand_responses == []

    def test_output_format_values(self) -> None:
        with pytest.raises(ValidationError):
            GlobalConfig.model_validate({"output": {"format": "html"}})

    def test_global_config_nesting(self) -> None:
        config = GlobalConfig.model_validate({"options": {"required_props_first": True}})
        assert config.options.required_props_first is True
        assert config.output.format == "auto"


class TestHTTPMethod:
    def test_declaration_order(self) -> None:
        assert [m.value for m in HTTPMethod] == [
            "get", "put", "post", "delete", "options", "head", "patch", "trace"
        ]


class TestOperationFragment:
    def test_camel_case_keys(self) -> None:
        fragment = OperationFragment.model_validate(
            {
                "httpVerb": "POST",
                "pathName": "/pets",
                "operationId": "createPet",
                "requestBody": {"content": {}},
                "externalDocs": {"url": "https://docs.example.com"},
                "x-codeSamples": [{"lang": "Go", "source": "..."}],
            }
        )
        assert fragment.verb == "post"
        assert fragment.path == "/pets"
        assert fragment.operation_id == "createPet"
        assert fragment.request_body == {"content": {}}
        assert fragment.external_docs is not None
        assert fragment.code_samples == [CodeSample(lang="Go", source="...")]

    def test_snake_case_keys(self) -> None:
        fragment = OperationFragment(verb="get", path="/a", operation_id="a")
        assert fragment.operation_id == "a"

    def test_verb_and_path_required(self) -> None:
        with pytest.raises(ValidationError):
            OperationFragment.model_validate({"httpVerb": "get"})
        with pytest.raises(ValidationError):
            OperationFragment.model_validate({"pathName": "/a"})

    def test_integer_response_codes(self) -> None:
        fragment = OperationFragment.model_validate(
            {"verb": "get", "path": "/a", "responses": {200: {}, "default": {}}}
        )
        assert list(fragment.responses) == ["200", "default"]

    def test_null_responses(self) -> None:
        fragment = OperationFragment.model_validate({"verb": "get", "path": "/a", "responses": None})
        assert fragment.responses == {}

    def test_deprecated_coerced(self) -> None:
        fragment = OperationFragment.model_validate({"verb": "get", "path": "/a", "deprecated": 1})
        assert fragment.deprecated is True

    def test_null_optional_fields_use_defaults(self) -> None:
        fragment = OperationFragment.model_validate(
            {
                "verb": "get",
                "path": "/a",
                "tags": None,
                "parameters": None,
                "servers": None,
                "security": None,
                "externalDocs": None,
            }
        )
        assert fragment.tags == []
        assert fragment.parameters is None
        assert fragment.servers is None
        assert fragment.security is None
        assert fragment.external_docs is None

    def test_empty_lists_kept(self) -> None:
        fragment = OperationFragment.model_validate(
            {"verb": "get", "path": "/a", "servers": [], "security": []}
        )
        assert fragment.servers == []
        assert fragment.security == []

    def test_numbers_stringified(self) -> None:
        fragment = OperationFragment.model_validate(
            {"verb": "get", "path": "/a", "operationId": 12, "summary": 4.5, "tags": [1, None, "x"]}
        )
        assert fragment.operation_id == "12"
        assert fragment.summary == "4.5"
        assert fragment.tags == ["1", "x"]

    def test_malformed_external_docs_dropped(self) -> None:
        fragment = OperationFragment.model_validate(
            {"verb": "get", "path": "/a", "externalDocs": {"url": ["x"]}}
        )
        assert fragment.external_docs is None

    def test_extensions_kept(self) -> None:
        fragment = OperationFragment.model_validate({"verb": "get", "path": "/a", "x-internal": True})
        assert fragment.model_extra == {"x-internal": True}

    def test_from_path_item(self) -> None:
        path_item = {
            "parameters": [{"name": "id", "in": "path"}],
            "servers": [{"url": "/v2"}],
            "get": {"operationId": "getA"},
        }
        fragment = OperationFragment.from_path_item("/a/{id}", "get", path_item["get"], path_item)
        assert fragment.path_parameters == [{"name": "id", "in": "path"}]
        assert fragment.path_servers == [{"url": "/v2"}]
        assert fragment.security is None
        assert fragment.servers is None


class TestSecurityScheme:
    def test_api_key_aliases(self) -> None:
        scheme = SecurityScheme.model_validate({"type": "apiKey", "name": "X-Key", "in": "header"})
        assert scheme.location == "header"

    def test_bearer(self) -> None:
        scheme = SecurityScheme.model_validate(
            {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"}
        )
        assert scheme.bearer_format == "JWT"
        assert scheme.flows == {}

    def test_null_flows(self) -> None:
        assert SecurityScheme.model_validate({"type": "oauth2", "flows": None}).flows == {}
