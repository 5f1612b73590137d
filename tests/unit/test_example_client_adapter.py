"""Tests for ExampleClientAdapter (template/reference adapter)."""

import json

import pytest

from docpipe.classification.example_client_adapter import ExampleClientAdapter

pytestmark = pytest.mark.asyncio


async def _complete(adapter: ExampleClientAdapter, schema_name: str, **overrides: object) -> str:
    kwargs: dict[str, object] = {
        "model": "any",
        "temperature": 0.0,
        "system_prompt": "sys",
        "user_prompt": "user",
        "schema_name": schema_name,
        "json_schema": {"type": "object"},
    }
    kwargs.update(overrides)
    return await adapter.create_chat_completion(**kwargs)  # type: ignore[arg-type]


class TestExampleClientAdapter:
    async def test_returns_classification_json(self) -> None:
        data = json.loads(await _complete(ExampleClientAdapter(), "classification_result"))
        assert data["documentType"] == "vsa"
        assert data["customerName"] == "TAN AH KOW"

    async def test_responses_keyed_by_schema_name(self) -> None:
        adapter = ExampleClientAdapter()
        data = json.loads(await _complete(adapter, "whole_document_analysis"))
        assert data["totalPages"] == 1
        assert adapter.calls == ["whole_document_analysis"]

    async def test_unknown_schema_returns_empty_object(self) -> None:
        assert await _complete(ExampleClientAdapter(), "nope") == "{}"

    async def test_overrides_responses(self) -> None:
        adapter = ExampleClientAdapter({"classification_result": {"documentType": "pdpa"}})
        data = json.loads(await _complete(adapter, "classification_result"))
        assert data == {"documentType": "pdpa"}

    async def test_ignores_input_parameters(self) -> None:
        adapter = ExampleClientAdapter()
        r1 = await _complete(adapter, "page_grouping", model="a", user_prompt="u1")
        r2 = await _complete(adapter, "page_grouping", model="b", user_prompt="u2")
        assert r1 == r2
