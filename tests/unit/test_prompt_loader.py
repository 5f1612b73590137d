"""Tests for prompt template and JSON schema loading."""

import json
from pathlib import Path

import pytest

from docpipe.classification.exceptions import ClassificationError
from docpipe.classification.prompt_loader import load_json_schema, load_prompt_template


class TestLoadPromptTemplate:
    @pytest.mark.parametrize(
        ("name", "placeholders"),
        [
            ("classify", ["{document_types}", "{type_hint}", "{json_schema}", "{raw_text}"]),
            ("batch", ["{page_count}", "{document_types}", "{json_schema}", "{page_texts}"]),
            ("whole_document", ["{document_types}", "{json_schema}"]),
        ],
    )
    def test_bundled_templates_have_placeholders(
        self, name: str, placeholders: list[str]
    ) -> None:
        template = load_prompt_template(name)
        for placeholder in placeholders:
            assert placeholder in template

    def test_loads_system_prompt(self) -> None:
        assert "JSON" in load_prompt_template("system")

    def test_loads_from_custom_directory(self, tmp_path: Path) -> None:
        (tmp_path / "classify_prompt.txt").write_text("Hello {raw_text}")
        assert load_prompt_template("classify", tmp_path) == "Hello {raw_text}"

    def test_missing_file_raises_error(self, tmp_path: Path) -> None:
        with pytest.raises(ClassificationError, match="Failed to load prompt"):
            load_prompt_template("classify", tmp_path)


class TestLoadJsonSchema:
    @pytest.mark.parametrize("name", ["classify", "batch", "whole_document"])
    def test_bundled_schemas_are_strict_objects(self, name: str) -> None:
        schema = json.loads(load_json_schema(name))
        assert schema["type"] == "object"
        assert schema["additionalProperties"] is False
        assert sorted(schema["required"]) == sorted(schema["properties"])

    def test_missing_file_raises_error(self, tmp_path: Path) -> None:
        with pytest.raises(ClassificationError, match="Failed to load JSON schema"):
            load_json_schema("classify", tmp_path)
