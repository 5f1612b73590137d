"""AI-powered document classification oracle."""

import base64
import json
import re
from pathlib import Path
from typing import Any

from docpipe.classification.base import BaseClassificationOracle
from docpipe.classification.client_base import BaseClassificationClient
from docpipe.classification.exceptions import ClassificationParseError
from docpipe.classification.models import (
    OracleClassification,
    PageGrouping,
    WholeDocumentAnalysis,
)
from docpipe.classification.prompt_loader import load_json_schema, load_prompt_template
from docpipe.classification.validator import (
    build_classification,
    build_page_grouping,
    build_whole_document,
)
from docpipe.documents.document_types import available_document_types
from docpipe.logging.logger import Log

MAX_PAGE_CHARS = 3000
BLANK_PAGE_MARKER = "[BLANK PAGE]"

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


class _PromptBundle:
    """A prompt template and its response schema, loaded once."""

    def __init__(self, name: str, schema_name: str, prompt_dir: Path | None) -> None:
        self.template = load_prompt_template(name, prompt_dir)
        self.schema_text = load_json_schema(name, prompt_dir)
        self.schema = json.loads(self.schema_text)
        self.schema_name = schema_name


class ClassificationOracle(BaseClassificationOracle):
    """Classifies extracted text, page sets, and whole PDFs through a chat AI client."""

    def __init__(
        self,
        *,
        client: BaseClassificationClient,
        model: str,
        document_model: str | None = None,
        temperature: float = 0.0,
        prompt_dir: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._document_model = document_model or model
        self._temperature = max(0.0, min(0.2, temperature))
        self._system_prompt = load_prompt_template("system", prompt_dir).strip()
        self._classify = _PromptBundle("classify", "classification_result", prompt_dir)
        self._batch = _PromptBundle("batch", "page_grouping", prompt_dir)
        self._whole = _PromptBundle("whole_document", "whole_document_analysis", prompt_dir)
        self._document_types = "\n".join(
            f"- {type_id}: {name}" for type_id, name in available_document_types()
        )

    async def classify(self, raw_text: str, type_hint: str | None = None) -> OracleClassification:
        hint = ""
        if type_hint:
            hint = f"\nHINT: The user indicated this might be a \"{type_hint}\" document.\n"
        prompt = self._classify.template.format(
            document_types=self._document_types,
            type_hint=hint,
            json_schema=self._classify.schema_text,
            raw_text=raw_text,
        )
        data = await self._call(self._classify, prompt, self._model)
        result = build_classification(data)
        Log.info(f"Classified text as {result.document_type} ({result.confidence}%)")
        return result

    async def classify_batch_text(self, page_texts: list[str]) -> PageGrouping:
        prompt = self._batch.template.format(
            page_count=len(page_texts),
            document_types=self._document_types,
            json_schema=self._batch.schema_text,
            page_texts=format_page_texts(page_texts),
        )
        data = await self._call(self._batch, prompt, self._model)
        grouping = build_page_grouping(data)
        Log.info(
            f"Grouped {len(page_texts)} pages into {len(grouping.page_groups)} documents"
        )
        return grouping

    async def classify_whole_document(
        self, document_bytes: bytes, filename: str = "document.pdf"
    ) -> WholeDocumentAnalysis:
        encoded = base64.b64encode(document_bytes).decode("ascii")
        attachment = {
            "type": "file",
            "file": {
                "filename": filename,
                "file_data": f"data:application/pdf;base64,{encoded}",
            },
        }
        prompt = self._whole.template.format(
            document_types=self._document_types,
            json_schema=self._whole.schema_text,
        )
        data = await self._call(self._whole, prompt, self._document_model, [attachment])
        analysis = build_whole_document(data)
        Log.info(
            f"Whole-document analysis of {filename}: {analysis.total_pages} pages, "
            f"{len(analysis.page_groups)} documents"
        )
        return analysis

    async def _call(
        self,
        bundle: _PromptBundle,
        prompt: str,
        model: str,
        attachments: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        Log.debug(f"Classification prompt ({bundle.schema_name}):\n{prompt}")
        raw_response = await self._client.create_chat_completion(
            model=model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            schema_name=bundle.schema_name,
            json_schema=bundle.schema,
            attachments=attachments or (),
        )
        Log.debug(f"AI raw response:\n{raw_response}")
        return parse_json(raw_response)


def format_page_texts(page_texts: list[str]) -> str:
    """Join page texts with 1-indexed page markers, truncating long pages."""
    sections = []
    for number, text in enumerate(page_texts, start=1):
        body = text.strip()[:MAX_PAGE_CHARS] or BLANK_PAGE_MARKER
        sections.append(f"=== PAGE {number} ===\n{body}")
    return "\n\n".join(sections)


def parse_json(raw: str) -> dict[str, Any]:
    """Parse an oracle response into a dict.

    Tolerates markdown code fences and prose around the object.

    Raises:
        ClassificationParseError: if no JSON object can be recovered.
    """
    cleaned = raw.strip()
    if cleaned.startswith("```"):
        lines = cleaned.splitlines()
        if lines and lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines).strip()
    if not cleaned.startswith("{"):
        match = _JSON_OBJECT.search(cleaned)
        if match is None:
            raise ClassificationParseError("No JSON object in response")
        cleaned = match.group(0)

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise ClassificationParseError(f"Invalid JSON response: {exc}") from exc

    if not isinstance(parsed, dict):
        raise ClassificationParseError("JSON response must be an object")
    return parsed
