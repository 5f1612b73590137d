"""Example classification client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseClassificationClient and register the provider in
ClassificationOracleFactory.
"""

import json
from collections.abc import Sequence
from typing import ClassVar

from docpipe.classification.client_base import BaseClassificationClient


class ExampleClientAdapter(BaseClassificationClient):
    """Example adapter that returns fixed valid JSON for each response schema.

    No network calls. Useful for local development and tests.
    """

    RESPONSES: ClassVar[dict[str, dict[str, object]]] = {
        "classification_result": {
            "documentType": "vsa",
            "confidence": 85,
            "customerName": "TAN AH KOW",
            "signed": True,
            "summary": "Vehicle Sales Agreement for Toyota Camry",
            "extractedFields": {"name": "TAN AH KOW", "vehicleModel": "Toyota Camry"},
        },
        "page_grouping": {
            "customerName": "TAN AH KOW",
            "pages": [],
            "documentGroups": [],
        },
        "whole_document_analysis": {
            "customerName": "TAN AH KOW",
            "totalPages": 1,
            "pageTexts": ["VEHICLE SALES AGREEMENT"],
            "pages": [{"documentType": "vsa", "confidence": 85}],
            "documentGroups": [{"documentType": "vsa", "pages": [1], "confidence": 85}],
        },
    }

    def __init__(self, responses: dict[str, dict[str, object]] | None = None) -> None:
        self._responses = {**self.RESPONSES, **(responses or {})}
        self.calls: list[str] = []

    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        schema_name: str,
        json_schema: dict[str, object],
        attachments: Sequence[dict[str, object]] = (),
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt, json_schema, attachments
        self.calls.append(schema_name)
        return json.dumps(self._responses.get(schema_name, {}))
