from docpipe.classification.validator import (
    DEFAULT_CONFIDENCE,
    build_classification,
    build_page_grouping,
    build_whole_document,
)


class TestBuildClassification:
    def test_valid_response(self) -> None:
        result = build_classification({
            "documentType": "vsa",
            "confidence": 85,
            "customerName": "TAN AH KOW",
            "signed": True,
            "summary": "Vehicle Sales Agreement",
            "extractedFields": {"vehicleModel": "BYD ATTO 3", "nric": None},
        })
        assert result.document_type == "vsa"
        assert result.confidence == 85
        assert result.customer_name == "TAN AH KOW"
        assert result.signed is True
        assert result.extracted_fields == {"vehicleModel": "BYD ATTO 3"}

    def test_empty_response_takes_defaults(self) -> None:
        result = build_classification({})
        assert result.document_type == "other"
        assert result.confidence == DEFAULT_CONFIDENCE
        assert result.customer_name == ""
        assert result.signed is False
        assert result.extracted_fields == {}

    def test_unknown_type_becomes_other(self) -> None:
        assert build_classification({"documentType": "passport"}).document_type == "other"

    def test_confidence_is_coerced_and_clamped(self) -> None:
        assert build_classification({"confidence": "92.4"}).confidence == 92
        assert build_classification({"confidence": 250}).confidence == 100
        assert build_classification({"confidence": "high"}).confidence == DEFAULT_CONFIDENCE

    def test_signed_must_be_true_boolean(self) -> None:
        assert build_classification({"signed": "yes"}).signed is False

    def test_customer_name_falls_back_to_extracted_name(self) -> None:
        result = build_classification({"customerName": None, "extractedFields": {"name": "LIM"}})
        assert result.customer_name == "LIM"


class TestBuildPageGrouping:
    def test_groups_and_page_types(self) -> None:
        grouping = build_page_grouping({
            "customerName": "LIM",
            "pages": [{"documentType": "nric", "confidence": 90}, {"documentType": "xyz"}],
            "documentGroups": [
                {"documentType": "nric", "pages": [1], "confidence": 90},
                {"documentType": "vsa", "pages": ["2", 3, True, "x"], "confidence": 70},
            ],
        })
        assert grouping.customer_name == "LIM"
        assert [p.document_type for p in grouping.page_types] == ["nric", "other"]
        assert grouping.page_types[1].confidence == DEFAULT_CONFIDENCE
        assert grouping.page_groups[1].pages == [2, 3]

    def test_malformed_collections_become_empty(self) -> None:
        grouping = build_page_grouping({"pages": "nope", "documentGroups": {"a": 1}})
        assert grouping.page_types == []
        assert grouping.page_groups == []

    def test_non_object_groups_are_skipped(self) -> None:
        grouping = build_page_grouping({"documentGroups": ["vsa", {"documentType": "vsa"}]})
        assert len(grouping.page_groups) == 1
        assert grouping.page_groups[0].pages == []


class TestBuildWholeDocument:
    def test_reads_page_texts_and_total(self) -> None:
        analysis = build_whole_document({
            "totalPages": 2,
            "pageTexts": ["one", "two"],
            "documentGroups": [{"documentType": "vsa", "pages": [1, 2], "confidence": 80}],
        })
        assert analysis.total_pages == 2
        assert analysis.page_texts == ["one", "two"]
        assert analysis.page_groups[0].document_type == "vsa"

    def test_missing_total_uses_page_text_count(self) -> None:
        analysis = build_whole_document({"pageTexts": ["a", "b", "c"]})
        assert analysis.total_pages == 3
