import pytest

from docpipe.documents.models import (
    AnalysisResult,
    ClassificationMethod,
    ClassificationResult,
    FileDescriptor,
    MediaKind,
    PageClassification,
    SplitDocument,
    clamp_confidence,
)


class TestMediaKindDetect:
    @pytest.mark.parametrize(
        ("name", "mime", "expected"),
        [
            ("scan.jpg", None, MediaKind.IMAGE),
            ("scan.JPEG", None, MediaKind.IMAGE),
            ("pack.pdf", None, MediaKind.PDF),
            ("book.xlsx", None, MediaKind.SPREADSHEET),
            ("notes.txt", None, MediaKind.UNSUPPORTED),
            ("noext", "image/png", MediaKind.IMAGE),
            ("upload.bin", "application/pdf", MediaKind.PDF),
        ],
    )
    def test_detects_kind(self, name: str, mime: str | None, expected: MediaKind) -> None:
        assert MediaKind.detect(name, mime) is expected

    def test_mime_type_wins_over_extension(self) -> None:
        assert MediaKind.detect("photo.pdf", "image/jpeg") is MediaKind.IMAGE

    def test_office_lock_file_is_unsupported(self) -> None:
        assert MediaKind.detect("~$customers.xlsx") is MediaKind.UNSUPPORTED


class TestFileDescriptor:
    def test_from_bytes_detects_kind_and_mime(self) -> None:
        file = FileDescriptor.from_bytes("a.jpg", b"data")
        assert file.media_kind is MediaKind.IMAGE
        assert file.mime_type == "image/jpeg"
        assert file.size_bytes == 4
        assert file.extension == ".jpg"

    def test_empty_name_raises(self) -> None:
        with pytest.raises(ValueError):
            FileDescriptor.from_bytes("", b"data")

    def test_repr_hides_payload(self) -> None:
        file = FileDescriptor.from_bytes("a.jpg", b"secret-bytes")
        assert "secret-bytes" not in repr(file)


class TestClampConfidence:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (85, 85),
            (85.6, 86),
            ("70", 70),
            (0.7, 70),
            (150, 100),
            (-5, 0),
            (float("inf"), 100),
        ],
    )
    def test_clamps(self, value: object, expected: int) -> None:
        assert clamp_confidence(value) == expected

    @pytest.mark.parametrize("value", [None, "high", float("nan"), True, [80]])
    def test_non_numeric_uses_default(self, value: object) -> None:
        assert clamp_confidence(value, default=50) == 50


class TestClassificationResult:
    def test_build_resolves_folder_and_milestone(self) -> None:
        result = ClassificationResult.build(document_type="insurance_quote", confidence=77)
        assert result.document_type_name == "Insurance Quote"
        assert result.folder == "Insurance"
        assert result.milestone == "registration"

    def test_build_coerces_unknown_type_to_other(self) -> None:
        result = ClassificationResult.build(document_type="passport", confidence=90)
        assert result.document_type == "other"
        assert result.confidence == 90

    def test_fallback_is_other_with_zero_confidence(self) -> None:
        result = ClassificationResult.fallback("Classification failed: boom")
        assert result.document_type == "other"
        assert result.confidence == 0
        assert result.summary == "Classification failed: boom"
        assert result.method is ClassificationMethod.NONE
        assert result.needs_review

    def test_confident_known_type_does_not_need_review(self) -> None:
        result = ClassificationResult.build(document_type="vsa", confidence=80)
        assert not result.needs_review

    def test_is_immutable(self) -> None:
        result = ClassificationResult.build(document_type="vsa", confidence=80)
        with pytest.raises(AttributeError):
            result.confidence = 10  # type: ignore[misc]


class TestSplitDocument:
    def test_create_normalizes_type_and_confidence(self) -> None:
        split = SplitDocument.create("doc-0", "bogus", [1, 2], 120)
        assert split.document_type == "other"
        assert split.document_type_name == "Other Document"
        assert split.confidence == 100
        assert split.output is None

    def test_with_output_returns_new_copy(self) -> None:
        split = SplitDocument.create("doc-0", "vsa", [1, 2, 3], 80)
        realized = split.with_output([1, 3], b"%PDF")
        assert realized.pages == [1, 3]
        assert realized.output == b"%PDF"
        assert split.pages == [1, 2, 3]
        assert split.output is None


class TestAnalysisResult:
    def test_ungrouped_pages(self) -> None:
        result = AnalysisResult(
            total_pages=4,
            suggested_splits=[SplitDocument.create("doc-0", "vsa", [1, 2], 80)],
        )
        assert result.ungrouped_pages == [3, 4]

    def test_page_texts_follow_page_order(self) -> None:
        result = AnalysisResult(
            total_pages=2,
            page_classifications=[
                PageClassification(1, "vsa", "Vehicle Sales Agreement", 80, raw_text="one"),
                PageClassification(2, "vsa", "Vehicle Sales Agreement", 80, raw_text="two"),
            ],
        )
        assert result.page_texts == ["one", "two"]
