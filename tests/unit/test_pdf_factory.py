from unittest.mock import MagicMock

import pytest

from docpipe.pdf.factory import PdfExtractorFactory, build_renderer
from docpipe.pdf.pdfplumber_adapter import PdfPlumberAdapter
from docpipe.pdf.pymupdf_adapter import PyMuPdfAdapter
from docpipe.pdf.renderer import PdfRenderer


def _make_settings(pdf_engine: str = "pymupdf") -> MagicMock:
    settings = MagicMock()
    settings.pdf_engine = pdf_engine
    settings.render_scale = 1.5
    settings.thumbnail_scale = 0.25
    return settings


class TestPdfExtractorFactory:
    def test_creates_pdfplumber_adapter(self) -> None:
        adapter = PdfExtractorFactory.create(_make_settings("pdfplumber"))
        assert isinstance(adapter, PdfPlumberAdapter)

    def test_creates_pymupdf_adapter(self) -> None:
        adapter = PdfExtractorFactory.create(_make_settings("pymupdf"))
        assert isinstance(adapter, PyMuPdfAdapter)

    def test_is_case_insensitive(self) -> None:
        adapter = PdfExtractorFactory.create(_make_settings("PdfPlumber"))
        assert isinstance(adapter, PdfPlumberAdapter)

    def test_raises_for_unknown_engine(self) -> None:
        with pytest.raises(ValueError, match="Unknown PDF engine"):
            PdfExtractorFactory.create(_make_settings("unknown"))


def test_build_renderer() -> None:
    assert isinstance(build_renderer(_make_settings()), PdfRenderer)
