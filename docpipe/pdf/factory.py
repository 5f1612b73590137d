from docpipe.config.settings import Settings
from docpipe.pdf.base import BasePdfExtractor
from docpipe.pdf.pdfplumber_adapter import PdfPlumberAdapter
from docpipe.pdf.pymupdf_adapter import PyMuPdfAdapter
from docpipe.pdf.renderer import PdfRenderer


class PdfExtractorFactory:
    """Creates the correct PDF text extractor based on settings."""

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()


def build_renderer(settings: Settings) -> PdfRenderer:
    return PdfRenderer(
        render_scale=settings.render_scale,
        thumbnail_scale=settings.thumbnail_scale,
    )
