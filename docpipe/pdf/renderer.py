"""Page rendering and page copying for PDFs, built on PyMuPDF."""

import base64

import pymupdf

from docpipe.pdf.exceptions import PdfRenderError

RENDER_MIME_TYPE = "image/png"


class PdfRenderer:
    """Renders PDF pages to PNG images and copies page subsets into new PDFs.

    Page numbers are 1-indexed throughout. The source bytes are only ever
    read; every output is a fresh document.
    """

    def __init__(self, render_scale: float = 2.0, thumbnail_scale: float = 0.5) -> None:
        self._render_scale = render_scale
        self._thumbnail_scale = thumbnail_scale

    def page_count(self, pdf_bytes: bytes) -> int:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                return doc.page_count
        except Exception as exc:
            raise PdfRenderError(f"Failed to open PDF: {exc}") from exc

    def render_pages(self, pdf_bytes: bytes) -> list[bytes]:
        """Render every page to PNG at the OCR render scale."""
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                return [self._render(page, self._render_scale) for page in doc]
        except Exception as exc:
            raise PdfRenderError(f"Failed to render PDF pages: {exc}") from exc

    def thumbnails(self, pdf_bytes: bytes, total_pages: int) -> list[str]:
        """Best-effort PNG data URLs for pages 1..total_pages.

        A page that fails to render, or lies beyond the document, yields "".
        """
        try:
            doc = pymupdf.open(stream=pdf_bytes, filetype="pdf")  # type: ignore[no-untyped-call]
        except Exception:
            return [""] * total_pages
        thumbnails: list[str] = []
        with doc:
            for index in range(total_pages):
                try:
                    if index >= doc.page_count:
                        raise PdfRenderError(f"page {index + 1} out of range")
                    png = self._render(doc[index], self._thumbnail_scale)
                    thumbnails.append(to_data_url(png, RENDER_MIME_TYPE))
                except Exception:
                    thumbnails.append("")
        return thumbnails

    def copy_pages(self, pdf_bytes: bytes, page_numbers: list[int]) -> bytes:
        """Build a new PDF holding the given pages, in the given order."""
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as source:  # type: ignore[no-untyped-call]
                with pymupdf.open() as output:  # type: ignore[no-untyped-call]
                    for page_number in page_numbers:
                        self._check_page(page_number, source.page_count)
                        output.insert_pdf(
                            source,
                            from_page=page_number - 1,
                            to_page=page_number - 1,
                        )
                    return output.tobytes()
        except PdfRenderError:
            raise
        except Exception as exc:
            raise PdfRenderError(f"Failed to copy pages {page_numbers}: {exc}") from exc

    @staticmethod
    def _render(page: pymupdf.Page, scale: float) -> bytes:
        pixmap = page.get_pixmap(matrix=pymupdf.Matrix(scale, scale), alpha=False)
        return pixmap.tobytes("png")

    @staticmethod
    def _check_page(page_number: int, page_count: int) -> None:
        if not 1 <= page_number <= page_count:
            raise PdfRenderError(
                f"Page {page_number} is outside the document (1..{page_count})"
            )


def to_data_url(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"
