import io
from collections.abc import Callable

import openpyxl
import pymupdf
import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


def make_pdf(page_lines: list[str]) -> bytes:
    """One page per entry; an empty entry yields a page with no text."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for line in page_lines:
        if line:
            c.drawString(72, 720, line)
        c.showPage()
    c.save()
    return buf.getvalue()


def make_xlsx(headers: list[str], rows: list[list[object]]) -> bytes:
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.title = "Customers"
    sheet.append(headers)
    for row in rows:
        sheet.append(row)
    buf = io.BytesIO()
    workbook.save(buf)
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    return make_pdf(["Hello PDF World"])


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    return make_pdf(["Page one content", "Page two content"])


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    return make_pdf([""])


@pytest.fixture()
def five_page_pdf_bytes() -> bytes:
    return make_pdf([f"Page {n} of the sales pack" for n in range(1, 6)])


@pytest.fixture()
def png_bytes(sample_pdf_bytes: bytes) -> bytes:
    """A real PNG image rendered from the sample PDF."""
    with pymupdf.open(stream=sample_pdf_bytes, filetype="pdf") as doc:
        return doc[0].get_pixmap(matrix=pymupdf.Matrix(0.5, 0.5)).tobytes("png")


@pytest.fixture()
def xlsx_factory() -> Callable[[list[str], list[list[object]]], bytes]:
    return make_xlsx


@pytest.fixture()
def customer_xlsx_bytes() -> bytes:
    return make_xlsx(
        ["Name", "NRIC", "Phone", "Email"],
        [["Tan Ah Kow", "S1234567A", "91234567", "tan@example.com"]],
    )


@pytest.fixture()
def pdf_factory() -> Callable[[list[str]], bytes]:
    return make_pdf
