import base64
from dataclasses import dataclass, field

from docpipe.documents.exceptions import FileAdapterError
from docpipe.documents.models import FileDescriptor, MediaKind
from docpipe.documents.spreadsheet import SpreadsheetContent, read_spreadsheet
from docpipe.pdf.exceptions import PdfRenderError
from docpipe.pdf.renderer import RENDER_MIME_TYPE, PdfRenderer, to_data_url


@dataclass(frozen=True)
class ImagePayload:
    """An image in the encoding the OCR engine accepts."""

    data: bytes = field(repr=False)
    mime_type: str

    @property
    def base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    @property
    def data_url(self) -> str:
        return to_data_url(self.data, self.mime_type)


class FileAdapter:
    """Normalizes an input file into OCR images or spreadsheet content.

    Makes no external calls.
    """

    def __init__(self, renderer: PdfRenderer) -> None:
        self._renderer = renderer

    def to_ocr_images(self, file: FileDescriptor) -> list[ImagePayload]:
        """Images pass through unchanged; PDFs become one PNG per page.

        Raises:
            FileAdapterError: for non image/PDF input or unreadable PDFs.
        """
        if file.media_kind is MediaKind.IMAGE:
            return [ImagePayload(data=file.data, mime_type=file.mime_type)]
        if file.media_kind is MediaKind.PDF:
            try:
                pages = self._renderer.render_pages(file.data)
            except PdfRenderError as exc:
                raise FileAdapterError(f"{file.name}: {exc}") from exc
            if not pages:
                raise FileAdapterError(f"{file.name}: PDF has no pages")
            return [ImagePayload(data=png, mime_type=RENDER_MIME_TYPE) for png in pages]
        raise FileAdapterError(
            f"{file.name}: media kind '{file.media_kind.value}' has no OCR image form"
        )

    def spreadsheet_content(self, file: FileDescriptor) -> SpreadsheetContent:
        if file.media_kind is not MediaKind.SPREADSHEET:
            raise FileAdapterError(f"{file.name} is not a spreadsheet")
        return read_spreadsheet(file.data)
