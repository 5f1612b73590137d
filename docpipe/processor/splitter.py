import asyncio
from collections.abc import Sequence

from docpipe.documents.models import FileDescriptor, SplitDocument
from docpipe.logging.logger import Log
from docpipe.pdf.exceptions import PdfRenderError
from docpipe.pdf.renderer import PdfRenderer
from docpipe.processor.blank_pages import BLANK_PAGE_THRESHOLD, filter_blank_pages
from docpipe.processor.exceptions import SplitError


class Splitter:
    """Copies each group's non-blank pages into a new PDF.

    The source bytes are never modified.
    """

    def __init__(
        self, renderer: PdfRenderer, blank_threshold: int = BLANK_PAGE_THRESHOLD
    ) -> None:
        self._renderer = renderer
        self._blank_threshold = blank_threshold

    def split(
        self,
        source: FileDescriptor,
        groups: Sequence[SplitDocument],
        page_texts: Sequence[str] = (),
        remove_blank_pages: bool = True,
    ) -> list[SplitDocument]:
        """Return realized groups; groups left empty by blank filtering are dropped.

        Raises:
            SplitError: if a page lies outside the source or appears in two groups.
        """
        try:
            total_pages = self._renderer.page_count(source.data)
        except PdfRenderError as exc:
            raise SplitError(f"{source.name}: {exc}") from exc
        self._check_partition(groups, total_pages)

        filter_blanks = remove_blank_pages and bool(page_texts)
        outputs: list[SplitDocument] = []
        for group in groups:
            pages = sorted(group.pages)
            if filter_blanks:
                pages = filter_blank_pages(pages, page_texts, self._blank_threshold)
            if not pages:
                Log.info(f"Dropping {group.document_type} group {group.id}: all pages blank")
                continue
            try:
                pdf_bytes = self._renderer.copy_pages(source.data, pages)
            except PdfRenderError as exc:
                raise SplitError(f"{source.name}: {exc}") from exc
            outputs.append(group.with_output(pages, pdf_bytes))
            Log.info(f"Split {group.document_type}: pages {pages}")
        return outputs

    async def split_async(
        self,
        source: FileDescriptor,
        groups: Sequence[SplitDocument],
        page_texts: Sequence[str] = (),
        remove_blank_pages: bool = True,
    ) -> list[SplitDocument]:
        return await asyncio.to_thread(
            self.split, source, groups, page_texts, remove_blank_pages
        )

    @staticmethod
    def _check_partition(groups: Sequence[SplitDocument], total_pages: int) -> None:
        seen: set[int] = set()
        for group in groups:
            for page in group.pages:
                if not 1 <= page <= total_pages:
                    raise SplitError(
                        f"Group {group.id} page {page} is outside the source (1..{total_pages})"
                    )
                if page in seen:
                    raise SplitError(f"Page {page} appears in more than one group")
                seen.add(page)
