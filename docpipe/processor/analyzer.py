import asyncio
from collections.abc import Sequence

from docpipe.classification.models import PageGroup
from docpipe.documents.document_types import OTHER, resolve_document_type
from docpipe.documents.models import (
    AnalysisResult,
    FileDescriptor,
    MediaKind,
    PageClassification,
    SplitDocument,
)
from docpipe.logging.logger import Log
from docpipe.pdf.renderer import PdfRenderer
from docpipe.processor.strategies import AnalysisDraft, AnalysisStrategy, StrategyFailure


def normalize_groups(groups: Sequence[PageGroup], total_pages: int) -> list[PageGroup]:
    """Make proposed groups a partition of 1..total_pages.

    Out-of-range pages are dropped, a page claimed twice stays with the first
    group, pages are sorted, and groups left empty are removed.
    """
    claimed: set[int] = set()
    normalized: list[PageGroup] = []
    for group in groups:
        pages: list[int] = []
        for page in group.pages:
            if 1 <= page <= total_pages and page not in claimed:
                claimed.add(page)
                pages.append(page)
        if pages:
            normalized.append(PageGroup(group.document_type, sorted(pages), group.confidence))
    return normalized


class MultiPageAnalyzer:
    """Classifies the pages of one multi-page PDF and proposes split groups.

    Strategies are tried in order until one succeeds.
    """

    def __init__(self, strategies: Sequence[AnalysisStrategy], renderer: PdfRenderer) -> None:
        self._strategies = list(strategies)
        self._renderer = renderer

    async def analyze(self, source: FileDescriptor) -> AnalysisResult:
        if source.media_kind is not MediaKind.PDF:
            raise ValueError(f"{source.name} is not a PDF")

        failures: list[str] = []
        for strategy in self._strategies:
            try:
                outcome = await strategy.attempt(source)
            except Exception as exc:
                outcome = StrategyFailure(f"unexpected error: {exc}")
            if isinstance(outcome, StrategyFailure):
                Log.warning(f"{source.name}: {strategy.name} strategy failed: {outcome.reason}")
                failures.append(f"{strategy.name}: {outcome.reason}")
                continue
            Log.info(f"{source.name}: analyzed with {strategy.name} strategy")
            return await self._build_result(source, strategy.name, outcome, failures)

        Log.error(f"{source.name}: every analysis strategy failed")
        return AnalysisResult(total_pages=0, strategy="", failures=failures)

    async def _build_result(
        self,
        source: FileDescriptor,
        strategy_name: str,
        draft: AnalysisDraft,
        failures: list[str],
    ) -> AnalysisResult:
        total = draft.total_pages
        groups = normalize_groups(draft.grouping.page_groups, total)
        thumbnails = await asyncio.to_thread(self._renderer.thumbnails, source.data, total)

        page_group: dict[int, PageGroup] = {
            page: group for group in groups for page in group.pages
        }
        # Per-page oracle types win; a page it did not type takes its group's type.
        page_types = draft.grouping.page_types
        page_classifications = []
        for number in range(1, total + 1):
            document_type, confidence = OTHER, 0
            if number <= len(page_types):
                document_type = page_types[number - 1].document_type
                confidence = page_types[number - 1].confidence
            elif number in page_group:
                document_type = page_group[number].document_type
                confidence = page_group[number].confidence
            info = resolve_document_type(document_type)
            page_classifications.append(
                PageClassification(
                    page_number=number,
                    document_type=info.id,
                    document_type_name=info.name,
                    confidence=confidence,
                    thumbnail=thumbnails[number - 1],
                    raw_text=draft.page_texts[number - 1] if number <= len(draft.page_texts) else "",
                )
            )

        splits = [
            SplitDocument.create(
                id=f"doc-{index}",
                document_type=group.document_type,
                pages=group.pages,
                confidence=group.confidence,
                thumbnail=thumbnails[group.pages[0] - 1],
            )
            for index, group in enumerate(groups)
        ]
        result = AnalysisResult(
            total_pages=total,
            page_classifications=page_classifications,
            suggested_splits=splits,
            customer_name=draft.grouping.customer_name,
            strategy=strategy_name,
            failures=[*failures, *draft.notes],
        )
        if result.ungrouped_pages:
            Log.warning(f"{source.name}: pages {result.ungrouped_pages} need manual review")
        return result
