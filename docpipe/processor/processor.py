from collections.abc import AsyncIterator, Sequence

from docpipe.classification.factory import ClassificationOracleFactory
from docpipe.config.settings import Settings
from docpipe.documents.file_adapter import FileAdapter
from docpipe.documents.models import (
    AnalysisResult,
    BatchProgress,
    ClassificationResult,
    FileDescriptor,
    SplitDocument,
)
from docpipe.logging.logger import Log
from docpipe.ocr.factory import OcrEngineFactory
from docpipe.pdf.factory import PdfExtractorFactory, build_renderer
from docpipe.processor.analyzer import MultiPageAnalyzer
from docpipe.processor.batch import (
    BatchPolicy,
    BatchScheduler,
    BoundedConcurrencyPolicy,
    ProgressObserver,
    SequentialPolicy,
)
from docpipe.processor.classifier import SingleItemClassifier, SpreadsheetStrategy
from docpipe.processor.splitter import Splitter
from docpipe.processor.strategies import DirectWholeDocumentStrategy, PageByPageStrategy


class DocumentPipeline:
    """Library surface of the pipeline.

    Flow: classify batches of files, or analyze a multi-page PDF and split it.
    """

    def __init__(
        self,
        scheduler: BatchScheduler,
        analyzer: MultiPageAnalyzer,
        splitter: Splitter,
    ) -> None:
        self._scheduler = scheduler
        self._analyzer = analyzer
        self._splitter = splitter

    async def classify_batch(
        self,
        files: Sequence[FileDescriptor],
        policy: BatchPolicy | None = None,
        on_progress: ProgressObserver | None = None,
    ) -> list[ClassificationResult]:
        return await self._scheduler.classify_batch(files, policy, on_progress)

    def stream(
        self,
        files: Sequence[FileDescriptor],
        policy: BatchPolicy | None = None,
    ) -> AsyncIterator[BatchProgress]:
        return self._scheduler.stream(files, policy)

    async def analyze(self, source: FileDescriptor) -> AnalysisResult:
        return await self._analyzer.analyze(source)

    async def split(
        self,
        source: FileDescriptor,
        analysis: AnalysisResult,
        groups: Sequence[SplitDocument] | None = None,
        remove_blank_pages: bool = True,
    ) -> list[SplitDocument]:
        """Split using the analysis' suggested groups unless edited groups are given."""
        chosen = analysis.suggested_splits if groups is None else groups
        outputs = await self._splitter.split_async(
            source, chosen, analysis.page_texts, remove_blank_pages
        )
        Log.info(f"Split {source.name} into {len(outputs)} documents")
        return outputs


def build_policy(settings: Settings) -> BatchPolicy:
    policy = settings.batch_policy.lower()
    if policy == "sequential":
        return SequentialPolicy(delay_seconds=settings.sequential_delay_seconds)
    if policy == "concurrent":
        return BoundedConcurrencyPolicy(
            concurrency=settings.batch_concurrency,
            chunk_delay_seconds=settings.batch_chunk_delay_seconds,
        )
    raise ValueError(f"Unknown batch policy '{policy}'. Choose from: ['concurrent', 'sequential']")


def build_pipeline(settings: Settings) -> DocumentPipeline:
    """Build a DocumentPipeline with all required adapters."""
    renderer = build_renderer(settings)
    pdf_extractor = PdfExtractorFactory.create(settings)
    ocr = OcrEngineFactory.create(settings)
    oracle = ClassificationOracleFactory.create(settings)
    classifier = SingleItemClassifier(
        file_adapter=FileAdapter(renderer),
        ocr=ocr,
        oracle=oracle,
        spreadsheet_strategy=SpreadsheetStrategy(settings.spreadsheet_strategy.lower()),
        timeout_seconds=settings.item_timeout_seconds,
        page_delay_seconds=settings.page_ocr_delay_seconds,
    )
    analyzer = MultiPageAnalyzer(
        strategies=[
            DirectWholeDocumentStrategy(
                oracle, renderer, max_payload_bytes=settings.max_whole_document_bytes
            ),
            PageByPageStrategy(
                ocr,
                oracle,
                renderer,
                text_extractor=pdf_extractor,
                page_delay_seconds=settings.page_ocr_delay_seconds,
            ),
        ],
        renderer=renderer,
    )
    return DocumentPipeline(
        scheduler=BatchScheduler(classifier, default_policy=build_policy(settings)),
        analyzer=analyzer,
        splitter=Splitter(renderer, blank_threshold=settings.blank_page_threshold),
    )
