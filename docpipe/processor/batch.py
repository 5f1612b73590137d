"""Drives the single-item classifier over a batch under a throttling policy."""

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable, Sequence
from dataclasses import dataclass

from docpipe.documents.models import BatchProgress, ClassificationResult, FileDescriptor
from docpipe.logging.logger import Log
from docpipe.processor.classifier import SingleItemClassifier, failure_summary

ProgressObserver = Callable[[BatchProgress], None]
Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class SequentialPolicy:
    """One item at a time; pause after each item that called an external service."""

    delay_seconds: float = 1.5

    def __post_init__(self) -> None:
        if self.delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")


@dataclass(frozen=True)
class BoundedConcurrencyPolicy:
    """Fixed-size chunks run concurrently; never more than `concurrency` in flight."""

    concurrency: int = 4
    chunk_delay_seconds: float = 0.3

    def __post_init__(self) -> None:
        if self.concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        if self.chunk_delay_seconds < 0:
            raise ValueError("chunk_delay_seconds must be >= 0")


BatchPolicy = SequentialPolicy | BoundedConcurrencyPolicy


class _ProgressTracker:
    def __init__(self, total: int, observer: ProgressObserver | None) -> None:
        self._total = total
        self._observer = observer
        self._completed = 0

    def advance(self, index: int, filename: str, result: ClassificationResult) -> None:
        self._completed += 1
        if self._observer is None:
            return
        progress = BatchProgress(
            completed=self._completed,
            total=self._total,
            filename=filename,
            index=index,
            result=result,
        )
        try:
            self._observer(progress)
        except Exception as exc:
            Log.warning(f"Progress observer failed for {filename}: {exc}")


class BatchScheduler:
    """Classifies many files; output is always index-aligned with input."""

    def __init__(
        self,
        classifier: SingleItemClassifier,
        default_policy: BatchPolicy | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._classifier = classifier
        self._default_policy = default_policy or BoundedConcurrencyPolicy()
        self._sleep = sleep

    async def classify_batch(
        self,
        files: Sequence[FileDescriptor],
        policy: BatchPolicy | None = None,
        on_progress: ProgressObserver | None = None,
    ) -> list[ClassificationResult]:
        policy = policy or self._default_policy
        results: list[ClassificationResult | None] = [None] * len(files)
        tracker = _ProgressTracker(len(files), on_progress)
        Log.info(f"Classifying {len(files)} files with {policy}")

        if isinstance(policy, SequentialPolicy):
            await self._run_sequential(files, policy, results, tracker)
        elif isinstance(policy, BoundedConcurrencyPolicy):
            await self._run_bounded(files, policy, results, tracker)
        else:
            raise ValueError(f"Unsupported batch policy: {policy!r}")

        return [
            result if result is not None else ClassificationResult.fallback(failure_summary("not run"))
            for result in results
        ]

    async def stream(
        self,
        files: Sequence[FileDescriptor],
        policy: BatchPolicy | None = None,
    ) -> AsyncIterator[BatchProgress]:
        """Yield one BatchProgress per completed item, in completion order.

        Results are carried on each event. Leaving the loop early cancels the
        remaining work.
        """
        queue: asyncio.Queue[BatchProgress | None] = asyncio.Queue()
        task = asyncio.create_task(
            self.classify_batch(files, policy, on_progress=queue.put_nowait)
        )
        task.add_done_callback(lambda _: queue.put_nowait(None))
        try:
            while (event := await queue.get()) is not None:
                yield event
            await task
        finally:
            if not task.done():
                task.cancel()

    async def _run_sequential(
        self,
        files: Sequence[FileDescriptor],
        policy: SequentialPolicy,
        results: list[ClassificationResult | None],
        tracker: _ProgressTracker,
    ) -> None:
        last = len(files) - 1
        for index, file in enumerate(files):
            await self._run_one(index, file, results, tracker)
            if index < last and policy.delay_seconds and self._classifier.requires_external_call(file):
                await self._sleep(policy.delay_seconds)

    async def _run_bounded(
        self,
        files: Sequence[FileDescriptor],
        policy: BoundedConcurrencyPolicy,
        results: list[ClassificationResult | None],
        tracker: _ProgressTracker,
    ) -> None:
        semaphore = asyncio.Semaphore(policy.concurrency)

        async def guarded(index: int, file: FileDescriptor) -> None:
            async with semaphore:
                await self._run_one(index, file, results, tracker)

        size = policy.concurrency
        for start in range(0, len(files), size):
            chunk = files[start : start + size]
            await asyncio.gather(*(guarded(start + offset, f) for offset, f in enumerate(chunk)))
            if start + size < len(files) and policy.chunk_delay_seconds:
                await self._sleep(policy.chunk_delay_seconds)

    async def _run_one(
        self,
        index: int,
        file: FileDescriptor,
        results: list[ClassificationResult | None],
        tracker: _ProgressTracker,
    ) -> None:
        try:
            result = await self._classifier.classify(file)
        except Exception as exc:
            Log.error(f"Classifier raised for {file.name}: {exc}")
            result = ClassificationResult.fallback(failure_summary(exc))
        results[index] = result
        tracker.advance(index, file.name, result)
