from collections.abc import Callable, Sequence
from typing import assert_never

from omniextract.config.settings import Settings
from omniextract.imaging.encoder import ImageEncoder
from omniextract.imaging.exceptions import EncodingError
from omniextract.logging.logger import Log
from omniextract.matching.dedup import DedupAccumulator
from omniextract.ocr.base import BaseTextExtractor
from omniextract.ocr.exceptions import ExtractionError
from omniextract.ocr.factory import TextExtractorFactory
from omniextract.processor.models import BatchReport, ItemStatus, QueueItem
from omniextract.processor.pipeline import ItemContext, ItemStep
from omniextract.processor.queue import UploadQueue
from omniextract.processor.steps import (
    AccumulateStep,
    EncodeImageStep,
    ExtractTextStep,
    MatchNumbersStep,
)
from omniextract.session.session import Session

ProgressCallback = Callable[[QueueItem], None]


class BatchOrchestrator:
    """Runs every not-yet-completed queue item through the pipeline.

    Pipeline per item: encode -> extract -> match -> accumulate.
    Items run one at a time in queue order. A failing item is marked as
    error and the pass moves on; new numbers reach the session only once
    the whole pass is over.
    """

    def __init__(self, session: Session, steps: Sequence[ItemStep]) -> None:
        self._session = session
        self._steps = list(steps)
        self._running = False

    def run(
        self,
        queue: UploadQueue,
        on_progress: ProgressCallback | None = None,
    ) -> BatchReport:
        """Process the queue once and merge new numbers into the session."""
        report = BatchReport()
        if self._running:
            Log.warning("Batch already in progress, ignoring re-entrant run")
            return report

        self._running = True
        try:
            Log.info(f"Starting extraction pass over {len(queue)} items")
            accumulator = DedupAccumulator(self._session.canonical_numbers())
            for item in queue:
                if not self._is_eligible(item):
                    report.skipped.append(item.id)
                    continue
                self._process_item(item, accumulator, report, on_progress)

            added = self._session.merge(report.new_numbers)
            Log.info(
                f"Pass finished: {len(report.completed)} completed, "
                f"{len(report.failed)} failed, {len(report.skipped)} skipped, "
                f"{added} new numbers"
            )
        finally:
            self._running = False
        return report

    def _process_item(
        self,
        item: QueueItem,
        accumulator: DedupAccumulator,
        report: BatchReport,
        on_progress: ProgressCallback | None,
    ) -> None:
        item.start()
        _notify(on_progress, item)
        Log.info(f"Processing {item.name}")

        context = ItemContext(item=item, accumulator=accumulator)
        try:
            for step in self._steps:
                context = step.run(context)
                item.checkpoint(step.progress)
                _notify(on_progress, item)
        except (EncodingError, ExtractionError) as exc:
            item.fail(str(exc))
            report.failed.append(item.id)
            Log.error(f"Failed to process {item.name}: {exc}")
            _notify(on_progress, item)
            return
        except Exception as exc:
            # unexpected failures still must not leave the item in processing
            item.fail(f"Unexpected error: {exc}")
            report.failed.append(item.id)
            Log.error(f"Unexpected error while processing {item.name}: {exc!r}")
            _notify(on_progress, item)
            return

        item.complete()
        report.completed.append(item.id)
        report.new_numbers.extend(context.new_numbers)
        report.duplicates += context.duplicates
        if context.new_numbers:
            Log.info(f"{len(context.new_numbers)} unique numbers identified in {item.name}")
        else:
            Log.info(f"No new unique numbers in {item.name}")
        _notify(on_progress, item)

    @staticmethod
    def _is_eligible(item: QueueItem) -> bool:
        match item.status:
            case ItemStatus.PENDING | ItemStatus.ERROR:
                return True
            case ItemStatus.COMPLETED | ItemStatus.PROCESSING:
                return False
            case _:
                assert_never(item.status)


def _notify(on_progress: ProgressCallback | None, item: QueueItem) -> None:
    if on_progress is not None:
        on_progress(item)


def build_orchestrator(
    settings: Settings,
    session: Session,
    extractor: BaseTextExtractor | None = None,
) -> BatchOrchestrator:
    """Build a BatchOrchestrator with all required adapters."""
    encoder = ImageEncoder(
        enhance_images=settings.enhance_images,
        contrast=settings.contrast_level,
    )
    steps: list[ItemStep] = [
        EncodeImageStep(encoder),
        ExtractTextStep(extractor or TextExtractorFactory.create(settings)),
        MatchNumbersStep(),
        AccumulateStep(),
    ]
    return BatchOrchestrator(session, steps)
