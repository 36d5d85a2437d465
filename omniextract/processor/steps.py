from omniextract.imaging.base import BaseImageEncoder
from omniextract.logging.logger import Log
from omniextract.matching.matcher import NumberMatch, find_matches
from omniextract.ocr.base import BaseTextExtractor
from omniextract.processor.models import ExtractedNumber
from omniextract.processor.pipeline import ItemContext, ItemStep


class EncodeImageStep(ItemStep):
    progress = 50

    def __init__(self, encoder: BaseImageEncoder) -> None:
        self._encoder = encoder

    def run(self, context: ItemContext) -> ItemContext:
        context.payload = self._encoder.encode(context.item.source)
        Log.debug(f"Encoded {context.item.name}: {len(context.payload)} chars")
        return context


class ExtractTextStep(ItemStep):
    progress = 80

    def __init__(self, extractor: BaseTextExtractor) -> None:
        self._extractor = extractor

    def run(self, context: ItemContext) -> ItemContext:
        context.text = self._extractor.extract(context.payload)
        context.item.record_text(context.text)
        Log.info(f"Extracted {len(context.text)} chars from {context.item.name}")
        return context


class MatchNumbersStep(ItemStep):
    progress = 90

    def run(self, context: ItemContext) -> ItemContext:
        context.matches = find_matches(context.text)
        Log.debug(f"Matched {len(context.matches)} numbers in {context.item.name}")
        return context


class AccumulateStep(ItemStep):
    progress = 95

    def run(self, context: ItemContext) -> ItemContext:
        partition = context.accumulator.partition_by(
            context.matches,
            key=lambda m: m.canonical,
        )
        context.new_numbers = [self._to_number(m, context.item.name) for m in partition.new]
        context.duplicates = len(partition.duplicates)
        return context

    @staticmethod
    def _to_number(match: NumberMatch, source: str) -> ExtractedNumber:
        return ExtractedNumber(
            canonical=match.canonical,
            original=match.original,
            source=source,
        )
