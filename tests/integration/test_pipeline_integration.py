"""End-to-end batch runs with real image encoding and the offline example OCR client."""

from collections.abc import Callable
from pathlib import Path

from omniextract.config.settings import Settings
from omniextract.export.exporter import Exporter
from omniextract.export.file_saver import LocalFileSaver
from omniextract.ocr.example_client_adapter import ExampleVisionClientAdapter
from omniextract.ocr.extractor import TextExtractor
from omniextract.processor.models import ItemStatus
from omniextract.processor.orchestrator import build_orchestrator
from omniextract.processor.queue import UploadQueue
from omniextract.session.session import Session
from omniextract.storage.file_store import JsonFileKeyValueStore


def _extractor(text: str) -> TextExtractor:
    return TextExtractor(client=ExampleVisionClientAdapter(text=text), model="example")


class TestPipelineEndToEnd:
    def test_batch_then_export_then_replay(
        self, tmp_path: Path, make_image_file: Callable[..., Path]
    ) -> None:
        settings = Settings(ocr_provider="example", enhance_images=True)
        store = JsonFileKeyValueStore(tmp_path / "state.json")
        session = Session.load(store)
        orchestrator = build_orchestrator(
            settings,
            session,
            extractor=_extractor("Ph: 9656 50 1307 / +91 70123-45678 / 1234567890"),
        )
        queue = UploadQueue(settings.max_items_per_upload)
        queue.ingest([make_image_file("a.png"), make_image_file("b.jpg"), tmp_path / "gone.png"])

        report = orchestrator.run(queue)

        statuses = [item.status for item in queue]
        assert statuses == [ItemStatus.COMPLETED, ItemStatus.COMPLETED, ItemStatus.ERROR]
        assert [n.canonical for n in report.new_numbers] == ["919656501307", "917012345678"]
        assert {n.source for n in report.new_numbers} == {"a.png"}

        exporter = Exporter(session, LocalFileSaver(tmp_path / "out"))
        record = exporter.export()
        exported = (tmp_path / "out" / "1.csv").read_bytes()
        assert exported == (
            b"Name,Phone 1 - Value\nContact 1,919656501307\nContact 2,917012345678"
        )

        reloaded = Session.load(store)
        assert reloaded.canonical_numbers() == ["919656501307", "917012345678"]
        assert reloaded.export_counter == 1
        assert reloaded.history[0].data == record.data

    def test_second_session_finds_nothing_new(
        self, tmp_path: Path, make_image_file: Callable[..., Path]
    ) -> None:
        settings = Settings(ocr_provider="example", enhance_images=False)
        store = JsonFileKeyValueStore(tmp_path / "state.json")
        extractor = _extractor("9656501307")

        first = build_orchestrator(settings, Session.load(store), extractor=extractor)
        q1 = UploadQueue()
        q1.ingest([make_image_file("one.png")])
        first.run(q1)

        second = build_orchestrator(settings, Session.load(store), extractor=extractor)
        q2 = UploadQueue()
        q2.ingest([make_image_file("two.png")])
        report = second.run(q2)

        assert report.new_numbers == []
        assert report.completed == [q2.items[0].id]
