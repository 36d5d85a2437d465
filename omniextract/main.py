import argparse
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

from omniextract.config.settings import Settings
from omniextract.database.connection import close_pool, init_pool
from omniextract.export.exceptions import ExportError
from omniextract.export.exporter import Exporter
from omniextract.export.file_saver import LocalFileSaver
from omniextract.logging.logger import Log
from omniextract.processor.models import QueueItem
from omniextract.processor.orchestrator import build_orchestrator
from omniextract.processor.queue import UploadQueue
from omniextract.session.session import Session
from omniextract.storage.exceptions import StorageError
from omniextract.storage.factory import KeyValueStoreFactory


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="omniextract",
        description="Extract Indian mobile numbers from images via OCR and export them as CSV.",
    )
    sub = p.add_subparsers(dest="command", required=True)

    process = sub.add_parser("process", help="OCR a batch of images and collect new numbers.")
    process.add_argument("images", nargs="+", type=Path, help="Image files, in processing order.")
    process.add_argument(
        "--export",
        action="store_true",
        help="Export the full result set as CSV after the batch.",
    )

    sub.add_parser("export", help="Export the accumulated numbers as CSV.")
    sub.add_parser("history", help="List recent exports, most recent first.")

    redownload = sub.add_parser("redownload", help="Save a past export again, byte for byte.")
    redownload.add_argument("export_id", help="Export id as shown by 'history'.")

    reset = sub.add_parser("reset", help="Forget accumulated numbers.")
    reset.add_argument(
        "--all",
        action="store_true",
        help="Also clear export history and the export counter.",
    )
    return p


def _log_progress(item: QueueItem) -> None:
    Log.debug(f"[{item.progress:3d}%] {item.name}: {item.status.value}")


def _run_process(args: argparse.Namespace, settings: Settings, session: Session) -> int:
    queue = UploadQueue(settings.max_items_per_upload)
    queue.ingest(args.images)
    orchestrator = build_orchestrator(settings, session)
    report = orchestrator.run(queue, on_progress=_log_progress)

    for item in queue:
        if item.error:
            Log.error(f"{item.name}: {item.error}")
    for number in report.new_numbers:
        Log.info(f"{number.canonical}  (from {number.source})")

    if args.export:
        return _run_export(args, settings, session)
    return 1 if report.failed and not report.completed else 0


def _run_export(args: argparse.Namespace, settings: Settings, session: Session) -> int:
    _ = args
    exporter = Exporter(session, LocalFileSaver(Path(settings.output_dir)), settings.csv_format)
    exporter.export()
    return 0


def _run_history(args: argparse.Namespace, settings: Settings, session: Session) -> int:
    _ = args, settings
    if not session.history:
        Log.info("No exports yet")
    for record in session.history:
        created = datetime.fromtimestamp(record.timestamp / 1000, tz=timezone.utc)
        Log.info(f"{record.id}  {record.filename}  {record.count} numbers  {created.isoformat()}")
    return 0


def _run_redownload(args: argparse.Namespace, settings: Settings, session: Session) -> int:
    exporter = Exporter(session, LocalFileSaver(Path(settings.output_dir)), settings.csv_format)
    exporter.redownload(args.export_id)
    return 0


def _run_reset(args: argparse.Namespace, settings: Settings, session: Session) -> int:
    _ = settings
    session.reset(include_history=args.all)
    return 0


COMMANDS: dict[str, Callable[[argparse.Namespace, Settings, Session], int]] = {
    "process": _run_process,
    "export": _run_export,
    "history": _run_history,
    "redownload": _run_redownload,
    "reset": _run_reset,
}


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> open store -> load session -> run command."""
    args = build_arg_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level, settings.log_file)

    use_pool = settings.storage_backend == "postgres"
    try:
        if use_pool:
            init_pool(settings)
        store = KeyValueStoreFactory.create(settings)
        session = Session.load(store, history_capacity=settings.history_capacity)
        return COMMANDS[args.command](args, settings, session)
    except (ExportError, StorageError) as exc:
        Log.error(str(exc))
        return 1
    finally:
        if use_pool:
            close_pool()


if __name__ == "__main__":
    raise SystemExit(main())
