from omniextract.export.csv_formatter import CsvFormat, format_csv
from omniextract.export.exceptions import NothingToExportError
from omniextract.export.file_saver import BaseFileSaver
from omniextract.export.models import ExportRecord
from omniextract.logging.logger import Log
from omniextract.session.session import Session


class Exporter:
    """Exports the session's numbers as CSV and keeps the export history."""

    def __init__(
        self,
        session: Session,
        file_saver: BaseFileSaver,
        csv_format: CsvFormat = "google",
    ) -> None:
        self._session = session
        self._file_saver = file_saver
        self._csv_format = csv_format

    def export(self) -> ExportRecord:
        """Save the current result set as ``{counter}.csv`` and record it.

        Raises:
            NothingToExportError: if no numbers have been extracted yet.
        """
        numbers = self._session.canonical_numbers()
        if not numbers:
            raise NothingToExportError("No numbers to export")

        filename = f"{self._session.export_counter + 1}.csv"
        content = format_csv(numbers, self._csv_format)
        self._file_saver.save(content.encode("utf-8"), filename)

        record = ExportRecord(filename=filename, count=len(numbers), data=content)
        self._session.record_export(record)
        Log.info(f"Exported {record.count} numbers to {filename}")
        return record

    def redownload(self, record_id: str) -> ExportRecord:
        """Save a historical export again with its original content.

        Raises:
            ExportRecordNotFoundError: if the id is not in the history.
        """
        record = self._session.find_export(record_id)
        self._file_saver.save(record.data.encode("utf-8"), record.filename)
        Log.info(f"Re-downloaded {record.filename} ({record.count} numbers)")
        return record
