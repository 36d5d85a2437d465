"""CSV serialization of canonical numbers for contact-list import.

Output is a pure function of the input list, so exports can be replayed
byte for byte from history.
"""

from collections.abc import Sequence
from typing import Literal

CsvFormat = Literal["google", "plain"]

_HEADERS: dict[str, str] = {
    "google": "Name,Phone 1 - Value",
    "plain": "Number,Phone Number",
}


def _row(index: int, number: str, csv_format: CsvFormat) -> str:
    if csv_format == "google":
        return f"Contact {index},{number}"
    return f"{index},{number}"


def format_csv(numbers: Sequence[str], csv_format: CsvFormat = "google") -> str:
    """Render *numbers* as CSV text with a fixed header and one row per number.

    Rows are joined with ``\\n`` with no trailing newline. An empty input
    yields an empty string.
    """
    if csv_format not in _HEADERS:
        raise ValueError(f"Unknown CSV format '{csv_format}'. Choose from: {list(_HEADERS)}")
    if not numbers:
        return ""
    rows = [_row(i, number, csv_format) for i, number in enumerate(numbers, start=1)]
    return "\n".join([_HEADERS[csv_format], *rows])
