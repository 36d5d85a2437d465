"""Indian mobile number matching and normalization.

A match is an optional ``+91`` / ``91`` / ``0091`` / ``091`` prefix, then a
leading digit in 6-9 followed by nine more digits, where every digit may be
preceded by a single space or hyphen. Accepted matches are normalized to
``91`` + 10 significant digits.
"""

import re
from dataclasses import dataclass

COUNTRY_CODE = "91"
SIGNIFICANT_DIGITS = 10

_NUMBER_RE = re.compile(
    r"(?:(?:\+|0{0,2})91[\s-]?)?"
    r"([6789](?:[\s-]?\d){9})"
)
_NON_DIGIT_RE = re.compile(r"\D")


@dataclass(frozen=True)
class NumberMatch:
    """A normalized number together with the text it was matched from."""

    canonical: str
    original: str


def _canonicalize(group: str) -> str | None:
    digits = _NON_DIGIT_RE.sub("", group)
    if len(digits) != SIGNIFICANT_DIGITS:
        return None
    return f"{COUNTRY_CODE}{digits}"


def find_matches(text: str) -> list[NumberMatch]:
    """Return unique numbers found in *text*, in order of first appearance."""
    seen: set[str] = set()
    matches: list[NumberMatch] = []
    for m in _NUMBER_RE.finditer(text):
        canonical = _canonicalize(m.group(1))
        if canonical is None or canonical in seen:
            continue
        seen.add(canonical)
        matches.append(NumberMatch(canonical=canonical, original=m.group(0)))
    return matches


def extract_numbers(text: str) -> list[str]:
    """Return the canonical form of every unique number found in *text*."""
    return [m.canonical for m in find_matches(text)]
