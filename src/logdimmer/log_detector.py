"""Log detector - finds log statements in document text."""

import logging
import re
from bisect import bisect_right
from dataclasses import dataclass
from typing import Callable

from logdimmer.patterns import get_log_patterns_for_language

logger = logging.getLogger(__name__)


@dataclass(frozen=True, order=True)
class Position:
    """Zero-based line/column position in a document."""

    line: int
    character: int


@dataclass(frozen=True)
class LogMatch:
    """Half-open character offset interval [start, end) of one match."""

    start: int
    end: int


@dataclass(frozen=True)
class DisplayRange:
    """Range of a detected log statement.

    Attributes:
        start: Inclusive start position
        end: Exclusive end position
    """

    start: Position
    end: Position

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Get the range as (start_line, start_column, end_line, end_column)."""
        return (self.start.line, self.start.character, self.end.line, self.end.character)


PositionAt = Callable[[int], Position]


class PositionMapper:
    """Converts character offsets of a text snapshot into positions.

    Line breaks are ``\\n``, ``\\r\\n`` and a lone ``\\r``. Offsets outside the
    text are clamped to its bounds.
    """

    def __init__(self, text: str) -> None:
        """Index the line starts of a text.

        Args:
            text: Full document text
        """
        self._length = len(text)
        self._line_starts = [0]
        index = 0
        while index < self._length:
            char = text[index]
            if char == "\r":
                if index + 1 < self._length and text[index + 1] == "\n":
                    index += 1
                self._line_starts.append(index + 1)
            elif char == "\n":
                self._line_starts.append(index + 1)
            index += 1

    @property
    def line_count(self) -> int:
        """Number of lines in the text."""
        return len(self._line_starts)

    def position_at(self, offset: int) -> Position:
        """Get the position of a character offset.

        Args:
            offset: Character offset into the text

        Returns:
            Line/column position of the offset
        """
        offset = min(max(offset, 0), self._length)
        line = bisect_right(self._line_starts, offset) - 1
        return Position(line, offset - self._line_starts[line])


def find_matches_with_regex(text: str, regex: re.Pattern[str]) -> list[LogMatch]:
    """Find every non-overlapping match of a pattern.

    The search cursor always moves forward by at least one character, so a
    pattern that matches the empty string cannot loop forever.

    Args:
        text: Text to search
        regex: Compiled pattern

    Returns:
        Matches in document order
    """
    matches: list[LogMatch] = []
    cursor = 0
    while cursor <= len(text):
        match = regex.search(text, cursor)
        if match is None:
            break
        start, end = match.span()
        matches.append(LogMatch(start, end))
        cursor = end if end > start else end + 1
    return matches


def find_log_matches(text: str, language_id: str) -> list[LogMatch]:
    """Run every applicable pattern over a text.

    Matches of different patterns are kept even when they overlap, so the
    same span may be reported more than once.

    Args:
        text: Full document text
        language_id: Language id of the document

    Returns:
        Matches grouped by pattern, in pattern order
    """
    if not text:
        return []

    matches: list[LogMatch] = []
    for regex in get_log_patterns_for_language(language_id):
        matches.extend(find_matches_with_regex(text, regex))
    return matches


def find_log_statements(
    text: str,
    language_id: str,
    position_at: PositionAt | None = None,
) -> list[DisplayRange]:
    """Find the display ranges of all log statements in a document.

    Args:
        text: Full document text
        language_id: Language id of the document
        position_at: Offset to position mapping of the document. Defaults to
            a ``PositionMapper`` over ``text``.

    Returns:
        One range per match
    """
    matches = find_log_matches(text, language_id)
    if not matches:
        logger.debug(f"No log statements found ({language_id})")
        return []

    if position_at is None:
        position_at = PositionMapper(text).position_at

    ranges = [
        DisplayRange(position_at(match.start), position_at(match.end))
        for match in matches
    ]
    logger.debug(f"Found {len(ranges)} log statement ranges ({language_id})")
    return ranges
