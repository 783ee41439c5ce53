from __future__ import annotations

import csv
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, TextIO

from .errors import RecordError


Row = List[str]


@dataclass(frozen=True)
class CsvFormat:
    """Parser settings for one delimited-text payload. The first record is always the header."""

    delimiter: str = ","
    quotechar: str = '"'
    escapechar: Optional[str] = None
    doublequote: bool = True
    quoting: int = csv.QUOTE_MINIMAL
    skip_initial_space: bool = False
    ignore_empty_lines: bool = True
    comment_marker: Optional[str] = None
    strict: bool = False

    def reader_kwargs(self) -> Dict[str, Any]:
        return {
            "delimiter": self.delimiter,
            "quotechar": self.quotechar,
            "escapechar": self.escapechar,
            "doublequote": self.doublequote,
            "quoting": self.quoting,
            "skipinitialspace": self.skip_initial_space,
            "strict": self.strict,
        }

    def parse(self, reader: TextIO) -> "RecordStream":
        """Bind ``reader`` to a new RecordStream, consuming the header row."""
        return RecordStream(reader, self)


class RecordStream:
    """Raw rows of one open reader. The cursor only moves forward.

    The header is read once when the stream is created and never re-read.
    ``line_number`` counts physical lines, comment lines included.
    """

    def __init__(self, reader: TextIO, fmt: CsvFormat) -> None:
        self._reader = reader
        self._format = fmt
        self._comments_skipped = 0
        lines: Iterable[str] = reader
        if fmt.comment_marker:
            lines = self._skip_comments(reader, fmt.comment_marker)
        self._csv = csv.reader(lines, **fmt.reader_kwargs())
        self._closed = False
        self.records_read = 0
        header = self._next_row()
        if header is None:
            raise ValueError("payload has no header row")
        self.header: Row = header

    def _skip_comments(self, lines: Iterable[str], marker: str) -> Iterator[str]:
        for line in lines:
            if line.startswith(marker):
                self._comments_skipped += 1
                continue
            yield line

    @property
    def line_number(self) -> int:
        return self._csv.line_num + self._comments_skipped

    @property
    def closed(self) -> bool:
        return self._closed

    def _next_row(self) -> Optional[Row]:
        while True:
            try:
                row = next(self._csv)
            except StopIteration:
                return None
            except csv.Error as e:
                raise RecordError(f"malformed record at line {self.line_number}: {e}") from e
            if not row:
                if self._format.ignore_empty_lines:
                    continue
                row = [""]
            self.records_read += 1
            return row

    def __iter__(self) -> Iterator[Row]:
        return self

    def __next__(self) -> Row:
        if self._closed:
            raise StopIteration
        row = self._next_row()
        if row is None:
            raise StopIteration
        return row

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._reader.close()


class FormatBuilder(ABC):
    @abstractmethod
    def create_format(self) -> CsvFormat:
        raise NotImplementedError


_STYLES: Dict[str, CsvFormat] = {
    "default": CsvFormat(),
    "excel": CsvFormat(ignore_empty_lines=False),
    "rfc4180": CsvFormat(ignore_empty_lines=False),
    "tab_delimited": CsvFormat(delimiter="\t", skip_initial_space=True),
    "mysql": CsvFormat(
        delimiter="\t",
        escapechar="\\",
        doublequote=False,
        quoting=csv.QUOTE_NONE,
        ignore_empty_lines=False,
    ),
}

STYLES = sorted(_STYLES)


@dataclass
class BasicFormatBuilder(FormatBuilder):
    style: str = "default"

    def __post_init__(self) -> None:
        self.style = (self.style or "default").lower()
        if self.style not in _STYLES:
            raise ValueError(f"Unknown csv style: {self.style} (expected one of {', '.join(STYLES)})")

    def create_format(self) -> CsvFormat:
        return _STYLES[self.style]


def _single_char(name: str, value: Optional[str], *, optional: bool = True) -> None:
    if value is None and optional:
        return
    if value is None or len(value) != 1:
        raise ValueError(f"{name} must be a single character, got {value!r}")


@dataclass
class CustomFormatBuilder(FormatBuilder):
    delimiter: str = ","
    quote: Optional[str] = '"'
    escape: Optional[str] = None
    comment_marker: Optional[str] = None
    ignore_empty_lines: bool = True
    ignore_surrounding_spaces: bool = False
    strict: bool = False

    def __post_init__(self) -> None:
        _single_char("delimiter", self.delimiter, optional=False)
        _single_char("quote", self.quote)
        _single_char("escape", self.escape)
        _single_char("comment_marker", self.comment_marker)
        if self.quote is not None and self.quote == self.delimiter:
            raise ValueError("quote and delimiter must differ")

    def create_format(self) -> CsvFormat:
        return CsvFormat(
            delimiter=self.delimiter,
            quotechar=self.quote or '"',
            escapechar=self.escape,
            doublequote=self.quote is not None and self.escape is None,
            quoting=csv.QUOTE_MINIMAL if self.quote is not None else csv.QUOTE_NONE,
            skip_initial_space=self.ignore_surrounding_spaces,
            ignore_empty_lines=self.ignore_empty_lines,
            comment_marker=self.comment_marker,
            strict=self.strict,
        )
