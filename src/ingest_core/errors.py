from __future__ import annotations


class IngestError(Exception):
    """Base class for errors raised by ingest_core."""


class BuildError(IngestError):
    """A payload could not be opened or its header row could not be read."""


class RecordError(IngestError):
    """A data row could not be parsed while iterating."""


class IllegalReuseError(IngestError, RuntimeError):
    """A second iterator was requested from a single-pass document stream."""


class FieldIndexError(IngestError, IndexError):
    """The configured unique-id column does not exist in a row."""

    def __init__(self, index: int, width: int, line_number: int | None = None) -> None:
        self.index = index
        self.width = width
        self.line_number = line_number
        where = f" (line {line_number})" if line_number is not None else ""
        super().__init__(f"unique-id field {index} out of range for row of width {width}{where}")


class CredentialError(IngestError):
    """A secret could not be resolved or decoded."""
