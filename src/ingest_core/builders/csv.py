from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..errors import BuildError, FieldIndexError
from ..fields import FieldNameMapper, NoOpFieldNameMapper, safe_name
from ..formats import BasicFormatBuilder, FormatBuilder, RecordStream, Row
from ..metrics import document_build_failures_total, documents_built_total
from ..payload import Payload
from ..types import Document
from .base import DocumentBuilder, DocumentStream


def epoch_millis() -> int:
    return int(time.time() * 1000)


@dataclass
class CsvDocumentBuilder(DocumentBuilder):
    """Build one Document per data row of a delimited-text payload.

    The header row supplies the field names (normalized with ``safe_name`` and
    then passed through ``field_name_mapper``). ``unique_id_field`` selects the
    column holding the document id (default: the first). When
    ``add_timestamp_field`` is set every document also carries the current
    time in ms since epoch under that name.
    """

    format_builder: FormatBuilder = field(default_factory=BasicFormatBuilder)
    field_name_mapper: FieldNameMapper = field(default_factory=NoOpFieldNameMapper)
    unique_id_field: Optional[int] = None
    add_timestamp_field: Optional[str] = None

    name = "csv"

    def __post_init__(self) -> None:
        self._log = logging.getLogger(__name__)
        if self.format_builder is None:
            raise ValueError("format_builder may not be None")
        if self.field_name_mapper is None:
            raise ValueError("field_name_mapper may not be None")
        if self.unique_id_field is not None and self.unique_id_field < 0:
            raise ValueError(f"unique_id_field must be >= 0, got {self.unique_id_field}")

    def unique_id_index(self) -> int:
        return 0 if self.unique_id_field is None else int(self.unique_id_field)

    def build_headers(self, header_row: Row) -> List[str]:
        return [self.field_name_mapper.map(safe_name(h)) for h in header_row]

    def build(self, payload: Payload) -> DocumentStream:
        reader = None
        try:
            csv_format = self.format_builder.create_format()
            reader = payload.open_reader()
            records = csv_format.parse(reader)
            headers = self.build_headers(records.header)
        except Exception as e:
            if reader is not None:
                try:
                    reader.close()
                except Exception:
                    self._log.warning("Failed to close reader for payload %s", payload.unique_id, exc_info=True)
            document_build_failures_total.labels(kind="open").inc()
            raise BuildError(f"Could not open payload {payload.unique_id}: {e}") from e
        self._log.debug("Opened payload %s with %d fields: %s", payload.unique_id, len(headers), headers)
        return DocumentStream(records, _RowConverter(self, headers, records), resource=records)

    def extend_content(self, content: Dict[str, Any], row: Row) -> None:
        """Hook for variants that derive extra fields from a row."""

    def add_timestamp(self, content: Dict[str, Any], millis: int) -> None:
        if self.add_timestamp_field and self.add_timestamp_field.strip():
            content[self.add_timestamp_field] = millis


class _RowConverter:
    """Per-build state: the canonical header and the last timestamp handed out."""

    def __init__(self, builder: CsvDocumentBuilder, headers: List[str], records: RecordStream) -> None:
        self._builder = builder
        self._headers = headers
        self._records = records
        self._last_millis = 0
        self._log = logging.getLogger(__name__)

    def _next_millis(self) -> int:
        # wall clock may step back; keep values non-decreasing within one build
        self._last_millis = max(epoch_millis(), self._last_millis)
        return self._last_millis

    def __call__(self, row: Row) -> Document:
        if len(row) != len(self._headers):
            self._log.debug(
                "Ragged row at line %d: %d cells, %d fields",
                self._records.line_number,
                len(row),
                len(self._headers),
            )
        idx = self._builder.unique_id_index()
        if idx >= len(row):
            document_build_failures_total.labels(kind="field_index").inc()
            raise FieldIndexError(idx, len(row), self._records.line_number)
        content: Dict[str, Any] = {}
        for name, value in zip(self._headers, row):
            content[name] = value
        self._builder.extend_content(content, row)
        self._builder.add_timestamp(content, self._next_millis())
        documents_built_total.labels(builder=self._builder.name).inc()
        return Document(unique_id=row[idx], content=content, metadata={})
