from __future__ import annotations

import logging

from ..errors import BuildError
from ..metrics import document_build_failures_total, documents_built_total
from ..payload import Payload
from ..types import Document
from .base import DocumentBuilder, DocumentStream


class SimpleDocumentBuilder(DocumentBuilder):
    """Whole payload as a single document: ``{"content": body, "metadata": {...}}``."""

    name = "simple"

    def __init__(self) -> None:
        self._log = logging.getLogger(__name__)

    def build(self, payload: Payload) -> DocumentStream:
        try:
            body = payload.text()
        except Exception as e:
            document_build_failures_total.labels(kind="open").inc()
            raise BuildError(f"Could not read payload {payload.unique_id}: {e}") from e
        metadata = dict(payload.metadata)
        doc = Document(
            unique_id=payload.unique_id,
            content={"content": body, "metadata": metadata},
            metadata=metadata,
        )
        self._log.debug("Built single document for payload %s", payload.unique_id)
        return DocumentStream([doc], self._counted)

    def _counted(self, doc: Document) -> Document:
        documents_built_total.labels(builder=self.name).inc()
        return doc
