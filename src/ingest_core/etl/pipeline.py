from __future__ import annotations

from typing import Any, Dict, Iterable, List

from ..builders.base import DocumentStream
from ..types import Document


def build_manifest(stream: DocumentStream) -> Dict[str, Any]:
    """Drain ``stream`` into a JSON-serializable manifest. The stream is closed afterwards."""
    items: List[Dict[str, Any]] = []
    with stream:
        for doc in stream:
            items.append(doc.to_dict())
    return {"count": len(items), "items": items}


def documents_from_manifest(data: Dict[str, Any]) -> Iterable[Document]:
    for it in data.get("items", []):
        yield Document(
            unique_id=it["unique_id"],
            content=it.get("content", {}),
            metadata=it.get("metadata", {}),
        )
