from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, NamedTuple


Content = Mapping[str, Any]
Metadata = Mapping[str, str]


class AuthHeader(NamedTuple):
    name: str
    value: str


@dataclass(frozen=True)
class Document:
    """One ingestible unit: a unique id, its content fields and metadata."""

    unique_id: str
    content: Content = field(default_factory=dict)
    metadata: Metadata = field(default_factory=dict)

    def __post_init__(self) -> None:
        # frozen: bypass __setattr__ to swap in read-only copies
        object.__setattr__(self, "content", _read_only(self.content))
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unique_id": self.unique_id,
            "content": _plain(self.content),
            "metadata": dict(self.metadata),
        }


def _read_only(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({k: _read_only(v) for k, v in value.items()})
    return value


def _plain(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    return value
