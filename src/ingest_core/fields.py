from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional


def safe_name(raw: Optional[str]) -> str:
    """Normalize a raw header cell: blank becomes "", outer whitespace is trimmed
    and internal spaces become underscores."""
    if raw is None or not raw.strip():
        return ""
    return raw.strip().replace(" ", "_")


class FieldNameMapper(ABC):
    @abstractmethod
    def map(self, name: str) -> str:
        """Return the field name to use for ``name``. Must accept ""."""
        raise NotImplementedError


class NoOpFieldNameMapper(FieldNameMapper):
    def map(self, name: str) -> str:
        return name


@dataclass
class KeyValueFieldNameMapper(FieldNameMapper):
    """Rename the names listed in ``mappings``; anything else passes through.

    Several names may map to the same target; the later column wins.
    """

    mappings: Dict[str, str] = field(default_factory=dict)

    def map(self, name: str) -> str:
        return self.mappings.get(name, name)


class LowerCaseFieldNameMapper(FieldNameMapper):
    def map(self, name: str) -> str:
        return name.lower()
