from __future__ import annotations

import io
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional, TextIO


class Payload(ABC):
    """Source of one raw message: a body, a unique id and string metadata."""

    @property
    @abstractmethod
    def unique_id(self) -> str:
        raise NotImplementedError

    @property
    @abstractmethod
    def metadata(self) -> Mapping[str, str]:
        raise NotImplementedError

    @abstractmethod
    def open_reader(self) -> TextIO:
        """Return a fresh character stream over the body. The caller closes it."""
        raise NotImplementedError

    def text(self) -> str:
        with self.open_reader() as reader:
            return reader.read()


@dataclass
class StringPayload(Payload):
    body: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    meta: Dict[str, str] = field(default_factory=dict)

    @property
    def unique_id(self) -> str:
        return self.id

    @property
    def metadata(self) -> Mapping[str, str]:
        return dict(self.meta)

    def open_reader(self) -> TextIO:
        return io.StringIO(self.body, newline="")


@dataclass
class FilePayload(Payload):
    path: Path
    encoding: str = "utf-8"
    id: Optional[str] = None
    meta: Optional[Dict[str, str]] = None

    @property
    def unique_id(self) -> str:
        return self.id or Path(self.path).name

    @property
    def metadata(self) -> Mapping[str, str]:
        if self.meta is not None:
            return dict(self.meta)
        p = Path(self.path)
        return {"file_name": p.name, "file_path": str(p)}

    def open_reader(self) -> TextIO:
        return Path(self.path).open("r", encoding=self.encoding, newline="")
