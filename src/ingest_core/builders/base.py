from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Generic, Iterable, Iterator, Optional, Protocol, TypeVar

from ..errors import IllegalReuseError
from ..payload import Payload
from ..types import Document


T = TypeVar("T")

OPEN = "open"
CONSUMING = "consuming"
CLOSED = "closed"


class Closeable(Protocol):
    def close(self) -> None:  # pragma: no cover
        ...


class DocumentStream(Generic[T]):
    """Single-pass, closeable sequence of Documents backed by one open resource.

    The stream hands out exactly one cursor. Each step pulls the next source
    item and converts it on demand; nothing is cached. The resource is closed
    when the cursor is exhausted, when a conversion step raises, when the
    cursor is abandoned, or when ``close()`` is called, whichever comes first.

    Not safe for concurrent use: one owner, one consumer.
    """

    def __init__(
        self,
        items: Iterable[T],
        convert: Callable[[T], Document],
        resource: Optional[Closeable] = None,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self._items = items
        self._convert = convert
        self._resource = resource
        self._state = OPEN

    @property
    def state(self) -> str:
        return self._state

    def __iter__(self) -> Iterator[Document]:
        if self._state == CONSUMING:
            raise IllegalReuseError("iterator already invoked")
        if self._state == CLOSED:
            raise IllegalReuseError("document stream is closed")
        self._state = CONSUMING
        return self._cursor()

    def _cursor(self) -> Iterator[Document]:
        try:
            for item in self._items:
                yield self._convert(item)
        finally:
            self.close()

    def close(self) -> None:
        if self._state == CLOSED:
            return
        # once closed the stream can never mint a cursor again
        self._state = CLOSED
        resource, self._resource = self._resource, None
        if resource is None:
            return
        try:
            resource.close()
        except Exception:
            self._log.warning("Failed to close document source", exc_info=True)

    def __enter__(self) -> "DocumentStream[T]":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class DocumentBuilder(ABC):
    """Turns one payload into a lazy stream of Documents."""

    name: str = "base"

    @abstractmethod
    def build(self, payload: Payload) -> DocumentStream:
        raise NotImplementedError
