from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Any, Protocol


class CollectionBackend(Protocol):
    def read(self, key: str) -> list[dict[str, Any]]:
        """Snapshot of the collection; empty list when nothing is stored yet."""

        raise NotImplementedError

    def update(self, key: str) -> AbstractContextManager[list[dict[str, Any]]]:
        """Atomic read-modify-write.

        Yields the current collection as a mutable list. The list is written
        back only if the block exits cleanly; on exception nothing is written.
        """

        raise NotImplementedError
