"""Dict-backed key-value store with all-or-nothing transactions."""
from __future__ import annotations

import copy
import logging
from contextlib import contextmanager
from typing import Any, Iterator

logger = logging.getLogger(__name__)


class InMemoryStore:
    """In-process key-value store.

    ``transaction()`` snapshots the whole namespace on entry and restores it
    if the block raises, so a failed call leaves no trace. Nested
    transactions join the outermost one.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(data or {})
        self._depth = 0

    def get(self, key: str) -> Any | None:
        return self._data.get(key)

    def get_or(self, key: str, default: Any) -> Any:
        value = self._data.get(key)
        return default if value is None else value

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        if self._depth == 0:
            self._commit()

    def keys(self) -> list[str]:
        return sorted(self._data)

    @property
    def in_transaction(self) -> bool:
        return self._depth > 0

    @contextmanager
    def transaction(self) -> Iterator[None]:
        if self._depth > 0:
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1
            return

        snapshot = copy.deepcopy(self._data)
        self._depth = 1
        try:
            yield
        except BaseException:
            self._data = snapshot
            logger.debug("Transaction rolled back")
            raise
        finally:
            self._depth = 0
        self._commit()
        logger.debug("Transaction committed")

    def _commit(self) -> None:
        """Hook for durable subclasses; nothing to flush in memory."""
