"""Key-value store protocol: durable storage substrate."""
from typing import Any, ContextManager, Protocol


class KeyValueStore(Protocol):
    """Abstract interface for the contract's durable key-value namespace."""

    def get(self, key: str) -> Any | None: ...

    def get_or(self, key: str, default: Any) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def transaction(self) -> ContextManager[None]: ...
