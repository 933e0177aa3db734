"""Authenticator protocol: invocation authorization abstraction."""
from typing import Protocol


class Authenticator(Protocol):
    """Abstract interface for checking who authorized the current invocation."""

    def require_caller_is(self, identity: str) -> None: ...
