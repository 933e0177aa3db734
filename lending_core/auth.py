"""Signer-set authenticator."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterable, Iterator

from .errors import Unauthorized

logger = logging.getLogger(__name__)


class SignerSet:
    """Authorizes an invocation for every identity currently in the signer set."""

    def __init__(self, signers: Iterable[str] = ()) -> None:
        self._signers: set[str] = set(signers)

    @property
    def signers(self) -> frozenset[str]:
        return frozenset(self._signers)

    def require_caller_is(self, identity: str) -> None:
        if identity not in self._signers:
            logger.debug("Rejected invocation: '%s' did not sign", identity)
            raise Unauthorized(identity)

    @contextmanager
    def signed_by(self, *identities: str) -> Iterator[None]:
        """Temporarily add ``identities`` to the signer set."""
        added = set(identities) - self._signers
        self._signers |= added
        try:
            yield
        finally:
            self._signers -= added
