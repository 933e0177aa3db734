"""JSON-file backed key-value store."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from .memory import InMemoryStore

logger = logging.getLogger(__name__)


class JsonFileStore(InMemoryStore):
    """Key-value store persisted to a single JSON document.

    The file is rewritten on every committed transaction (or bare ``set``)
    through a temporary file and ``os.replace``, so readers never see a
    half-written state.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        data = {}
        if self.path.exists():
            with open(self.path) as f:
                data = json.load(f)
            logger.debug("Loaded %d keys from %s", len(data), self.path)
        super().__init__(data)

    def _commit(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            with open(tmp_path, "w") as f:
                json.dump(self._data, f, indent=2, sort_keys=True)
        except Exception:
            tmp_path.unlink(missing_ok=True)
            raise
        os.replace(tmp_path, self.path)
