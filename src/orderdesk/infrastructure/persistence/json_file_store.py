"""Shared plumbing for the JSON-file-backed repositories.

Each repository owns one file holding a JSON array of records. Outside a
transaction every ``save`` rewrites the file immediately. Between
``begin()`` and ``commit()`` the records live in a staged in-memory copy,
so reads see earlier writes of the same transaction and ``rollback()``
leaves the file untouched.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path

from orderdesk.domain.repository.transaction import Transactional

logger = logging.getLogger(__name__)


class JsonFileStore(Transactional):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._staged: list[dict] | None = None
        self._ensure_file()

    # --- Transactional interface ----------------------------------------------

    def begin(self) -> None:
        if self._staged is not None:
            raise RuntimeError(f"{self._file_path.name}: transaction already open")
        self._staged = self._read_file()

    def commit(self) -> None:
        if self._staged is None:
            raise RuntimeError(f"{self._file_path.name}: no open transaction")
        self._write_file(self._staged)
        self._staged = None

    def rollback(self) -> None:
        if self._staged is not None:
            logger.debug("Discarding staged writes to %s", self._file_path)
        self._staged = None

    # --- Record access for subclasses -----------------------------------------

    def _load_raw(self) -> list[dict]:
        if self._staged is not None:
            return copy.deepcopy(self._staged)
        return self._read_file()

    def _persist_raw(self, records: list[dict]) -> None:
        if self._staged is not None:
            self._staged = records
        else:
            self._write_file(records)

    # --- File helpers ---------------------------------------------------------

    def _read_file(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _write_file(self, records: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(records, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
