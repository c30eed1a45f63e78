from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from app.exceptions.custom import ReviewPersistError, ReviewStoreError
from app.mappers.hostaway_mapper import canonical_id

logger = logging.getLogger(__name__)


class ReviewStore:
    """Hostaway-shaped review document held in memory and flushed to disk.

    Serves both as the fallback dataset for the live fetch and as the target
    of visibility moderation. Single writer: there is no locking, so two
    concurrent updates of the same review are last-write-wins.
    """

    def __init__(self, path: Path, document: dict[str, Any]) -> None:
        self._path = path
        self._document = document

    @classmethod
    def load(cls, path: Path) -> ReviewStore:
        try:
            with open(path, encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, ValueError) as exc:
            raise ReviewStoreError(f"Cannot load reviews from {path}: {exc}") from exc

        if not isinstance(document, dict) or not isinstance(document.get("result"), list):
            raise ReviewStoreError(f"{path} has no 'result' array")

        logger.info("Loaded %d reviews from %s", len(document["result"]), path)
        return cls(path, document)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def records(self) -> list[dict[str, Any]]:
        return self._document["result"]

    def find(self, review_id: Any) -> dict[str, Any] | None:
        wanted = canonical_id(review_id)
        if wanted is None:
            return None
        for record in self.records:
            if isinstance(record, dict) and canonical_id(record.get("id")) == wanted:
                return record
        return None

    def set_public_display(self, review_id: Any, public_display: bool) -> dict[str, Any] | None:
        """Overwrite the visibility flag in memory. Returns the record, or None."""
        record = self.find(review_id)
        if record is None:
            return None
        record["PublicDisplayStatus"] = public_display
        return record

    def dumps(self) -> str:
        """Serialize the current document. Call from the thread that mutates it."""
        return json.dumps(self._document, indent=2, ensure_ascii=False)

    def save(self) -> None:
        self.write(self.dumps())

    def write(self, payload: str) -> None:
        """Replace the file with an already serialized document (temp file + replace)."""
        directory = self._path.parent
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=directory, prefix=f".{self._path.name}.", suffix=".tmp"
            )
        except OSError as exc:
            raise ReviewPersistError(f"Cannot write to {directory}: {exc}") from exc

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self._path)
        except OSError as exc:
            try:
                os.unlink(tmp_name)
            except OSError:
                logger.warning("Could not remove temp file %s", tmp_name)
            raise ReviewPersistError(f"Cannot write {self._path}: {exc}") from exc

        logger.debug("Saved reviews to %s", self._path)
