"""History persistence: one append-mostly log shared by every orchestrator.

The JSON file store keeps all records in a single blob, newest first. Each
write goes to a temp file which is then renamed over the blob, so a write is
atomic and durable before `append` returns. A missing or corrupt blob reads
as an empty history.
"""

from __future__ import annotations

import base64
import binascii
import datetime
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable
import uuid

from plainly.core.exceptions import HistoryStoreError
from plainly.core.types import ContentKindTag, HistoryRecord

if TYPE_CHECKING:
    import os

logger = logging.getLogger(__name__)


@runtime_checkable
class HistoryStore(Protocol):
    async def append(self, record: HistoryRecord) -> None: ...

    async def list(self) -> list[HistoryRecord]: ...

    async def remove(self, record_id: uuid.UUID) -> None: ...

    async def clear(self) -> None: ...


class InMemoryHistoryStore:
    """Process-local store used in tests and ephemeral sessions."""

    def __init__(self, records: list[HistoryRecord] | None = None) -> None:
        self._records: list[HistoryRecord] = list(records or ())
        self.append_count = 0

    async def append(self, record: HistoryRecord) -> None:
        self._records.insert(0, record)
        self.append_count += 1

    async def list(self) -> list[HistoryRecord]:
        return list(self._records)

    async def remove(self, record_id: uuid.UUID) -> None:
        self._records = [r for r in self._records if r.id != record_id]

    async def clear(self) -> None:
        self._records.clear()


class JSONHistoryStore:
    """Single-file JSON store.

    Shape saved (newest first):
      [
        {"id": str, "createdAt": ISO-8601, "title": str,
         "originalInputSummary": str, "resultMarkdown": str,
         "usedCloud": bool, "kind": str, "thumbnail": base64 | null},
        ...
      ]
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    async def append(self, record: HistoryRecord) -> None:
        entries = self._read_all()
        entries.insert(0, record_to_dict(record))
        self._write_all(entries)
        logger.info("Appended history record %s", record.id)

    async def list(self) -> list[HistoryRecord]:
        records = []
        for entry in self._read_all():
            record = record_from_dict(entry)
            if record is not None:
                records.append(record)
        return records

    async def remove(self, record_id: uuid.UUID) -> None:
        key = str(record_id)
        entries = self._read_all()
        kept = [e for e in entries if e.get("id") != key]
        if len(kept) != len(entries):
            self._write_all(kept)

    async def clear(self) -> None:
        self._write_all([])

    def _read_all(self) -> list[dict[str, Any]]:
        if not self._path.exists():
            return []
        try:
            result = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable history at %s: %s", self._path, e)
            return []
        if not isinstance(result, list):
            logger.warning("Ignoring malformed history at %s", self._path)
            return []
        return [e for e in result if isinstance(e, dict)]

    def _write_all(self, entries: list[dict[str, Any]]) -> None:
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(entries, indent=2), encoding="utf-8")
            Path.replace(tmp, self._path)
        except OSError as e:
            raise HistoryStoreError(f"Could not write history: {e}") from e


def record_to_dict(record: HistoryRecord) -> dict[str, Any]:
    thumbnail = (
        base64.b64encode(record.thumbnail).decode("ascii")
        if record.thumbnail is not None
        else None
    )
    return {
        "id": str(record.id),
        "createdAt": record.created_at.astimezone(datetime.UTC).isoformat(),
        "title": record.title,
        "originalInputSummary": record.original_input_summary,
        "resultMarkdown": record.result_markdown,
        "usedCloud": record.used_cloud,
        "kind": record.kind.value,
        "thumbnail": thumbnail,
    }


def record_from_dict(entry: dict[str, Any]) -> HistoryRecord | None:
    """Decode one stored entry; malformed entries are skipped."""
    try:
        thumbnail_raw = entry.get("thumbnail")
        created_at = datetime.datetime.fromisoformat(entry["createdAt"])
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=datetime.UTC)
        return HistoryRecord(
            id=uuid.UUID(entry["id"]),
            created_at=created_at,
            title=str(entry["title"]),
            original_input_summary=str(entry["originalInputSummary"]),
            result_markdown=str(entry["resultMarkdown"]),
            used_cloud=_require_bool(entry["usedCloud"], "usedCloud"),
            kind=ContentKindTag(entry["kind"]),
            thumbnail=base64.b64decode(thumbnail_raw, validate=True)
            if thumbnail_raw is not None
            else None,
        )
    except (KeyError, TypeError, ValueError, binascii.Error) as e:
        logger.warning("Skipping malformed history entry: %s", e)
        return None


def _require_bool(value: Any, key: str) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"{key} must be a boolean, got {type(value).__name__}")
    return value
