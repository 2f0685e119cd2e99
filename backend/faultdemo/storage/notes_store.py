import json
import logging
import os
import tempfile
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

NOTES_FILENAME = "notes.json"
NOTES_LOG_FILENAME = "notes.log.ndjson"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _atomic_write_json(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    # one temp file per write, same dir so replace() stays atomic
    f = tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", dir=path.parent, prefix=path.name + ".", suffix=".tmp", delete=False
    )
    tmp_path = Path(f.name)
    try:
        with f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def content_size(content: Any) -> int:
    if isinstance(content, str):
        return len(content)
    return len(json.dumps(content or "", ensure_ascii=False, separators=(",", ":")))


@dataclass(frozen=True)
class Note:
    doc_id: str
    user: str
    size: int
    updated_at: str
    content: Any

    def to_dict(self) -> dict[str, Any]:
        return {
            "docId": self.doc_id,
            "user": self.user,
            "size": self.size,
            "updatedAt": self.updated_at,
            "content": self.content,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any], doc_id: str = "") -> "Note":
        return cls(
            doc_id=str(raw.get("docId", doc_id)),
            user=str(raw.get("user", "anonymous")),
            size=int(raw.get("size", 0)),
            updated_at=str(raw.get("updatedAt", "")),
            content=raw.get("content", ""),
        )


class NotesStore:
    """All notes in one JSON object keyed by docId, rewritten whole on every save."""

    def __init__(self, base_dir: Path):
        self.base_dir = base_dir
        self.notes_path = base_dir / NOTES_FILENAME
        self.log_path = base_dir / NOTES_LOG_FILENAME
        self._lock = threading.Lock()
        self.ensure_files()

    def ensure_files(self) -> None:
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            if not self.notes_path.exists():
                self.notes_path.write_text("{}", encoding="utf-8")
            if not self.log_path.exists():
                self.log_path.write_text("", encoding="utf-8")
        except OSError:
            logger.exception("Failed to ensure data files under %s", self.base_dir)

    def read_all(self) -> dict[str, dict[str, Any]]:
        try:
            raw = self.notes_path.read_text(encoding="utf-8")
            db = json.loads(raw or "{}")
        except (OSError, ValueError):
            # missing or corrupted file reads as empty
            logger.warning("Unreadable notes file %s, treating as empty", self.notes_path)
            return {}
        if not isinstance(db, dict):
            return {}
        return db

    def get(self, doc_id: str) -> Note | None:
        raw = self.read_all().get(doc_id)
        if not isinstance(raw, dict):
            return None
        return Note.from_dict(raw, doc_id=doc_id)

    def save(self, doc_id: str, user: str, content: Any, size: int | None = None) -> Note:
        note = Note(
            doc_id=doc_id,
            user=user,
            size=content_size(content) if size is None else size,
            updated_at=_utc_now_iso(),
            content=content,
        )
        # read-modify-write of the whole mapping, one writer at a time
        with self._lock:
            db = self.read_all()
            db[doc_id] = note.to_dict()
            _atomic_write_json(self.notes_path, db)
        return note
