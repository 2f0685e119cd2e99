import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from faultdemo.storage.notes_store import NOTES_LOG_FILENAME

logger = logging.getLogger(__name__)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class NoteEvent:
    user: str
    doc_id: str
    size: int
    status: Optional[str] = None
    error: Optional[str] = None
    message: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        obj: dict[str, Any] = {
            "timestamp": _utc_now_iso(),
            "user": self.user,
            "docId": self.doc_id,
            "size": self.size,
        }
        if self.error is not None:
            obj["error"] = self.error
            obj["message"] = self.message
        else:
            obj["status"] = self.status or "OK"
        return obj

    def to_json_line(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)


class NotesEventLog:
    def __init__(self, base_dir: Path):
        self.base_dir = base_dir
        self.path = base_dir / NOTES_LOG_FILENAME

    def emit(self, event: NoteEvent) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # append-only, durable write
            with self.path.open("a", encoding="utf-8") as f:
                f.write(event.to_json_line() + "\n")
                f.flush()
                os.fsync(f.fileno())
        except OSError as exc:
            logger.warning("Failed to append notes event for %s: %s", event.doc_id, exc)
