import errno
import logging
from typing import Any

from fastapi import APIRouter, Body

from faultdemo import config
from faultdemo.errors import ENOSPC, DiskFullError, NoteNotFound, NoteWriteError
from faultdemo.models.notes import NoteOut, NoteSaveIn, NoteSaveOut
from faultdemo.storage.event_log import NoteEvent, NotesEventLog
from faultdemo.storage.notes_store import NotesStore, content_size

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["notes"])

DATA_DIR = config.data_dir()
store = NotesStore(DATA_DIR)
event_log = NotesEventLog(DATA_DIR)

# character limit for simulated disk full
SIZE_THRESHOLD = 500


def _as_text(value: Any) -> str:
    # JSON scalars render the way a JS client wrote them
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _errno_name(exc: OSError) -> str:
    if exc.errno is None:
        return "EWRITE"
    return errno.errorcode.get(exc.errno, "EWRITE")


@router.post("/save", response_model=NoteSaveOut)
def save_note(payload: NoteSaveIn | None = Body(default=None)) -> NoteSaveOut:
    payload = payload or NoteSaveIn()
    doc_id = _as_text(payload.docId) if payload.docId else "default"
    user = _as_text(payload.user) if payload.user else "anonymous"
    content = payload.content
    size = content_size(content)

    if bool(payload.failToggle) and size > SIZE_THRESHOLD:
        event_log.emit(NoteEvent(
            user=user,
            doc_id=doc_id,
            size=size,
            error=ENOSPC,
            message=DiskFullError.message,
        ))
        logger.warning("Simulated ENOSPC for %s (size=%d > %d)", doc_id, size, SIZE_THRESHOLD)
        raise DiskFullError(size=size, threshold=SIZE_THRESHOLD)

    try:
        store.save(doc_id=doc_id, user=user, content=content, size=size)
    except OSError as exc:
        code = _errno_name(exc)
        event_log.emit(NoteEvent(user=user, doc_id=doc_id, size=size, error=code, message=str(exc)))
        logger.error("Failed to write note %s: %s", doc_id, exc)
        raise NoteWriteError(code=code, reason=str(exc)) from exc

    event_log.emit(NoteEvent(user=user, doc_id=doc_id, size=size, status="OK"))
    return NoteSaveOut(ok=True, docId=doc_id, size=size)


@router.get("/{doc_id}", response_model=NoteOut)
def get_note(doc_id: str) -> NoteOut:
    note = store.get(doc_id)
    if note is None:
        raise NoteNotFound(doc_id)
    return NoteOut(**note.to_dict())
