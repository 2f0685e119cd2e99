from typing import Any

from pydantic import BaseModel


class NoteSaveIn(BaseModel):
    # any JSON is accepted; the handler coerces
    docId: Any = None
    user: Any = None
    content: Any = ""
    failToggle: Any = False


class NoteSaveOut(BaseModel):
    ok: bool = True
    docId: str
    size: int


class NoteOut(BaseModel):
    docId: str
    user: str
    size: int
    updatedAt: str
    content: Any
