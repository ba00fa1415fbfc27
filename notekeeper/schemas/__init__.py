# Pydantic schemas package
from notekeeper.schemas.note import NoteRecord

__all__ = [
    "NoteRecord",
]
