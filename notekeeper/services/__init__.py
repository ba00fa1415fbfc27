"""
Services.

NoteStore owns the notes table; EditSession implements save-on-exit
editing on top of it.
"""

from notekeeper.services.note import NoteStore, filter_notes
from notekeeper.services.session import EditSession, SaveOutcome, SaveStatus, SessionState

__all__ = [
    "EditSession",
    "NoteStore",
    "SaveOutcome",
    "SaveStatus",
    "SessionState",
    "filter_notes",
]
