"""Session state: active file and selection."""

from .file_library import FileLibrary
from .selection_state import SelectionKindError, SelectionState

__all__ = ["FileLibrary", "SelectionKindError", "SelectionState"]
