"""Project library: uploaded files and the active-file context."""

import logging
import uuid
from pathlib import Path
from typing import List, Optional

from ..config.pattern_config import PatternConfig, load_pattern_config
from ..models.document import StructuralDocument
from ..models.sources import SourceFile
from ..pipeline.file_type import detect_document_kind
from ..pipeline.loader import load_document
from ..pipeline.providers import ProviderRegistry, default_registry
from .selection_state import SelectionState

logger = logging.getLogger(__name__)


class FileLibrary:
    """Files of a session plus the selection state of the active one.

    Switching files resets selection and exclusions before the new document
    is extracted. A load that finishes after a newer switch has started is
    discarded instead of being installed.
    """

    def __init__(
        self,
        registry: Optional[ProviderRegistry] = None,
        config: Optional[PatternConfig] = None,
    ):
        self.registry = registry or default_registry()
        self.config = config or load_pattern_config()
        self.files: List[SourceFile] = []
        self.active_file_id: Optional[str] = None
        self.state = SelectionState(self.config)
        self._generation = 0

    def add_file(self, filepath: str) -> SourceFile:
        """Add a file to the library (kind detected from its extension).

        Raises:
            UnsupportedFileType: If the extension is not supported
        """
        entry = SourceFile(
            id=uuid.uuid4().hex[:9],
            name=Path(filepath).name,
            path=str(filepath),
            kind=detect_document_kind(filepath),
        )
        self.files.append(entry)
        return entry

    def get(self, file_id: str) -> SourceFile:
        for entry in self.files:
            if entry.id == file_id:
                return entry
        raise KeyError(f"Unknown file id: {file_id}")

    def remove_file(self, file_id: str) -> None:
        self.files = [f for f in self.files if f.id != file_id]
        if self.active_file_id == file_id:
            self.active_file_id = None
            self._generation += 1
            self.state.unload()

    @property
    def active_file(self) -> Optional[SourceFile]:
        if self.active_file_id is None:
            return None
        try:
            return self.get(self.active_file_id)
        except KeyError:
            return None

    def switch_to(self, file_id: str) -> Optional[StructuralDocument]:
        """Make a file active and extract its structure.

        Returns:
            The loaded document, or None when a newer switch superseded this load

        Raises:
            KeyError: If the file id is unknown
            ProviderUnavailable: If no ready provider exists for the file's kind
            DocumentLoadError: If the file cannot be opened
        """
        entry = self.get(file_id)
        self._generation += 1
        generation = self._generation
        self.active_file_id = entry.id
        self.state.unload()

        document = load_document(entry.path, self.registry, self.config, kind=entry.kind)

        if generation != self._generation:
            logger.info(f"Discarding stale extraction of {entry.name}")
            return None
        self.state.load(document)
        return document

    def open(self, filepath: str) -> Optional[StructuralDocument]:
        """Add a file and make it active."""
        return self.switch_to(self.add_file(filepath).id)
