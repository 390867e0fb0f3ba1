"""StructuralDocument data model: the node arena of the active file."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .document_kind import DocumentKind
from .node import StructuralNode
from .sources import Sheet


class MissingSeedNode(KeyError):
    """Raised when a node id is not present in the document's node list."""
    pass


@dataclass
class StructuralDocument:
    """Owns the extracted nodes (or sheets) of one document.

    Nodes are stored in document order and addressed by id through an
    id -> index mapping; renderers look geometry up by id.

    Attributes:
        filename: Document filename
        filepath: Full path to the source file
        kind: Document kind
        nodes: Structural nodes in document order (PDF-like and flowing)
        sheets: Cell grids (tabular)
        page_count: Number of pages (PDF-like), 0 otherwise
        skipped: Labels of pages/blocks/sheets skipped after extraction failures
    """

    filename: str
    filepath: str
    kind: DocumentKind
    nodes: List[StructuralNode] = field(default_factory=list)
    sheets: List[Sheet] = field(default_factory=list)
    page_count: int = 0
    skipped: List[str] = field(default_factory=list)
    _index: Dict[str, int] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self):
        """Build the id -> index mapping and reject duplicate ids."""
        for i, node in enumerate(self.nodes):
            if node.id in self._index:
                raise ValueError(f"Duplicate node id in document: {node.id}")
            if node.kind != self.kind:
                raise ValueError(
                    f"Node {node.id} is {node.kind.value}, document is {self.kind.value}"
                )
            self._index[node.id] = i

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    @property
    def is_empty(self) -> bool:
        """True when no structural content was extracted."""
        if self.kind == DocumentKind.TABULAR:
            return not any(sheet.rows for sheet in self.sheets)
        return not self.nodes

    def index_of(self, node_id: str) -> int:
        """Return the position of a node in the node list.

        Raises:
            MissingSeedNode: If the id does not belong to this document
        """
        try:
            return self._index[node_id]
        except KeyError:
            raise MissingSeedNode(node_id) from None

    def get(self, node_id: str) -> Optional[StructuralNode]:
        index = self._index.get(node_id)
        return self.nodes[index] if index is not None else None
