"""Selection data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Set

from .document_kind import DocumentKind


@dataclass
class Selection:
    """Current selection of the active file.

    Attributes:
        type: Document kind the selection applies to (None while empty)
        node_ids: Selected node ids (PDF-like and flowing)
        indices: Sheet index -> selected column indices (tabular)
    """

    type: Optional[DocumentKind] = None
    node_ids: Set[str] = field(default_factory=set)
    indices: Dict[int, Set[int]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.node_ids and not any(self.indices.values())

    def copy(self) -> "Selection":
        return Selection(
            type=self.type,
            node_ids=set(self.node_ids),
            indices={sheet: set(cols) for sheet, cols in self.indices.items()},
        )
