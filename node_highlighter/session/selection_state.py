"""Selection state of the active document.

States: EMPTY -> (seed click / column toggle) -> PARTIAL -> (clear or file switch) -> EMPTY.
The selection type is set by the first propagation and stays until the
selection is cleared. Exclusions are an overlay: an excluded id keeps its
place in node_ids but is not reported as highlighted.
"""

import logging
from typing import List, Optional

import numpy as np

from ..config.pattern_config import PatternConfig
from ..models.document import MissingSeedNode, StructuralDocument
from ..models.document_kind import DocumentKind
from ..models.selection import Selection
from ..pipeline.feature_encoder import build_feature_matrix
from ..pipeline.selection_expander import expand_to_lines, select_aligned, toggle_column
from ..pipeline.similarity import find_raw_matches

logger = logging.getLogger(__name__)


class SelectionKindError(ValueError):
    """Raised when an operation does not apply to the active document kind."""
    pass


class SelectionState:
    """Holds the active document, its feature matrix and the current selection.

    Exactly one document and one feature matrix are held at a time; loading a
    document replaces both wholesale and resets the selection.
    """

    def __init__(self, config: Optional[PatternConfig] = None):
        self.config = config or PatternConfig()
        self.document: Optional[StructuralDocument] = None
        self.features: Optional[np.ndarray] = None
        self.selection = Selection()
        self.excluded: List[str] = []
        self.active_sheet_index = 0

    # ----------------------------
    # Document lifecycle
    # ----------------------------

    def load(self, document: StructuralDocument) -> None:
        """Make a document active, dropping the previous one first."""
        self.unload()
        features = None
        if document.kind == DocumentKind.PDF_LIKE:
            features = build_feature_matrix(document.nodes, self.config)
        self.document = document
        self.features = features
        if document.is_empty:
            logger.info(f"{document.filename}: empty document, propagation is a no-op")

    def unload(self) -> None:
        """Release the active document and reset selection and exclusions."""
        self.document = None
        self.features = None
        self.active_sheet_index = 0
        self.clear_selection()

    def set_active_sheet(self, sheet_index: int) -> None:
        self._require_kind(DocumentKind.TABULAR, "set_active_sheet")
        self._check_sheet(sheet_index)
        self.active_sheet_index = sheet_index

    # ----------------------------
    # Mutations
    # ----------------------------

    def select_by_seed(self, node_id: str) -> Selection:
        """Propagate a selection from a seed node and union it into node_ids.

        PDF-like documents: raw matches by feature similarity, expanded to
        whole visual lines. Flowing documents: every block aligned with the
        seed's x within the match tolerance.

        A node id that is not in the active document leaves the selection
        unchanged.

        Args:
            node_id: Id of the seed node

        Returns:
            The current selection

        Raises:
            SelectionKindError: If the active document is a spreadsheet
        """
        if self.document is None:
            logger.info(f"No active document, ignoring seed {node_id}")
            return self.selection
        kind = self.document.kind
        if kind == DocumentKind.TABULAR:
            raise SelectionKindError("Spreadsheets are selected by column, not by seed node")
        self._check_sticky_type(kind)

        try:
            seed_index = self.document.index_of(node_id)
        except MissingSeedNode:
            logger.info(f"Seed node {node_id} not in {self.document.filename}, selection unchanged")
            return self.selection

        nodes = self.document.nodes
        before = len(self.selection.node_ids)
        if kind == DocumentKind.PDF_LIKE:
            raw_matches = find_raw_matches(self.features, seed_index, self.config.similarity_threshold)
            logger.debug(f"Seed {node_id}: {len(raw_matches)} raw match(es)")
            node_ids = expand_to_lines(nodes, raw_matches, self.selection.node_ids)
        else:
            node_ids = select_aligned(
                nodes, nodes[seed_index], self.config.x_match_tolerance, self.selection.node_ids
            )

        self.selection.type = kind
        self.selection.node_ids = node_ids
        logger.debug(f"Seed {node_id}: {len(node_ids) - before} node(s) added, {len(node_ids)} selected")
        return self.selection

    def exclude_node(self, node_id: str) -> None:
        """Veto a node from the highlighted set without touching node_ids."""
        if self.document is not None and self.document.kind == DocumentKind.TABULAR:
            raise SelectionKindError("Spreadsheet selections have no node exclusions")
        if self.document is None or node_id not in self.document:
            logger.info(f"Node {node_id} not in active document, exclusion ignored")
            return
        if node_id not in self.excluded:
            self.excluded.append(node_id)

    def toggle_column(self, sheet_index: int, column_index: int) -> Selection:
        """Select a column of a sheet, or deselect it when already selected.

        Raises:
            SelectionKindError: If the active document is not a spreadsheet
            ValueError: If the sheet or column does not exist
        """
        self._require_kind(DocumentKind.TABULAR, "toggle_column")
        self._check_sticky_type(DocumentKind.TABULAR)
        sheet = self._check_sheet(sheet_index)
        if not 0 <= column_index < sheet.column_count:
            raise ValueError(
                f"Column {column_index} out of range for sheet {sheet.name!r} "
                f"({sheet.column_count} columns)"
            )
        current = self.selection.indices.get(sheet_index, set())
        self.selection.indices[sheet_index] = toggle_column(current, column_index)
        self.selection.type = DocumentKind.TABULAR
        return self.selection

    def clear_selection(self) -> None:
        """Reset selection and exclusions to EMPTY."""
        self.selection = Selection()
        self.excluded = []

    # ----------------------------
    # Queries
    # ----------------------------

    def is_selected(self, node_id: str) -> bool:
        """True if the node is in node_ids, regardless of exclusions."""
        return node_id in self.selection.node_ids

    def is_excluded(self, node_id: str) -> bool:
        return node_id in self.excluded

    def is_highlighted(self, node_id: str) -> bool:
        """True if the node is selected and not excluded."""
        return self.is_selected(node_id) and not self.is_excluded(node_id)

    def is_column_selected(self, sheet_index: int, column_index: int) -> bool:
        if self.selection.type != DocumentKind.TABULAR:
            return False
        return column_index in self.selection.indices.get(sheet_index, set())

    def selected_columns(self, sheet_index: int) -> List[int]:
        return sorted(self.selection.indices.get(sheet_index, set()))

    def highlighted_ids(self) -> List[str]:
        """Selected, non-excluded node ids in document order."""
        if self.document is None:
            return []
        return [n.id for n in self.document.nodes if self.is_highlighted(n.id)]

    def selected_count(self) -> int:
        """Selected columns summed over sheets (tabular) or size of node_ids."""
        if self.selection.type is None:
            return 0
        if self.selection.type == DocumentKind.TABULAR:
            return sum(len(cols) for cols in self.selection.indices.values())
        return len(self.selection.node_ids)

    def highlighted_count(self) -> int:
        return len(self.selection.node_ids - set(self.excluded))

    # ----------------------------
    # Helpers
    # ----------------------------

    def _require_kind(self, kind: DocumentKind, operation: str) -> None:
        if self.document is None or self.document.kind != kind:
            active = self.document.kind.value if self.document else "none"
            raise SelectionKindError(f"{operation} requires a {kind.value} document, active is {active}")

    def _check_sticky_type(self, kind: DocumentKind) -> None:
        if self.selection.type is not None and self.selection.type != kind:
            raise SelectionKindError(
                f"Selection is {self.selection.type.value}; clear it before selecting in a {kind.value} document"
            )

    def _check_sheet(self, sheet_index: int):
        sheets = self.document.sheets
        if not 0 <= sheet_index < len(sheets):
            raise ValueError(f"Sheet {sheet_index} out of range ({len(sheets)} sheets)")
        return sheets[sheet_index]
