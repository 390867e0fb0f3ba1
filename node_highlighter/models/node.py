"""StructuralNode data model: one addressable, positioned text unit."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .document_kind import DocumentKind


@dataclass(frozen=True)
class StructuralNode:
    """A positioned text unit derived from a document.

    Paginated nodes carry page, quantized y and font size. Flowing nodes only
    carry x (the block's horizontal offset inside the rendered container).

    Coordinate system (paginated):
    - Origin (0, 0) is top-left corner of the page
    - X increases rightward
    - Y increases downward, already quantized to the line tolerance

    Attributes:
        id: Identifier unique within the document (e.g. "pdf-1-4", "docx-node-7")
        kind: Document kind the node was extracted from
        x: Horizontal position in document units
        text: Literal text run (or block inner text)
        page: 1-based page number (paginated only)
        y: Quantized vertical position (paginated only)
        font_size: Glyph height (paginated only)
    """

    id: str
    kind: DocumentKind
    x: float
    text: str
    page: Optional[int] = None
    y: Optional[float] = None
    font_size: Optional[float] = None

    def __post_init__(self):
        """Validate that paginated nodes carry page geometry."""
        if not self.id:
            raise ValueError("Node id must be non-empty")
        if self.kind == DocumentKind.PDF_LIKE:
            if self.page is None or self.page < 1:
                raise ValueError(f"Page number must be >= 1, got {self.page}")
            if self.y is None or self.font_size is None:
                raise ValueError(
                    f"Paginated node {self.id} requires y and font_size"
                )

    @property
    def line_key(self) -> Tuple[int, float]:
        """(page, quantized y) pair identifying the node's visual line."""
        if self.page is None or self.y is None:
            raise ValueError(f"Node {self.id} has no line key (not paginated)")
        return (self.page, self.y)
