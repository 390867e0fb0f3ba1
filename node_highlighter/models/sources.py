"""Raw primitives handed over by external parsers and renderers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .document_kind import DocumentKind


@dataclass
class TextItem:
    """One positioned text primitive from a page text/geometry provider.

    Attributes:
        text: Text content (may be empty or whitespace)
        x: X-coordinate (left edge)
        y: Y-coordinate, in the convention given by PageText.origin
        width: Item width
        height: Item height
        font_size: Optional font size; item height is used when missing
    """

    text: str
    x: float
    y: float
    width: float
    height: float
    font_size: Optional[float] = None

    def __post_init__(self):
        """Validate bbox dimensions are non-negative."""
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"TextItem dimensions must be non-negative: "
                f"width={self.width}, height={self.height}"
            )


@dataclass
class PageText:
    """Ordered text items of a single page.

    Attributes:
        page_number: Page number (starts at 1)
        height: Page height, needed to flip bottom-up coordinates
        items: Text items in original document order
        origin: "top" when y grows downward, "bottom" when y grows upward
    """

    page_number: int
    height: float
    items: List[TextItem] = field(default_factory=list)
    origin: str = "top"

    def __post_init__(self):
        if self.page_number < 1:
            raise ValueError(f"Page number must be >= 1, got {self.page_number}")
        if self.origin not in ("top", "bottom"):
            raise ValueError(f"origin must be 'top' or 'bottom', got {self.origin!r}")


@dataclass
class Block:
    """A block element (paragraph, table cell, heading) of a rendered flowing document.

    Attributes:
        tag: Element tag name (p, td, h1..h6)
        text: Inner text of the block
        left: Left edge of the bounding box in viewport units
        top: Top edge of the bounding box
        width: Bounding box width
        height: Bounding box height
    """

    tag: str
    text: str
    left: float
    top: float = 0.0
    width: float = 0.0
    height: float = 0.0


@dataclass
class Sheet:
    """Row-major cell grid of one spreadsheet sheet.

    Rows may be ragged; missing cells are treated as empty strings.
    """

    name: str
    rows: List[List[str]] = field(default_factory=list)

    @property
    def column_count(self) -> int:
        """Number of selectable columns, taken from the header (first) row."""
        return len(self.rows[0]) if self.rows else 0

    def cell(self, row: int, column: int) -> str:
        if row >= len(self.rows) or column >= len(self.rows[row]):
            return ""
        return self.rows[row][column]


@dataclass
class SourceFile:
    """A file in the project library.

    Attributes:
        id: Short random identifier
        name: Display name (file name)
        path: Path to the file on disk
        kind: Document kind detected from the extension
    """

    id: str
    name: str
    path: str
    kind: DocumentKind
