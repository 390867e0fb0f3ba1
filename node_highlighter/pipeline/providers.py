"""External collaborators: page text, block tree and spreadsheet providers.

Providers turn a container file into the raw primitives the node extractor
consumes. Which provider handles which document kind is decided by a
ProviderRegistry handed to the session, with a readiness check per provider.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

try:
    import pdfplumber
except ImportError:
    pdfplumber = None

try:
    import openpyxl
except ImportError:
    openpyxl = None

from ..models.document_kind import DocumentKind
from ..models.sources import Block, PageText, Sheet, TextItem
from .node_extractor import ExtractionFailure

logger = logging.getLogger(__name__)

# Block elements of a rendered flowing document that carry structure
BLOCK_TAGS = ("p", "td", "h1", "h2", "h3", "h4", "h5", "h6")

# extra_attrs can cause edge cases on some PDFs; we try with them first and fall back.
_EXTRA_ATTRS = ["fontname", "size"]


class ProviderUnavailable(Exception):
    """Raised when no ready provider exists for a document kind."""
    pass


class DocumentLoadError(Exception):
    """Raised when a container file cannot be opened at all."""
    pass


class _Provider(ABC):
    """Common lifecycle of providers (context manager, close)."""

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class PageTextProvider(_Provider):
    """Provides ordered text primitives per page of a paginated document."""

    @abstractmethod
    def page_count(self) -> int:
        pass

    @abstractmethod
    def page_text(self, page_number: int) -> PageText:
        """Return the text items of one page (1-based).

        Raises:
            ExtractionFailure: If the page cannot be read
        """
        pass


class BlockTreeProvider(_Provider):
    """Provides the structural blocks of a rendered flowing document, in traversal order."""

    @abstractmethod
    def container_left(self) -> float:
        """Left edge of the rendered document container."""
        pass

    @abstractmethod
    def block_count(self) -> int:
        pass

    @abstractmethod
    def block(self, index: int) -> Block:
        """Return one block.

        Raises:
            ExtractionFailure: If the block cannot be read
        """
        pass


class SpreadsheetProvider(_Provider):
    """Provides row-major cell grids per sheet."""

    @abstractmethod
    def sheet_names(self) -> List[str]:
        pass

    @abstractmethod
    def sheet(self, index: int) -> Sheet:
        """Return one sheet.

        Raises:
            ExtractionFailure: If the sheet cannot be read
        """
        pass


class PdfPlumberPageProvider(PageTextProvider):
    """Page text provider backed by pdfplumber (searchable PDFs).

    Words are returned in pdfplumber's text-flow order with top-down
    coordinates (y is the word's top edge).
    """

    def __init__(self, filepath: str):
        if pdfplumber is None:
            raise ProviderUnavailable("pdfplumber is required for PDF documents. Install with: pip install pdfplumber")
        if not Path(filepath).exists():
            raise FileNotFoundError(f"PDF file not found: {filepath}")
        try:
            self._pdf = pdfplumber.open(filepath)
        except Exception as e:
            raise DocumentLoadError(f"Failed to read PDF {filepath}: {str(e)}") from e
        self.filepath = filepath

    def page_count(self) -> int:
        return len(self._pdf.pages)

    def page_text(self, page_number: int) -> PageText:
        try:
            page = self._pdf.pages[page_number - 1]
            kwargs: dict = {
                "x_tolerance": 3,
                "y_tolerance": 3,
                "use_text_flow": True,
            }
            try:
                words = page.extract_words(**kwargs, extra_attrs=_EXTRA_ATTRS)
            except Exception:
                words = page.extract_words(**kwargs)
            if not words:
                # some PDFs return empty when extra_attrs is used
                words = page.extract_words(**kwargs)

            items = []
            for word in words:
                x0 = float(word.get('x0', 0))
                top = float(word.get('top', 0))
                x1 = float(word.get('x1', 0))
                bottom = float(word.get('bottom', 0))
                size = word.get('size')
                items.append(TextItem(
                    text=word.get('text', ''),
                    x=x0,
                    y=top,
                    width=max(x1 - x0, 0.0),
                    height=max(bottom - top, 0.0),
                    font_size=float(size) if size is not None else None,
                ))
            return PageText(
                page_number=page_number,
                height=float(page.height),
                items=items,
                origin="top",
            )
        except Exception as e:
            raise ExtractionFailure(f"Page {page_number} of {self.filepath}: {e}") from e

    def close(self) -> None:
        self._pdf.close()


class OpenpyxlWorkbookProvider(SpreadsheetProvider):
    """Spreadsheet provider backed by openpyxl.

    Cell values are converted with str(); empty cells become "".
    """

    def __init__(self, filepath: str):
        if openpyxl is None:
            raise ProviderUnavailable("openpyxl is required for spreadsheets. Install with: pip install openpyxl")
        if not Path(filepath).exists():
            raise FileNotFoundError(f"Workbook not found: {filepath}")
        try:
            self._workbook = openpyxl.load_workbook(filepath, read_only=True, data_only=True)
        except Exception as e:
            raise DocumentLoadError(f"Failed to read workbook {filepath}: {str(e)}") from e
        self.filepath = filepath

    def sheet_names(self) -> List[str]:
        return list(self._workbook.sheetnames)

    def sheet(self, index: int) -> Sheet:
        try:
            worksheet = self._workbook.worksheets[index]
            rows = [
                ["" if value is None else str(value) for value in row]
                for row in worksheet.iter_rows(values_only=True)
            ]
            return Sheet(name=worksheet.title, rows=rows)
        except Exception as e:
            raise ExtractionFailure(f"Sheet {index} of {self.filepath}: {e}") from e

    def close(self) -> None:
        self._workbook.close()


class JsonBlockTreeProvider(BlockTreeProvider):
    """Block tree provider reading a layout dump of a rendered flowing document.

    Expected shape::

        {"container": {"left": 24},
         "blocks": [{"tag": "p", "text": "...", "left": 88, "top": 120,
                     "width": 600, "height": 18}, ...]}

    Only BLOCK_TAGS entries are structural blocks; others are dropped before
    indexing so traversal indices match the renderer's block query.
    """

    def __init__(self, data: Dict[str, Any], source: str = "<memory>"):
        if not isinstance(data, dict) or not isinstance(data.get("blocks"), list):
            raise DocumentLoadError(f"Block tree {source} must be an object with a 'blocks' list")
        self.source = source
        container = data.get("container") or {}
        try:
            self._container_left = float(container.get("left", 0.0))
        except (TypeError, ValueError, AttributeError) as e:
            raise DocumentLoadError(f"Invalid container in {source}: {e}") from e
        self._blocks = [
            b for b in data["blocks"]
            if not isinstance(b, dict) or str(b.get("tag", "")).lower() in BLOCK_TAGS
        ]

    @classmethod
    def from_file(cls, filepath: str) -> 'JsonBlockTreeProvider':
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Block tree not found: {filepath}")
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            # Binary containers such as .docx land here too
            raise DocumentLoadError(f"Not a JSON block tree: {filepath}: {e}") from e
        return cls(data, source=filepath)

    def container_left(self) -> float:
        return self._container_left

    def block_count(self) -> int:
        return len(self._blocks)

    def block(self, index: int) -> Block:
        raw = self._blocks[index]
        try:
            return Block(
                tag=str(raw["tag"]).lower(),
                text=str(raw.get("text") or ""),
                left=float(raw["left"]),
                top=float(raw.get("top", 0.0)),
                width=float(raw.get("width", 0.0)),
                height=float(raw.get("height", 0.0)),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ExtractionFailure(f"Block {index} of {self.source}: {e!r}") from e


@dataclass
class ProviderEntry:
    """Registered provider factory and its readiness check."""
    factory: Callable[[str], Any]
    ready: Callable[[], bool]


class ProviderRegistry:
    """Maps document kinds to provider factories.

    Passed into the session at construction time instead of relying on
    process-wide library readiness flags.
    """

    def __init__(self):
        self._entries: Dict[DocumentKind, ProviderEntry] = {}

    def register(
        self,
        kind: DocumentKind,
        factory: Callable[[str], Any],
        ready: Optional[Callable[[], bool]] = None,
    ) -> None:
        self._entries[kind] = ProviderEntry(factory=factory, ready=ready or (lambda: True))

    def unregister(self, kind: DocumentKind) -> None:
        self._entries.pop(kind, None)

    def is_ready(self, kind: DocumentKind) -> bool:
        entry = self._entries.get(kind)
        if entry is None:
            return False
        try:
            return bool(entry.ready())
        except Exception as e:
            logger.warning(f"Readiness check for {kind.value} provider failed: {e}")
            return False

    def require(self, kind: DocumentKind) -> Callable[[str], Any]:
        """Return the factory for a kind.

        Raises:
            ProviderUnavailable: If no provider is registered or it is not ready
        """
        if kind not in self._entries:
            raise ProviderUnavailable(f"No provider registered for {kind.value} documents")
        if not self.is_ready(kind):
            raise ProviderUnavailable(f"Provider for {kind.value} documents is not ready")
        return self._entries[kind].factory

    def open(self, kind: DocumentKind, filepath: str):
        """Open a provider instance for a file."""
        return self.require(kind)(filepath)


def default_registry() -> ProviderRegistry:
    """Registry with the bundled pdfplumber, JSON block tree and openpyxl providers."""
    registry = ProviderRegistry()
    registry.register(DocumentKind.PDF_LIKE, PdfPlumberPageProvider, lambda: pdfplumber is not None)
    registry.register(DocumentKind.FLOWING, JsonBlockTreeProvider.from_file)
    registry.register(DocumentKind.TABULAR, OpenpyxlWorkbookProvider, lambda: openpyxl is not None)
    return registry
