"""Node extraction: raw parser output -> StructuralNode lists.

Extraction is a pure function of the provider output. Items whose trimmed
text is empty are skipped but still consume an index, so node ids stay
stable across repeated extraction of the same document.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, List, Tuple

from ..config.pattern_config import PatternConfig
from ..models.document_kind import DocumentKind
from ..models.node import StructuralNode
from ..models.sources import Block, PageText, Sheet
from .line_grouping import quantize

if TYPE_CHECKING:
    from .providers import BlockTreeProvider, PageTextProvider, SpreadsheetProvider

logger = logging.getLogger(__name__)


class ExtractionFailure(Exception):
    """Raised by a provider when one page, block or sheet cannot be read."""
    pass


def page_node_id(page_number: int, item_index: int) -> str:
    return f"pdf-{page_number}-{item_index}"


def block_node_id(block_index: int) -> str:
    return f"docx-node-{block_index}"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def extract_page_nodes(page_text: PageText, config: PatternConfig) -> List[StructuralNode]:
    """Extract paginated nodes from one page.

    Args:
        page_text: Ordered text items of the page
        config: Pattern configuration (line tolerance)

    Returns:
        Nodes in original item order, y normalized to top-down and quantized
    """
    nodes = []
    for idx, item in enumerate(page_text.items):
        if not item.text.strip():
            continue

        if page_text.origin == "bottom":
            y = page_text.height - item.y
        else:
            y = item.y

        nodes.append(StructuralNode(
            id=page_node_id(page_text.page_number, idx),
            kind=DocumentKind.PDF_LIKE,
            x=float(item.x),
            text=item.text,
            page=page_text.page_number,
            y=quantize(y, config.line_tolerance),
            font_size=float(item.font_size if item.font_size is not None else item.height),
        ))
    return nodes


def extract_paginated_nodes(
    provider: PageTextProvider,
    config: PatternConfig,
) -> Tuple[List[StructuralNode], List[str]]:
    """Extract nodes from every page of a paginated document.

    A page whose provider raises ExtractionFailure is skipped; nodes from the
    other pages are kept.

    Returns:
        (nodes in document order, labels of skipped pages)
    """
    nodes: List[StructuralNode] = []
    skipped: List[str] = []
    for page_number in range(1, provider.page_count() + 1):
        try:
            page_text = provider.page_text(page_number)
        except ExtractionFailure as e:
            logger.warning(f"Skipping page {page_number}: {e}")
            skipped.append(f"page {page_number}")
            continue
        nodes.extend(extract_page_nodes(page_text, config))
    return nodes, skipped


def extract_block_node(block: Block, index: int, container_left: float) -> StructuralNode:
    """Build the flowing node of one non-empty block.

    x is the block's left edge relative to the container, rounded to an integer.
    """
    return StructuralNode(
        id=block_node_id(index),
        kind=DocumentKind.FLOWING,
        x=float(_round_half_up(block.left - container_left)),
        text=block.text.strip(),
    )


def extract_flowing_nodes(provider: BlockTreeProvider) -> Tuple[List[StructuralNode], List[str]]:
    """Extract nodes from the block tree of a flowing document.

    Returns:
        (nodes in traversal order, labels of skipped blocks)
    """
    container_left = provider.container_left()
    nodes: List[StructuralNode] = []
    skipped: List[str] = []
    for index in range(provider.block_count()):
        try:
            block = provider.block(index)
        except ExtractionFailure as e:
            logger.warning(f"Skipping block {index}: {e}")
            skipped.append(f"block {index}")
            continue
        if not block.text.strip():
            continue
        nodes.append(extract_block_node(block, index, container_left))
    return nodes, skipped


def extract_sheets(provider: SpreadsheetProvider) -> Tuple[List[Sheet], List[str]]:
    """Read every sheet of a workbook.

    An unreadable sheet is replaced by an empty sheet of the same name so
    sheet indices stay aligned with the workbook.

    Returns:
        (sheets in workbook order, labels of skipped sheets)
    """
    sheets: List[Sheet] = []
    skipped: List[str] = []
    for index, name in enumerate(provider.sheet_names()):
        try:
            sheets.append(provider.sheet(index))
        except ExtractionFailure as e:
            logger.warning(f"Skipping sheet {index} ({name}): {e}")
            skipped.append(f"sheet {name}")
            sheets.append(Sheet(name=name, rows=[]))
    return sheets, skipped

