"""Selection expansion: raw matches -> final selected node ids.

All expansions are additive: they return the union of the existing
selection and the new matches, never removing an id.
"""

import logging
from typing import AbstractSet, Iterable, Sequence, Set

from ..models.node import StructuralNode
from .line_grouping import LineKey, line_key

logger = logging.getLogger(__name__)


def expand_to_lines(
    nodes: Sequence[StructuralNode],
    raw_matches: Iterable[int],
    existing: AbstractSet[str] = frozenset(),
) -> Set[str]:
    """Select every node sharing a line key with any raw match.

    A single matching node anywhere in a row pulls in the entire row, even
    nodes that did not score above the threshold themselves.

    Args:
        nodes: Paginated nodes of the document
        raw_matches: Indices of raw matches into nodes
        existing: Already selected ids

    Returns:
        existing | ids of all nodes on an active line
    """
    active_lines: Set[LineKey] = {line_key(nodes[i]) for i in raw_matches}
    selected = set(existing)
    for node in nodes:
        if line_key(node) in active_lines:
            selected.add(node.id)
    logger.debug(f"{len(active_lines)} active line(s), {len(selected) - len(existing)} new node(s)")
    return selected


def select_aligned(
    nodes: Sequence[StructuralNode],
    seed: StructuralNode,
    tolerance: float,
    existing: AbstractSet[str] = frozenset(),
) -> Set[str]:
    """Select every flowing node horizontally aligned with the seed.

    Args:
        nodes: Flowing nodes of the document
        seed: Seed node
        tolerance: A node is aligned iff |x - seed.x| < tolerance
        existing: Already selected ids

    Returns:
        existing | ids of aligned nodes
    """
    selected = set(existing)
    for node in nodes:
        if abs(node.x - seed.x) < tolerance:
            selected.add(node.id)
    return selected


def toggle_column(columns: AbstractSet[int], column_index: int) -> Set[int]:
    """Add a column index, or remove it when already selected."""
    if column_index < 0:
        raise ValueError(f"Column index must be >= 0, got {column_index}")
    toggled = set(columns)
    if column_index in toggled:
        toggled.remove(column_index)
    else:
        toggled.add(column_index)
    return toggled
