"""Visual line grouping of paginated nodes based on quantized Y-position."""

import math
from typing import Dict, Iterable, List, Tuple

from ..models.node import StructuralNode

LineKey = Tuple[int, float]


def quantize(y: float, tolerance: float) -> float:
    """Snap a vertical coordinate to the nearest multiple of the line tolerance.

    Halves round up (toward +inf), so 121.5 with tolerance 3 becomes 123.

    Args:
        y: Raw vertical coordinate
        tolerance: Quantization step T (> 0)

    Returns:
        round(y / T) * T
    """
    if tolerance <= 0:
        raise ValueError(f"Line tolerance must be > 0, got {tolerance}")
    return math.floor(y / tolerance + 0.5) * tolerance


def line_key(node: StructuralNode) -> LineKey:
    """Return the (page, quantized y) key of a paginated node.

    Two nodes are on the same visual line iff their keys are equal; no
    transitive or adaptive clustering is done, so runs whose raw y straddle
    a quantization boundary stay on separate lines.
    """
    return node.line_key


def group_nodes_to_lines(nodes: Iterable[StructuralNode]) -> Dict[LineKey, List[StructuralNode]]:
    """Group paginated nodes by line key.

    Args:
        nodes: Paginated nodes in document order

    Returns:
        Dict line key -> nodes on that line, keys in order of first appearance,
        nodes within a line in document order
    """
    lines: Dict[LineKey, List[StructuralNode]] = {}
    for node in nodes:
        lines.setdefault(line_key(node), []).append(node)
    return lines
