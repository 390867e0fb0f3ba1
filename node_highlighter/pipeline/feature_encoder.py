"""Feature encoding of paginated nodes.

Each node maps to a fixed 4-dimensional vector:

    [x / x_norm, font_size / font_norm, starts_with_digit, min(len(text) / length_norm, 1)]

Values are only scaled by the fixed constants (no mean/variance or L2
normalization), so a vector depends on its own node alone.
"""

from typing import List, Sequence

import numpy as np

from ..config.pattern_config import PatternConfig
from ..models.node import StructuralNode

FEATURE_DIM = 4


def encode_node(node: StructuralNode, config: PatternConfig) -> List[float]:
    """Encode one paginated node.

    Args:
        node: Paginated StructuralNode
        config: Normalization constants

    Returns:
        Feature vector of length FEATURE_DIM
    """
    if node.font_size is None:
        raise ValueError(f"Node {node.id} has no font size (not paginated)")
    stripped = node.text.strip()
    starts_with_digit = 1.0 if stripped[:1].isdigit() and stripped[:1].isascii() else 0.0
    return [
        node.x / config.x_norm,
        node.font_size / config.font_norm,
        starts_with_digit,
        min(len(node.text) / config.length_norm, 1.0),
    ]


def build_feature_matrix(nodes: Sequence[StructuralNode], config: PatternConfig) -> np.ndarray:
    """Encode all nodes into an (N, FEATURE_DIM) float64 matrix.

    Row i is the feature vector of nodes[i]; an empty node list yields a
    (0, FEATURE_DIM) matrix.
    """
    if not nodes:
        return np.zeros((0, FEATURE_DIM), dtype=np.float64)
    return np.array([encode_node(node, config) for node in nodes], dtype=np.float64)
