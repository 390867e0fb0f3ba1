"""Pipeline stages: extraction, line grouping, encoding, matching and expansion."""

from .feature_encoder import build_feature_matrix, encode_node
from .line_grouping import group_nodes_to_lines, line_key, quantize
from .similarity import find_raw_matches, score_against_seed

__all__ = [
    "build_feature_matrix",
    "encode_node",
    "find_raw_matches",
    "group_nodes_to_lines",
    "line_key",
    "quantize",
    "score_against_seed",
]
