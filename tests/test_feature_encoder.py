"""Unit tests for feature encoding."""

import numpy as np
import pytest

from node_highlighter.config.pattern_config import PatternConfig
from node_highlighter.models.document_kind import DocumentKind
from node_highlighter.models.node import StructuralNode
from node_highlighter.pipeline.feature_encoder import FEATURE_DIM, build_feature_matrix, encode_node


def _node(text, x=100.0, font_size=12.0, node_id="pdf-1-0"):
    return StructuralNode(
        id=node_id, kind=DocumentKind.PDF_LIKE, x=x, text=text,
        page=1, y=120.0, font_size=font_size,
    )


def test_encode_node_scaling():
    """Test fixed scaling of x, font size and length."""
    vector = encode_node(_node("Item 1", x=250.0, font_size=12.0), PatternConfig())

    assert vector == pytest.approx([0.25, 0.12, 0.0, 6 / 500])


def test_leading_digit_flag_ignores_surrounding_whitespace():
    config = PatternConfig()

    assert encode_node(_node("  42 pcs"), config)[2] == 1.0
    assert encode_node(_node("pcs 42"), config)[2] == 0.0


def test_length_feature_is_capped():
    vector = encode_node(_node("x" * 2000), PatternConfig())

    assert vector[3] == 1.0


def test_custom_normalization_constants():
    config = PatternConfig(x_norm=100.0, font_norm=10.0, length_norm=10.0)

    assert encode_node(_node("abcde", x=50.0, font_size=5.0), config) == pytest.approx([0.5, 0.5, 0.0, 0.5])


def test_build_feature_matrix_shape():
    """Test that row i of the matrix encodes node i."""
    nodes = [_node("1", node_id="pdf-1-0"), _node("Name", x=300.0, node_id="pdf-1-1")]

    matrix = build_feature_matrix(nodes, PatternConfig())

    assert matrix.shape == (2, FEATURE_DIM)
    assert matrix.dtype == np.float64
    assert matrix[1, 0] == pytest.approx(0.3)


def test_build_feature_matrix_empty():
    assert build_feature_matrix([], PatternConfig()).shape == (0, FEATURE_DIM)
