"""Unit tests for selection expansion."""

import pytest

from node_highlighter.models.document_kind import DocumentKind
from node_highlighter.models.node import StructuralNode
from node_highlighter.pipeline.selection_expander import expand_to_lines, select_aligned, toggle_column


def _pdf_node(node_id, page, y, x=10.0):
    return StructuralNode(
        id=node_id, kind=DocumentKind.PDF_LIKE, x=x, text=node_id,
        page=page, y=y, font_size=10.0,
    )


def _block(node_id, x):
    return StructuralNode(id=node_id, kind=DocumentKind.FLOWING, x=x, text=node_id)


@pytest.fixture
def page_nodes():
    return [
        _pdf_node("pdf-1-0", 1, 120.0, x=50),
        _pdf_node("pdf-1-1", 1, 120.0, x=300),
        _pdf_node("pdf-1-2", 1, 150.0, x=50),
        _pdf_node("pdf-2-0", 2, 120.0, x=50),
    ]


def test_expand_to_lines_selects_whole_line(page_nodes):
    """Test that one raw match pulls in every node of its line, and only that line."""
    selected = expand_to_lines(page_nodes, [0])

    assert selected == {"pdf-1-0", "pdf-1-1"}


def test_expand_to_lines_is_additive(page_nodes):
    selected = expand_to_lines(page_nodes, [2], existing={"pdf-2-0"})

    assert selected == {"pdf-1-2", "pdf-2-0"}


def test_expand_to_lines_does_not_mutate_existing(page_nodes):
    existing = {"pdf-2-0"}

    expand_to_lines(page_nodes, [0], existing=existing)

    assert existing == {"pdf-2-0"}


def test_expand_to_lines_no_matches(page_nodes):
    assert expand_to_lines(page_nodes, []) == set()


def test_select_aligned_tolerance_boundary():
    """Test that x within 14 units is aligned and 16 units is not (tolerance 15)."""
    seed = _block("docx-node-0", 100)
    nodes = [
        seed,
        _block("docx-node-1", 114),
        _block("docx-node-2", 116),
        _block("docx-node-3", 86),
        _block("docx-node-4", 85),
    ]

    selected = select_aligned(nodes, seed, 15)

    assert selected == {"docx-node-0", "docx-node-1", "docx-node-3"}


def test_toggle_column_is_idempotent_pair():
    """Test that toggling twice restores the original set."""
    once = toggle_column({0}, 2)
    twice = toggle_column(once, 2)

    assert once == {0, 2}
    assert twice == {0}


def test_toggle_column_rejects_negative_index():
    with pytest.raises(ValueError):
        toggle_column(set(), -1)
