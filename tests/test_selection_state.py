"""Unit tests for selection state and pattern propagation."""

import pytest

from node_highlighter.config.pattern_config import PatternConfig
from node_highlighter.models.document import StructuralDocument
from node_highlighter.models.document_kind import DocumentKind
from node_highlighter.models.node import StructuralNode
from node_highlighter.models.sources import Sheet
from node_highlighter.session.selection_state import SelectionKindError, SelectionState


def _pdf_node(node_id, text, page=1, y=120.0, x=50.0, font_size=12.0):
    return StructuralNode(
        id=node_id, kind=DocumentKind.PDF_LIKE, x=x, text=text,
        page=page, y=y, font_size=font_size,
    )


def _block(node_id, x):
    return StructuralNode(id=node_id, kind=DocumentKind.FLOWING, x=x, text=node_id)


def _pdf_document(nodes):
    return StructuralDocument(filename="test.pdf", filepath="test.pdf", kind=DocumentKind.PDF_LIKE, nodes=nodes)


@pytest.fixture
def invoice_state():
    """Two item rows on page 1, one on page 2, plus a total row."""
    state = SelectionState(PatternConfig())
    state.load(_pdf_document([
        _pdf_node("pdf-1-0", "1 Item", y=120.0, x=50),
        _pdf_node("pdf-1-1", "Description text", y=120.0, x=300),
        _pdf_node("pdf-1-2", "2 Item", y=150.0, x=50),
        _pdf_node("pdf-1-3", "Another description", y=150.0, x=300),
        _pdf_node("pdf-1-4", "TOTAL", y=500.0, x=50, font_size=100.0),
        _pdf_node("pdf-1-5", "Notes", y=540.0, x=50),
        _pdf_node("pdf-2-0", "3 Item", page=2, y=120.0, x=50),
    ]))
    return state


@pytest.fixture
def block_state():
    state = SelectionState(PatternConfig())
    state.load(StructuralDocument(
        filename="test.json", filepath="test.json", kind=DocumentKind.FLOWING,
        nodes=[_block("docx-node-0", 100), _block("docx-node-1", 114),
               _block("docx-node-2", 116), _block("docx-node-3", 40)],
    ))
    return state


@pytest.fixture
def sheet_state():
    state = SelectionState(PatternConfig())
    state.load(StructuralDocument(
        filename="test.xlsx", filepath="test.xlsx", kind=DocumentKind.TABULAR,
        sheets=[Sheet(name="Items", rows=[["Name", "Qty", "Price"], ["Widget", "1"]]),
                Sheet(name="Summary", rows=[["Total"]])],
    ))
    return state


def test_line_completeness(invoice_state):
    """Test that a non-matching sibling on a matched line is selected."""
    invoice_state.select_by_seed("pdf-1-0")

    selected = invoice_state.selection.node_ids
    assert "pdf-1-1" in selected  # sibling scores ~0.03 on its own
    assert {"pdf-1-2", "pdf-1-3", "pdf-2-0"} <= selected
    assert "pdf-1-4" not in selected
    assert "pdf-1-5" not in selected
    assert invoice_state.selection.type == DocumentKind.PDF_LIKE


def test_three_line_scenario():
    """Test that a seed in line 2 selects exactly the nodes of line 2."""
    state = SelectionState(PatternConfig())
    nodes = []
    for i in range(3):
        nodes.append(_pdf_node(f"pdf-1-{i}", "Name", y=100.0, x=50, font_size=10.0))
    for i in range(3, 6):
        nodes.append(_pdf_node(f"pdf-1-{i}", "1234", y=130.0, x=50, font_size=10.0))
    for i in range(6, 9):
        nodes.append(_pdf_node(f"pdf-1-{i}", "Note", y=160.0, x=60, font_size=14.0))
    state.load(_pdf_document(nodes))

    state.select_by_seed("pdf-1-4")

    assert state.selection.node_ids == {"pdf-1-3", "pdf-1-4", "pdf-1-5"}


def test_determinism(invoice_state):
    """Test that the same seed twice gives the same result."""
    first = set(invoice_state.select_by_seed("pdf-1-0").node_ids)
    second = set(invoice_state.select_by_seed("pdf-1-0").node_ids)

    assert first == second


def test_monotonic_additivity(invoice_state):
    """Test that a second seed never removes ids selected by the first."""
    first = set(invoice_state.select_by_seed("pdf-1-0").node_ids)
    second = set(invoice_state.select_by_seed("pdf-1-4").node_ids)

    assert second >= first
    assert "pdf-1-4" in second


def test_missing_seed_is_noop(invoice_state):
    """Test that a stale node id leaves the selection unchanged."""
    invoice_state.select_by_seed("pdf-1-0")
    before = set(invoice_state.selection.node_ids)

    invoice_state.select_by_seed("pdf-9-9")

    assert invoice_state.selection.node_ids == before


def test_missing_seed_on_empty_selection_keeps_type_unset(invoice_state):
    invoice_state.select_by_seed("pdf-9-9")

    assert invoice_state.selection.type is None
    assert invoice_state.selection.is_empty


def test_empty_document_is_noop():
    state = SelectionState()
    state.load(_pdf_document([]))

    state.select_by_seed("pdf-1-0")

    assert state.selection.is_empty
    assert state.highlighted_ids() == []


def test_no_document_is_noop():
    state = SelectionState()

    assert state.select_by_seed("pdf-1-0").is_empty


def test_exclusion_overlay_transparency(invoice_state):
    """Test that excluding hides a node without removing it from node_ids."""
    invoice_state.select_by_seed("pdf-1-0")
    count = invoice_state.selected_count()

    invoice_state.exclude_node("pdf-1-1")

    assert invoice_state.is_selected("pdf-1-1")
    assert not invoice_state.is_highlighted("pdf-1-1")
    assert "pdf-1-1" in invoice_state.selection.node_ids
    assert "pdf-1-1" not in invoice_state.highlighted_ids()
    assert invoice_state.selected_count() == count
    assert invoice_state.highlighted_count() == count - 1


def test_excluded_node_stays_hidden_after_reselection(invoice_state):
    invoice_state.exclude_node("pdf-1-1")

    invoice_state.select_by_seed("pdf-1-0")

    assert invoice_state.is_selected("pdf-1-1")
    assert not invoice_state.is_highlighted("pdf-1-1")


def test_exclusions_are_not_duplicated(invoice_state):
    invoice_state.exclude_node("pdf-1-1")
    invoice_state.exclude_node("pdf-1-1")
    invoice_state.exclude_node("pdf-9-9")

    assert invoice_state.excluded == ["pdf-1-1"]


def test_highlighted_ids_in_document_order(invoice_state):
    invoice_state.select_by_seed("pdf-1-0")

    assert invoice_state.highlighted_ids() == ["pdf-1-0", "pdf-1-1", "pdf-1-2", "pdf-1-3", "pdf-2-0"]


def test_clear_selection(invoice_state):
    """Test that clearing returns to EMPTY and drops exclusions."""
    invoice_state.select_by_seed("pdf-1-0")
    invoice_state.exclude_node("pdf-1-1")

    invoice_state.clear_selection()

    assert invoice_state.selection.type is None
    assert invoice_state.selection.is_empty
    assert invoice_state.excluded == []
    assert invoice_state.selected_count() == 0


def test_load_replaces_document_and_resets(invoice_state):
    invoice_state.select_by_seed("pdf-1-0")
    old_features = invoice_state.features

    invoice_state.load(_pdf_document([_pdf_node("pdf-1-0", "Other")]))

    assert invoice_state.selection.is_empty
    assert invoice_state.features is not old_features
    assert invoice_state.features.shape == (1, 4)


def test_flowing_alignment(block_state):
    """Test the alignment boundary: +14 selected, +16 not."""
    block_state.select_by_seed("docx-node-0")

    assert block_state.selection.node_ids == {"docx-node-0", "docx-node-1"}
    assert block_state.selection.type == DocumentKind.FLOWING
    assert block_state.features is None


def test_flowing_additivity(block_state):
    block_state.select_by_seed("docx-node-0")
    block_state.select_by_seed("docx-node-3")

    assert block_state.selection.node_ids == {"docx-node-0", "docx-node-1", "docx-node-3"}


def test_toggle_column_twice_restores_state(sheet_state):
    """Test that toggling a column twice returns to the original set."""
    sheet_state.toggle_column(0, 1)
    assert sheet_state.is_column_selected(0, 1)

    sheet_state.toggle_column(0, 1)

    assert not sheet_state.is_column_selected(0, 1)
    assert sheet_state.selected_columns(0) == []
    assert sheet_state.selection.type == DocumentKind.TABULAR


def test_column_selection_is_per_sheet(sheet_state):
    sheet_state.toggle_column(0, 0)
    sheet_state.toggle_column(0, 2)
    sheet_state.toggle_column(1, 0)

    assert sheet_state.selected_columns(0) == [0, 2]
    assert sheet_state.is_column_selected(1, 0)
    assert not sheet_state.is_column_selected(1, 2)
    assert sheet_state.selected_count() == 3


def test_column_out_of_range(sheet_state):
    with pytest.raises(ValueError, match="out of range"):
        sheet_state.toggle_column(0, 3)
    with pytest.raises(ValueError, match="out of range"):
        sheet_state.toggle_column(5, 0)


def test_active_sheet(sheet_state):
    sheet_state.set_active_sheet(1)

    assert sheet_state.active_sheet_index == 1
    with pytest.raises(ValueError):
        sheet_state.set_active_sheet(2)


def test_operations_must_match_document_kind(invoice_state, sheet_state):
    """Test that selections never span document kinds."""
    with pytest.raises(SelectionKindError):
        invoice_state.toggle_column(0, 0)
    with pytest.raises(SelectionKindError):
        sheet_state.select_by_seed("pdf-1-0")
    with pytest.raises(SelectionKindError):
        sheet_state.exclude_node("pdf-1-0")
