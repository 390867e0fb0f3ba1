"""Unit tests for file type detection."""

import pytest

from node_highlighter.models.document_kind import DocumentKind
from node_highlighter.pipeline.file_type import UnsupportedFileType, detect_document_kind


@pytest.mark.parametrize("filename,kind", [
    ("report.pdf", DocumentKind.PDF_LIKE),
    ("REPORT.PDF", DocumentKind.PDF_LIKE),
    ("prices.xlsx", DocumentKind.TABULAR),
    ("letter.docx", DocumentKind.FLOWING),
    ("letter.doc", DocumentKind.FLOWING),
    ("letter.layout.json", DocumentKind.FLOWING),
])
def test_detect_document_kind(filename, kind):
    assert detect_document_kind(filename) == kind


def test_unsupported_extension():
    with pytest.raises(UnsupportedFileType):
        detect_document_kind("image.png")
    with pytest.raises(UnsupportedFileType):
        detect_document_kind("no_extension")
