"""Document kind detection from file names."""

from pathlib import Path

from ..models.document_kind import DocumentKind


class UnsupportedFileType(ValueError):
    """Raised when a file extension maps to no document kind."""
    pass


def detect_document_kind(filename: str) -> DocumentKind:
    """Detect the document kind from a file extension.

    - .xlsx -> TABULAR
    - any extension containing "doc" (.doc, .docx) and .json block dumps -> FLOWING
    - .pdf -> PDF_LIKE

    Raises:
        UnsupportedFileType: For any other extension
    """
    ext = Path(filename).suffix.lower().lstrip('.')
    if ext == 'xlsx':
        return DocumentKind.TABULAR
    if 'doc' in ext or ext == 'json':
        return DocumentKind.FLOWING
    if ext == 'pdf':
        return DocumentKind.PDF_LIKE
    raise UnsupportedFileType(f"Unsupported file type: {filename}")
