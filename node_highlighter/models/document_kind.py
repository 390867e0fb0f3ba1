"""Document kinds a selection can apply to."""

from enum import Enum


class DocumentKind(str, Enum):
    """Kind of the active document.

    PDF-like documents are paginated text runs, flowing documents are
    Word-like block trees and tabular documents are spreadsheets.
    """

    PDF_LIKE = "PDF-LIKE"
    FLOWING = "FLOWING"
    TABULAR = "TABULAR"
