"""Data models for documents, structural nodes and selections."""

from .document import MissingSeedNode, StructuralDocument
from .document_kind import DocumentKind
from .node import StructuralNode
from .selection import Selection
from .sources import Block, PageText, Sheet, SourceFile, TextItem

__all__ = [
    "Block",
    "DocumentKind",
    "MissingSeedNode",
    "PageText",
    "Selection",
    "Sheet",
    "SourceFile",
    "StructuralDocument",
    "StructuralNode",
    "TextItem",
]
