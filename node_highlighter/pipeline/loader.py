"""Document loading: provider -> extracted StructuralDocument."""

import logging
from pathlib import Path
from typing import Optional

from ..config.pattern_config import PatternConfig
from ..models.document import StructuralDocument
from ..models.document_kind import DocumentKind
from .file_type import detect_document_kind
from .node_extractor import extract_flowing_nodes, extract_paginated_nodes, extract_sheets
from .providers import ProviderRegistry

logger = logging.getLogger(__name__)


def load_document(
    filepath: str,
    registry: ProviderRegistry,
    config: PatternConfig,
    kind: Optional[DocumentKind] = None,
) -> StructuralDocument:
    """Open a file with the registered provider and extract its structure.

    Args:
        filepath: Path to the document
        registry: Provider registry
        config: Pattern configuration
        kind: Document kind (detected from the extension if None)

    Returns:
        StructuralDocument with nodes (PDF-like, flowing) or sheets (tabular)

    Raises:
        ProviderUnavailable: If no ready provider exists for the kind
        DocumentLoadError: If the container cannot be opened
        FileNotFoundError: If filepath does not exist
        UnsupportedFileType: If kind is None and the extension is unknown
    """
    if kind is None:
        kind = detect_document_kind(filepath)

    with registry.open(kind, filepath) as provider:
        if kind == DocumentKind.PDF_LIKE:
            page_count = provider.page_count()
            nodes, skipped = extract_paginated_nodes(provider, config)
            doc = StructuralDocument(
                filename=Path(filepath).name,
                filepath=filepath,
                kind=kind,
                nodes=nodes,
                page_count=page_count,
                skipped=skipped,
            )
        elif kind == DocumentKind.FLOWING:
            nodes, skipped = extract_flowing_nodes(provider)
            doc = StructuralDocument(
                filename=Path(filepath).name,
                filepath=filepath,
                kind=kind,
                nodes=nodes,
                skipped=skipped,
            )
        else:
            sheets, skipped = extract_sheets(provider)
            doc = StructuralDocument(
                filename=Path(filepath).name,
                filepath=filepath,
                kind=kind,
                sheets=sheets,
                skipped=skipped,
            )

    if doc.is_empty:
        logger.info(f"{doc.filename}: no extractable structure")
    else:
        logger.info(
            f"{doc.filename}: {len(doc.nodes)} node(s), {len(doc.sheets)} sheet(s), "
            f"{len(doc.skipped)} skipped"
        )
    return doc
