"""
Overflow page builders.

Two strategies exist for entries and sheets that do not fit the printed
form. Replication appends blank copies of the inventory page according to
the declared sheet count; the annex strategy lists overflowing entries on
synthesized pages.
"""

from __future__ import annotations

from ..logging_config import get_logger
from ..mappers import form_schema as fs
from ..mappers.case_to_fields import FieldMapResult
from ..schemas.base import OverflowStrategy
from ..schemas.case import SolicitudPosesionEfectiva
from ..utils.formatting import parse_int
from .acroform import AcroFormDocument, load_reader, merge_documents
from .annex import build_annex

logger = get_logger(__name__)


def extra_sheet_count(inventario_hojas) -> int:
    """Copies to append for a declared sheet count; one sheet is always implied."""
    sheets = parse_int(inventario_hojas) or 1
    return max(sheets - 1, 0)


def replicate_inventory_pages(
    document: AcroFormDocument,
    template: bytes,
    inventario_hojas,
) -> int:
    """
    Append blank copies of the inventory page from a clean template.

    Returns:
        Number of pages appended
    """
    copies = extra_sheet_count(inventario_hojas)
    for _ in range(copies):
        # Fresh reader per copy so no page object is shared
        document.append_page(load_reader(template), fs.INVENTORY_PAGE_INDEX)
    if copies:
        logger.info("inventory_pages_replicated", copies=copies)
    return copies


def apply_overflow(
    strategy: OverflowStrategy,
    document: AcroFormDocument,
    template: bytes,
    case: SolicitudPosesionEfectiva,
    result: FieldMapResult,
) -> bytes:
    """
    Serialize the flattened document with the overflow pages of `strategy`.

    Args:
        strategy: Which overflow representation to use
        document: Filled and flattened form
        template: Original template bytes, for clean page copies
        case: The declaration
        result: Field map with the overflowing entries

    Returns:
        Final PDF bytes
    """
    if strategy is OverflowStrategy.REPLICATE_TEMPLATE:
        replicate_inventory_pages(document, template, case.inventario_hojas)
        return document.serialize()

    base = document.serialize()
    annex = build_annex(result, case)
    if annex is None:
        return base
    logger.info(
        "annex_generated",
        sections=[key for key, entries in result.overflow.items() if entries],
        entries=sum(len(entries) for entries in result.overflow.values()),
    )
    return merge_documents([base, annex])
