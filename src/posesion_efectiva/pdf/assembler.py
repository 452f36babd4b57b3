"""
Document assembler: template in, filled and flattened PDF out.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ..logging_config import get_logger
from ..mappers.case_to_fields import FieldMapResult, build_field_map
from ..schemas.base import OverflowStrategy
from ..schemas.case import SolicitudPosesionEfectiva
from .acroform import AcroFormDocument
from .base import FormFieldWriter, TemplateError
from .overflow import apply_overflow

logger = get_logger(__name__)


@dataclass(frozen=True)
class FillReport:
    """Names the template did not contain."""

    missing_fields: tuple[str, ...] = ()
    missing_checkboxes: tuple[str, ...] = ()


def read_template(template: Union[bytes, Path, str]) -> bytes:
    if isinstance(template, bytes):
        return template
    path = Path(template)
    try:
        return path.read_bytes()
    except OSError as e:
        raise TemplateError(f"No se encontró la plantilla: {path}", details=str(e)) from e


def apply_field_map(writer: FormFieldWriter, result: FieldMapResult) -> FillReport:
    """Write every value; names absent from the template are collected, not raised."""
    missing_fields = tuple(
        name for name, value in result.fields.items() if not writer.try_set_text(name, value)
    )
    missing_checkboxes = tuple(
        name for name, checked in result.checkboxes.items() if not writer.try_set_checkbox(name, checked)
    )
    return FillReport(missing_fields, missing_checkboxes)


@dataclass(frozen=True)
class FilledDocument:
    """Final PDF plus the field map it was filled from."""

    pdf: bytes
    field_map: FieldMapResult
    report: FillReport


def assemble(
    template: Union[bytes, Path, str],
    case: SolicitudPosesionEfectiva,
    strategy: OverflowStrategy = OverflowStrategy.REPLICATE_TEMPLATE,
) -> FilledDocument:
    """
    Fill the template with a declaration.

    Args:
        template: Template bytes or path
        case: The declaration
        strategy: Overflow representation

    Returns:
        FilledDocument with the PDF bytes, the field map and the template misses

    Raises:
        TemplateError: If the template cannot be read
        DocumentAssemblyError: If flattening, merging or serialization fails
    """
    template_bytes = read_template(template)
    result = build_field_map(case)

    document = AcroFormDocument.from_bytes(template_bytes)
    report = apply_field_map(document, result)
    for name in report.missing_fields + report.missing_checkboxes:
        logger.debug("template_field_missing", field=name)
    if report.missing_fields or report.missing_checkboxes:
        logger.info(
            "template_fields_missing",
            fields=len(report.missing_fields),
            checkboxes=len(report.missing_checkboxes),
        )

    document.flatten()
    pdf_bytes = apply_overflow(strategy, document, template_bytes, case, result)
    logger.info(
        "pdf_generated",
        strategy=strategy.value,
        fields=len(result.fields) - len(report.missing_fields),
        total_activos=result.totals.total_activos,
        masa_hereditaria=result.totals.masa_hereditaria,
        size=len(pdf_bytes),
    )
    return FilledDocument(pdf_bytes, result, report)


def fill_document(
    template: Union[bytes, Path, str],
    case: SolicitudPosesionEfectiva,
    strategy: OverflowStrategy = OverflowStrategy.REPLICATE_TEMPLATE,
) -> bytes:
    """Fill the template with a declaration and return the final PDF."""
    return assemble(template, case, strategy).pdf
