"""
Posesión Efectiva form generator

Fills the official Chilean "Posesión Efectiva" PDF form from the JSON the
front-end submits: decedent, applicant, representative, heirs, and the
inventory of assets and liabilities with their totals.

Usage:
    from posesion_efectiva import generate_pdf, OverflowStrategy

    result = generate_pdf(
        {"causante": {"rut": "12.345.678-5", "primer_apellido": "Pérez"}},
        strategy=OverflowStrategy.SYNTHESIZE_ANNEX,
    )

    if result.success:
        Path(result.filename).write_bytes(result.pdf)
    else:
        print(result.error, result.details)

    # Field values only, without touching a PDF
    from posesion_efectiva import build_field_map, SolicitudPosesionEfectiva

    mapped = build_field_map(SolicitudPosesionEfectiva.model_validate(data))
    print(mapped.totals.masa_hereditaria)
"""

from .main import generate_pdf, generate_pdf_from_file, pdf_filename
from .mappers.case_to_fields import FieldMapResult, build_field_map
from .pdf.assembler import fill_document
from .pdf.base import DocumentAssemblyError, FormFillingError, TemplateError
from .schemas.base import GenerationResult, OverflowStrategy
from .schemas.case import SolicitudPosesionEfectiva

__all__ = [
    # Generation
    "generate_pdf",
    "generate_pdf_from_file",
    "pdf_filename",
    "fill_document",
    # Mapping
    "build_field_map",
    "FieldMapResult",
    # Types
    "GenerationResult",
    "OverflowStrategy",
    "SolicitudPosesionEfectiva",
    # Errors
    "FormFillingError",
    "TemplateError",
    "DocumentAssemblyError",
]
