"""
PDF layer: AcroForm filling, flattening, overflow pages and assembly.
"""

from .acroform import AcroFormDocument, merge_documents
from .annex import build_annex
from .assembler import FilledDocument, FillReport, apply_field_map, assemble, fill_document
from .base import DocumentAssemblyError, FormFieldWriter, FormFillingError, TemplateError
from .overflow import apply_overflow, replicate_inventory_pages

__all__ = [
    "AcroFormDocument",
    "DocumentAssemblyError",
    "FillReport",
    "FilledDocument",
    "FormFieldWriter",
    "FormFillingError",
    "TemplateError",
    "apply_field_map",
    "apply_overflow",
    "assemble",
    "build_annex",
    "fill_document",
    "merge_documents",
    "replicate_inventory_pages",
]
