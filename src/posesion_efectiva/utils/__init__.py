"""
Utility functions for formatting form values and inspecting PDFs.
"""

from .formatting import (
    expand_calidad,
    format_date,
    format_money,
    format_rut,
    parse_int,
    presuncion_menaje,
    split_date_parts,
    split_rut,
    to_amount,
)
from .pdf_utils import extract_text_from_pdf, is_valid_pdf, list_form_fields, pdf_page_count

__all__ = [
    "expand_calidad",
    "format_date",
    "format_money",
    "format_rut",
    "parse_int",
    "presuncion_menaje",
    "split_date_parts",
    "split_rut",
    "to_amount",
    "extract_text_from_pdf",
    "is_valid_pdf",
    "list_form_fields",
    "pdf_page_count",
]
