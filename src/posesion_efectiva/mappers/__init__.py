"""
Mappers from the submitted declaration to the form's field vocabulary.
"""

from .case_to_fields import CategoryResult, CategoryTotals, FieldMapResult, build_field_map
from .form_schema import TEMPLATE_VERSION

__all__ = [
    "CategoryResult",
    "CategoryTotals",
    "FieldMapResult",
    "build_field_map",
    "TEMPLATE_VERSION",
]
