"""
Base schemas and types shared by the input models.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, model_validator

# Submitted values arrive as whatever the front-end produced: strings, numbers
# or nothing at all. Formatting and parsing happen in the mapper, never here.
Scalar = str | int | float | None


class OverflowStrategy(str, Enum):
    """How entries beyond the form's fixed slots are represented."""
    REPLICATE_TEMPLATE = "replicate_template"
    SYNTHESIZE_ANNEX = "synthesize_annex"


class DeclaracionImpuesto(str, Enum):
    """Tax-declaration status of the estate."""
    EXENTAS = "exentas"
    AFECTAS_ALGUNAS = "afectas_algunas"
    AFECTAS_TODAS = "afectas_todas"


class FormModel(BaseModel):
    """
    Base model for every submitted section.

    Instances are immutable. Unknown keys are kept so a draft can carry
    front-end state the mapper does not use. Explicit nulls are dropped
    before validation so nested objects and lists fall back to their
    empty defaults.
    """

    model_config = {"extra": "allow", "frozen": True, "protected_namespaces": ()}

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class GenerationResult(BaseModel):
    """
    Result of a PDF generation.

    Attributes:
        success: Whether the PDF was produced
        filename: Suggested download filename
        pdf: The PDF bytes (if successful)
        total_activos: Sum of every asset section
        masa_hereditaria: Assets minus liabilities
        error: Error message (if failed)
        details: Underlying cause of the error
    """
    success: bool
    filename: str = ""
    pdf: bytes | None = None
    total_activos: int = 0
    masa_hereditaria: int = 0
    error: str | None = None
    details: str | None = None
