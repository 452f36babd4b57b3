"""
Main entry point for the Posesión Efectiva generator.

High-level functions that turn a submitted declaration (dict or JSON file)
into the filled, flattened form.
"""

import json
import re
from datetime import date
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .config import config
from .logging_config import get_logger
from .pdf.assembler import assemble
from .pdf.base import FormFillingError
from .schemas.base import GenerationResult, OverflowStrategy
from .schemas.case import SolicitudPosesionEfectiva

logger = get_logger(__name__)


def pdf_filename(case: SolicitudPosesionEfectiva, today: date | None = None) -> str:
    """'PE_<first surname>_<YYYY-MM-DD>.pdf'; whitespace in the surname becomes '_'."""
    apellido = str(case.causante.primer_apellido or "posesion")
    apellido = re.sub(r"\s+", "_", apellido)
    return f"PE_{apellido}_{(today or date.today()).isoformat()}.pdf"


def generate_pdf(
    data: dict[str, Any] | SolicitudPosesionEfectiva,
    template: Path | bytes | None = None,
    strategy: OverflowStrategy | None = None,
) -> GenerationResult:
    """
    Generate the Posesión Efectiva PDF for a declaration.

    Args:
        data: Declaration as a dict (front-end JSON) or an already validated model
        template: Template path or bytes (defaults to the configured template)
        strategy: Overflow strategy (defaults to the configured one)

    Returns:
        GenerationResult with the PDF bytes or error information

    Example:
        >>> result = generate_pdf(json.loads(Path("caso.json").read_text()))
        >>> if result.success:
        ...     Path(result.filename).write_bytes(result.pdf)
    """
    try:
        case = data if isinstance(data, SolicitudPosesionEfectiva) else SolicitudPosesionEfectiva.model_validate(data)
    except ValidationError as e:
        return GenerationResult(success=False, error="Datos del formulario inválidos", details=str(e))

    strategy = strategy or config.overflow_strategy()
    logger.info(
        "pdf_generation_started",
        causante=case.causante.primer_apellido or "sin nombre",
        strategy=strategy.value,
    )

    try:
        filled = assemble(template or config.TEMPLATE_PATH, case, strategy)
    except FormFillingError as e:
        logger.error("pdf_generation_failed", operation=e.operation, details=e.details, exc_info=True)
        return GenerationResult(success=False, error=e.message, details=e.details)

    totals = filled.field_map.totals
    return GenerationResult(
        success=True,
        filename=pdf_filename(case),
        pdf=filled.pdf,
        total_activos=totals.total_activos,
        masa_hereditaria=totals.masa_hereditaria,
    )


def generate_pdf_from_file(
    data_path: Path | str,
    template: Path | bytes | None = None,
    strategy: OverflowStrategy | None = None,
) -> GenerationResult:
    """
    Convenience function to generate the PDF from a JSON file.

    A saved draft file is accepted as-is.
    """
    path = Path(data_path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        return GenerationResult(success=False, error=f"No se pudo leer {path}", details=str(e))
    if isinstance(data, dict) and isinstance(data.get("data"), dict):
        data = data["data"]
    return generate_pdf(data, template=template, strategy=strategy)
