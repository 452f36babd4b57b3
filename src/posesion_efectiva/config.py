"""
Configuration module for the Posesión Efectiva generator.
Loads environment variables and provides configuration settings.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

from .schemas.base import OverflowStrategy

# Project root (the directory holding template/, borradores/ and public/)
BASE_DIR = Path(__file__).resolve().parent.parent.parent
load_dotenv(BASE_DIR / ".env")


class Config:
    """Configuration settings for the generator and its HTTP server."""

    TEMPLATE_PATH: Path = Path(
        os.getenv(
            "PE_TEMPLATE_PATH",
            str(BASE_DIR / "template" / "Formulario_de_Posesion_Efectiva-TIPO_FORMULARIO.pdf"),
        )
    )
    DRAFTS_DIR: Path = Path(os.getenv("PE_DRAFTS_DIR", str(BASE_DIR / "borradores")))
    STATIC_DIR: Path = Path(os.getenv("PE_STATIC_DIR", str(BASE_DIR / "public")))

    # replicate_template | synthesize_annex
    OVERFLOW_STRATEGY: str = os.getenv("PE_OVERFLOW_STRATEGY", OverflowStrategy.REPLICATE_TEMPLATE.value)

    HOST: str = os.getenv("PE_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PE_PORT", "3000"))

    LOG_LEVEL: str = os.getenv("PE_LOG_LEVEL", "INFO").upper()
    LOG_FORMAT: str = os.getenv("PE_LOG_FORMAT", "console")

    @classmethod
    def overflow_strategy(cls) -> OverflowStrategy:
        """Return the configured overflow strategy as an enum member."""
        return OverflowStrategy(cls.OVERFLOW_STRATEGY)

    @classmethod
    def validate(cls) -> None:
        """Validate that the configuration is usable."""
        valid = {strategy.value for strategy in OverflowStrategy}
        if cls.OVERFLOW_STRATEGY not in valid:
            raise ValueError(
                f"PE_OVERFLOW_STRATEGY must be one of {sorted(valid)}, got '{cls.OVERFLOW_STRATEGY}'"
            )
        if cls.LOG_FORMAT not in ("console", "json"):
            raise ValueError("PE_LOG_FORMAT must be 'console' or 'json'")


config = Config()
