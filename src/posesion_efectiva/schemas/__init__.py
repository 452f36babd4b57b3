"""
Input schemas for the Posesión Efectiva declaration.
"""

from .base import DeclaracionImpuesto, GenerationResult, OverflowStrategy
from .case import SolicitudPosesionEfectiva
from .inventario import BienRaiz, Menaje, OtroBien, OtroMueble, Pasivo, Vehiculo
from .person import Causante, Heredero, Representante, Solicitante

__all__ = [
    "DeclaracionImpuesto",
    "GenerationResult",
    "OverflowStrategy",
    "SolicitudPosesionEfectiva",
    "Causante",
    "Solicitante",
    "Representante",
    "Heredero",
    "BienRaiz",
    "Vehiculo",
    "Menaje",
    "OtroMueble",
    "OtroBien",
    "Pasivo",
]
