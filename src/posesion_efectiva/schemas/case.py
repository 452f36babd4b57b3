"""
SolicitudPosesionEfectiva - the complete submitted declaration.

Constructed fresh per request from the submitted JSON and never mutated.
"""

from pydantic import Field

from .base import FormModel, Scalar
from .inventario import BienRaiz, Menaje, OtroBien, OtroMueble, Pasivo, Vehiculo
from .person import (
    Causante,
    DomicilioCausante,
    Heredero,
    PartidaDefuncion,
    Representante,
    Solicitante,
)


class SolicitudPosesionEfectiva(FormModel):
    """
    Posesión Efectiva declaration as submitted by the front-end.

    Lists may contain nulls; a null entry keeps its position (and thus its
    slot on the form) but contributes nothing.
    """

    # Persons
    causante: Causante = Field(default_factory=Causante)
    solicitante: Solicitante = Field(default_factory=Solicitante)
    representante: Representante = Field(default_factory=Representante)
    partida: PartidaDefuncion = Field(default_factory=PartidaDefuncion)
    domicilio_causante: DomicilioCausante = Field(default_factory=DomicilioCausante)
    herederos: list[Heredero | None] = Field(default_factory=list)

    # Matrimonial regime
    regimen_patrimonial: Scalar = None
    subinscripciones: Scalar = None

    # Inventory
    bienes_raices: list[BienRaiz | None] = Field(default_factory=list)
    vehiculos: list[Vehiculo | None] = Field(default_factory=list)
    menaje: list[Menaje | None] = Field(default_factory=list)
    otros_muebles: list[OtroMueble | None] = Field(default_factory=list)
    otros_bienes: list[OtroBien | None] = Field(default_factory=list)
    pasivos: list[Pasivo | None] = Field(default_factory=list)

    # Household goods valued as 20% of the first real-estate asset ("1" or true)
    presuncion_20: Scalar | bool = None
    inventario_hojas: Scalar = None
    beneficio_inventario: Scalar = None
    declaracion_impuesto: Scalar = None
    observaciones: Scalar = None
    valor_utm: Scalar = None

    @property
    def usa_presuncion(self) -> bool:
        """True when household goods are valued by the 20% presumption."""
        value = self.presuncion_20
        if isinstance(value, bool):
            return value
        return value is not None and str(value).strip() == "1"
