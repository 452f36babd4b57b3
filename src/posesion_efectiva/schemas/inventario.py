"""
Inventory schemas: assets and liabilities declared in the estate.

Every entry carries a description, a valuation (integer pesos, sent as a
string or a number) and the P/S flag (P = propio, S = social).
"""

from .base import FormModel, Scalar


class EntradaInventario(FormModel):
    """Common attributes of every inventory entry."""
    descripcion: Scalar = None
    valoracion: Scalar = None
    ps: Scalar = None


class BienRaiz(EntradaInventario):
    """Real-estate asset, identified by its SII roll and CBR inscription."""
    rol_sii: Scalar = None
    tipo: Scalar = None
    comuna: Scalar = None
    fecha_adquisicion: Scalar = None
    fojas: Scalar = None
    numero_cbr: Scalar = None
    ano_cbr: Scalar = None
    conservador: Scalar = None
    exencion: Scalar = None


class Vehiculo(EntradaInventario):
    """Motor vehicle."""
    ppu: Scalar = None
    codigo_sii: Scalar = None
    tipo: Scalar = None
    marca: Scalar = None
    modelo: Scalar = None
    ano: Scalar = None
    n_identificacion: Scalar = None


class Menaje(EntradaInventario):
    """Household-goods item."""


class OtroMueble(EntradaInventario):
    """Other movable asset (businesses, shares, rights)."""


class OtroBien(EntradaInventario):
    """Any other asset or right."""


class Pasivo(EntradaInventario):
    """Liability of the estate."""
    acreedor: Scalar = None
    n_documento: Scalar = None
