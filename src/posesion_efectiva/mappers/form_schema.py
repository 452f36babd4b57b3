"""
Field-name table of the Posesión Efectiva form template.

Every name written onto the PDF lives here, keyed by its logical role, so a
template revision only touches this module. Repeated groups use the template's
dot-indexed names: `{slot}` is the widget index inside the group and
`{number}` the 1-based entry number used by the single-row sections.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..schemas.base import DeclaracionImpuesto

TEMPLATE_VERSION = "TIPO_FORMULARIO-2024"


@dataclass(frozen=True)
class FieldMapping:
    """One attribute of a source object written to one form field."""

    key: str
    field: str
    formatter: str = "text"  # text | date | amount
    default: str = ""


@dataclass(frozen=True)
class RutFields:
    """Body and check-character fields of a split RUT."""

    body: str
    check: str


@dataclass(frozen=True)
class DateFields:
    """Day / month / year sub-fields of a date."""

    day: str
    month: str
    year: str


@dataclass(frozen=True)
class IdTypeCheckboxes:
    """RUN (chilean) vs RUT (foreign) checkbox pair."""

    run: str
    rut: str


@dataclass(frozen=True)
class CategoryLayout:
    """Fixed-slot layout of one bounded inventory section."""

    key: str
    label: str
    slots: Sequence[int]
    value_field: str
    total_field: str
    entry_fields: Sequence[FieldMapping] = ()
    shared_fields: Sequence[FieldMapping] = ()

    @property
    def capacity(self) -> int:
        return len(self.slots)


# Decedent
CAUSANTE_RUT = RutFields("RUT CAUSANTE", "VERIFICADOR RUT")
CAUSANTE_NACIMIENTO = DateFields("DIA NACIMIENTO CAUSANTE", "MES NACIMIENTO CAUSANTE", "AÑO NACIMIENTO CAUSANTE")
CAUSANTE_DEFUNCION = DateFields("DIA DEFUNCION CAUSANTE", "MES DEFUNCION", "AÑO DEFUNCION CAUSANTE")
CAUSANTE_NOMBRE_COMPLETO = "NOMBRE COMPLETO DEL CAUSANTE"
CAUSANTE_FIELDS = (
    FieldMapping("nombres", "NOMBRE CAUSANTE"),
    FieldMapping("primer_apellido", "PRIMER APELLIDO CAUSANTE"),
    FieldMapping("segundo_apellido", "SEGUNDO APELLIDO CAUSANTE"),
    FieldMapping("estado_civil", "ESTADO CIVIL"),
    FieldMapping("nacionalidad", "NACIONALIDAD"),
    FieldMapping("actividad", "ACTIVIDAD/PROFESION/OFICIO DEL CAUSANTE"),
)

PARTIDA_FIELDS = (
    FieldMapping("circunscripcion", "CIRCUNSCRIPCION DEFUNCION"),
    FieldMapping("tipo_registro", "TIPO DE REGISTRO DEFUNCION"),
    FieldMapping("ano", "AÑO DEFUNCION"),
    FieldMapping("n_inscripcion", "N° INSCRIPCION DEFUNCION"),
    FieldMapping("lugar_defuncion", "LUGAR DEFUNCION CAUSANTE"),
)

DOMICILIO_CAUSANTE_FIELDS = (
    FieldMapping("calle", "CALLE ULTIMO DOMICILIO"),
    FieldMapping("numero", "NUMERO ULTIMO DOMICILIO"),
    FieldMapping("letra", "LETRA DE LA CALLE DEL ULTIMO DOMICILIO"),
    FieldMapping("resto", "RESTO ULTIMO DOMICILIO CAUSANTE"),
    FieldMapping("comuna", "COMUNA ULTIMO DOMICILIO CAUSANTE"),
    FieldMapping("region", "REGION ULTIMO DOMICILIO CAUSANTE"),
)

# Matrimonial regime (case level) and the founding instrument (representative)
REGIMEN_FIELDS = (
    FieldMapping("regimen_patrimonial", "REGIMEN PATRIMONIAL"),
    FieldMapping("subinscripciones", "SUBINSCRIPCIONES MATRIMONIO"),
)
INSTRUMENTO_FIELDS = (
    FieldMapping("documento_fundante", "DOCUMENTO FUNDANTE"),
    FieldMapping("fecha_doc", "FECHA INSTRUMENTO"),
    FieldMapping("autorizante", "NOTARIO AUTORIZANTE"),
)

# Applicant
SOLICITANTE_RUT = RutFields("RUT SOLICITANTE", "VERIFICADOR RUT SOLICITANTE")
SOLICITANTE_ID_TYPE = IdTypeCheckboxes("RUN", "RUT")
SOLICITANTE_FIELDS = (
    FieldMapping("nombres", "NOMBRE SOLICITANTE"),
    FieldMapping("primer_apellido", "PRIMER APELLIDO SOLICITANTE"),
    FieldMapping("segundo_apellido", "SEGUNDO APELLIDO SOLICITANTE"),
    FieldMapping("calle", "CALLE SOLICITANTE"),
    FieldMapping("numero_calle", "NUMERO CALLE SOLICITANTE"),
    FieldMapping("letra", "LETRA DIRECCION SOLICITANTE"),
    FieldMapping("resto_domicilio", "RESTO DEL DOMICILIO DEL SOLICITANTE"),
    FieldMapping("comuna", "COMUNA SOLICITANTE"),
    FieldMapping("region", "REGION SOLICITANTE"),
    FieldMapping("medio_contacto", "MEDIO DE CONTACTO SOLICITANTE"),
    FieldMapping("correo", "CORREO ELECTRONICO SOLICITANTE"),
    FieldMapping("telefono", "TELEFONO SOLICITANTE"),
)

# Legal representative
REPRESENTANTE_RUT = RutFields("RUT DEL REPRESENTANTE", "VERIFICADOR RUT REPRESENTANTE")
REPRESENTANTE_ID_TYPE = IdTypeCheckboxes("RUN REPRESENTANTE", "RUT REPRESENTANTE")
REPRESENTANTE_FIELDS = (
    FieldMapping("nombres", "NOMBRES REPRESENTANTE"),
    FieldMapping("primer_apellido", "PRIMER APELLIDO REPRESENTANTE"),
    FieldMapping("segundo_apellido", "SEGUNDO APELLIDO REPRESENTANTE"),
    FieldMapping("calle", "CALLE REPRESENTANTE"),
    FieldMapping("numero_calle", "NUMERO DIRECCION REPRESENTANTE"),
    FieldMapping("letra", "LETRA DIRECCION REPRESENTANTE"),
    FieldMapping("resto_domicilio", "RESTO DOMICILIO REPRESENTANTE"),
    FieldMapping("comuna", "COMUNA DIRECCION REPRESENTANTE"),
    FieldMapping("region", "REGION DIRECCION REPRESENTANTE"),
    FieldMapping("tipo", "TIPO REPRESENTANTE"),
    FieldMapping("cesionario", "CESIONARIO?"),
    FieldMapping("correo", "CORREO ELECTRONICO REPRESENTANTE"),
    FieldMapping("telefono", "TELEFONO REPRESENTANTE"),
)

# Heirs: 8 rows on the first heirs page, 12 more under group "8" on the next
HEREDERO_SUFFIXES = tuple(str(i) for i in range(8)) + tuple(f"8.{i}" for i in range(12))
HEREDERO_RUT = "RUT HEREDERO.{idx}"
HEREDERO_NOMBRE = "NOMBRE Y APELLIDOS HEREDERO.{idx}"
HEREDERO_DOMICILIO = "DOMICILIO COMUNA Y REGION HEREDERO.{idx}"
HEREDERO_CALIDAD = "CALIDAD DE HEREDERO.{idx}"
HEREDERO_CEDENTE = "CEDENTE SI/NO.{idx}"
HEREDERO_FIELDS = (
    FieldMapping("fecha_nacimiento", "FECHA NACIMIENTO HEREDERO.{idx}", formatter="date"),
    FieldMapping("fecha_defuncion", "FECHA DEFUNCION HEREDERO.{idx}", formatter="date"),
    FieldMapping("run_representacion", "RUN REPRESENTACION/TRANSMISION HEREDERO.{idx}"),
)
CEDENTE_TRUTHY = frozenset({"S", "SI", "1"})

# General inventory section
OBSERVACIONES = "OBSERVACIONES"
NUMERO_HOJAS_INVENTARIO = "NUMERO DE HOJAS DE INVENTARIO"
BENEFICIO_INVENTARIO = "CON BENEFICIO DE INVENTARIO? SI/NO"
PRESUNCION_20 = "PRESUNCION 20%"
DECLARACION_IMPUESTO_CHECKBOXES = {
    DeclaracionImpuesto.EXENTAS: "Check Box104",
    DeclaracionImpuesto.AFECTAS_ALGUNAS: "Check Box105",
    DeclaracionImpuesto.AFECTAS_TODAS: "Check Box106",
}

# Inventory sections
BIENES_RAICES = CategoryLayout(
    key="bienes_raices",
    label="BIENES RAÍCES",
    slots=(0, 1, 2, 3),
    value_field="VALOR ACTIVO 1.{slot}",
    total_field="TOTAL BIENES RAICES",
    entry_fields=(
        FieldMapping("rol_sii", "ROL SII.{slot}"),
        FieldMapping("tipo", "TIPO DE BIEN N/A.{slot}"),
        FieldMapping("comuna", "COMUNA.{slot}"),
        FieldMapping("fecha_adquisicion", "FECHA ADQUISICION.{slot}", formatter="date"),
        FieldMapping("fojas", "FOJAS.{slot}"),
        FieldMapping("numero_cbr", "NUMERO.{slot}"),
        FieldMapping("ano_cbr", "AÑO.{slot}"),
        FieldMapping("conservador", "CONSERVADOR.{slot}"),
        FieldMapping("ps", "P/S.{slot}", default="P"),
        FieldMapping("exencion", "EXENCION ACTIVO 1.{slot}", formatter="amount"),
    ),
)

VEHICULOS = CategoryLayout(
    key="vehiculos",
    label="VEHÍCULOS",
    slots=(0, 1, 2, 3),
    value_field="VALOR AUTO.{slot}",
    total_field="TOTAL AUTOS",
    entry_fields=(
        FieldMapping("ppu", "PPU.{slot}"),
        FieldMapping("codigo_sii", "CODIGO SII.{slot}"),
        FieldMapping("tipo", "TIPO.{slot}"),
        FieldMapping("marca", "MARCA.{slot}"),
        FieldMapping("modelo", "MODELO.{slot}"),
        FieldMapping("ano", "AÑO AUTO.{slot}"),
        FieldMapping("n_identificacion", "NUMERO IDENTIFICACION CHASIS.{slot}"),
        FieldMapping("ps", "P/S VEHICULO.{slot}", default="P"),
    ),
)

# Row 8 of the household-goods table is not a data row on the printed form.
MENAJE_SLOTS = (0, 1, 2, 3, 4, 5, 6, 7, 9, 10, 11)
MENAJE = CategoryLayout(
    key="menaje",
    label="MENAJE",
    slots=MENAJE_SLOTS,
    value_field="VALOR MENAJE.{slot}",
    total_field="TOTAL MENAJE",
    entry_fields=(
        FieldMapping("descripcion", "DESCRIPCION DEL BIEN MENAJE.{slot}"),
        FieldMapping("ps", "PROPIO O SOCIAL.{slot}", default="P"),
    ),
)
MENAJE_PRESUNCION_LABEL = "Presunción 20% bien raíz"

OTROS_MUEBLES = CategoryLayout(
    key="otros_muebles",
    label="OTROS BIENES MUEBLES",
    slots=(0, 1, 2, 3),
    value_field="NEGOCIOS DERECHOS VALOR{number}",
    total_field="TOTAL DERECHOS",
    shared_fields=(
        FieldMapping("descripcion", "NEGOCIOS DERECHOS DESCRIPCION"),
        FieldMapping("ps", "NEGOCIOS DERECHOS P/S", default="P"),
    ),
)

OTROS_BIENES = CategoryLayout(
    key="otros_bienes",
    label="OTROS ACTIVOS",
    slots=(0, 1, 2, 3),
    value_field="OTROS ACTIVOS VALOR{number}",
    total_field="TOTAL OTROS ACTIVOS",
    shared_fields=(
        FieldMapping("descripcion", "OTROS ACTIVOS DESCRIPCION"),
        FieldMapping("ps", "OTROS ACTIVOS P/S", default="P"),
    ),
)

PASIVOS = CategoryLayout(
    key="pasivos",
    label="PASIVOS",
    slots=(0, 1, 2, 3),
    value_field="VALOR DEUDA{number}",
    total_field="TOTAL PASIVOS",
    shared_fields=(
        FieldMapping("descripcion", "DESCRIPCION DEUDAS"),
        FieldMapping("acreedor", "ACREEDOR DEUDA"),
        FieldMapping("n_documento", "CERTIFICADO DEUDA"),
    ),
)

# Annex order
CATEGORIES = (BIENES_RAICES, VEHICULOS, MENAJE, OTROS_MUEBLES, OTROS_BIENES, PASIVOS)

TOTAL_ACTIVOS = "TOTAL FINAL ACTIVOS"
TOTAL_MASA_HEREDITARIA = "TOTAL MASA HEREDITARIA"
VALOR_UTM = "VALOR UTM"

# Zero-based index of the inventory page replicated for extra sheets
INVENTORY_PAGE_INDEX = 2


def expected_text_fields() -> set[str]:
    """Every text field name the mapper can emit."""
    names: set[str] = {
        CAUSANTE_RUT.body, CAUSANTE_RUT.check,
        SOLICITANTE_RUT.body, SOLICITANTE_RUT.check,
        REPRESENTANTE_RUT.body, REPRESENTANTE_RUT.check,
        CAUSANTE_NOMBRE_COMPLETO, OBSERVACIONES, NUMERO_HOJAS_INVENTARIO,
        BENEFICIO_INVENTARIO, PRESUNCION_20, TOTAL_ACTIVOS,
        TOTAL_MASA_HEREDITARIA, VALOR_UTM,
    }
    for dates in (CAUSANTE_NACIMIENTO, CAUSANTE_DEFUNCION):
        names.update((dates.day, dates.month, dates.year))
    for table in (
        CAUSANTE_FIELDS, PARTIDA_FIELDS, DOMICILIO_CAUSANTE_FIELDS, REGIMEN_FIELDS,
        INSTRUMENTO_FIELDS, SOLICITANTE_FIELDS, REPRESENTANTE_FIELDS,
    ):
        names.update(mapping.field for mapping in table)
    for idx in HEREDERO_SUFFIXES:
        templates = [HEREDERO_RUT, HEREDERO_NOMBRE, HEREDERO_DOMICILIO, HEREDERO_CALIDAD]
        templates += [mapping.field for mapping in HEREDERO_FIELDS]
        names.update(template.format(idx=idx) for template in templates)
    for layout in CATEGORIES:
        names.add(layout.total_field)
        names.update(mapping.field for mapping in layout.shared_fields)
        for number, slot in enumerate(layout.slots, start=1):
            names.add(layout.value_field.format(slot=slot, number=number))
            names.update(m.field.format(slot=slot, number=number) for m in layout.entry_fields)
    return names


def expected_checkboxes() -> set[str]:
    """Every checkbox name the mapper can emit."""
    names = {
        SOLICITANTE_ID_TYPE.run, SOLICITANTE_ID_TYPE.rut,
        REPRESENTANTE_ID_TYPE.run, REPRESENTANTE_ID_TYPE.rut,
    }
    names.update(DECLARACION_IMPUESTO_CHECKBOXES.values())
    names.update(HEREDERO_CEDENTE.format(idx=idx) for idx in HEREDERO_SUFFIXES)
    return names
