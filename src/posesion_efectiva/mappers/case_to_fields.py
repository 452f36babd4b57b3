"""
Mapper to transform a SolicitudPosesionEfectiva into form field values.

Each section is a pure function over the immutable input returning its own
field/checkbox delta; inventory sections also return their total and the
entries that did not fit the printed slots. `build_field_map` composes them
and derives the final aggregates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

from ..schemas.base import DeclaracionImpuesto
from ..schemas.case import SolicitudPosesionEfectiva
from ..schemas.inventario import EntradaInventario, Menaje
from ..schemas.person import Contacto, Heredero
from ..utils.formatting import (
    expand_calidad,
    format_date,
    format_money,
    format_rut,
    join_present,
    presuncion_menaje,
    split_date_parts,
    split_rut,
    text,
    to_amount,
)
from . import form_schema as fs

FORMATTERS: dict[str, Callable[[Any], str]] = {
    "text": text,
    "date": format_date,
    "amount": lambda value: format_money(to_amount(value)),
}

OverflowEntry = tuple[int, EntradaInventario]


@dataclass(frozen=True)
class CategoryResult:
    """Fields, total and overflow of one inventory section."""

    key: str
    fields: dict[str, str]
    total: int
    overflow: tuple[OverflowEntry, ...] = ()


@dataclass(frozen=True)
class CategoryTotals:
    """Per-section sums over every declared entry, slotted or not."""

    bienes_raices: int = 0
    vehiculos: int = 0
    menaje: int = 0
    otros_muebles: int = 0
    otros_bienes: int = 0
    pasivos: int = 0

    @property
    def total_activos(self) -> int:
        return self.bienes_raices + self.vehiculos + self.menaje + self.otros_muebles + self.otros_bienes

    @property
    def masa_hereditaria(self) -> int:
        return self.total_activos - self.pasivos


@dataclass(frozen=True)
class FieldMapResult:
    """Everything derived from one declaration."""

    fields: dict[str, str]
    checkboxes: dict[str, bool]
    totals: CategoryTotals
    # Section key -> (position, entry) pairs beyond the section's capacity
    overflow: dict[str, tuple[OverflowEntry, ...]] = field(default_factory=dict)

    @property
    def requires_extra_pages(self) -> bool:
        return any(self.overflow.values())


def apply_mappings(
    mappings: Sequence[fs.FieldMapping],
    source: Any,
    **placeholders: Any,
) -> dict[str, str]:
    """Read each mapped attribute from `source` and format it for its field."""
    fields: dict[str, str] = {}
    for mapping in mappings:
        value = FORMATTERS[mapping.formatter](getattr(source, mapping.key, None))
        fields[mapping.field.format(**placeholders)] = value or mapping.default
    return fields


def _rut_fields(rut_fields: fs.RutFields, raw: Any) -> dict[str, str]:
    body, check = split_rut(raw)
    return {rut_fields.body: body, rut_fields.check: check}


def _date_fields(date_fields: fs.DateFields, raw: Any) -> dict[str, str]:
    day, month, year = split_date_parts(raw)
    return {date_fields.day: day, date_fields.month: month, date_fields.year: year}


def _id_type_checkboxes(checkboxes: fs.IdTypeCheckboxes, nacionalidad: Any) -> dict[str, bool]:
    code = text(nacionalidad).strip() or "1"
    return {checkboxes.run: code == "1", checkboxes.rut: code == "2"}


def map_causante(case: SolicitudPosesionEfectiva) -> dict[str, str]:
    """Decedent identity, death registry record, last domicile, regime and instrument."""
    causante = case.causante
    fields = _rut_fields(fs.CAUSANTE_RUT, causante.rut)
    fields.update(apply_mappings(fs.CAUSANTE_FIELDS, causante))
    if causante.fecha_nacimiento:
        fields.update(_date_fields(fs.CAUSANTE_NACIMIENTO, causante.fecha_nacimiento))
    if causante.fecha_defuncion:
        fields.update(_date_fields(fs.CAUSANTE_DEFUNCION, causante.fecha_defuncion))
    fields.update(apply_mappings(fs.PARTIDA_FIELDS, case.partida))
    fields.update(apply_mappings(fs.DOMICILIO_CAUSANTE_FIELDS, case.domicilio_causante))
    fields.update(apply_mappings(fs.REGIMEN_FIELDS, case))
    fields.update(apply_mappings(fs.INSTRUMENTO_FIELDS, case.representante))
    return fields


def _map_contacto(
    person: Contacto,
    rut_fields: fs.RutFields,
    mappings: Sequence[fs.FieldMapping],
    id_type: fs.IdTypeCheckboxes,
) -> tuple[dict[str, str], dict[str, bool]]:
    fields = _rut_fields(rut_fields, person.rut)
    fields.update(apply_mappings(mappings, person))
    return fields, _id_type_checkboxes(id_type, person.nacionalidad)


def map_solicitante(case: SolicitudPosesionEfectiva) -> tuple[dict[str, str], dict[str, bool]]:
    return _map_contacto(case.solicitante, fs.SOLICITANTE_RUT, fs.SOLICITANTE_FIELDS, fs.SOLICITANTE_ID_TYPE)


def map_representante(case: SolicitudPosesionEfectiva) -> tuple[dict[str, str], dict[str, bool]]:
    """The whole representative block is omitted when no RUT was given."""
    if not case.representante.rut:
        return {}, {}
    return _map_contacto(
        case.representante, fs.REPRESENTANTE_RUT, fs.REPRESENTANTE_FIELDS, fs.REPRESENTANTE_ID_TYPE
    )


def is_cedente(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return text(value).strip().upper() in fs.CEDENTE_TRUTHY


def map_herederos(herederos: Sequence[Heredero | None]) -> tuple[dict[str, str], dict[str, bool]]:
    """
    Heirs fill 20 rows: suffixes 0..7 then 8.0..8.11.

    Heirs past the last row are not printed.
    """
    fields: dict[str, str] = {}
    checkboxes: dict[str, bool] = {}
    for heredero, idx in zip(herederos, fs.HEREDERO_SUFFIXES):
        if heredero is None:
            continue
        fields[fs.HEREDERO_RUT.format(idx=idx)] = format_rut(heredero.rut)
        fields[fs.HEREDERO_NOMBRE.format(idx=idx)] = heredero.nombre_completo
        fields[fs.HEREDERO_CALIDAD.format(idx=idx)] = expand_calidad(heredero.calidad)
        fields[fs.HEREDERO_DOMICILIO.format(idx=idx)] = join_present(
            heredero.domicilio, heredero.comuna, heredero.region
        )
        fields.update(apply_mappings(fs.HEREDERO_FIELDS, heredero, idx=idx))
        checkboxes[fs.HEREDERO_CEDENTE.format(idx=idx)] = is_cedente(heredero.cedente)
    return fields, checkboxes


def map_inventario_general(case: SolicitudPosesionEfectiva) -> dict[str, str]:
    return {
        fs.OBSERVACIONES: text(case.observaciones),
        fs.NUMERO_HOJAS_INVENTARIO: text(case.inventario_hojas) or "1",
        fs.BENEFICIO_INVENTARIO: text(case.beneficio_inventario),
        fs.PRESUNCION_20: "1" if case.usa_presuncion else "2",
    }


def resolve_declaracion(value: Any) -> DeclaracionImpuesto:
    """Unknown or missing statuses fall back to 'exentas'."""
    status = text(value).strip().lower()
    try:
        return DeclaracionImpuesto(status)
    except ValueError:
        return DeclaracionImpuesto.EXENTAS


def map_declaracion_impuesto(value: Any) -> dict[str, bool]:
    selected = resolve_declaracion(value)
    return {name: status is selected for status, name in fs.DECLARACION_IMPUESTO_CHECKBOXES.items()}


def map_category(
    layout: fs.CategoryLayout,
    entries: Sequence[EntradaInventario | None],
) -> CategoryResult:
    """
    Fill the section's slots in list order and sum every entry.

    Null entries keep their slot empty. Sections with shared fields take
    those from the first entry only; every slotted entry still gets its own
    value field.
    """
    fields: dict[str, str] = {}
    total = 0
    for position, entry in enumerate(entries[: layout.capacity]):
        if entry is None:
            continue
        slot = layout.slots[position]
        number = position + 1
        amount = to_amount(entry.valoracion)
        total += amount
        if position == 0:
            fields.update(apply_mappings(layout.shared_fields, entry))
        fields.update(apply_mappings(layout.entry_fields, entry, slot=slot, number=number))
        fields[layout.value_field.format(slot=slot, number=number)] = format_money(amount)

    overflow = tuple(
        (position, entry)
        for position, entry in enumerate(entries)
        if position >= layout.capacity and entry is not None
    )
    total += sum(to_amount(entry.valoracion) for _, entry in overflow)

    fields[layout.total_field] = format_money(total)
    return CategoryResult(layout.key, fields, total, overflow)


def map_menaje(case: SolicitudPosesionEfectiva) -> CategoryResult:
    """
    Household goods, itemized or presumed.

    Under the presumption the itemized list is ignored and a single row
    carries 20% of the first real-estate valuation (0 when there is none).
    """
    if not case.usa_presuncion:
        return map_category(fs.MENAJE, case.menaje)

    primer_bien = case.bienes_raices[0] if case.bienes_raices else None
    total = presuncion_menaje(primer_bien.valoracion if primer_bien else None)
    presumido = Menaje(descripcion=fs.MENAJE_PRESUNCION_LABEL, ps="P", valoracion=total)

    slot = fs.MENAJE.slots[0]
    fields = apply_mappings(fs.MENAJE.entry_fields, presumido, slot=slot, number=1)
    fields[fs.MENAJE.value_field.format(slot=slot, number=1)] = format_money(total)
    fields[fs.MENAJE.total_field] = format_money(total)
    return CategoryResult(fs.MENAJE.key, fields, total)


def map_inventario(case: SolicitudPosesionEfectiva) -> list[CategoryResult]:
    """All inventory sections, in form order."""
    results = []
    for layout in fs.CATEGORIES:
        if layout is fs.MENAJE:
            results.append(map_menaje(case))
        else:
            results.append(map_category(layout, getattr(case, layout.key)))
    return results


def build_field_map(case: SolicitudPosesionEfectiva) -> FieldMapResult:
    """
    Build the complete field and checkbox maps for a declaration.

    Args:
        case: The submitted declaration

    Returns:
        FieldMapResult with string-only field values, checkbox states,
        per-section totals and the entries that overflow the printed slots
    """
    fields: dict[str, str] = {}
    checkboxes: dict[str, bool] = {}

    fields.update(map_causante(case))

    for section in (map_solicitante(case), map_representante(case), map_herederos(case.herederos)):
        section_fields, section_checkboxes = section
        fields.update(section_fields)
        checkboxes.update(section_checkboxes)

    fields.update(map_inventario_general(case))
    checkboxes.update(map_declaracion_impuesto(case.declaracion_impuesto))

    results = map_inventario(case)
    for result in results:
        fields.update(result.fields)
    totals = CategoryTotals(**{result.key: result.total for result in results})

    fields[fs.TOTAL_ACTIVOS] = format_money(totals.total_activos)
    fields[fs.TOTAL_MASA_HEREDITARIA] = format_money(totals.masa_hereditaria)
    fields[fs.CAUSANTE_NOMBRE_COMPLETO] = case.causante.nombre_completo
    fields[fs.VALOR_UTM] = text(case.valor_utm)

    overflow = {result.key: result.overflow for result in results if result.overflow}
    return FieldMapResult(fields, checkboxes, totals, overflow)
