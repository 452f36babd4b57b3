"""
Synthesized inventory annex.

Entries that do not fit the printed slots of a section are listed on free
landscape pages: one bold header per overflowing section followed by one
line per entry, paginated by the remaining vertical space.
"""

from __future__ import annotations

from io import BytesIO
from typing import Callable, Sequence

from reportlab.lib.pagesizes import A4, landscape
from reportlab.pdfgen import canvas

from ..mappers import form_schema as fs
from ..mappers.case_to_fields import FieldMapResult, OverflowEntry
from ..schemas.case import SolicitudPosesionEfectiva
from ..schemas.inventario import EntradaInventario
from ..utils.formatting import format_date, format_money, format_rut, join_present, text

PAGE_SIZE = landscape(A4)
MARGIN_LEFT = 40.0
INDENT = 55.0
MARGIN_TOP = 50.0
MARGIN_BOTTOM = 50.0
LINE_HEIGHT = 14.0
TITLE_SIZE = 13
HEADER_SIZE = 11
LINE_SIZE = 9
MAX_LINE_CHARS = 150
SEPARATOR = " | "


def _money(value) -> str:
    return f"${format_money(value) or 0}"


def _labeled(label: str, value) -> str:
    value = text(value).strip()
    return f"{label} {value}" if value else ""


def _bien_raiz_line(entry) -> str:
    return SEPARATOR.join(
        part
        for part in (
            _labeled("Rol", entry.rol_sii),
            text(entry.tipo),
            text(entry.comuna),
            _labeled("Adquirido", format_date(entry.fecha_adquisicion)),
            join_present(
                _labeled("Fs.", entry.fojas),
                _labeled("N°", entry.numero_cbr),
                _labeled("Año", entry.ano_cbr),
                _labeled("CBR", entry.conservador),
                separator=" ",
            ),
            text(entry.ps) or "P",
            f"Valor {_money(entry.valoracion)}",
            f"Exención {_money(entry.exencion)}",
        )
        if part
    )


def _vehiculo_line(entry) -> str:
    return SEPARATOR.join(
        part
        for part in (
            _labeled("PPU", entry.ppu),
            join_present(entry.marca, entry.modelo, entry.ano, separator=" "),
            text(entry.tipo),
            _labeled("Código SII", entry.codigo_sii),
            _labeled("Chasis", entry.n_identificacion),
            text(entry.ps) or "P",
            f"Valor {_money(entry.valoracion)}",
        )
        if part
    )


def _descripcion_line(entry) -> str:
    return SEPARATOR.join(
        part
        for part in (text(entry.descripcion), text(entry.ps) or "P", f"Valor {_money(entry.valoracion)}")
        if part
    )


def _pasivo_line(entry) -> str:
    return SEPARATOR.join(
        part
        for part in (
            text(entry.descripcion),
            _labeled("Acreedor", entry.acreedor),
            _labeled("Documento", entry.n_documento),
            f"Monto {_money(entry.valoracion)}",
        )
        if part
    )


LINE_FORMATTERS: dict[str, Callable[[EntradaInventario], str]] = {
    fs.BIENES_RAICES.key: _bien_raiz_line,
    fs.VEHICULOS.key: _vehiculo_line,
    fs.MENAJE.key: _descripcion_line,
    fs.OTROS_MUEBLES.key: _descripcion_line,
    fs.OTROS_BIENES.key: _descripcion_line,
    fs.PASIVOS.key: _pasivo_line,
}


def format_overflow_line(key: str, position: int, entry: EntradaInventario) -> str:
    """Numbered, truncated annex line for one entry (position is 0-based)."""
    line = f"{position + 1}. {LINE_FORMATTERS[key](entry)}"
    return line[:MAX_LINE_CHARS]


class AnnexCanvas:
    """Vertical cursor over a sequence of landscape pages."""

    def __init__(self, title: str):
        self.buffer = BytesIO()
        self.canv = canvas.Canvas(self.buffer, pagesize=PAGE_SIZE)
        self.width, self.height = PAGE_SIZE
        self.title = title
        self.page_count = 0
        self._start_page()

    def _start_page(self) -> None:
        self.page_count += 1
        self.y = self.height - MARGIN_TOP
        self.canv.setFont("Helvetica-Bold", TITLE_SIZE)
        self.canv.drawString(MARGIN_LEFT, self.y, self.title)
        self.canv.setFont("Helvetica", LINE_SIZE)
        self.canv.drawRightString(self.width - MARGIN_LEFT, self.y, f"Hoja {self.page_count}")
        self.y -= 2 * LINE_HEIGHT

    def ensure_space(self, lines: int) -> None:
        if self.y - (lines - 1) * LINE_HEIGHT < MARGIN_BOTTOM:
            self.canv.showPage()
            self._start_page()

    def header(self, label: str) -> None:
        self.ensure_space(2)
        self.canv.setFont("Helvetica-Bold", HEADER_SIZE)
        self.canv.drawString(MARGIN_LEFT, self.y, label)
        self.y -= LINE_HEIGHT

    def line(self, value: str) -> None:
        self.ensure_space(1)
        self.canv.setFont("Helvetica", LINE_SIZE)
        self.canv.drawString(INDENT, self.y, value)
        self.y -= LINE_HEIGHT

    def finish(self) -> bytes:
        self.canv.showPage()
        self.canv.save()
        return self.buffer.getvalue()


def annex_title(case: SolicitudPosesionEfectiva) -> str:
    causante = case.causante
    return join_present(
        "ANEXO DE INVENTARIO",
        causante.nombre_completo,
        _labeled("RUT", format_rut(causante.rut)),
        separator=" - ",
    )


def build_annex(result: FieldMapResult, case: SolicitudPosesionEfectiva) -> bytes | None:
    """
    Render the overflow of every section into annex pages.

    Args:
        result: Field map carrying the overflowing entries per section
        case: The declaration, for the page title

    Returns:
        PDF bytes, or None when no section overflows
    """
    if not result.requires_extra_pages:
        return None

    annex = AnnexCanvas(annex_title(case))
    for layout in fs.CATEGORIES:
        entries: Sequence[OverflowEntry] = result.overflow.get(layout.key, ())
        if not entries:
            continue
        annex.header(f"{layout.label} (continuación)")
        for position, entry in entries:
            annex.line(format_overflow_line(layout.key, position, entry))
        annex.y -= LINE_HEIGHT / 2
    return annex.finish()
