"""
AcroForm document backed by PyPDF2, flattened with a reportlab overlay.

Values are collected per fully qualified field name and drawn onto a
transparent overlay at each widget's rectangle when the form is flattened;
the overlay is merged onto the template page and the widget annotations are
dropped, leaving static, non-editable content.
"""

from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
from typing import Any, Sequence

from PyPDF2 import PageObject, PdfReader, PdfWriter
from PyPDF2.generic import ArrayObject, NameObject
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from ..logging_config import get_logger
from .base import DocumentAssemblyError, FormFieldWriter, TemplateError

logger = get_logger(__name__)

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
MAX_FONT_SIZE = 10.0
MIN_FONT_SIZE = 5.0
PADDING = 2.0
CHECK_LABEL = "X"

# Field flag bits (PDF 32000-1, 12.7.4.3)
FF_MULTILINE = 1 << 12
FF_COMB = 1 << 24

TEXT_TYPES = ("/Tx", "/Ch")


@dataclass(frozen=True)
class Widget:
    """One visible widget of a form field."""

    name: str
    field_type: str
    page_index: int
    rect: tuple[float, float, float, float]
    flags: int = 0
    max_len: int = 0
    alignment: int = 0
    on_state: str = "/Yes"
    initial_value: str = ""


def _resolve(obj: Any) -> Any:
    return obj.get_object() if hasattr(obj, "get_object") else obj


def _inherited(annot: Any, key: str) -> Any:
    """Look a field attribute up on the widget, then along its parent chain."""
    node = annot
    while node is not None:
        node = _resolve(node)
        if key in node:
            return _resolve(node[key])
        node = node.get("/Parent")
    return None


def _qualified_name(annot: Any) -> str:
    """Build the fully qualified field name by walking the parent chain."""
    parts = []
    node = annot
    while node is not None:
        node = _resolve(node)
        partial = node.get("/T")
        if partial:
            parts.insert(0, str(partial))
        node = node.get("/Parent")
    return ".".join(parts)


def _on_state(annot: Any) -> str:
    appearances = _resolve(annot.get("/AP")) or {}
    normal = _resolve(appearances.get("/N")) if appearances else None
    if normal and hasattr(normal, "keys"):
        for state in normal.keys():
            if state != "/Off":
                return str(state)
    return "/Yes"


def _is_widget(annot: Any) -> bool:
    return annot.get("/Subtype") == "/Widget"


def _annotations(page: PageObject) -> list[Any]:
    annots = page.get("/Annots")
    if annots is None:
        return []
    return list(_resolve(annots))


def _index_widgets(pages: Sequence[PageObject]) -> dict[str, list[Widget]]:
    widgets: dict[str, list[Widget]] = {}
    for page_index, page in enumerate(pages):
        for ref in _annotations(page):
            annot = _resolve(ref)
            if not _is_widget(annot):
                continue
            name = _qualified_name(annot)
            if not name or "/Rect" not in annot:
                continue
            x0, y0, x1, y1 = (float(v) for v in _resolve(annot["/Rect"]))
            field_type = str(_inherited(annot, "/FT") or "")
            value = _inherited(annot, "/V")
            widgets.setdefault(name, []).append(
                Widget(
                    name=name,
                    field_type=field_type,
                    page_index=page_index,
                    rect=(min(x0, x1), min(y0, y1), max(x0, x1), max(y0, y1)),
                    flags=int(_inherited(annot, "/Ff") or 0),
                    max_len=int(_inherited(annot, "/MaxLen") or 0),
                    alignment=int(_inherited(annot, "/Q") or 0),
                    on_state=_on_state(annot) if field_type == "/Btn" else "/Yes",
                    initial_value="" if value is None else str(value),
                )
            )
    return widgets


def strip_widgets(page: PageObject) -> PageObject:
    """Remove widget annotations from a page, keeping any other annotation."""
    if "/Annots" not in page:
        return page
    kept = [ref for ref in _annotations(page) if not _is_widget(_resolve(ref))]
    if kept:
        page[NameObject("/Annots")] = ArrayObject(kept)
    else:
        del page["/Annots"]
    return page


def load_reader(data: bytes) -> PdfReader:
    """
    Parse PDF bytes, tolerating encryption with an empty user password.

    Raises:
        TemplateError: If the bytes are not a readable PDF
    """
    try:
        reader = PdfReader(BytesIO(data), strict=False)
        if reader.is_encrypted:
            reader.decrypt("")
        if len(reader.pages) == 0:
            raise ValueError("document has no pages")
    except TemplateError:
        raise
    except Exception as e:
        raise TemplateError("No se pudo leer la plantilla PDF", details=str(e)) from e
    return reader


def _fit_font_size(value: str, width: float, height: float, font: str = FONT) -> float:
    size = max(MIN_FONT_SIZE, min(MAX_FONT_SIZE, height * 0.7))
    while size > MIN_FONT_SIZE and pdfmetrics.stringWidth(value, font, size) > width - 2 * PADDING:
        size -= 0.5
    return size


def _draw_text(canv: canvas.Canvas, widget: Widget, value: str) -> None:
    x0, y0, x1, y1 = widget.rect
    width, height = x1 - x0, y1 - y0

    if widget.flags & FF_COMB and widget.max_len:
        cell = width / widget.max_len
        size = max(MIN_FONT_SIZE, min(MAX_FONT_SIZE, height * 0.7, cell))
        canv.setFont(FONT, size)
        baseline = y0 + (height - size) / 2 + size * 0.22
        for position, char in enumerate(value[: widget.max_len]):
            canv.drawCentredString(x0 + cell * (position + 0.5), baseline, char)
        return

    if widget.flags & FF_MULTILINE:
        size = min(MAX_FONT_SIZE, 9.0)
        canv.setFont(FONT, size)
        lines = simpleSplit(value, FONT, size, width - 2 * PADDING)
        y = y1 - PADDING - size
        for line in lines:
            if y < y0:
                break
            canv.drawString(x0 + PADDING, y, line)
            y -= size * 1.15
        return

    size = _fit_font_size(value, width, height)
    canv.setFont(FONT, size)
    baseline = y0 + (height - size) / 2 + size * 0.22
    if widget.alignment == 1:
        canv.drawCentredString(x0 + width / 2, baseline, value)
    elif widget.alignment == 2:
        canv.drawRightString(x1 - PADDING, baseline, value)
    else:
        canv.drawString(x0 + PADDING, baseline, value)


def _draw_check(canv: canvas.Canvas, widget: Widget) -> None:
    x0, y0, x1, y1 = widget.rect
    size = max(MIN_FONT_SIZE, min(x1 - x0, y1 - y0) * 0.8)
    canv.setFont(FONT_BOLD, size)
    canv.drawCentredString((x0 + x1) / 2, y0 + (y1 - y0 - size) / 2 + size * 0.2, CHECK_LABEL)


class AcroFormDocument(FormFieldWriter):
    """
    A fillable template loaded in memory.

    Usage:
        document = AcroFormDocument.from_bytes(template_bytes)
        document.try_set_text("RUT CAUSANTE", "12345678")
        document.try_set_checkbox("RUN", True)
        document.flatten()
        pdf_bytes = document.serialize()
    """

    def __init__(self, reader: PdfReader):
        self.pages: list[PageObject] = list(reader.pages)
        self.widgets = _index_widgets(self.pages)
        self._text_values: dict[str, str] = {}
        self._checkbox_values: dict[str, bool] = {}
        self._flattened = False

    @classmethod
    def from_bytes(cls, data: bytes) -> "AcroFormDocument":
        return cls(load_reader(data))

    @property
    def field_names(self) -> list[str]:
        return sorted(self.widgets)

    def _field_type(self, name: str) -> str | None:
        widgets = self.widgets.get(name)
        return widgets[0].field_type if widgets else None

    def try_set_text(self, name: str, value: str) -> bool:
        if self._flattened or self._field_type(name) not in TEXT_TYPES:
            return False
        self._text_values[name] = value
        return True

    def try_set_checkbox(self, name: str, checked: bool) -> bool:
        if self._flattened or self._field_type(name) != "/Btn":
            return False
        self._checkbox_values[name] = checked
        return True

    def _build_overlay(self, page_index: int, page: PageObject) -> PageObject | None:
        buffer = BytesIO()
        canv = canvas.Canvas(buffer, pagesize=(float(page.mediabox.right), float(page.mediabox.top)))
        drawn = False
        for name, widgets in self.widgets.items():
            for widget in widgets:
                if widget.page_index != page_index:
                    continue
                if widget.field_type == "/Btn":
                    checked = self._checkbox_values.get(name, widget.initial_value == widget.on_state)
                    if checked:
                        _draw_check(canv, widget)
                        drawn = True
                    continue
                value = self._text_values.get(name, widget.initial_value)
                if value:
                    _draw_text(canv, widget, value)
                    drawn = True
        if not drawn:
            return None
        canv.showPage()
        canv.save()
        buffer.seek(0)
        return PdfReader(buffer).pages[0]

    def flatten(self) -> None:
        """
        Draw every value onto its page and remove the widgets.

        Raises:
            DocumentAssemblyError: If an overlay cannot be built or merged
        """
        if self._flattened:
            return
        try:
            for page_index, page in enumerate(self.pages):
                overlay = self._build_overlay(page_index, page)
                if overlay is not None:
                    page.merge_page(overlay)
                strip_widgets(page)
        except Exception as e:
            raise DocumentAssemblyError(
                "Error al aplanar el formulario", operation="aplanar formulario", details=str(e)
            ) from e
        self._flattened = True
        logger.debug("form_flattened", pages=len(self.pages), fields=len(self._text_values))

    def append_page(self, source: PdfReader, page_index: int) -> None:
        """
        Append a copy of one page of another document, without its widgets.

        Raises:
            DocumentAssemblyError: If the page does not exist
        """
        try:
            page = source.pages[page_index]
        except IndexError as e:
            raise DocumentAssemblyError(
                f"La plantilla no tiene la página {page_index + 1}",
                operation="copiar página",
                details=str(e),
            ) from e
        self.pages.append(strip_widgets(page))

    def serialize(self) -> bytes:
        """
        Write the document to bytes.

        Raises:
            DocumentAssemblyError: If PyPDF2 fails to write the document
        """
        writer = PdfWriter()
        try:
            for page in self.pages:
                writer.add_page(page)
            buffer = BytesIO()
            writer.write(buffer)
        except Exception as e:
            raise DocumentAssemblyError(
                "Error al serializar el PDF", operation="serializar PDF", details=str(e)
            ) from e
        return buffer.getvalue()


def merge_documents(documents: Sequence[bytes]) -> bytes:
    """
    Concatenate every page of each document, in order.

    Raises:
        DocumentAssemblyError: If a document cannot be read or the result written
    """
    writer = PdfWriter()
    try:
        for data in documents:
            for page in PdfReader(BytesIO(data), strict=False).pages:
                writer.add_page(page)
        buffer = BytesIO()
        writer.write(buffer)
    except Exception as e:
        raise DocumentAssemblyError(
            "Error al combinar documentos", operation="combinar documentos", details=str(e)
        ) from e
    return buffer.getvalue()
