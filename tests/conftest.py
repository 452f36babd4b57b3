"""Shared fixtures: a small fillable template and sample declarations."""

from io import BytesIO
from pathlib import Path
from typing import Any

import fitz  # pymupdf
import pytest
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from posesion_efectiva.schemas.case import SolicitudPosesionEfectiva

# (page index, name, x, y) - inventory fields live on page index 2
TEXT_FIELDS = [
    (0, "RUT CAUSANTE", 50, 760),
    (0, "VERIFICADOR RUT", 220, 760),
    (0, "NOMBRE COMPLETO DEL CAUSANTE", 50, 720),
    (0, "PRIMER APELLIDO CAUSANTE", 50, 680),
    (0, "DIA NACIMIENTO CAUSANTE", 50, 640),
    (0, "MES NACIMIENTO CAUSANTE", 120, 640),
    (1, "RUT HEREDERO.0", 50, 760),
    (1, "NOMBRE Y APELLIDOS HEREDERO.0", 220, 760),
    (1, "CALIDAD DE HEREDERO.0", 50, 720),
    (1, "RUT HEREDERO.8.0", 50, 680),
    (1, "RUT HEREDERO.8.11", 50, 640),
    (2, "ROL SII.0", 50, 760),
    (2, "VALOR ACTIVO 1.0", 220, 760),
    (2, "VALOR ACTIVO 1.1", 220, 730),
    (2, "VALOR ACTIVO 1.2", 220, 700),
    (2, "VALOR ACTIVO 1.3", 220, 670),
    (2, "TOTAL BIENES RAICES", 220, 640),
    (2, "DESCRIPCION DEL BIEN MENAJE.0", 50, 600),
    (2, "VALOR MENAJE.0", 220, 600),
    (2, "TOTAL MENAJE", 220, 570),
    (2, "TOTAL FINAL ACTIVOS", 220, 540),
    (2, "TOTAL MASA HEREDITARIA", 220, 510),
    (2, "NUMERO DE HOJAS DE INVENTARIO", 400, 760),
]
MULTILINE_FIELDS = [(2, "OBSERVACIONES", 50, 380)]
CHECKBOXES = [
    (0, "RUN", 400, 760),
    (0, "RUT", 440, 760),
    (1, "CEDENTE SI/NO.0", 400, 760),
    (2, "Check Box104", 400, 700),
    (2, "Check Box105", 440, 700),
    (2, "Check Box106", 480, 700),
]
PAGE_TITLES = ["CAUSANTE Y SOLICITANTE", "HEREDEROS", "INVENTARIO DE BIENES"]


def build_template() -> bytes:
    buffer = BytesIO()
    canv = canvas.Canvas(buffer, pagesize=A4)
    for page_index, title in enumerate(PAGE_TITLES):
        canv.setFont("Helvetica-Bold", 14)
        canv.drawString(50, 800, title)
        form = canv.acroForm
        for index, name, x, y in TEXT_FIELDS:
            if index == page_index:
                form.textfield(name=name, x=x, y=y, width=160, height=20, borderWidth=0, fontSize=9)
        for index, name, x, y in MULTILINE_FIELDS:
            if index == page_index:
                form.textfield(
                    name=name, x=x, y=y, width=400, height=100, borderWidth=0, fontSize=9,
                    fieldFlags="multiline", maxlen=10000,
                )
        for index, name, x, y in CHECKBOXES:
            if index == page_index:
                form.checkbox(name=name, x=x, y=y, size=14, checked=False, buttonStyle="cross")
        canv.showPage()
    canv.save()
    return buffer.getvalue()


@pytest.fixture(scope="session")
def template_bytes() -> bytes:
    return build_template()


@pytest.fixture
def template_path(tmp_path: Path, template_bytes: bytes) -> Path:
    path = tmp_path / "plantilla.pdf"
    path.write_bytes(template_bytes)
    return path


def bien_raiz(valoracion: Any, rol: str = "123-45", **extra: Any) -> dict[str, Any]:
    return {"rol_sii": rol, "comuna": "Ñuñoa", "valoracion": valoracion, **extra}


@pytest.fixture
def case_data() -> dict[str, Any]:
    return {
        "causante": {
            "rut": "12.345.678-5",
            "nombres": "Juan Andrés",
            "primer_apellido": "Pérez",
            "segundo_apellido": "Soto",
            "fecha_nacimiento": "1940-03-07",
            "fecha_defuncion": "2023-11-20",
        },
        "solicitante": {"rut": "9.876.543-K", "nombres": "María", "primer_apellido": "Pérez", "nacionalidad": "1"},
        "herederos": [
            {"rut": "9.876.543-k", "nombres": "María", "primer_apellido": "Pérez", "calidad": "H", "cedente": "SI"},
        ],
        "bienes_raices": [bien_raiz("50000000"), bien_raiz(30000000, rol="200-1")],
        "vehiculos": [{"ppu": "ABCD12", "marca": "Toyota", "valoracion": "4500000"}],
        "menaje": [{"descripcion": "Muebles", "valoracion": "1000000"}],
        "pasivos": [{"descripcion": "Crédito", "acreedor": "Banco", "valoracion": "2000000"}],
        "declaracion_impuesto": "afectas_algunas",
        "observaciones": "Sin observaciones adicionales.",
    }


@pytest.fixture
def case(case_data: dict[str, Any]) -> SolicitudPosesionEfectiva:
    return SolicitudPosesionEfectiva.model_validate(case_data)


def checkbox_marks(pdf: bytes, widgets: dict, names) -> dict[str, str]:
    """Text drawn inside each named widget's rectangle of a flattened PDF."""
    doc = fitz.open(stream=pdf, filetype="pdf")
    marks = {}
    for name in names:
        widget = widgets[name][0]
        page = doc[widget.page_index]
        x0, y0, x1, y1 = widget.rect
        height = page.rect.height
        # PDF space is bottom-up, pymupdf is top-down
        clip = fitz.Rect(x0 - 3, height - y1 - 3, x1 + 3, height - y0 + 3)
        marks[name] = page.get_text("text", clip=clip).strip()
    doc.close()
    return marks
