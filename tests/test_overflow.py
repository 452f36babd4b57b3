"""Tests for the overflow strategies and the annex layout."""

from typing import Any

import pytest

from posesion_efectiva.mappers.case_to_fields import build_field_map
from posesion_efectiva.pdf.annex import MAX_LINE_CHARS, build_annex, format_overflow_line
from posesion_efectiva.pdf.assembler import fill_document
from posesion_efectiva.pdf.overflow import extra_sheet_count
from posesion_efectiva.schemas.base import OverflowStrategy
from posesion_efectiva.schemas.case import SolicitudPosesionEfectiva
from posesion_efectiva.schemas.inventario import BienRaiz, OtroBien, Pasivo
from posesion_efectiva.utils.pdf_utils import extract_text_from_pdf, pdf_page_count

from .conftest import bien_raiz


def case_with(**data: Any) -> SolicitudPosesionEfectiva:
    return SolicitudPosesionEfectiva.model_validate(data)


def six_real_estate() -> SolicitudPosesionEfectiva:
    return case_with(bienes_raices=[bien_raiz(v * 100, rol=f"R{i}") for i, v in enumerate([1, 2, 3, 4, 5, 6])])


class TestExtraSheetCount:
    @pytest.mark.parametrize(
        ("declared", "copies"),
        [(None, 0), ("1", 0), ("3", 2), (4, 3), ("0", 0), ("abc", 0), ("-2", 0)],
    )
    def test_copies(self, declared, copies) -> None:
        assert extra_sheet_count(declared) == copies


class TestReplicateTemplate:
    def test_declared_sheets_append_inventory_pages(self, template_bytes: bytes) -> None:
        pdf = fill_document(template_bytes, case_with(inventario_hojas="3"), OverflowStrategy.REPLICATE_TEMPLATE)
        assert pdf_page_count(pdf) == 5
        assert extract_text_from_pdf(pdf).count("INVENTARIO DE BIENES") == 3

    def test_independent_of_list_length(self, template_bytes: bytes) -> None:
        pdf = fill_document(template_bytes, six_real_estate(), OverflowStrategy.REPLICATE_TEMPLATE)
        assert pdf_page_count(pdf) == 3

    def test_replicated_pages_are_blank(self, template_bytes: bytes) -> None:
        case = case_with(inventario_hojas="2", bienes_raices=[bien_raiz(100, rol="ROL-UNICO")])
        pdf = fill_document(template_bytes, case, OverflowStrategy.REPLICATE_TEMPLATE)
        assert pdf_page_count(pdf) == 4
        assert extract_text_from_pdf(pdf).count("ROL-UNICO") == 1


class TestSynthesizeAnnex:
    def test_overflow_entries_are_listed(self, template_bytes: bytes) -> None:
        pdf = fill_document(template_bytes, six_real_estate(), OverflowStrategy.SYNTHESIZE_ANNEX)
        assert pdf_page_count(pdf) == 4
        text = extract_text_from_pdf(pdf)
        assert "5. Rol R4" in text
        assert "6. Rol R5" in text
        assert "Valor $600" in text
        assert "1. Rol R0" not in text

    def test_no_overflow_no_annex(self, template_bytes: bytes) -> None:
        pdf = fill_document(template_bytes, case_with(inventario_hojas="4"), OverflowStrategy.SYNTHESIZE_ANNEX)
        assert pdf_page_count(pdf) == 3

    def test_build_annex_returns_none_without_overflow(self) -> None:
        case = case_with(vehiculos=[{"valoracion": 1}])
        assert build_annex(build_field_map(case), case) is None

    def test_pagination_by_vertical_space(self) -> None:
        case = case_with(otros_bienes=[{"descripcion": f"Bien {i}", "valoracion": i} for i in range(64)])
        annex = build_annex(build_field_map(case), case)
        assert pdf_page_count(annex) == 2
        text = extract_text_from_pdf(annex)
        assert "Hoja 2" in text
        assert "5. Bien 4" in text
        assert "64. Bien 63" in text

    def test_sections_in_form_order(self) -> None:
        case = case_with(
            pasivos=[{"descripcion": f"Deuda {i}", "valoracion": 1} for i in range(5)],
            bienes_raices=[bien_raiz(1, rol=f"R{i}") for i in range(5)],
        )
        text = extract_text_from_pdf(build_annex(build_field_map(case), case))
        assert text.index("PASIVOS") > text.index("Rol R4")


class TestOverflowLine:
    def test_real_estate_line_carries_exemption(self) -> None:
        line = format_overflow_line("bienes_raices", 4, BienRaiz(rol_sii="55-1", valoracion="1000000", exencion="250000"))
        assert line.startswith("5. Rol 55-1")
        assert "Valor $1.000.000" in line
        assert "Exención $250.000" in line

    def test_liability_line(self) -> None:
        line = format_overflow_line("pasivos", 4, Pasivo(descripcion="Crédito", acreedor="Banco", valoracion=5))
        assert line == "5. Crédito | Acreedor Banco | Monto $5"

    def test_unparseable_value_is_kept(self) -> None:
        line = format_overflow_line("otros_bienes", 4, OtroBien(descripcion="Cuadro", valoracion="a tasar"))
        assert line == "5. Cuadro | P | Valor $a tasar"

    def test_missing_value_prints_zero(self) -> None:
        assert format_overflow_line("otros_bienes", 0, OtroBien(descripcion="Cuadro")) == "1. Cuadro | P | Valor $0"

    def test_line_is_truncated(self) -> None:
        line = format_overflow_line("otros_bienes", 10, OtroBien(descripcion="x" * 500, valoracion=1))
        assert len(line) == MAX_LINE_CHARS
        assert line.startswith("11. xxx")
