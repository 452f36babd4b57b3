"""Tests for FastAPI endpoints."""

from pathlib import Path
from typing import Any

import pytest
from starlette.testclient import TestClient

from posesion_efectiva import api
from posesion_efectiva.api import create_app
from posesion_efectiva.pdf.base import TemplateError
from posesion_efectiva.schemas.base import OverflowStrategy
from posesion_efectiva.utils.pdf_utils import is_valid_pdf, pdf_page_count


class RecordingLogger:
    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def _record(self, event: str, **kwargs: Any) -> None:
        self.events.append((event, kwargs))

    debug = info = warning = error = _record


@pytest.fixture
def drafts_dir(tmp_path: Path) -> Path:
    return tmp_path / "borradores"


@pytest.fixture
def test_client(template_path: Path, drafts_dir: Path, tmp_path: Path) -> TestClient:
    app = create_app(
        template_path=template_path,
        drafts_dir=drafts_dir,
        static_dir=tmp_path / "sin_public",
        strategy=OverflowStrategy.REPLICATE_TEMPLATE,
    )
    return TestClient(app)


class TestHealthEndpoint:
    def test_health_check_returns_ok(self, test_client: TestClient) -> None:
        response = test_client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestGenerarPdf:
    def test_returns_pdf_attachment(self, test_client: TestClient, case_data: dict[str, Any]) -> None:
        response = test_client.post("/api/generar-pdf", json=case_data)
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        disposition = response.headers["content-disposition"]
        assert disposition.startswith('attachment; filename="PE_Perez_')
        assert "filename*=UTF-8''PE_P%C3%A9rez_" in disposition
        assert is_valid_pdf(response.content)

    def test_declared_sheets_are_replicated(self, test_client: TestClient) -> None:
        response = test_client.post("/api/generar-pdf", json={"inventario_hojas": "2"})
        assert response.status_code == 200
        assert pdf_page_count(response.content) == 4

    def test_null_sections_are_accepted(self, test_client: TestClient) -> None:
        response = test_client.post("/api/generar-pdf", json={"causante": None, "bienes_raices": [None]})
        assert response.status_code == 200

    def test_malformed_body(self, test_client: TestClient) -> None:
        response = test_client.post("/api/generar-pdf", json={"causante": "texto"})
        assert response.status_code == 422

    def test_missing_template(self, drafts_dir: Path, tmp_path: Path, case_data: dict[str, Any]) -> None:
        app = create_app(template_path=tmp_path / "no_existe.pdf", drafts_dir=drafts_dir, static_dir=tmp_path / "x")
        response = TestClient(app).post("/api/generar-pdf", json=case_data)
        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Error al generar el PDF"
        assert "plantilla" in body["details"]

    def test_failure_is_logged_with_traceback(
        self, monkeypatch: pytest.MonkeyPatch, drafts_dir: Path, tmp_path: Path, case_data: dict[str, Any]
    ) -> None:
        recorded = RecordingLogger()
        monkeypatch.setattr(api, "logger", recorded)
        app = create_app(template_path=tmp_path / "no_existe.pdf", drafts_dir=drafts_dir, static_dir=tmp_path / "x")
        TestClient(app).post("/api/generar-pdf", json=case_data)

        failures = [kwargs for event, kwargs in recorded.events if event == "pdf_generation_failed"]
        assert len(failures) == 1
        assert isinstance(failures[0]["exc_info"], TemplateError)
        assert failures[0]["operation"] == failures[0]["exc_info"].operation


class TestCalcularPresuncion:
    def test_twenty_percent(self, test_client: TestClient) -> None:
        response = test_client.post("/api/calcular-presuncion", json={"valor_primer_br": "50000000"})
        assert response.status_code == 200
        assert response.json() == {"presuncion": 10_000_000, "valor_primer_br": 50_000_000}

    def test_missing_value(self, test_client: TestClient) -> None:
        response = test_client.post("/api/calcular-presuncion", json={})
        assert response.json() == {"presuncion": 0, "valor_primer_br": 0}


class TestBorradores:
    def test_full_cycle(self, test_client: TestClient, case_data: dict[str, Any]) -> None:
        saved = test_client.post("/api/guardar-borrador", json={"data": case_data, "nombre": "Caso Pérez"})
        assert saved.status_code == 200
        filename = saved.json()["filename"]
        assert saved.json()["success"] is True
        assert filename.startswith("Caso_Perez_")

        listing = test_client.get("/api/borradores").json()
        assert [draft["filename"] for draft in listing] == [filename]
        assert listing[0]["causante"] == "Juan Andrés Pérez Soto"

        loaded = test_client.get(f"/api/cargar-borrador/{filename}")
        assert loaded.status_code == 200
        assert loaded.json() == case_data

        deleted = test_client.delete(f"/api/borrador/{filename}")
        assert deleted.json() == {"success": True}

        missing = test_client.get(f"/api/cargar-borrador/{filename}")
        assert missing.status_code == 404
        assert missing.json() == {"error": "Borrador no encontrado"}

    def test_raw_form_state(self, test_client: TestClient, case_data: dict[str, Any]) -> None:
        response = test_client.post("/api/guardar-borrador", json=case_data)
        assert response.json()["filename"].startswith("borrador_Perez_Juan_Andres_")

    def test_numeric_rut_listing(self, test_client: TestClient, case_data: dict[str, Any]) -> None:
        test_client.post("/api/guardar-borrador", json={"data": {"causante": {"rut": 12345678}}, "nombre": "numerico"})
        test_client.post("/api/guardar-borrador", json={"data": case_data, "nombre": "normal"})
        response = test_client.get("/api/borradores")
        assert response.status_code == 200
        listing = response.json()
        assert len(listing) == 2
        assert sorted(draft["rut_causante"] for draft in listing) == ["12.345.678-5", "12345678"]

    def test_empty_listing(self, test_client: TestClient) -> None:
        assert test_client.get("/api/borradores").json() == []

    def test_delete_missing(self, test_client: TestClient) -> None:
        response = test_client.delete("/api/borrador/no_existe.json")
        assert response.status_code == 404


def test_static_front_end_is_served(template_path: Path, tmp_path: Path) -> None:
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<h1>Posesión Efectiva</h1>", encoding="utf-8")
    app = create_app(template_path=template_path, drafts_dir=tmp_path / "b", static_dir=public)
    client = TestClient(app)

    response = client.get("/")
    assert response.status_code == 200
    assert "Posesi" in response.text
    assert client.get("/health").json() == {"status": "ok"}
