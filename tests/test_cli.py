"""Tests for the command-line interface and configuration."""

import json
from pathlib import Path
from typing import Any

import pytest

from posesion_efectiva.__main__ import main
from posesion_efectiva.config import Config
from posesion_efectiva.schemas.base import OverflowStrategy
from posesion_efectiva.utils.pdf_utils import pdf_page_count


@pytest.fixture
def data_path(tmp_path: Path, case_data: dict[str, Any]) -> Path:
    path = tmp_path / "caso.json"
    path.write_text(json.dumps({**case_data, "inventario_hojas": "2"}), encoding="utf-8")
    return path


class TestGenerar:
    def test_writes_pdf(self, tmp_path: Path, data_path: Path, template_path: Path, capsys) -> None:
        output = tmp_path / "salida" / "pe.pdf"
        code = main(["generar", "--data", str(data_path), "--output", str(output), "--template", str(template_path)])
        assert code == 0
        assert pdf_page_count(output) == 4
        assert "85.500.000" in capsys.readouterr().out

    def test_annex_strategy(self, tmp_path: Path, data_path: Path, template_path: Path) -> None:
        output = tmp_path / "pe.pdf"
        code = main(
            [
                "generar", "--data", str(data_path), "--output", str(output),
                "--template", str(template_path), "--estrategia", "synthesize_annex",
            ]
        )
        assert code == 0
        assert pdf_page_count(output) == 3

    def test_missing_data_file(self, tmp_path: Path, template_path: Path, capsys) -> None:
        code = main(["generar", "--data", str(tmp_path / "no.json"), "--template", str(template_path)])
        assert code == 1
        assert "No se pudo leer" in capsys.readouterr().err


class TestCampos:
    def test_lists_fields_and_missing(self, template_path: Path, capsys) -> None:
        assert main(["campos", "--template", str(template_path)]) == 0
        out = capsys.readouterr().out
        assert "RUT HEREDERO.8.0" in out
        assert "campos del esquema no existen en la plantilla" in out
        assert "  - TOTAL AUTOS" in out

    def test_invalid_template(self, tmp_path: Path, capsys) -> None:
        path = tmp_path / "roto.pdf"
        path.write_bytes(b"no pdf")
        assert main(["campos", "--template", str(path)]) == 1


class TestConfig:
    def test_default_strategy(self) -> None:
        assert Config.overflow_strategy() in set(OverflowStrategy)

    def test_unknown_strategy_is_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(Config, "OVERFLOW_STRATEGY", "imprimir_todo")
        with pytest.raises(ValueError):
            Config.validate()

    def test_unknown_log_format_is_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(Config, "LOG_FORMAT", "xml")
        with pytest.raises(ValueError):
            Config.validate()
