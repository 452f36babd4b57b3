"""Tests for the JSON draft store."""

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from posesion_efectiva.drafts import (
    DraftNotFoundError,
    DraftStore,
    draft_filename,
    sanitize_label,
)

NOW = datetime(2024, 5, 1, 10, 15, 0, tzinfo=timezone.utc)


@pytest.fixture
def store(tmp_path: Path) -> DraftStore:
    return DraftStore(tmp_path / "borradores")


class TestFilenames:
    def test_label_is_sanitized(self) -> None:
        assert sanitize_label("  Herencia Pérez / 2024  ") == "Herencia_Perez_2024"

    def test_label_is_truncated(self) -> None:
        assert len(sanitize_label("a" * 80)) == 50

    def test_label_wins(self) -> None:
        assert draft_filename({}, "Mi borrador", now=NOW) == "Mi_borrador_2024-05-01T10-15-00.json"

    def test_synthesized_from_causante(self) -> None:
        data = {"causante": {"primer_apellido": "Núñez", "nombres": "José Luis"}}
        assert draft_filename(data, now=NOW) == "borrador_Nunez_Jose_Luis_2024-05-01T10-15-00.json"

    def test_blank_label_falls_back(self) -> None:
        assert draft_filename({}, "   ", now=NOW) == "borrador_sin_nombre_2024-05-01T10-15-00.json"

    def test_label_without_usable_characters_falls_back(self) -> None:
        assert draft_filename({}, "///", now=NOW) == "borrador_sin_nombre_2024-05-01T10-15-00.json"


class TestDraftStore:
    def test_save_and_load(self, store: DraftStore, case_data: dict[str, Any]) -> None:
        filename = store.save(case_data, "Caso Pérez")
        assert filename.startswith("Caso_Perez_")
        assert store.load(filename) == case_data

    def test_directory_is_created(self, store: DraftStore) -> None:
        store.save({})
        assert store.directory.is_dir()

    def test_list_summaries_newest_first(self, store: DraftStore, case_data: dict[str, Any]) -> None:
        older = store.save({"causante": {"nombres": "Ana"}}, "antiguo")
        newer = store.save(case_data, "nuevo")
        os.utime(store.directory / older, (1_600_000_000, 1_600_000_000))
        os.utime(store.directory / newer, (1_700_000_000, 1_700_000_000))

        summaries = store.list_drafts()
        assert [summary["filename"] for summary in summaries] == [newer, older]
        assert summaries[0]["causante"] == "Juan Andrés Pérez Soto"
        assert summaries[0]["rut_causante"] == "12.345.678-5"
        assert summaries[1]["causante"] == "Ana"
        assert summaries[1]["rut_causante"] == ""
        assert summaries[0]["size"] > 0
        assert set(summaries[0]) == {"filename", "created", "modified", "causante", "rut_causante", "size"}

    def test_numeric_rut_is_listed_as_text(self, store: DraftStore) -> None:
        store.save({"causante": {"rut": 12345678, "nombres": "Ana"}})
        summary = store.list_drafts()[0]
        assert summary["rut_causante"] == "12345678"
        assert summary["causante"] == "Ana"

    def test_unnamed_causante(self, store: DraftStore) -> None:
        store.save({"observaciones": "x"})
        assert store.list_drafts()[0]["causante"] == "Sin nombre"

    def test_unparseable_files_are_skipped(self, store: DraftStore) -> None:
        store.save({})
        (store.directory / "roto.json").write_text("{no es json", encoding="utf-8")
        (store.directory / "notas.txt").write_text("ignorado", encoding="utf-8")
        assert len(store.list_drafts()) == 1

    def test_list_without_directory(self, store: DraftStore) -> None:
        assert store.list_drafts() == []

    def test_load_missing(self, store: DraftStore) -> None:
        with pytest.raises(DraftNotFoundError):
            store.load("no_existe.json")

    def test_only_basename_is_used(self, store: DraftStore, tmp_path: Path) -> None:
        (tmp_path / "secreto.json").write_text(json.dumps({"x": 1}), encoding="utf-8")
        store.save({})
        with pytest.raises(DraftNotFoundError):
            store.load("../secreto.json")

    def test_delete(self, store: DraftStore) -> None:
        filename = store.save({})
        store.delete(filename)
        assert store.list_drafts() == []
        with pytest.raises(DraftNotFoundError):
            store.delete(filename)
