"""
drafts.py - JSON draft store
============================
Drafts are plain JSON documents holding the form state exactly as the
front-end submitted it, one file per save, stored flat in one directory:

    borradores/
        Herencia_Perez_2024-05-01T10-15-00.json    (user-supplied label)
        borrador_Perez_Juan_2024-05-01T10-20-31.json
        borrador_sin_nombre_2024-05-01T10-21-02.json

Every filename ends in a sortable UTC timestamp. Two saves with the same
label in the same second overwrite each other; that is accepted for a
single-office tool.
"""

from __future__ import annotations

import json
import re
import unicodedata
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .logging_config import get_logger

logger = get_logger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%S"
MAX_LABEL_LENGTH = 50
DRAFT_SUFFIX = ".json"


class DraftNotFoundError(Exception):
    """The requested draft does not exist."""

    def __init__(self, filename: str):
        self.filename = filename
        self.message = "Borrador no encontrado"
        super().__init__(f"{self.message}: {filename}")


class DraftStorageError(Exception):
    """A draft could not be written, read or removed."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details or message
        super().__init__(self.message)


def strip_diacritics(value: str) -> str:
    decomposed = unicodedata.normalize("NFD", value)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def sanitize_label(label: str) -> str:
    """'Herencia Pérez / 2024' -> 'Herencia_Perez_2024'."""
    clean = re.sub(r"[^a-zA-Z0-9\s\-_]", "", strip_diacritics(label.strip()))
    return re.sub(r"\s+", "_", clean[:MAX_LABEL_LENGTH].strip())


def _name_part(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return re.sub(r"[^a-zA-Z0-9]", "_", strip_diacritics(value.strip()))


def _causante(data: Any) -> dict[str, Any]:
    causante = data.get("causante") if isinstance(data, dict) else None
    return causante if isinstance(causante, dict) else {}


def draft_filename(data: Any, nombre: str | None = None, now: datetime | None = None) -> str:
    """
    Choose the filename for a new draft.

    A non-blank label wins; otherwise the decedent's first surname and
    given names are used, or 'sin_nombre' when both are missing.
    """
    timestamp = (now or datetime.now(timezone.utc)).strftime(TIMESTAMP_FORMAT)
    safe_label = sanitize_label(nombre) if nombre and nombre.strip() else ""
    if safe_label:
        return f"{safe_label}_{timestamp}{DRAFT_SUFFIX}"

    causante = _causante(data)
    apellido = _name_part(causante.get("primer_apellido"))
    nombres = _name_part(causante.get("nombres"))
    base = f"{apellido}_{nombres}" if apellido or nombres else "sin_nombre"
    return f"borrador_{base}_{timestamp}{DRAFT_SUFFIX}"


def _iso(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()


class DraftStore:
    """Save, list, load and delete drafts under one directory."""

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)

    def _ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, filename: str) -> Path:
        # Only the basename is honoured so a name can never leave the directory
        return self.directory / Path(filename).name

    def save(self, data: Any, nombre: str | None = None) -> str:
        """
        Write a draft and return its filename.

        Raises:
            DraftStorageError: If the file cannot be written
        """
        filename = draft_filename(data, nombre)
        try:
            self._ensure_directory()
            self._path(filename).write_text(
                json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8"
            )
        except (OSError, TypeError, ValueError) as e:
            raise DraftStorageError("Error al guardar borrador", details=str(e)) from e
        logger.info("draft_saved", filename=filename)
        return filename

    def list_drafts(self) -> list[dict[str, Any]]:
        """
        Summaries of every readable draft, newest-modified first.

        Files that are not valid JSON are skipped.
        """
        if not self.directory.exists():
            return []

        summaries = []
        try:
            paths = sorted(self.directory.glob(f"*{DRAFT_SUFFIX}"))
        except OSError as e:
            raise DraftStorageError("Error al listar borradores", details=str(e)) from e

        for path in paths:
            try:
                stat = path.stat()
                content = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
                logger.debug("draft_skipped", filename=path.name, error=str(e))
                continue
            causante = _causante(content)
            nombre = " ".join(
                str(causante.get(key) or "") for key in ("nombres", "primer_apellido", "segundo_apellido")
            ).strip()
            summaries.append(
                {
                    "filename": path.name,
                    "created": _iso(getattr(stat, "st_birthtime", stat.st_ctime)),
                    "modified": _iso(stat.st_mtime),
                    "causante": nombre or "Sin nombre",
                    "rut_causante": str(causante.get("rut") or ""),
                    "size": stat.st_size,
                    "_mtime": stat.st_mtime,
                }
            )

        summaries.sort(key=lambda summary: summary["_mtime"], reverse=True)
        for summary in summaries:
            del summary["_mtime"]
        return summaries

    def load(self, filename: str) -> Any:
        """
        Read a draft.

        Raises:
            DraftNotFoundError: If no such draft exists
            DraftStorageError: If it cannot be read or parsed
        """
        path = self._path(filename)
        if not path.is_file():
            raise DraftNotFoundError(filename)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DraftStorageError("Error al cargar borrador", details=str(e)) from e
        logger.info("draft_loaded", filename=path.name)
        return data

    def delete(self, filename: str) -> None:
        """
        Remove a draft.

        Raises:
            DraftNotFoundError: If no such draft exists
            DraftStorageError: If it cannot be removed
        """
        path = self._path(filename)
        if not path.is_file():
            raise DraftNotFoundError(filename)
        try:
            path.unlink()
        except OSError as e:
            raise DraftStorageError("Error al eliminar borrador", details=str(e)) from e
        logger.info("draft_deleted", filename=path.name)
