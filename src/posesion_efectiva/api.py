"""FastAPI application factory and routes.

Serves the front-end, generates the filled form and manages drafts.
"""

import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any
from urllib.parse import quote

from fastapi import Body, FastAPI, Request
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from .config import config
from .drafts import DraftNotFoundError, DraftStorageError, DraftStore, strip_diacritics
from .logging_config import bind_context, clear_context, configure_logging, get_logger
from .main import pdf_filename
from .pdf.assembler import fill_document, read_template
from .pdf.base import FormFillingError
from .schemas.base import OverflowStrategy, Scalar
from .schemas.case import SolicitudPosesionEfectiva
from .utils.formatting import presuncion_menaje, to_amount

logger = get_logger(__name__)


class PresuncionRequest(BaseModel):
    valor_primer_br: Scalar = None


class PresuncionResponse(BaseModel):
    presuncion: int
    valor_primer_br: int


class DraftSaved(BaseModel):
    success: bool = True
    filename: str


class DraftSummary(BaseModel):
    filename: str
    created: str
    modified: str
    causante: str
    rut_causante: str
    size: int


def attachment_headers(filename: str) -> dict[str, str]:
    """Content-Disposition with an ASCII fallback; headers must be latin-1."""
    fallback = strip_diacritics(filename).encode("ascii", "ignore").decode("ascii")
    return {"Content-Disposition": f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Configure logging and report where the template and drafts live."""
    configure_logging()
    logger.info(
        "server_starting",
        template=str(app.state.template_path),
        drafts=str(app.state.drafts.directory),
        strategy=app.state.strategy.value,
    )
    yield
    logger.info("server_stopped")


async def log_request_middleware(request: Request, call_next):
    """Middleware to add request context to logs."""
    bind_context(request_id=str(uuid.uuid4())[:8], path=request.url.path, method=request.method)
    try:
        response = await call_next(request)
        logger.debug("request_completed", status_code=response.status_code)
        return response
    finally:
        clear_context()


async def form_filling_error_handler(request: Request, exc: FormFillingError) -> JSONResponse:
    logger.error("pdf_generation_failed", operation=exc.operation, details=exc.details, exc_info=exc)
    details = exc.message if exc.details == exc.message else f"{exc.message}: {exc.details}"
    return JSONResponse(status_code=500, content={"error": "Error al generar el PDF", "details": details})


async def draft_not_found_handler(request: Request, exc: DraftNotFoundError) -> JSONResponse:
    logger.info("draft_not_found", filename=exc.filename)
    return JSONResponse(status_code=404, content={"error": exc.message})


async def draft_storage_error_handler(request: Request, exc: DraftStorageError) -> JSONResponse:
    logger.error("draft_storage_failed", error=exc.message, details=exc.details)
    return JSONResponse(status_code=500, content={"error": exc.message, "details": exc.details})


def create_app(
    template_path: Path | None = None,
    drafts_dir: Path | None = None,
    static_dir: Path | None = None,
    strategy: OverflowStrategy | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Every argument defaults to the environment configuration.

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title="Posesión Efectiva",
        description="Llenado del formulario de Posesión Efectiva desde JSON",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.template_path = Path(template_path or config.TEMPLATE_PATH)
    app.state.drafts = DraftStore(drafts_dir or config.DRAFTS_DIR)
    app.state.strategy = strategy or config.overflow_strategy()

    app.middleware("http")(log_request_middleware)
    app.add_exception_handler(FormFillingError, form_filling_error_handler)
    app.add_exception_handler(DraftNotFoundError, draft_not_found_handler)
    app.add_exception_handler(DraftStorageError, draft_storage_error_handler)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/generar-pdf")
    def generar_pdf(case: SolicitudPosesionEfectiva) -> Response:
        logger.info("pdf_requested", causante=case.causante.primer_apellido or "sin nombre")
        pdf = fill_document(read_template(app.state.template_path), case, app.state.strategy)
        return Response(content=pdf, media_type="application/pdf", headers=attachment_headers(pdf_filename(case)))

    @app.post("/api/calcular-presuncion", response_model=PresuncionResponse)
    def calcular_presuncion(request: PresuncionRequest) -> PresuncionResponse:
        valor = to_amount(request.valor_primer_br)
        return PresuncionResponse(presuncion=presuncion_menaje(valor), valor_primer_br=valor)

    @app.post("/api/guardar-borrador", response_model=DraftSaved)
    def guardar_borrador(payload: dict[str, Any] = Body(...)) -> DraftSaved:
        # Either {"data": {...}, "nombre": "..."} or the bare form state
        if payload.get("data"):
            data, nombre = payload["data"], payload.get("nombre")
        else:
            data, nombre = payload, None
        filename = app.state.drafts.save(data, nombre if isinstance(nombre, str) else None)
        return DraftSaved(filename=filename)

    @app.get("/api/borradores", response_model=list[DraftSummary])
    def listar_borradores() -> list[dict[str, Any]]:
        return app.state.drafts.list_drafts()

    @app.get("/api/cargar-borrador/{filename}")
    def cargar_borrador(filename: str) -> Any:
        return app.state.drafts.load(filename)

    @app.delete("/api/borrador/{filename}")
    def eliminar_borrador(filename: str) -> dict[str, bool]:
        app.state.drafts.delete(filename)
        return {"success": True}

    static = Path(static_dir or config.STATIC_DIR)
    if static.is_dir():
        app.mount("/", StaticFiles(directory=static, html=True), name="static")

    return app
