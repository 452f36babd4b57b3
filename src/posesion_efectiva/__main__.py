#!/usr/bin/env python3
"""
Command-line entry point.

    python -m posesion_efectiva generar --data caso.json --output salida.pdf
    python -m posesion_efectiva campos --template plantilla.pdf
    python -m posesion_efectiva servir --port 3000
"""

import argparse
import sys
from pathlib import Path

from .config import config
from .logging_config import configure_logging
from .main import generate_pdf_from_file
from .mappers.form_schema import TEMPLATE_VERSION, expected_checkboxes, expected_text_fields
from .schemas.base import OverflowStrategy
from .utils.pdf_utils import is_valid_pdf, list_form_fields


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="posesion-efectiva",
        description="Genera el formulario de Posesión Efectiva desde JSON.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generar = subparsers.add_parser("generar", help="Generate the filled PDF from a JSON file.")
    generar.add_argument("--data", type=Path, required=True, help="Path to the JSON input (or a saved draft).")
    generar.add_argument("--output", type=Path, default=None, help="Destination PDF path (defaults to PE_<apellido>_<fecha>.pdf).")
    generar.add_argument("--template", type=Path, default=config.TEMPLATE_PATH, help="Path to the fillable PDF template.")
    generar.add_argument(
        "--estrategia",
        choices=[strategy.value for strategy in OverflowStrategy],
        default=config.OVERFLOW_STRATEGY,
        help="How entries beyond the printed slots are represented.",
    )

    campos = subparsers.add_parser("campos", help="List the template's form fields.")
    campos.add_argument("--template", type=Path, default=config.TEMPLATE_PATH, help="Path to the fillable PDF template.")

    servir = subparsers.add_parser("servir", help="Run the HTTP server.")
    servir.add_argument("--host", default=config.HOST)
    servir.add_argument("--port", type=int, default=config.PORT)

    return parser.parse_args(argv)


def run_generar(args: argparse.Namespace) -> int:
    result = generate_pdf_from_file(args.data, template=args.template, strategy=OverflowStrategy(args.estrategia))
    if not result.success:
        print(f"❌ {result.error}", file=sys.stderr)
        if result.details and result.details != result.error:
            print(f"   {result.details}", file=sys.stderr)
        return 1

    output_path = args.output or Path(result.filename)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(result.pdf)
    print(f"✅ PDF generado en {output_path}")
    print(f"   Total activos: {result.total_activos:,}".replace(",", "."))
    print(f"   Masa hereditaria: {result.masa_hereditaria:,}".replace(",", "."))
    return 0


def run_campos(args: argparse.Namespace) -> int:
    try:
        data = args.template.read_bytes()
    except OSError as e:
        print(f"❌ No se pudo leer {args.template}: {e}", file=sys.stderr)
        return 1
    if not is_valid_pdf(data):
        print(f"❌ {args.template} no es un PDF válido", file=sys.stderr)
        return 1

    fields = list_form_fields(data)
    for name in fields:
        print(name)

    missing = sorted((expected_text_fields() | expected_checkboxes()) - set(fields))
    print(f"\n{len(fields)} campos en la plantilla; esquema {TEMPLATE_VERSION}")
    if missing:
        print(f"{len(missing)} campos del esquema no existen en la plantilla:")
        for name in missing:
            print(f"  - {name}")
    return 0


def run_servir(args: argparse.Namespace) -> int:
    import uvicorn

    from .api import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port, log_config=None)
    return 0


COMMANDS = {
    "generar": run_generar,
    "campos": run_campos,
    "servir": run_servir,
}


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    config.validate()
    configure_logging()
    return COMMANDS[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
