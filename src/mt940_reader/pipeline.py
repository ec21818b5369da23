from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from .config import ReaderSettings
from .errors import Mt940Error


def main() -> int:
    parser = argparse.ArgumentParser(description="MT940 statement decoder")
    parser.add_argument("file", help="Ruta al fichero MT940")
    parser.add_argument("--out", default="", help="Ruta de salida JSON (opcional)")
    parser.add_argument("--config", default="", help="Configuración YAML (opcional)")
    parser.add_argument("--encoding", default=None, help="Codificación del fichero")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log de depuración")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[RichHandler()])

    try:
        settings = ReaderSettings.from_yaml(args.config) if args.config else ReaderSettings()
    except ValidationError as e:
        raise SystemExit(f"Error: {e}")
    if args.encoding:
        settings = settings.model_copy(update={"encoding": args.encoding})

    path = Path(args.file)
    if not path.exists():
        raise SystemExit(f"No existe el archivo: {path}")

    console = Console(stderr=True)
    console.print(f"Procesando: {path}", style="bold")

    # newline="" conserva los CRLF del formato
    try:
        with path.open(encoding=settings.encoding, newline="") as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise SystemExit(f"Error: {e}")

    try:
        statements = settings.build_reader().decode(text)
    except Mt940Error as e:
        raise SystemExit(f"Error: {e}")

    payload = [s.model_dump(mode="json") for s in statements]

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(json.dumps(payload, ensure_ascii=False, indent=settings.indent), encoding="utf-8")
        console.print(f"OK -> {out_path}", style="bold green")
    else:
        print(json.dumps(payload, ensure_ascii=False, indent=settings.indent))

    total = sum(len(s["transactions"]) for s in payload)
    console.print(f"Statements: {len(payload)}  Transacciones: {total}", style="bold cyan")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
