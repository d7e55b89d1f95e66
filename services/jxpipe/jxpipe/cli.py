"""Command-line interface for the JSON to XML pipe."""

from __future__ import annotations

import sys
from contextlib import closing
from pathlib import Path
from typing import Optional

import typer

from .fetcher import FetchError
from .responder import render_document
from .runtime import build_runtime
from .transcoder import encode_value
from .values import parse_json

app = typer.Typer(add_completion=False, help="Serve remote JSON resources as XML")


@app.command("convert")
def convert_command(
    url: str = typer.Argument(..., help="Absolute URL of the JSON resource"),
) -> None:
    runtime = build_runtime()
    with closing(runtime):
        try:
            value = runtime.fetcher.fetch(url)
        except FetchError as exc:
            typer.echo(exc.message, err=True)
            raise typer.Exit(code=1) from exc
        typer.echo(render_document(encode_value(value)))


@app.command("encode")
def encode_command(
    path: Optional[str] = typer.Argument(None, help="JSON file to encode; stdin when omitted or '-'"),
    fragment: bool = typer.Option(False, "--fragment", help="Print the fragment without prolog and root"),
) -> None:
    if path is None or path == "-":
        text = sys.stdin.read()
    else:
        text = _read_file(path)

    try:
        value = parse_json(text)
    except ValueError as exc:
        typer.echo(f"Invalid JSON: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    xml_fragment = encode_value(value)
    typer.echo(xml_fragment if fragment else render_document(xml_fragment))


@app.command("service")
def service_command(
    host: str = typer.Option("0.0.0.0", "--host", help="Service bind host"),
    port: int = typer.Option(8000, "--port", help="Service port"),
) -> None:
    import uvicorn

    uvicorn.run(
        "jxpipe.app:create_app",
        host=host,
        port=port,
        factory=True,
        log_level="info",
    )


def _read_file(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise typer.BadParameter(f"Cannot read {path}: {exc.strerror}") from exc


def main():
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
