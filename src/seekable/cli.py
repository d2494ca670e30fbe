"""CLI implementation for seekable."""

import base64
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from .core.assembler import respond
from .core.model import SeekableConfig, SeekableError, SeekableResponse
from .io import BufferContent, open_content
from .wsgi import run

app = typer.Typer(add_completion=False, help="Serve byte ranges of files and URLs.")


def open_source(source: str):
    """Open a path, URL, or '-' (stdin) as content."""
    if source == "-":
        return BufferContent(sys.stdin.buffer.read())
    if source.startswith(("http://", "https://")):
        return open_content(source)
    return open_content(str(Path(source).resolve()))


def response_asdict(res: SeekableResponse, *, include_body: bool = False) -> dict:
    """Return a JSON-serialisable dict describing a response."""
    payload = {
        "success": True,
        "status": res.status,
        "headers": dict(res.headers),
        "body_length": len(res.body),
    }
    if include_body:
        payload["body"] = base64.b64encode(res.body).decode("ascii")
    return payload


@app.command()
def inspect(
    source: str = typer.Argument(..., help="File, URL, or '-' for stdin"),
    range_header: Optional[str] = typer.Option(None, "--range", "-r", help="Range header value, e.g. 'bytes=0-99'"),
    content_type: Optional[str] = typer.Option(None, "--type", help="Content-Type to report"),
    head: bool = typer.Option(False, "--head", help="Answer as for a HEAD request"),
    body: bool = typer.Option(False, "--body", help="Include the body (Base64)"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write to PATH instead of stdout"),
):
    """Show the response a Range request would get for SOURCE."""
    content = None
    try:
        content = open_source(source)
        res = respond(content, range_header, SeekableConfig(type=content_type), head=head)
        obj = response_asdict(res, include_body=body)
    except (SeekableError, OSError) as e:
        obj = {"success": False, "error": str(e)}
    finally:
        close = getattr(content, "close", None)
        if close is not None:
            close()

    # open output sink
    sink = open(output, "w", encoding="utf-8") if output else sys.stdout
    try:
        json.dump(obj, sink, indent=2)
        sink.write("\n")
    finally:
        if output:
            sink.close()

    if not obj["success"]:
        raise typer.Exit(code=1)


@app.command()
def serve(
    source: str = typer.Argument(..., help="File or URL to serve"),
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind"),
    port: int = typer.Option(8000, "--port", min=0, max=65535, help="Port to listen on"),
    content_type: Optional[str] = typer.Option(None, "--type", help="Content-Type to send"),
    error_status: int = typer.Option(500, "--error-status", help="Status for requests that cannot be served"),
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level"),
):
    """Serve SOURCE over HTTP with Range support."""
    logging.basicConfig(level=log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        content = open_source(source)
    except OSError as e:
        typer.echo(f"Cannot open {source}: {e}", err=True)
        raise typer.Exit(code=1)
    run(content, host, port, config=SeekableConfig(type=content_type), error_status=error_status)


if __name__ == "__main__":
    app()
