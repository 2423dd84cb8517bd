import sys
from typing import Annotated

import typer

from mcp_isi_server.app import mcp
from mcp_isi_server.config import get_settings
from mcp_isi_server.isi.models import IsiValidationError, validate_style
from mcp_isi_server.isi.renderer import compile_isi

app = typer.Typer()


@app.command()
def stdio():
    mcp.run(transport="stdio")


@app.command()
def sse(
    host: str = "localhost",
    port: int = 9557,
):
    mcp.settings.host = host
    mcp.settings.port = port
    mcp.run(transport="sse")


@app.command()
def generate(
    source: Annotated[str, typer.Argument(help="File with the ISI text, or - for stdin.")] = "-",
    padding: Annotated[str | None, typer.Option(help="Padding between lines in px.")] = None,
    font_size: Annotated[str | None, typer.Option(help="Font size in px.")] = None,
    font_color: Annotated[str | None, typer.Option(help="Font color as hex.")] = None,
    table_color: Annotated[str | None, typer.Option(help="Table background color as hex.")] = None,
    line_height: Annotated[str | None, typer.Option(help="Line height in px.")] = None,
    gutter_width: Annotated[str | None, typer.Option(help="Gutter width in px.")] = None,
    bullets: Annotated[bool, typer.Option("--bullets/--no-bullets", help="Color bullets with --bullet-color.")] = False,
    bullet_color: Annotated[str | None, typer.Option(help="Bullet glyph color as hex.")] = None,
):
    """Print the ISI HTML table for the given text."""
    if source == "-":
        text = sys.stdin.read()
    else:
        try:
            with open(source, encoding="utf-8", newline="") as f:
                text = f.read()
        except OSError as e:
            typer.echo(f"Cannot read {source}: {e.strerror or e}", err=True)
            raise typer.Exit(1) from e

    try:
        style = validate_style({
            "isi_text": text,
            "padding": padding,
            "font_size": font_size,
            "font_color": font_color,
            "table_color": table_color,
            "line_height": line_height,
            "gutter_width": gutter_width,
            "has_bullets": bullets,
            "bullet_color": bullet_color,
        })
    except IsiValidationError as e:
        for field, message in e.errors.items():
            typer.echo(f"{field}: {message}", err=True)
        raise typer.Exit(1) from e

    typer.echo(compile_isi(style.with_defaults(get_settings().style_defaults)))


if __name__ == "__main__":
    app(["stdio"])
