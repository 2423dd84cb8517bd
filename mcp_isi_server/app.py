from typing import Annotated

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from mcp_isi_server.config import StyleDefaults, get_settings
from mcp_isi_server.isi.models import IsiLine, IsiValidationError, validate_style
from mcp_isi_server.isi.renderer import compile_isi, parse_isi_text
from mcp_isi_server.log import logger

mcp = FastMCP("isi")


@mcp.resource("isi://defaults")
async def get_style_defaults() -> StyleDefaults:
    settings = get_settings()
    return settings.style_defaults


@mcp.tool(
    description="Generate an email-safe HTML table (ISI block) from plain text. Lines starting with ** render bold, lines starting with - render as bullets, blank lines are dropped. Returns the HTML string unescaped, ready to paste into an email template."
)
async def generate_isi_html(
    isi_text: Annotated[str, Field(description="The ISI text, one table row per non-empty line.")],
    padding: Annotated[
        float | str | None, Field(default=None, description="Padding between lines in px (default: 10).")
    ] = None,
    font_size: Annotated[float | str | None, Field(default=None, description="Font size in px (default: 16).")] = None,
    font_color: Annotated[
        str | None, Field(default=None, description="Font color as hex, e.g. #000000 (default: #000000).")
    ] = None,
    table_color: Annotated[
        str | None, Field(default=None, description="Table background color as hex (default: #FFFFFE).")
    ] = None,
    line_height: Annotated[
        float | str | None, Field(default=None, description="Line height in px (default: 16).")
    ] = None,
    gutter_width: Annotated[
        float | str | None, Field(default=None, description="Width of the left and right gutters in px (default: 30).")
    ] = None,
    has_bullets: Annotated[
        bool,
        Field(default=False, description="Render bullet glyphs in bullet_color instead of the font color."),
    ] = False,
    bullet_color: Annotated[
        str | None, Field(default=None, description="Bullet glyph color as hex, used when has_bullets is true.")
    ] = None,
) -> str:
    try:
        style = validate_style({
            "isi_text": isi_text,
            "padding": padding,
            "font_size": font_size,
            "font_color": font_color,
            "table_color": table_color,
            "line_height": line_height,
            "gutter_width": gutter_width,
            "has_bullets": has_bullets,
            "bullet_color": bullet_color,
        })
    except IsiValidationError as e:
        logger.warning(f"Rejected ISI input: {e}")
        raise

    settings = get_settings()
    return compile_isi(style.with_defaults(settings.style_defaults))


@mcp.tool(
    description="Show how each non-empty line of the ISI text will be rendered (bold, bullet or plain) with its marker stripped, in order."
)
async def preview_isi_lines(
    isi_text: Annotated[str, Field(description="The ISI text to classify.")],
) -> list[IsiLine]:
    return parse_isi_text(isi_text)
