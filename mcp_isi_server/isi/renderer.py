"""ISI text to email-safe HTML table rendering."""

import re
from collections.abc import Sequence

from mcp_isi_server.isi.models import IsiLine, LineKind, StyleConfig
from mcp_isi_server.log import logger

DEFAULT_PADDING = 10
DEFAULT_FONT_SIZE = 16
DEFAULT_FONT_COLOR = "#000000"
DEFAULT_TABLE_COLOR = "#FFFFFE"
DEFAULT_LINE_HEIGHT = 16
DEFAULT_GUTTER_WIDTH = 30
DEFAULT_BULLET_COLOR = "#000000"

# Outer table width in px
TABLE_WIDTH = 600
BULLET_CELL_WIDTH = 12

FONT_FAMILY = "Arial, Helvetica, sans-serif"

LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def _px(value: float | None, default: int) -> str:
    # Zero counts as unset, same as an empty form field
    number = value if value else default
    if isinstance(number, float) and number.is_integer():
        number = int(number)
    return f"{number}px"


def _color(value: str | None, default: str) -> str:
    return value if value else default


def _bullet_color(style: StyleConfig) -> str:
    if style.has_bullets:
        return _color(style.bullet_color, DEFAULT_BULLET_COLOR)
    return _color(style.font_color, DEFAULT_FONT_COLOR)


def _inline_style(style: StyleConfig, is_bold: bool, color: str | None = None) -> str:
    return (
        f"font-family: {FONT_FAMILY}; "
        f"font-size: {_px(style.font_size, DEFAULT_FONT_SIZE)}; "
        f"line-height: {_px(style.line_height, DEFAULT_LINE_HEIGHT)}; "
        f"color: {color or _color(style.font_color, DEFAULT_FONT_COLOR)}; "
        f"padding-bottom: {_px(style.padding, DEFAULT_PADDING)}; "
        f"font-weight: {'bold' if is_bold else 'normal'};"
    )


def split_lines(text: str) -> list[str]:
    """Split ISI text on any line ending and drop zero-length lines.

    ``\\r\\n``, ``\\r`` and ``\\n`` are all recognized, also when mixed in one input.
    Lines holding only whitespace are kept.
    """
    return [line for line in LINE_BREAK_RE.split(text) if len(line) > 0]


def classify_line(raw: str) -> IsiLine:
    """Classify one line by its leading marker and strip the marker.

    ``**`` wins over ``-``, so ``**-foo`` is bold text ``-foo``.
    """
    if raw.startswith("**"):
        return IsiLine(kind=LineKind.BOLD, text=raw[2:])
    if raw.startswith("-"):
        return IsiLine(kind=LineKind.BULLET, text=raw[1:])
    return IsiLine(kind=LineKind.PLAIN, text=raw)


def parse_isi_text(text: str) -> list[IsiLine]:
    return [classify_line(line) for line in split_lines(text)]


def generate_row(text: str, is_bold: bool, is_bullet: bool, style: StyleConfig) -> str:
    """Render one table row for one ISI line.

    Args:
        text: Line text with its marker already stripped. Inserted as-is, no escaping.
        is_bold: Render with ``font-weight: bold``
        is_bullet: Render as a two-column sub-table with a bullet glyph cell
        style: Style values; unset fields fall back to the documented defaults

    Returns:
        HTML ``<tr>`` fragment, starting with a newline
    """
    common_style = _inline_style(style, is_bold)

    if is_bullet:
        bullet_style = _inline_style(style, is_bold, color=_bullet_color(style))
        return (
            "\n\t\t\t\t<tr>"
            "\n\t\t\t\t\t<td>"
            '\n\t\t\t\t\t\t<table cellpadding="0" cellspacing="0" border="0" width="100%">'
            "\n\t\t\t\t\t\t\t<tr>"
            f'\n\t\t\t\t\t\t\t\t<td width="{BULLET_CELL_WIDTH}" valign="top" align="left" '
            f'style="{bullet_style} font-weight: bold;">&bull;</td>'
            f'\n\t\t\t\t\t\t\t\t<td valign="top" align="left" style="{common_style}">{text}</td>'
            "\n\t\t\t\t\t\t\t</tr>"
            "\n\t\t\t\t\t\t</table>"
            "\n\t\t\t\t\t</td>"
            "\n\t\t\t\t</tr>"
        )

    return (
        "\n\t\t\t\t<tr>"
        f'\n\t\t\t\t\t<td align="left" style="{common_style}">'
        f"\n\t\t\t\t\t\t{text}"
        "\n\t\t\t\t\t</td>"
        "\n\t\t\t\t</tr>"
    )


def generate_isi(lines: Sequence[IsiLine], style: StyleConfig) -> str:
    """Assemble the full ISI table from classified lines.

    Rows keep the order of ``lines``. The rows sit in a full-width inner table,
    flanked by two gutter cells inside a fixed-width presentation table.
    """
    rows = "".join(
        generate_row(
            line.text,
            is_bold=line.kind is LineKind.BOLD,
            is_bullet=line.kind is LineKind.BULLET,
            style=style,
        )
        for line in lines
    )

    gutter_width = _px(style.gutter_width, DEFAULT_GUTTER_WIDTH)
    table_color = _color(style.table_color, DEFAULT_TABLE_COLOR)

    return (
        f'<table cellpadding="0" cellspacing="0" border="0" width="{TABLE_WIDTH}" '
        f'style="min-width: {TABLE_WIDTH}px;" class="wrapper" role="presentation" bgcolor="{table_color}">'
        "\n\t<tr>"
        f'\n\t\t<td width="{gutter_width}" class="gutter">&nbsp;</td>'
        "\n\t\t<td>"
        f'\n\t\t\t<table cellpadding="0" cellspacing="0" border="0" width="100%">{rows}'
        "\n\t\t\t</table>"
        "\n\t\t</td>"
        f'\n\t\t<td width="{gutter_width}" class="gutter">&nbsp;</td>'
        "\n\t</tr>"
        "\n</table>"
    )


def compile_isi(style: StyleConfig) -> str:
    """Render ``style.isi_text`` into the ISI HTML table."""
    lines = parse_isi_text(style.isi_text)
    logger.debug(f"Rendering ISI table with {len(lines)} row(s)")
    return generate_isi(lines, style)
