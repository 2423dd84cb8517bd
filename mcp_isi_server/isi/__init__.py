from mcp_isi_server.isi.models import IsiLine, IsiValidationError, LineKind, StyleConfig, validate_style
from mcp_isi_server.isi.renderer import (
    classify_line,
    compile_isi,
    generate_isi,
    generate_row,
    parse_isi_text,
    split_lines,
)

__all__ = [
    "IsiLine",
    "IsiValidationError",
    "LineKind",
    "StyleConfig",
    "classify_line",
    "compile_isi",
    "generate_isi",
    "generate_row",
    "parse_isi_text",
    "split_lines",
    "validate_style",
]
