import math
import re
from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

if TYPE_CHECKING:
    from mcp_isi_server.config import StyleDefaults

HEX_COLOR_RE = re.compile(r"^#?([0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$")

# Field labels used in validation messages
FIELD_LABELS = {
    "padding": "Padding",
    "font_size": "Font size",
    "line_height": "Line height",
    "gutter_width": "Gutter",
    "font_color": "Font color",
    "table_color": "Table color",
    "bullet_color": "Bullet color",
}

ISI_TEXT_REQUIRED = "ISI text is required"

STYLE_FIELDS = (
    "padding",
    "font_size",
    "font_color",
    "table_color",
    "line_height",
    "gutter_width",
    "bullet_color",
)


class IsiValidationError(ValueError):
    """Raised when raw ISI form values fail validation.

    ``errors`` maps each failing field name to a human readable message.
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        super().__init__("; ".join(f"{field}: {message}" for field, message in errors.items()))


class LineKind(str, Enum):
    BOLD = "bold"
    BULLET = "bullet"
    PLAIN = "plain"


class IsiLine(BaseModel):
    """One non-empty ISI line with its marker stripped"""

    kind: LineKind
    text: str


class StyleConfig(BaseModel):
    """Styling values and text for one ISI table.

    Unset style fields are ``None``; the renderer resolves them to the documented defaults.
    Accepts both snake_case names and the camelCase names of the web form.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    padding: float | None = None
    font_size: float | None = None
    font_color: str | None = None
    table_color: str | None = None
    line_height: float | None = None
    gutter_width: float | None = None
    has_bullets: bool = False
    bullet_color: str | None = None
    isi_text: str = Field(default="", validate_default=True)

    @field_validator("padding", "font_size", "line_height", "gutter_width", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any, info: ValidationInfo) -> float | None:
        if value is None:
            return None
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
        if not isinstance(value, bool):
            try:
                number = float(value)
            except (TypeError, ValueError, OverflowError):
                number = None
            if number is not None and math.isfinite(number):
                return number
        raise PydanticCustomError(
            "number_type",
            "{label} needs to be a number",
            {"label": FIELD_LABELS[info.field_name]},
        )

    @field_validator("font_color", "table_color", "bullet_color", mode="before")
    @classmethod
    def _check_hex_color(cls, value: Any, info: ValidationInfo) -> str | None:
        if value is None or value == "":
            return None
        if not isinstance(value, str) or not HEX_COLOR_RE.fullmatch(value):
            raise PydanticCustomError(
                "hex_color",
                "{label} needs to be a valid hex color",
                {"label": FIELD_LABELS[info.field_name]},
            )
        return value if value.startswith("#") else f"#{value}"

    @field_validator("isi_text")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("isi_text_required", ISI_TEXT_REQUIRED)
        return value

    def with_defaults(self, defaults: "StyleDefaults") -> "StyleConfig":
        """Return a copy with every unset style field filled from ``defaults``."""
        update = {name: getattr(defaults, name) for name in STYLE_FIELDS if not getattr(self, name)}
        return self.model_copy(update=update)


_FIELD_BY_ALIAS = {field.alias or name: name for name, field in StyleConfig.model_fields.items()}


def validate_style(data: Mapping[str, Any]) -> StyleConfig:
    """Validate raw form values into a StyleConfig.

    Raises:
        IsiValidationError: With one message per failing field
    """
    try:
        return StyleConfig.model_validate(dict(data))
    except ValidationError as e:
        errors: dict[str, str] = {}
        for error in e.errors():
            key = str(error["loc"][0]) if error["loc"] else "isi_text"
            field = _FIELD_BY_ALIAS.get(key, key)
            message = ISI_TEXT_REQUIRED if field == "isi_text" else error["msg"]
            errors.setdefault(field, message)
        raise IsiValidationError(errors) from e
