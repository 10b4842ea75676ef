"""Field descriptions, name conversions and validation for model generation."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

VALID_TYPES = frozenset({"string", "text", "int", "float", "bool", "time"})

_MODEL_NAME = re.compile(r"[A-Z][A-Za-z0-9]*")
_FIELD_NAME = re.compile(r"[a-z][a-z0-9_]*")


def _with_capitals(words: Iterable[str]) -> frozenset[str]:
    return frozenset(variant for word in words for variant in (word, word.capitalize()))


_GO_KEYWORDS = _with_capitals(
    "break case chan const continue default defer else fallthrough for func go goto "
    "if import interface map package range return select struct switch type var".split()
)
_GO_BUILTIN_TYPES = _with_capitals(
    "int int8 int16 int32 int64 uint uint8 uint16 uint32 uint64 float32 float64 "
    "complex64 complex128 byte rune string bool error any".split()
)
_ENT_IDENTIFIERS = _with_capitals(
    "client mutation config query tx value hook policy predicate".split()
) | {"orderfunc", "OrderFunc"}
_RESERVED = _GO_KEYWORDS | _GO_BUILTIN_TYPES | _ENT_IDENTIFIERS

_GO_TYPES = {
    "string": "string",
    "text": "string",
    "int": "int",
    "float": "float64",
    "bool": "bool",
    "time": "time.Time",
}
_ENT_TYPES = {
    "string": "String",
    "text": "Text",
    "int": "Int",
    "float": "Float",
    "bool": "Bool",
    "time": "Time",
}
_INPUT_TYPES = {
    "string": "text",
    "text": "text",
    "int": "number",
    "float": "number",
    "bool": "checkbox",
    "time": "datetime-local",
}


class FieldError(ValueError):
    """Raised when a field specification is malformed or not allowed."""


@dataclass(frozen=True)
class Field:
    """One field of a generated model."""

    name: str
    type: str
    required: bool = False


def _is_separator(ch: str) -> bool:
    if ch.isascii():
        return not (ch.isalnum() or ch == "_")
    return ch.isspace()


def _title(word: str) -> str:
    """Upper-case the first letter of every word, as in classic title-casing."""
    out = []
    previous_separator = True
    for ch in word:
        out.append(ch.upper() if previous_separator else ch)
        previous_separator = _is_separator(ch)
    return "".join(out)


def to_pascal_case(text: str) -> str:
    """Convert ``snake_case``, ``kebab-case`` or spaced words to PascalCase."""
    words = [w for w in re.split(r"[_ \-]", text) if w]
    return "".join(_title(word.lower()) for word in words)


def to_camel_case(text: str) -> str:
    """Convert a field name to the exported struct field name."""
    pascal = to_pascal_case(text)
    return pascal[:1].upper() + pascal[1:]


def go_type(field_type: str) -> str:
    """Return the Go type used in generated form structs."""
    return _GO_TYPES.get(field_type, "string")


def ent_field_type(field_type: str) -> str:
    """Return the Ent schema field constructor for ``field_type``."""
    return _ENT_TYPES.get(field_type, "String")


def validation_tag(field: Field) -> str:
    """Return the ``validate`` struct tag for a field."""
    if field.type == "string":
        return "required,max=255" if field.required else "omitempty,max=255"
    if field.type == "text":
        return "required" if field.required else "omitempty"
    if field.type == "int":
        return "gte=0"
    if field.type == "float":
        return "gt=0"
    return "omitempty"


def input_type(field_type: str) -> str:
    """Return the HTML ``<input>`` type for a field type."""
    return _INPUT_TYPES.get(field_type, "text")


def form_field_extraction(fields: Iterable[Field]) -> str:
    """Generate the struct literal lines that read each field from a form."""
    lines = []
    for field in fields:
        go_name = to_camel_case(field.name)
        key = field.name
        if field.type == "int":
            expr = f'func() int {{ v, _ := strconv.Atoi(r.Form.Get("{key}")); return v }}()'
        elif field.type == "float":
            expr = (
                f"func() float64 {{ v, _ := strconv.ParseFloat("
                f'r.Form.Get("{key}"), 64); return v }}()'
            )
        elif field.type == "bool":
            expr = (
                f'r.Form.Get("{key}") == "on" || r.Form.Get("{key}") == "true"'
                f' || r.Form.Get("{key}") == "1"'
            )
        elif field.type == "time":
            expr = (
                f'func() time.Time {{ v, _ := time.Parse("2006-01-02T15:04", '
                f'r.Form.Get("{key}")); return v }}()'
            )
        else:
            expr = f'r.Form.Get("{key}")'
        lines.append(f"\t\t{go_name}:        {expr},\n")
    return "".join(lines)


def is_reserved_keyword(name: str) -> bool:
    """True for Go keywords, Go built-in types and Ent predeclared identifiers."""
    return name in _RESERVED


def is_valid_model_name(name: str) -> bool:
    """True if ``name`` is PascalCase alphanumeric and not reserved."""
    return _MODEL_NAME.fullmatch(name) is not None and not is_reserved_keyword(name)


def is_valid_field_name(name: str) -> bool:
    """True if ``name`` starts lowercase and holds only ``a-z``, digits and ``_``."""
    return _FIELD_NAME.fullmatch(name) is not None


def parse_field(text: str) -> Field:
    """Parse an interactive ``name:type`` entry into an optional field."""
    parts = text.split(":")
    if len(parts) != 2:
        raise FieldError("invalid format, use 'name:type'")

    name = parts[0].strip()
    field_type = parts[1].strip().lower()

    if not is_valid_field_name(name):
        raise FieldError(
            "field name must start with lowercase letter and contain only "
            "alphanumeric and underscore"
        )
    if is_reserved_keyword(name):
        raise FieldError(f"field name '{name}' is a Go reserved keyword or built-in type")
    if field_type not in VALID_TYPES:
        raise FieldError(f"unsupported type '{field_type}'")
    return Field(name=name, type=field_type, required=False)


def validate_field(field: Field) -> None:
    """Raise :class:`FieldError` if the field's name or type is not allowed."""
    if not is_valid_field_name(field.name):
        raise FieldError(
            f"invalid field name: {field.name} (must start with lowercase letter "
            "and contain only alphanumeric and underscore)"
        )
    if is_reserved_keyword(field.name):
        raise FieldError(
            f"field name '{field.name}' is a Go reserved keyword, built-in type, "
            "or Ent identifier"
        )
    if field.type not in VALID_TYPES:
        raise FieldError(
            f"invalid field type: {field.type} "
            "(supported: string, text, int, float, bool, time)"
        )


def parse_fields(text: str) -> list[Field]:
    """Parse ``name:type[:required]`` specs separated by commas."""
    fields = []
    for spec in text.split(","):
        parts = spec.strip().split(":")
        if len(parts) < 2:
            raise FieldError(
                f"Invalid field format: {spec} "
                "(expected name:type or name:type:required)"
            )
        field = Field(
            name=parts[0],
            type=parts[1],
            required=len(parts) > 2 and parts[2] == "required",
        )
        validate_field(field)
        fields.append(field)
    return fields