"""Reading entity fields, formatting their values and decoding forms."""

from __future__ import annotations

import dataclasses
import datetime
import operator
import os
import re
import types
import typing
from collections.abc import Mapping
from typing import Any, Optional, TypeVar, Union

from helia.responses import parse_id

T = TypeVar("T")

_LANGUAGE_TAG = re.compile(r"[A-Za-z]{2,3}(?:-[A-Za-z0-9]{2,8})*")
_GENERIC = re.compile(r"(?:typing\.)?(\w+)\[(.*)\]", re.DOTALL)

_DOT_COMMA = (".", ",")
_SPACE_COMMA = ("\u00a0", ",")
_SEPARATORS = {
    "en": (",", "."),
    "sr": _DOT_COMMA,
    "hr": _DOT_COMMA,
    "bs": _DOT_COMMA,
    "sl": _DOT_COMMA,
    "mk": _DOT_COMMA,
    "de": _DOT_COMMA,
    "it": _DOT_COMMA,
    "es": _DOT_COMMA,
    "nl": _DOT_COMMA,
    "pt": _DOT_COMMA,
    "id": _DOT_COMMA,
    "tr": _DOT_COMMA,
    "da": _DOT_COMMA,
    "el": _DOT_COMMA,
    "ro": _DOT_COMMA,
    "fr": ("\u202f", ","),
    "ru": _SPACE_COMMA,
    "uk": _SPACE_COMMA,
    "pl": _SPACE_COMMA,
    "cs": _SPACE_COMMA,
    "sk": _SPACE_COMMA,
    "bg": _SPACE_COMMA,
    "fi": _SPACE_COMMA,
    "sv": _SPACE_COMMA,
    "nb": _SPACE_COMMA,
    "hu": _SPACE_COMMA,
}

_TRUE_WORDS = {"1", "t", "T", "TRUE", "true", "True", "on"}
_FALSE_WORDS = {"0", "f", "F", "FALSE", "false", "False"}

_NAMED_TYPES: dict[str, Any] = {
    "int": int,
    "builtins.int": int,
    "float": float,
    "builtins.float": float,
    "str": str,
    "builtins.str": str,
    "bool": bool,
    "builtins.bool": bool,
    "datetime": datetime.datetime,
    "datetime.datetime": datetime.datetime,
    "date": datetime.date,
    "datetime.date": datetime.date,
    "None": type(None),
    "NoneType": type(None),
    "list": list,
    "List": list,
    "typing.List": list,
}


class FormDecodeError(ValueError):
    """The submitted form does not fit the entity it is decoded into."""


def _normalize(name: str) -> str:
    return name.replace("_", "").lower()


def _attributes(obj: Any) -> dict[str, Any]:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
    return dict(vars(obj))


def get_field_by_name_case_insensitive(obj: Any, field_name: str) -> tuple[Any, str] | None:
    """Find an attribute ignoring case and underscores.

    Returns the value and its lower-case type name, or None if there is none.
    """
    wanted = _normalize(field_name)
    for name, value in _attributes(obj).items():
        if _normalize(name) == wanted:
            return value, type(value).__name__.lower()
    return None


def get_formatted_value(field_type: str, value: Any) -> str:
    """Render a field value for a table cell according to its type name."""
    if field_type in ("int", "int64", "int32"):
        return format_number_with_locale(value, "int")
    if field_type in ("float", "float64"):
        return format_number_with_locale(value, "float")
    if field_type in ("str", "string"):
        return str(value)
    if field_type == "bool":
        return "true" if value else "false"
    if field_type in ("time", "date", "datetime", "timestamp"):
        if not isinstance(value, datetime.date):
            raise TypeError(f"value is not a date: {value!r}")
        return value.strftime("%Y-%m-%d")
    return str(value)


def _system_locale() -> str | None:
    for variable in ("LANGUAGE", "LC_ALL", "LC_MESSAGES", "LANG"):
        setting = os.environ.get(variable, "")
        first = setting.split(":")[0]
        if first:
            return first
    return None


def _separators(locale_name: str) -> tuple[str, str] | None:
    tag = locale_name.split(".")[0].split("@")[0].replace("_", "-")
    if not _LANGUAGE_TAG.fullmatch(tag):
        return None
    return _SEPARATORS.get(tag.split("-")[0].lower(), (",", "."))


def format_number_with_locale(
    number: Any, number_type: str, locale_name: str | None = None
) -> str:
    """Format an integer, or a float to two decimals, with locale grouping.

    Without a usable locale (given or taken from the environment) the number
    is written plainly, with no grouping.
    """
    if number_type not in ("int", "float"):
        return str(number)
    if locale_name is None:
        locale_name = _system_locale()
    separators = _separators(locale_name) if locale_name else None

    if number_type == "int":
        integer = operator.index(number)
        if separators is None:
            return str(integer)
        text = f"{integer:,}"
    else:
        if separators is None:
            return f"{float(number):.2f}"
        text = f"{float(number):,.2f}"
    group, decimal = separators
    return text.translate(str.maketrans({",": group, ".": decimal}))


def _split_top_level(text: str, separator: str) -> list[str]:
    """Split on a separator that is not nested inside brackets."""
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for char in text:
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
        if char == separator and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return [part.strip() for part in parts]


def _resolve_annotation(annotation: Any) -> Any:
    """Turn a field annotation, possibly written as text, into a type."""
    if not isinstance(annotation, str):
        return annotation
    text = annotation.strip().strip("'\"")

    alternatives = _split_top_level(text, "|")
    if len(alternatives) > 1:
        return Union[tuple(_resolve_annotation(part) for part in alternatives)]

    match = _GENERIC.fullmatch(text)
    if match:
        name, inner = match.group(1), match.group(2)
        if name == "Optional":
            return Optional[_resolve_annotation(inner)]
        if name == "Union":
            members = _split_top_level(inner, ",")
            return Union[tuple(_resolve_annotation(part) for part in members)]
        if name in ("list", "List"):
            return list[_resolve_annotation(inner)]
    return _NAMED_TYPES.get(text, text)


def _unwrap_optional(tp: Any) -> tuple[Any, bool]:
    origin = typing.get_origin(tp)
    union_types = (Union, getattr(types, "UnionType", Union))
    if origin in union_types:
        args = [arg for arg in typing.get_args(tp) if arg is not type(None)]
        if len(args) == 1:
            return args[0], True
    return tp, False


def _zero_value(tp: Any) -> Any:
    tp, optional = _unwrap_optional(tp)
    if optional:
        return None
    if typing.get_origin(tp) is list or tp is list:
        return []
    zeros = {int: 0, float: 0.0, str: "", bool: False}
    return zeros.get(tp)


def _convert(tp: Any, raw: str, name: str) -> Any:
    if tp is str:
        return raw
    try:
        if tp is bool:
            if raw in _TRUE_WORDS:
                return True
            if raw in _FALSE_WORDS:
                return False
            raise ValueError(f"invalid boolean {raw!r}")
        if tp is int:
            return parse_id(raw)
        if tp is float:
            return float(raw)
        if tp is datetime.datetime:
            return datetime.datetime.fromisoformat(raw)
        if tp is datetime.date:
            return datetime.date.fromisoformat(raw)
    except ValueError as exc:
        raise FormDecodeError(f"field {name!r}: {exc}") from exc
    raise FormDecodeError(f"field {name!r}: unsupported type {tp!r}")


def decode_form(entity_type: type[T], form: Mapping[str, Any]) -> T:
    """Build a dataclass instance from submitted form values.

    Keys match field names ignoring case and underscores, or a field's
    ``form`` metadata alias. Unknown keys and bad values raise FormDecodeError.
    Scalar fields take the last submitted value; empty values leave the default.
    """
    if not (dataclasses.is_dataclass(entity_type) and isinstance(entity_type, type)):
        raise TypeError(f"{entity_type!r} is not a dataclass type")

    all_fields = dataclasses.fields(entity_type)
    hints = {f.name: _resolve_annotation(f.type) for f in all_fields}
    by_key: dict[str, dataclasses.Field] = {}
    for f in all_fields:
        if not f.init:
            continue
        by_key[_normalize(f.metadata.get("form", f.name))] = f

    values: dict[str, Any] = {}
    for key, submitted in form.items():
        target = by_key.get(_normalize(key))
        if target is None:
            raise FormDecodeError(f"unknown form field {key!r}")
        raw_values = list(submitted) if isinstance(submitted, (list, tuple)) else [submitted]
        tp, optional = _unwrap_optional(hints[target.name])

        if typing.get_origin(tp) is list or tp is list:
            (item_type,) = typing.get_args(tp) or (str,)
            values[target.name] = [
                _convert(item_type, raw, target.name)
                for raw in raw_values
                if raw != "" or item_type is str
            ]
            continue

        if not raw_values:
            continue
        raw = raw_values[-1]
        if raw == "" and tp is not str:
            if optional:
                values[target.name] = None
            continue
        values[target.name] = _convert(tp, raw, target.name)

    for f in all_fields:
        if not f.init or f.name in values:
            continue
        if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
            values[f.name] = _zero_value(hints[f.name])

    return entity_type(**values)