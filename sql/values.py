"""
==============================
SQL Value Rendering Utilities.
==============================

This module turns the Python values handed to the query builder into SQL
text. Values are first classified into a closed set of kinds and then
rendered by a ValueRenderer.

Value Kinds:
- TEXT / INT64 / FLOAT64: scalar strings, signed 64-bit integers and floats
- TEXT_LIST / INT64_LIST / FLOAT64_LIST: homogeneous lists used with IN (...)
- UNSUPPORTED: anything else; renders as an empty fragment

Renderers:
- LiteralRenderer: inline, escaped SQL literals (the default)
- BindParamRenderer: named placeholders plus a dict of bound parameters

Usage:
    from sql.values import render_literal, to_sql_value

    render_literal("O'Brien")    # "'O\\'Brien'"
    render_literal([1, 2, 3])    # "(1,2,3)"
    render_literal(1.5)          # "1.5"
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_ESCAPE_RE = re.compile(r"('|\\)")


class ValueKind(str, Enum):
    """Closed set of value shapes the builder knows how to render."""

    TEXT = "text"
    INT64 = "int64"
    FLOAT64 = "float64"
    TEXT_LIST = "text_list"
    INT64_LIST = "int64_list"
    FLOAT64_LIST = "float64_list"
    UNSUPPORTED = "unsupported"

    @property
    def is_list(self) -> bool:
        return self in (ValueKind.TEXT_LIST, ValueKind.INT64_LIST, ValueKind.FLOAT64_LIST)


@dataclass(frozen=True)
class SqlValue:
    """A classified parameter value.

    Attributes:
        kind: The ValueKind of the value
        data: The underlying Python value (a tuple for list kinds)

    Raises:
        ValueError: If data does not match kind, e.g. SqlValue(INT64, "1")
    """

    kind: ValueKind
    data: Any = None

    def __post_init__(self):
        if self.kind.is_list and isinstance(self.data, list):
            object.__setattr__(self, "data", tuple(self.data))
        if not _matches_kind(self.kind, self.data):
            raise ValueError(f"Value {self.data!r} does not match kind '{self.kind.value}'")


_SCALAR_KIND = {
    ValueKind.TEXT_LIST: ValueKind.TEXT,
    ValueKind.INT64_LIST: ValueKind.INT64,
    ValueKind.FLOAT64_LIST: ValueKind.FLOAT64,
}


def _is_int64(value: Any) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and INT64_MIN <= value <= INT64_MAX
    )


def _matches_kind(kind: ValueKind, data: Any) -> bool:
    if kind is ValueKind.UNSUPPORTED:
        return True
    if kind.is_list:
        scalar_kind = _SCALAR_KIND[kind]
        return isinstance(data, tuple) and all(_matches_kind(scalar_kind, item) for item in data)
    if kind is ValueKind.TEXT:
        return isinstance(data, str)
    if kind is ValueKind.INT64:
        return _is_int64(data)
    return isinstance(data, float)


def to_sql_value(value: Any) -> SqlValue:
    """
    Classify a Python value into a SqlValue.

    Args:
        value: str, int, float, a list/tuple of one of those, or a SqlValue

    Returns:
        SqlValue; values of any other shape are classified UNSUPPORTED
        rather than rejected. bool, None and ints outside the signed 64-bit
        range are UNSUPPORTED too. An empty list is an empty TEXT_LIST.
    """
    if isinstance(value, SqlValue):
        return value
    if isinstance(value, str):
        return SqlValue(ValueKind.TEXT, value)
    if _is_int64(value):
        return SqlValue(ValueKind.INT64, value)
    if isinstance(value, float):
        return SqlValue(ValueKind.FLOAT64, value)
    if isinstance(value, (list, tuple)):
        items = tuple(value)
        if all(isinstance(item, str) for item in items):
            return SqlValue(ValueKind.TEXT_LIST, items)
        if all(_is_int64(item) for item in items):
            return SqlValue(ValueKind.INT64_LIST, items)
        if all(isinstance(item, float) for item in items):
            return SqlValue(ValueKind.FLOAT64_LIST, items)
    return SqlValue(ValueKind.UNSUPPORTED, value)


def escape_string(value: str) -> str:
    """Prefix every single quote and backslash with a backslash."""
    return _ESCAPE_RE.sub(r"\\\1", value)


def format_float(value: float) -> str:
    """Shortest round-trip form of a float (repr), e.g. 1.5, 1e-07, 1e+16."""
    return repr(value)


class ValueRenderer:
    """
    Base interface for turning a SqlValue into a SQL fragment.

    Subclasses implement render_scalar(); list kinds are wrapped in a
    parenthesized, comma-joined list and UNSUPPORTED renders empty.
    """

    def render(self, value: SqlValue) -> str:
        if value.kind is ValueKind.UNSUPPORTED:
            return ""
        if value.kind.is_list:
            scalar_kind = _SCALAR_KIND[value.kind]
            items = [self.render_scalar(scalar_kind, item) for item in value.data]
            return "(" + ",".join(items) + ")"
        return self.render_scalar(value.kind, value.data)

    def render_scalar(self, kind: ValueKind, data: Any) -> str:
        raise NotImplementedError


class LiteralRenderer(ValueRenderer):
    """Renders values as inline SQL literals with backslash escaping."""

    def render_scalar(self, kind: ValueKind, data: Any) -> str:
        if kind is ValueKind.TEXT:
            return "'" + escape_string(data) + "'"
        if kind is ValueKind.INT64:
            return str(data)
        return format_float(data)


class BindParamRenderer(ValueRenderer):
    """
    Renders values as named placeholders and collects the bound values.

    The produced statement is meant for sqlalchemy.text() together with
    the collected params. Use a fresh instance per statement.

    Example:
        >>> renderer = BindParamRenderer()
        >>> renderer.render(to_sql_value([1, 2]))
        '(:p0,:p1)'
        >>> renderer.params
        {'p0': 1, 'p1': 2}
    """

    def __init__(self, prefix: str = "p"):
        self.prefix = prefix
        self.params: Dict[str, Any] = {}

    def render_scalar(self, kind: ValueKind, data: Any) -> str:
        name = f"{self.prefix}{len(self.params)}"
        self.params[name] = data
        return f":{name}"


def render_literal(value: Any) -> str:
    """Classify a Python value and render it as an inline SQL literal."""
    return LiteralRenderer().render(to_sql_value(value))


def value_to_dict(value: SqlValue) -> Dict[str, Any]:
    """Tagged, JSON-friendly form of a SqlValue."""
    if value.kind is ValueKind.UNSUPPORTED:
        return {"kind": value.kind.value, "data": None}
    data = list(value.data) if value.kind.is_list else value.data
    return {"kind": value.kind.value, "data": data}


def value_from_dict(payload: Dict[str, Any]) -> SqlValue:
    """
    Rebuild a SqlValue from value_to_dict() output.

    Raises:
        ValueError: If the kind is unknown or the data does not match it
        KeyError: If a required key is missing
    """
    kind = ValueKind(payload["kind"])
    if kind is ValueKind.UNSUPPORTED:
        return SqlValue(kind, None)
    return SqlValue(kind, payload["data"])
