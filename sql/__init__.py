"""
=====================================
SQL statement building for db-helper.
=====================================

This package turns fluent builder calls into SQL text. It has no database
dependency; executing statements is the job of the utils package.

The package follows a clear organization:
    - values.py: Value classification and rendering (literals or bind params)
    - query_builder.py: The fluent QueryBuilder and its clause records
    - serializer.py: base64/JSON transport tokens for builder state

Architecture:
    - query_builder.py imports from values.py (not vice versa)
    - serializer.py imports from query_builder.py (not vice versa)
    - Rendering is pure and never raises

Example:
    >>> from sql import create_query_builder
    >>>
    >>> qb = create_query_builder('t').where('id', '=', 5).where('name', '=', "O'Brien")
    >>> qb.to_select_sql()
    "SELECT * FROM `t` WHERE `id` = 5 AND `name` = 'O\\\\'Brien'"
"""

__version__ = "1.0.0"
__all__ = [
    # Values
    'ValueKind', 'SqlValue', 'ValueRenderer', 'LiteralRenderer', 'BindParamRenderer',
    'to_sql_value', 'render_literal',
    # Builder
    'QueryBuilder', 'create_query_builder',
    # Transport
    'serialize_query', 'deserialize_query', 'QueryDecodeError',
]

from .query_builder import QueryBuilder, create_query_builder
from .serializer import QueryDecodeError, deserialize_query, serialize_query
from .values import (
    BindParamRenderer,
    LiteralRenderer,
    SqlValue,
    ValueKind,
    ValueRenderer,
    render_literal,
    to_sql_value,
)
