"""
=================================
Query Builder Transport Encoding.
=================================

Encodes a QueryBuilder's full clause state as an opaque, text-safe token
(JSON wrapped in standard base64) so a query definition can travel across
a process boundary, e.g. inside a pagination link, and be rebuilt later.

The token carries no version field. Unknown keys are ignored on decode;
anything structurally wrong raises QueryDecodeError.

Example:
    >>> from sql.query_builder import create_query_builder
    >>> from sql.serializer import deserialize_query, serialize_query
    >>>
    >>> qb = create_query_builder('posts').where('author_id', '=', 7).limit(0, 20)
    >>> token = serialize_query(qb.next_page())
    >>> deserialize_query(token).to_select_sql()
    'SELECT * FROM `posts` WHERE `author_id` = 7 LIMIT 20, 20'
"""

import base64
import binascii
import json

from .query_builder import QueryBuilder


class QueryDecodeError(ValueError):
    """Raised when a transport token cannot be decoded into a QueryBuilder."""
    pass


def serialize_query(builder: QueryBuilder) -> str:
    """
    Encode a builder as a base64 token.

    Args:
        builder: QueryBuilder to encode

    Returns:
        ASCII token safe to embed in text
    """
    payload = json.dumps(builder.to_dict(), separators=(",", ":"))
    return base64.b64encode(payload.encode("utf-8")).decode("ascii")


def deserialize_query(token: str) -> QueryBuilder:
    """
    Rebuild a builder from a token produced by serialize_query().

    Args:
        token: base64 token

    Returns:
        QueryBuilder rendering the same statements as the encoded one

    Raises:
        QueryDecodeError: If the envelope or the payload is malformed
    """
    try:
        raw = base64.b64decode(token, validate=True)
    except (binascii.Error, ValueError, TypeError) as e:
        raise QueryDecodeError(f"Invalid token envelope: {e}") from e

    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise QueryDecodeError(f"Invalid token payload: {e}") from e

    if not isinstance(data, dict):
        raise QueryDecodeError(f"Invalid token payload: expected an object, got {type(data).__name__}")

    try:
        return QueryBuilder.from_dict(data)
    except KeyError as e:
        raise QueryDecodeError(f"Invalid token payload: missing key {e}") from e
    except (ValueError, TypeError, AttributeError) as e:
        raise QueryDecodeError(f"Invalid token payload: {e}") from e
