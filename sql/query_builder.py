"""
============================
SQL Query Builder Utilities.
============================

This module provides a fluent, mutable statement builder that accumulates
clause data for one table and renders it as MySQL-flavoured SQL text.

Mutators (all return the builder for chaining):
- select_fields: Comma-separated field list for SELECT
- add_column: Column/value pair for INSERT
- set_column: Column/value pair for UPDATE
- where: Predicate ANDed into the WHERE clause
- group_by: Comma-separated GROUP BY columns
- order_by: Column and direction for ORDER BY
- limit / next_page: Offset/count pagination

Renderers:
- to_select_sql: SELECT ... FROM ... WHERE ... GROUP BY ... ORDER BY ... LIMIT ...
- to_insert_sql: INSERT INTO ... (...) VALUES(...)
- to_update_sql: UPDATE ... SET ... WHERE ...
- to_delete_sql: DELETE FROM ... WHERE ...

Clauses always render in the order WHERE, GROUP BY, ORDER BY, LIMIT, no
matter which order the mutators were called in. Predicates, orderings,
additions and assignments keep their insertion order.

Usage:
    from sql.query_builder import create_query_builder

    qb = (
        create_query_builder('users')
        .select_fields('id,name,count(*)')
        .where('status', '=', 'active')
        .where('id', 'IN', [1, 2, 3])
        .order_by('created_at', 'desc')
        .limit(0, 20)
    )
    qb.to_select_sql()
    # SELECT `id`,`name`,count(*) FROM `users` WHERE `status` = 'active'
    #   AND `id` IN (1,2,3) ORDER BY `created_at` DESC LIMIT 0, 20
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .values import (
    LiteralRenderer,
    SqlValue,
    ValueRenderer,
    to_sql_value,
    value_from_dict,
    value_to_dict,
)


@dataclass(frozen=True)
class Addition:
    """Column/value pair for INSERT."""

    column: str
    value: SqlValue


@dataclass(frozen=True)
class Assignment:
    """Column/value pair for UPDATE ... SET."""

    column: str
    value: SqlValue


@dataclass(frozen=True)
class Predicate:
    """A single `column` OP value condition."""

    column: str
    operator: str
    value: SqlValue


@dataclass(frozen=True)
class Ordering:
    column: str
    direction: str


@dataclass
class Pagination:
    """Offset/count pair. A count of 0 means no LIMIT clause."""

    offset: int = 0
    count: int = 0


def _text(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string, got {type(value).__name__}")
    return value


def quote_identifier(name: str) -> str:
    """Wrap an identifier in backticks. No escaping is applied."""
    return f"`{name}`"


class QueryBuilder:
    """
    Accumulates clause data for a single table and renders SQL statements.

    A builder is meant to be owned by one caller until it is rendered;
    rendering methods never mutate it and never raise.

    Attributes:
        table: Target table name
        fields: Raw SELECT field list ("" means *)
        additions: INSERT column/value pairs
        assignments: UPDATE column/value pairs
        predicates: WHERE conditions, ANDed together
        orderings: ORDER BY entries
        group: Raw comma-separated GROUP BY column list
        pagination: LIMIT offset/count

    Example:
        >>> qb = QueryBuilder('t').add_column('a', 1).add_column('b', 'x')
        >>> qb.to_insert_sql()
        "INSERT INTO `t` (`a`,`b`) VALUES(1,'x')"
    """

    def __init__(self, table: str):
        self.table = table
        self.fields = ""
        self.additions: List[Addition] = []
        self.assignments: List[Assignment] = []
        self.predicates: List[Predicate] = []
        self.orderings: List[Ordering] = []
        self.group = ""
        self.pagination = Pagination()

    def __repr__(self) -> str:
        return f"QueryBuilder(table={self.table!r})"

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def select_fields(self, fields: str) -> "QueryBuilder":
        """Set the comma-separated SELECT field list (replaces any previous one)."""
        self.fields = fields
        return self

    def group_by(self, columns: str) -> "QueryBuilder":
        """Set the comma-separated GROUP BY column list."""
        self.group = columns
        return self

    def add_column(self, column: str, value: Any) -> "QueryBuilder":
        """Append a column/value pair to the INSERT column list."""
        self.additions.append(Addition(column, to_sql_value(value)))
        return self

    def set_column(self, column: str, value: Any) -> "QueryBuilder":
        """Append a column/value pair to the UPDATE SET list."""
        self.assignments.append(Assignment(column, to_sql_value(value)))
        return self

    def order_by(self, column: str, direction: str = "ASC") -> "QueryBuilder":
        """
        Append an ORDER BY entry.

        The direction is upper-cased when rendered but otherwise not
        checked; passing something other than ASC/DESC is the caller's
        problem.
        """
        self.orderings.append(Ordering(column, direction))
        return self

    def limit(self, offset: int, count: int) -> "QueryBuilder":
        """
        Set pagination.

        Args:
            offset: Number of rows to skip
            count: Page size; 0 disables the LIMIT clause

        Raises:
            ValueError: If offset or count is negative
        """
        if offset < 0 or count < 0:
            raise ValueError(f"offset and count must be non-negative, got ({offset}, {count})")
        self.pagination = Pagination(offset, count)
        return self

    def next_page(self) -> "QueryBuilder":
        """Advance the offset by one page. No-op when no limit is set."""
        if self.pagination.count > 0:
            self.pagination.offset += self.pagination.count
        return self

    def where(self, column: str, operator: str, value: Any) -> "QueryBuilder":
        """
        Append a predicate ANDed with the existing ones.

        The operator is emitted verbatim. List values render as a
        parenthesized list, so pair them with IN / NOT IN.
        """
        self.predicates.append(Predicate(column, operator, to_sql_value(value)))
        return self

    # ------------------------------------------------------------------
    # Clause helpers
    # ------------------------------------------------------------------

    def _field_clause(self) -> str:
        if not self.fields or self.fields == "*":
            return "*"
        items = []
        for item in self.fields.split(","):
            # Function calls such as count(*) pass through untouched
            items.append(item if "(" in item else quote_identifier(item))
        return ",".join(items)

    def _where_clause(self, renderer: ValueRenderer) -> str:
        if not self.predicates:
            return ""
        conditions = [
            f"{quote_identifier(p.column)} {p.operator} {renderer.render(p.value)}"
            for p in self.predicates
        ]
        return "WHERE " + " AND ".join(conditions)

    def _group_clause(self) -> str:
        if not self.group:
            return ""
        return "GROUP BY " + ",".join(quote_identifier(col) for col in self.group.split(","))

    def _order_clause(self) -> str:
        if not self.orderings:
            return ""
        entries = [
            f"{quote_identifier(o.column)} {o.direction.upper()}" for o in self.orderings
        ]
        return "ORDER BY " + ",".join(entries)

    def _limit_clause(self) -> str:
        if self.pagination.count <= 0:
            return ""
        return f"LIMIT {self.pagination.offset}, {self.pagination.count}"

    @staticmethod
    def _join(*parts: str) -> str:
        return " ".join(part for part in parts if part).strip()

    # ------------------------------------------------------------------
    # Renderers
    # ------------------------------------------------------------------

    def to_select_sql(self, renderer: Optional[ValueRenderer] = None) -> str:
        """
        Render the SELECT statement.

        Args:
            renderer: Value renderer; defaults to inline literals

        Returns:
            SELECT statement with empty clauses omitted
        """
        renderer = renderer or LiteralRenderer()
        return self._join(
            f"SELECT {self._field_clause()} FROM {quote_identifier(self.table)}",
            self._where_clause(renderer),
            self._group_clause(),
            self._order_clause(),
            self._limit_clause(),
        )

    def to_insert_sql(self, renderer: Optional[ValueRenderer] = None) -> str:
        """Render the INSERT statement from the added columns."""
        renderer = renderer or LiteralRenderer()
        columns = ",".join(quote_identifier(a.column) for a in self.additions)
        values = ",".join(renderer.render(a.value) for a in self.additions)
        return f"INSERT INTO {quote_identifier(self.table)} ({columns}) VALUES({values})"

    def to_update_sql(self, renderer: Optional[ValueRenderer] = None) -> str:
        """
        Render the UPDATE statement.

        With no assignments the SET clause is left out entirely, which
        yields invalid SQL rather than an error.
        """
        renderer = renderer or LiteralRenderer()
        set_clause = ""
        if self.assignments:
            set_clause = "SET " + ",".join(
                f"{quote_identifier(a.column)}={renderer.render(a.value)}"
                for a in self.assignments
            )
        return self._join(
            f"UPDATE {quote_identifier(self.table)}",
            set_clause,
            self._where_clause(renderer),
        )

    def to_delete_sql(self, renderer: Optional[ValueRenderer] = None) -> str:
        """Render the DELETE statement."""
        renderer = renderer or LiteralRenderer()
        return self._join(
            f"DELETE FROM {quote_identifier(self.table)}",
            self._where_clause(renderer),
        )

    # ------------------------------------------------------------------
    # Structural state
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Full clause state as JSON-friendly primitives."""
        return {
            "table": self.table,
            "fields": self.fields,
            "additions": [
                {"column": a.column, "value": value_to_dict(a.value)} for a in self.additions
            ],
            "assignments": [
                {"column": a.column, "value": value_to_dict(a.value)} for a in self.assignments
            ],
            "predicates": [
                {"column": p.column, "operator": p.operator, "value": value_to_dict(p.value)}
                for p in self.predicates
            ],
            "orderings": [
                {"column": o.column, "direction": o.direction} for o in self.orderings
            ],
            "group": self.group,
            "pagination": {
                "offset": self.pagination.offset,
                "count": self.pagination.count,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QueryBuilder":
        """
        Rebuild a builder from to_dict() output.

        Unknown keys are ignored.

        Raises:
            KeyError: If a required key is missing
            ValueError: If a value payload is malformed
            TypeError: If a section has the wrong shape
        """
        qb = cls(_text(data["table"], "table"))
        qb.fields = _text(data.get("fields", ""), "fields")
        qb.group = _text(data.get("group", ""), "group")
        qb.additions = [
            Addition(_text(item["column"], "column"), value_from_dict(item["value"]))
            for item in data.get("additions", [])
        ]
        qb.assignments = [
            Assignment(_text(item["column"], "column"), value_from_dict(item["value"]))
            for item in data.get("assignments", [])
        ]
        qb.predicates = [
            Predicate(
                _text(item["column"], "column"),
                _text(item["operator"], "operator"),
                value_from_dict(item["value"]),
            )
            for item in data.get("predicates", [])
        ]
        qb.orderings = [
            Ordering(_text(item["column"], "column"), _text(item["direction"], "direction"))
            for item in data.get("orderings", [])
        ]
        pagination = data.get("pagination", {})
        qb.limit(int(pagination.get("offset", 0)), int(pagination.get("count", 0)))
        return qb


def create_query_builder(table: str) -> QueryBuilder:
    """Create an empty builder for the given table."""
    return QueryBuilder(table)
