"""
=====================================
Query execution for built statements.
=====================================

Pairs a QueryBuilder with a DbConnection. Each operation renders one
statement and forwards it to the connection; there is no other logic.

Operations:
- find_all: SELECT, every row
- find_one: SELECT, exactly one row
- count: SELECT, first column of the first row as int
- insert: INSERT, returns the last insert id
- update / delete: UPDATE / DELETE, return rows affected

count() renders the same SELECT as find_all(), so set the field list
yourself, e.g. builder.select_fields('count(*)').

Example:
    >>> qb = create_query_builder('users').where('status', '=', 'active')
    >>> executor = registry.create_query_executor(qb)
    >>> rows = executor.find_all()
    >>> total = QueryExecutor(
    ...     create_query_builder('users').select_fields('count(*)'), conn
    ... ).count()
"""

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple

from sql.query_builder import QueryBuilder
from sql.values import BindParamRenderer, LiteralRenderer, ValueRenderer

if TYPE_CHECKING:
    from utils.database_utils import DbConnection

logger = logging.getLogger(__name__)

RowFactory = Callable[..., Any]


class QueryExecutor:
    """
    Renders a builder's statements and runs them on a connection.

    Attributes:
        builder: Statement source
        connection: DbConnection the statements run on
        parameterized: If True, values are sent as bound parameters
            instead of inline literals
    """

    def __init__(self, builder: QueryBuilder, connection: "DbConnection", parameterized: bool = False):
        self.builder = builder
        self.connection = connection
        self.parameterized = parameterized

    def _renderer(self) -> ValueRenderer:
        return BindParamRenderer() if self.parameterized else LiteralRenderer()

    def _render(self, method: Callable[[ValueRenderer], str]) -> Tuple[str, Optional[Dict[str, Any]]]:
        renderer = self._renderer()
        statement = method(renderer)
        params = renderer.params if isinstance(renderer, BindParamRenderer) else None
        logger.debug(f"[{self.connection.name}] {statement}")
        return statement, params

    def find_all(self, row_factory: Optional[RowFactory] = None) -> List[Any]:
        """
        Fetch every row of the SELECT statement.

        Args:
            row_factory: Optional callable invoked as row_factory(**row)

        Returns:
            List of dicts, or of row_factory results
        """
        statement, params = self._render(self.builder.to_select_sql)
        rows = self.connection.query(statement, params)
        if row_factory is None:
            return rows
        return [row_factory(**row) for row in rows]

    def find_one(self, row_factory: Optional[RowFactory] = None) -> Any:
        """
        Fetch exactly one row of the SELECT statement.

        Raises:
            sqlalchemy.exc.NoResultFound: If no row matches
            sqlalchemy.exc.MultipleResultsFound: If more than one row matches
        """
        statement, params = self._render(self.builder.to_select_sql)
        row = self.connection.query_one(statement, params)
        return row if row_factory is None else row_factory(**row)

    def count(self) -> int:
        statement, params = self._render(self.builder.to_select_sql)
        return self.connection.query_int(statement, params)

    def insert(self) -> Optional[int]:
        """Run the INSERT statement and return the last insert id."""
        statement, params = self._render(self.builder.to_insert_sql)
        return self.connection.execute(statement, params).last_insert_id

    def update(self) -> int:
        """Run the UPDATE statement and return the number of rows affected."""
        statement, params = self._render(self.builder.to_update_sql)
        return self.connection.execute(statement, params).rows_affected

    def delete(self) -> int:
        """Run the DELETE statement and return the number of rows affected."""
        statement, params = self._render(self.builder.to_delete_sql)
        return self.connection.execute(statement, params).rows_affected
