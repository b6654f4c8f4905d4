import sqlalchemy as sa

from feedreader.typing import SAConnectable
from .stmt_text import _insert_query_params


class QueryCounter:
    """ Count the queries made through a connection, and remember their SQL

    Example:
        with QueryCounter(connection) as counter:
            paginator.fetch_page(connection, scope)
        assert counter.n == 1

        # Or let it check the count
        with QueryCounter(connection, expected=1):
            paginator.fetch_page(connection, scope)
    """

    def __init__(self, bind: SAConnectable, expected: int = None):
        self.engine = bind.engine
        self.expected = expected
        self.statements: list[str] = []

    @property
    def n(self) -> int:
        return len(self.statements)

    def _after_cursor_execute(self, conn, cursor, statement, parameters, context, executemany):
        self.statements.append(_format_statement(statement, parameters))

    def __enter__(self):
        sa.event.listen(self.engine, 'after_cursor_execute', self._after_cursor_execute)
        return self

    def __exit__(self, *exc):
        sa.event.remove(self.engine, 'after_cursor_execute', self._after_cursor_execute)

        # Don't hide the error with our own
        if exc == (None, None, None) and self.expected is not None and self.n != self.expected:
            queries = '\n'.join(self.statements)
            raise AssertionError(f'Expected {self.expected} queries, got {self.n}:\n{queries}')
        return False


def _format_statement(statement: str, parameters) -> str:
    """ Insert parameters into a raw DBAPI statement, when the paramstyle allows it """
    try:
        return _insert_query_params(statement, parameters)
    except (TypeError, ValueError, KeyError):
        # "qmark" paramstyle (e.g. SQLite) can't be formatted with `%`
        return f'{statement} -- {parameters!r}'
