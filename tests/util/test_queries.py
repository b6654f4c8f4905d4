from datetime import datetime, timedelta
from typing import Union, Optional

import sqlalchemy as sa

from feedreader import Paginator, Scope, Page
from feedreader.pager import CursorData, Direction
from feedreader.testing import stmt2sql


def T(n: int) -> datetime:
    """ Make a timestamp: day `n` since the epoch of our tests """
    return datetime(2020, 1, 1) + timedelta(days=n)


def ids(page: Page) -> list[int]:
    """ Convert a page of article rows to ids """
    return [row['id'] for row in page.items]


def decode_key(cursor: Optional[str]) -> Optional[tuple[datetime, int]]:
    """ Decode a cursor into its (published, id) key. Timezone is dropped to compare with naive test timestamps """
    if cursor is None:
        return None
    key = CursorData.decode(cursor).key
    return key.published.replace(tzinfo=None), key.id


def typical_test_sql_query_text(scope: Scope, cursor: Optional[str], direction: Optional[Direction], limit: Optional[int], expected_query_lines: list[str]):
    """ Typical test helper: make a statement, check SQL """
    stmt = Paginator().statement(scope, cursor, direction, limit)
    assert assert_statement_lines(stmt, *expected_query_lines)


def assert_statement_lines(stmt: Union[str, sa.sql.ClauseElement], *expected_lines: str, dialect: sa.engine.interfaces.Dialect = None):
    """ Find the provided lines inside a statement or fail """
    # Query?
    if isinstance(stmt, sa.sql.ClauseElement):
        stmt = stmt2sql(stmt, dialect)

    # Test
    for line in expected_lines:
        assert line.strip() in stmt, f'{line!r} not found in {stmt!r}'

    # Done
    return stmt


def assert_statement_lines_missing(stmt: Union[str, sa.sql.ClauseElement], *unexpected_lines: str):
    """ Make sure that none of the provided lines is inside a statement """
    if isinstance(stmt, sa.sql.ClauseElement):
        stmt = stmt2sql(stmt)

    for line in unexpected_lines:
        assert line.strip() not in stmt, f'{line!r} unexpectedly found in {stmt!r}'
