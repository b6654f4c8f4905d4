""" Cursor Paginator: stable forward/backward pagination over articles

Pages are windows over the total order of articles: (published, id), newest first.
Instead of an offset, every page hands out cursors that remember the ordering key of its boundary article.
The next page is then "articles strictly older than the boundary", the previous page is "strictly newer":

    SELECT * FROM articles
    WHERE (published, id) < (:published, :id)
    ORDER BY published DESC, id DESC
    LIMIT :limit + 1

Offsets shift when new articles arrive; keys don't. Thus traversal never skips nor repeats an article,
and a cursor survives even the deletion of its boundary article: the range simply starts at its nearest neighbor.
"""

from __future__ import annotations

import logging
import operator
from contextlib import contextmanager
from typing import Optional, Union

import sqlalchemy as sa

from feedreader import exc
from feedreader.models import Article
from feedreader.settings import PagerSettings
from feedreader.typing import SAModel, SARowDict, SAConnectable

from .cursor import CursorData, Direction, OrderingKey
from .page import Page
from .scope import AnyScope


logger = logging.getLogger(__name__)


class Paginator:
    """ Paginator: loads pages of articles (or feeds)

    It holds no state between calls: a single instance can be shared by any number of threads.

    Example:
        paginator = Paginator()

        page = paginator.fetch_page(engine, Scope.for_feed(1), limit=10)
        page = paginator.fetch_page(engine, Scope.for_feed(1), page.next)  # older articles
        page = paginator.fetch_page(engine, Scope.for_feed(1), page.prev)  # newer articles
    """

    def __init__(self, Model: SAModel = Article, settings: PagerSettings = None, *, timestamp: str = 'published'):
        """ Prepare to paginate the provided model

        Args:
            Model: The Model class to query against. It needs an `id` column and a timestamp column.
            settings: Page size settings
            timestamp: Name of the timestamp column that orders rows, together with `id`.
                Articles use `published`; feeds are listed by `date_added`.
        """
        self.Model = Model
        self.settings = settings or PagerSettings()
        self.timestamp = timestamp

    __slots__ = 'Model', 'settings', 'timestamp'

    def fetch_page(self,
                   connectable: SAConnectable,
                   scope: AnyScope,
                   cursor: Optional[str] = None,
                   direction: Union[Direction, str] = None,
                   limit: Optional[int] = None) -> Page:
        """ Load one page of articles

        Args:
            connectable: Engine to borrow a connection from, or an open Connection to use
            scope: Which articles to paginate
            cursor: `None` for the first page; otherwise, a cursor from a previous page
            direction: Which way to go from the cursor. Default: the way the cursor points; forward for the first page
            limit: Page size. Default: `settings.default_page_size`

        Raises:
            exc.InvalidRequest: bad limit; backward request without a cursor
            exc.InvalidCursor: malformed cursor; the cursor belongs to another scope
            exc.StorageError: the database has failed
        """
        cursor_value, direction, limit = self._prepare(scope, cursor, direction, limit)
        stmt = self._statement(scope, cursor_value, direction, limit)

        # Load: exactly one query
        logger.debug('Fetching page: scope=%s direction=%s limit=%s boundary=%s',
                     scope.key, direction.value, limit, cursor_value and cursor_value.key)
        rows = self._fetchall(connectable, stmt)

        # Inspect
        return self._make_page(scope, cursor_value, direction, limit, rows)

    def statement(self,
                  scope: AnyScope,
                  cursor: Optional[str] = None,
                  direction: Union[Direction, str] = None,
                  limit: Optional[int] = None) -> sa.sql.Select:
        """ Get the SQL statement that fetch_page() would execute. For inspection. """
        cursor_value, direction, limit = self._prepare(scope, cursor, direction, limit)
        return self._statement(scope, cursor_value, direction, limit)

    def _prepare(self, scope: AnyScope, cursor: Optional[str], direction: Union[Direction, str, None], limit: Optional[int]) -> tuple[Optional[CursorData], Direction, int]:
        """ Validate the input; decode the cursor """
        # Limit
        limit = self.settings.get_final_limit(limit)
        if not isinstance(limit, int) or isinstance(limit, bool):
            raise exc.InvalidRequest(f'limit must be an integer, got {limit!r}')
        if limit <= 0:
            raise exc.InvalidRequest(f'limit must be positive, got {limit}')
        if limit > self.settings.max_page_size:
            raise exc.InvalidRequest(f'limit must not exceed {self.settings.max_page_size}, got {limit}')

        # Cursor
        cursor_value: Optional[CursorData]
        if cursor is None:
            cursor_value = None
        elif not isinstance(cursor, str):
            raise exc.InvalidCursor(f'must be a string, got {type(cursor).__name__}')
        else:
            cursor_value = CursorData.decode(cursor)

            # Make sure it's still the same scope
            if cursor_value.scope != scope.key:
                raise exc.InvalidCursor(f'issued for scope "{cursor_value.scope}", used with "{scope.key}"')

        # Direction: explicit, or from the cursor
        if direction is not None:
            direction = Direction.from_string(direction)
        elif cursor_value is not None:
            direction = cursor_value.direction
        else:
            direction = Direction.FORWARD

        if direction is Direction.BACKWARD and cursor_value is None:
            raise exc.InvalidRequest('cannot go backward without a cursor')

        return cursor_value, direction, limit

    def _statement(self, scope: AnyScope, cursor_value: Optional[CursorData], direction: Direction, limit: int) -> sa.sql.Select:
        """ Build the SELECT statement: scope, boundary, order, limit """
        Model = self.Model
        key_columns = (getattr(Model, self.timestamp), Model.id)

        stmt = sa.select(Model.__table__).where(*scope.where_clauses(Model))

        # Going forward, we look into the past: DESC.
        # Going backward, we load newer rows nearest to the boundary first: ASC. They'll be reversed later.
        if direction is Direction.FORWARD:
            op, order_by = operator.lt, [column.desc() for column in key_columns]
        else:
            op, order_by = operator.gt, [column.asc() for column in key_columns]

        # Boundary
        if cursor_value is not None:
            stmt = stmt.where(op(sa.tuple_(*key_columns), tuple(cursor_value.key)))

        # We will always load one more row to check if there's a page beyond this one
        return stmt.order_by(*order_by).limit(limit + 1)

    def _fetchall(self, connectable: SAConnectable, stmt: sa.sql.Select) -> list[SARowDict]:
        """ Execute the statement, get row dicts """
        try:
            with _borrow_connection(connectable) as connection:
                res: sa.engine.CursorResult = connection.execute(stmt)
                return [dict(row) for row in res.mappings()]
        except sa.exc.SQLAlchemyError as e:
            raise exc.StorageError(f'Failed to load a page: {e}') from e

    def _make_page(self, scope: AnyScope, cursor_value: Optional[CursorData], direction: Direction, limit: int, rows: list[SARowDict]) -> Page:
        """ Inspect the result set: trim the extra row, set the flags, generate cursors """
        # Have more rows in the direction we went?
        has_more = len(rows) > limit

        # We've loaded one extra row. Now remove it.
        if has_more:
            rows = rows[:limit]

        # If we have a cursor, its boundary article lies behind us
        has_behind = cursor_value is not None

        if direction is Direction.FORWARD:
            has_next, has_previous = has_more, has_behind
        else:
            # Presentation order is always newest first
            rows.reverse()
            has_next, has_previous = has_behind, has_more

        # No rows? No cursors
        if not rows:
            return Page(items=rows, has_next=has_next, has_previous=has_previous, next=None, prev=None)

        # Cursors: from the first and the last rows
        prev = CursorData(scope=scope.key, direction=Direction.BACKWARD, key=OrderingKey.from_row(rows[0], self.timestamp)).encode()
        next = CursorData(scope=scope.key, direction=Direction.FORWARD, key=OrderingKey.from_row(rows[-1], self.timestamp)).encode()

        return Page(items=rows, has_next=has_next, has_previous=has_previous, next=next, prev=prev)


@contextmanager
def _borrow_connection(connectable: SAConnectable):
    """ Get a connection: borrow one from the Engine's pool and give it back, or use the Connection as is """
    if isinstance(connectable, sa.engine.Engine):
        with connectable.connect() as connection:
            yield connection
    else:
        yield connectable
