""" Storage: feeds and articles in the database

This is where the feed-fetch process puts articles, and where the user's read/favorite marks go.
Every function takes a Connection and runs within the caller's transaction: commit it yourself.
(list_feeds() also accepts an Engine, just like the Paginator does.)
"""

from __future__ import annotations

import logging
from collections import abc
from contextlib import contextmanager
from datetime import datetime
from typing import Optional, Union

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql, sqlite

from feedreader import exc
from feedreader.models import Base, Feed, Article, utcnow
from feedreader.typing import SARowDict, SAConnectable
from feedreader.pager import Paginator, Page, Direction, FeedList


logger = logging.getLogger(__name__)


def create_tables(bind: SAConnectable):
    """ CREATE the feeds & articles tables, if they don't exist """
    Base.metadata.create_all(bind=bind)


# region: Feeds

def add_feed(connection: sa.engine.Connection, name: str, site_url: str, feed_url: str) -> SARowDict:
    """ Subscribe to a feed

    Raises:
        exc.StorageError: e.g. the feed is already there
    """
    stmt = sa.insert(Feed).values(
        name=name,
        site_url=site_url,
        feed_url=feed_url,
        date_added=utcnow(),
    )

    with _storage_errors('add feed'):
        res = connection.execute(stmt)

    return get_feed(connection, res.inserted_primary_key[0])


def get_feed(connection: sa.engine.Connection, feed_id: int) -> SARowDict:
    """ Load a feed by id

    Raises:
        exc.NotFoundError
    """
    return _get_one(connection, Feed, feed_id)


def delete_feed(connection: sa.engine.Connection, feed_id: int):
    """ Unsubscribe: delete the feed and its articles """
    with _storage_errors('delete feed'):
        # Explicitly, because SQLite won't cascade unless you've enabled foreign keys
        connection.execute(sa.delete(Article).where(Article.feed_id == feed_id))
        connection.execute(sa.delete(Feed).where(Feed.id == feed_id))


def touch_feed(connection: sa.engine.Connection, feed_id: int, timestamp: Optional[datetime] = None):
    """ Remember when the feed was last refreshed """
    stmt = (
        sa.update(Feed)
        .where(Feed.id == feed_id)
        .values(last_updated=timestamp or utcnow())
    )

    with _storage_errors('touch feed'):
        connection.execute(stmt)


def list_feeds(connectable: SAConnectable, cursor: Optional[str] = None, direction: Union[Direction, str] = None, limit: Optional[int] = None) -> Page:
    """ Load a page of subscribed feeds, newest subscription first

    Works just like the article Paginator, only ordered by `(date_added, id)`.
    Its cursors are only good for this list.

    Raises:
        exc.InvalidRequest, exc.InvalidCursor, exc.StorageError: see Paginator.fetch_page()
    """
    return _feeds_paginator.fetch_page(connectable, FeedList(), cursor, direction, limit)


_feeds_paginator = Paginator(Feed, timestamp='date_added')

# endregion


# region: Articles

def add_articles(connection: sa.engine.Connection, feed_id: int, articles: abc.Iterable[dict]) -> int:
    """ Store freshly fetched articles of a feed

    Articles that are already stored (same link) are skipped: refreshing a feed never duplicates anything.

    Example:
        add_articles(connection, feed['id'], [
            dict(title='Hello', link='https://example.com/hello', author='me', published=datetime(...)),
        ])

    Returns:
        The number of articles actually inserted
    """
    values = [
        dict(
            feed_id=feed_id,
            title=article.get('title') or '',
            link=article['link'],
            author=article.get('author') or '',
            published=article['published'],
            read=False,
            favorited=False,
            read_date=None,
        )
        for article in articles
    ]

    # Nothing to do
    if not values:
        return 0

    stmt = _insert_ignore_duplicates(connection, values)

    with _storage_errors('add articles'):
        res = connection.execute(stmt)

    logger.info('Feed #%s: stored %d new articles out of %d', feed_id, res.rowcount, len(values))
    return res.rowcount


def get_article(connection: sa.engine.Connection, article_id: int) -> SARowDict:
    """ Load an article by id

    Raises:
        exc.NotFoundError
    """
    return _get_one(connection, Article, article_id)


def toggle_article_read(connection: sa.engine.Connection, article_id: int) -> SARowDict:
    """ Mark the article as read, or unread again

    When marked as read, `read_date` is set to the current time; when unread, it's reset.
    """
    article = get_article(connection, article_id)
    read = not article['read']

    stmt = (
        sa.update(Article)
        .where(Article.id == article_id)
        .values(read=read, read_date=utcnow() if read else None)
    )

    with _storage_errors('mark article read'):
        connection.execute(stmt)

    return get_article(connection, article_id)


def toggle_article_favorite(connection: sa.engine.Connection, article_id: int) -> SARowDict:
    """ Add the article to favorites, or remove it """
    article = get_article(connection, article_id)

    stmt = (
        sa.update(Article)
        .where(Article.id == article_id)
        .values(favorited=not article['favorited'])
    )

    with _storage_errors('mark article favorite'):
        connection.execute(stmt)

    return get_article(connection, article_id)

# endregion


def _get_one(connection: sa.engine.Connection, Model: type, id: int) -> SARowDict:
    """ Load one row by primary key, or fail """
    stmt = sa.select(Model.__table__).where(Model.id == id)

    with _storage_errors(f'load {Model.__name__}'):
        row = connection.execute(stmt).mappings().first()

    if row is None:
        raise exc.NotFoundError(Model.__name__, id)
    return dict(row)


def _insert_ignore_duplicates(connection: sa.engine.Connection, values: list[dict]) -> sa.sql.Insert:
    """ INSERT articles ... ON CONFLICT (link) DO NOTHING """
    # (tag:postgres-only) and SQLite: both support ON CONFLICT
    dialect_name = connection.dialect.name
    if dialect_name == 'postgresql':
        insert = postgresql.insert
    elif dialect_name == 'sqlite':
        insert = sqlite.insert
    else:
        raise NotImplementedError(f'Inserting articles is not supported for {dialect_name!r}')

    return insert(Article).values(values).on_conflict_do_nothing(index_elements=['link'])


@contextmanager
def _storage_errors(action: str):
    """ Convert SqlAlchemy errors into StorageError """
    try:
        yield
    except sa.exc.SQLAlchemyError as e:
        raise exc.StorageError(f'Failed to {action}: {e}') from e
