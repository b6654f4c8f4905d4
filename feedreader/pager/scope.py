""" Scope: the subset of rows being paginated """

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

import sqlalchemy as sa

from feedreader import exc
from feedreader.typing import SAModelOrAlias


class ArticleFilter(Enum):
    """ Article listings: what the user sees on the "unread", "favorites" and "history" pages """
    UNREAD = 'unread'
    FAVORITE = 'favorite'
    READ = 'read'

    @classmethod
    def from_string(cls, value: str) -> ArticleFilter:
        try:
            return cls(value)
        except ValueError as e:
            raise exc.InvalidRequest(f'bad article filter: {value!r}') from e

    def where_clause(self, Model: SAModelOrAlias) -> sa.sql.ColumnElement:
        """ Get the WHERE condition that selects articles in this listing """
        if self is ArticleFilter.UNREAD:
            return Model.read.is_(False)
        elif self is ArticleFilter.FAVORITE:
            return Model.favorited.is_(True)
        elif self is ArticleFilter.READ:
            return Model.read.is_(True)
        else:
            raise NotImplementedError(self)


@dataclass(frozen=True)
class Scope:
    """ Which articles to paginate

    Example:
        Scope()                                     # all articles of all feeds
        Scope(feed_id=3)                            # one feed
        Scope(filter=ArticleFilter.UNREAD)          # unread articles of all feeds
    """
    # Paginate articles of this feed. `None`: all feeds
    feed_id: Optional[int] = None

    # Only articles from this listing. `None`: every article
    filter: Optional[ArticleFilter] = None

    @classmethod
    def all_feeds(cls, filter: ArticleFilter = None) -> Scope:
        return cls(feed_id=None, filter=filter)

    @classmethod
    def for_feed(cls, feed_id: int, filter: ArticleFilter = None) -> Scope:
        return cls(feed_id=feed_id, filter=filter)

    @property
    def key(self) -> str:
        """ A stable string that identifies this scope

        Cursors carry it around to make sure they're not used with a different scope.

        Example:
            'all', 'feed=3', 'filter=unread', 'feed=3&filter=unread'
        """
        parts = []
        if self.feed_id is not None:
            parts.append(f'feed={self.feed_id}')
        if self.filter is not None:
            parts.append(f'filter={self.filter.value}')
        return '&'.join(parts) or 'all'

    def where_clauses(self, Model: SAModelOrAlias) -> list[sa.sql.ColumnElement]:
        """ Get the WHERE conditions that select articles in this scope """
        conditions = []
        if self.feed_id is not None:
            conditions.append(Model.feed_id == self.feed_id)
        if self.filter is not None:
            conditions.append(self.filter.where_clause(Model))
        return conditions


@dataclass(frozen=True)
class FeedList:
    """ The list of subscribed feeds: all of them, newest subscription first """
    key = 'feeds'

    def where_clauses(self, Model: SAModelOrAlias) -> list[sa.sql.ColumnElement]:
        return []


# Anything the Paginator can paginate
AnyScope = Union[Scope, FeedList]
