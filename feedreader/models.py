""" Database models: feeds and their articles """

from datetime import datetime, timezone

import sqlalchemy as sa
import sqlalchemy.orm


Base = sa.orm.declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Feed(Base):
    """ An RSS/Atom feed the user has subscribed to """
    __tablename__ = 'feeds'

    id = sa.Column(sa.Integer, primary_key=True)
    name = sa.Column(sa.String, nullable=False)
    site_url = sa.Column(sa.String, nullable=False)
    feed_url = sa.Column(sa.String, nullable=False, unique=True)
    date_added = sa.Column(sa.DateTime(timezone=True), nullable=False, default=utcnow)

    # NULL until the feed is refreshed for the first time
    last_updated = sa.Column(sa.DateTime(timezone=True), nullable=True)

    articles = sa.orm.relationship('Article', back_populates='feed', passive_deletes=True)


class Article(Base):
    """ An article from a feed

    Articles are never edited in place: a feed refresh only adds new ones.
    The only mutable bits are the user's read/favorite marks.
    """
    __tablename__ = 'articles'
    __table_args__ = (
        # Keyset pagination walks this index: (published, id)
        sa.Index('ix_articles_published_id', 'published', 'id'),
    )

    id = sa.Column(sa.Integer, primary_key=True)
    feed_id = sa.Column(sa.ForeignKey(Feed.id, ondelete='CASCADE'), nullable=False, index=True)
    title = sa.Column(sa.String, nullable=False, default='')
    link = sa.Column(sa.String, nullable=False, unique=True)
    author = sa.Column(sa.String, nullable=False, default='')
    published = sa.Column(sa.DateTime(timezone=True), nullable=False)

    read = sa.Column(sa.Boolean, nullable=False, default=False)
    favorited = sa.Column(sa.Boolean, nullable=False, default=False)
    read_date = sa.Column(sa.DateTime(timezone=True), nullable=True)

    feed = sa.orm.relationship(Feed, back_populates='articles')
