""" Cursor-based pagination

Every page comes with a pair of "cursors": links to the prev and next pages that just work.
Cursors use keyset pagination over (published, id), which stays stable while new articles keep coming in.
"""

from .scope import Scope, ArticleFilter, FeedList
from .cursor import CursorData, Direction, OrderingKey
from .page import Page, PageLinks
from .paginator import Paginator
