__version__ = __import__('importlib.metadata').metadata.version('feedreader')

from .models import Feed, Article
from .settings import PagerSettings, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from .pager import Paginator, Scope, ArticleFilter, Direction, OrderingKey, Page, PageLinks

from . import exc
from . import storage
