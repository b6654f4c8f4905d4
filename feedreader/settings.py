from __future__ import annotations

import dataclasses
from typing import Optional


# Page size you get when you don't ask for one
DEFAULT_PAGE_SIZE = 20

# Page size you can never go beyond
MAX_PAGE_SIZE = 100


@dataclasses.dataclass
class PagerSettings:
    """ Settings for the Paginator

    Defines how many articles a page holds by default, and how many it may hold at most.
    """
    # The `limit` you get by default, if not specified
    default_page_size: int = DEFAULT_PAGE_SIZE

    # The max number of items per page. Larger requests are rejected, not clamped.
    max_page_size: int = MAX_PAGE_SIZE

    def __post_init__(self):
        assert self.max_page_size > 0, 'max_page_size must be positive'
        assert 0 < self.default_page_size <= self.max_page_size, 'default_page_size must be within (0, max_page_size]'

    def get_final_limit(self, limit: Optional[int]) -> int:
        """ Apply the default page size if none was requested

        Note that the value is not validated here: the Paginator does it.
        """
        if limit is None:
            return self.default_page_size
        return limit
