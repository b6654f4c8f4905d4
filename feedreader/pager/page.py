from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, NamedTuple

from feedreader.typing import SARowDict


class PageLinks(NamedTuple):
    """ Links to the prev/next pages """
    # Link to the previous page (newer articles), if the page is not empty
    prev: Optional[str]

    # Link to the next page (older articles), if the page is not empty
    next: Optional[str]


@dataclass
class Page:
    """ A window of articles, newest first, plus cursors to get to the adjacent windows """
    # Article rows. Never more than the requested limit
    items: list[SARowDict] = field(default_factory=list)

    # Do we have any older articles beyond this page?
    # Going backward, this is simply `True`: the cursor came from there. Those articles may have been deleted since.
    has_next: bool = False

    # Do we have any newer articles before this page?
    # Going forward from a cursor, this is simply `True`, and may be stale the same way:
    # e.g. if the newest article was the boundary and got deleted, following `prev` gives an empty page.
    has_previous: bool = False

    # Cursor that continues with older articles: made from the last item
    next: Optional[str] = None

    # Cursor that continues with newer articles: made from the first item
    prev: Optional[str] = None

    @property
    def links(self) -> PageLinks:
        return PageLinks(prev=self.prev, next=self.next)
