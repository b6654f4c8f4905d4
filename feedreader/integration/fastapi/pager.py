from typing import Optional, NamedTuple

import fastapi

from feedreader.pager import Direction, Page


class PageRequest(NamedTuple):
    """ Paging parameters, as given in the URL """
    cursor: Optional[str]
    direction: Optional[Direction]
    limit: Optional[int]


def page_request(*,
        cursor: Optional[str] = fastapi.Query(
            None,
            title='Pagination. Opaque cursor from the `next` or `prev` field of a previous page.',
        ),
        direction: Optional[str] = fastapi.Query(
            None,
            title='Pagination direction: `forward` (older articles) or `backward` (newer articles).',
            description='Default: the direction the cursor points to.',
        ),
        limit: Optional[int] = fastapi.Query(
            None,
            title='Pagination. The number of items to include.',
        ),
) -> PageRequest:
    """ Get paging parameters from the request

    Example:
        /api/articles?cursor=keys:eyJ...&limit=20

    Raises:
        exc.InvalidRequest
    """
    return PageRequest(
        cursor=cursor or None,
        direction=Direction.from_string(direction) if direction else None,
        limit=limit,
    )


def page_response(page: Page) -> dict:
    """ Convert a Page into a JSON-ready dict """
    return {
        'items': page.items,
        'has_next': page.has_next,
        'has_previous': page.has_previous,
        'next': page.next,
        'prev': page.prev,
    }
