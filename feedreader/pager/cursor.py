""" Keyset cursors: (published, id) boundaries encoded as opaque strings """

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import NamedTuple, Union

from feedreader import exc
from feedreader.typing import SARowDict

from .encode import encode_opaque_cursor, decode_opaque_cursor


class Direction(Enum):
    """ Pagination direction

    Pages are always presented newest first, so "forward" goes into the past, and "backward" comes back to newer articles.
    """
    FORWARD = 'forward'
    BACKWARD = 'backward'

    @classmethod
    def from_string(cls, value: Union[str, Direction]) -> Direction:
        try:
            return cls(value)
        except ValueError as e:
            raise exc.InvalidRequest(f'unknown direction: {value!r}') from e


class OrderingKey(NamedTuple):
    """ The total order of articles: by publication time, ties broken by the identifier

    Being a tuple, it compares just like the SQL row value `(published, id)` does.
    """
    published: datetime
    id: int

    @classmethod
    def from_row(cls, row: SARowDict, timestamp: str = 'published') -> OrderingKey:
        """ Get the key of a row. `timestamp`: the name of the column that plays the "published" part """
        return cls(row[timestamp], row['id'])


class CursorData(NamedTuple):
    """ Cursor data for the "keyset" cursor """
    # Cursor type prefix
    name = 'keys'

    # Key of the scope this cursor was issued for.
    # Is only used to check that the user isn't feeding a cursor into a different listing
    scope: str

    # Which way to go from the boundary
    direction: Direction

    # The boundary: the ordering key of the article at the edge of the page
    key: OrderingKey

    def serialize(self) -> dict:
        return {
            'scope': self.scope,
            'dir': self.direction.value,
            'ts': self.key.published.isoformat(),
            'id': self.key.id,
        }

    @classmethod
    def deserialize(cls, data: dict) -> CursorData:
        """ Build the cursor from its dict

        Raises:
            KeyError, TypeError, ValueError: all sorts of errors related to bad data
        """
        id = data['id']
        if not isinstance(id, int) or isinstance(id, bool):
            raise TypeError(f'Cursor "id" must be an integer, got {id!r}')

        return cls(
            scope=str(data['scope']),
            direction=Direction(data['dir']),
            key=OrderingKey(datetime.fromisoformat(data['ts']), id),
        )

    def encode(self) -> str:
        return encode_opaque_cursor(self.name, self.serialize())

    @classmethod
    def decode(cls, cursor: str) -> CursorData:
        """ Decode a cursor string

        Raises:
            exc.InvalidCursor: the cursor is malformed
        """
        try:
            prefix, data = decode_opaque_cursor(cursor)
            if prefix != cls.name:
                raise ValueError(f'Unsupported cursor type: {prefix!r}')
            return cls.deserialize(data)
        except (KeyError, TypeError, ValueError) as e:
            raise exc.InvalidCursor('failed to decode') from e
