from __future__ import annotations

import base64
import json


def encode_opaque_cursor(prefix: str, data: dict) -> str:
    """ Encode a dict of data as an opaque cursor. Give it a nice prefix so that the user sees what's up

    The result only contains URL-safe characters: it can go into a query string as is.
    """
    encoded = base64.urlsafe_b64encode(json.dumps(data, separators=(',', ':')).encode()).decode()
    return prefix + ':' + encoded.rstrip('=')


def decode_opaque_cursor(data: str) -> tuple[str, dict]:
    """ Decode an opaque cursor into a (prefix, data dict) tuple

    Raises:
        ValueError: all sorts of errors related to bad cursor
    """
    prefix, data_encoded = data.split(':', 1)  # ValueError
    padding = '=' * (-len(data_encoded) % 4)
    decoded = json.loads(base64.urlsafe_b64decode(data_encoded + padding))  # binascii.Error, json.JSONDecodeError: ValueError
    if not isinstance(decoded, dict):
        raise ValueError('Cursor payload must be an object')
    return prefix, decoded
