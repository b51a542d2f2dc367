#!/usr/bin/env python3
"""
Response interpreter for MMC REST calls.

Every remote call goes through process_response() exactly once. Status codes
other than 200/201 are classified into a fixed set of ErrorKind values.
"""

import json
from enum import Enum

from .errors import MmcError, MmcResponseError

SUCCESS_CODES = (200, 201)


class ErrorKind(Enum):
    NOT_FOUND = (404, "The resource was not found.")
    CONFLICT = (409, "The operation was unsuccessful because a resource with that name already exists.")
    SERVER_ERROR = (500, "The operation was unsuccessful.")
    UNEXPECTED_STATUS = (None, None)

    def __init__(self, status_code, message):
        self.status_code = status_code
        self.message = message

    @classmethod
    def for_status(cls, status_code):
        for kind in cls:
            if kind.status_code == status_code:
                return kind
        return cls.UNEXPECTED_STATUS

    def describe(self, status_code, body=None):
        if self.message:
            return self.message
        return f'Unexpected MMC returned status code "{status_code}". Response was "{body}".'


def process_response(status_code, body, url=None):
    """Return the body for 200/201, raise MmcResponseError otherwise."""
    if status_code in SUCCESS_CODES:
        return body
    raise MmcResponseError(ErrorKind.for_status(status_code), status_code, body, url)


def parse_json(body):
    """Parse a response body into a dict; an empty body parses to {}."""
    if not body:
        return {}
    try:
        payload = json.loads(body)
    except ValueError as e:
        raise MmcError(f"MMC returned a body that is not JSON: {body[:200]!r}") from e
    if not isinstance(payload, dict):
        raise MmcError(f"MMC returned a JSON {type(payload).__name__} that is not an object: {body[:200]!r}")
    return payload


def call(request, *paths, **kwargs):
    """
    Issue one transport call and interpret its response.

    Args:
        request: Bound MmcClient method (client.get, client.post, ...)
        *paths: Path segments under the MMC endpoint
        **kwargs: Passed through to the transport call

    Returns:
        Parsed JSON payload (dict)
    """
    status_code, body = request(*paths, **kwargs)
    return parse_json(process_response(status_code, body, '/'.join(paths)))


def list_data(request, *paths):
    """GET a listing and return its 'data' records."""
    records = call(request, *paths).get('data') or []
    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise MmcError(f"MMC listing '{'/'.join(paths)}' has no list of records under 'data'")
    return records


def find_by_name(records, name):
    """First record whose 'name' equals name exactly, in listing order."""
    return next((record for record in records if record.get('name') == name), None)
