"""
Shared fakes for MMC deployment tests.

FakeMmcClient stands in for MmcClient: it answers (method, path) pairs from a
route table and records every call in order. FakeClock drives the poller
without real sleeping.
"""

import json

import pytest


class FakeMmcClient:
    """In-memory transport returning canned (status_code, body) pairs."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def respond(self, method, path, *responses):
        """
        Register responses for a route. Each response is (status_code, body);
        dict/list bodies are JSON-encoded. Responses are served in order and
        the last one repeats.
        """
        queue = []
        for status_code, body in responses:
            if isinstance(body, (dict, list)):
                body = json.dumps(body)
            queue.append((status_code, body))
        self.routes[(method, path)] = queue
        return self

    def _handle(self, method, paths, **kwargs):
        path = '/'.join(str(p) for p in paths)
        files = kwargs.get('files')
        if files:
            filename, handle = files['file'][0], files['file'][1]
            kwargs['uploaded'] = (filename, handle.read())
        self.calls.append((method, path, kwargs))

        queue = self.routes.get((method, path))
        if not queue:
            return 404, ''
        if len(queue) > 1:
            return queue.pop(0)
        return queue[0]

    def get(self, *paths):
        return self._handle('GET', paths)

    def post(self, *paths, json_body=None):
        return self._handle('POST', paths, json_body=json_body)

    def post_multipart(self, *paths, data=None, files=None):
        return self._handle('POST', paths, data=data, files=files)

    def delete(self, *paths):
        return self._handle('DELETE', paths)

    def requests_made(self):
        """[(method, path), ...] in call order."""
        return [(method, path) for method, path, _ in self.calls]

    def count(self, method, path):
        return self.requests_made().count((method, path))


class FakeClock:
    """Monotonic clock that only advances when sleep() is called."""

    def __init__(self, start=0.0):
        self.now = start
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def mmc():
    return FakeMmcClient()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def app_zip(tmp_path):
    """A small packaged application on disk."""
    path = tmp_path / "orders-app.zip"
    path.write_bytes(b"PK\x03\x04 fake mule application")
    return path


def listing(*records):
    """Wrap records the way MMC listings do: {"data": [...]}."""
    return {'data': list(records)}
