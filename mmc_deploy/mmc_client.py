#!/usr/bin/env python3
"""
MMC Client - thin HTTP transport for the Mule Management Console REST API.
Returns raw (status_code, body) pairs; interpretation lives in responses.py.
"""

import requests

from .errors import MmcTransportError

DEFAULT_REQUEST_TIMEOUT = 30


class MmcClient:
    """
    Issues GET/POST/DELETE requests under the MMC API endpoint with basic auth.

    A new session is opened for every call and closed before the call returns,
    whatever the outcome.
    """

    def __init__(self, mmc_url, username, password, request_timeout=DEFAULT_REQUEST_TIMEOUT):
        self.mmc_url = str(mmc_url).rstrip('/')
        self.username = username
        self.password = password
        self.request_timeout = request_timeout
        print(f"MMC URL: {self.mmc_url}, Username: {username}")

    def url_for(self, *paths):
        """Build the URL for path segments, e.g. ('deployments', id, 'deploy')."""
        return '/'.join([self.mmc_url] + [str(p).strip('/') for p in paths])

    def request(self, method, *paths, **kwargs):
        url = self.url_for(*paths)
        try:
            with requests.Session() as session:
                session.auth = (self.username, self.password)
                response = session.request(method, url, timeout=self.request_timeout, **kwargs)
                return response.status_code, response.text
        except requests.exceptions.RequestException as e:
            raise MmcTransportError(method, url, e) from e

    def get(self, *paths):
        return self.request('GET', *paths)

    def post(self, *paths, json_body=None):
        if json_body is None:
            return self.request('POST', *paths)
        return self.request('POST', *paths, json=json_body)

    def post_multipart(self, *paths, data=None, files=None):
        """POST multipart/form-data; requests builds the boundary and parts."""
        return self.request('POST', *paths, data=data, files=files)

    def delete(self, *paths):
        return self.request('DELETE', *paths)
