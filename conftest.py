"""
Shared pytest fixtures.
"""
from unittest.mock import MagicMock, patch

import pytest
import requests
from django.core.cache import cache
from rest_framework.test import APIClient


@pytest.fixture(autouse=True)
def clear_cache():
    """Sessions live in the cache; clear it so page state never leaks between tests."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    """API client for making requests."""
    return APIClient()


def make_response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if payload is None:
        response.json.side_effect = ValueError('No JSON object could be decoded')
    else:
        response.json.return_value = payload
    return response


class FakeFarmApi:
    """
    Routes ``requests.request`` calls to canned responses.

    Register with ``fake.on('GET', '/egg-production', payload)``; unregistered
    routes fail as if the backend were unreachable.
    """

    def __init__(self, base_url='http://localhost:5000/api'):
        self.base_url = base_url
        self.routes = {}
        self.calls = []
        self.options = []

    def on(self, method, path, payload=None, status_code=200):
        self.routes[(method, path)] = make_response(status_code, payload)
        return self

    def fail(self, method, path, error=None):
        self.routes[(method, path)] = error or requests.exceptions.ConnectionError('Connection refused')
        return self

    def __call__(self, method, url, json=None, **kwargs):
        path = url[len(self.base_url):]
        self.calls.append((method, path, json))
        self.options.append(kwargs)
        route = self.routes.get((method, path))
        if route is None or isinstance(route, Exception):
            raise route or requests.exceptions.ConnectionError(f"No route for {method} {path}")
        return route


@pytest.fixture
def farm_api(settings):
    """Patch the HTTP layer of the Resource Client with a routable fake."""
    settings.FARM_API_BASE_URL = 'http://localhost:5000/api'
    fake = FakeFarmApi()
    with patch('core.api_client.requests.request', side_effect=fake):
        yield fake
