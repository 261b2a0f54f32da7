"""Shared fixtures: a fake backend behind a requests-like session."""

import json
import sys
from datetime import datetime
from pathlib import Path

import pytest

# repo root holds main.py and config.py
sys.path.insert(0, str(Path(__file__).parent.parent))

from arudeal.api.client import ApiClient
from arudeal.api.token_store import TokenStore
from arudeal.notifications.notification_manager import NotificationManager
from arudeal.schema.listing import ListingSource, Option, SearchDocument


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload
        self.content = b"" if payload is None else json.dumps(payload).encode()

    def json(self):
        if self._payload is None:
            raise ValueError("no body")
        return self._payload


class FakeSession:
    """
    Stands in for requests.Session.

    Routes are keyed by (METHOD, path); a value is a payload, a
    FakeResponse, an exception to raise, or a callable(call) returning
    one of those. Unrouted requests get a 404.
    """

    def __init__(self, base_url="http://backend.test"):
        self.base_url = base_url
        self.routes = {}
        self.calls = []

    def route(self, method, path, response):
        self.routes[(method.upper(), path)] = response

    def request(self, method, url, headers=None, params=None, json=None, data=None, files=None, timeout=None):
        path = url[len(self.base_url):] if url.startswith(self.base_url) else url
        call = {
            "method": method,
            "path": path,
            "headers": headers or {},
            "params": params,
            "json": json,
            "data": data,
            "files": files,
            "timeout": timeout,
        }
        self.calls.append(call)

        response = self.routes.get((method.upper(), path))
        if callable(response) and not isinstance(response, FakeResponse):
            response = response(call)
        if isinstance(response, Exception):
            raise response
        if response is None:
            return FakeResponse(404, {"detail": "Not Found"})
        if isinstance(response, FakeResponse):
            return response
        return FakeResponse(200, response)

    def calls_to(self, method, path):
        return [c for c in self.calls if c["method"] == method and c["path"] == path]


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def token_store():
    store = TokenStore()
    store.set("access_token", "test-token")
    return store


@pytest.fixture
def client(session, token_store):
    return ApiClient(
        session.base_url,
        token_store=token_store,
        media_url="http://media.test",
        session=session,
    )


@pytest.fixture
def notifier():
    return NotificationManager()


def make_doc(id, title, make, model, year, price=None, listed_at=None, **kwargs):
    return SearchDocument(
        id=id,
        title=title,
        make=Option(name=make),
        model=model,
        year=year,
        price=price,
        listed_at=listed_at,
        slug=id,
        source=kwargs.pop("source", ListingSource.INVENTORY),
        **kwargs,
    )


@pytest.fixture
def camry_docs():
    return [
        make_doc("1", "2020 Toyota Camry", "Toyota", "Camry", 2020, price=18000,
                 listed_at=datetime(2024, 3, 1), color="White",
                 fuel_type=Option(name="Gasoline"), body_type=Option(name="Sedan")),
        make_doc("2", "2018 Honda Civic", "Honda", "Civic", 2018, price=12000,
                 listed_at=datetime(2024, 1, 15), color="Blue",
                 fuel_type=Option(name="Gasoline"), body_type=Option(name="Sedan")),
        make_doc("3", "2021 Nissan Patrol", "Nissan", "Patrol", 2021, price=45000,
                 listed_at=datetime(2024, 2, 10), color="Black", seats=7,
                 fuel_type=Option(name="Diesel"), body_type=Option(name="SUV")),
    ]
