"""Pytest fixtures and fakes shared across the test suite."""

import asyncio
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("REFRESH_INTERVAL_MINUTES", "0")
os.environ.setdefault("REDIS_URL", "")

import pytest

from ludoteca.errors import PageFetchError
from ludoteca.schemas.game import GameRecord, Identity

CATAN_HTML = """
<html>
  <head><title>Catan | Ludopedia</title></head>
  <body>
    <h1>Catan</h1>
    <p>3 a 4 jogadores, 10+, 60 min, nota média: 7,8, rank BG: 15</p>
  </body>
</html>
"""


class FakeStore:
    """In-memory document store with hooks for failures and in-flight requests."""

    def __init__(self, docs=None):
        self.docs = {doc["id"]: dict(doc) for doc in (docs or [])}
        self.updates = []
        self.created = []
        self.list_error = None
        self.update_error = None
        self.create_error = None
        self.gate = None
        self.list_gate = None

    async def list(self, collection, order_by):
        if self.list_error:
            raise self.list_error
        snapshot = sorted((dict(doc) for doc in self.docs.values()), key=lambda d: d.get(order_by) or "")
        if self.list_gate is not None:
            await self.list_gate.wait()
        return snapshot

    async def update(self, collection, doc_id, fields):
        self.updates.append((collection, doc_id, dict(fields)))
        if self.gate is not None:
            await self.gate.wait()
        if self.update_error:
            raise self.update_error
        self.docs[doc_id].update(fields)

    async def create(self, collection, fields):
        if self.create_error:
            raise self.create_error
        doc_id = f"new-{len(self.created) + 1}"
        self.created.append((collection, dict(fields)))
        self.docs[doc_id] = {"id": doc_id, **fields}
        return doc_id


class FakeFetcher:
    def __init__(self, html=CATAN_HTML, error=None):
        self.html = html
        self.error = error
        self.calls = []

    async def fetch(self, url):
        self.calls.append(url)
        if self.error:
            raise self.error
        return self.html


def make_game(game_id, **fields):
    return GameRecord(id=game_id, **fields)


@pytest.fixture
def alice():
    return Identity(id="alice@example.com", display_name="Alice")


@pytest.fixture
def bob():
    return Identity(id="bob@example.com", display_name="Bob")


@pytest.fixture
def docs():
    return [
        {"id": "g1", "name": "Catan", "playersMin": "3", "playersMax": "4", "time": "60",
         "age": "10", "complexity": "Médio", "rating": "7,8", "rank": "150"},
        {"id": "g2", "name": "Dixit", "playersMin": "3", "playersMax": "8", "time": "30",
         "age": "8", "complexity": "Leve", "party": "Sim", "rating": "8.5",
         "borrowedBy": "bob@example.com", "borrowedByName": "Bob"},
        {"id": "g3", "name": "Pandemic", "playersMin": "2", "playersMax": "4", "time": "45",
         "age": "8", "complexity": "Médio", "coop": "Sim",
         "borrowedBy": "alice@example.com", "borrowedByName": "Alice"},
    ]


@pytest.fixture
def store(docs):
    return FakeStore(docs)


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def failing_fetcher():
    return FakeFetcher(error=PageFetchError("Não foi possível acessar a página"))


@pytest.fixture
async def session(alice, store, fetcher):
    from ludoteca.library.session import LibrarySession

    library = LibrarySession(alice, store, fetcher=fetcher, toast_seconds=0.05)
    await library.load()
    yield library
    library.close()
    await asyncio.sleep(0)
