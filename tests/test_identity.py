import pytest

from ludoteca.errors import AuthenticationError
from ludoteca.library.registry import SessionRegistry
from ludoteca.services.identity import IdentityProvider
from ludoteca.services.identity_cache import InMemoryIdentityCache, build_identity_cache

from tests.conftest import FakeFetcher

HEADERS = {
    "X-Auth-Request-Email": "ana@example.com",
    "X-Auth-Request-User": "Ana",
    "X-Auth-Request-Picture": "https://example.com/ana.png",
}


@pytest.fixture
def cache():
    return InMemoryIdentityCache()


@pytest.fixture
def provider(cache):
    return IdentityProvider(cache=cache)


def test_identity_from_headers():
    identity = IdentityProvider.identity_from_headers(HEADERS)
    assert identity.id == "ana@example.com"
    assert identity.name == "Ana"
    assert identity.picture_url == "https://example.com/ana.png"


def test_name_falls_back_to_email():
    identity = IdentityProvider.identity_from_headers({"X-Auth-Request-Email": "ana@example.com"})
    assert identity.display_name is None
    assert identity.name == "ana@example.com"


def test_missing_email_header_is_rejected():
    with pytest.raises(AuthenticationError):
        IdentityProvider.identity_from_headers({"X-Auth-Request-User": "Ana"})


async def test_sign_in_and_out_are_announced(provider):
    events = []

    async def listener(token, identity):
        events.append((token, identity.id if identity else None))

    unsubscribe = provider.on_auth_state_change(listener)
    token, identity = await provider.sign_in(HEADERS)
    assert await provider.resolve(token) == identity

    await provider.sign_out(token)
    assert await provider.resolve(token) is None
    assert events == [(token, "ana@example.com"), (token, None)]

    unsubscribe()
    await provider.sign_in(HEADERS)
    assert len(events) == 2


async def test_cached_identity_expires(cache):
    await cache.set("tok", {"id": "ana@example.com"}, ttl_seconds=0)
    assert await cache.get("tok") is None


async def test_cache_without_redis_url_is_in_memory():
    assert isinstance(await build_identity_cache(""), InMemoryIdentityCache)


async def test_registry_follows_auth_state(provider, store):
    registry = SessionRegistry(provider, store, fetcher_factory=FakeFetcher)

    token, _ = await provider.sign_in(HEADERS)
    (session,) = registry.active()
    assert session.user.id == "ana@example.com"
    assert len(session.state.games) == 3
    assert await registry.get(token) is session

    await provider.sign_out(token)
    assert registry.active() == []
    assert session.state.user is None
    assert await registry.get(token) is None


async def test_registry_recreates_session_for_cached_identity(cache, store):
    token, _ = await IdentityProvider(cache=cache).sign_in(HEADERS)

    registry = SessionRegistry(IdentityProvider(cache=cache), store, fetcher_factory=FakeFetcher)
    session = await registry.get(token)

    assert session is not None
    assert session.user.name == "Ana"
    assert session.state.loading is False
    registry.close()
    assert registry.active() == []


async def test_registry_ignores_unknown_token(provider, store):
    registry = SessionRegistry(provider, store, fetcher_factory=FakeFetcher)
    assert await registry.get("nope") is None
    assert await registry.get(None) is None
