from ludoteca.errors import StoreError, StoreErrorKind
from ludoteca.library.registry import SessionRegistry
from ludoteca.services.identity import IdentityProvider
from ludoteca.services.identity_cache import InMemoryIdentityCache
from ludoteca.tasks.library_refresh import refresh_sessions, setup_refresh_scheduler

from tests.conftest import FakeFetcher


async def test_refresh_picks_up_changes_made_elsewhere(store):
    provider = IdentityProvider(cache=InMemoryIdentityCache())
    registry = SessionRegistry(provider, store, fetcher_factory=FakeFetcher)
    await provider.sign_in({"X-Auth-Request-Email": "ana@example.com"})
    (session,) = registry.active()

    store.docs["g1"]["borrowedBy"] = "bob@example.com"
    result = await refresh_sessions(registry)

    assert result == {"status": "done", "sessions": 1, "failed": 0}
    assert session.state.find("g1").borrowed_by == "bob@example.com"

    store.list_error = StoreError(StoreErrorKind.PERMISSION_DENIED)
    result = await refresh_sessions(registry)
    assert result["failed"] == 1
    assert session.state.no_access is True


def test_scheduler_disabled_when_interval_is_zero(store):
    registry = SessionRegistry(IdentityProvider(cache=InMemoryIdentityCache()), store)
    assert setup_refresh_scheduler(registry) is None
