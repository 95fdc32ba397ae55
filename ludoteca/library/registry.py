# ludoteca/library/registry.py
from typing import Callable, Dict, List, Optional

from ludoteca.library.session import LibrarySession
from ludoteca.schemas.game import Identity
from ludoteca.scraper.page_fetch import PageFetcher
from ludoteca.services.identity import IdentityProvider
from ludoteca.services.store import DocumentStore
from ludoteca.utils.logging import log_info


class SessionRegistry:
    """
    Library sessions keyed by session token.

    A session is created (and its collection loaded) when the identity
    provider announces a sign-in and torn down when it announces a sign-out or
    the cached identity has expired.
    """

    def __init__(
        self,
        provider: IdentityProvider,
        store: DocumentStore,
        fetcher_factory: Callable[[], PageFetcher] = PageFetcher,
    ) -> None:
        self._provider = provider
        self._store = store
        self._fetcher_factory = fetcher_factory
        self._sessions: Dict[str, LibrarySession] = {}
        self._unsubscribe = provider.on_auth_state_change(self._on_auth_state_change)

    async def _on_auth_state_change(self, token: str, identity: Optional[Identity]) -> None:
        if identity is not None:
            await self._open(token, identity)
        else:
            self._drop(token)

    async def _open(self, token: str, identity: Identity) -> LibrarySession:
        self._drop(token)
        session = LibrarySession(identity, self._store, fetcher=self._fetcher_factory())
        self._sessions[token] = session
        log_info(f"👤 Session opened for {identity.id} ({len(self._sessions)} active)")
        await session.load()
        return session

    def _drop(self, token: str) -> None:
        session = self._sessions.pop(token, None)
        if session is not None:
            session.close()
            log_info(f"👋 Session closed for {session.user.id}")

    async def get(self, token: Optional[str]) -> Optional[LibrarySession]:
        if not token:
            return None
        identity = await self._provider.resolve(token)
        if identity is None:
            self._drop(token)
            return None

        session = self._sessions.get(token)
        if session is None:
            # identity survived in a shared cache (e.g. after a restart)
            session = await self._open(token, identity)
        return session

    def active(self) -> List[LibrarySession]:
        return list(self._sessions.values())

    def close(self) -> None:
        self._unsubscribe()
        for token in list(self._sessions):
            self._drop(token)
