# ludoteca/services/identity.py
import logging
import secrets
from typing import Awaitable, Callable, List, Mapping, Optional, Tuple

from ludoteca.config import settings
from ludoteca.errors import AuthenticationError
from ludoteca.schemas.game import Identity
from ludoteca.services.identity_cache import build_identity_cache

logger = logging.getLogger(__name__)

AuthStateCallback = Callable[[str, Optional[Identity]], Awaitable[None]]


class IdentityProvider:
    """
    Turns the authenticating proxy's headers into a member identity.

    Strategy:
    - The proxy in front of the service has already verified the member; we
      trust its e-mail/name/picture headers.
    - Identities are cached under an opaque token (Redis if REDIS_URL, else in-memory).
    - Every sign-in/sign-out is announced to on_auth_state_change() subscribers.
    """

    def __init__(self, cache=None) -> None:
        self._cache = cache
        self._ttl_seconds = settings.SESSION_TTL_SECONDS
        self._callbacks: List[AuthStateCallback] = []

    async def _get_cache(self):
        if self._cache is None:
            self._cache = await build_identity_cache()
        return self._cache

    def on_auth_state_change(self, callback: AuthStateCallback) -> Callable[[], None]:
        self._callbacks.append(callback)
        return lambda: self._callbacks.remove(callback)

    async def _emit(self, token: str, identity: Optional[Identity]) -> None:
        for callback in list(self._callbacks):
            await callback(token, identity)

    @staticmethod
    def identity_from_headers(headers: Mapping[str, str]) -> Identity:
        email = (headers.get(settings.IDENTITY_EMAIL_HEADER) or "").strip()
        if not email:
            raise AuthenticationError(
                f"Missing {settings.IDENTITY_EMAIL_HEADER} header; is the auth proxy in front of us?"
            )
        return Identity(
            id=email,
            display_name=(headers.get(settings.IDENTITY_NAME_HEADER) or "").strip() or None,
            picture_url=(headers.get(settings.IDENTITY_PICTURE_HEADER) or "").strip() or None,
        )

    async def sign_in(self, headers: Mapping[str, str]) -> Tuple[str, Identity]:
        identity = self.identity_from_headers(headers)
        token = secrets.token_urlsafe(32)

        cache = await self._get_cache()
        await cache.set(token, identity.model_dump(), ttl_seconds=self._ttl_seconds)
        logger.info("Sign-in: %s", identity.id)

        await self._emit(token, identity)
        return token, identity

    async def sign_out(self, token: str) -> None:
        cache = await self._get_cache()
        await cache.delete(token)
        logger.info("Sign-out: session %s...", token[:8])
        await self._emit(token, None)

    async def resolve(self, token: Optional[str]) -> Optional[Identity]:
        if not token:
            return None
        cache = await self._get_cache()
        cached = await cache.get(token)
        if not cached:
            return None
        return Identity.model_validate(cached)
