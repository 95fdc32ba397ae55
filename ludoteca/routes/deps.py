# ludoteca/routes/deps.py

from fastapi import HTTPException, Request

from ludoteca.config import settings
from ludoteca.library.registry import SessionRegistry
from ludoteca.library.session import LibrarySession
from ludoteca.services.identity import IdentityProvider


def get_provider(request: Request) -> IdentityProvider:
    return request.app.state.identity_provider


def get_registry(request: Request) -> SessionRegistry:
    return request.app.state.registry


async def current_session(request: Request) -> LibrarySession:
    session = await get_registry(request).get(request.cookies.get(settings.SESSION_COOKIE))
    if session is None:
        raise HTTPException(status_code=401, detail="Not signed in")
    return session
