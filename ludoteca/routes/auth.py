# ludoteca/routes/auth.py

from fastapi import APIRouter, HTTPException, Request, Response

from ludoteca.config import settings
from ludoteca.errors import AuthenticationError
from ludoteca.routes.deps import get_provider, get_registry
from ludoteca.utils.logging import log_error

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/sign-in")
async def sign_in(request: Request, response: Response):
    try:
        token, identity = await get_provider(request).sign_in(request.headers)
    except AuthenticationError as e:
        log_error(f"❌ Sign-in error: {e}")
        raise HTTPException(status_code=401, detail="Erro ao fazer login") from e

    response.set_cookie(
        settings.SESSION_COOKIE,
        token,
        max_age=settings.SESSION_TTL_SECONDS,
        httponly=True,
        samesite="lax",
    )
    return {"user": identity}


@router.post("/sign-out")
async def sign_out(request: Request, response: Response):
    token = request.cookies.get(settings.SESSION_COOKIE)
    if token:
        await get_provider(request).sign_out(token)
    response.delete_cookie(settings.SESSION_COOKIE)
    return {"status": "ok"}


@router.get("/me")
async def me(request: Request):
    session = await get_registry(request).get(request.cookies.get(settings.SESSION_COOKIE))
    return {"user": session.user if session else None}
