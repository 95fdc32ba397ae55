# ludoteca/main.py

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ludoteca.config import settings
from ludoteca.database import create_tables, dispose_engine
from ludoteca.library.registry import SessionRegistry
from ludoteca.routes.auth import router as auth_router
from ludoteca.routes.library import router as library_router
from ludoteca.services.identity import IdentityProvider
from ludoteca.services.identity_cache import build_identity_cache
from ludoteca.services.store import SqlAlchemyDocumentStore
from ludoteca.tasks.library_refresh import setup_refresh_scheduler
from ludoteca.utils.logging import configure_logging, log_info

app = FastAPI(title="Ludoteca", description="Shared board-game library")


@app.on_event("startup")
async def startup_event():
    configure_logging(settings.LOG_LEVEL)
    await create_tables()
    provider = IdentityProvider(cache=await build_identity_cache())
    registry = SessionRegistry(provider, SqlAlchemyDocumentStore())
    app.state.identity_provider = provider
    app.state.registry = registry
    app.state.scheduler = setup_refresh_scheduler(registry)
    log_info("✅ Application started.")


@app.on_event("shutdown")
async def shutdown_event():
    scheduler = getattr(app.state, "scheduler", None)
    if scheduler is not None:
        scheduler.shutdown(wait=False)
    app.state.registry.close()
    await dispose_engine()
    log_info("🛑 Application stopped.")


app.include_router(auth_router)
app.include_router(library_router)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.exception_handler(404)
async def not_found_handler(request: Request, exc):
    detail = getattr(exc, "detail", None) or "Resource not found"
    return JSONResponse(status_code=404, content={"error": detail, "status": "fail"})
