# ludoteca/routes/library.py

from fastapi import APIRouter, Depends, HTTPException

from ludoteca.errors import GameNotFound
from ludoteca.library.session import LibrarySession
from ludoteca.routes.deps import current_session
from ludoteca.schemas.library import LibraryState
from ludoteca.schemas.requests import DraftUpdate, FilterUpdate, LudopediaFetch

router = APIRouter(prefix="/library", tags=["Library"])

STRUCTURED_FIELDS = ("players", "max_time", "min_age", "max_complexity", "is_party", "is_coop")


@router.get("/state", response_model=LibraryState)
async def get_state(session: LibrarySession = Depends(current_session)):
    return session.state


@router.post("/reload", response_model=LibraryState)
async def reload(session: LibrarySession = Depends(current_session)):
    return await session.load()


# ----------------------------- FILTERS -----------------------------

@router.put("/filters", response_model=LibraryState)
async def update_filters(payload: FilterUpdate, session: LibrarySession = Depends(current_session)):
    """Apply only the fields present in the payload."""
    changes = payload.model_dump(exclude_unset=True)
    if "query" in changes:
        session.set_query(changes["query"] or "")
    if changes.get("category") is not None:
        session.set_category(changes["category"])
    if changes.get("sort_by") is not None:
        session.set_sort(changes["sort_by"])

    structured = {
        k: (False if v is None and k.startswith("is_") else v)
        for k, v in changes.items()
        if k in STRUCTURED_FIELDS
    }
    if structured:
        session.set_filters(**structured)
    return session.state


@router.post("/filters/clear", response_model=LibraryState)
async def clear_filters(session: LibrarySession = Depends(current_session)):
    return session.clear_filters()


# ----------------------------- BORROW -----------------------------

@router.post("/games/{game_id}/borrow")
async def borrow_game(game_id: str, session: LibrarySession = Depends(current_session)):
    try:
        outcome = await session.borrow(game_id)
    except GameNotFound:
        raise HTTPException(status_code=404, detail="Jogo não encontrado")
    return {"outcome": outcome, "state": session.state}


@router.post("/games/{game_id}/return")
async def return_game(game_id: str, session: LibrarySession = Depends(current_session)):
    try:
        outcome = await session.return_(game_id)
    except GameNotFound:
        raise HTTPException(status_code=404, detail="Jogo não encontrado")
    return {"outcome": outcome, "state": session.state}


# ----------------------------- ADD GAME -----------------------------

@router.post("/add-game/open", response_model=LibraryState)
async def open_add_game(session: LibrarySession = Depends(current_session)):
    return session.open_add_game()


@router.post("/add-game/close", response_model=LibraryState)
async def close_add_game(session: LibrarySession = Depends(current_session)):
    return session.close_add_game()


@router.post("/add-game/fetch", response_model=LibraryState)
async def fetch_from_ludopedia(payload: LudopediaFetch, session: LibrarySession = Depends(current_session)):
    return await session.fetch_from_ludopedia(payload.url)


@router.patch("/add-game/draft", response_model=LibraryState)
async def edit_draft(payload: DraftUpdate, session: LibrarySession = Depends(current_session)):
    changes = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
    return session.edit_draft(**changes)


@router.post("/add-game", response_model=LibraryState)
async def add_game(session: LibrarySession = Depends(current_session)):
    return await session.add_game()
