# ludoteca/library/session.py
"""One member's view of the library.

Every public coroutine here is an operation boundary: failures are logged and
turned into state (error flags, add-game error, notifications) and never
propagate to the caller.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ludoteca.config import settings
from ludoteca.errors import ExtractionError, InvalidGameUrl, PageFetchError, StoreError
from ludoteca.library.borrow import BorrowOutcome, BorrowStateController
from ludoteca.library.notifications import Notifier
from ludoteca.library.state import (
    AddFinished,
    AddGameClosed,
    AddGameFailed,
    AddGameOpened,
    AddGameUrlSet,
    AddStarted,
    CategoryChanged,
    DraftEdited,
    FetchFinished,
    FetchStarted,
    FiltersChanged,
    FiltersCleared,
    LibraryViewModel,
    LoadFailed,
    LoadStarted,
    LoadSucceeded,
    QueryChanged,
    SessionEnded,
    SessionStarted,
    SortChanged,
)
from ludoteca.schemas.game import GameRecord, Identity
from ludoteca.schemas.library import Category, LibraryState, SortKey
from ludoteca.scraper import ludopedia
from ludoteca.scraper.page_fetch import PageFetcher
from ludoteca.services.store import DocumentStore
from ludoteca.utils.logging import log_error, log_info, log_success, log_warning

LOAD_FAILED = "Erro desconhecido ao carregar jogos"
IMPORT_FAILED = "Erro ao buscar jogo da Ludopedia"
ADD_FAILED = "Erro ao adicionar jogo."


class LibrarySession:
    def __init__(
        self,
        user: Identity,
        store: DocumentStore,
        fetcher: Optional[PageFetcher] = None,
        toast_seconds: Optional[float] = None,
    ) -> None:
        self.user = user
        self.view_model = LibraryViewModel()
        self.notifier = Notifier(self.view_model.dispatch, delay=toast_seconds)
        self.borrowing = BorrowStateController(self.view_model, store, self.notifier)
        self._store = store
        self._fetcher = fetcher or PageFetcher()
        self._collection = settings.GAMES_COLLECTION

        self.view_model.dispatch(SessionStarted(user))

    @property
    def state(self) -> LibraryState:
        return self.view_model.state

    def close(self) -> None:
        self.notifier.cancel()
        self.view_model.dispatch(SessionEnded())

    # ----------------------------
    # Collection
    # ----------------------------

    async def load(self) -> LibraryState:
        dispatch = self.view_model.dispatch
        generation = dispatch(LoadStarted()).load_generation
        try:
            raw = await self._store.list(self._collection, settings.GAMES_ORDER_BY)
        except StoreError as e:
            if e.permission_denied:
                log_warning(f"🔒 {self.user.id} has no access to {self._collection}")
                return dispatch(LoadFailed(no_access=True))
            log_error(f"❌ Loading games failed: {e}")
            return dispatch(LoadFailed(error=e.message or LOAD_FAILED))
        except Exception as e:
            log_error(f"❌ Loading games failed: {type(e).__name__}: {e}")
            return dispatch(LoadFailed(error=str(e) or LOAD_FAILED))

        games = tuple(GameRecord.from_raw(doc["id"], doc) for doc in raw)
        log_info(f"🎲 Loaded {len(games)} games for {self.user.id}")
        return dispatch(LoadSucceeded(games, generation))

    # ----------------------------
    # Filters
    # ----------------------------

    def set_query(self, query: str) -> LibraryState:
        return self.view_model.dispatch(QueryChanged(query))

    def set_category(self, category: Category) -> LibraryState:
        return self.view_model.dispatch(CategoryChanged(Category(category)))

    def set_filters(self, **changes: Any) -> LibraryState:
        return self.view_model.dispatch(FiltersChanged(changes))

    def set_sort(self, sort_by: SortKey) -> LibraryState:
        return self.view_model.dispatch(SortChanged(SortKey(sort_by)))

    def clear_filters(self) -> LibraryState:
        return self.view_model.dispatch(FiltersCleared())

    # ----------------------------
    # Borrow / return
    # ----------------------------

    async def borrow(self, game_id: str) -> BorrowOutcome:
        return await self.borrowing.borrow(game_id, self.user)

    async def return_(self, game_id: str) -> BorrowOutcome:
        return await self.borrowing.return_(game_id)

    # ----------------------------
    # Add game
    # ----------------------------

    def open_add_game(self) -> LibraryState:
        return self.view_model.dispatch(AddGameOpened())

    def close_add_game(self) -> LibraryState:
        return self.view_model.dispatch(AddGameClosed())

    def edit_draft(self, **changes: Any) -> LibraryState:
        return self.view_model.dispatch(DraftEdited(changes))

    async def fetch_from_ludopedia(self, url: str) -> LibraryState:
        dispatch = self.view_model.dispatch
        dispatch(AddGameUrlSet(url or ""))
        if not url:
            return self.state

        try:
            url = ludopedia.validate_game_url(url)
        except InvalidGameUrl as e:
            log_warning(f"🚫 Rejected import URL: {url}")
            return dispatch(AddGameFailed(str(e)))

        dispatch(FetchStarted())
        try:
            html = await self._fetcher.fetch(url)
            draft = ludopedia.extract(html, source_url=url)
        except (PageFetchError, ExtractionError) as e:
            log_error(f"❌ Ludopedia import failed for {url}: {e}")
            return dispatch(FetchFinished(error=str(e) or IMPORT_FAILED))
        except Exception as e:
            log_error(f"❌ Ludopedia import failed for {url}: {type(e).__name__}: {e}")
            return dispatch(FetchFinished(error=IMPORT_FAILED))

        log_success(f"🧩 Imported draft: {draft.name}")
        return dispatch(FetchFinished(draft=draft))

    async def add_game(self) -> LibraryState:
        dispatch = self.view_model.dispatch
        draft = self.state.add_game.draft
        if not draft.name:
            return self.state

        dispatch(AddStarted())
        fields: Dict[str, Any] = {
            **draft.store_fields(),
            "borrowedBy": None,
            "borrowedByName": None,
            "createdAt": datetime.now(timezone.utc),
        }
        try:
            doc_id = await self._store.create(self._collection, fields)
        except Exception as e:
            log_error(f"❌ Adding {draft.name} failed: {e}")
            return dispatch(AddFinished(error=ADD_FAILED))

        log_success(f"➕ Added {draft.name} ({doc_id})")
        dispatch(AddFinished())
        self.notifier.success(f'"{draft.name}" adicionado com sucesso!')
        dispatch(AddGameClosed())
        return await self.load()
