# ludoteca/library/state.py
"""Library state, the messages that change it, and the reducer.

Every mutation is a message. ``reduce`` is pure: it returns a new
``LibraryState`` and leaves the old one alone. ``LibraryViewModel`` applies
messages, re-derives the visible list after every step and tells subscribers.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from ludoteca.library.filters import cleared
from ludoteca.library.view import recompute
from ludoteca.schemas.game import DraftGameRecord, GameRecord, Identity
from ludoteca.schemas.library import (
    AddGameState,
    Category,
    LibraryState,
    Notification,
    SortKey,
    StructuredFilters,
)


# ----------------------------
# Messages
# ----------------------------

@dataclass(frozen=True)
class SessionStarted:
    user: Identity


@dataclass(frozen=True)
class SessionEnded:
    pass


@dataclass(frozen=True)
class LoadStarted:
    pass


@dataclass(frozen=True)
class LoadSucceeded:
    games: Tuple[GameRecord, ...]
    # generation handed out by LoadStarted; None means the newest one
    generation: Optional[int] = None


@dataclass(frozen=True)
class LoadFailed:
    error: Optional[str] = None
    no_access: bool = False


@dataclass(frozen=True)
class QueryChanged:
    query: str


@dataclass(frozen=True)
class CategoryChanged:
    category: Category


@dataclass(frozen=True)
class FiltersChanged:
    changes: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SortChanged:
    sort_by: SortKey


@dataclass(frozen=True)
class FiltersCleared:
    pass


@dataclass(frozen=True)
class ProcessingStarted:
    game_id: str


@dataclass(frozen=True)
class ProcessingFinished:
    game_id: str


@dataclass(frozen=True)
class BorrowStateConfirmed:
    game_id: str
    borrowed_by: Optional[str]
    borrowed_by_name: Optional[str]


@dataclass(frozen=True)
class NotificationShown:
    notification: Notification


@dataclass(frozen=True)
class NotificationDismissed:
    token: int


@dataclass(frozen=True)
class AddGameOpened:
    pass


@dataclass(frozen=True)
class AddGameClosed:
    pass


@dataclass(frozen=True)
class AddGameUrlSet:
    url: str


@dataclass(frozen=True)
class AddGameFailed:
    error: str


@dataclass(frozen=True)
class DraftEdited:
    changes: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FetchStarted:
    pass


@dataclass(frozen=True)
class FetchFinished:
    draft: Optional[DraftGameRecord] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class AddStarted:
    pass


@dataclass(frozen=True)
class AddFinished:
    error: Optional[str] = None


# ----------------------------
# Reducer
# ----------------------------

def _replace_game(state: LibraryState, game_id: str, **changes) -> LibraryState:
    games = [
        game.model_copy(update=changes) if game.id == game_id else game
        for game in state.games
    ]
    return state.model_copy(update={"games": games})


def _with_filters(state: LibraryState, **changes) -> LibraryState:
    return state.model_copy(update={"filters": state.filters.model_copy(update=changes)})


def _with_add_game(state: LibraryState, **changes) -> LibraryState:
    return state.model_copy(update={"add_game": state.add_game.model_copy(update=changes)})


def _session_started(state: LibraryState, msg: SessionStarted) -> LibraryState:
    return state.model_copy(update={"user": msg.user, "auth_ready": True})


def _session_ended(state: LibraryState, msg: SessionEnded) -> LibraryState:
    return state.model_copy(
        update={
            "user": None,
            "auth_ready": True,
            "games": [],
            "visible": [],
            "no_access": False,
            "error": None,
            "confirmed_at": {},
        }
    )


def _load_started(state: LibraryState, msg: LoadStarted) -> LibraryState:
    return state.model_copy(
        update={
            "loading": True,
            "error": None,
            "no_access": False,
            "load_generation": state.load_generation + 1,
        }
    )


def _load_succeeded(state: LibraryState, msg: LoadSucceeded) -> LibraryState:
    generation = state.load_generation if msg.generation is None else msg.generation
    if generation < state.applied_generation:
        # a newer snapshot is already shown
        return state

    # borrow states confirmed after this load started are newer than its snapshot
    local = {game.id: game for game in state.games}
    newer = {
        game_id
        for game_id, confirmed in state.confirmed_at.items()
        if confirmed >= generation and game_id in local
    }
    games = []
    for game in msg.games:
        changes: Dict[str, Any] = {}
        if game.id in newer:
            changes["borrowed_by"] = local[game.id].borrowed_by
            changes["borrowed_by_name"] = local[game.id].borrowed_by_name
        # a reload must not release records whose borrow/return is still in flight
        if game.id in local and local[game.id].processing:
            changes["processing"] = True
        games.append(game.model_copy(update=changes) if changes else game)

    confirmed_at = {k: v for k, v in state.confirmed_at.items() if v >= generation}
    return state.model_copy(
        update={
            "loading": False,
            "games": games,
            "applied_generation": generation,
            "confirmed_at": confirmed_at,
        }
    )


def _load_failed(state: LibraryState, msg: LoadFailed) -> LibraryState:
    return state.model_copy(
        update={"loading": False, "error": msg.error, "no_access": msg.no_access}
    )


def _query_changed(state: LibraryState, msg: QueryChanged) -> LibraryState:
    return _with_filters(state, query=msg.query)


def _category_changed(state: LibraryState, msg: CategoryChanged) -> LibraryState:
    return _with_filters(state, category=msg.category)


def _filters_changed(state: LibraryState, msg: FiltersChanged) -> LibraryState:
    merged = {**state.filters.filters.model_dump(), **msg.changes}
    return _with_filters(state, filters=StructuredFilters.model_validate(merged))


def _sort_changed(state: LibraryState, msg: SortChanged) -> LibraryState:
    return _with_filters(state, sort_by=msg.sort_by)


def _filters_cleared(state: LibraryState, msg: FiltersCleared) -> LibraryState:
    return state.model_copy(update={"filters": cleared(state.filters)})


def _processing_started(state: LibraryState, msg: ProcessingStarted) -> LibraryState:
    return _replace_game(state, msg.game_id, processing=True)


def _processing_finished(state: LibraryState, msg: ProcessingFinished) -> LibraryState:
    return _replace_game(state, msg.game_id, processing=False)


def _borrow_state_confirmed(state: LibraryState, msg: BorrowStateConfirmed) -> LibraryState:
    confirmed_at = {**state.confirmed_at, msg.game_id: state.load_generation}
    state = state.model_copy(update={"confirmed_at": confirmed_at})
    return _replace_game(
        state,
        msg.game_id,
        borrowed_by=msg.borrowed_by,
        borrowed_by_name=msg.borrowed_by_name,
    )


def _notification_shown(state: LibraryState, msg: NotificationShown) -> LibraryState:
    return state.model_copy(update={"notification": msg.notification})


def _notification_dismissed(state: LibraryState, msg: NotificationDismissed) -> LibraryState:
    current = state.notification
    if current is None or current.token != msg.token:
        return state
    return state.model_copy(update={"notification": None})


def _add_game_opened(state: LibraryState, msg: AddGameOpened) -> LibraryState:
    return _with_add_game(state, open=True)


def _add_game_closed(state: LibraryState, msg: AddGameClosed) -> LibraryState:
    return state.model_copy(update={"add_game": AddGameState()})


def _add_game_url_set(state: LibraryState, msg: AddGameUrlSet) -> LibraryState:
    return _with_add_game(state, url=msg.url)


def _add_game_failed(state: LibraryState, msg: AddGameFailed) -> LibraryState:
    return _with_add_game(state, error=msg.error)


def _draft_edited(state: LibraryState, msg: DraftEdited) -> LibraryState:
    return _with_add_game(state, draft=state.add_game.draft.model_copy(update=msg.changes))


def _fetch_started(state: LibraryState, msg: FetchStarted) -> LibraryState:
    return _with_add_game(state, fetching=True, error=None, draft=DraftGameRecord())


def _fetch_finished(state: LibraryState, msg: FetchFinished) -> LibraryState:
    changes: Dict[str, Any] = {"fetching": False, "error": msg.error}
    if msg.draft is not None:
        changes["draft"] = msg.draft
    return _with_add_game(state, **changes)


def _add_started(state: LibraryState, msg: AddStarted) -> LibraryState:
    return _with_add_game(state, adding=True, error=None)


def _add_finished(state: LibraryState, msg: AddFinished) -> LibraryState:
    return _with_add_game(state, adding=False, error=msg.error)


_HANDLERS: Dict[type, Callable[[LibraryState, Any], LibraryState]] = {
    SessionStarted: _session_started,
    SessionEnded: _session_ended,
    LoadStarted: _load_started,
    LoadSucceeded: _load_succeeded,
    LoadFailed: _load_failed,
    QueryChanged: _query_changed,
    CategoryChanged: _category_changed,
    FiltersChanged: _filters_changed,
    SortChanged: _sort_changed,
    FiltersCleared: _filters_cleared,
    ProcessingStarted: _processing_started,
    ProcessingFinished: _processing_finished,
    BorrowStateConfirmed: _borrow_state_confirmed,
    NotificationShown: _notification_shown,
    NotificationDismissed: _notification_dismissed,
    AddGameOpened: _add_game_opened,
    AddGameClosed: _add_game_closed,
    AddGameUrlSet: _add_game_url_set,
    AddGameFailed: _add_game_failed,
    DraftEdited: _draft_edited,
    FetchStarted: _fetch_started,
    FetchFinished: _fetch_finished,
    AddStarted: _add_started,
    AddFinished: _add_finished,
}


def reduce(state: LibraryState, message: Any) -> LibraryState:
    try:
        handler = _HANDLERS[type(message)]
    except KeyError:
        raise TypeError(f"Unknown library message: {type(message).__name__}") from None
    return handler(state, message)


def select_visible(state: LibraryState) -> List[GameRecord]:
    user_id = state.user.id if state.user else None
    return recompute(state.games, state.filters, user_id)


# ----------------------------
# View model
# ----------------------------

Listener = Callable[[LibraryState], None]


class LibraryViewModel:
    def __init__(self, state: Optional[LibraryState] = None) -> None:
        self._state = state or LibraryState()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> LibraryState:
        return self._state

    def find(self, game_id: str) -> Optional[GameRecord]:
        return self._state.find(game_id)

    def dispatch(self, message: Any) -> LibraryState:
        reduced = reduce(self._state, message)
        self._state = reduced.model_copy(update={"visible": select_visible(reduced)})
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)
