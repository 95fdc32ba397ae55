# ludoteca/library/filters.py
"""Filter predicates for the library list.

Every predicate is built only when its filter value is active, and a record is
visible when all built predicates accept it. Numeric record fields are free
text and are parsed leniently; a field that does not parse falls back to a
per-field default (players 0..99, time 0, age 0).
"""

from typing import Callable, List, Optional

from ludoteca.library.text import normalize
from ludoteca.schemas.game import GameRecord
from ludoteca.schemas.library import Category, FilterState, StructuredFilters
from ludoteca.utils.convert import is_affirmative, to_int

Predicate = Callable[[GameRecord], bool]

MIN_PLAYERS_DEFAULT = 0
MAX_PLAYERS_DEFAULT = 99


def text_search(query: str) -> Predicate:
    needle = query.lower()
    return lambda game: needle in game.name.lower()


def category(selected: Category, current_user_id: Optional[str]) -> Predicate:
    if selected is Category.AVAILABLE:
        return lambda game: not game.borrowed_by
    if selected is Category.MINE:
        return lambda game: bool(game.borrowed_by) and game.borrowed_by == current_user_id
    if selected is Category.BORROWED:
        return lambda game: bool(game.borrowed_by) and game.borrowed_by != current_user_id
    return lambda game: True


def players(count: int) -> Predicate:
    def accepts(game: GameRecord) -> bool:
        low = to_int(game.players_min) or MIN_PLAYERS_DEFAULT
        high = to_int(game.players_max) or MAX_PLAYERS_DEFAULT
        return low <= count <= high

    return accepts


def max_time(minutes: int) -> Predicate:
    return lambda game: (to_int(game.time) or 0) <= minutes


def min_age(age: int) -> Predicate:
    return lambda game: (to_int(game.age) or 0) >= age


def complexity(value: str) -> Predicate:
    wanted = normalize(value)
    return lambda game: normalize(game.complexity or "") == wanted


def party() -> Predicate:
    return lambda game: is_affirmative(game.party)


def coop() -> Predicate:
    return lambda game: is_affirmative(game.coop)


def build_predicates(state: FilterState, current_user_id: Optional[str]) -> List[Predicate]:
    predicates: List[Predicate] = []
    if state.query:
        predicates.append(text_search(state.query))
    if state.category is not Category.ALL:
        predicates.append(category(state.category, current_user_id))

    structured = state.filters
    if structured.players is not None:
        predicates.append(players(structured.players))
    if structured.max_time is not None:
        predicates.append(max_time(structured.max_time))
    if structured.min_age is not None:
        predicates.append(min_age(structured.min_age))
    if structured.max_complexity:
        predicates.append(complexity(structured.max_complexity))
    if structured.is_party:
        predicates.append(party())
    if structured.is_coop:
        predicates.append(coop())
    return predicates


class FilterPredicateSet:
    def __init__(self, state: FilterState, current_user_id: Optional[str]) -> None:
        self.predicates = build_predicates(state, current_user_id)

    def __call__(self, game: GameRecord) -> bool:
        return all(predicate(game) for predicate in self.predicates)

    def __len__(self) -> int:
        return len(self.predicates)


def has_active_filters(filters: StructuredFilters) -> bool:
    """Query and category have their own controls and do not count here."""
    return filters.any_active


def cleared(state: FilterState) -> FilterState:
    return state.model_copy(update={"filters": StructuredFilters()})
