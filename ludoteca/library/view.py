# ludoteca/library/view.py
from typing import Iterable, List, Optional

from ludoteca.library.filters import FilterPredicateSet
from ludoteca.library.sorting import sort_games
from ludoteca.schemas.game import GameRecord
from ludoteca.schemas.library import FilterState


def recompute(
    games: Iterable[GameRecord],
    state: FilterState,
    current_user_id: Optional[str],
) -> List[GameRecord]:
    """Derive the visible list. Reads the records, never mutates them."""

    accepts = FilterPredicateSet(state, current_user_id)
    return sort_games((game for game in games if accepts(game)), state.sort_by)
