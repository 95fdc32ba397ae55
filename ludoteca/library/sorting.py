# ludoteca/library/sorting.py
from typing import Callable, Dict, Iterable, List

from ludoteca.library.text import collation_key
from ludoteca.schemas.game import GameRecord
from ludoteca.schemas.library import SortKey
from ludoteca.utils.convert import to_float, to_int

RANK_SENTINEL = 99999

SortKeyFn = Callable[[GameRecord], object]


def by_name(game: GameRecord):
    return collation_key(game.name)


def by_rating(game: GameRecord):
    # best rated first
    return -(to_float(game.rating) or 0.0)


def by_rank(game: GameRecord):
    return to_int(game.rank) or RANK_SENTINEL


def by_players(game: GameRecord):
    # largest player count first
    return -(to_int(game.players_max) or 0)


def by_time(game: GameRecord):
    return to_int(game.time) or 0


SORT_KEYS: Dict[SortKey, SortKeyFn] = {
    SortKey.NAME: by_name,
    SortKey.RATING: by_rating,
    SortKey.RANK: by_rank,
    SortKey.PLAYERS: by_players,
    SortKey.TIME: by_time,
}


def sort_games(games: Iterable[GameRecord], sort_by: SortKey) -> List[GameRecord]:
    return sorted(games, key=SORT_KEYS.get(sort_by, by_name))
