from ludoteca.library.sorting import sort_games
from ludoteca.schemas.library import SortKey

from tests.conftest import make_game


def _ids(games):
    return [game.id for game in games]


def test_sort_by_name_is_accent_insensitive():
    games = [make_game("z", name="Zombicide"), make_game("e", name="Éclipse"), make_game("a", name="Azul")]
    assert _ids(sort_games(games, SortKey.NAME)) == ["a", "e", "z"]


def test_sort_by_rank_puts_missing_last():
    games = [make_game("none", name="A"), make_game("r150", name="B", rank="150"), make_game("r3", name="C", rank="3")]
    assert _ids(sort_games(games, SortKey.RANK)) == ["r3", "r150", "none"]


def test_sort_by_rating_normalizes_comma():
    games = [
        make_game("none", name="A"),
        make_game("comma", name="B", rating="7,5"),
        make_game("dot", name="C", rating="8.5"),
    ]
    assert _ids(sort_games(games, SortKey.RATING)) == ["dot", "comma", "none"]


def test_sort_by_players_descending_by_max():
    games = [make_game("two", name="A", players_max="2"), make_game("none", name="B"), make_game("eight", name="C", players_max="8")]
    assert _ids(sort_games(games, SortKey.PLAYERS)) == ["eight", "two", "none"]


def test_sort_by_time_ascending_missing_first():
    games = [make_game("long", name="A", time="90"), make_game("none", name="B"), make_game("short", name="C", time="15")]
    assert _ids(sort_games(games, SortKey.TIME)) == ["none", "short", "long"]
