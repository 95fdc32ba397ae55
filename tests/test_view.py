from ludoteca.library.view import recompute
from ludoteca.schemas.game import GameRecord
from ludoteca.schemas.library import Category, FilterState, SortKey, StructuredFilters


def _games(docs):
    return [GameRecord.from_raw(doc["id"], doc) for doc in docs]


def test_visible_list_is_subset_without_duplicates(docs):
    games = _games(docs)
    states = [
        FilterState(),
        FilterState(query="a"),
        FilterState(category=Category.AVAILABLE, sort_by=SortKey.RATING),
        FilterState(filters=StructuredFilters(players=4, is_coop=True)),
        FilterState(filters=StructuredFilters(max_complexity="medio"), sort_by=SortKey.TIME),
    ]
    for state in states:
        visible = recompute(games, state, "alice@example.com")
        ids = [game.id for game in visible]
        assert len(ids) == len(set(ids))
        assert all(game in games for game in visible)


def test_recompute_is_repeatable_and_leaves_input_alone(docs):
    games = _games(docs)
    before = [game.model_copy() for game in games]
    state = FilterState(sort_by=SortKey.PLAYERS)

    first = recompute(games, state, None)
    second = recompute(games, state, None)

    assert [g.id for g in first] == [g.id for g in second]
    assert games == before


def test_recompute_combines_filters_and_sort(docs):
    games = _games(docs)
    state = FilterState(
        category=Category.ALL,
        filters=StructuredFilters(players=3),
        sort_by=SortKey.RANK,
    )
    assert [g.name for g in recompute(games, state, None)] == ["Catan", "Dixit", "Pandemic"]
