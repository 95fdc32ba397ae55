import asyncio

import pytest

from ludoteca.errors import GameNotFound, StoreError, StoreErrorKind
from ludoteca.library.borrow import BorrowOutcome
from ludoteca.schemas.library import NotificationType


async def test_borrow_success_updates_record(session, store):
    outcome = await session.borrow("g1")

    assert outcome is BorrowOutcome.BORROWED
    game = session.state.find("g1")
    assert game.borrowed_by == "alice@example.com"
    assert game.borrowed_by_name == "Alice"
    assert game.processing is False
    assert store.updates == [
        ("boardgames", "g1", {"borrowedBy": "alice@example.com", "borrowedByName": "Alice"})
    ]
    notification = session.state.notification
    assert notification.type is NotificationType.SUCCESS
    assert "Catan" in notification.message


async def test_return_success_clears_borrower(session, store):
    outcome = await session.return_("g3")

    assert outcome is BorrowOutcome.RETURNED
    game = session.state.find("g3")
    assert game.borrowed_by is None and game.borrowed_by_name is None
    assert store.updates[-1][2] == {"borrowedBy": None, "borrowedByName": None}
    assert session.state.notification.message == '"Pandemic" devolvido com sucesso!'


async def test_borrow_failure_leaves_record_unchanged(session, store):
    store.update_error = StoreError(StoreErrorKind.OTHER, "offline")
    before = session.state.find("g2")

    outcome = await session.borrow("g2")

    assert outcome is BorrowOutcome.FAILED
    game = session.state.find("g2")
    assert (game.borrowed_by, game.borrowed_by_name) == (before.borrowed_by, before.borrowed_by_name)
    assert game.processing is False
    assert session.state.notification.type is NotificationType.ERROR
    assert session.state.notification.message == "Erro ao emprestar jogo"


async def test_second_request_while_in_flight_is_ignored(session, store):
    store.gate = asyncio.Event()
    first = asyncio.create_task(session.borrow("g1"))
    await asyncio.sleep(0)

    assert session.state.find("g1").processing is True
    assert await session.borrow("g1") is BorrowOutcome.SKIPPED
    assert await session.return_("g1") is BorrowOutcome.SKIPPED
    assert len(store.updates) == 1

    # filtering keeps working while the request is pending
    session.set_query("dix")
    assert [g.name for g in session.state.visible] == ["Dixit"]

    store.gate.set()
    assert await first is BorrowOutcome.BORROWED
    assert session.state.find("g1").processing is False


async def test_unknown_record(session):
    with pytest.raises(GameNotFound):
        await session.borrow("missing")


async def test_reload_read_before_borrow_keeps_confirmed_borrower(session, store):
    store.list_gate = asyncio.Event()
    reload = asyncio.create_task(session.load())
    await asyncio.sleep(0)

    assert await session.borrow("g1") is BorrowOutcome.BORROWED
    assert store.docs["g1"]["borrowedBy"] == "alice@example.com"

    store.list_gate.set()
    state = await reload
    catan = state.find("g1")
    assert (catan.borrowed_by, catan.borrowed_by_name) == ("alice@example.com", "Alice")
    assert [g.name for g in state.visible] == ["Catan", "Dixit", "Pandemic"]

    # a reload started after the confirmation takes the store's word again
    store.list_gate = None
    store.docs["g1"].update(borrowedBy="bob@example.com", borrowedByName="Bob")
    state = await session.load()
    assert state.find("g1").borrowed_by == "bob@example.com"


async def test_return_during_reload_is_not_undone(session, store):
    store.list_gate = asyncio.Event()
    reload = asyncio.create_task(session.load())
    await asyncio.sleep(0)

    assert await session.return_("g3") is BorrowOutcome.RETURNED
    store.list_gate.set()
    state = await reload

    assert state.find("g3").borrowed_by is None
    assert state.find("g3").available
