# ludoteca/library/borrow.py
from enum import Enum
from typing import Optional

from ludoteca.config import settings
from ludoteca.errors import GameNotFound
from ludoteca.library.notifications import Notifier
from ludoteca.library.state import (
    BorrowStateConfirmed,
    LibraryViewModel,
    ProcessingFinished,
    ProcessingStarted,
)
from ludoteca.schemas.game import Identity
from ludoteca.services.store import DocumentStore
from ludoteca.utils.logging import log_error, log_info, log_success


class BorrowOutcome(str, Enum):
    BORROWED = "borrowed"
    RETURNED = "returned"
    SKIPPED = "skipped"  # a request for this record is still in flight
    FAILED = "failed"


class BorrowStateController:
    """
    Borrow/return with at most one request in flight per record.

    The local record only changes after the store confirms the update; a failed
    request leaves it exactly as it was and is not retried.
    """

    def __init__(
        self,
        view_model: LibraryViewModel,
        store: DocumentStore,
        notifier: Notifier,
        collection: Optional[str] = None,
    ) -> None:
        self._view_model = view_model
        self._store = store
        self._notifier = notifier
        self._collection = collection or settings.GAMES_COLLECTION

    async def borrow(self, game_id: str, user: Identity) -> BorrowOutcome:
        return await self._mutate(
            game_id,
            borrowed_by=user.id,
            borrowed_by_name=user.name,
            success=BorrowOutcome.BORROWED,
            success_message='"{name}" emprestado com sucesso!',
            failure_message="Erro ao emprestar jogo",
        )

    async def return_(self, game_id: str) -> BorrowOutcome:
        return await self._mutate(
            game_id,
            borrowed_by=None,
            borrowed_by_name=None,
            success=BorrowOutcome.RETURNED,
            success_message='"{name}" devolvido com sucesso!',
            failure_message="Erro ao devolver jogo",
        )

    async def _mutate(
        self,
        game_id: str,
        borrowed_by: Optional[str],
        borrowed_by_name: Optional[str],
        success: BorrowOutcome,
        success_message: str,
        failure_message: str,
    ) -> BorrowOutcome:
        game = self._view_model.find(game_id)
        if game is None:
            raise GameNotFound(game_id)
        if game.processing:
            log_info(f"⏳ {game.name}: request already in flight, ignoring")
            return BorrowOutcome.SKIPPED

        # no await between the check above and this dispatch
        self._view_model.dispatch(ProcessingStarted(game_id))
        try:
            await self._store.update(
                self._collection,
                game_id,
                {"borrowedBy": borrowed_by, "borrowedByName": borrowed_by_name},
            )
        except Exception as e:
            log_error(f"❌ {success.value} failed for {game.name}: {e}")
            self._notifier.error(failure_message)
            return BorrowOutcome.FAILED
        else:
            self._view_model.dispatch(
                BorrowStateConfirmed(game_id, borrowed_by, borrowed_by_name)
            )
            log_success(f"📦 {game.name}: {success.value}")
            self._notifier.success(success_message.format(name=game.name))
            return success
        finally:
            self._view_model.dispatch(ProcessingFinished(game_id))
