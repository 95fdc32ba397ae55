# ludoteca/services/store.py
"""Document-store access for the library.

Callers talk in documents: a collection name, string ids and camelCase field
names. ``SqlAlchemyDocumentStore`` keeps those documents in SQL tables.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol

from sqlalchemy import select
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from ludoteca.database import AsyncSessionLocal
from ludoteca.errors import StoreError, StoreErrorKind
from ludoteca.models.board_game import BoardGame

logger = logging.getLogger(__name__)

# document field -> column attribute
FIELD_COLUMNS: Dict[str, str] = {
    "name": "name",
    "playersMin": "players_min",
    "playersMax": "players_max",
    "age": "age",
    "time": "time",
    "complexity": "complexity",
    "coop": "coop",
    "party": "party",
    "rating": "rating",
    "rank": "rank",
    "link": "link",
    "image": "image",
    "borrowedBy": "borrowed_by",
    "borrowedByName": "borrowed_by_name",
    "createdAt": "created_at",
}

COLLECTIONS = {
    BoardGame.__tablename__: BoardGame,
}


class DocumentStore(Protocol):
    async def list(self, collection: str, order_by: str) -> List[Dict[str, Any]]:
        ...

    async def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        ...

    async def create(self, collection: str, fields: Dict[str, Any]) -> str:
        ...


def _is_permission_denied(exc: DBAPIError) -> bool:
    return "permission denied" in str(exc.orig or exc).lower()


@contextmanager
def _translated_errors(action: str):
    try:
        yield
    except StoreError:
        raise
    except DBAPIError as exc:
        if _is_permission_denied(exc):
            logger.warning("Store %s denied: %s", action, exc.orig)
            raise StoreError(StoreErrorKind.PERMISSION_DENIED, "Sem permissão de acesso") from exc
        logger.error("Store %s failed: %s", action, exc)
        raise StoreError(StoreErrorKind.OTHER, str(exc.orig or exc)) from exc
    except SQLAlchemyError as exc:
        logger.error("Store %s failed: %s", action, exc)
        raise StoreError(StoreErrorKind.OTHER, str(exc)) from exc


def _model_for(collection: str):
    model = COLLECTIONS.get(collection)
    if model is None:
        raise StoreError(StoreErrorKind.OTHER, f"Unknown collection: {collection}")
    return model


def _column_for(model, field: str):
    attr = FIELD_COLUMNS.get(field)
    if attr is None or not hasattr(model, attr):
        raise StoreError(StoreErrorKind.OTHER, f"Unknown field: {field}")
    return attr


def _to_document(row: BoardGame) -> Dict[str, Any]:
    doc: Dict[str, Any] = {"id": row.id}
    for field, attr in FIELD_COLUMNS.items():
        doc[field] = getattr(row, attr)
    return doc


class SqlAlchemyDocumentStore:
    def __init__(self, session_factory=AsyncSessionLocal) -> None:
        self._session_factory = session_factory

    async def list(self, collection: str, order_by: str) -> List[Dict[str, Any]]:
        model = _model_for(collection)
        column = getattr(model, _column_for(model, order_by))
        with _translated_errors("list"):
            async with self._session_factory() as session:
                result = await session.execute(select(model).order_by(column))
                rows = result.scalars().all()
        logger.debug("Listed %s documents from %s", len(rows), collection)
        return [_to_document(row) for row in rows]

    async def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        model = _model_for(collection)
        values = {_column_for(model, field): value for field, value in fields.items()}
        with _translated_errors("update"):
            async with self._session_factory() as session:
                existing: Optional[BoardGame] = await session.get(model, doc_id)
                if existing is None:
                    raise StoreError(StoreErrorKind.OTHER, f"No document {doc_id} in {collection}")
                for attr, value in values.items():
                    setattr(existing, attr, value)
                await session.commit()

    async def create(self, collection: str, fields: Dict[str, Any]) -> str:
        model = _model_for(collection)
        values = {_column_for(model, field): value for field, value in fields.items()}
        values.setdefault("created_at", datetime.now(timezone.utc))
        with _translated_errors("create"):
            async with self._session_factory() as session:
                row = model(**values)
                session.add(row)
                await session.commit()
                doc_id = row.id
        logger.info("Created document %s in %s", doc_id, collection)
        return doc_id
