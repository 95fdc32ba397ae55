# ludoteca/models/board_game.py

import uuid

from sqlalchemy import Column, DateTime, String
from sqlalchemy.sql import func

from ludoteca.database import Base


def _new_id() -> str:
    return uuid.uuid4().hex


class BoardGame(Base):
    """A shared copy in the library. Numeric fields stay free text, as typed by members."""

    __tablename__ = "boardgames"

    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(String, index=True, nullable=False, default="")

    players_min = Column(String, nullable=True)
    players_max = Column(String, nullable=True)
    age = Column(String, nullable=True)
    time = Column(String, nullable=True)
    complexity = Column(String, nullable=True)
    coop = Column(String, nullable=True)  # "Sim" / "Não"
    party = Column(String, nullable=True)  # "Sim" / "Não"
    rating = Column(String, nullable=True)
    rank = Column(String, nullable=True)
    link = Column(String, nullable=True)
    image = Column(String, nullable=True)

    # borrower e-mail + display name, both set or both null
    borrowed_by = Column(String, nullable=True, index=True)
    borrowed_by_name = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
