# ludoteca/schemas/game.py
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

NO = "Não"
YES = "Sim"

# Text fields copied between the store, drafts and records.
GAME_FIELDS = (
    "name",
    "players_min",
    "players_max",
    "age",
    "time",
    "complexity",
    "coop",
    "party",
    "rating",
    "rank",
    "link",
    "image",
)
FLAG_FIELDS = ("coop", "party")


class GameFields(BaseModel):
    """Catalog fields shared by stored records and drafts (all kept as free text)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = ""
    players_min: str = ""
    players_max: str = ""
    age: str = ""
    time: str = ""
    complexity: str = ""
    coop: str = NO
    party: str = NO
    rating: str = ""
    rank: str = ""
    link: str = ""
    image: str = ""

    def store_fields(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, include=set(GAME_FIELDS))


class DraftGameRecord(GameFields):
    pass


class GameRecord(GameFields):
    id: str
    borrowed_by: Optional[str] = None
    borrowed_by_name: Optional[str] = None
    # client-only, never written to the store
    processing: bool = False

    @classmethod
    def from_raw(cls, doc_id: str, data: Dict[str, Any]) -> "GameRecord":
        values: Dict[str, Any] = {}
        for field in GAME_FIELDS:
            raw = data.get(to_camel(field))
            if raw:
                values[field] = str(raw)
            elif field in FLAG_FIELDS:
                values[field] = NO
            else:
                values[field] = ""
        return cls(
            id=doc_id,
            borrowed_by=data.get("borrowedBy") or None,
            borrowed_by_name=data.get("borrowedByName") or None,
            **values,
        )

    @property
    def available(self) -> bool:
        return not self.borrowed_by


class Identity(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(description="e-mail address, also stored as borrowedBy")
    display_name: Optional[str] = None
    picture_url: Optional[str] = None

    @property
    def name(self) -> str:
        return self.display_name or self.id
