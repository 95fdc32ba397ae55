# ludoteca/schemas/requests.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from ludoteca.schemas.library import Category, SortKey


class FilterUpdate(BaseModel):
    """Partial update of the filter panel; only the fields sent are applied.

    An empty string clears a structured filter.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    query: Optional[str] = None
    category: Optional[Category] = None
    sort_by: Optional[SortKey] = None
    players: Optional[int] = None
    max_time: Optional[int] = None
    min_age: Optional[int] = None
    max_complexity: Optional[str] = None
    is_party: Optional[bool] = None
    is_coop: Optional[bool] = None

    @field_validator("players", "max_time", "min_age", "max_complexity", mode="before")
    @classmethod
    def _blank_clears(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class LudopediaFetch(BaseModel):
    url: str


class DraftUpdate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: Optional[str] = None
    players_min: Optional[str] = None
    players_max: Optional[str] = None
    age: Optional[str] = None
    time: Optional[str] = None
    complexity: Optional[str] = None
    coop: Optional[str] = None
    party: Optional[str] = None
    rating: Optional[str] = None
    rank: Optional[str] = None
    link: Optional[str] = None
    image: Optional[str] = None
