# ludoteca/schemas/library.py
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

from ludoteca.schemas.game import DraftGameRecord, GameRecord, Identity


class Category(str, Enum):
    ALL = "all"
    AVAILABLE = "available"
    MINE = "mine"
    BORROWED = "borrowed"


class SortKey(str, Enum):
    NAME = "name"
    RATING = "rating"
    RANK = "rank"
    PLAYERS = "players"
    TIME = "time"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StructuredFilters(_CamelModel):
    players: Optional[int] = None
    max_time: Optional[int] = None
    min_age: Optional[int] = None
    max_complexity: Optional[str] = None
    is_party: bool = False
    is_coop: bool = False

    @field_validator("players", "max_time", "min_age", "max_complexity", mode="before")
    @classmethod
    def _blank_is_unset(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def any_active(self) -> bool:
        return (
            self.players is not None
            or self.max_time is not None
            or self.min_age is not None
            or bool(self.max_complexity)
            or self.is_party
            or self.is_coop
        )


class FilterState(_CamelModel):
    query: str = ""
    category: Category = Category.ALL
    filters: StructuredFilters = Field(default_factory=StructuredFilters)
    sort_by: SortKey = SortKey.NAME


class NotificationType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class Notification(_CamelModel):
    message: str
    type: NotificationType = NotificationType.SUCCESS
    token: int = 0


class AddGameState(_CamelModel):
    open: bool = False
    url: str = ""
    draft: DraftGameRecord = Field(default_factory=DraftGameRecord)
    fetching: bool = False
    adding: bool = False
    error: Optional[str] = None


class LibraryState(_CamelModel):
    user: Optional[Identity] = None
    auth_ready: bool = False
    games: List[GameRecord] = Field(default_factory=list)
    visible: List[GameRecord] = Field(default_factory=list)
    loading: bool = False
    error: Optional[str] = None
    no_access: bool = False
    filters: FilterState = Field(default_factory=FilterState)
    notification: Optional[Notification] = None
    add_game: AddGameState = Field(default_factory=AddGameState)

    # load bookkeeping, never sent to clients
    load_generation: int = Field(default=0, exclude=True)
    applied_generation: int = Field(default=0, exclude=True)
    # game id -> newest load generation started when its borrow state was confirmed
    confirmed_at: Dict[str, int] = Field(default_factory=dict, exclude=True)

    @computed_field(alias="hasActiveFilters")
    @property
    def has_active_filters(self) -> bool:
        return self.filters.filters.any_active

    def find(self, game_id: str) -> Optional[GameRecord]:
        for game in self.games:
            if game.id == game_id:
                return game
        return None
