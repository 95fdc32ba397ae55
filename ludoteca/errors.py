# ludoteca/errors.py

from enum import Enum
from typing import Optional


class AuthenticationError(RuntimeError):
    """The authenticating proxy did not hand us a usable identity."""


class StoreErrorKind(str, Enum):
    PERMISSION_DENIED = "permission-denied"
    OTHER = "other"


class StoreError(RuntimeError):
    def __init__(self, kind: StoreErrorKind, message: Optional[str] = None) -> None:
        super().__init__(message or kind.value)
        self.kind = kind
        self.message = message

    @property
    def permission_denied(self) -> bool:
        return self.kind is StoreErrorKind.PERMISSION_DENIED


class InvalidGameUrl(ValueError):
    """Submitted URL is not a Ludopedia game page; rejected before any request."""


class PageFetchError(RuntimeError):
    """Every page-access strategy failed."""


class ExtractionError(RuntimeError):
    """Page was fetched but no game name could be found in it."""


class GameNotFound(LookupError):
    """No record with that id in the loaded collection."""
