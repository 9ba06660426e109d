from enum import Enum
from pydantic import BaseModel


class SyncStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


class SyncResponse(BaseModel):
    """Outcome of one sport's sync run.

    ``details`` is the sync summary: the resolved season label plus a row
    count per entity written (competitions, participants, events, ...).
    """
    sport: str
    season: str | None = None
    status: SyncStatus
    message: str
    details: dict[str, int | str] | None = None
