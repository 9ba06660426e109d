from app.models.sport import Sport
from app.models.competition import Competition
from app.models.participant import Participant
from app.models.event import Event
from app.models.event_participant import EventParticipant
from app.models.standing import Standing

__all__ = [
    "Sport",
    "Competition",
    "Participant",
    "Event",
    "EventParticipant",
    "Standing",
]
