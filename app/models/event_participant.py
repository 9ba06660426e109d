from sqlalchemy import Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class EventParticipant(Base):
    """Junction row: one participant's side of one event."""

    __tablename__ = "event_participants"
    __table_args__ = (
        UniqueConstraint(
            "event_id", "participant_id", "role", name="uq_event_participants_event_participant_role"
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event_id: Mapped[int] = mapped_column(Integer, ForeignKey("events.id"), index=True)
    participant_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("participants.id"), index=True
    )
    role: Mapped[str] = mapped_column(String(20), nullable=False)  # "home" / "away"
    score: Mapped[int | None] = mapped_column(Integer)
    result_position: Mapped[int | None] = mapped_column(Integer)
    outcome: Mapped[str | None] = mapped_column(String(10))  # win/draw/loss
    extra: Mapped[dict] = mapped_column("metadata", JSONB, default=dict)

    # Relationships
    event: Mapped["Event"] = relationship("Event", back_populates="participants")
    participant: Mapped["Participant"] = relationship("Participant")
