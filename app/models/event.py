from datetime import datetime
from sqlalchemy import Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.utils.date_helpers import utcnow


class Event(Base):
    __tablename__ = "events"
    __table_args__ = (
        UniqueConstraint("competition_id", "external_id", name="uq_events_competition_external"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sport_id: Mapped[int] = mapped_column(Integer, ForeignKey("sports.id"), index=True)
    competition_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("competitions.id"), index=True
    )
    external_id: Mapped[str | None] = mapped_column(String(100))
    season: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    round: Mapped[str | None] = mapped_column(String(20))
    stage: Mapped[str | None] = mapped_column(String(50))  # "race", "qualifying", ...
    starts_at_utc: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    venue: Mapped[str | None] = mapped_column(String(255))
    status: Mapped[str | None] = mapped_column(String(20))  # "scheduled" / "finished"
    # "metadata" is reserved on declarative classes
    extra: Mapped[dict] = mapped_column("metadata", JSONB, default=dict)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    # Relationships
    competition: Mapped["Competition"] = relationship("Competition", back_populates="events")
    participants: Mapped[list["EventParticipant"]] = relationship(
        "EventParticipant", back_populates="event"
    )
