from datetime import datetime
from sqlalchemy import Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.utils.date_helpers import utcnow


class Participant(Base):
    """A team, driver or constructor taking part in events of one sport."""

    __tablename__ = "participants"
    __table_args__ = (
        UniqueConstraint("sport_id", "external_id", name="uq_participants_sport_external"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sport_id: Mapped[int] = mapped_column(Integer, ForeignKey("sports.id"), index=True)
    external_id: Mapped[str | None] = mapped_column(String(100))
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    participant_type: Mapped[str] = mapped_column(String(20), default="team")  # team/driver/constructor
    short_name: Mapped[str | None] = mapped_column(String(50))
    country: Mapped[str | None] = mapped_column(String(100))
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    # Relationships
    sport: Mapped["Sport"] = relationship("Sport", back_populates="participants")
    standings: Mapped[list["Standing"]] = relationship(
        "Standing", back_populates="participant"
    )
