from datetime import datetime
from sqlalchemy import Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.utils.date_helpers import utcnow


class Competition(Base):
    __tablename__ = "competitions"
    __table_args__ = (
        UniqueConstraint("sport_id", "external_id", name="uq_competitions_sport_external"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sport_id: Mapped[int] = mapped_column(Integer, ForeignKey("sports.id"), index=True)
    external_id: Mapped[str | None] = mapped_column(String(100))  # Provider league id
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    country: Mapped[str | None] = mapped_column(String(100))
    format: Mapped[str | None] = mapped_column(String(50))  # "league", "season"
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    # Relationships
    sport: Mapped["Sport"] = relationship("Sport", back_populates="competitions")
    events: Mapped[list["Event"]] = relationship("Event", back_populates="competition")
    standings: Mapped[list["Standing"]] = relationship(
        "Standing", back_populates="competition"
    )
