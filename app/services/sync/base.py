"""
Base class and utilities for sync services.

Contains shared upsert and id read-back helpers used across
all sync service implementations.
"""
import logging
from collections.abc import Iterable, Sequence
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base
from app.models import Competition, Event, Participant, Sport, Standing
from app.utils.date_helpers import utcnow

logger = logging.getLogger(__name__)


# ==================== Natural keys ====================

SPORT_KEY_FIELDS = ("key",)
COMPETITION_KEY_FIELDS = ("sport_id", "external_id")
PARTICIPANT_KEY_FIELDS = ("sport_id", "external_id")
EVENT_KEY_FIELDS = ("competition_id", "external_id")
EVENT_PARTICIPANT_KEY_FIELDS = ("event_id", "participant_id", "role")
STANDING_KEY_FIELDS = ("competition_id", "season", "participant_id")

# Keeps bind parameters per statement well under driver limits
UPSERT_CHUNK_SIZE = 500


def dedupe_rows(rows: Iterable[dict[str, Any]], key_fields: Sequence[str]) -> list[dict[str, Any]]:
    """Keep the last row per natural key (one statement cannot update a row twice)."""
    by_key: dict[tuple, dict[str, Any]] = {}
    for row in rows:
        by_key[tuple(row[f] for f in key_fields)] = row
    return list(by_key.values())


# ==================== Base Sync Service ====================

class BaseSyncService:
    """
    Base class for all sync services.

    Provides common functionality:
    - Database session management
    - Idempotent batch upserts keyed by natural keys
    - Internal id read-back by external ids
    """

    def __init__(self, db: AsyncSession, client: Any = None):
        """
        Initialize the sync service.

        Args:
            db: SQLAlchemy async session
            client: Provider client (subclasses fall back to their singleton)
        """
        self.db = db
        self.client = client

    def _insert(self, model: type[Base]):
        """Dialect-specific Core INSERT supporting ON CONFLICT DO UPDATE."""
        if self.db.bind.dialect.name == "sqlite":
            return sqlite.insert(model.__table__)
        return postgresql.insert(model.__table__)

    async def _upsert(
        self,
        model: type[Base],
        rows: list[dict[str, Any]],
        key_fields: Sequence[str],
    ) -> int:
        """
        Insert-or-update a batch of rows by natural key and commit it.

        Row dicts use database column names (e.g. "metadata").

        Each batch commits on its own; an earlier batch stays committed
        when a later one fails.
        """
        rows = dedupe_rows(rows, key_fields)
        if not rows:
            return 0

        column_keys = {c.name: c.key for c in model.__table__.columns}
        rows = [{column_keys[name]: value for name, value in row.items()} for row in rows]
        index_elements = list(key_fields)
        key_fields = [column_keys[name] for name in key_fields]

        has_updated_at = "updated_at" in column_keys
        if has_updated_at:
            now = utcnow()
            rows = [{**row, "updated_at": now} for row in rows]

        update_fields = [k for k in rows[0] if k not in key_fields]
        for start in range(0, len(rows), UPSERT_CHUNK_SIZE):
            stmt = self._insert(model).values(rows[start:start + UPSERT_CHUNK_SIZE])
            if update_fields:
                stmt = stmt.on_conflict_do_update(
                    index_elements=index_elements,
                    set_={k: stmt.excluded[k] for k in update_fields},
                )
            else:
                stmt = stmt.on_conflict_do_nothing(index_elements=index_elements)

            try:
                await self.db.execute(stmt)
                await self.db.commit()
            except Exception:
                await self.db.rollback()
                raise
        logger.debug(f"Upserted {len(rows)} rows into {model.__tablename__}")
        return len(rows)

    async def _replace_season(
        self,
        model: type[Event] | type[Standing],
        competition_ids: Iterable[int],
        season: str,
    ) -> None:
        """Delete a season's rows for the given competitions so a fresh set can be written."""
        competition_ids = list(competition_ids)
        if not competition_ids:
            return
        await self.db.execute(
            delete(model).where(
                model.competition_id.in_(competition_ids),
                model.season == season,
            )
        )
        await self.db.commit()

    async def _upsert_sport(self, key: str, name: str) -> int:
        """Upsert a sport and return its internal id."""
        await self._upsert(Sport, [{"key": key, "name": name}], SPORT_KEY_FIELDS)
        result = await self.db.execute(select(Sport.id).where(Sport.key == key))
        return result.scalar_one()

    async def _resolve_ids(
        self,
        model: type[Competition] | type[Participant],
        sport_id: int,
        external_ids: Iterable[str],
    ) -> dict[str, int]:
        """Map external ids to internal surrogate ids for one sport."""
        wanted = sorted({e for e in external_ids if e})
        if not wanted:
            return {}
        result = await self.db.execute(
            select(model.external_id, model.id).where(
                model.sport_id == sport_id,
                model.external_id.in_(wanted),
            )
        )
        return {row[0]: row[1] for row in result.all()}
