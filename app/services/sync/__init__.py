"""
Sync services module.

This module contains specialized services for synchronizing data
from third-party sports APIs to the local database.

Services:
- LeagueSyncService: Competitions, teams, fixtures, standings (TheSportsDB)
- F1SyncService: Drivers, constructors, sessions, driver standings (Jolpica)
- SyncOrchestrator: Dispatches sync runs per sport
"""
from app.services.sync.base import BaseSyncService
from app.services.sync.league_sync import LeagueSyncService
from app.services.sync.f1_sync import F1SyncService
from app.services.sync.orchestrator import SyncOrchestrator

__all__ = [
    "BaseSyncService",
    "LeagueSyncService",
    "F1SyncService",
    "SyncOrchestrator",
]
