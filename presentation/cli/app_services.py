"""Object graph shared by the console commands."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from config import settings
from application.services import DataPersistenceService, EncounterAggregator, LobbyDetector
from infrastructure.repositories import MatchRepository, PlayerRepository


@dataclass
class AppServices:
    store: DataPersistenceService
    matches: MatchRepository
    players: PlayerRepository
    aggregator: EncounterAggregator
    detector: LobbyDetector

    def close(self) -> None:
        self.store.close()


def build_services(db_path: Optional[Path] = None) -> AppServices:
    settings.create_directories()
    store = DataPersistenceService(db_path or settings.db_path())
    matches = MatchRepository(store)
    players = PlayerRepository(store)
    aggregator = EncounterAggregator(matches, players)
    detector = LobbyDetector(aggregator, players, tags=players)
    return AppServices(store, matches, players, aggregator, detector)
