import pytest

from application.services import DataPersistenceService, EncounterAggregator, LobbyDetector
from domain.entities import UserConfig
from infrastructure.repositories import MatchRepository, PlayerRepository

from helpers import LOCAL_NAME, LOCAL_PUUID, fixed_clock


@pytest.fixture
def store(tmp_path):
    """Fresh SQLite database per test."""
    service = DataPersistenceService(tmp_path / "db" / "test.sqlite")
    yield service
    service.close()


@pytest.fixture
def matches(store):
    return MatchRepository(store)


@pytest.fixture
def players(store):
    return PlayerRepository(store)


@pytest.fixture
def configured_user(players):
    return players.save_user_config(
        UserConfig(puuid=LOCAL_PUUID, summoner_name=LOCAL_NAME, region="euw1")
    )


@pytest.fixture
def aggregator(matches, players):
    return EncounterAggregator(matches, players, freshness_cutoff_minutes=30, clock=fixed_clock)


@pytest.fixture
def detector(aggregator, players):
    return LobbyDetector(aggregator, players, tags=players)
