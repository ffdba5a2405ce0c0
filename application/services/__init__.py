"""Application services root exports."""
from .data_persistence_service import DataPersistenceService, PersistenceError
from .encounters import EncounterAggregator
from .gameflow import GameflowMonitor, GameflowStateMachine, classify
from .lobby import LobbyDetector, SessionNameCache

__all__ = [
    "DataPersistenceService",
    "PersistenceError",
    "EncounterAggregator",
    "GameflowMonitor",
    "GameflowStateMachine",
    "classify",
    "LobbyDetector",
    "SessionNameCache",
]
