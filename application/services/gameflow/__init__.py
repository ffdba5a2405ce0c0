"""Gameflow classification and polling."""
from .classifier import (
    ENRICHMENT_PHASES,
    GameflowStateMachine,
    GameflowStatus,
    GameflowTransition,
    classify,
    ends_live_session,
    should_enrich,
)
from .monitor import GameflowMonitor

__all__ = [
    'ENRICHMENT_PHASES',
    'GameflowStateMachine',
    'GameflowStatus',
    'GameflowTransition',
    'GameflowMonitor',
    'classify',
    'ends_live_session',
    'should_enrich',
]
