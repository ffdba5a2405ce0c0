"""Domain enumerations."""
from .region import Region
from .queue_category import QueueCategory, queue_name
from .role import Role
from .gameflow import GameflowPhase, StatusTone, LIVE_PHASES
from .tag_category import TagCategory
from .assessment import ThreatLevel, AllyQuality

__all__ = [
    'Region',
    'QueueCategory',
    'queue_name',
    'Role',
    'GameflowPhase',
    'StatusTone',
    'LIVE_PHASES',
    'TagCategory',
    'ThreatLevel',
    'AllyQuality',
]
