"""Head-to-head assessments derived from cohort win rates."""
from enum import Enum


class ThreatLevel(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AllyQuality(Enum):
    POOR = "poor"
    AVERAGE = "average"
    GOOD = "good"
