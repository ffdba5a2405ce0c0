"""Match entity representing a complete match."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from .participant import Participant
from ..enums import QueueCategory


@dataclass
class Match:
    """A completed game. Immutable once stored: re-imports never touch it."""

    match_id: str
    game_creation: int  # Unix timestamp milliseconds
    game_duration: int  # Seconds
    game_mode: str
    queue_id: int
    platform_id: str = ""

    participants: list[Participant] = field(default_factory=list)

    @property
    def game_date(self) -> datetime:
        return datetime.fromtimestamp(self.game_creation / 1000)

    @property
    def queue_category(self) -> QueueCategory:
        return QueueCategory.from_queue_id(self.queue_id)

    def participant(self, puuid: str) -> Optional[Participant]:
        return next((p for p in self.participants if p.puuid == puuid), None)

    def get_participants_by_team(self, team_id: int) -> list[Participant]:
        return [p for p in self.participants if p.team_id == team_id]

    def to_dict(self) -> dict:
        return {
            'match_id': self.match_id,
            'game_creation': self.game_creation,
            'game_date': self.game_date.isoformat(),
            'game_duration_seconds': self.game_duration,
            'game_mode': self.game_mode,
            'queue_id': self.queue_id,
            'queue_category': self.queue_category.label,
            'platform_id': self.platform_id,
            'participants': [p.to_dict() for p in self.participants],
        }
