"""Queue category classification."""
from enum import Enum
from typing import Optional


class QueueCategory(Enum):
    """Game-mode bucket used to split encounter statistics.

    The mapping from numeric queue ids is a closed static table; anything not
    listed (customs, co-op vs AI, rotating modes, ids Riot adds later) is
    ``OTHER``.
    """

    RANKED = "Ranked"
    NORMAL = "Normal"
    ARAM = "ARAM"
    ARENA = "Arena"
    OTHER = "Other"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_queue_id(cls, queue_id: Optional[int]) -> 'QueueCategory':
        """Classify a queue id. Never raises."""
        try:
            return _QUEUE_CATEGORIES.get(int(queue_id), cls.OTHER)
        except (TypeError, ValueError):
            return cls.OTHER

    @classmethod
    def ordered(cls) -> list['QueueCategory']:
        return list(cls)


_QUEUE_CATEGORIES = {
    420: QueueCategory.RANKED,   # Ranked Solo/Duo
    440: QueueCategory.RANKED,   # Ranked Flex 5v5
    400: QueueCategory.NORMAL,   # Normal Draft
    430: QueueCategory.NORMAL,   # Normal Blind
    480: QueueCategory.NORMAL,   # Swiftplay
    490: QueueCategory.NORMAL,   # Quickplay
    450: QueueCategory.ARAM,     # ARAM
    100: QueueCategory.ARAM,     # ARAM (Butcher's Bridge)
    720: QueueCategory.ARAM,     # ARAM Clash
    2400: QueueCategory.ARAM,    # ARAM: Mayhem
    1700: QueueCategory.ARENA,   # Arena
}

QUEUE_NAMES = {
    420: "Ranked Solo/Duo",
    440: "Ranked Flex",
    400: "Normal Draft",
    430: "Normal Blind",
    480: "Swiftplay",
    490: "Quickplay",
    450: "ARAM",
    1700: "Arena",
}


def queue_name(queue_id: Optional[int]) -> str:
    """Human-readable queue label, falling back to the category name."""
    if queue_id in QUEUE_NAMES:
        return QUEUE_NAMES[queue_id]
    return QueueCategory.from_queue_id(queue_id).label
