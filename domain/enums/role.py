"""Role/Position enumeration."""
from enum import Enum
from typing import Optional


class Role(Enum):
    """Normalized lane roles. Unrecognized positions map to UNKNOWN."""

    TOP = "Top"
    JUNGLE = "Jungle"
    MID = "Mid"
    ADC = "ADC"
    SUPPORT = "Support"
    UNKNOWN = "Unknown"

    @property
    def label(self) -> str:
        return self.value

    @property
    def sort_order(self) -> int:
        return list(Role).index(self)

    @classmethod
    def from_string(cls, role_str: Optional[str]) -> 'Role':
        """Map a raw position string (TOP, MIDDLE, UTILITY, bot, ...) to a Role."""
        if not role_str:
            return cls.UNKNOWN
        return _ROLE_ALIASES.get(role_str.strip().upper(), cls.UNKNOWN)


_ROLE_ALIASES = {
    "TOP": Role.TOP,
    "JUNGLE": Role.JUNGLE,
    "JG": Role.JUNGLE,
    "JGL": Role.JUNGLE,
    "MID": Role.MID,
    "MIDDLE": Role.MID,
    "ADC": Role.ADC,
    "BOT": Role.ADC,
    "BOTTOM": Role.ADC,
    "CARRY": Role.ADC,
    "DUO_CARRY": Role.ADC,
    "SUPPORT": Role.SUPPORT,
    "SUP": Role.SUPPORT,
    "UTILITY": Role.SUPPORT,
    "DUO_SUPPORT": Role.SUPPORT,
}
