"""Player tag categories."""
from enum import Enum


class TagCategory(Enum):
    """Local annotation a user can attach to another player."""

    TOXIC = "toxic"
    FRIENDLY = "friendly"
    NOTABLE = "notable"
    DUO = "duo"
    WEAK = "weak"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def from_string(cls, value: str) -> 'TagCategory':
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown tag '{value}'. Expected one of: {', '.join(t.value for t in cls)}"
            ) from None
