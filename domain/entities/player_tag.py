"""Player tag annotation."""
from dataclasses import dataclass
from typing import Optional
from ..enums import TagCategory


@dataclass
class PlayerTag:
    puuid: str
    category: TagCategory
    note: Optional[str] = None
    created_at: int = 0

    def to_dict(self) -> dict:
        return {
            'puuid': self.puuid,
            'tag_type': self.category.value,
            'label': self.category.label,
            'note': self.note,
            'created_at': self.created_at,
        }
