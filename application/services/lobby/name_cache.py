"""Per-session memo of resolved player names."""
from typing import Dict, Optional


class SessionNameCache:
    """Names already resolved during the current live session.

    Keyed by stable id or client slot id. The owner clears it when the live
    session ends; nothing survives across games.
    """

    def __init__(self) -> None:
        self._names: Dict[str, str] = {}

    def get(self, key: Optional[str]) -> Optional[str]:
        if not key:
            return None
        return self._names.get(key)

    def remember(self, key: Optional[str], name: Optional[str]) -> None:
        if key and name:
            self._names[key] = name

    def clear(self) -> None:
        self._names.clear()

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, key: object) -> bool:
        return key in self._names
