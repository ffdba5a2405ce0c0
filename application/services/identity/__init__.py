"""Identity normalization and payload name resolution."""
from .normalizer import (
    NameKeys,
    normalize_key,
    name_keys,
    parse_riot_id,
    format_riot_id,
    is_configured_user,
)
from .resolution import (
    NAME_CANDIDATES,
    resolve_name_parts,
    resolve_display_name,
    resolve_puuid,
    resolve_slot_id,
)

__all__ = [
    'NameKeys',
    'normalize_key',
    'name_keys',
    'parse_riot_id',
    'format_riot_id',
    'is_configured_user',
    'NAME_CANDIDATES',
    'resolve_name_parts',
    'resolve_display_name',
    'resolve_puuid',
    'resolve_slot_id',
]
