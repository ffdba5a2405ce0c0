"""Use cases."""
from .configure_user import ConfigureUserUseCase, ConfigurationError
from .import_match_history import ImportMatchHistoryUseCase, ImportFailedError, ImportResult
from .analyze_lobby import AnalyzeLobbyUseCase, LobbyLookup

__all__ = [
    'ConfigureUserUseCase',
    'ConfigurationError',
    'ImportMatchHistoryUseCase',
    'ImportFailedError',
    'ImportResult',
    'AnalyzeLobbyUseCase',
    'LobbyLookup',
]
