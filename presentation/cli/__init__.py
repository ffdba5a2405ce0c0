"""Presentation CLI exports."""
from .app_services import AppServices, build_services
from .settings_command import SettingsCommand
from .import_command import ImportCommand
from .lobby_command import LobbyCommand
from .tags_command import TagsCommand
from .db_check_command import DBCheckCommand

__all__ = [
    "AppServices",
    "build_services",
    "SettingsCommand",
    "ImportCommand",
    "LobbyCommand",
    "TagsCommand",
    "DBCheckCommand",
]
