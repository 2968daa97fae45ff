from kac_bump.change_types import ChangeType
from kac_bump.changelog_file import create_changelog
from kac_bump.document import Changelog, Release, parse_changelog
from kac_bump.models import Bump, CreateResult, EntryResult, LogEntry

__all__ = [
    "Bump",
    "ChangeType",
    "Changelog",
    "CreateResult",
    "EntryResult",
    "LogEntry",
    "Release",
    "create_changelog",
    "parse_changelog",
]
