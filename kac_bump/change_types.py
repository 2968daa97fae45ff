from __future__ import annotations

from zero_3rdparty.enum_utils import StrEnum


class ChangeType(StrEnum):
    ADDED = "added"
    CHANGED = "changed"
    REMOVED = "removed"
    FIXED = "fixed"
    DEPRECATED = "deprecated"
    SECURITY = "security"

    @property
    def key(self) -> int:
        return list(ChangeType).index(self) + 1

    @property
    def label(self) -> str:
        return self.value.title()

    @classmethod
    def from_key(cls, key: int) -> ChangeType | None:
        return next(
            (change_type for change_type in cls if change_type.key == key), None
        )

    @classmethod
    def from_label(cls, label: str) -> ChangeType | None:
        return next(
            (
                change_type
                for change_type in cls
                if change_type.label.lower() == label.strip().lower()
            ),
            None,
        )

    @classmethod
    def markdown_order(cls) -> list[ChangeType]:
        """Section order used by https://keepachangelog.com"""
        return [
            cls.ADDED,
            cls.CHANGED,
            cls.DEPRECATED,
            cls.REMOVED,
            cls.FIXED,
            cls.SECURITY,
        ]


def menu_lines() -> list[str]:
    return [f"{change_type.key}. {change_type.label}" for change_type in ChangeType]
