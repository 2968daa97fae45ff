"""Keep a Changelog document model, https://keepachangelog.com

Parsing and rendering are symmetric: `parse_changelog(changelog.to_markdown())`
returns an equal document.
"""

from __future__ import annotations

import datetime
import logging
import re
from typing import Callable, ClassVar

from pydantic import BaseModel, Field

from kac_bump.change_types import ChangeType
from kac_bump.errors import ChangelogParseError, InvalidChangeError

logger = logging.getLogger(__name__)

_title_regex = re.compile(r"^#\s+(?P<title>.+?)\s*$")
_release_regex = re.compile(
    r"^##\s+\[?(?P<version>[^\]\s]+)\]?"
    r"(?:\s+-\s+(?P<date>\S+))?"
    r"(?P<yanked>\s+\[YANKED\])?\s*$"
)
_section_regex = re.compile(r"^###\s+(?P<label>.+?)\s*$")
_bullet_regex = re.compile(r"^[-*]\s+(?P<text>.*)$")
_link_regex = re.compile(r"^\[[^\]]+\]:\s*\S+")
_BULLET_INDENT = "  "


def version_key(version: str) -> tuple[tuple[int, ...], bool, str]:
    """Sortable key, a pre-release sorts before its final release.

    >>> version_key("1.2.3-rc1") < version_key("1.2.3")
    True
    """
    core, _, pre_release = version.partition("-")
    numbers = tuple(int(part) if part.isdigit() else 0 for part in core.split("."))
    return numbers, not pre_release, pre_release


class Release(BaseModel):
    UNRELEASED: ClassVar[str] = "Unreleased"

    version: str
    date: datetime.date | None = None
    yanked: bool = False
    description: str = ""
    changes: dict[ChangeType, list[str]] = Field(default_factory=dict)

    @property
    def is_unreleased(self) -> bool:
        return self.version.lower() == self.UNRELEASED.lower()

    @property
    def entry_count(self) -> int:
        return sum(len(entries) for entries in self.changes.values())

    def entries(self, change_type: ChangeType) -> list[str]:
        return self.changes.get(change_type, [])

    def add_change(self, change_type: ChangeType, description: str) -> None:
        description = description.strip()
        if not description:
            raise InvalidChangeError(
                f"empty description for change type {change_type.label}"
            )
        self.changes.setdefault(change_type, []).append(description)

    def added(self, description: str) -> None:
        self.add_change(ChangeType.ADDED, description)

    def changed(self, description: str) -> None:
        self.add_change(ChangeType.CHANGED, description)

    def removed(self, description: str) -> None:
        self.add_change(ChangeType.REMOVED, description)

    def fixed(self, description: str) -> None:
        self.add_change(ChangeType.FIXED, description)

    def deprecated(self, description: str) -> None:
        self.add_change(ChangeType.DEPRECATED, description)

    def security(self, description: str) -> None:
        self.add_change(ChangeType.SECURITY, description)

    def merge(self, other: Release) -> None:
        if not self.description:
            self.description = other.description
        for change_type, entries in other.changes.items():
            self.changes.setdefault(change_type, []).extend(entries)

    def header(self) -> str:
        if self.is_unreleased:
            header = f"## [{self.UNRELEASED}]"
        else:
            header = f"## [{self.version}]"
        if self.date:
            header += f" - {self.date.isoformat()}"
        if self.yanked:
            header += " [YANKED]"
        return header

    def markdown_lines(self) -> list[str]:
        lines = [self.header(), ""]
        if self.description:
            lines.extend([self.description, ""])
        for change_type in ChangeType.markdown_order():
            entries = self.entries(change_type)
            if not entries:
                continue
            lines.extend([f"### {change_type.label}", ""])
            lines.extend(_as_bullet(entry) for entry in entries)
            lines.append("")
        return lines


ReleaseMutation = Callable[[Release, str], None]

RELEASE_MUTATIONS: dict[ChangeType, ReleaseMutation] = {
    ChangeType.ADDED: Release.added,
    ChangeType.CHANGED: Release.changed,
    ChangeType.REMOVED: Release.removed,
    ChangeType.FIXED: Release.fixed,
    ChangeType.DEPRECATED: Release.deprecated,
    ChangeType.SECURITY: Release.security,
}


def release_mutation(change_type: ChangeType) -> ReleaseMutation:
    return RELEASE_MUTATIONS[change_type]


def _as_bullet(entry: str) -> str:
    first, *rest = entry.splitlines()
    return "\n".join([f"- {first}"] + [f"{_BULLET_INDENT}{line}" for line in rest])


def _release_sort_key(
    release: Release,
) -> tuple[bool, tuple[tuple[int, ...], bool, str]]:
    return release.is_unreleased, version_key(release.version)


class Changelog(BaseModel):
    title: str = "Changelog"
    description: str = ""
    releases: list[Release] = Field(default_factory=list)
    links: list[str] = Field(default_factory=list)

    def find_release(self, version: str) -> Release | None:
        return next(
            (release for release in self.releases if release.version == version), None
        )

    def add_release(self, release: Release) -> Release:
        """Returns the release stored in the document.

        A release with an already existing version is merged into the existing one.
        """
        if existing := self.find_release(release.version):
            logger.info(f"merging entries into existing release {release.version}")
            existing.merge(release)
            return existing
        self.releases.append(release)
        self.releases.sort(key=_release_sort_key, reverse=True)
        return release

    def to_markdown(self) -> str:
        lines = [f"# {self.title}", ""]
        if self.description:
            lines.extend([self.description, ""])
        for release in self.releases:
            lines.extend(release.markdown_lines())
        if self.links:
            lines.extend(self.links)
        return "\n".join(lines).rstrip("\n") + "\n"

    def __str__(self) -> str:
        return self.to_markdown()


def _parse_date(raw: str | None, line_number: int) -> datetime.date | None:
    if not raw:
        return None
    try:
        return datetime.date.fromisoformat(raw)
    except ValueError as e:
        raise ChangelogParseError(f"invalid release date {raw!r}", line_number) from e


def _continuation_text(line: str) -> str:
    # only the bullet indent is dropped, deeper indents keep nested lists
    if line.startswith(_BULLET_INDENT):
        return line[len(_BULLET_INDENT) :].rstrip()
    return line.strip()


def parse_changelog(text: str) -> Changelog:
    title = ""
    description_lines: list[str] = []
    releases: list[Release] = []
    links: list[str] = []
    release: Release | None = None
    change_type: ChangeType | None = None
    last_entry_index: int | None = None
    release_description: list[str] = []

    for line_number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not title:
            if not stripped:
                continue
            if title_match := _title_regex.match(line):
                title = title_match["title"]
                continue
            raise ChangelogParseError("expected a '# ' title line", line_number)
        if _link_regex.match(line):
            links.append(stripped)
            continue
        if release_match := _release_regex.match(line):
            release = Release(
                version=release_match["version"],
                date=_parse_date(release_match["date"], line_number),
                yanked=bool(release_match["yanked"]),
            )
            releases.append(release)
            change_type = None
            last_entry_index = None
            release_description = []
            continue
        if release is None:
            description_lines.append(line.rstrip())
            continue
        if not stripped:
            if change_type is None:
                release_description.append("")
            continue
        if section_match := _section_regex.match(line):
            label = section_match["label"]
            change_type = ChangeType.from_label(label)
            if change_type is None:
                raise ChangelogParseError(f"unknown change type {label!r}", line_number)
            last_entry_index = None
            continue
        if bullet_match := _bullet_regex.match(line):
            if change_type is None:
                raise ChangelogParseError("entry outside a change type", line_number)
            entries = release.changes.setdefault(change_type, [])
            entries.append(bullet_match["text"].rstrip())
            last_entry_index = len(entries) - 1
            continue
        if change_type is None:
            release_description.append(line.rstrip())
            release.description = "\n".join(release_description).strip()
            continue
        if line[:1].isspace() and last_entry_index is not None:
            entries = release.changes[change_type]
            entries[last_entry_index] += "\n" + _continuation_text(line)
            continue
        raise ChangelogParseError(f"unexpected text {stripped!r}", line_number)
    if not title:
        raise ChangelogParseError("expected a '# ' title line", 1)
    return Changelog(
        title=title,
        description="\n".join(description_lines).strip(),
        releases=releases,
        links=links,
    )
