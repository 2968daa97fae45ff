import logging
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from kac_bump.document import Changelog, Release, parse_changelog, release_mutation
from kac_bump.errors import (
    ChangelogReadError,
    ChangelogWriteError,
    InvalidChangeError,
    InvalidVersionError,
)
from kac_bump.models import Bump, CreateResult, EntryResult
from kac_bump.settings import BumpSettings

logger = logging.getLogger(__name__)
CHANGELOG_TITLE = "Changelog"


def major_minor(version: str) -> tuple[str, str]:
    major, _, rest = version.partition(".")
    minor = rest.split(".")[0]
    if not major or not minor:
        raise InvalidVersionError(version)
    return major, minor


def changelog_filename(version: str) -> str:
    major, minor = major_minor(version)
    return f"{major}.{minor}.x.md"


def changelog_path(version: str, changelogs_dir: Path) -> Path:
    return changelogs_dir / changelog_filename(version)


def new_changelog(version: str) -> Changelog:
    major, minor = major_minor(version)
    return Changelog(
        title=CHANGELOG_TITLE,
        description=f"All notable changes to {major}.{minor}.x version will be documented in this file.",
    )


def _error_line(console: Console, message: str) -> None:
    console.print(f"[red]❌ {escape(message)}[/red]")


def _ensure_dir(path: Path, console: Console) -> None:
    if path.is_dir():
        return
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        _error_line(console, f"Error write file: {e}")
        raise ChangelogWriteError(str(e), path) from e
    logger.info(f"created directory {path}")


def resolve_changelog(
    version: str, changelogs_dir: Path, console: Console
) -> tuple[Path, Changelog]:
    path = changelog_path(version, changelogs_dir)
    _ensure_dir(changelogs_dir, console)
    if path.exists():
        logger.info(f"parsing existing changelog {path}")
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            _error_line(console, f"Error read file: {e}")
            raise ChangelogReadError(str(e), path) from e
        return path, parse_changelog(text)
    return path, new_changelog(version)


def merge_release(
    changelog: Changelog, bump: Bump, console: Console
) -> list[EntryResult]:
    release = Release(version=bump.version, date=bump.date.date())
    results: list[EntryResult] = []
    for log in bump.logs:
        mutation = release_mutation(log.change_type)
        try:
            mutation(release, log.description)
        except InvalidChangeError as e:
            logger.warning(f"skipping log entry '{log}': {e}")
            _error_line(console, f"Failed to add log entry: {log}")
            console.print(f"Error: {escape(str(e))}")
            results.append(EntryResult(log=log, error=str(e)))
            continue
        results.append(EntryResult(log=log))
    changelog.add_release(release)
    return results


def write_changelog(path: Path, changelog: Changelog, console: Console) -> None:
    try:
        path.write_text(changelog.to_markdown(), encoding="utf-8")
    except OSError as e:
        _error_line(console, f"Error write file: {e}")
        raise ChangelogWriteError(str(e), path) from e


def create_changelog(
    bump: Bump, settings: BumpSettings, console: Console
) -> CreateResult | None:
    if not bump.logs:
        logger.info("no logs added, skipping changelog generation")
        return None
    path, changelog = resolve_changelog(bump.version, settings.changelogs_dir, console)
    entries = merge_release(changelog, bump, console)
    write_changelog(path, changelog, console)
    result = CreateResult(path=path, version=bump.version, entries=entries)
    console.print(f"✅ Changelog from {bump.version} has been created!")
    for skipped in result.skipped:
        log = skipped.log
        reason = escape(skipped.error or "")
        console.print(
            f"  skipped {log.change_type.label}: {escape(repr(log.description))} ({reason})"
        )
    logger.info(
        f"wrote {len(result.added)} entries to {path}, skipped {len(result.skipped)}"
    )
    return result
