from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from typer import Typer

from kac_bump.changelog_file import changelog_path
from kac_bump.errors import ChangelogReadError, ChangelogWriteError, KacBumpError
from kac_bump.manifest import read_version
from kac_bump.models import Bump
from kac_bump.settings import BumpSettings
from kac_bump.steps import BumpSession, run_session

logger = logging.getLogger(__name__)
app = Typer(
    name="kac-bump",
    help="Add a release section to changelogs/{major}.{minor}.x.md interactively.",
    add_completion=False,
)


def configure_logging(settings: BumpSettings, console: Console) -> logging.Handler:
    handler = RichHandler(
        rich_tracebacks=False, level=settings.log_level, console=console
    )
    logging.basicConfig(
        level=settings.log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
    )
    return handler


@app.command()
def bump() -> None:
    """Collect change entries as a release for the package.json version."""
    settings = BumpSettings()
    console = Console()
    try:
        version = read_version(settings.manifest_path)
        changelog_path(version, settings.changelogs_dir)
        session = BumpSession(
            bump=Bump(version=version), settings=settings, console=console
        )
        result = run_session(session)
    except (ChangelogReadError, ChangelogWriteError) as e:
        # already printed where the file operation failed
        logger.debug("fatal file error", exc_info=True)
        raise typer.Exit(1) from e
    except KacBumpError as e:
        logger.debug("fatal error", exc_info=True)
        console.print(
            f"[red]{escape(str(e))}[/red]", highlight=False, soft_wrap=True
        )
        raise typer.Exit(1) from e
    if result is None:
        logger.info("no changelog written")


def main():
    configure_logging(BumpSettings(), Console(stderr=True))
    app()


if __name__ == "__main__":
    main()
