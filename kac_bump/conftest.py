from datetime import datetime, timezone
from io import StringIO
from pathlib import Path

import pytest
from prompt_toolkit.application import create_app_session
from prompt_toolkit.output import DummyOutput
from rich.console import Console

from kac_bump.change_types import ChangeType
from kac_bump.models import Bump
from kac_bump.settings import BumpSettings

BUMP_DATE = datetime(2025, 10, 18, 21, 13, 6, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _isolated_app_session():
    # prompt_toolkit caches its default output per app session; isolate it per test
    # so a stdout swapped in (and closed) by CliRunner is not reused later.
    with create_app_session(output=DummyOutput()):
        yield


@pytest.fixture()
def settings(tmp_path: Path) -> BumpSettings:
    return BumpSettings(root_dir=tmp_path)


class CaptureConsole(Console):
    def __init__(self) -> None:
        self.capture_stream = StringIO()
        super().__init__(
            file=self.capture_stream,
            width=200,
            force_terminal=False,
            color_system=None,
            _environ={},
        )

    @property
    def output(self) -> str:
        return self.capture_stream.getvalue()


@pytest.fixture()
def capture_console() -> CaptureConsole:
    return CaptureConsole()


def new_bump(version: str = "2.3.1", *logs: tuple[ChangeType, str]) -> Bump:
    bump = Bump(version=version, date=BUMP_DATE)
    for change_type, description in logs:
        bump.add_log(change_type, description)
    return bump
