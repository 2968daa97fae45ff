"""Interactive session collecting change entries into a Bump.

Each step returns the `NextStep` to run, `run_session` drives them in a loop
until the `end` step is reached.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from rich.console import Console
from zero_3rdparty.enum_utils import StrEnum

from kac_bump.change_types import ChangeType, menu_lines
from kac_bump.changelog_file import create_changelog
from kac_bump.interactive import text
from kac_bump.models import Bump, CreateResult
from kac_bump.settings import BumpSettings

logger = logging.getLogger(__name__)

BANNER = "Changelog Generation\n"
PROMPT_CHANGE_TYPE = "Choose change type, Please type number: "
PROMPT_DESCRIBE = "Describe the change (eg: New Home UI): "
PROMPT_NEW_LOG = "Add more log? Please type [y/n]: "


class StepName(StrEnum):
    START = "start"
    CHOOSE_CHANGE_TYPE = "choose_change_type"
    DESCRIBE_LOG_CHANGE = "describe_log_change"
    NEW_LOG = "new_log"
    END = "end"


@dataclass
class NextStep:
    name: StepName
    change_type: ChangeType | None = None


@dataclass
class BumpSession:
    bump: Bump
    settings: BumpSettings
    console: Console = field(default_factory=Console)


def start(session: BumpSession, _: NextStep) -> NextStep:
    session.console.print(BANNER)
    return NextStep(StepName.CHOOSE_CHANGE_TYPE)


def parse_change_type(answer: str) -> ChangeType | None:
    try:
        key = int(answer.strip())
    except ValueError:
        return None
    return ChangeType.from_key(key)


def choose_change_type(session: BumpSession, _: NextStep) -> NextStep:
    console = session.console
    console.print("Change Types: ")
    for line in menu_lines():
        console.print(line)
    answer = text(PROMPT_CHANGE_TYPE)
    change_type = parse_change_type(answer)
    if change_type is None:
        console.print("Wrong log type!")
        return NextStep(StepName.CHOOSE_CHANGE_TYPE)
    return NextStep(StepName.DESCRIBE_LOG_CHANGE, change_type)


def describe_log_change(session: BumpSession, step: NextStep) -> NextStep:
    assert step.change_type is not None, "change type must be chosen before describing"
    answer = text(PROMPT_DESCRIBE)
    log = session.bump.add_log(step.change_type, answer)
    logger.debug(f"log added: {log}")
    session.console.print("OK!")
    return NextStep(StepName.NEW_LOG)


def new_log(session: BumpSession, _: NextStep) -> NextStep:
    answer = text(PROMPT_NEW_LOG)
    if answer.strip().lower() == "y":
        return NextStep(StepName.CHOOSE_CHANGE_TYPE)
    return NextStep(StepName.END)


def end(session: BumpSession) -> CreateResult | None:
    return create_changelog(session.bump, session.settings, session.console)


_steps: dict[StepName, Callable[[BumpSession, NextStep], NextStep]] = {
    StepName.START: start,
    StepName.CHOOSE_CHANGE_TYPE: choose_change_type,
    StepName.DESCRIBE_LOG_CHANGE: describe_log_change,
    StepName.NEW_LOG: new_log,
}


def run_session(session: BumpSession) -> CreateResult | None:
    step = NextStep(StepName.START)
    while step.name != StepName.END:
        logger.debug(f"running step {step.name}")
        step = _steps[step.name](session, step)
    return end(session)
