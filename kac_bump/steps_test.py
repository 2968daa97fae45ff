import pytest

from kac_bump.change_types import ChangeType
from kac_bump.conftest import new_bump
from kac_bump.document import parse_changelog
from kac_bump.interactive import KeyInput, question_patcher
from kac_bump.steps import (
    BumpSession,
    NextStep,
    StepName,
    choose_change_type,
    end,
    new_log,
    parse_change_type,
    run_session,
)


@pytest.fixture()
def session(settings, capture_console) -> BumpSession:
    return BumpSession(
        bump=new_bump("2.3.1"), settings=settings, console=capture_console
    )


@pytest.mark.parametrize(
    "change_type", list(ChangeType), ids=[t.label for t in ChangeType]
)
def test_choose_change_type_valid_key(session, change_type):
    with question_patcher([str(change_type.key)]):
        step = choose_change_type(session, NextStep(StepName.CHOOSE_CHANGE_TYPE))
    assert step == NextStep(StepName.DESCRIBE_LOG_CHANGE, change_type)
    assert "Wrong log type!" not in session.console.output


@pytest.mark.parametrize("answer", ["abc", "0", "7", "", "1.5", "-1"])
def test_choose_change_type_invalid_answer_reprompts(session, answer):
    with question_patcher([answer]):
        step = choose_change_type(session, NextStep(StepName.CHOOSE_CHANGE_TYPE))
    assert step == NextStep(StepName.CHOOSE_CHANGE_TYPE)
    assert "Wrong log type!" in session.console.output
    assert session.bump.logs == []


def test_parse_change_type_ignores_whitespace():
    assert parse_change_type(" 4 ") == ChangeType.FIXED


@pytest.mark.parametrize(
    "answer,expected",
    [("y", StepName.CHOOSE_CHANGE_TYPE), ("Y", StepName.CHOOSE_CHANGE_TYPE)]
    + [(answer, StepName.END) for answer in ["n", "", "yes", "no"]],
)
def test_new_log(session, answer, expected):
    with question_patcher([answer]):
        assert new_log(session, NextStep(StepName.NEW_LOG)).name == expected


def test_run_session_single_entry(session):
    with question_patcher(["1", "New Home UI", "n"]) as patcher:
        result = run_session(session)
    assert patcher.remaining == []
    assert result is not None
    assert result.path == session.settings.changelogs_dir / "2.3.x.md"
    output = session.console.output
    assert output.startswith("Changelog Generation\n")
    assert "1. Added" in output
    assert "6. Security" in output
    assert "OK!" in output
    assert "✅ Changelog from 2.3.1 has been created!" in output


def test_run_session_reprompts_until_valid(session):
    responses = ["abc", "0", "", "9", "2", "Refactor menu", "n"]
    with question_patcher(responses):
        result = run_session(session)
    assert result is not None
    assert session.console.output.count("Wrong log type!") == 4
    assert session.bump.logs[0].change_type == ChangeType.CHANGED
    assert len(session.bump.logs) == 1


def test_run_session_multiple_entries(session):
    responses = ["1", "A", "y", "4", "F", "Y", "1", "B", "n"]
    with question_patcher(responses):
        result = run_session(session)
    assert result is not None
    release = parse_changelog(result.path.read_text(encoding="utf-8")).releases[0]
    assert release.version == "2.3.1"
    assert release.entry_count == 3
    assert release.entries(ChangeType.ADDED) == ["A", "B"]
    assert release.entries(ChangeType.FIXED) == ["F"]


def test_run_session_interrupted_writes_nothing(session):
    with pytest.raises(KeyboardInterrupt):
        with question_patcher(["1", KeyInput.CONTROLC]):
            run_session(session)
    assert len(session.bump.logs) == 0
    assert not session.settings.changelogs_dir.exists()


def test_end_without_logs_writes_nothing(session):
    assert end(session) is None
    assert not session.settings.changelogs_dir.exists()
