"""Inspired by: https://github.com/tmbo/questionary/blob/master/tests/utils.py"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from prompt_toolkit.input.defaults import create_pipe_input
from prompt_toolkit.output import DummyOutput
from questionary import Question
from questionary import text as _text

QuestionAsker = Callable[[Question], str]


def _default_asker(q: Question) -> str:
    # unsafe_ask raises KeyboardInterrupt on Ctrl-C instead of returning None
    return q.unsafe_ask()


_question_asker: QuestionAsker = _default_asker


def text(prompt_text: str, default: str = "") -> str:
    return _question_asker(_text(prompt_text, default=default))


class KeyInput:
    ENTER = "\r"
    CONTROLC = "\x03"


@dataclass
class question_patcher:
    """Context manager to answer questionary prompts from a list, useful for testing."""

    responses: list[str]
    next_response: int = 0

    _old_asker: QuestionAsker | None = field(default=None, init=False, repr=False)

    def __enter__(self) -> question_patcher:
        global _question_asker
        self._old_asker = _question_asker
        _question_asker = self.ask_question
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        global _question_asker
        assert self._old_asker is not None
        _question_asker = self._old_asker

    @property
    def remaining(self) -> list[str]:
        return self.responses[self.next_response :]

    def ask_question(self, q: Question) -> str:
        try:
            input_response = self.responses[self.next_response]
        except IndexError:
            raise ValueError(
                f"Not enough responses provided. Expected {len(self.responses)}, got {self.next_response + 1} questions."
            )
        self.next_response += 1
        with create_pipe_input() as inp:
            inp.send_text(input_response + KeyInput.ENTER)
            q.application.output = DummyOutput()
            q.application.input = inp
            return _default_asker(q)
