"""Yes/no confirmation sources.

The cleaner asks every question through a Confirmer so the same flow
can run against a terminal, a scripted answer list, or unattended with
every step declined.
"""

from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Iterable

import typer


class Confirmer(ABC):
    """Answers yes/no questions. Anything but an explicit yes is a no."""

    @abstractmethod
    def confirm(self, prompt: str) -> bool:
        """Ask ``prompt`` and return True only on an affirmative answer."""


class TerminalConfirmer(Confirmer):
    """Prompt on the terminal with a ``[y/N]`` question."""

    def confirm(self, prompt: str) -> bool:
        return typer.confirm(prompt, default=False)


class DecliningConfirmer(Confirmer):
    """Decline every question, for unattended runs."""

    def confirm(self, prompt: str) -> bool:
        return False


class ScriptedConfirmer(Confirmer):
    """Replay a fixed sequence of answers.

    Once the answers run out every further question is declined.
    All prompts are recorded in ``asked`` in the order they came in.

    Args:
        answers: Answers to return, in order.
    """

    def __init__(self, answers: Iterable[bool] = ()) -> None:
        self._answers: deque[bool] = deque(answers)
        self.asked: list[str] = []

    def confirm(self, prompt: str) -> bool:
        self.asked.append(prompt)
        if not self._answers:
            return False
        return self._answers.popleft()
