"""Interactive collaborators used to obtain values and confirmations."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, Iterable, Sequence, TextIO

from .errors import InteractionError

__all__ = ["ConsolePrompter", "Prompter", "ScriptedPrompter"]


class Prompter(ABC):
    """Source of answers for questions the pipeline cannot settle itself."""

    @abstractmethod
    def ask(self, prompt: str) -> str:
        """Return a free-form text answer to ``prompt``."""

    @abstractmethod
    def confirm(self, prompt: str, *, default: bool = False) -> bool:
        """Return the yes/no answer to ``prompt``."""

    @abstractmethod
    def choose(self, prompt: str, options: Sequence[str]) -> str:
        """Return one element of ``options``."""


class ConsolePrompter(Prompter):
    """Prompt on the controlling terminal using :func:`input`."""

    def __init__(
        self,
        *,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        reader: Callable[[str], str] = input,
    ) -> None:
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._reader = reader

    def _read(self, prompt: str) -> str:
        if not self._stdin.isatty():
            raise InteractionError(f"cannot prompt for '{prompt}': no interactive terminal available")
        try:
            return self._reader(prompt)
        except EOFError as exc:
            raise InteractionError(f"no answer received for '{prompt}'") from exc

    def ask(self, prompt: str) -> str:
        return self._read(f"{prompt}: ")

    def confirm(self, prompt: str, *, default: bool = False) -> bool:
        suffix = "[Y/n]" if default else "[y/N]"
        while True:
            answer = self._read(f"{prompt} {suffix} ").strip().lower()
            if not answer:
                return default
            if answer in {"y", "yes"}:
                return True
            if answer in {"n", "no"}:
                return False
            self._stdout.write("Please answer 'y' or 'n'.\n")

    def choose(self, prompt: str, options: Sequence[str]) -> str:
        if not options:
            raise InteractionError(f"nothing to choose from for '{prompt}'")
        for index, option in enumerate(options, start=1):
            self._stdout.write(f"  {index}) {option}\n")
        while True:
            answer = self._read(f"{prompt} [1-{len(options)}]: ").strip()
            if answer in options:
                return answer
            if answer.isdigit() and 1 <= int(answer) <= len(options):
                return options[int(answer) - 1]
            self._stdout.write("Please enter a number from the list.\n")


class ScriptedPrompter(Prompter):
    """Replay pre-seeded answers and remember every prompt that was asked.

    ``answers`` are consumed in order by :meth:`ask` and :meth:`choose`;
    ``confirmations`` by :meth:`confirm`.
    """

    def __init__(
        self,
        answers: Iterable[str] = (),
        confirmations: Iterable[bool] = (),
    ) -> None:
        self._answers = deque(answers)
        self._confirmations = deque(confirmations)
        self.prompts: list[str] = []

    def ask(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self._answers:
            raise InteractionError(f"no scripted answer left for '{prompt}'")
        return self._answers.popleft()

    def confirm(self, prompt: str, *, default: bool = False) -> bool:
        self.prompts.append(prompt)
        if not self._confirmations:
            raise InteractionError(f"no scripted confirmation left for '{prompt}'")
        return self._confirmations.popleft()

    def choose(self, prompt: str, options: Sequence[str]) -> str:
        answer = self.ask(prompt)
        if answer not in options:
            raise InteractionError(f"'{answer}' is not one of {list(options)}")
        return answer
