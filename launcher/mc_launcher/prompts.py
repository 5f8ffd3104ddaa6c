"""
Console prompts for the interactive menu, built on rich.

Choices are shown as a numbered list and picked by number, which works the
same in every terminal (no raw key handling).
"""
from __future__ import annotations
import re
from typing import Callable, List, Optional, Sequence
from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, IntPrompt, Prompt

_SPLIT = re.compile(r"[,\s]+")


def parse_selection(text: str, count: int) -> List[int]:
    """
    Turn user input such as ``"1, 3-5"`` into sorted zero-based indices.

    Raises ValueError for anything outside ``1..count``.
    """
    picked = set()
    for token in _SPLIT.split(text.strip()):
        if not token:
            continue
        if "-" in token:
            lo_s, _, hi_s = token.partition("-")
            lo, hi = int(lo_s), int(hi_s)
            if lo > hi:
                raise ValueError(f"Invalid range {token!r}")
            numbers = range(lo, hi + 1)
        else:
            numbers = [int(token)]
        for n in numbers:
            if not 1 <= n <= count:
                raise ValueError(f"{n} is not between 1 and {count}")
            picked.add(n - 1)
    return sorted(picked)


class Prompter:
    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def _show_choices(self, message: str, choices: Sequence[str]) -> None:
        self.console.print(f"[bold]{escape(message)}[/bold]")
        for i, choice in enumerate(choices, 1):
            self.console.print(f"  [cyan]{i:>2}[/cyan]  {escape(choice)}")

    def select(self, message: str, choices: Sequence[str]) -> str:
        if not choices:
            raise ValueError("select() needs at least one choice")
        self._show_choices(message, choices)
        answer = Prompt.ask(
            "Choice",
            console=self.console,
            choices=[str(i) for i in range(1, len(choices) + 1)],
            show_choices=False,
            default="1",
        )
        return choices[int(answer) - 1]

    def multiselect(self, message: str, choices: Sequence[str]) -> List[str]:
        if not choices:
            return []
        self._show_choices(message, choices)
        while True:
            answer = Prompt.ask(
                "Numbers (e.g. 1,3-4, empty for none)", console=self.console, default="", show_default=False
            )
            try:
                return [choices[i] for i in parse_selection(answer, len(choices))]
            except ValueError as e:
                self.console.print(f"[red]{escape(str(e))}[/red]")

    def text(self, message: str) -> str:
        return Prompt.ask(escape(message), console=self.console)

    def integer(self, message: str, default: Optional[int] = None,
                validate: Optional[Callable[[int], object]] = None) -> int:
        while True:
            if default is None:
                value = IntPrompt.ask(escape(message), console=self.console)
            else:
                value = IntPrompt.ask(escape(message), console=self.console, default=default)
            if validate is None:
                return value
            try:
                validate(value)
            except ValueError as e:
                self.console.print(f"[red]{escape(str(e))}[/red]")
                continue
            return value

    def confirm(self, message: str, default: bool = False) -> bool:
        return Confirm.ask(escape(message), console=self.console, default=default)

    def clear(self) -> None:
        self.console.clear()
