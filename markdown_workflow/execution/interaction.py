"""
Interaction - Operator Input Layer

Collaborators that show a prompt and return the operator's raw answer.
Interpreting the answer is the engine's job.
"""

from abc import ABC, abstractmethod
from typing import Optional

from rich.console import Console
from rich.markup import escape

AFFIRMATIVE_ANSWERS = ("y", "yes")


def is_affirmative(answer: str) -> bool:
    """Only 'y' or 'yes' (any case, surrounding whitespace ignored) affirms."""
    return answer.strip().lower() in AFFIRMATIVE_ANSWERS


def format_prompt(text: str) -> str:
    return f"→ Prompt: {text} [y/N]: "


class InputProvider(ABC):
    @abstractmethod
    def ask(self, prompt: str) -> str:
        """
        Shows the prompt and returns the operator's answer line.
        Raises EOFError or OSError if no answer can be read.
        """
        pass


class ConsoleInput(InputProvider):
    """Blocks on the terminal for an answer."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def ask(self, prompt: str) -> str:
        return self.console.input(escape(format_prompt(prompt)))


class AutoConfirmInput(InputProvider):
    """
    Displays the prompt and answers yes without waiting (dry runs).
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def ask(self, prompt: str) -> str:
        self.console.print(f"{format_prompt(prompt)}y (auto-confirmed)", markup=False, highlight=False)
        return "y"
