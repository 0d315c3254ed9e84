"""
Centralized output handling with consistent formatting.

This module provides a single point of control for all user-facing output:
resolved statements go to the given sink (stdout by default), error
reports are printed with a consistent banner.
"""

import json
import sys
from typing import Iterable, List, Optional, TextIO

from termcolor import colored

from .constants import EFFECT_ALLOW, EFFECT_DENY
from .enums import OutputFormat
from .types import Statement


EFFECT_COLORS = {
    EFFECT_ALLOW: "green",
    EFFECT_DENY: "red",
}
ACTION_COLOR = "yellow"
RESOURCE_COLOR = "blue"


class StatementPresenter:
    """
    Render statements as text, one line per (statement, resource) pair.

    Lines have the form "<effect> <action>, <action> to <resource>".
    """

    def __init__(self, use_color: bool = True) -> None:
        self.use_color = use_color

    def _paint(self, text: str, color: Optional[str]) -> str:
        if not self.use_color or color is None:
            return text
        return colored(text, color)

    def format_effect(self, effect: str) -> str:
        # Unrecognized effects are shown as-is
        return self._paint(effect, EFFECT_COLORS.get(effect))

    def format_actions(self, actions: Iterable[str]) -> str:
        return ", ".join(self._paint(action, ACTION_COLOR) for action in actions)

    def lines(self, statement: Statement) -> List[str]:
        """Return the rendered lines for one statement (empty when it has no resources)."""
        effect = self.format_effect(statement.effect)
        actions = self.format_actions(statement.action)
        return [
            f"{effect} {actions} to {self._paint(resource, RESOURCE_COLOR)}"
            for resource in statement.resource
        ]

    def present(self, statement: Statement, sink: TextIO) -> None:
        for line in self.lines(statement):
            sink.write(line + "\n")


class OutputHandler:
    """Centralized output handling with consistent formatting."""

    @staticmethod
    def statements(
        statements: Iterable[Statement],
        output_format: OutputFormat = OutputFormat.TEXT,
        use_color: bool = True,
        sink: Optional[TextIO] = None
    ) -> None:
        """
        Write resolved statements to the sink.

        Args:
            statements: Statements in resolution order
            output_format: text (one line per resource) or json (array of statements)
            use_color: Highlight effect, actions and resources in text output
            sink: Stream to write to (defaults to stdout)
        """
        if sink is None:
            sink = sys.stdout

        if output_format == OutputFormat.JSON:
            sink.write(json.dumps([statement.to_dict() for statement in statements], indent=2) + "\n")
            return

        presenter = StatementPresenter(use_color=use_color)
        for statement in statements:
            presenter.present(statement, sink)

    @staticmethod
    def error(title: str, error: Exception) -> None:
        """
        Print formatted error message.

        Args:
            title: Error title
            error: Exception that occurred
        """
        print(f"\n🚨 {title}:\n{error}\n", file=sys.stderr)
