"""
Line-oriented console used by the menu and the resolver.

All prompting goes through Console so the interactive flows can be driven
by scripted input in tests.
"""

import sys
from typing import Any, Callable, Dict, List, Optional, TextIO, TypeVar

from mechanic_shop.utils.validators import ValidationError

T = TypeVar("T")


class Console:
    """Reads answers from a text stream and writes prompts and messages."""

    def __init__(
        self,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr

    def ask(self, prompt: str) -> str:
        """Print a prompt and read one line. Raises EOFError at end of input."""
        self.stdout.write(prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            raise EOFError("end of input")
        return line.rstrip("\r\n")

    def say(self, message: str = "") -> None:
        self.stdout.write(message + "\n")

    def error(self, message: str) -> None:
        self.stderr.write(message + "\n")
        self.stderr.flush()

    def ask_valid(self, prompt: str, parse: Callable[[str], T]) -> T:
        """Ask until parse accepts the answer.

        parse raises ValidationError (or ValueError) to reject; the reason is
        shown and the same prompt is repeated.
        """
        while True:
            answer = self.ask(prompt)
            try:
                return parse(answer)
            except (ValidationError, ValueError) as e:
                self.say(f"\tError: {e}")

    def print_rows(self, rows: List[Dict[str, Any]]) -> int:
        """Print rows as a tab-separated table with a header; returns the row count."""
        if rows:
            columns = list(rows[0].keys())
            self.say("\t".join(columns))
            for row in rows:
                self.say("\t".join(str(row[column]) for column in columns))
        return len(rows)
