"""Terminal prompter: numbered pick list and validated integer input."""

from __future__ import annotations

import sys
from typing import Sequence, TextIO

CANCEL_HINT = "(empty input cancels)"


class TerminalPrompter:
    """Prompts over a pair of text streams (stdin/stdout by default).

    An empty answer or end of input cancels the prompt and returns None.
    A numeric answer always picks by position in the list, even when an
    option is itself named with digits.
    Invalid answers are rejected with a message and asked again.
    """

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None):
        self._in = stdin or sys.stdin
        self._out = stdout or sys.stdout

    def pick_one(self, options: Sequence[str], prompt: str) -> str | None:
        options = list(options)
        if not options:
            return None

        self._write(f"\n{prompt} {CANCEL_HINT}\n")
        width = len(str(len(options)))
        for index, option in enumerate(options, start=1):
            self._write(f"  {index:>{width}}) {option}\n")

        while True:
            answer = self._ask("> ")
            if answer is None:
                return None
            if answer.isdigit():
                if 1 <= int(answer) <= len(options):
                    return options[int(answer) - 1]
            elif answer in options:
                return answer
            self._write(f"Please enter a number between 1 and {len(options)}\n")

    def prompt_integer(self, prompt: str, minimum: int, maximum: int) -> int | None:
        while True:
            answer = self._ask(f"{prompt} {CANCEL_HINT}: ")
            if answer is None:
                return None
            try:
                value = int(answer)
            except ValueError:
                value = None
            if value is not None and minimum <= value <= maximum:
                return value
            self._write(f"Please enter a number between {minimum} and {maximum}\n")

    def _ask(self, prompt: str) -> str | None:
        self._write(prompt)
        line = self._in.readline()
        if not line:
            self._write("\n")
            return None
        answer = line.strip()
        return answer or None

    def _write(self, text: str) -> None:
        self._out.write(text)
        self._out.flush()
