"""Coloured status lines for the terminal."""

from __future__ import annotations

import sys
from typing import TextIO

COLORS = {
    "reset": "\x1b[0m",
    "bright": "\x1b[1m",
    "dim": "\x1b[2m",
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
    "bg_blue": "\x1b[44m",
}


class Console:
    def __init__(self, stream: TextIO | None = None, color: bool = True,
                 err_stream: TextIO | None = None):
        self.stream = stream if stream is not None else sys.stdout
        self.err_stream = err_stream if err_stream is not None else sys.stderr
        isatty = getattr(self.stream, "isatty", None)
        # No ANSI codes when piped or redirected.
        self.color = color and isatty is not None and isatty()

    def paint(self, text: str, *styles: str) -> str:
        if not self.color or not styles:
            return text
        return "".join(COLORS[s] for s in styles) + text + COLORS["reset"]

    def _line(self, glyph: str, style: str, message: str, stream: TextIO | None = None) -> None:
        print(f"{self.paint(glyph, style)} {message}", file=stream or self.stream)

    def banner(self, title: str) -> None:
        print(f"\n{self.paint(f' {title} ', 'bright', 'bg_blue')}\n", file=self.stream)

    def info(self, message: str) -> None:
        self._line("ℹ", "blue", message)

    def step(self, message: str) -> None:
        self._line("→", "blue", message)

    def success(self, message: str) -> None:
        self._line("✓", "green", message)

    def failure(self, message: str) -> None:
        self._line("✗", "red", message, self.err_stream)

    def done(self, message: str) -> None:
        self._line("✨", "green", self.paint(message, "bright"))
