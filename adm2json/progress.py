"""Single-line progress reporting for one province's downloads."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import Protocol, TextIO

from .console import COLORS

BAR_WIDTH = 30


def round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


@dataclass
class ProgressState:
    completed: int
    total: int

    @property
    def ratio(self) -> float:
        return self.completed / self.total if self.total else 1.0

    @property
    def percentage(self) -> int:
        return round_half_up(self.ratio * 100)

    def bar(self, width: int = BAR_WIDTH) -> str:
        filled = min(width, round_half_up(width * self.ratio))
        return "█" * filled + "░" * (width - filled)


class Renderer(Protocol):
    def render(self, state: ProgressState, label: str, item: str) -> None: ...

    def finish(self) -> None: ...


class TerminalRenderer:
    """Redraws one line in place: cursor to column 0, clear line, write."""

    def __init__(self, stream: TextIO | None = None, color: bool = True, width: int = BAR_WIDTH):
        self.stream = stream if stream is not None else sys.stdout
        self.color = color
        self.width = width

    def _c(self, name: str) -> str:
        return COLORS[name] if self.color else ""

    def render(self, state: ProgressState, label: str, item: str) -> None:
        c = self._c
        line = (
            f"{c('magenta')}♦{c('reset')} {c('bright')}{label}{c('reset')} "
            f"{c('cyan')}{state.bar(self.width)}{c('reset')} "
            f"{c('yellow')}{state.percentage}%{c('reset')} "
            f"({state.completed}/{state.total}) {c('dim')}{item}{c('reset')}"
        )
        self.stream.write("\r\x1b[2K" + line)
        self.stream.flush()

    def finish(self) -> None:
        self.stream.write("\n")
        self.stream.flush()


class LineRenderer:
    """Fallback for pipes and log files: one plain line per update."""

    def __init__(self, stream: TextIO | None = None, width: int = BAR_WIDTH):
        self.stream = stream if stream is not None else sys.stdout
        self.width = width

    def render(self, state: ProgressState, label: str, item: str) -> None:
        print(f"{label} {state.bar(self.width)} {state.percentage}% "
              f"({state.completed}/{state.total}) {item}", file=self.stream)

    def finish(self) -> None:
        pass


def make_renderer(stream: TextIO | None = None, color: bool = True) -> Renderer:
    stream = stream if stream is not None else sys.stdout
    isatty = getattr(stream, "isatty", None)
    if isatty is not None and isatty():
        return TerminalRenderer(stream, color=color)
    return LineRenderer(stream)


class ProgressReporter:
    """Counts completed work units for one scope and renders after each.

    Not thread-safe; one reporter per province, used sequentially.
    """

    def __init__(self, label: str, total: int, renderer: Renderer | None = None):
        self.label = label
        self.state = ProgressState(completed=0, total=total)
        self.renderer = renderer if renderer is not None else make_renderer()

    @property
    def completed(self) -> int:
        return self.state.completed

    @property
    def total(self) -> int:
        return self.state.total

    def advance(self, item: str = "") -> None:
        self.state.completed += 1
        self.renderer.render(self.state, self.label, item)

    def finish(self) -> None:
        self.renderer.finish()
