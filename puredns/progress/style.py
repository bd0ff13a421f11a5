"""Colors and styling of the progress bar."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Color(str, Enum):
    """Terminal escape sequence selecting a foreground color."""

    BLACK = "\033[0;30m"
    GRAY = "\033[1;30m"
    RED = "\033[0;31m"
    BRIGHT_RED = "\033[1;31m"
    GREEN = "\033[0;32m"
    BRIGHT_GREEN = "\033[1;32m"
    YELLOW = "\033[0;33m"
    BRIGHT_YELLOW = "\033[1;33m"
    BLUE = "\033[0;34m"
    BRIGHT_BLUE = "\033[1;34m"
    MAGENTA = "\033[0;35m"
    BRIGHT_MAGENTA = "\033[1;35m"
    CYAN = "\033[0;36m"
    BRIGHT_CYAN = "\033[1;36m"
    WHITE = "\033[0;37m"
    BRIGHT_WHITE = "\033[1;37m"
    RESET = "\033[0m"

    def __str__(self) -> str:
        return self.value

    def __format__(self, spec: str) -> str:
        return format(self.value, spec)


@dataclass(frozen=True)
class Style:
    """Characters and colors used to draw a progress bar."""

    bar_prefix: str
    bar_suffix: str
    bar_full: str
    bar_empty: str
    bar_prefix_color: Color
    bar_suffix_color: Color
    bar_full_color: Color
    bar_empty_color: Color


def default_style() -> Style:
    """Return the default progress bar style."""
    return Style(
        bar_prefix="|",
        bar_suffix="|",
        bar_full="█",
        bar_empty="░",
        bar_prefix_color=Color.WHITE,
        bar_suffix_color=Color.WHITE,
        bar_full_color=Color.WHITE,
        bar_empty_color=Color.GRAY,
    )