"""
Console styling for check announcements and the run summary.

Each announcement kind has one color: yellow while a check starts, green
when it is satisfied, red for a problem and blue for hints and run banners.
Escape codes are only written when stdout is a terminal.
"""

import re
import sys
from typing import Iterable


class Colors:
    """ANSI escape codes used by Dev Guardian."""
    RED = '\033[91m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    BLUE = '\033[94m'
    BOLD = '\033[1m'
    RESET = '\033[0m'


ANSI_ESCAPE = re.compile(r'\033\[[0-9;]*m')


def styled(text: str, code: str) -> str:
    """Wrap text in an escape code when writing to a terminal."""
    if not sys.stdout.isatty():
        return text
    return code + text + Colors.RESET


def visible_length(text: str) -> int:
    """Length of text as it appears on screen."""
    return len(ANSI_ESCAPE.sub('', text))


def success(text: str) -> str:
    return styled(text, Colors.GREEN)


def error(text: str) -> str:
    return styled(text, Colors.RED)


def warning(text: str) -> str:
    return styled(text, Colors.YELLOW)


def info(text: str) -> str:
    return styled(text, Colors.BLUE)


def bold(text: str) -> str:
    return styled(text, Colors.BOLD)


def print_box(lines: Iterable[str], title: str = "", width: int = 60):
    """
    Print lines inside a rounded frame with an optional centered title.

    Lines longer than the frame are cut and end in "...". Styled lines are
    measured by their visible length.
    """
    inner = width - 2
    edge = styled('│', Colors.BOLD)

    heading = f" {title} " if title else ""
    left = (inner - len(heading)) // 2
    print(styled('╭' + '─' * left + heading + '─' * (inner - left - len(heading)) + '╮', Colors.BOLD))

    room = inner - 4
    for line in [""] + list(lines) + [""]:
        if visible_length(line) > room:
            line = ANSI_ESCAPE.sub('', line)[:room - 3] + "..."
        print(f"{edge}  {line}{' ' * (room - visible_length(line))}  {edge}")

    print(styled('╰' + '─' * inner + '╯', Colors.BOLD))
