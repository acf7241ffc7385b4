"""
Interactive menu for Dev Guardian.

The menu is a small state machine:

    IDLE --Run--> RUNNING --done--> IDLE
    IDLE --Settings--> SETTINGS --(any choice)--> IDLE
    IDLE --Exit--> TERMINATED
    RUNNING --fatal--> TERMINATED

``next_state`` is pure; ``InteractiveShell`` performs the side effects and
talks to the user only through a ``Prompter``, so tests can script it.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Dict, List, Optional

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from .core.config import GuardConfig, save_config as save_config_file
from .core.logger import get_logger


logger = get_logger(__name__)


RUN = 'Run'
SETTINGS = 'Settings'
EXIT = 'Exit'
MAIN_CHOICES = [RUN, SETTINGS, EXIT]

TOGGLE_CHECKS = 'Toggle Checks'
EDIT_DEPENDENCIES = 'Edit Dependencies'
BACK = 'Back'
SETTINGS_CHOICES = [TOGGLE_CHECKS, EDIT_DEPENDENCIES, BACK]

RUN_DONE = 'done'
RUN_FATAL = 'fatal'


class ShellState(Enum):
    IDLE = 'idle'
    RUNNING = 'running'
    SETTINGS = 'settings'
    TERMINATED = 'terminated'


class PromptCancelled(Exception):
    """User pressed Esc or Ctrl+C at a prompt."""


def next_state(state: ShellState, event: str) -> ShellState:
    """
    Transition function of the menu.

    Args:
        state: Current state
        event: Menu choice (IDLE, SETTINGS) or run result RUN_DONE/RUN_FATAL

    Raises:
        ValueError: For an event the state does not accept
    """
    if state is ShellState.IDLE:
        transitions = {
            RUN: ShellState.RUNNING,
            SETTINGS: ShellState.SETTINGS,
            EXIT: ShellState.TERMINATED,
        }
    elif state is ShellState.RUNNING:
        transitions = {RUN_DONE: ShellState.IDLE, RUN_FATAL: ShellState.TERMINATED}
    elif state is ShellState.SETTINGS:
        transitions = {choice: ShellState.IDLE for choice in SETTINGS_CHOICES}
    else:
        transitions = {}

    if event not in transitions:
        raise ValueError(f"Event {event!r} not accepted in state {state.name}")
    return transitions[event]


def parse_dependencies(text: str) -> List[str]:
    """Split comma-separated input into trimmed, non-empty names."""
    return [part.strip() for part in text.split(',') if part.strip()]


class Prompter(ABC):
    """User interaction used by the menu."""

    @abstractmethod
    def select(self, message: str, choices: List[str]) -> str:
        """Return one of ``choices``."""

    @abstractmethod
    def checkbox(self, message: str, options: Dict[str, bool]) -> List[str]:
        """Return the names left checked; ``options`` gives the initial state."""

    @abstractmethod
    def text(self, message: str, default: str = '') -> str:
        """Return a line of free text."""


def get_key() -> str:
    """Read one keypress and name the keys the menu cares about."""
    key = readchar.readkey()

    if key == readchar.key.UP:
        return 'up'
    if key == readchar.key.DOWN:
        return 'down'
    if key == readchar.key.ENTER:
        return 'enter'
    if key == ' ':
        return 'space'
    if key == readchar.key.ESC:
        return 'escape'
    if key == readchar.key.CTRL_C:
        raise KeyboardInterrupt

    return key


class RichPrompter(Prompter):
    """Arrow-key prompts drawn with rich in a live panel."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def _panel(self, message: str, rows: List[tuple], hint: str) -> Panel:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="cyan", justify="left", width=3)
        table.add_column(style="white", justify="left")

        for marker, label in rows:
            table.add_row(marker, label)

        table.add_row("", "")
        table.add_row("", f"[dim]{hint}[/dim]")

        return Panel(table, title=f"[bold]{message}[/bold]", border_style="cyan", padding=(1, 2))

    def _loop(self, render: Callable[[], Panel], on_key: Callable[[str], bool]):
        """Redraw until ``on_key`` returns True."""
        self.console.print()
        with Live(render(), console=self.console, transient=True, auto_refresh=False) as live:
            while True:
                try:
                    key = get_key()
                except KeyboardInterrupt:
                    raise PromptCancelled()
                if key == 'escape':
                    raise PromptCancelled()
                if on_key(key):
                    return
                live.update(render(), refresh=True)

    def select(self, message: str, choices: List[str]) -> str:
        index = 0

        def render():
            rows = [("▶" if i == index else " ", f"[cyan]{c}[/cyan]") for i, c in enumerate(choices)]
            return self._panel(message, rows, "Use ↑/↓ to navigate, Enter to select, Esc to exit")

        def on_key(key):
            nonlocal index
            if key == 'up':
                index = (index - 1) % len(choices)
            elif key == 'down':
                index = (index + 1) % len(choices)
            return key == 'enter'

        self._loop(render, on_key)
        return choices[index]

    def checkbox(self, message: str, options: Dict[str, bool]) -> List[str]:
        names = list(options)
        checked = dict(options)
        index = 0

        def render():
            rows = []
            for i, name in enumerate(names):
                box = "[green]◉[/green]" if checked[name] else "◯"
                rows.append(("▶" if i == index else " ", f"{box} [cyan]{name}[/cyan]"))
            return self._panel(message, rows, "↑/↓ to move, Space to toggle, Enter to confirm")

        def on_key(key):
            nonlocal index
            if key == 'up':
                index = (index - 1) % len(names)
            elif key == 'down':
                index = (index + 1) % len(names)
            elif key == 'space':
                checked[names[index]] = not checked[names[index]]
            return key == 'enter'

        self._loop(render, on_key)
        return [name for name in names if checked[name]]

    def text(self, message: str, default: str = '') -> str:
        try:
            return Prompt.ask(message, default=default, console=self.console)
        except (KeyboardInterrupt, EOFError):
            raise PromptCancelled()


class InteractiveShell:
    """
    Menu loop: Run, Settings, Exit.

    Args:
        prompter: Where choices come from
        config: Configuration edited in place by the settings actions
        run_checks: Performs one run and returns a RunReport
        save_config: Persists the configuration after each settings change
    """

    def __init__(
        self,
        prompter: Prompter,
        config: GuardConfig,
        run_checks: Callable,
        save_config: Callable[[GuardConfig], object] = save_config_file,
    ):
        self.prompter = prompter
        self.config = config
        self.run_checks = run_checks
        self.save_config = save_config
        self.state = ShellState.IDLE
        self.exit_code = 0
        self.last_report = None

    def run(self) -> int:
        """Loop until TERMINATED and return the process exit code."""
        while self.state is not ShellState.TERMINATED:
            try:
                self.state = self.step()
            except PromptCancelled:
                self.state = self.exit()
        return self.exit_code

    def step(self) -> ShellState:
        if self.state is ShellState.IDLE:
            choice = self.prompter.select("What would you like to do?", MAIN_CHOICES)
            if choice == EXIT:
                return self.exit()
            return next_state(self.state, choice)

        if self.state is ShellState.RUNNING:
            self.last_report = self.run_checks()
            if self.last_report.fatal_report is not None:
                self.exit_code = 1
                return next_state(self.state, RUN_FATAL)
            return next_state(self.state, RUN_DONE)

        if self.state is ShellState.SETTINGS:
            choice = self.prompter.select("Settings", SETTINGS_CHOICES)
            if choice == TOGGLE_CHECKS:
                self.toggle_checks()
            elif choice == EDIT_DEPENDENCIES:
                self.edit_dependencies()
            return next_state(self.state, choice)

        raise ValueError(f"No step from state {self.state.name}")

    def exit(self) -> ShellState:
        print("Goodbye!")
        self.exit_code = 0
        return ShellState.TERMINATED

    def toggle_checks(self):
        selected = set(self.prompter.checkbox("Select checks to enable", dict(self.config.enabled_checks)))
        for name in self.config.enabled_checks:
            self.config.enabled_checks[name] = name in selected
        self.save_config(self.config)
        logger.debug(f"Enabled checks: {sorted(selected)}")

    def edit_dependencies(self):
        current = ', '.join(self.config.dependencies_to_check)
        answer = self.prompter.text("Enter dependencies to check (comma-separated)", default=current)
        self.config.dependencies_to_check = parse_dependencies(answer)
        self.save_config(self.config)
        logger.debug(f"Dependencies to check: {self.config.dependencies_to_check}")
