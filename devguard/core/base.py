"""
Core abstractions for Dev Guardian checks.

Every check follows the same shape: inspect one artifact of the project,
decide an outcome, optionally repair, and return a CheckReport. Checks run
in two modes:

- "heal": repair artifacts that have a canonical form (the default "Run")
- "check": dry run, report what would be repaired without writing
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional

from .colors import success, error, warning, info
from .logger import CheckerLogger
from .tools import ToolResult


MODE_CHECK = 'check'
MODE_HEAL = 'heal'


class Outcome(Enum):
    """What a check found."""
    MISSING = 'missing'
    MISMATCHED = 'mismatched'
    VALID = 'valid'
    FAILED = 'failed'


class Action(Enum):
    """What a check did about it."""
    NONE = 'none'
    CREATED = 'created'
    OVERWRITTEN = 'overwritten'
    WOULD_CREATE = 'would_create'
    WOULD_OVERWRITE = 'would_overwrite'


@dataclass
class CheckReport:
    """
    Report from one check invocation.

    Attributes:
        check_name: Config name of the check (e.g. "checkTsConfig")
        mode: "check" or "heal"
        timestamp: ISO format timestamp
        outcome: What the check found
        action: What was done about it
        passed: Whether the check counts as passing
        target: Governed file, if the check has one
        details: Human-readable findings (missing dependencies, etc.)
        errors: Error messages encountered
        tool_result: Result of the external tool run, if any
        execution_time: Time in seconds to complete
    """
    check_name: str
    mode: str
    timestamp: str
    outcome: Outcome
    action: Action = Action.NONE
    passed: bool = True
    target: Optional[Path] = None
    details: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    tool_result: Optional[ToolResult] = None
    execution_time: float = 0.0

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    @property
    def tool_failed(self) -> bool:
        """True when the external tool ran and did not succeed."""
        return self.tool_result is not None and not self.tool_result.success


class ComplianceCheck(ABC):
    """
    Base class for all checks.

    Subclasses set ``name`` (the config key) and ``title`` (what the console
    lines call the artifact) and implement ``run``.
    """

    name: str = ''
    title: str = ''

    def __init__(self, project_root: Path, logger: Optional[CheckerLogger] = None):
        self.project_root = Path(project_root)
        self.log = logger or CheckerLogger(self.name)
        self.errors: List[str] = []

    @abstractmethod
    def run(self, mode: str) -> CheckReport:
        """
        Inspect the project and return a report.

        Args:
            mode: "check" (no writes) or "heal"
        """

    def check(self) -> CheckReport:
        """Dry run: report without modifying anything."""
        return self._timed(MODE_CHECK)

    def heal(self) -> CheckReport:
        """Inspect and repair."""
        return self._timed(MODE_HEAL)

    def _timed(self, mode: str) -> CheckReport:
        self.errors = []
        start_time = time.time()
        report = self.run(mode)
        report.execution_time = time.time() - start_time
        return report

    def create_report(
        self,
        mode: str,
        outcome: Outcome,
        action: Action = Action.NONE,
        passed: bool = True,
        target: Optional[Path] = None,
        details: Optional[List[str]] = None,
        tool_result: Optional[ToolResult] = None,
    ) -> CheckReport:
        """Create a CheckReport with standard fields."""
        return CheckReport(
            check_name=self.name,
            mode=mode,
            timestamp=datetime.now().isoformat(),
            outcome=outcome,
            action=action,
            passed=passed,
            target=target,
            details=list(details or []),
            errors=self.errors.copy(),
            tool_result=tool_result,
        )

    def log_error(self, message: str, error_code: Optional[str] = None):
        """Accumulate an error for the report and log it."""
        self.errors.append(message)
        self.log.error(message, error_code=error_code, file_path=getattr(self, 'target', None))

    # Console announcements. One colored line per event.

    def announce(self, message: str):
        print(warning(message))

    def announce_ok(self, message: str):
        print(success(message))

    def announce_problem(self, message: str):
        print(error(message))

    def announce_hint(self, message: str):
        print(info(message))
