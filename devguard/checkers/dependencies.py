"""
Dependency validation against package.json.

Presence only: a dependency counts as installed if its name is a key of
either ``dependencies`` or ``devDependencies``. Version ranges are ignored.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set

from ..core import file_access
from ..core.base import CheckReport, ComplianceCheck, Outcome
from ..core.logger import CheckerLogger


MANIFEST_NAME = 'package.json'


@dataclass
class DependencyResult:
    """Required dependencies that the manifest does not declare."""
    valid: bool
    missing: List[str] = field(default_factory=list)


def read_package_json(path: Path) -> Optional[Dict[str, Any]]:
    """
    Read and parse a package.json file.

    Returns:
        Parsed manifest, or None if the file does not exist

    Raises:
        ValueError: If the file is not valid JSON
    """
    content = file_access.read(path)
    if content is None:
        return None
    try:
        manifest = json.loads(content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path} at line {e.lineno}: {e.msg}") from e
    if not isinstance(manifest, dict):
        raise ValueError(f"{path} must contain a JSON object, got {type(manifest).__name__}")
    return manifest


def get_installed_dependencies(manifest: Dict[str, Any]) -> Set[str]:
    """Names declared in dependencies and devDependencies."""
    return set(manifest.get('dependencies') or {}) | set(manifest.get('devDependencies') or {})


def check_dependencies(installed: Set[str], required: Iterable[str]) -> DependencyResult:
    """
    Compare required dependency names against the installed set.

    The missing list keeps the order of ``required``.
    """
    missing = [dep for dep in required if dep not in installed]
    return DependencyResult(valid=not missing, missing=missing)


class DependencyChecker(ComplianceCheck):
    """Reports required dependencies missing from package.json. Never fatal."""

    name = 'checkDependencies'
    title = 'dependencies'

    def __init__(
        self,
        project_root: Path,
        required: Iterable[str],
        logger: Optional[CheckerLogger] = None,
    ):
        super().__init__(project_root, logger)
        self.required = list(required)

    @property
    def manifest_path(self) -> Path:
        return self.project_root / MANIFEST_NAME

    def run(self, mode: str) -> CheckReport:
        self.announce("🔍 Checking dependencies...")

        try:
            manifest = read_package_json(self.manifest_path)
        except ValueError as e:
            self.announce_problem(f"❌ Could not parse {MANIFEST_NAME}!")
            self.log_error(str(e), error_code='FS-03')
            return self.create_report(mode, Outcome.FAILED, passed=False, target=self.manifest_path)

        if manifest is None:
            self.announce_problem(f"❌ No {MANIFEST_NAME} found!")
            self.announce_problem("👉 Fix missing package.json: npm init -y")
            self.log.warning("no manifest", file_path=self.manifest_path, error_code='FS-02')
            return self.create_report(
                mode,
                Outcome.MISSING,
                passed=False,
                target=self.manifest_path,
                details=['no manifest'],
            )

        result = check_dependencies(get_installed_dependencies(manifest), self.required)

        if result.valid:
            self.announce_ok("✔ All required dependencies are installed.")
            return self.create_report(mode, Outcome.VALID, passed=True, target=self.manifest_path)

        for dep in result.missing:
            self.announce_problem(f"❌ Missing dependency: {dep}")
            self.announce_problem(f"\n👉 Fix Missing dependency: npm install {dep}")

        return self.create_report(
            mode,
            Outcome.FAILED,
            passed=False,
            target=self.manifest_path,
            details=[f"missing dependency: {dep}" for dep in result.missing],
        )
