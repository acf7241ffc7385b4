"""README presence check. Existence only; a missing README is never created."""

from pathlib import Path

from ..core import file_access
from ..core.base import CheckReport, ComplianceCheck, Outcome


README_NAME = 'README.md'


class ReadmeChecker(ComplianceCheck):
    name = 'checkREADME'
    title = README_NAME

    def run(self, mode: str) -> CheckReport:
        self.announce(f"Checking {README_NAME}...")
        readme_path: Path = self.project_root / README_NAME

        if not file_access.exists(readme_path):
            self.announce_problem(f"❌ No {README_NAME} file found!")
            return self.create_report(mode, Outcome.MISSING, passed=False, target=readme_path)

        self.announce_ok(f"✔ {README_NAME} file exists.")
        return self.create_report(mode, Outcome.VALID, passed=True, target=readme_path)
