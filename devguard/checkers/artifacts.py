"""
Artifact checkers: converge governed config files to their canonical text.

For each artifact the decision is:

    file absent            -> MISSING,    write canonical  (CREATED)
    fingerprint differs    -> MISMATCHED, overwrite        (OVERWRITTEN)
    fingerprint equal      -> VALID,      leave untouched

Semantically equivalent but byte-different content (reordered JSON keys,
different quoting) is a mismatch and gets overwritten. Whatever the user had
is replaced without a backup.

The Prettier and ESLint checkers then run their tool. A failing tool does
not terminate anything here; it is recorded on the report and the
orchestrator stops the run.
"""

from pathlib import Path
from typing import List, Optional

from ..canonical import (
    CanonicalArtifact,
    TSCONFIG,
    GITIGNORE,
    PRETTIER_CONFIG,
    ESLINT_CONFIG,
)
from ..core.base import (
    Action,
    CheckReport,
    ComplianceCheck,
    MODE_HEAL,
    Outcome,
)
from ..core import file_access
from ..core.fingerprint import fingerprint
from ..core.logger import CheckerLogger
from ..core.tools import ToolRunner, ToolResult, PRETTIER_COMMAND, ESLINT_COMMAND


class ArtifactChecker(ComplianceCheck):
    """
    Checks one governed file against its canonical content.

    Console wording varies per artifact, so subclasses override the message
    attributes below; ``{file}`` is replaced with the artifact's file name.
    """

    artifact: CanonicalArtifact = None

    checking_message = "🔍 Checking {file}..."
    missing_message = "❌ No {file} found! Creating one..."
    created_message = "✔ {file} has been created."
    mismatch_message = "❌ {file} is incorrect! Fixing it..."
    fixed_message = "✔ {file} has been updated to the correct configuration."
    valid_message = "✔ {file} matches the expected configuration."

    def __init__(
        self,
        project_root: Path,
        artifact: Optional[CanonicalArtifact] = None,
        logger: Optional[CheckerLogger] = None,
    ):
        super().__init__(project_root, logger)
        if artifact is not None:
            self.artifact = artifact
        if self.artifact is None:
            raise ValueError(f"{self.__class__.__name__} needs a canonical artifact")

    @property
    def target(self) -> Path:
        return self.project_root / self.artifact.relative_path

    def _say(self, template: str) -> str:
        return template.format(file=self.artifact.relative_path)

    def run(self, mode: str) -> CheckReport:
        self.announce(self._say(self.checking_message))
        outcome, action = self.converge(mode)
        return self.create_report(mode, outcome, action, passed=True, target=self.target)

    def converge(self, mode: str):
        """
        Decide the outcome for the target file and, in heal mode, repair it.

        Returns:
            (Outcome, Action)

        Raises:
            FileWriteError: If the filesystem rejects the write
        """
        target = self.target
        canonical = self.artifact.content
        current = file_access.read(target)

        if current is None:
            self.announce_problem(self._say(self.missing_message))
            if mode != MODE_HEAL:
                return Outcome.MISSING, Action.WOULD_CREATE
            self._write(target, canonical)
            self.announce_ok(self._say(self.created_message))
            return Outcome.MISSING, Action.CREATED

        current_digest = fingerprint(current)
        canonical_digest = fingerprint(canonical)
        self.log.debug(
            f"fingerprint {current_digest[:12]} vs canonical {canonical_digest[:12]}",
            file_path=target,
        )

        if current_digest != canonical_digest:
            self.announce_problem(self._say(self.mismatch_message))
            if mode != MODE_HEAL:
                return Outcome.MISMATCHED, Action.WOULD_OVERWRITE
            self._write(target, canonical)
            self.announce_ok(self._say(self.fixed_message))
            return Outcome.MISMATCHED, Action.OVERWRITTEN

        self.announce_ok(self._say(self.valid_message))
        return Outcome.VALID, Action.NONE

    def _write(self, target: Path, content: str):
        with self.log.operation('write', file_path=target, error_code='FS-01'):
            file_access.write(target, content)


class ToolBackedChecker(ArtifactChecker):
    """
    Artifact checker that runs an external tool after converging its file.

    Attributes:
        command: Tool argument list
        running_message / done_message / failed_message: console lines
        fix_hint: Guidance printed when the tool fails
    """

    command: List[str] = []
    running_message = ''
    done_message = ''
    failed_message = ''
    fix_hint = ''

    def __init__(
        self,
        project_root: Path,
        tool_runner: Optional[ToolRunner] = None,
        run_tool: bool = True,
        logger: Optional[CheckerLogger] = None,
    ):
        super().__init__(project_root, logger=logger)
        self.tool_runner = tool_runner or ToolRunner()
        self.run_tool = run_tool

    def run(self, mode: str) -> CheckReport:
        self.announce(self._say(self.checking_message))
        outcome, action = self.converge(mode)

        if not self.run_tool:
            return self.create_report(mode, outcome, action, passed=True, target=self.target)

        tool_result = self.invoke_tool()
        return self.create_report(
            mode,
            outcome,
            action,
            passed=tool_result.success,
            target=self.target,
            tool_result=tool_result,
        )

    def invoke_tool(self) -> ToolResult:
        """Run the tool to completion and announce the result."""
        self.announce(self.running_message)
        result = self.tool_runner.run(self.command, cwd=self.project_root)

        if result.success:
            self.announce_ok(self.done_message)
            return result

        self.announce_problem(self.failed_message)
        if result.error:
            self.log_error(result.error, error_code='TOOL-02')
        else:
            self.log_error(f"{result.command_line} exited with status {result.returncode}", error_code='TOOL-01')
        self.announce_problem(f"\n👉 {self.fix_hint}")
        return result


class TsConfigChecker(ArtifactChecker):
    name = 'checkTsConfig'
    title = 'tsconfig.json'
    artifact = TSCONFIG

    missing_message = "❌ No {file} file found! Creating one..."


class GitignoreChecker(ArtifactChecker):
    name = 'checkGitignore'
    title = '.gitignore'
    artifact = GITIGNORE

    missing_message = "❌ No {file} file found! Creating one..."


class PrettierConfigChecker(ToolBackedChecker):
    name = 'checkPrettierConfig'
    title = 'Prettier'
    artifact = PRETTIER_CONFIG

    checking_message = "🔍 Checking Prettier configuration..."
    missing_message = "❌ {file} not found! Creating one..."
    mismatch_message = "❌ {file} settings are incorrect! Fixing it..."
    fixed_message = "✔ {file} has been updated."
    valid_message = "✔ {file} matches the recommended configuration."

    command = PRETTIER_COMMAND
    running_message = "🚀 Running Prettier formatting..."
    done_message = "✔ Prettier formatting completed."
    failed_message = "❌ Prettier formatting failed."
    fix_hint = "Fix Prettier config: npx prettier --write ."


class ESLintConfigChecker(ToolBackedChecker):
    name = 'checkESLint'
    title = 'ESLint'
    artifact = ESLINT_CONFIG

    checking_message = "🔍 Checking ESLint configuration..."

    command = ESLINT_COMMAND
    running_message = "🚀 Running ESLint checks..."
    done_message = "✔ ESLint checks completed successfully."
    failed_message = "❌ ESLint found issues."
    fix_hint = "Fix ESLint config: npm run lint:fix"
