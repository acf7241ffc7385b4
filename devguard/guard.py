#!/usr/bin/env python3
"""
Dev Guardian Orchestrator

Runs the enabled compliance checks in a fixed order against a project and
aggregates the results.

Usage:
    devguard                              # interactive menu
    devguard --run                        # one run, then exit
    devguard --run --check                # dry run, nothing is written
    devguard --run --strict               # exit 1 if any check failed
    devguard --list                       # show check order
    devguard --config settings.yaml --run --only checkTsConfig

Exit codes:
    0  graceful exit (menu "Exit" or a completed --run)
    1  a formatter/linter run failed, a write failed, the config is
       invalid, or --strict found a failing check
"""

import argparse
import logging
import sys
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Type

from .checkers import (
    BuildToolChecker,
    ComponentsFolderChecker,
    DependencyChecker,
    DocumentationChecker,
    ESLintConfigChecker,
    GitignoreChecker,
    ImplicitAnyChecker,
    PrettierConfigChecker,
    ReactFCUsageChecker,
    ReadmeChecker,
    StateManagementChecker,
    TestingFrameworkChecker,
    ToolBackedChecker,
    TsConfigChecker,
)
from .core.base import CheckReport, ComplianceCheck, MODE_CHECK, MODE_HEAL
from .core.colors import bold, error, info, print_box, success, warning
from .core.config import (
    DEFAULT_CONFIG_NAME,
    ConfigValidationError,
    GuardConfig,
    load_or_create_config,
)
from .core.file_access import FileWriteError
from .core.logger import setup_logger
from .core.tools import ToolRunner


logger = logging.getLogger(__name__)


@dataclass
class RunReport:
    """Aggregated result of one run over the enabled checks."""
    timestamp: str
    mode: str
    reports: List[CheckReport] = field(default_factory=list)
    fatal_report: Optional[CheckReport] = None
    execution_time: float = 0.0

    @property
    def passed(self) -> bool:
        return self.fatal_report is None and all(r.passed for r in self.reports)

    @property
    def failed_checks(self) -> List[str]:
        return [r.check_name for r in self.reports if not r.passed]


class ComplianceOrchestrator:
    """
    Runs enabled checks strictly one after another in CHECK_ORDER.

    Individual failures (missing README, missing dependency, ...) do not
    stop a run. A failed formatter or linter run does: the remaining checks
    are skipped and RunReport.fatal_report names the check. Deciding what
    happens to the process after that is up to the caller.
    """

    CHECK_ORDER = [
        'checkTsConfig',
        'checkDependencies',
        'checkGitignore',
        'checkREADME',
        'checkPrettierConfig',
        'checkESLint',
        'checkFunctionComments',
        'checkComponentsFolder',
        'checkBuildTool',
        'checkTestingFramework',
        'checkImplicitAny',
        'checkReactFCUsage',
        'checkStateManagement',
    ]

    CHECKS: Dict[str, Type[ComplianceCheck]] = {
        'checkTsConfig': TsConfigChecker,
        'checkDependencies': DependencyChecker,
        'checkGitignore': GitignoreChecker,
        'checkREADME': ReadmeChecker,
        'checkPrettierConfig': PrettierConfigChecker,
        'checkESLint': ESLintConfigChecker,
        'checkFunctionComments': DocumentationChecker,
        'checkComponentsFolder': ComponentsFolderChecker,
        'checkBuildTool': BuildToolChecker,
        'checkTestingFramework': TestingFrameworkChecker,
        'checkImplicitAny': ImplicitAnyChecker,
        'checkReactFCUsage': ReactFCUsageChecker,
        'checkStateManagement': StateManagementChecker,
    }

    def __init__(
        self,
        config: GuardConfig,
        project_root: Path,
        tool_runner: Optional[ToolRunner] = None,
        skip_checks: Optional[List[str]] = None,
        only_check: Optional[str] = None,
        run_tools: Optional[bool] = None,
        quiet: bool = False,
    ):
        """
        Initialize orchestrator.

        Args:
            config: Loaded configuration (enabled checks, dependency list)
            project_root: Project to inspect
            tool_runner: Runner for formatter/linter (default: real subprocesses)
            skip_checks: Check names to skip
            only_check: Run only this check, even if disabled in config
            run_tools: Run formatter/linter (default: only in heal mode)
            quiet: Suppress the run header and summary
        """
        self.config = config
        self.project_root = Path(project_root)
        self.tool_runner = tool_runner or ToolRunner()
        self.skip_checks = skip_checks or []
        self.only_check = only_check
        self.run_tools = run_tools
        self.quiet = quiet

        for name in config.enabled_checks:
            if name not in self.CHECKS:
                logger.warning(f"Ignoring unknown check in config: {name}", extra={'error_code': 'CFG-02'})

    def checks_to_run(self) -> List[str]:
        if self.only_check:
            if self.only_check not in self.CHECKS:
                raise ValueError(
                    f"Unknown check: {self.only_check}. "
                    f"Available: {', '.join(self.CHECK_ORDER)}"
                )
            return [self.only_check]

        return [
            name for name in self.CHECK_ORDER
            if self.config.is_enabled(name) and name not in self.skip_checks
        ]

    def build_check(self, name: str, mode: str) -> ComplianceCheck:
        """Instantiate a check with the arguments its kind needs."""
        check_class = self.CHECKS[name]

        if issubclass(check_class, DependencyChecker):
            return check_class(self.project_root, self.config.dependencies_to_check)

        if issubclass(check_class, ToolBackedChecker):
            run_tools = self.run_tools if self.run_tools is not None else mode == MODE_HEAL
            return check_class(self.project_root, tool_runner=self.tool_runner, run_tool=run_tools)

        return check_class(self.project_root)

    def run_check(self, name: str, mode: str) -> CheckReport:
        check = self.build_check(name, mode)
        return check.heal() if mode == MODE_HEAL else check.check()

    def run_all(self, mode: str = MODE_HEAL) -> RunReport:
        """
        Run all enabled checks in order.

        Args:
            mode: 'heal' (repair) or 'check' (dry run)

        Returns:
            RunReport

        Raises:
            FileWriteError: If a governed file cannot be written
        """
        start_time = time.time()
        run_report = RunReport(timestamp=datetime.now().isoformat(), mode=mode)

        if not self.quiet:
            print(info("\n🔍 Running codebase checks...\n"))

        for name in self.checks_to_run():
            report = self.run_check(name, mode)
            run_report.reports.append(report)
            logger.debug(f"{name}: {report.outcome.value}/{report.action.value} passed={report.passed}")

            if report.tool_failed:
                run_report.fatal_report = report
                break

        run_report.execution_time = time.time() - start_time

        if run_report.fatal_report is None and not self.quiet:
            print(success("\n✅ Codebase check complete.\n"))

        return run_report

    def list_checks(self) -> str:
        """List all checks in execution order with their status."""
        lines = ["Check execution order:\n"]

        for i, name in enumerate(self.CHECK_ORDER, 1):
            status = "✅ enabled" if self.config.is_enabled(name) else "❌ disabled"
            lines.append(f"  {i:2}. {name} {status}\n")

        return ''.join(lines)


def print_summary_box(run_report: RunReport):
    """Print the per-check results of a run in a box."""
    lines = []

    for report in run_report.reports:
        name = report.check_name
        result = report.outcome.value
        if report.action.value != 'none':
            result += f" ({report.action.value.replace('_', ' ')})"

        if report.passed:
            lines.append(f"  {success('✓')} {name:24} {success(result)}")
        else:
            lines.append(f"  {error('❌')} {name:24} {error(result)}")

    lines.append("")
    if run_report.passed:
        lines.append(success(f"  All {len(run_report.reports)} checks passed"))
    else:
        lines.append(warning(f"  {len(run_report.failed_checks)} of {len(run_report.reports)} checks failed"))
    lines.append(info(f"  Execution time: {run_report.execution_time:.1f} seconds"))

    print_box(lines, title="Dev Guardian Summary", width=70)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='devguard',
        description="Project scaffolding compliance checker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s
  %(prog)s --run
  %(prog)s --run --check
  %(prog)s --config devguard.yaml --run --skip checkESLint
        """
    )

    parser.add_argument(
        '--config',
        type=Path,
        default=None,
        help=f'Configuration file (.json, .yaml, .toml; default: ./{DEFAULT_CONFIG_NAME})'
    )
    parser.add_argument(
        '--project-root',
        type=Path,
        default=None,
        help='Project to inspect (default: current directory)'
    )
    parser.add_argument(
        '--run',
        action='store_true',
        help='Run the checks once without the interactive menu'
    )
    parser.add_argument(
        '--check',
        action='store_true',
        help='Dry run: report what would change without writing files'
    )
    parser.add_argument(
        '--with-tools',
        action='store_true',
        help='Run Prettier and ESLint in --check mode too'
    )
    parser.add_argument(
        '--list',
        action='store_true',
        help='List all checks in execution order and exit'
    )
    parser.add_argument(
        '--only',
        help='Run only this check'
    )
    parser.add_argument(
        '--skip',
        help='Comma-separated list of checks to skip'
    )
    parser.add_argument(
        '--strict',
        action='store_true',
        help='With --run, exit with code 1 if any check failed (for CI)'
    )
    parser.add_argument(
        '--log-file',
        type=Path,
        help='Write a JSON-lines debug log to this file'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Show debug logging on the console'
    )
    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Hide the run header and summary box'
    )
    return parser


def report_fatal(run_report: RunReport):
    """Print what stopped the run."""
    report = run_report.fatal_report
    print(error(
        f"\n❌ {report.check_name} failed: {report.tool_result.command_line} "
        f"exited with status {report.tool_result.returncode}. Stopping."
    ), file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose and args.quiet:
        print(error("ERROR: --verbose and --quiet are mutually exclusive"), file=sys.stderr)
        return 1

    setup_logger(
        "devguard",
        log_file=args.log_file,
        level=logging.DEBUG if args.verbose else logging.WARNING,
    )

    project_root = (args.project_root or Path.cwd()).resolve()
    config_path = args.config or (Path.cwd() / DEFAULT_CONFIG_NAME)

    try:
        config = load_or_create_config(config_path)
    except ConfigValidationError as e:
        logger.debug(f"Rejected config {config_path}", extra={'error_code': 'CFG-01'})
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        logger.debug(f"Unreadable config {config_path}", extra={'error_code': 'CFG-01'})
        print(f"ERROR: Failed to load config: {e}", file=sys.stderr)
        return 1

    orchestrator = ComplianceOrchestrator(
        config=config,
        project_root=project_root,
        skip_checks=args.skip.split(',') if args.skip else [],
        only_check=args.only,
        run_tools=True if args.with_tools else None,
        quiet=args.quiet,
    )

    if args.list:
        print(orchestrator.list_checks())
        return 0

    try:
        if args.run:
            return run_once(orchestrator, MODE_CHECK if args.check else MODE_HEAL, args.strict, args.quiet)

        from .shell import InteractiveShell, RichPrompter

        def run_checks() -> RunReport:
            run_report = orchestrator.run_all(MODE_CHECK if args.check else MODE_HEAL)
            if not args.quiet:
                print_summary_box(run_report)
            return run_report

        shell = InteractiveShell(prompter=RichPrompter(), config=config, run_checks=run_checks)
        exit_code = shell.run()
        if shell.last_report is not None and shell.last_report.fatal_report is not None:
            report_fatal(shell.last_report)
        return exit_code

    except FileWriteError as e:
        print(error(f"❌ {e}"), file=sys.stderr)
        return 1
    except ValueError as e:
        print(error(f"ERROR: {e}"), file=sys.stderr)
        return 1


def run_once(orchestrator: ComplianceOrchestrator, mode: str, strict: bool, quiet: bool) -> int:
    """Run the checks a single time and turn the result into an exit code."""
    run_report = orchestrator.run_all(mode=mode)

    if not quiet:
        print_summary_box(run_report)

    if run_report.fatal_report is not None:
        report_fatal(run_report)
        return 1

    if strict and not run_report.passed:
        if not quiet:
            print(error(f"\n❌ Strict mode: {', '.join(run_report.failed_checks)} failed"))
        return 1

    if not quiet and run_report.passed:
        print(bold(success("\n✨ Project matches the expected scaffolding!")))

    return 0


if __name__ == "__main__":
    sys.exit(main())
