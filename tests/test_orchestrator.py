"""
Tests for the orchestrator and the command line entry point.

Covers:
- fixed execution order and enabled/disabled filtering
- a failing formatter stopping the run
- --only / --skip selection
- exit codes of main()
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from devguard.canonical import ESLINT_CONFIG, GITIGNORE, PRETTIER_CONFIG, TSCONFIG
from devguard.core.base import Action, MODE_CHECK, MODE_HEAL
from devguard.core.config import DEFAULT_ENABLED_CHECKS, GuardConfig
from devguard.core.tools import ToolResult
from devguard.guard import ComplianceOrchestrator, RunReport, main, print_summary_box


CORE_CHECKS = [
    'checkTsConfig',
    'checkDependencies',
    'checkGitignore',
    'checkREADME',
    'checkPrettierConfig',
    'checkESLint',
    'checkFunctionComments',
]


class FakeRunner:
    """Records tool invocations; tools named in ``failing`` exit with 1."""

    def __init__(self, failing=()):
        self.failing = set(failing)
        self.calls = []

    def run(self, command, cwd):
        self.calls.append(list(command))
        return ToolResult(command=list(command), returncode=1 if command[1] in self.failing else 0)


@pytest.fixture
def compliant_project(tmp_path):
    """A project on which every core check passes."""
    (tmp_path / 'README.md').write_text("# Demo\n", encoding='utf-8')
    (tmp_path / 'package.json').write_text(json.dumps({
        'dependencies': {'@tanstack/react-query': '^5.0.0', 'mssql': '^10.0.0'},
        'devDependencies': {'@tanstack/react-query-devtools': '^5.0.0'},
    }), encoding='utf-8')
    for artifact in (TSCONFIG, GITIGNORE, PRETTIER_CONFIG, ESLINT_CONFIG):
        (tmp_path / artifact.relative_path).write_text(artifact.content, encoding='utf-8')
    return tmp_path


class TestExecutionOrder:

    def test_order_covers_every_check(self):
        assert ComplianceOrchestrator.CHECK_ORDER == list(DEFAULT_ENABLED_CHECKS)
        assert set(ComplianceOrchestrator.CHECKS) == set(ComplianceOrchestrator.CHECK_ORDER)

    def test_default_run_visits_core_checks_in_order(self, tmp_path):
        orchestrator = ComplianceOrchestrator(GuardConfig(), tmp_path, tool_runner=FakeRunner())

        run_report = orchestrator.run_all(MODE_HEAL)

        assert [r.check_name for r in run_report.reports] == CORE_CHECKS
        assert run_report.fatal_report is None

    def test_disabled_checks_are_skipped(self, tmp_path):
        config = GuardConfig()
        config.enabled_checks['checkGitignore'] = False
        config.enabled_checks['checkBuildTool'] = True

        run_report = ComplianceOrchestrator(config, tmp_path, tool_runner=FakeRunner()).run_all()

        names = [r.check_name for r in run_report.reports]
        assert 'checkGitignore' not in names
        assert names[-1] == 'checkBuildTool'
        assert not (tmp_path / '.gitignore').exists()

    def test_empty_project_is_scaffolded(self, tmp_path, capsys):
        """Missing artifacts are created; missing README and manifest only reported."""
        run_report = ComplianceOrchestrator(GuardConfig(), tmp_path, tool_runner=FakeRunner()).run_all()

        for artifact in (TSCONFIG, GITIGNORE, PRETTIER_CONFIG, ESLINT_CONFIG):
            assert (tmp_path / artifact.relative_path).read_text(encoding='utf-8') == artifact.content
        assert not (tmp_path / 'README.md').exists()
        assert not (tmp_path / 'package.json').exists()
        assert set(run_report.failed_checks) == {'checkDependencies', 'checkREADME'}

        out = capsys.readouterr().out
        assert out.index("🔍 Running codebase checks...") < out.index("Checking tsconfig.json")
        assert "✅ Codebase check complete." in out

    def test_compliant_project_passes(self, compliant_project):
        runner = FakeRunner()

        run_report = ComplianceOrchestrator(GuardConfig(), compliant_project, tool_runner=runner).run_all()

        assert run_report.passed
        assert all(r.action == Action.NONE for r in run_report.reports)
        assert runner.calls == [['npx', 'prettier', '--write', '.'], ['npx', 'eslint', '.']]


class TestFatalToolFailure:

    def test_prettier_failure_stops_run(self, tmp_path, capsys):
        """Checks after the failing formatter never run."""
        runner = FakeRunner(failing={'prettier'})

        run_report = ComplianceOrchestrator(GuardConfig(), tmp_path, tool_runner=runner).run_all()

        assert run_report.fatal_report.check_name == 'checkPrettierConfig'
        assert [r.check_name for r in run_report.reports] == CORE_CHECKS[:5]
        assert not (tmp_path / 'eslint.config.js').exists()
        assert runner.calls == [['npx', 'prettier', '--write', '.']]
        assert not run_report.passed
        assert "✅ Codebase check complete." not in capsys.readouterr().out

    def test_missing_dependencies_do_not_stop_run(self, tmp_path):
        run_report = ComplianceOrchestrator(GuardConfig(), tmp_path, tool_runner=FakeRunner()).run_all()
        assert run_report.fatal_report is None
        assert run_report.reports[-1].check_name == 'checkFunctionComments'


class TestSelection:

    def test_only_runs_single_check(self, tmp_path):
        config = GuardConfig()
        config.enabled_checks['checkTsConfig'] = False

        orchestrator = ComplianceOrchestrator(config, tmp_path, only_check='checkTsConfig')

        assert orchestrator.checks_to_run() == ['checkTsConfig']

    def test_only_unknown_check(self, tmp_path):
        orchestrator = ComplianceOrchestrator(GuardConfig(), tmp_path, only_check='checkNothing')
        with pytest.raises(ValueError, match="Unknown check"):
            orchestrator.checks_to_run()

    def test_skip(self, tmp_path):
        orchestrator = ComplianceOrchestrator(
            GuardConfig(), tmp_path, skip_checks=['checkESLint', 'checkREADME']
        )
        assert orchestrator.checks_to_run() == [
            'checkTsConfig', 'checkDependencies', 'checkGitignore',
            'checkPrettierConfig', 'checkFunctionComments',
        ]

    def test_dry_run_does_not_run_tools(self, tmp_path):
        runner = FakeRunner(failing={'prettier'})

        run_report = ComplianceOrchestrator(GuardConfig(), tmp_path, tool_runner=runner).run_all(MODE_CHECK)

        assert runner.calls == []
        assert run_report.fatal_report is None
        assert list(tmp_path.iterdir()) == []

    def test_dry_run_with_tools(self, tmp_path):
        runner = FakeRunner()
        orchestrator = ComplianceOrchestrator(GuardConfig(), tmp_path, tool_runner=runner, run_tools=True)

        orchestrator.run_all(MODE_CHECK)

        assert len(runner.calls) == 2

    def test_list_checks(self, tmp_path):
        listing = ComplianceOrchestrator(GuardConfig(), tmp_path).list_checks()
        assert " 1. checkTsConfig ✅ enabled" in listing
        assert "13. checkStateManagement ❌ disabled" in listing


class TestSummary:

    def test_summary_box_lists_checks(self, tmp_path, capsys):
        run_report = ComplianceOrchestrator(
            GuardConfig(), tmp_path, tool_runner=FakeRunner(), quiet=True
        ).run_all()
        capsys.readouterr()

        print_summary_box(run_report)

        out = capsys.readouterr().out
        assert "Dev Guardian Summary" in out
        assert "checkTsConfig" in out
        assert "missing (created)" in out
        assert "2 of 7 checks failed" in out

    def test_empty_report_passes(self):
        assert RunReport(timestamp='now', mode=MODE_HEAL).passed


class TestMain:
    """Exit codes of the non-interactive entry point."""

    def run_main(self, tmp_path, *args, runner=None):
        argv = ['--run', '--project-root', str(tmp_path), '--config', str(tmp_path / 'config.json'), *args]
        with patch('devguard.guard.ToolRunner', return_value=runner or FakeRunner()):
            return main(argv)

    def test_run_exits_zero_despite_failed_checks(self, tmp_path):
        assert self.run_main(tmp_path) == 0
        assert (tmp_path / 'config.json').exists()

    def test_strict_exits_one_on_failed_check(self, tmp_path):
        assert self.run_main(tmp_path, '--strict') == 1

    def test_run_repairs_non_utf8_gitignore(self, tmp_path):
        (tmp_path / '.gitignore').write_bytes(b'# caf\xe9\n')
        assert self.run_main(tmp_path) == 0
        assert (tmp_path / '.gitignore').read_text(encoding='utf-8') == GITIGNORE.content

    def test_strict_passes_on_compliant_project(self, compliant_project):
        assert self.run_main(compliant_project, '--strict') == 0

    def test_tool_failure_exits_one(self, tmp_path, capsys):
        assert self.run_main(tmp_path, runner=FakeRunner(failing={'eslint'})) == 1
        assert "checkESLint failed" in capsys.readouterr().err

    def test_check_mode_writes_nothing(self, tmp_path):
        assert self.run_main(tmp_path, '--check') == 0
        assert not (tmp_path / 'tsconfig.json').exists()

    def test_invalid_config_exits_one(self, tmp_path, capsys):
        (tmp_path / 'config.json').write_text(
            json.dumps({'enabledChecks': {'checkTsConfig': 'sometimes'}}), encoding='utf-8'
        )
        assert self.run_main(tmp_path) == 1
        assert "Configuration validation failed" in capsys.readouterr().err

    def test_verbose_and_quiet_conflict(self, tmp_path):
        assert self.run_main(tmp_path, '--verbose', '--quiet') == 1

    def test_list(self, tmp_path, capsys):
        assert main(['--list', '--config', str(tmp_path / 'config.json')]) == 0
        assert "Check execution order" in capsys.readouterr().out

    def test_interactive_mode_uses_shell(self, tmp_path):
        """Without --run the menu drives the session."""
        argv = ['--project-root', str(tmp_path), '--config', str(tmp_path / 'config.json')]
        with patch('devguard.shell.InteractiveShell.run', return_value=0) as shell_run, \
                patch('devguard.shell.RichPrompter'):
            assert main(argv) == 0
        shell_run.assert_called_once()
