"""
Project convention checks.

These report on stack choices (build tool, test runner, state management)
and TypeScript hygiene. They never modify the project and never stop a run.
All of them are disabled in the default configuration.
"""

import json
import re
from typing import Optional, Set

from ..core import file_access
from ..core.base import CheckReport, ComplianceCheck, Outcome
from .dependencies import MANIFEST_NAME, get_installed_dependencies, read_package_json
from .documentation import iter_source_files


EXPLICIT_ANY = re.compile(r':\s*any\b')
REACT_FC = re.compile(r'\bReact\.FC\b')


class ManifestCheck(ComplianceCheck):
    """Base for checks that decide on the declared dependency names."""

    def installed(self) -> Optional[Set[str]]:
        """Declared names, or None after announcing why there are none."""
        try:
            manifest = read_package_json(self.project_root / MANIFEST_NAME)
        except ValueError as e:
            self.announce_problem(f"❌ Could not parse {MANIFEST_NAME}!")
            self.log_error(str(e), error_code='FS-03')
            return None

        if manifest is None:
            self.announce_problem(f"❌ No {MANIFEST_NAME} found!")
            return None
        return get_installed_dependencies(manifest)

    def failed(self, mode: str, message: str) -> CheckReport:
        self.announce_problem(message)
        return self.create_report(mode, Outcome.FAILED, passed=False, details=[message])

    def ok(self, mode: str, message: str) -> CheckReport:
        self.announce_ok(message)
        return self.create_report(mode, Outcome.VALID, passed=True)

    def no_manifest(self, mode: str) -> CheckReport:
        return self.create_report(mode, Outcome.MISSING, passed=False, details=['no manifest'])


class ComponentsFolderChecker(ComplianceCheck):
    name = 'checkComponentsFolder'
    title = 'components folder'

    def run(self, mode: str) -> CheckReport:
        self.announce("Checking components folder...")
        components = self.project_root / 'components'

        if not components.is_dir():
            self.announce_problem("❌ 'components' folder is missing!")
            return self.create_report(mode, Outcome.MISSING, passed=False, target=components)

        self.announce_ok("✔ 'components' folder exists.")
        return self.create_report(mode, Outcome.VALID, passed=True, target=components)


class BuildToolChecker(ManifestCheck):
    """Vite is the expected build tool."""

    name = 'checkBuildTool'
    title = 'build tool'

    def run(self, mode: str) -> CheckReport:
        self.announce("Checking build tool...")
        installed = self.installed()
        if installed is None:
            return self.no_manifest(mode)

        if 'vite' in installed:
            return self.ok(mode, "✔ Vite is being used as the build tool.")
        if 'webpack' in installed:
            return self.failed(mode, "❌ Webpack detected, but Vite is preferred!")
        if 'react-scripts' in installed:
            return self.failed(mode, "❌ Create React App detected, but Vite is preferred!")
        return self.failed(mode, "❌ No recognized build tool found.")


class TestingFrameworkChecker(ManifestCheck):
    """Vitest is the expected test runner."""

    name = 'checkTestingFramework'
    title = 'testing framework'

    def run(self, mode: str) -> CheckReport:
        self.announce("Checking testing framework...")
        installed = self.installed()
        if installed is None:
            return self.no_manifest(mode)

        if 'vitest' in installed:
            return self.ok(mode, "✔ Vitest is being used.")
        if 'jest' in installed:
            return self.failed(mode, "❌ Jest detected, but Vitest is preferred!")
        return self.failed(mode, "❌ No recognized testing framework found.")


class StateManagementChecker(ManifestCheck):
    """Zustand is the expected state library; Redux is rejected."""

    name = 'checkStateManagement'
    title = 'state management'

    def run(self, mode: str) -> CheckReport:
        self.announce("Checking state management libraries...")
        installed = self.installed()
        if installed is None:
            return self.no_manifest(mode)

        if 'redux' in installed or '@reduxjs/toolkit' in installed:
            return self.failed(mode, "❌ Redux detected. Zustand is preferred!")
        if 'zustand' in installed:
            return self.ok(mode, "✔ Zustand is being used.")
        return self.failed(mode, "❌ No recognized state management library found.")


class ImplicitAnyChecker(ComplianceCheck):
    """
    TypeScript strictness.

    tsconfig.json must exist, parse, and enable ``compilerOptions.strict``.
    Then every .ts/.tsx file is scanned for ``: any`` annotations.
    """

    name = 'checkImplicitAny'
    title = 'implicit any'

    def run(self, mode: str) -> CheckReport:
        self.announce("Checking for TypeScript 'implicit any' and strict mode...")
        tsconfig_path = self.project_root / 'tsconfig.json'
        content = file_access.read(tsconfig_path)

        if content is None:
            self.announce_problem("❌ tsconfig.json not found. Skipping TypeScript checks.")
            return self.create_report(mode, Outcome.MISSING, passed=False, target=tsconfig_path)

        if not content:
            self.announce_problem("❌ tsconfig.json is empty.")
            return self.create_report(mode, Outcome.FAILED, passed=False, target=tsconfig_path)

        try:
            tsconfig = json.loads(content)
        except json.JSONDecodeError as e:
            self.announce_problem("❌ Failed to read or parse tsconfig.json.")
            self.log_error(f"Invalid JSON in {tsconfig_path} at line {e.lineno}: {e.msg}", error_code='FS-03')
            return self.create_report(mode, Outcome.FAILED, passed=False, target=tsconfig_path)

        details = []
        compiler_options = tsconfig.get('compilerOptions') if isinstance(tsconfig, dict) else None
        if not isinstance(compiler_options, dict) or compiler_options.get('strict') is not True:
            message = "❌ TypeScript strict mode is not enabled in tsconfig.json."
            self.announce_problem(message)
            details.append(message)
        else:
            self.announce_ok("✔ TypeScript strict mode is enabled.")

        for path in iter_source_files(self.project_root, extensions=('.ts', '.tsx')):
            if EXPLICIT_ANY.search(path.read_text(encoding='utf-8', errors='replace')):
                message = f"❌ 'any' type found in: {path.relative_to(self.project_root)}"
                self.announce_problem(message)
                details.append(message)

        if details:
            return self.create_report(mode, Outcome.FAILED, passed=False,
                                      target=tsconfig_path, details=details)

        self.announce_ok("✔ No explicit 'any' types found.")
        return self.create_report(mode, Outcome.VALID, passed=True, target=tsconfig_path)


class ReactFCUsageChecker(ComplianceCheck):
    name = 'checkReactFCUsage'
    title = 'React.FC usage'

    def run(self, mode: str) -> CheckReport:
        self.announce("Checking for React.FC usage...")
        details = []

        for path in iter_source_files(self.project_root, extensions=('.tsx',)):
            if REACT_FC.search(path.read_text(encoding='utf-8', errors='replace')):
                message = f"❌ React.FC found in: {path.relative_to(self.project_root)}"
                self.announce_problem(message)
                details.append(message)

        if details:
            return self.create_report(mode, Outcome.FAILED, passed=False, details=details)

        self.announce_ok("✔ No React.FC usage detected.")
        return self.create_report(mode, Outcome.VALID, passed=True)
