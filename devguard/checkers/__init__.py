"""
Dev Guardian Checks

One checker per governed artifact or project convention.
"""

from .artifacts import (
    ArtifactChecker,
    ToolBackedChecker,
    TsConfigChecker,
    GitignoreChecker,
    PrettierConfigChecker,
    ESLintConfigChecker,
)
from .dependencies import DependencyChecker, DependencyResult, check_dependencies
from .readme import ReadmeChecker
from .documentation import DocumentationChecker, find_undocumented, scan_documentation
from .conventions import (
    ComponentsFolderChecker,
    BuildToolChecker,
    TestingFrameworkChecker,
    ImplicitAnyChecker,
    ReactFCUsageChecker,
    StateManagementChecker,
)

__all__ = [
    'ArtifactChecker',
    'ToolBackedChecker',
    'TsConfigChecker',
    'GitignoreChecker',
    'PrettierConfigChecker',
    'ESLintConfigChecker',
    'DependencyChecker',
    'DependencyResult',
    'check_dependencies',
    'ReadmeChecker',
    'DocumentationChecker',
    'find_undocumented',
    'scan_documentation',
    'ComponentsFolderChecker',
    'BuildToolChecker',
    'TestingFrameworkChecker',
    'ImplicitAnyChecker',
    'ReactFCUsageChecker',
    'StateManagementChecker',
]
