"""
Dev Guardian Core - shared building blocks for compliance checks.

Fingerprinting, file access, configuration, external tool invocation,
console colors and logging. Checks live in ``devguard.checkers``.
"""

from .base import (
    Action,
    CheckReport,
    ComplianceCheck,
    Outcome,
    MODE_CHECK,
    MODE_HEAL,
)
from .fingerprint import fingerprint, fingerprints_match
from .file_access import FileWriteError, exists, read, write
from .config import (
    ConfigError,
    ConfigValidationError,
    GuardConfig,
    ValidationResult,
    as_package_list,
    load_config,
    load_or_create_config,
    save_config,
    validate_config_schema,
)
from .tools import ToolResult, ToolRunner

__all__ = [
    # Base classes
    'Action',
    'CheckReport',
    'ComplianceCheck',
    'Outcome',
    'MODE_CHECK',
    'MODE_HEAL',

    # Fingerprints and files
    'fingerprint',
    'fingerprints_match',
    'FileWriteError',
    'exists',
    'read',
    'write',

    # Config
    'ConfigError',
    'ConfigValidationError',
    'GuardConfig',
    'ValidationResult',
    'as_package_list',
    'load_config',
    'load_or_create_config',
    'save_config',
    'validate_config_schema',

    # Tools
    'ToolResult',
    'ToolRunner',
]
