"""
Configuration for Dev Guardian.

The configuration file decides which checks run and which dependencies the
manifest must declare:

    {
      "enabledChecks": {"checkTsConfig": true, ...},
      "dependenciesToCheck": ["mssql", ...]
    }

The format follows the file suffix: .json (default), .yaml/.yml or .toml.
If the file does not exist it is created with DEFAULT_ENABLED_CHECKS and
DEFAULT_DEPENDENCIES. The interactive settings menu is the only thing that
changes it afterwards, through save_config().

Loading happens once at the entry point; the resulting GuardConfig is passed
explicitly to the orchestrator and the shell.
"""

import json
import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import toml
import yaml


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = 'config.json'

MAX_CONFIG_SIZE = 10 * 1024 * 1024  # 10MB

SUPPORTED_SUFFIXES = ('.json', '.yaml', '.yml', '.toml')

# Checks in the order the orchestrator runs them, with their defaults.
DEFAULT_ENABLED_CHECKS: Dict[str, bool] = {
    'checkTsConfig': True,
    'checkDependencies': True,
    'checkGitignore': True,
    'checkREADME': True,
    'checkPrettierConfig': True,
    'checkESLint': True,
    'checkFunctionComments': True,
    'checkComponentsFolder': False,
    'checkBuildTool': False,
    'checkTestingFramework': False,
    'checkImplicitAny': False,
    'checkReactFCUsage': False,
    'checkStateManagement': False,
}

DEFAULT_DEPENDENCIES: List[str] = [
    '@tanstack/react-query',
    '@tanstack/react-query-devtools',
    'mssql',
]


class ConfigError(Exception):
    """A single config value that cannot be used."""

    def __init__(self, key: str, message: str, value: Any = None):
        self.key = key
        self.value = value
        detail = f"[{key}] {message}"
        if value is not None:
            detail += f", got {value!r}"
        super().__init__(detail)


class ConfigValidationError(Exception):
    """The config file was read but its content is unusable."""

    def __init__(self, errors: List[str], warnings: Optional[List[str]] = None):
        self.errors = errors
        self.warnings = warnings or []
        lines = [f"Configuration validation failed ({len(errors)} error(s)):"]
        lines.extend(f"  - {err}" for err in errors)
        super().__init__("\n".join(lines))


@dataclass
class ValidationResult:
    """Result of configuration validation."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.is_valid

    def raise_if_invalid(self) -> 'ValidationResult':
        """Raise ConfigValidationError if validation failed."""
        if not self.is_valid:
            raise ConfigValidationError(self.errors, self.warnings)
        return self


@dataclass
class GuardConfig:
    """
    Loaded configuration.

    Attributes:
        enabled_checks: Check name -> enabled flag
        dependencies_to_check: Package names the manifest must declare
        path: File the config was loaded from (and is saved back to)
    """
    enabled_checks: Dict[str, bool] = field(default_factory=lambda: dict(DEFAULT_ENABLED_CHECKS))
    dependencies_to_check: List[str] = field(default_factory=lambda: list(DEFAULT_DEPENDENCIES))
    path: Optional[Path] = None

    def is_enabled(self, check_name: str) -> bool:
        return self.enabled_checks.get(check_name, False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'enabledChecks': dict(self.enabled_checks),
            'dependenciesToCheck': list(self.dependencies_to_check),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], path: Optional[Path] = None) -> 'GuardConfig':
        """
        Build a config from a parsed (and validated) mapping.

        Checks the file does not mention keep their default, so a config
        written by an older version still enables newly added checks.
        """
        enabled = dict(DEFAULT_ENABLED_CHECKS)
        enabled.update(data.get('enabledChecks') or {})
        dependencies = as_package_list(data.get('dependenciesToCheck', DEFAULT_DEPENDENCIES), 'dependenciesToCheck')
        return cls(enabled_checks=enabled, dependencies_to_check=list(dependencies), path=path)


def as_package_list(value: Any, key: str) -> List[str]:
    """
    Normalize a dependency setting to a list of trimmed package names.

    A bare string is one package. None means no packages.

    Raises:
        ConfigError: For anything that is not a string or a list of strings
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [value.strip()]
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return [item.strip() for item in value]
    raise ConfigError(key, "Expected a list of package names", value)


def validate_config_schema(config: Dict[str, Any]) -> ValidationResult:
    """
    Validate a parsed configuration mapping.

    Rules:
    - enabledChecks, if present, maps check names to booleans. Unknown
      names are a warning (they are ignored at run time).
    - dependenciesToCheck, if present, is a list of non-empty strings. A
      single string is accepted with a warning.
    - Any other top-level key is a warning.

    Args:
        config: Parsed configuration

    Returns:
        ValidationResult with all errors and warnings collected
    """
    errors: List[str] = []
    warnings: List[str] = []

    if not isinstance(config, dict):
        return ValidationResult(
            is_valid=False,
            errors=[f"[config] Config must be a mapping, got {type(config).__name__}"]
        )

    for key in config:
        if key not in ('enabledChecks', 'dependenciesToCheck'):
            warnings.append(f"[{key}] Unknown top-level key (ignored)")

    checks = config.get('enabledChecks', {})
    if not isinstance(checks, dict):
        errors.append(
            f"[enabledChecks] Expected a mapping of check name to true/false, "
            f"got {type(checks).__name__}"
        )
    else:
        for name, enabled in checks.items():
            if name not in DEFAULT_ENABLED_CHECKS:
                warnings.append(f"[enabledChecks.{name}] Unknown check (ignored)")
            if not isinstance(enabled, bool):
                errors.append(
                    f"[enabledChecks.{name}] Expected true or false, got {enabled!r}"
                )

    dependencies = config.get('dependenciesToCheck', [])
    if isinstance(dependencies, str):
        warnings.append(
            "[dependenciesToCheck] Expected a list, got a string. "
            "Treating it as a single dependency."
        )
        dependencies = [dependencies]

    if not isinstance(dependencies, list):
        errors.append(
            f"[dependenciesToCheck] Expected a list of package names, "
            f"got {type(dependencies).__name__}"
        )
    else:
        for idx, dep in enumerate(dependencies):
            if not isinstance(dep, str) or not dep.strip():
                errors.append(
                    f"[dependenciesToCheck[{idx}]] Expected a non-empty package name, got {dep!r}"
                )

    return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=warnings)


def _parse(config_path: Path) -> Any:
    suffix = config_path.suffix.lower()

    if suffix in ('.yaml', '.yml'):
        with open(config_path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f)

    if suffix == '.toml':
        with open(config_path, 'rb') as f:
            return tomllib.load(f)

    with open(config_path, 'r', encoding='utf-8') as f:
        return json.load(f)


def load_config(config_path: Path) -> GuardConfig:
    """
    Load and validate a configuration file.

    Args:
        config_path: Path to .json, .yaml/.yml or .toml file

    Returns:
        GuardConfig

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the format is unsupported, the file is too large, or
            it does not parse
        ConfigValidationError: If the parsed content is invalid
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    suffix = config_path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(
            f"Unsupported config format: {suffix}. "
            f"Use .json, .yaml, .yml, or .toml"
        )

    file_size = config_path.stat().st_size
    if file_size > MAX_CONFIG_SIZE:
        raise ValueError(
            f"Config file too large: {config_path} ({file_size:,} bytes). "
            f"Maximum is 10MB."
        )

    try:
        raw = _parse(config_path)
    except json.JSONDecodeError as e:
        raise ValueError(f"JSON parse error in {config_path} at line {e.lineno}: {e.msg}") from e
    except yaml.YAMLError as e:
        raise ValueError(f"YAML parse error in {config_path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"TOML parse error in {config_path}: {e}") from e

    if raw is None:
        raw = {}

    result = validate_config_schema(raw)
    for message in result.warnings:
        logger.warning(f"Config warning: {message}")
    result.raise_if_invalid()

    return GuardConfig.from_dict(raw, path=config_path)


def save_config(config: GuardConfig, config_path: Optional[Path] = None) -> Path:
    """
    Persist a configuration in the format its suffix names.

    Args:
        config: Configuration to save
        config_path: Target file (default: config.path)

    Returns:
        The path written
    """
    config_path = Path(config_path or config.path or DEFAULT_CONFIG_NAME)
    suffix = config_path.suffix.lower()
    data = config.to_dict()

    if suffix in ('.yaml', '.yml'):
        text = yaml.safe_dump(data, sort_keys=False, default_flow_style=False)
    elif suffix == '.toml':
        text = toml.dumps(data)
    elif suffix == '.json':
        text = json.dumps(data, indent=2)
    else:
        raise ValueError(
            f"Unsupported config format: {suffix}. "
            f"Use .json, .yaml, .yml, or .toml"
        )

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(text, encoding='utf-8')
    config.path = config_path
    logger.debug(f"Saved config to {config_path}")
    return config_path


def load_or_create_config(config_path: Path) -> GuardConfig:
    """
    Load a config file, creating it with defaults first if it is absent.

    Args:
        config_path: Config file location

    Returns:
        GuardConfig bound to config_path
    """
    config_path = Path(config_path)
    if not config_path.exists():
        logger.info(f"Creating default config at {config_path}")
        save_config(GuardConfig(), config_path)
    return load_config(config_path)
