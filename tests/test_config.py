"""
Test suite for configuration loading, validation and persistence.

Covers:
1. Default config creation
2. JSON / YAML / TOML round trips
3. Schema validation (errors vs warnings)
4. Parse and format errors
"""

import json
import logging
from pathlib import Path

import pytest
import yaml

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from devguard.core.config import (
    DEFAULT_DEPENDENCIES,
    DEFAULT_ENABLED_CHECKS,
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


class TestDefaults:

    def test_core_checks_enabled_conventions_disabled(self):
        config = GuardConfig()
        assert config.is_enabled('checkTsConfig')
        assert config.is_enabled('checkFunctionComments')
        assert not config.is_enabled('checkBuildTool')
        assert not config.is_enabled('checkStateManagement')

    def test_default_dependencies(self):
        assert GuardConfig().dependencies_to_check == [
            '@tanstack/react-query',
            '@tanstack/react-query-devtools',
            'mssql',
        ]

    def test_defaults_are_not_shared(self):
        """Editing one config must not leak into the module defaults."""
        config = GuardConfig()
        config.enabled_checks['checkTsConfig'] = False
        config.dependencies_to_check.append('zod')
        assert DEFAULT_ENABLED_CHECKS['checkTsConfig'] is True
        assert 'zod' not in DEFAULT_DEPENDENCIES

    def test_unknown_check_is_disabled(self):
        assert not GuardConfig().is_enabled('checkNothing')


class TestLoadOrCreate:

    def test_creates_default_json(self, tmp_path):
        path = tmp_path / 'config.json'

        config = load_or_create_config(path)

        data = json.loads(path.read_text(encoding='utf-8'))
        assert data == {
            'enabledChecks': DEFAULT_ENABLED_CHECKS,
            'dependenciesToCheck': DEFAULT_DEPENDENCIES,
        }
        assert config.path == path

    def test_existing_file_is_not_overwritten(self, tmp_path):
        path = tmp_path / 'config.json'
        path.write_text(json.dumps({'dependenciesToCheck': ['react']}), encoding='utf-8')

        config = load_or_create_config(path)

        assert config.dependencies_to_check == ['react']
        assert json.loads(path.read_text(encoding='utf-8')) == {'dependenciesToCheck': ['react']}

    def test_partial_config_keeps_other_defaults(self, tmp_path):
        path = tmp_path / 'config.json'
        path.write_text(json.dumps({'enabledChecks': {'checkESLint': False}}), encoding='utf-8')

        config = load_config(path)

        assert not config.is_enabled('checkESLint')
        assert config.is_enabled('checkPrettierConfig')
        assert config.dependencies_to_check == DEFAULT_DEPENDENCIES


class TestFormats:
    """The suffix picks the format for both reading and writing."""

    @pytest.mark.parametrize("name", ['config.json', 'config.yaml', 'config.yml', 'config.toml'])
    def test_save_then_load(self, tmp_path, name):
        config = GuardConfig()
        config.enabled_checks['checkREADME'] = False
        config.dependencies_to_check = ['react', '@scope/pkg']

        path = save_config(config, tmp_path / name)
        loaded = load_config(path)

        assert loaded.enabled_checks == config.enabled_checks
        assert loaded.dependencies_to_check == ['react', '@scope/pkg']

    def test_yaml_keeps_key_order(self, tmp_path):
        path = save_config(GuardConfig(), tmp_path / 'config.yaml')
        data = yaml.safe_load(path.read_text(encoding='utf-8'))
        assert list(data['enabledChecks']) == list(DEFAULT_ENABLED_CHECKS)

    def test_json_is_indented(self, tmp_path):
        path = save_config(GuardConfig(), tmp_path / 'config.json')
        assert path.read_text(encoding='utf-8').startswith('{\n  "enabledChecks"')

    def test_save_defaults_to_loaded_path(self, tmp_path):
        path = tmp_path / 'settings.yaml'
        config = load_or_create_config(path)
        config.dependencies_to_check = ['vite']

        assert save_config(config) == path
        assert load_config(path).dependencies_to_check == ['vite']

    def test_empty_yaml_means_defaults(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text('', encoding='utf-8')
        assert load_config(path).enabled_checks == DEFAULT_ENABLED_CHECKS


class TestLoadErrors:

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / 'config.json')

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / 'config.ini'
        path.write_text('[x]', encoding='utf-8')
        with pytest.raises(ValueError, match="Unsupported config format"):
            load_config(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / 'config.json'
        path.write_text('{"enabledChecks": ', encoding='utf-8')
        with pytest.raises(ValueError, match="JSON parse error"):
            load_config(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text('enabledChecks: [unclosed', encoding='utf-8')
        with pytest.raises(ValueError, match="YAML parse error"):
            load_config(path)

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / 'config.toml'
        path.write_text('dependenciesToCheck = [', encoding='utf-8')
        with pytest.raises(ValueError, match="TOML parse error"):
            load_config(path)

    def test_non_bool_flag_is_rejected(self, tmp_path):
        path = tmp_path / 'config.json'
        path.write_text(json.dumps({'enabledChecks': {'checkTsConfig': 'yes'}}), encoding='utf-8')
        with pytest.raises(ConfigValidationError) as exc_info:
            load_config(path)
        assert 'enabledChecks.checkTsConfig' in str(exc_info.value)


class TestSchemaValidation:

    def test_valid_config(self):
        result = validate_config_schema({
            'enabledChecks': {'checkTsConfig': True},
            'dependenciesToCheck': ['react'],
        })
        assert result
        assert result.errors == []
        assert result.warnings == []

    def test_unknown_keys_warn(self):
        result = validate_config_schema({'theme': 'dark', 'enabledChecks': {'checkNothing': True}})
        assert result.is_valid
        assert len(result.warnings) == 2

    def test_string_dependencies_warn(self, tmp_path, caplog):
        """A single string is accepted as a one-item list."""
        path = tmp_path / 'config.json'
        path.write_text(json.dumps({'dependenciesToCheck': 'mssql'}), encoding='utf-8')

        with caplog.at_level(logging.WARNING):
            config = load_config(path)

        assert config.dependencies_to_check == ['mssql']
        assert 'Expected a list' in caplog.text

    def test_empty_dependency_name_is_error(self):
        result = validate_config_schema({'dependenciesToCheck': ['react', '  ']})
        assert not result.is_valid
        assert 'dependenciesToCheck[1]' in result.errors[0]

    def test_non_mapping_config(self):
        result = validate_config_schema(['not', 'a', 'mapping'])
        assert not result

    def test_raise_if_invalid(self):
        with pytest.raises(ConfigValidationError):
            ValidationResult(is_valid=False, errors=['boom']).raise_if_invalid()


class TestPackageList:

    def test_none_is_empty(self):
        assert as_package_list(None, 'deps') == []

    def test_string_is_one_package(self):
        assert as_package_list(' react ', 'deps') == ['react']

    def test_names_are_trimmed(self):
        assert as_package_list([' zod', 'vite '], 'deps') == ['zod', 'vite']

    def test_other_types_rejected(self):
        with pytest.raises(ConfigError) as exc_info:
            as_package_list(42, 'deps')
        assert str(exc_info.value) == "[deps] Expected a list of package names, got 42"
