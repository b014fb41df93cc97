"""
Configuration Module Unit Tests
"""

import os
import json
import tempfile
from pathlib import Path
import pytest

from api_call.config import (
    ApiCallConfig,
    ConfigLoader,
    ConfigValidator,
    ConfigDefaults,
)
from api_call.exceptions import ApiCallError, ValidationError


class TestConfigValidator:
    """Tests for ConfigValidator"""

    @pytest.fixture
    def validator(self) -> ConfigValidator:
        return ConfigValidator()

    @pytest.fixture
    def valid_config(self) -> dict:
        return {
            "default_content_type": "application/json",
            "print_diagnostics": False,
            "enable_audit_log": True,
            "log_level": "INFO",
        }

    def test_validate_valid_config(self, validator: ConfigValidator, valid_config: dict):
        """Should pass with valid configuration"""
        result = validator.validate(valid_config)
        assert result.valid is True
        assert len(result.errors) == 0

    def test_validate_empty_config(self, validator: ConfigValidator):
        """Should pass with no settings at all"""
        assert validator.validate({}).valid is True

    def test_validate_content_type_with_parameters(self, validator: ConfigValidator, valid_config: dict):
        """Should accept media type parameters"""
        valid_config["default_content_type"] = "text/plain; charset=utf-8"
        assert validator.validate(valid_config).valid is True

    def test_validate_invalid_content_type(self, validator: ConfigValidator, valid_config: dict):
        """Should fail when content type has no subtype"""
        valid_config["default_content_type"] = "json"
        result = validator.validate(valid_config)
        assert result.valid is False
        assert any(
            e.field == "default_content_type" and "type/subtype" in e.message
            for e in result.errors
        )

    def test_validate_empty_content_type(self, validator: ConfigValidator, valid_config: dict):
        """Should fail when content type is empty"""
        valid_config["default_content_type"] = "  "
        result = validator.validate(valid_config)
        assert result.valid is False
        assert any(
            e.field == "default_content_type" and "empty" in e.message
            for e in result.errors
        )

    def test_validate_non_boolean_flag(self, validator: ConfigValidator, valid_config: dict):
        """Should fail when a flag is not a boolean"""
        valid_config["print_diagnostics"] = "yes"
        result = validator.validate(valid_config)
        assert result.valid is False
        assert any(e.field == "print_diagnostics" for e in result.errors)

    def test_validate_invalid_log_level(self, validator: ConfigValidator, valid_config: dict):
        """Should fail with unknown log level"""
        valid_config["log_level"] = "LOUD"
        result = validator.validate(valid_config)
        assert result.valid is False
        assert any(e.field == "log_level" for e in result.errors)

    def test_validate_lowercase_log_level(self, validator: ConfigValidator, valid_config: dict):
        """Should accept log level names in any case"""
        valid_config["log_level"] = "debug"
        assert validator.validate(valid_config).valid is True

    def test_validate_unknown_field(self, validator: ConfigValidator, valid_config: dict):
        """Should fail on unknown configuration keys"""
        valid_config["timeout"] = 1000
        result = validator.validate(valid_config)
        assert result.valid is False
        assert any(e.field == "timeout" for e in result.errors)

    def test_validate_or_raise_invalid(self, validator: ConfigValidator, valid_config: dict):
        """Should raise ValidationError with invalid configuration"""
        valid_config["log_level"] = "LOUD"
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_or_raise(valid_config)
        assert exc_info.value.field == "log_level"


class TestConfigLoader:
    """Tests for ConfigLoader"""

    @pytest.fixture
    def loader(self) -> ConfigLoader:
        return ConfigLoader()

    @pytest.fixture
    def valid_config(self) -> dict:
        return {
            "default_content_type": "application/json",
            "print_diagnostics": False,
        }

    def test_from_environment(self, loader: ConfigLoader, monkeypatch):
        """Should load configuration from environment variables"""
        monkeypatch.setenv("API_CALL_DEFAULT_CONTENT_TYPE", "application/xml")
        monkeypatch.setenv("API_CALL_PRINT_DIAGNOSTICS", "false")
        monkeypatch.setenv("API_CALL_ENABLE_AUDIT_LOG", "yes")
        monkeypatch.setenv("API_CALL_LOG_LEVEL", "debug")

        result = loader.from_environment()

        assert result["default_content_type"] == "application/xml"
        assert result["print_diagnostics"] is False
        assert result["enable_audit_log"] is True
        assert result["log_level"] == "DEBUG"

    def test_from_environment_boolean_parsing(self, loader: ConfigLoader, monkeypatch):
        """Should parse boolean values correctly"""
        monkeypatch.setenv("API_CALL_ENABLE_AUDIT_LOG", "true")
        result = loader.from_environment()
        assert result["enable_audit_log"] is True

        monkeypatch.setenv("API_CALL_ENABLE_AUDIT_LOG", "1")
        result = loader.from_environment()
        assert result["enable_audit_log"] is True

        monkeypatch.setenv("API_CALL_ENABLE_AUDIT_LOG", "false")
        result = loader.from_environment()
        assert result["enable_audit_log"] is False

    def test_from_environment_ignores_empty(self, loader: ConfigLoader, monkeypatch):
        """Should skip empty environment variables"""
        monkeypatch.setenv("API_CALL_LOG_LEVEL", "")
        assert "log_level" not in loader.from_environment()

    def test_merge(self, loader: ConfigLoader):
        """Should merge multiple configurations with priority"""
        base = {"log_level": "INFO", "print_diagnostics": True}
        override = {"log_level": "DEBUG", "enable_audit_log": True}

        result = loader.merge(base, override)

        assert result["log_level"] == "DEBUG"
        assert result["print_diagnostics"] is True
        assert result["enable_audit_log"] is True

    def test_merge_filters_none(self, loader: ConfigLoader):
        """Should not include None values from overrides"""
        base = {"log_level": "INFO", "print_diagnostics": False}
        override = {"log_level": "DEBUG", "print_diagnostics": None}

        result = loader.merge(base, override)

        assert result["log_level"] == "DEBUG"
        assert result["print_diagnostics"] is False

    def test_resolve_applies_defaults(self, loader: ConfigLoader):
        """Should apply default values"""
        result = loader.resolve({})

        assert result.default_content_type == ConfigDefaults.DEFAULT_CONTENT_TYPE
        assert result.print_diagnostics == ConfigDefaults.PRINT_DIAGNOSTICS
        assert result.enable_audit_log == ConfigDefaults.ENABLE_AUDIT_LOG
        assert result.log_level == ConfigDefaults.LOG_LEVEL

    def test_resolve_invalid(self, loader: ConfigLoader):
        """Should raise ValidationError for invalid settings"""
        with pytest.raises(ValidationError):
            loader.resolve({"default_content_type": "plain"})

    def test_from_file(self, loader: ConfigLoader, valid_config: dict):
        """Should load configuration from JSON file"""
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".json", delete=False
        ) as f:
            json.dump(valid_config, f)
            f.flush()

        try:
            result = loader.from_file(f.name)
            assert result["default_content_type"] == valid_config["default_content_type"]
        finally:
            os.unlink(f.name)

    def test_from_file_not_found(self, loader: ConfigLoader):
        """Should raise error for missing file"""
        with pytest.raises(ApiCallError) as exc_info:
            loader.from_file("/nonexistent/path.json")

        assert "CONFIG_FILE_NOT_FOUND" in str(exc_info.value.code)

    def test_from_file_invalid_json(self, loader: ConfigLoader, tmp_path: Path):
        """Should raise error for malformed JSON"""
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ApiCallError) as exc_info:
            loader.from_file(path)

        assert exc_info.value.has_code("CONFIG_PARSE_ERROR")

    def test_load_from_overrides(self, loader: ConfigLoader, valid_config: dict):
        """Should load and resolve configuration from dict"""
        result = loader.load(overrides=valid_config, env=False)

        assert result.default_content_type == "application/json"
        assert result.print_diagnostics is False
        assert result.log_level == ConfigDefaults.LOG_LEVEL

    def test_load_priority(self, loader: ConfigLoader, tmp_path: Path, monkeypatch):
        """Should let environment override file and config override both"""
        path = tmp_path / "api_call.json"
        path.write_text(json.dumps({"log_level": "ERROR", "enable_audit_log": True}), encoding="utf-8")
        monkeypatch.setenv("API_CALL_LOG_LEVEL", "INFO")
        monkeypatch.setenv("API_CALL_PRINT_DIAGNOSTICS", "false")

        result = loader.load(file=path, env=True, overrides={"print_diagnostics": True})

        assert result.log_level == "INFO"
        assert result.enable_audit_log is True
        assert result.print_diagnostics is True

    def test_create_template(self, loader: ConfigLoader):
        """Should create template configuration file"""
        with tempfile.TemporaryDirectory() as tmpdir:
            template_path = Path(tmpdir) / "config" / "template.json"
            loader.create_template(template_path)

            assert template_path.exists()

            with open(template_path) as f:
                template = json.load(f)

            assert template["default_content_type"] == "text/plain"
            assert "log_level" in template
            assert loader.resolve(template) == ApiCallConfig()


class TestApiCallConfig:
    """Tests for ApiCallConfig Pydantic model"""

    def test_defaults(self):
        """Should create config with defaults"""
        config = ApiCallConfig()
        assert config.default_content_type == "text/plain"
        assert config.print_diagnostics is True
        assert config.enable_audit_log is False

    def test_log_level_normalized(self):
        """Should upper-case the log level"""
        config = ApiCallConfig(log_level="debug")
        assert config.log_level == "DEBUG"

    def test_invalid_content_type(self):
        """Should reject a content type without subtype"""
        with pytest.raises(ValueError):
            ApiCallConfig(default_content_type="text/")

    def test_invalid_log_level(self):
        """Should reject an unknown log level"""
        with pytest.raises(ValueError):
            ApiCallConfig(log_level="LOUD")

    def test_validate_assignment(self):
        """Should validate values assigned after creation"""
        config = ApiCallConfig()
        with pytest.raises(ValueError):
            config.log_level = "LOUD"
