"""
Configuration Loader
Builds an ApiCallConfig from a JSON file, API_CALL_* variables and
keyword overrides
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from api_call.config.api_call_config import (
    ApiCallConfig,
    ENV_VAR_MAPPING,
    ConfigDefaults,
)
from api_call.config.config_validator import ConfigValidator
from api_call.exceptions import ApiCallError


# Settings parsed from "true"/"1"/"yes" strings
BOOLEAN_SETTINGS = ("print_diagnostics", "enable_audit_log")


class ConfigLoader:
    """
    Reads request execution settings from the places a script keeps them

    Handles never call this on their own; a caller that wants file or
    environment settings loads them here and passes the result to a
    factory.
    """

    def __init__(self) -> None:
        self._validator = ConfigValidator()

    def from_file(self, path: Union[str, Path]) -> Dict[str, Any]:
        """
        Read settings from a JSON object stored on disk

        Args:
            path: JSON file holding an object of settings

        Returns:
            The settings found in the file

        Raises:
            ApiCallError: If the file is missing, unparsable or not an object
        """
        file_path = Path(path).resolve()

        if not file_path.exists():
            raise ApiCallError(
                f"Configuration file not found: {file_path}",
                code="CONFIG_FILE_NOT_FOUND"
            )

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                settings = json.load(f)
        except json.JSONDecodeError as e:
            raise ApiCallError(
                f"Invalid JSON in configuration file: {file_path}",
                code="CONFIG_PARSE_ERROR",
                cause=e,
            ) from e

        if not isinstance(settings, dict):
            raise ApiCallError(
                f"Configuration file must contain a JSON object: {file_path}",
                code="CONFIG_PARSE_ERROR"
            )
        return settings

    def from_environment(self) -> Dict[str, Any]:
        """
        Collect the API_CALL_* variables that are set and non-empty

        Returns:
            Settings keyed by field name
        """
        settings: Dict[str, Any] = {}

        for env_var, field_name in ENV_VAR_MAPPING.items():
            raw = os.environ.get(env_var)
            if raw:
                settings[field_name] = self._parse_env_value(field_name, raw)

        return settings

    def merge(self, *sources: Dict[str, Any]) -> Dict[str, Any]:
        """
        Layer setting sources; a later source wins over an earlier one

        None values never override a setting.
        """
        merged: Dict[str, Any] = {}
        for source in sources:
            merged.update(self._filter_none(source))
        return merged

    def resolve(self, settings: Dict[str, Any]) -> ApiCallConfig:
        """
        Check merged settings and build the config

        Raises:
            ValidationError: If a setting is unknown or has a bad value
        """
        self._validator.validate_or_raise(settings)
        return ApiCallConfig(**settings)

    def load(
        self,
        file: Optional[Union[str, Path]] = None,
        env: bool = True,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> ApiCallConfig:
        """
        Build a config from file, environment and overrides, in that order
        of precedence from lowest to highest

        Args:
            file: Optional JSON settings file
            env: Read API_CALL_* variables when True
            overrides: Settings given in code

        Returns:
            The resolved ApiCallConfig
        """
        sources = []

        if file is not None:
            sources.append(self.from_file(file))
        if env:
            sources.append(self.from_environment())
        if overrides is not None:
            sources.append(overrides)

        return self.resolve(self.merge(*sources))

    def create_template(self, path: Union[str, Path]) -> None:
        """Write a JSON file holding every setting at its default value"""
        template = {
            "default_content_type": ConfigDefaults.DEFAULT_CONTENT_TYPE,
            "print_diagnostics": ConfigDefaults.PRINT_DIAGNOSTICS,
            "enable_audit_log": ConfigDefaults.ENABLE_AUDIT_LOG,
            "log_level": ConfigDefaults.LOG_LEVEL,
        }

        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(template, f, indent=2)

    def _parse_env_value(self, field_name: str, raw: str) -> Any:
        """Convert a variable's text to the field's type"""
        if field_name in BOOLEAN_SETTINGS:
            return raw.lower() in ("true", "1", "yes")
        if field_name == "log_level":
            return raw.upper()
        return raw

    def _filter_none(self, settings: Dict[str, Any]) -> Dict[str, Any]:
        return {k: v for k, v in settings.items() if v is not None}
