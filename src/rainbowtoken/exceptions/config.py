"""Configuration and storage exceptions.

This module defines exceptions for configuration and game file errors:
- ConfigurationError: Base class for configuration errors
- ConfigFileInvalidError: Config file has invalid syntax
- ConfigValidationError: Config values fail validation
- GameNotDeployedError: No game file exists at the state path
- GameAlreadyDeployedError: A game file would be overwritten
"""

from pathlib import Path

from .base import RainbowTokenError


class ConfigurationError(RainbowTokenError):
    """Configuration is invalid or cannot be loaded."""
    pass


class ConfigFileInvalidError(ConfigurationError):
    """Configuration file has invalid JSON syntax."""

    def __init__(self, file_path: str, parse_error: str):
        """
        Initialize config file invalid error.

        Args:
            file_path: Path to the invalid file
            parse_error: The parsing error message
        """
        user_msg = "Configuration file has invalid syntax"
        recovery = "Check for common JSON errors:\n"
        recovery += "  - Trailing commas (remove commas after last item)\n"
        recovery += "  - Missing quotes around strings\n"
        recovery += "  - Unclosed braces or brackets\n"
        recovery += f"  - Edit: {file_path}"

        if "trailing comma" in parse_error.lower():
            user_msg = "Configuration file has a trailing comma"
            recovery = (
                f"Remove the trailing comma from {file_path}\n"
                "JSON doesn't allow commas after the last item in an object or array"
            )
        elif "empty" in parse_error.lower():
            user_msg = "Configuration file is empty"

        super().__init__(
            user_message=user_msg,
            technical_message=f"JSON parse error in {file_path}: {parse_error}",
            recoverable=True,
            recovery_hint=recovery
        )
        self.file_path = file_path
        self.parse_error = parse_error


class ConfigValidationError(ConfigurationError):
    """Configuration values fail validation."""

    def __init__(self, field: str, value: object, error_msg: str, file_path: str | None = None):
        """
        Initialize config validation error.

        Args:
            field: The configuration field that failed validation
            value: The invalid value
            error_msg: Why the value is invalid
            file_path: Path to the config file (optional)
        """
        user_msg = f"Invalid configuration value for '{field}': {error_msg}"

        recovery = f"Update the '{field}' value in your configuration"
        if file_path:
            recovery += f"\nConfig file: {file_path}"

        if "fee" in field.lower() or "price" in field.lower():
            recovery += "\nAmounts are integers in wei and must be strictly positive"
        elif "margin" in field.lower():
            recovery += "\nThe target margin must be between 0 and 127"

        super().__init__(
            user_message=user_msg,
            technical_message=f"Config validation failed for {field}={value}: {error_msg}",
            recoverable=True,
            recovery_hint=recovery
        )
        self.field = field
        self.value = value
        self.file_path = file_path


class GameNotDeployedError(ConfigurationError):
    """No game has been deployed at the configured state file."""

    def __init__(self, path: Path):
        super().__init__(
            user_message=f"No game found at {path}",
            recoverable=True,
            recovery_hint="Run 'rainbowtoken deploy R G B' to start a game",
        )
        self.path = path


class GameAlreadyDeployedError(ConfigurationError):
    """A game already exists at the state file and would be overwritten."""

    def __init__(self, path: Path):
        super().__init__(
            user_message=f"A game already exists at {path}",
            recoverable=True,
            recovery_hint="Use --force to replace it, or --state to pick another file",
        )
        self.path = path
