"""Custom exceptions for git-workty"""

from pathlib import Path
from typing import Optional, Union


class WorktyError(Exception):
    """Base exception for all git-workty errors."""
    pass


class GitOperationError(WorktyError):
    """Exception raised when a git subprocess exits non-zero."""

    def __init__(self, operation: str, message: Optional[str] = None, status: Optional[int] = None):
        self.operation = operation
        self.message = message
        self.status = status

        error_msg = f"git {operation} failed"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class NotARepositoryError(GitOperationError):
    """Exception raised when discovery runs outside a git working tree."""

    def __init__(self, path: Union[str, Path], message: Optional[str] = None, status: Optional[int] = None):
        self.path = Path(path)
        super().__init__("rev-parse", message or f"{path} is not inside a git working tree", status)


class ConfigError(WorktyError):
    """Base exception for configuration file problems."""

    action = "access"

    def __init__(self, path: Union[str, Path], message: Optional[str] = None):
        self.path = Path(path)
        self.message = message

        error_msg = f"Failed to {self.action} config {self.path}"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class ConfigReadError(ConfigError):
    """Exception raised when an existing config file cannot be read."""

    action = "read"


class ConfigParseError(ConfigError):
    """Exception raised when an existing config file is malformed."""

    action = "parse"


class ConfigWriteError(ConfigError):
    """Exception raised when the config file cannot be written."""

    action = "write"
