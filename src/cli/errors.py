"""Typed exception hierarchy for CLI-related errors.

All exceptions inherit from CLIError so the command layer can report them
uniformly.
"""

from src.confluence_client.errors import SyncError


class CLIError(SyncError):
    """Base exception for all CLI-related errors."""
    pass


class ConfigNotFoundError(CLIError):
    """Raised when the publish configuration file is not found."""

    def __init__(self, config_path: str):
        super().__init__(
            f"Configuration file not found at {config_path} "
            f"(create it or pass --space)"
        )
        self.config_path = config_path
