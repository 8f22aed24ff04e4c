"""Typed exception hierarchy for local documentation tree errors.

This module defines the exceptions raised while reading the navigation
description and the source files it points at. Every one of them is raised
before the first remote call of a run.
"""

from typing import Optional

from src.confluence_client.errors import SyncError


class DocsTreeError(SyncError):
    """Base exception for all local documentation tree errors."""
    pass


class FilesystemError(DocsTreeError):
    """Raised when filesystem operations fail (read, permissions, etc)."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class ConfigError(DocsTreeError):
    """Raised when the navigation description or publish configuration is invalid."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message
