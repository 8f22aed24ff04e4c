"""Command-line interface for publishing mkdocs trees to Confluence.

This package provides the `confluence-publish` CLI tool. It loads the publish
configuration, builds the local docs context and runs the publisher or the
cleanup sweeper, with Rich terminal output and exit codes per failure type.
"""

from .config import PublishConfigLoader
from .errors import CLIError, ConfigNotFoundError
from .models import ExitCode, PublishConfig
from .publish_command import CleanupCommand, PublishCommand

__all__ = [
    'PublishConfigLoader',
    'CLIError',
    'ConfigNotFoundError',
    'ExitCode',
    'PublishConfig',
    'CleanupCommand',
    'PublishCommand',
]
