"""Publish and cleanup command orchestration for the CLI.

The commands wire configuration, the docs context, the Confluence page
store and the publisher together, and translate exceptions into exit codes.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from src.cli.config import PublishConfigLoader
from src.cli.errors import CLIError
from src.cli.models import DEFAULT_CONFIG_FILE, ExitCode, PublishConfig
from src.cli.output import OutputHandler
from src.confluence_client.api_wrapper import APIWrapper
from src.confluence_client.auth import Authenticator
from src.confluence_client.errors import (
    APIAccessError,
    APIUnreachableError,
    ConversionError,
    InvalidCredentialsError,
    RemoteStoreError,
)
from src.confluence_client.page_store import ConfluencePageStore
from src.content_converter.page_renderer import PageRenderer
from src.docs_tree.config_loader import MkDocsConfigLoader
from src.docs_tree.context import build_context
from src.docs_tree.errors import DocsTreeError
from src.publisher.cleanup import CleanupSweeper
from src.publisher.errors import ConflictError
from src.publisher.publisher import DocsPublisher

logger = logging.getLogger(__name__)


class _Command:
    """Shared setup and error handling of the publish and cleanup commands."""

    def __init__(
        self,
        base_path: Union[str, Path] = '.',
        config_path: Optional[Union[str, Path]] = None,
        overrides: Optional[Dict[str, Any]] = None,
        output_handler: Optional[OutputHandler] = None,
        authenticator: Optional[Authenticator] = None,
        store: Optional[ConfluencePageStore] = None,
    ):
        """Initialize the command with its dependencies.

        Args:
            base_path: Directory holding mkdocs.yml and README.md
            config_path: Publish configuration file; an explicitly given path
                must exist. Defaults to confluence-publish.yaml in base_path.
            overrides: Configuration values from the command line
            output_handler: OutputHandler for terminal output (optional)
            authenticator: Authenticator for the Confluence API (optional)
            store: Page store to use instead of one built from the config (optional)
        """
        self.base_path = Path(base_path)
        self.config_required = config_path is not None
        self.config_path = Path(config_path) if config_path else self.base_path / DEFAULT_CONFIG_FILE
        self.overrides = overrides or {}
        self.output_handler = output_handler or OutputHandler()
        self.authenticator = authenticator
        self.store = store

    def _load_config(self) -> PublishConfig:
        logger.info(f"Loading configuration from {self.config_path}")
        config = PublishConfigLoader.load(
            self.config_path,
            overrides=self.overrides,
            required=self.config_required,
        )
        logger.debug(f"Publishing to space {config.space_key}")
        return config

    def _get_store(self, config: PublishConfig) -> ConfluencePageStore:
        if self.store is None:
            if self.authenticator is None:
                self.authenticator = Authenticator()
            self.store = ConfluencePageStore(
                APIWrapper(self.authenticator),
                config.space_key,
                cascade_delete=config.cascade_delete,
            )
        return self.store

    def _execute(self, action: str, operation: Callable[[], ExitCode]) -> ExitCode:
        """Run ``operation`` and translate failures into exit codes."""
        try:
            return operation()

        except InvalidCredentialsError as e:
            logger.error(f"Authentication failed: {e}")
            self.output_handler.error(f"Authentication failed: {e}")
            self.output_handler.info(
                "Check CONFLUENCE_URL, CONFLUENCE_USER and CONFLUENCE_API_TOKEN"
            )
            return ExitCode.AUTH_ERROR

        except (APIUnreachableError, APIAccessError) as e:
            logger.error(f"API error: {e}")
            self.output_handler.error(f"API error: {e}")
            self.output_handler.info("Check your internet connection and try again")
            return ExitCode.NETWORK_ERROR

        except ConflictError as e:
            logger.error(f"Conflict: {e}")
            self.output_handler.error(f"Conflict: {e}")
            return ExitCode.CONFLICTS

        except (DocsTreeError, CLIError) as e:
            logger.error(f"Configuration error: {e}")
            self.output_handler.error(str(e))
            return ExitCode.GENERAL_ERROR

        except (RemoteStoreError, ConversionError) as e:
            logger.error(f"{action.capitalize()} failed: {e}")
            self.output_handler.error(f"{action.capitalize()} failed: {e}")
            return ExitCode.GENERAL_ERROR

        except Exception as e:
            logger.exception(f"Unexpected error during {action}")
            self.output_handler.error(f"Unexpected error: {e}")
            return ExitCode.GENERAL_ERROR


class PublishCommand(_Command):
    """Publishes the mkdocs tree under ``base_path`` to Confluence.

    Example:
        >>> command = PublishCommand(".", overrides={"space_key": "DOCS"})
        >>> sys.exit(command.run())
    """

    def run(self) -> ExitCode:
        return self._execute("publish", self._publish)

    def _publish(self) -> ExitCode:
        config = self._load_config()
        context = build_context(self.base_path, config.title_prefix, config.mkdocs_file)
        self.output_handler.info(
            f"Publishing {len(context.pages)} page(s) of \"{context.site_name}\" "
            f"to space {config.space_key}"
        )

        publisher = DocsPublisher(
            self._get_store(config),
            PageRenderer(context.page_refs),
            max_workers=config.max_workers,
        )
        with self.output_handler.spinner("Publishing pages..."):
            summary = publisher.publish(context, parent_page=config.parent_page)

        self.output_handler.print_publish_summary(summary)
        return ExitCode.SUCCESS


class CleanupCommand(_Command):
    """Removes a previously published site from Confluence.

    Only the site name and repository are read from mkdocs.yml; the
    navigation is not needed.
    """

    def run(self) -> ExitCode:
        return self._execute("cleanup", self._cleanup)

    def _cleanup(self) -> ExitCode:
        config = self._load_config()
        mkdocs = MkDocsConfigLoader.load(self.base_path, config.mkdocs_file)

        sweeper = CleanupSweeper(self._get_store(config))
        with self.output_handler.spinner(f"Removing \"{mkdocs.site_name}\"..."):
            result = sweeper.sweep(mkdocs.site_name, repo=mkdocs.repo_url)

        self.output_handler.print_cleanup_summary(result)
        return ExitCode.SUCCESS
