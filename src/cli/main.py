"""Main CLI entry point for the confluence-publish command.

This module provides the Typer application that serves as the entry point
for the confluence-publish command-line tool. It uses options on the main
command rather than subcommands for a simpler user experience.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.cli.publish_command import CleanupCommand, PublishCommand

__version__ = "0.1.0"

app = typer.Typer(
    name="confluence-publish",
    help="""Publish an mkdocs documentation tree to Confluence.

QUICK START:
  confluence-publish --space DOCS                   # Publish ./mkdocs.yml
  confluence-publish --space DOCS --cleanup         # Remove the published site

Required environment variables (a .env file works too):
  CONFLUENCE_URL, CONFLUENCE_USER, CONFLUENCE_API_TOKEN""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=False,
)

logger = logging.getLogger(__name__)


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)

    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter("%(asctime)s [%(levelname)8s] %(message)s", datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"confluence-publish_{timestamp}.log"

        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt=date_format,
        )
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


@app.command()
def main_command(
    cleanup: bool = typer.Option(
        False,
        "--cleanup",
        help="Remove the published site (home page and all pages below it)",
    ),
    base_path: str = typer.Option(
        ".",
        "--base-path",
        "-b",
        help="Directory containing mkdocs.yml and README.md",
        metavar="DIR",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Publish configuration file (default: <base-path>/confluence-publish.yaml)",
        metavar="FILE",
    ),
    space: Optional[str] = typer.Option(
        None,
        "--space",
        "-s",
        help="Confluence space key (overrides space_key in the config file)",
    ),
    parent_page: Optional[str] = typer.Option(
        None,
        "--parent-page",
        help="Title of an existing page to publish under",
    ),
    title_prefix: Optional[str] = typer.Option(
        None,
        "--title-prefix",
        help="Prefix added to every page title except the home page",
    ),
    max_workers: Optional[int] = typer.Option(
        None,
        "--max-workers",
        help="Pages of one tree level published in parallel",
        min=1,
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """Publish an mkdocs documentation tree to Confluence.

    \b
    EXAMPLES:
      confluence-publish --space DOCS --parent-page Engineering
      confluence-publish --config publish.yaml -v 1
      confluence-publish --space DOCS --cleanup
    """
    if version:
        typer.echo(f"confluence-publish version {__version__}")
        raise typer.Exit()

    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    overrides = {
        'space_key': space,
        'parent_page': parent_page,
        'title_prefix': title_prefix,
        'max_workers': max_workers,
    }
    command_class = CleanupCommand if cleanup else PublishCommand
    command = command_class(
        base_path=base_path,
        config_path=config_path,
        overrides=overrides,
        output_handler=output,
    )

    exit_code = command.run()
    raise typer.Exit(int(exit_code))


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
