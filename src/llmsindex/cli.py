"""
Main CLI for llmsindex using Click.

Running ``llmsindex`` with no subcommand scans the current directory and
writes llms.txt and llms-full.txt, same as ``llmsindex generate``.
"""

import sys
from pathlib import Path

import click
import yaml
from pydantic import ValidationError

from . import __version__
from .config.loader import load_config
from .indexer import generate_indexes
from .logging import configure_logging, get_logger

# Exit codes
EXIT_SUCCESS = 0
EXIT_FAILED = 1
EXIT_CONFIG_ERROR = 3

logger = get_logger(__name__)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="llmsindex")
@click.pass_context
def main(ctx: click.Context) -> None:
    """llmsindex - Build AI-friendly indexes of a repository's markdown docs.

    Without a subcommand, runs ``generate`` on the current directory.
    """
    if ctx.invoked_subcommand is None:
        ctx.invoke(generate)


@main.command()
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory to scan and write into (default: current directory)",
)
@click.option(
    "-c",
    "--config",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to the YAML configuration file",
)
@click.option(
    "--repository",
    default=None,
    help="Repository identifier owner/name for the GitMCP URL (overrides GITHUB_REPOSITORY)",
)
@click.option("-v", "--verbose", count=True, help="Verbosity (-v info, -vv debug)")
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Also write JSON logs to this file",
)
@click.option("--quiet", is_flag=True, help="Silence log output on stderr")
@click.option("--dry-run", is_flag=True, help="Render both indexes without writing them")
def generate(
    root: Path | None,
    config: Path | None,
    repository: str | None,
    verbose: int,
    log_file: Path | None,
    quiet: bool,
    dry_run: bool,
) -> None:
    """Write llms.txt and llms-full.txt at the scan root."""
    root = root or Path.cwd()

    try:
        app_config = load_config(
            config_path=config,
            cli_args={
                "repository": repository,
                "verbose": verbose,
                "log_file": log_file,
            },
        )
    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)
    except (ValidationError, yaml.YAMLError) as e:
        click.echo(f"Invalid configuration: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    configure_logging(app_config.logging, quiet=quiet)
    logger.info(
        "cli.generate.start",
        root=str(root),
        endpoint=app_config.gitmcp.endpoint_url,
        dry_run=dry_run,
    )

    try:
        result = generate_indexes(root, app_config, dry_run=dry_run)
    except OSError as e:
        logger.error("cli.generate.failed", error=str(e), path=e.filename)
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_FAILED)

    if dry_run:
        click.echo(f"Dry run: {result.short_path.name} ({len(result.short_text)} chars)")
        click.echo(f"Dry run: {result.full_path.name} ({len(result.full_text)} chars)")
    else:
        click.echo(f"Updated {result.short_path.name} and {result.full_path.name}")
    sys.exit(EXIT_SUCCESS)


@main.command()
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to the configuration file to validate",
)
def validate_config(config: Path) -> None:
    """Validate a YAML configuration file."""
    try:
        app_config = load_config(config_path=config)
    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)
    except (ValidationError, yaml.YAMLError) as e:
        click.echo(f"Invalid configuration: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    index = app_config.index
    click.echo("Valid configuration")
    click.echo(f"  Project: {app_config.project.name}")
    click.echo(f"  Extensions: {', '.join(sorted(index.include_extensions))}")
    click.echo(f"  Skipped dirs: {', '.join(sorted(index.skip_dirs))}")
    click.echo(f"  Top sections: {', '.join(index.top_sections)}")
    click.echo(f"  MCP SSE URL: {app_config.gitmcp.endpoint_url}")


if __name__ == "__main__":
    main()
