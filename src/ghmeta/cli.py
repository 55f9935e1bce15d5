"""CLI entry point for ghmeta."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import click
import yaml

from ghmeta import __version__

if TYPE_CHECKING:
    from ghmeta.container import Container


@click.group()
@click.version_option(version=__version__, prog_name="ghmeta")
def main() -> None:
    """Ghmeta: derive GitHub repository metadata from git remotes."""
    pass


def _common_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by commands that inspect a working tree."""
    func = click.option(
        "-v",
        "--verbose",
        is_flag=True,
        help="Enable verbose (DEBUG) logging",
    )(func)
    func = click.option(
        "-r",
        "--remote",
        "remotes",
        multiple=True,
        help="Remote to probe; repeat for priority order (default: from config, else origin)",
    )(func)
    func = click.option(
        "-c",
        "--config",
        "config_path",
        default=None,
        help="Path to config file (default: ./.ghmeta.yaml if present)",
    )(func)
    func = click.option(
        "-C",
        "--directory",
        "directory",
        default=".",
        type=click.Path(exists=True, file_okay=False),
        help="Project directory to inspect",
    )(func)
    return func


@main.command()
@_common_options
@click.option("--homepage", default=None, help="Homepage URL override")
@click.option("--issues", is_flag=True, help="Include the issue tracker URL")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"]),
    default="json",
    show_default=True,
    help="Output format",
)
@click.option("--strict", is_flag=True, help="Exit 1 when no repository is detected")
def show(
    directory: str,
    config_path: str | None,
    remotes: tuple[str, ...],
    verbose: bool,
    homepage: str | None,
    issues: bool,
    output_format: str,
    strict: bool,
) -> None:
    """Print the manifest resources for a project."""
    from ghmeta.metadata import metadata

    overrides: dict[str, object] = {}
    if remotes:
        overrides["remote"] = list(remotes)
    if homepage is not None:
        overrides["homepage"] = homepage
    if issues:
        overrides["issues"] = issues

    container = _load_container(config_path, verbose, overrides)
    result = metadata(container.config, start_dir=directory, client=container.vcs_client)

    if output_format == "yaml":
        click.echo(yaml.safe_dump(result, sort_keys=False), nl=False)
    else:
        click.echo(json.dumps(result, indent=2))

    if strict and not result:
        sys.exit(1)


@main.command()
@_common_options
def detect(
    directory: str,
    config_path: str | None,
    remotes: tuple[str, ...],
    verbose: bool,
) -> None:
    """Print the user/repo detected from the project's remotes."""
    from ghmeta.metadata import resolve_for_config

    overrides: dict[str, object] = {"remote": list(remotes)} if remotes else {}
    container = _load_container(config_path, verbose, overrides)

    resolution = resolve_for_config(container.config, directory, container.vcs_client)
    if resolution.reference is None:
        click.echo(f"No repository detected ({resolution.status.value})", err=True)
        sys.exit(1)

    source = f"remote: {resolution.remote}" if resolution.remote else "configured"
    click.echo(f"{resolution.reference.slug} ({source})")


@main.command()
@click.argument("url")
@click.option("--host", default="github.com", show_default=True, help="Hosting service domain")
def parse(url: str, host: str) -> None:
    """Match a single remote URL against the hosting pattern."""
    from ghmeta.resolver import match_repo_reference

    reference = match_repo_reference(url, host)
    if reference is None:
        click.echo(f"Not a {host} repository URL", err=True)
        sys.exit(1)

    click.echo(reference.slug)


def _load_container(
    config_path: str | None, verbose: bool, overrides: dict[str, object]
) -> Container:
    """Load config, apply command-line overrides and build the container."""
    from ghmeta.config import coerce_config, load_config
    from ghmeta.container import Container

    try:
        config = load_config(config_path)
        if overrides:
            config = coerce_config({**config.model_dump(mode="json"), **overrides})
    except Exception as e:
        click.echo(f"Error loading config: {e}", err=True)
        sys.exit(1)

    _setup_logging(verbose, config.log_level)
    return Container.create_default(config)


def _setup_logging(verbose: bool, level_name: str = "INFO") -> None:
    """Configure logging to stderr."""
    level = logging.DEBUG if verbose else getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
