"""Manifest metadata built from a resolved repository reference."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from ghmeta.config import GithubMetaConfig, coerce_config
from ghmeta.core.interfaces import VersionControlPort
from ghmeta.core.models import (
    BugTrackerInfo,
    RepoReference,
    RepositoryInfo,
    Resolution,
    ResolutionStatus,
    ResolvedMetadata,
)
from ghmeta.resolver import DEFAULT_HOST, RepoResolver

logger = logging.getLogger(__name__)


def build_metadata(
    ref: RepoReference | None,
    homepage_override: str | None = None,
    issues_enabled: bool = False,
    host: str = DEFAULT_HOST,
) -> ResolvedMetadata | None:
    """Format manifest resources for a repository.

    Returns None when ``ref`` is None so callers never emit partial metadata.
    """
    if ref is None:
        return None

    repo_url = f"http://{host}/{ref.user}/{ref.repo}"

    return ResolvedMetadata(
        homepage=homepage_override or repo_url,
        repository=RepositoryInfo(type="git", url=repo_url, web=repo_url),
        bugtracker=BugTrackerInfo(web=f"{repo_url}/issues") if issues_enabled else None,
    )


def resolve_for_config(
    config: GithubMetaConfig,
    start_dir: Path | str | None = None,
    client: VersionControlPort | None = None,
) -> Resolution:
    """Resolve the repository described by ``config``.

    An explicit user/repo pair in the config wins over detection.
    """
    if config.user and config.repo:
        logger.debug("Using configured repository %s/%s", config.user, config.repo)
        return Resolution(
            status=ResolutionStatus.RESOLVED,
            reference=RepoReference(user=config.user, repo=config.repo),
        )

    if client is None:
        from ghmeta.adapters.git_client import GitCliClient

        client = GitCliClient(timeout=config.git_timeout)

    resolver = RepoResolver(client, host=config.host)
    return resolver.resolve(config.remote, start_dir)


def metadata(
    config: GithubMetaConfig | dict[str, Any] | None = None,
    start_dir: Path | str | None = None,
    client: VersionControlPort | None = None,
) -> dict[str, Any]:
    """Entry point for a packaging tool: manifest resources for the project.

    Args:
        config: GithubMetaConfig or a mapping with ``homepage``, ``remote``,
            ``issues`` and the other GithubMetaConfig keys.
        start_dir: Directory inside the project. Defaults to the current
            directory.
        client: Version control adapter. Defaults to the git CLI.

    Returns:
        ``{"resources": {...}}``, or an empty dict if no repository was found.

    Raises:
        ConfigError: If ``config`` is an invalid mapping.
    """
    cfg = coerce_config(config)
    resolution = resolve_for_config(cfg, start_dir, client)

    result = build_metadata(resolution.reference, cfg.homepage_url, cfg.issues, cfg.host)
    if result is None:
        logger.debug("No metadata produced (%s)", resolution.status.value)
        return {}
    return result.to_mapping()
