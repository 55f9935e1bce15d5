"""Dependency injection container for ghmeta."""

from __future__ import annotations

from dataclasses import dataclass

from ghmeta.config import GithubMetaConfig
from ghmeta.core.interfaces import VersionControlPort
from ghmeta.resolver import RepoResolver


@dataclass
class Container:
    """DI container holding the version control port and the resolver."""

    config: GithubMetaConfig
    vcs_client: VersionControlPort
    resolver: RepoResolver

    @staticmethod
    def create_default(config: GithubMetaConfig) -> Container:
        """Create a container backed by the git CLI."""
        from ghmeta.adapters.git_client import GitCliClient

        vcs_client = GitCliClient(timeout=config.git_timeout)

        return Container(
            config=config,
            vcs_client=vcs_client,
            resolver=RepoResolver(vcs_client, host=config.host),
        )

    @staticmethod
    def create_for_testing(
        config: GithubMetaConfig | None = None,
        remotes: dict[str, str] | None = None,
        vcs_client: VersionControlPort | None = None,
    ) -> Container:
        """Create a container with an in-memory version control adapter.

        All parameters are optional. ``remotes`` seeds a StaticRemoteClient
        unless an explicit ``vcs_client`` is given.
        """
        from ghmeta.adapters.static_client import StaticRemoteClient

        if config is None:
            config = GithubMetaConfig()

        if vcs_client is None:
            vcs_client = StaticRemoteClient(remotes)

        return Container(
            config=config,
            vcs_client=vcs_client,
            resolver=RepoResolver(vcs_client, host=config.host),
        )
