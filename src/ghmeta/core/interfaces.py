"""Port interfaces for ghmeta (hexagonal architecture)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class VersionControlPort(ABC):
    """Port for reading remote configuration from a version control system."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check whether the version control tool can be used at all.

        Returns:
            True if the tool is installed and runnable.
        """

    @abstractmethod
    def resolve_remote_url(self, name: str, cwd: Path | None = None) -> str | None:
        """Look up the configured URL for a named remote.

        Args:
            name: Remote name (e.g. ``origin``).
            cwd: Directory inside the working tree to query.

        Returns:
            The remote URL, or None if the remote is not configured.

        Raises:
            GitUnavailableError: If the tool itself cannot be executed.
        """
