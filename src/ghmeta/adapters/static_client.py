"""In-memory version control adapter with a fixed set of remotes."""

from __future__ import annotations

from pathlib import Path

from ghmeta.core.errors import GitUnavailableError
from ghmeta.core.interfaces import VersionControlPort


class StaticRemoteClient(VersionControlPort):
    """Serves remote URLs from a mapping instead of a real repository.

    Used by tests and by ``Container.create_for_testing``.
    Setting ``available=False`` simulates a machine without git.
    """

    def __init__(self, remotes: dict[str, str] | None = None, available: bool = True) -> None:
        self.remotes: dict[str, str] = dict(remotes or {})
        self.available = available
        self.calls: list[str] = []

    def is_available(self) -> bool:
        return self.available

    def resolve_remote_url(self, name: str, cwd: Path | None = None) -> str | None:
        if not self.available:
            raise GitUnavailableError("git is not available")
        self.calls.append(name)
        return self.remotes.get(name)
