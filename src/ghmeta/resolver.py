"""Repository resolution: version control root discovery and remote matching."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from ghmeta.core.errors import GitUnavailableError, redact_error, redact_text
from ghmeta.core.interfaces import VersionControlPort
from ghmeta.core.models import RepoReference, Resolution, ResolutionStatus

logger = logging.getLogger(__name__)

DEFAULT_HOST = "github.com"
VCS_MARKER = ".git"

_PATTERN_TEMPLATE = r"""
    ^(?:[a-z][a-z0-9+.-]*://)?   # optional scheme
    (?:[^@/\s]+@)?               # optional userinfo
    (?:www\.)?{host}             # the domain
    (?::\d+)?                    # optional port
    [/:]                         # path separator (scp-style uses ':')
    ([^/]+)                      # the username
    /([^/]+?)(?:\.git)?          # the repo name
    /?$
"""

_pattern_cache: dict[str, re.Pattern[str]] = {}


def _host_pattern(host: str) -> re.Pattern[str]:
    key = host.lower()
    if key not in _pattern_cache:
        _pattern_cache[key] = re.compile(
            _PATTERN_TEMPLATE.format(host=re.escape(key)),
            re.IGNORECASE | re.VERBOSE,
        )
    return _pattern_cache[key]


def match_repo_reference(url: str, host: str = DEFAULT_HOST) -> RepoReference | None:
    """Extract user and repo from a remote URL on the given host.

    Accepts the forms git produces for hosted remotes::

        https://github.com/user/repo.git
        git://github.com/user/repo
        ssh://git@github.com:22/user/repo.git
        git@github.com:user/repo.git

    The domain must be the host component of the URL; a URL that merely
    contains it in its path or as a suffix of another domain does not match.
    """
    match = _host_pattern(host).match(url.strip())
    if match is None:
        return None
    user, repo = match.groups()
    return RepoReference(user=user, repo=repo)


def find_vcs_root(start: Path | str) -> Path | None:
    """Walk up from ``start`` and return the first directory holding ``.git``.

    Works on path values only; the process working directory is never changed.
    ``.git`` may be a file, as in worktrees and submodules.
    """
    path = Path(start).expanduser().resolve()
    for candidate in (path, *path.parents):
        if (candidate / VCS_MARKER).exists():
            return candidate
    return None


def is_under_version_control(start: Path | str) -> bool:
    """Whether ``start`` or any of its ancestors is a version control root."""
    return find_vcs_root(start) is not None


class RepoResolver:
    """Finds the hosted repository a working tree was cloned from.

    Every failure degrades to a Resolution without a reference; nothing is
    raised to the caller.
    """

    def __init__(self, client: VersionControlPort, host: str = DEFAULT_HOST) -> None:
        self._client = client
        self.host = host

    def resolve_remote_url(self, name: str, cwd: Path | None = None) -> str | None:
        """Look up a remote's URL.

        Raises:
            GitUnavailableError: If the version control tool cannot be run.
        """
        return self._client.resolve_remote_url(name, cwd)

    def resolve(
        self,
        remotes: Iterable[str] = ("origin",),
        start_dir: Path | str | None = None,
    ) -> Resolution:
        """Probe ``remotes`` in order and return the first hosted match.

        Args:
            remotes: Remote names in priority order.
            start_dir: Directory inside the working tree. Defaults to the
                current directory.

        Returns:
            Resolution tagged with the outcome.
        """
        start = Path(start_dir) if start_dir is not None else Path.cwd()

        root = find_vcs_root(start)
        if root is None:
            logger.debug("No %s found above %s", VCS_MARKER, start)
            return Resolution(status=ResolutionStatus.NOT_UNDER_VERSION_CONTROL)

        if not self._client.is_available():
            logger.debug("Version control tool not available")
            return Resolution(status=ResolutionStatus.CAPABILITY_ABSENT)

        for name in remotes:
            try:
                url = self.resolve_remote_url(name, root)
            except GitUnavailableError as e:
                logger.debug("Aborting resolution: %s", redact_error(e))
                return Resolution(status=ResolutionStatus.CAPABILITY_ABSENT)

            if url is None:
                logger.debug("Remote %s is unresolved, trying next", name)
                continue

            reference = match_repo_reference(url, self.host)
            if reference is None:
                logger.debug(
                    "Remote %s (%s) is not a %s repository, trying next",
                    name,
                    redact_text(url),
                    self.host,
                )
                continue

            logger.info("Detected %s repository %s from remote %s", self.host, reference.slug, name)
            return Resolution(
                status=ResolutionStatus.RESOLVED,
                reference=reference,
                remote=name,
                url=redact_text(url),
            )

        logger.debug("No remote matched %s", self.host)
        return Resolution(status=ResolutionStatus.NO_MATCH)

    def resolve_repo_reference(
        self,
        remotes: Iterable[str] = ("origin",),
        start_dir: Path | str | None = None,
    ) -> RepoReference | None:
        """Like :meth:`resolve` but return only the optional reference."""
        return self.resolve(remotes, start_dir).reference
