"""Git CLI adapter: reads remote URLs via subprocess."""

from __future__ import annotations

import logging
import re
import shutil
import subprocess
from pathlib import Path

from ghmeta.core.errors import GitUnavailableError, redact_text
from ghmeta.core.interfaces import VersionControlPort

logger = logging.getLogger(__name__)

# First "URL:" line of `git remote show -n` output ("Fetch URL: ...")
_URL_LINE_PATTERN = re.compile(r"URL: (.*)$", re.MULTILINE)

DEFAULT_TIMEOUT = 5.0


class GitCliClient(VersionControlPort):
    """Resolves remotes by running ``git remote show -n <name>``.

    The ``-n`` flag keeps git from contacting the remote, so the call only
    reads local configuration.
    """

    def __init__(self, executable: str = "git", timeout: float = DEFAULT_TIMEOUT) -> None:
        self.executable = executable
        self.timeout = timeout

    def is_available(self) -> bool:
        return shutil.which(self.executable) is not None

    def resolve_remote_url(self, name: str, cwd: Path | None = None) -> str | None:
        command = [self.executable, "remote", "show", "-n", name]
        logger.debug("Running %s in %s", " ".join(command), cwd or ".")

        try:
            result = subprocess.run(
                command,
                cwd=str(cwd) if cwd is not None else None,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise GitUnavailableError(f"git executable not found: {self.executable}") from e
        except subprocess.TimeoutExpired:
            logger.warning("git remote show -n %s timed out after %ss", name, self.timeout)
            return None
        except OSError as e:
            raise GitUnavailableError(f"Failed to run {self.executable}: {e}") from e

        if result.returncode != 0:
            logger.debug(
                "git remote show -n %s exited with %d: %s",
                name,
                result.returncode,
                redact_text(result.stderr.strip()),
            )
            return None

        return parse_remote_show_output(result.stdout, name)


def parse_remote_show_output(output: str, name: str) -> str | None:
    """Extract the fetch URL from ``git remote show -n`` output.

    For a remote that does not exist git still prints a URL line, echoing the
    remote name back; that case is reported as unresolved.
    """
    match = _URL_LINE_PATTERN.search(output)
    if match is None:
        return None

    url = match.group(1).strip()
    if not url or url == name:
        logger.debug("Remote %s is not configured", name)
        return None

    logger.debug("Remote %s has URL %s", name, redact_text(url))
    return url
