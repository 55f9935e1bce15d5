"""ghmeta: detect a GitHub repository from git remotes and build package metadata."""

__version__ = "0.1.0"

from ghmeta.metadata import build_metadata, metadata  # noqa: E402

__all__ = ["__version__", "build_metadata", "metadata"]
