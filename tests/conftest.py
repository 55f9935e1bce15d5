"""Shared test fixtures for ghmeta."""

from __future__ import annotations

from pathlib import Path

import pytest

from ghmeta.adapters.static_client import StaticRemoteClient
from ghmeta.config import GithubMetaConfig
from ghmeta.core.models import RepoReference


@pytest.fixture()
def git_tree(tmp_path: Path) -> Path:
    """Create a fake working tree with a .git directory and a nested subdir."""
    root = tmp_path / "project"
    (root / ".git").mkdir(parents=True)
    (root / "lib" / "deep").mkdir(parents=True)
    return root


@pytest.fixture()
def plain_dir(tmp_path: Path) -> Path:
    """Create a directory with no .git anywhere inside tmp_path."""
    d = tmp_path / "plain" / "nested"
    d.mkdir(parents=True)
    return d


@pytest.fixture()
def github_client() -> StaticRemoteClient:
    """In-memory client whose origin points at GitHub."""
    return StaticRemoteClient({"origin": "git@github.com:alice/widget.git"})


@pytest.fixture()
def test_config() -> GithubMetaConfig:
    """Default configuration."""
    return GithubMetaConfig()


@pytest.fixture()
def widget_ref() -> RepoReference:
    """Reference used across metadata tests."""
    return RepoReference(user="alice", repo="widget")
