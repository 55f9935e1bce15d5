"""Tests for metadata formatting and the metadata() entry point."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from ghmeta import metadata
from ghmeta.adapters.static_client import StaticRemoteClient
from ghmeta.config import GithubMetaConfig
from ghmeta.core.errors import ConfigError
from ghmeta.core.models import RepoReference, ResolutionStatus
from ghmeta.metadata import build_metadata, resolve_for_config


class TestBuildMetadata:
    """Tests for build_metadata()."""

    def test_absent_reference_returns_none(self) -> None:
        assert build_metadata(None) is None
        assert build_metadata(None, "https://example.org/", True) is None

    def test_full_metadata_with_issues(self) -> None:
        result = build_metadata(RepoReference(user="u", repo="r"), None, True)

        assert result is not None
        assert result.to_mapping() == {
            "resources": {
                "homepage": "http://github.com/u/r",
                "repository": {
                    "type": "git",
                    "url": "http://github.com/u/r",
                    "web": "http://github.com/u/r",
                },
                "bugtracker": {"web": "http://github.com/u/r/issues"},
            }
        }

    def test_issues_disabled_omits_bugtracker(self, widget_ref: RepoReference) -> None:
        result = build_metadata(widget_ref)
        assert result is not None
        assert "bugtracker" not in result.to_mapping()["resources"]

    def test_homepage_override(self, widget_ref: RepoReference) -> None:
        result = build_metadata(widget_ref, "https://widget.example.org/docs/")
        assert result is not None
        assert result.homepage == "https://widget.example.org/docs/"
        assert result.repository.url == "http://github.com/alice/widget"

    def test_custom_host(self, widget_ref: RepoReference) -> None:
        result = build_metadata(widget_ref, issues_enabled=True, host="ghe.example.com")
        assert result is not None
        assert result.repository.web == "http://ghe.example.com/alice/widget"
        assert result.bugtracker is not None
        assert result.bugtracker.web == "http://ghe.example.com/alice/widget/issues"


class TestResolveForConfig:
    """Tests for resolve_for_config()."""

    def test_configured_user_repo_skips_detection(self, tmp_path: Path) -> None:
        client = StaticRemoteClient(available=False)
        config = GithubMetaConfig(user="carol", repo="thing")

        resolution = resolve_for_config(config, tmp_path, client)

        assert resolution.status == ResolutionStatus.RESOLVED
        assert resolution.reference == RepoReference(user="carol", repo="thing")
        assert client.calls == []

    def test_uses_config_remotes(self, git_tree: Path) -> None:
        client = StaticRemoteClient({"upstream": "https://github.com/org/widget"})
        config = GithubMetaConfig(remote=["upstream"])

        resolution = resolve_for_config(config, git_tree, client)

        assert resolution.remote == "upstream"

    def test_defaults_to_git_cli(self, git_tree: Path) -> None:
        config = GithubMetaConfig(git_timeout=2.5)
        with patch("ghmeta.adapters.git_client.GitCliClient.is_available", return_value=False):
            resolution = resolve_for_config(config, git_tree)
        assert resolution.status == ResolutionStatus.CAPABILITY_ABSENT


class TestMetadataEntryPoint:
    """Tests for metadata()."""

    def test_returns_resources(self, git_tree: Path, github_client: StaticRemoteClient) -> None:
        result = metadata({"issues": True}, start_dir=git_tree, client=github_client)

        resources = result["resources"]
        assert resources["homepage"] == "http://github.com/alice/widget"
        assert resources["repository"]["type"] == "git"
        assert resources["bugtracker"]["web"] == "http://github.com/alice/widget/issues"

    def test_accepts_config_model(
        self, git_tree: Path, github_client: StaticRemoteClient, test_config: GithubMetaConfig
    ) -> None:
        result = metadata(test_config, start_dir=git_tree, client=github_client)
        assert "bugtracker" not in result["resources"]

    def test_homepage_override(self, git_tree: Path, github_client: StaticRemoteClient) -> None:
        result = metadata(
            {"homepage": "https://widget.example.org/docs/"},
            start_dir=git_tree,
            client=github_client,
        )
        assert result["resources"]["homepage"] == "https://widget.example.org/docs/"
        assert result["resources"]["repository"]["url"] == "http://github.com/alice/widget"

    def test_empty_when_no_match(self, git_tree: Path) -> None:
        client = StaticRemoteClient({"origin": "https://gitlab.com/a/b"})
        assert metadata({"issues": True}, start_dir=git_tree, client=client) == {}

    def test_empty_when_git_missing(self, git_tree: Path) -> None:
        client = StaticRemoteClient(available=False)
        assert metadata(None, start_dir=git_tree, client=client) == {}

    def test_empty_outside_version_control(
        self, plain_dir: Path, github_client: StaticRemoteClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("ghmeta.resolver.VCS_MARKER", ".no-such-vcs-marker")
        assert metadata({}, start_dir=plain_dir, client=github_client) == {}

    def test_homepage_override_kept_verbatim(
        self, git_tree: Path, github_client: StaticRemoteClient
    ) -> None:
        result = metadata(
            {"homepage": "https://Widget.Example.org"},
            start_dir=git_tree,
            client=github_client,
        )
        assert result["resources"]["homepage"] == "https://Widget.Example.org"

    def test_invalid_config_raises(self, git_tree: Path, github_client: StaticRemoteClient) -> None:
        with pytest.raises(ConfigError, match="Invalid configuration"):
            metadata({"homepage": "not a url"}, start_dir=git_tree, client=github_client)
