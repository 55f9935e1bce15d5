"""Domain models for ghmeta."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RepoReference(BaseModel):
    """A hosted repository identified by its owner and name."""

    model_config = ConfigDict(frozen=True)

    user: str = Field(min_length=1, description="Repository owner (user or organization)")
    repo: str = Field(min_length=1, description="Repository name without .git suffix")

    @property
    def slug(self) -> str:
        """Owner and name joined as ``user/repo``."""
        return f"{self.user}/{self.repo}"


class ResolutionStatus(str, Enum):
    """Outcome of probing a working tree for a hosted repository."""

    RESOLVED = "resolved"
    CAPABILITY_ABSENT = "capability_absent"
    NOT_UNDER_VERSION_CONTROL = "not_under_version_control"
    NO_MATCH = "no_match"


class Resolution(BaseModel):
    """Result of a repository resolution attempt.

    ``reference`` is present exactly when ``status`` is RESOLVED; every other
    status means no metadata should be produced.
    """

    model_config = ConfigDict(frozen=True)

    status: ResolutionStatus = Field(description="Resolution outcome")
    reference: RepoReference | None = Field(default=None, description="Matched repository")
    remote: str | None = Field(default=None, description="Remote name that matched")
    url: str | None = Field(default=None, description="Remote URL that matched")

    @model_validator(mode="after")
    def _reference_matches_status(self) -> Resolution:
        resolved = self.status == ResolutionStatus.RESOLVED
        if resolved != (self.reference is not None):
            raise ValueError("reference must be set if and only if status is 'resolved'")
        return self

    @property
    def found(self) -> bool:
        """Whether a repository reference was resolved."""
        return self.reference is not None


class RepositoryInfo(BaseModel):
    """The ``repository`` resource of a manifest."""

    type: str = Field(default="git", description="Version control system")
    url: str = Field(description="Repository URL")
    web: str = Field(description="Browsable repository URL")


class BugTrackerInfo(BaseModel):
    """The ``bugtracker`` resource of a manifest."""

    web: str = Field(description="Issue tracker URL")


class ResolvedMetadata(BaseModel):
    """Manifest resources derived from a RepoReference."""

    homepage: str = Field(description="Project homepage URL")
    repository: RepositoryInfo
    bugtracker: BugTrackerInfo | None = Field(default=None, description="Issue tracker")

    def to_mapping(self) -> dict[str, Any]:
        """Render as the ``{"resources": {...}}`` mapping a manifest expects."""
        return {"resources": self.model_dump(exclude_none=True)}
