"""Contains results of workflow execution."""

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel


class FindDeploymentStatus(str, Enum):
    """Status of the find-deployment workflow."""

    FOUND = "found"
    NOT_FOUND = "not_found"


class CreateReleaseStatus(str, Enum):
    """Status of the create-release workflow."""

    RELEASED = "released"
    NO_RELEASE = "no_release"


class FindDeploymentResult(BaseModel):
    """Result of looking up the Nth deployment of an environment."""

    status: FindDeploymentStatus
    environment: str
    deployment_id: int | None = None
    deployment_sha: str | None = None
    deployment: dict[str, Any] | None = None

    def outputs(self) -> dict[str, str]:
        """Outputs to publish; empty when no deployment was found."""
        if self.status is not FindDeploymentStatus.FOUND:
            return {}
        return {
            "deployment-id": str(self.deployment_id),
            "deployment-sha": self.deployment_sha or "",
            "deployment": json.dumps(self.deployment or {}, sort_keys=True),
        }


class CreateReleaseResult(BaseModel):
    """Result of publishing a release from a commit range."""

    status: CreateReleaseStatus
    from_ref: str
    to_ref: str
    relevant_commit_count: int = 0
    release_url: str | None = None
    release_title: str | None = None
    release_body: str | None = None

    @property
    def released(self) -> bool:
        """Whether a release was published."""
        return self.status is CreateReleaseStatus.RELEASED

    def outputs(self) -> dict[str, str]:
        """Outputs to publish; only the released flag when nothing was released."""
        if not self.released:
            return {"released": "false"}
        return {
            "release-url": self.release_url or "",
            "release-title": self.release_title or "",
            "release-body": self.release_body or "",
            "released": "true",
        }
