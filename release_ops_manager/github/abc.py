"""Base ABC for GitHub clients."""

from abc import ABC, abstractmethod
from typing import Any

from release_ops_manager.deployments.models import DeploymentPage


class GitHubClientBase(ABC):
    """Base ABC for GitHub clients."""

    # Deployment Operations
    @abstractmethod
    async def list_deployments_page(self, environment: str, first: int, after: str | None = None) -> DeploymentPage:
        """List one page of deployments for an environment, newest first."""
        pass

    @abstractmethod
    async def get_deployment(self, deployment_id: int) -> Any:
        """Get a single deployment by its id."""
        pass

    # Release Operations
    @abstractmethod
    async def create_release(self, tag_name: str, name: str, body: str, **kwargs: Any) -> Any:
        """Create a published release for a repository."""
        pass
