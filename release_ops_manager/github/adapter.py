"""GitHub client adapter for the githubkit library."""

from functools import wraps
from typing import Any, Awaitable, Callable, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import RequestFailed
from githubkit.versions.latest.models import Deployment, Release

from release_ops_manager.deployments.models import DeploymentPage
from release_ops_manager.utils.github import parse_repository

from .abc import GitHubClientBase
from .client import GitHubClient, get_github_client

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])

DEPLOYMENTS_PAGE_QUERY = """
query ($owner: String!, $repo: String!, $environment: String!, $first: Int!, $after: String) {
  repository(owner: $owner, name: $repo) {
    deployments(
      environments: [$environment]
      first: $first
      after: $after
      orderBy: {field: CREATED_AT, direction: DESC}
    ) {
      nodes {
        id: databaseId
        state
      }
      pageInfo {
        hasNextPage
        endCursor
      }
    }
  }
}
"""


def handle_github_422(func: F) -> F:
    """Decorator to handle GitHub 422 Unprocessable Entity errors, logging and raising with details."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except RequestFailed as exc:
            if exc.response.status_code == 422:
                try:
                    error_data = exc.response.json()
                except ValueError:
                    error_data = {}
                message = error_data.get("message", "Unprocessable Entity")
                errors = error_data.get("errors", [])
                logger.error(
                    "GitHub 422 Unprocessable Entity",
                    function=func.__name__,
                    message=message,
                    errors=errors,
                    status_code=422,
                )
                raise ValueError(f"GitHub 422 error in {func.__name__}: {message} | errors: {errors}") from exc
            raise

    return wrapper  # type: ignore


class GitHubKitAdapter(GitHubClientBase):
    """GitHub client adapter for the githubkit library."""

    def __init__(self, client: GitHubClient, owner: str, repo_name: str) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name

    @classmethod
    async def create(
        cls,
        repo: str,
        github_pat_token: str | None,
        github_api_url: str = "https://api.github.com",
    ) -> Self:
        """Create a new GitHub client adapter.

        Args:
            repo: Repository in 'owner/repo' format
            github_pat_token: Personal access or workflow token
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Returns:
            Configured GitHubKitAdapter instance

        Raises:
            ValueError: If the repository is not in 'owner/repo' format
            RuntimeError: If no token is provided
        """
        owner, repo_name = parse_repository(repo)
        logger.info(
            "Creating client for GitHub instance and repository",
            github_api_url=github_api_url,
            owner=owner,
            repo_name=repo_name,
        )
        client = await get_github_client(github_pat_token=github_pat_token, github_api_url=github_api_url)
        return cls(client, owner, repo_name)

    # Deployment Operations
    async def list_deployments_page(self, environment: str, first: int, after: str | None = None) -> DeploymentPage:
        """List one page of deployments for an environment, newest first."""
        data: dict[str, Any] = await self.client.async_graphql(
            DEPLOYMENTS_PAGE_QUERY,
            variables={
                "owner": self.owner,
                "repo": self.repo_name,
                "environment": environment,
                "first": first,
                "after": after,
            },
        )
        repository = data.get("repository")
        if repository is None:
            raise ValueError(f"Repository {self.owner}/{self.repo_name} not found or not accessible")
        page = DeploymentPage.model_validate(repository["deployments"])
        logger.debug(
            "Got deployments page",
            environment=environment,
            node_count=len(page.nodes),
            has_next_page=page.page_info.has_next_page,
        )
        return page

    @handle_github_422
    async def get_deployment(self, deployment_id: int) -> Deployment:
        """Get a single deployment by its id."""
        response: Response[Deployment] = await self.client.rest.repos.async_get_deployment(
            owner=self.owner,
            repo=self.repo_name,
            deployment_id=deployment_id,
        )
        return response.parsed_data

    # Release Operations
    @handle_github_422
    async def create_release(self, tag_name: str, name: str, body: str, **kwargs: Any) -> Release:
        """Create a published, non-prerelease release for a repository."""
        response: Response[Release] = await self.client.rest.repos.async_create_release(
            owner=self.owner,
            repo=self.repo_name,
            tag_name=tag_name,
            name=name,
            body=body,
            draft=False,
            prerelease=False,
            **kwargs,
        )
        release = response.parsed_data
        logger.info("Created release", tag_name=tag_name, html_url=release.html_url)
        return release
