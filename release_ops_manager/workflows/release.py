"""Workflow for publishing a workspace release from a commit range."""

from datetime import datetime, timezone

import structlog

from release_ops_manager.build_graph.turbo import BuildGraphOracle
from release_ops_manager.deployments.resolver import DeploymentStatePolicy
from release_ops_manager.git.repository import GitRepository
from release_ops_manager.github.abc import GitHubClientBase
from release_ops_manager.release_notes.builder import build_release_draft, commits_to_metadata, group_commit_metadata
from release_ops_manager.release_notes.relevance import filter_relevant_commits
from release_ops_manager.utils.constants import DEPLOYMENT_PAGE_DELAY_SECONDS, RELEASE_TITLE_TIMESTAMP_FORMAT

from .deployment import run_find_deployment_workflow
from .results import CreateReleaseResult, CreateReleaseStatus, FindDeploymentStatus

logger = structlog.get_logger(__name__)


def default_release_title(prefix: str, now: datetime | None = None) -> str:
    """Build a release title such as `web@2024.05.01-134501` from a prefix and a UTC timestamp."""
    now = now or datetime.now(timezone.utc)
    return f"{prefix}@{now.strftime(RELEASE_TITLE_TIMESTAMP_FORMAT)}"


async def resolve_previous_release_sha(
    github_adapter: GitHubClientBase,
    environment: str,
    fallback_sha: str,
    policy: DeploymentStatePolicy = DeploymentStatePolicy.ACTIVE_OR_INACTIVE,
    page_delay: float = DEPLOYMENT_PAGE_DELAY_SECONDS,
) -> str:
    """Return the sha of the latest deployment in an environment, or fallback_sha if it has none."""
    result = await run_find_deployment_workflow(github_adapter, environment, nth=1, policy=policy, page_delay=page_delay)
    if result.status is not FindDeploymentStatus.FOUND or not result.deployment_sha:
        logger.info("No previous deployment, releasing a single commit", environment=environment, sha=fallback_sha)
        return fallback_sha
    return result.deployment_sha


async def run_create_release_workflow(
    github_adapter: GitHubClientBase,
    repository: GitRepository,
    build_graph: BuildGraphOracle,
    from_ref: str,
    to_ref: str,
    workspace: str,
    title: str,
) -> CreateReleaseResult:
    """Publish a release containing the conventional commits in from_ref..to_ref that affect the workspace.

    The ref checked out when the workflow starts is checked out again once
    the commits have been filtered. When filtering raises, a failed restore
    is only logged and the filtering error propagates.
    """
    commits = await repository.read_commit_log(from_ref, to_ref)
    original_ref = await repository.current_ref()
    logger.info("Processing commits", workspace=workspace, commit_count=len(commits), original_ref=original_ref)
    try:
        relevant_commits = await filter_relevant_commits(commits, workspace, repository, build_graph)
    except Exception:
        if not await repository.try_checkout(original_ref):
            logger.warning("Could not restore original ref after failure", original_ref=original_ref)
        raise
    await repository.checkout(original_ref)

    metadata = commits_to_metadata(relevant_commits)
    if not metadata:
        logger.warning("No relevant commits found, skipping release", workspace=workspace, from_ref=from_ref, to_ref=to_ref)
        return CreateReleaseResult(status=CreateReleaseStatus.NO_RELEASE, from_ref=from_ref, to_ref=to_ref)

    draft = build_release_draft(title, group_commit_metadata(metadata))
    logger.info("Creating release", title=draft.title, commit_count=len(metadata))
    release = await github_adapter.create_release(tag_name=draft.title, name=draft.title, body=draft.body)

    return CreateReleaseResult(
        status=CreateReleaseStatus.RELEASED,
        from_ref=from_ref,
        to_ref=to_ref,
        relevant_commit_count=len(metadata),
        release_url=release.html_url,
        release_title=release.name,
        release_body=release.body,
    )
