"""Workflow for looking up the Nth deployment of an environment."""

import structlog

from release_ops_manager.deployments.resolver import DeploymentResolver, DeploymentStatePolicy
from release_ops_manager.github.abc import GitHubClientBase
from release_ops_manager.utils.constants import DEPLOYMENT_PAGE_DELAY_SECONDS

from .results import FindDeploymentResult, FindDeploymentStatus

logger = structlog.get_logger(__name__)


async def run_find_deployment_workflow(
    github_adapter: GitHubClientBase,
    environment: str,
    nth: int = 1,
    policy: DeploymentStatePolicy = DeploymentStatePolicy.ACTIVE_OR_INACTIVE,
    page_delay: float = DEPLOYMENT_PAGE_DELAY_SECONDS,
) -> FindDeploymentResult:
    """Find the nth most recent active deployment in an environment and fetch its full record."""
    logger.info("Looking for most recent active deployment", environment=environment, nth=nth, policy=policy.value)
    resolver = DeploymentResolver(github_adapter, policy=policy, page_delay=page_delay)
    deployment_id = await resolver.resolve(environment, nth)

    if deployment_id is None:
        logger.warning("No active deployment found in environment", environment=environment, nth=nth)
        return FindDeploymentResult(status=FindDeploymentStatus.NOT_FOUND, environment=environment)

    logger.info("Fetching deployment", deployment_id=deployment_id)
    deployment = await github_adapter.get_deployment(deployment_id)
    return FindDeploymentResult(
        status=FindDeploymentStatus.FOUND,
        environment=environment,
        deployment_id=deployment_id,
        deployment_sha=deployment.sha,
        deployment=deployment.model_dump(mode="json", by_alias=True),
    )
