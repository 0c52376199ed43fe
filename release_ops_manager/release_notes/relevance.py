"""Selects the commits that belong in a workspace's release notes."""

import structlog

from release_ops_manager.build_graph.turbo import BuildGraphOracle
from release_ops_manager.git.models import Commit
from release_ops_manager.git.repository import GitRepository

from .conventional import is_conventional_commit

logger = structlog.get_logger(__name__)


async def filter_relevant_commits(
    commits: list[Commit],
    workspace: str,
    repository: GitRepository,
    build_graph: BuildGraphOracle,
) -> list[Commit]:
    """Keep conventional commits whose changes affect the workspace, in their original order.

    Every commit is checked out before the build graph is queried, which
    leaves the working tree at the last processed commit. Callers are
    responsible for restoring their branch. A commit whose checkout or
    build-graph query fails is left out.
    """
    relevant_commits: list[Commit] = []

    for commit in commits:
        if not await repository.try_checkout(commit.id):
            logger.debug("Skipping commit that could not be checked out", commit_id=commit.id)
            continue

        report = await build_graph.query(commit.id, workspace)
        if report is None:
            logger.debug("Skipping commit without a build graph report", commit_id=commit.id)
            continue

        conventional = is_conventional_commit(commit.message)
        affects_workspace = not report.monorepo or workspace in report.packages
        logger.debug(
            "Evaluated commit relevance",
            commit_id=commit.id,
            packages=report.packages,
            monorepo=report.monorepo,
            conventional=conventional,
        )
        if conventional and affects_workspace:
            relevant_commits.append(commit)

    logger.info("Filtered relevant commits", workspace=workspace, total=len(commits), relevant=len(relevant_commits))
    return relevant_commits
