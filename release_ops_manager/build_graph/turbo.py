"""Turborepo dry runs used as the build-graph oracle."""

from pathlib import Path
from typing import Protocol

import structlog
from pydantic import BaseModel, ConfigDict, ValidationError

from release_ops_manager.utils.constants import DEFAULT_BUILD_TASK
from release_ops_manager.utils.process import run_command

logger = structlog.get_logger(__name__)


class TurboDryRun(BaseModel):
    """The parts of `turbo run --dry=json` output needed to decide relevance.

    Turborepo omits `monorepo` for single-package repositories, which is
    treated as not a monorepo.
    """

    model_config = ConfigDict(extra="ignore")

    monorepo: bool = False
    packages: list[str] = []


class BuildGraphOracle(Protocol):
    """Answers which packages a commit would rebuild."""

    async def query(self, commit_id: str, workspace: str) -> TurboDryRun | None:
        """Return the dry-run report for a commit, or None if it cannot be determined."""
        ...


def build_filter(commit_id: str, workspace: str) -> str:
    """Filter selecting the workspace and its dependents changed since the commit's first parent."""
    return f"{workspace}...[{commit_id}^1]"


class TurboBuildGraph:
    """Runs `npx turbo run <task> --dry=json` in the checked out working tree."""

    def __init__(self, task: str = DEFAULT_BUILD_TASK, cwd: Path | str | None = None, npx: str = "npx") -> None:
        """Initialize with the turbo task to dry run and the directory to run it in."""
        self.task = task
        self.cwd = cwd
        self.npx = npx

    async def query(self, commit_id: str, workspace: str) -> TurboDryRun | None:
        """Dry run the task for the workspace filtered against the commit's first parent."""
        result = await run_command(
            self.npx,
            "turbo",
            "run",
            self.task,
            f"--filter={build_filter(commit_id, workspace)}",
            "--dry=json",
            cwd=self.cwd,
        )
        if not result.ok or not result.stdout.strip():
            logger.debug("Turbo dry run failed", commit_id=commit_id, workspace=workspace, returncode=result.returncode)
            return None

        try:
            report = TurboDryRun.model_validate_json(result.stdout)
        except ValidationError as exc:
            logger.warning("Could not parse turbo dry run output", commit_id=commit_id, error=str(exc))
            return None

        logger.debug("Turbo dry run", commit_id=commit_id, monorepo=report.monorepo, packages=report.packages)
        return report
