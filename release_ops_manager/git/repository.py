"""Git operations on the local working tree."""

from pathlib import Path

import structlog

from release_ops_manager.utils.process import CommandResult, run_command

from .exceptions import CommitRangeResolutionError, GitCommandError
from .models import Commit

logger = structlog.get_logger(__name__)


class GitRepository:
    """Runs git commands against a local checkout.

    Checkouts mutate the shared working tree, so calls on one instance must be
    awaited one after another.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        """Initialize with the path of the checkout (the current directory by default)."""
        self.path = Path(path) if path is not None else None

    async def _git(self, *args: str) -> CommandResult:
        return await run_command("git", *args, cwd=self.path)

    async def current_branch(self) -> str:
        """Return the name of the currently checked out branch."""
        result = await self._git("rev-parse", "--abbrev-ref", "HEAD")
        if not result.ok:
            raise GitCommandError("Failed to get current branch", returncode=result.returncode, stderr=result.stderr)
        return result.stdout.strip()

    async def current_ref(self) -> str:
        """Return the current branch name, or the HEAD commit sha when HEAD is detached."""
        branch = await self.current_branch()
        if branch != "HEAD":
            return branch
        result = await self._git("rev-parse", "HEAD")
        if not result.ok:
            raise GitCommandError("Failed to resolve HEAD", returncode=result.returncode, stderr=result.stderr)
        return result.stdout.strip()

    async def checkout(self, ref: str) -> None:
        """Check out a branch, tag, or commit."""
        result = await self._git("checkout", ref)
        if not result.ok:
            raise GitCommandError(f"Failed to checkout branch {ref}", returncode=result.returncode, stderr=result.stderr)
        logger.debug("Checked out ref", ref=ref)

    async def try_checkout(self, ref: str) -> bool:
        """Check out a ref, returning False instead of raising when git fails."""
        try:
            await self.checkout(ref)
        except GitCommandError as exc:
            logger.debug("Checkout failed", ref=ref, returncode=exc.returncode, stderr=exc.stderr.strip())
            return False
        return True

    async def read_commit_log(self, from_ref: str, to_ref: str) -> list[Commit]:
        """Read the commits in the range from_ref..to_ref as returned by git log.

        When both refs are the same, the single commit at to_ref is returned.
        """
        if from_ref == to_ref:
            range_args: tuple[str, ...] = (to_ref, "-1")
        else:
            range_args = (f"{from_ref}..{to_ref}",)
        result = await self._git("log", *range_args, "--pretty=format:%H %s")
        if not result.ok:
            raise CommitRangeResolutionError("Failed to get git log", returncode=result.returncode, stderr=result.stderr)

        commits: list[Commit] = []
        for line in result.stdout.splitlines():
            if not line.strip():
                continue
            sha, _, message = line.partition(" ")
            commits.append(Commit(id=sha, message=message))

        logger.info("Read commit log", from_ref=from_ref, to_ref=to_ref, commit_count=len(commits))
        return commits
