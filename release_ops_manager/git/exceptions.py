"""Custom exceptions for git operations."""


class GitCommandError(Exception):
    """Raised when a git command exits with a non-zero status."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = "") -> None:
        """Initializes the exception with the failed command's exit status and stderr."""
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class CommitRangeResolutionError(GitCommandError):
    """Raised when a commit range cannot be resolved to a list of commits."""

    pass
