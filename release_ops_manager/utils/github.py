"""Contains utility functions for GitHub interactions."""

from typing import NamedTuple


class RepositoryRef(NamedTuple):
    """Owner and name of a GitHub repository."""

    owner: str
    name: str


def parse_repository(repo: str | None) -> RepositoryRef:
    """Parse an `owner/repo` string, as found in GITHUB_REPOSITORY, ignoring surrounding slashes."""
    if not repo:
        raise ValueError("A repository in 'owner/repo' format is required.")
    owner, separator, name = repo.strip("/").partition("/")
    if not separator or not owner or not name or "/" in name:
        raise ValueError(f"Repository must be in the format 'owner/repo', got {repo!r}.")
    return RepositoryRef(owner=owner, name=name)
