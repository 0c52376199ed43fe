"""Data models for git history."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Commit:
    """A commit id and the subject line of its message."""

    id: str
    message: str
