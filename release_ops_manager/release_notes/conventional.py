"""Conventional commit message parsing."""

import re

from .models import CommitMetadata, CommitType

CONVENTIONAL_COMMIT_PATTERN = re.compile(
    r"^(?P<type>" + "|".join(commit_type.value for commit_type in CommitType) + r")"
    r"(?:\((?P<scope>.+?)\))?"
    r": (?P<description>.+)",
    re.DOTALL,
)
"""Pattern for `type(scope): description` with a lowercase type from CommitType.

The scope ends at the first `): `, so it may itself contain parentheses.
"""


def parse_conventional_commit(message: str) -> CommitMetadata | None:
    """Extract type, scope and description from a commit message.

    Returns None for messages that are not conventional commits.
    """
    match = CONVENTIONAL_COMMIT_PATTERN.match(message)
    if match is None:
        return None
    return CommitMetadata(
        type=CommitType(match.group("type")),
        scope=match.group("scope"),
        description=match.group("description"),
    )


def is_conventional_commit(message: str) -> bool:
    """Check if a commit message is a conventional commit."""
    return CONVENTIONAL_COMMIT_PATTERN.match(message) is not None
