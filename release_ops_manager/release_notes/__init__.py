"""Release notes generation module."""

from .builder import build_release_draft, commits_to_metadata, group_commit_metadata, render_release_body
from .conventional import is_conventional_commit, parse_conventional_commit
from .models import (
    COMMIT_TYPE_EMOJI,
    CommitGroup,
    CommitMetadata,
    CommitType,
    ReleaseDraft,
)
from .relevance import filter_relevant_commits

__all__ = [
    "COMMIT_TYPE_EMOJI",
    "CommitType",
    "CommitMetadata",
    "CommitGroup",
    "ReleaseDraft",
    "parse_conventional_commit",
    "is_conventional_commit",
    "filter_relevant_commits",
    "commits_to_metadata",
    "group_commit_metadata",
    "render_release_body",
    "build_release_draft",
]
