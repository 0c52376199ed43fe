"""Data models for release notes generation."""

from dataclasses import dataclass, field
from enum import Enum


class CommitType(str, Enum):
    """Conventional commit types recognized in release notes."""

    BUILD = "build"
    CHORE = "chore"
    CI = "ci"
    DOCS = "docs"
    FEAT = "feat"
    FIX = "fix"
    PERF = "perf"
    REFACTOR = "refactor"
    REVERT = "revert"
    STYLE = "style"
    TEST = "test"


COMMIT_TYPE_EMOJI: dict[CommitType, str] = {
    CommitType.BUILD: "👷",
    CommitType.CHORE: "🧹",
    CommitType.CI: "🤖",
    CommitType.DOCS: "📝",
    CommitType.FEAT: "✨",
    CommitType.FIX: "🐛",
    CommitType.PERF: "⚡️",
    CommitType.REFACTOR: "♻️",
    CommitType.REVERT: "⏪",
    CommitType.STYLE: "🎨",
    CommitType.TEST: "✅",
}
"""Display symbol rendered in front of each section header."""


@dataclass(frozen=True)
class CommitMetadata:
    """Structured fields of a conventional commit message."""

    type: CommitType
    description: str
    scope: str | None = None


@dataclass
class CommitGroup:
    """Commits of one type, in the order they appeared in the log."""

    type: CommitType
    entries: list[CommitMetadata] = field(default_factory=list)


@dataclass(frozen=True)
class ReleaseDraft:
    """Title and body of a release about to be published."""

    title: str
    body: str
