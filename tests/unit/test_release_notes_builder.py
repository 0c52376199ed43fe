"""Unit tests for grouping commits and rendering release bodies."""

from release_ops_manager.git.models import Commit
from release_ops_manager.release_notes.builder import (
    build_release_draft,
    commits_to_metadata,
    group_commit_metadata,
    render_release_body,
)
from release_ops_manager.release_notes.models import COMMIT_TYPE_EMOJI, CommitGroup, CommitMetadata, CommitType, ReleaseDraft


def test_emoji_table_covers_every_commit_type() -> None:
    """Test that every commit type has a display symbol."""
    assert set(COMMIT_TYPE_EMOJI) == set(CommitType)


def test_commits_to_metadata_drops_non_conventional(sample_commits: list[Commit]) -> None:
    """Test that commits outside the grammar are filtered out, keeping order."""
    metadata = commits_to_metadata(sample_commits)
    assert metadata == [
        CommitMetadata(type=CommitType.FIX, description="Fixed timezone bug in date picker"),
        CommitMetadata(type=CommitType.FEAT, description="Added awesome date picker"),
    ]


def test_group_preserves_first_seen_type_order() -> None:
    """Test that groups follow first-seen type order and keep intra-group order."""
    fix = CommitMetadata(type=CommitType.FIX, description="Fixed timezone bug in date picker")
    feat_one = CommitMetadata(type=CommitType.FEAT, description="Added more awesome date picker")
    feat_two = CommitMetadata(type=CommitType.FEAT, description="Added awesome date picker")

    groups = group_commit_metadata([fix, feat_one, feat_two])

    assert [group.type for group in groups] == [CommitType.FIX, CommitType.FEAT]
    assert groups[0].entries == [fix]
    assert groups[1].entries == [feat_one, feat_two]


def test_group_interleaved_types() -> None:
    """Test that a type seen again later joins its existing group."""
    metadata = [
        CommitMetadata(type=CommitType.CHORE, description="a"),
        CommitMetadata(type=CommitType.FIX, description="b"),
        CommitMetadata(type=CommitType.CHORE, description="c"),
    ]
    groups = group_commit_metadata(metadata)
    assert [group.type for group in groups] == [CommitType.CHORE, CommitType.FIX]
    assert [entry.description for entry in groups[0].entries] == ["a", "c"]


def test_group_empty() -> None:
    """Test that no metadata yields no groups."""
    assert group_commit_metadata([]) == []


def test_render_release_body() -> None:
    """Test the exact rendered body for two sections."""
    groups = [
        CommitGroup(type=CommitType.FIX, entries=[CommitMetadata(type=CommitType.FIX, description="Fixed timezone bug")]),
        CommitGroup(
            type=CommitType.FEAT,
            entries=[
                CommitMetadata(type=CommitType.FEAT, description="Added date picker"),
                CommitMetadata(type=CommitType.FEAT, description="Added time picker"),
            ],
        ),
    ]

    body = render_release_body(groups)

    assert body == "### 🐛 fix\n- Fixed timezone bug\n\n### ✨ feat\n- Added date picker\n- Added time picker"


def test_render_release_body_is_deterministic() -> None:
    """Test that rendering the same groups twice yields identical text."""
    groups = group_commit_metadata(
        [
            CommitMetadata(type=CommitType.PERF, scope="db", description="Batch inserts"),
            CommitMetadata(type=CommitType.TEST, description="Cover {{ braces }} in descriptions"),
        ]
    )
    first = render_release_body(groups)
    assert first == render_release_body(groups)
    assert "- Cover {{ braces }} in descriptions" in first


def test_render_release_body_empty() -> None:
    """Test that no groups render an empty body."""
    assert render_release_body([]) == ""


def test_build_release_draft() -> None:
    """Test that the draft carries the title and rendered body."""
    groups = [CommitGroup(type=CommitType.CI, entries=[CommitMetadata(type=CommitType.CI, description="Cache turbo")])]
    draft = build_release_draft("web@2024.05.01-120000", groups)
    assert draft == ReleaseDraft(title="web@2024.05.01-120000", body="### 🤖 ci\n- Cache turbo")
