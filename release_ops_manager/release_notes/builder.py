"""Groups conventional commits and renders the release body."""

from pydantic import BaseModel

from release_ops_manager.git.models import Commit
from release_ops_manager.utils.templates import construct_jinja2_template_from_string, render_template_with_model

from .conventional import parse_conventional_commit
from .models import COMMIT_TYPE_EMOJI, CommitGroup, CommitMetadata, CommitType, ReleaseDraft

RELEASE_BODY_TEMPLATE = """\
{% for section in sections %}
{% if not loop.first %}

{% endif %}
### {{ section.emoji }} {{ section.type }}
{% for description in section.descriptions %}
- {{ description }}
{% endfor %}
{% endfor %}
"""


class ReleaseSection(BaseModel):
    """Template context for one commit type."""

    emoji: str
    type: str
    descriptions: list[str]


class ReleaseBody(BaseModel):
    """Template context for the whole release body."""

    sections: list[ReleaseSection]


_release_body_template = construct_jinja2_template_from_string(RELEASE_BODY_TEMPLATE)


def commits_to_metadata(commits: list[Commit]) -> list[CommitMetadata]:
    """Parse commit messages, dropping commits that are not conventional."""
    metadata: list[CommitMetadata] = []
    for commit in commits:
        parsed = parse_conventional_commit(commit.message)
        if parsed is not None:
            metadata.append(parsed)
    return metadata


def group_commit_metadata(metadata: list[CommitMetadata]) -> list[CommitGroup]:
    """Group metadata by type, ordering groups by the first occurrence of each type."""
    groups: list[CommitGroup] = []
    index: dict[CommitType, CommitGroup] = {}
    for entry in metadata:
        group = index.get(entry.type)
        if group is None:
            group = CommitGroup(type=entry.type)
            index[entry.type] = group
            groups.append(group)
        group.entries.append(entry)
    return groups


def render_release_body(groups: list[CommitGroup]) -> str:
    """Render one section per group, with a header line and a bullet per commit."""
    context = ReleaseBody(
        sections=[
            ReleaseSection(
                emoji=COMMIT_TYPE_EMOJI[group.type],
                type=group.type.value,
                descriptions=[entry.description for entry in group.entries],
            )
            for group in groups
        ]
    )
    return render_template_with_model(context, _release_body_template).rstrip("\n")


def build_release_draft(title: str, groups: list[CommitGroup]) -> ReleaseDraft:
    """Build the title and body of a release from grouped commits."""
    return ReleaseDraft(title=title, body=render_release_body(groups))
