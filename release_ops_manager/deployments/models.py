"""Data models for paginated deployment listings."""

from pydantic import BaseModel, ConfigDict, Field


class DeploymentNode(BaseModel):
    """A deployment as returned by the GraphQL deployments connection."""

    id: int
    state: str


class PageInfo(BaseModel):
    """Relay-style pagination info for a deployments page."""

    model_config = ConfigDict(populate_by_name=True)

    has_next_page: bool = Field(alias="hasNextPage")
    end_cursor: str | None = Field(default=None, alias="endCursor")


class DeploymentPage(BaseModel):
    """One page of deployments, newest first."""

    model_config = ConfigDict(populate_by_name=True)

    nodes: list[DeploymentNode]
    page_info: PageInfo = Field(alias="pageInfo")
