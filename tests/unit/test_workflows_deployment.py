"""Unit tests for the find-deployment workflow."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from release_ops_manager.deployments.models import DeploymentNode, DeploymentPage, PageInfo
from release_ops_manager.deployments.resolver import DeploymentStatePolicy
from release_ops_manager.workflows.deployment import run_find_deployment_workflow
from release_ops_manager.workflows.results import FindDeploymentStatus


def adapter_with_nodes(nodes: list[DeploymentNode]) -> MagicMock:
    """A GitHub adapter returning one page of deployments."""
    adapter = MagicMock()
    adapter.list_deployments_page = AsyncMock(
        return_value=DeploymentPage(nodes=nodes, page_info=PageInfo(has_next_page=False, end_cursor=None))
    )
    deployment = MagicMock(sha="abc123")
    deployment.model_dump.return_value = {"id": 1000, "sha": "abc123", "environment": "production"}
    adapter.get_deployment = AsyncMock(return_value=deployment)
    return adapter


@pytest.mark.asyncio
async def test_found_deployment_sets_outputs() -> None:
    """Test that the resolved deployment is fetched and exposed as outputs."""
    adapter = adapter_with_nodes([DeploymentNode(id=1001, state="PENDING"), DeploymentNode(id=1000, state="ACTIVE")])

    result = await run_find_deployment_workflow(adapter, "production", nth=1, page_delay=0)

    assert result.status is FindDeploymentStatus.FOUND
    assert result.deployment_id == 1000
    assert result.deployment_sha == "abc123"
    adapter.get_deployment.assert_awaited_once_with(1000)
    outputs = result.outputs()
    assert outputs["deployment-id"] == "1000"
    assert outputs["deployment-sha"] == "abc123"
    assert outputs["deployment"] == '{"environment": "production", "id": 1000, "sha": "abc123"}'


@pytest.mark.asyncio
async def test_no_deployment_is_not_an_error() -> None:
    """Test that a missing deployment yields NOT_FOUND with no outputs."""
    adapter = adapter_with_nodes([DeploymentNode(id=1, state="ERROR")])

    result = await run_find_deployment_workflow(adapter, "production", nth=1, page_delay=0)

    assert result.status is FindDeploymentStatus.NOT_FOUND
    assert result.outputs() == {}
    adapter.get_deployment.assert_not_awaited()


@pytest.mark.asyncio
async def test_policy_is_applied() -> None:
    """Test that the counting policy reaches the resolver."""
    adapter = adapter_with_nodes([DeploymentNode(id=2, state="INACTIVE")])

    result = await run_find_deployment_workflow(adapter, "production", policy=DeploymentStatePolicy.ACTIVE_ONLY, page_delay=0)

    assert result.status is FindDeploymentStatus.NOT_FOUND


@pytest.mark.asyncio
async def test_fetch_errors_propagate() -> None:
    """Test that a failing deployment fetch is rethrown."""
    adapter = adapter_with_nodes([DeploymentNode(id=1000, state="ACTIVE")])
    adapter.get_deployment = AsyncMock(side_effect=RuntimeError("could not fetch error"))
    with pytest.raises(RuntimeError, match="could not fetch error"):
        await run_find_deployment_workflow(adapter, "production", page_delay=0)
