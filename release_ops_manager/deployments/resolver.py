"""Finds the Nth most recent active deployment of an environment."""

import asyncio
from dataclasses import dataclass, replace
from enum import Enum
from typing import Protocol

import structlog

from release_ops_manager.utils.constants import (
    ACTIVE_DEPLOYMENT_STATE,
    DEPLOYMENT_PAGE_DELAY_SECONDS,
    DEPLOYMENT_PAGE_SIZE,
    INACTIVE_DEPLOYMENT_STATE,
)

from .models import DeploymentPage

logger = structlog.get_logger(__name__)


class DeploymentStatePolicy(str, Enum):
    """Which deployment states count as an occurrence when searching for the Nth deployment.

    A deployment becomes INACTIVE as soon as a newer one to the same
    environment turns ACTIVE, so earlier releases are only reachable when
    INACTIVE deployments are counted too.
    """

    ACTIVE_OR_INACTIVE = "active-or-inactive"
    ACTIVE_ONLY = "active-only"

    @property
    def counted_states(self) -> frozenset[str]:
        """Deployment states that count toward the ordinal."""
        if self is DeploymentStatePolicy.ACTIVE_ONLY:
            return frozenset({ACTIVE_DEPLOYMENT_STATE})
        return frozenset({ACTIVE_DEPLOYMENT_STATE, INACTIVE_DEPLOYMENT_STATE})


class DeploymentPageSource(Protocol):
    """Lists deployments of an environment one page at a time, newest first."""

    async def list_deployments_page(self, environment: str, first: int, after: str | None = None) -> DeploymentPage:
        """Fetch the page of deployments following the `after` cursor."""
        ...


@dataclass(frozen=True)
class ResolverState:
    """Accumulator carried from one deployments page to the next."""

    cursor: str | None = None
    has_more: bool = True
    found_count: int = 0
    last_seen_id: int | None = None
    pages_fetched: int = 0

    def found(self, nth: int) -> bool:
        """Whether the nth counted deployment has been seen."""
        return self.found_count >= nth


def scan_page(state: ResolverState, page: DeploymentPage, nth: int, counted_states: frozenset[str]) -> ResolverState:
    """Count the page's deployments in order, stopping at the nth counted one."""
    found_count = state.found_count
    last_seen_id = state.last_seen_id
    for node in page.nodes:
        if node.state not in counted_states:
            continue
        if found_count == nth:
            break
        last_seen_id = node.id
        found_count += 1
    return replace(
        state,
        cursor=page.page_info.end_cursor,
        has_more=page.page_info.has_next_page and page.page_info.end_cursor is not None,
        found_count=found_count,
        last_seen_id=last_seen_id,
        pages_fetched=state.pages_fetched + 1,
    )


class DeploymentResolver:
    """Walks the deployments of an environment page by page.

    Every page is requested, one at a time with a fixed pause between them,
    until the listing is exhausted. Counting stops at the nth deployment and
    only its id is kept between pages.
    """

    def __init__(
        self,
        source: DeploymentPageSource,
        policy: DeploymentStatePolicy = DeploymentStatePolicy.ACTIVE_OR_INACTIVE,
        page_size: int = DEPLOYMENT_PAGE_SIZE,
        page_delay: float = DEPLOYMENT_PAGE_DELAY_SECONDS,
    ) -> None:
        """Initialize with the page source and the state counting policy."""
        self.source = source
        self.policy = policy
        self.page_size = page_size
        self.page_delay = page_delay

    async def resolve(self, environment: str, nth: int = 1) -> int | None:
        """Return the id of the nth most recent counted deployment, or None if there are fewer than nth."""
        if nth < 1:
            raise ValueError(f"nth must be a positive integer, got {nth}")

        counted_states = self.policy.counted_states
        state = ResolverState()
        while state.has_more:
            if state.cursor is not None:
                await asyncio.sleep(self.page_delay)
            logger.debug("Fetching deployments page", environment=environment, page=state.pages_fetched + 1, cursor=state.cursor)
            page = await self.source.list_deployments_page(environment, first=self.page_size, after=state.cursor)
            state = scan_page(state, page, nth, counted_states)

        logger.info(
            "Scanned deployments",
            environment=environment,
            nth=nth,
            policy=self.policy.value,
            found_count=state.found_count,
            pages_fetched=state.pages_fetched,
        )
        if not state.found(nth):
            return None
        return state.last_seen_id
