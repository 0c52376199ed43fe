"""Fixtures for unit tests."""

from typing import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
import structlog

from release_ops_manager.build_graph.turbo import TurboDryRun
from release_ops_manager.git.models import Commit


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def sample_commits() -> list[Commit]:
    """A commit log with one commit that is not a conventional commit."""
    return [
        Commit(id="2345678901", message="fix: Fixed timezone bug in date picker"),
        Commit(id="1234567890", message="Commit that does not match conventional commit format"),
        Commit(id="3456789012", message="feat: Added awesome date picker"),
    ]


@pytest.fixture
def mock_repository() -> MagicMock:
    """A GitRepository whose checkouts always succeed."""
    repository = MagicMock()
    repository.try_checkout = AsyncMock(return_value=True)
    repository.checkout = AsyncMock()
    repository.current_ref = AsyncMock(return_value="main")
    repository.read_commit_log = AsyncMock(return_value=[])
    return repository


@pytest.fixture
def mock_build_graph() -> MagicMock:
    """A build-graph oracle reporting that every commit affects the 'test' workspace."""
    build_graph = MagicMock()
    build_graph.query = AsyncMock(return_value=TurboDryRun(monorepo=True, packages=["test"]))
    return build_graph
