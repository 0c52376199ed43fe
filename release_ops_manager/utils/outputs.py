"""Publishes workflow outputs for GitHub Actions and the terminal."""

import uuid
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)


def format_output(name: str, value: str) -> str:
    """Format one output in the GITHUB_OUTPUT file syntax.

    Multiline values use the heredoc form with a random delimiter so a value
    can never terminate its own block.
    """
    if "\n" not in value:
        return f"{name}={value}\n"
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


def write_outputs(outputs: dict[str, str], output_path: Path | None) -> None:
    """Append outputs to the GITHUB_OUTPUT file, if one is configured."""
    if output_path is None:
        logger.debug("No GitHub output file configured, skipping output file", outputs=list(outputs))
        return
    with open(output_path, "a", encoding="utf-8") as f:
        for name, value in outputs.items():
            f.write(format_output(name, value))
    logger.info("Wrote outputs", output_path=str(output_path), outputs=list(outputs))
