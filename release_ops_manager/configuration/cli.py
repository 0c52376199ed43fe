"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
from pathlib import Path

import structlog
import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from release_ops_manager.build_graph.turbo import TurboBuildGraph
from release_ops_manager.configuration.env import get_settings
from release_ops_manager.configuration.exceptions import RequiredConfigurationElementError
from release_ops_manager.deployments.resolver import DeploymentStatePolicy
from release_ops_manager.git.repository import GitRepository
from release_ops_manager.github.adapter import GitHubKitAdapter
from release_ops_manager.utils.constants import DEFAULT_BUILD_TASK, DEPLOYMENT_PAGE_DELAY_SECONDS, UNKNOWN_ERROR_MESSAGE
from release_ops_manager.utils.logging import configure_logging
from release_ops_manager.utils.outputs import write_outputs
from release_ops_manager.workflows.deployment import run_find_deployment_workflow
from release_ops_manager.workflows.release import default_release_title, resolve_previous_release_sha, run_create_release_workflow
from release_ops_manager.workflows.results import CreateReleaseResult, FindDeploymentResult

load_dotenv()

logger = structlog.get_logger(__name__)

typer_app = typer.Typer(pretty_exceptions_show_locals=False)


def describe_failure(exc: BaseException) -> str:
    """Return the message reported for a failed run."""
    message = str(exc).strip()
    return message or UNKNOWN_ERROR_MESSAGE


def publish_outputs(outputs: dict[str, str]) -> None:
    """Echo outputs and append them to the GitHub Actions output file when running in a workflow."""
    for name, value in outputs.items():
        typer.echo(f"{name}={value}")
    write_outputs(outputs, get_settings().GITHUB_OUTPUT)


# --- Typer group for repo commands ---
repo_app = typer.Typer(help="Repository-related commands")


def repo_callback(
    ctx: typer.Context,
    repo: Annotated[str, Argument(envvar="REPO", help="Repository name (owner/repo).")],
    github_api_url: Annotated[str, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = "https://api.github.com",
    github_pat_token: Annotated[
        str | None, Option(envvar=["GITHUB_PAT_TOKEN", "GITHUB_TOKEN"], help="GitHub Personal Access Token or workflow token.")
    ] = None,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug logging.")] = False,
) -> None:
    """Set the repository and credentials for the current context."""
    configure_logging(debug)
    ctx.ensure_object(dict)
    ctx.obj["repo"] = repo
    ctx.obj["github_api_url"] = github_api_url
    ctx.obj["github_pat_token"] = github_pat_token or get_settings().GITHUB_PAT_TOKEN


repo_app.callback()(repo_callback)


@repo_app.command(name="find-deployment")
def find_deployment_cli(
    ctx: typer.Context,
    environment: Annotated[str, Argument(envvar="ENVIRONMENT", help="Deployment environment to search, e.g. production.")],
    nth: Annotated[int, Option(envvar="NTH", min=1, help="Which deployment to return, 1 being the most recent.")] = 1,
    policy: Annotated[
        DeploymentStatePolicy,
        Option(envvar="DEPLOYMENT_STATE_POLICY", help="Deployment states that count toward --nth."),
    ] = DeploymentStatePolicy.ACTIVE_OR_INACTIVE,
    page_delay: Annotated[float, Option(envvar="PAGE_DELAY", help="Seconds to wait between deployment pages.")] = DEPLOYMENT_PAGE_DELAY_SECONDS,
) -> None:
    """Find the Nth most recent active deployment in an environment."""
    repo: str = ctx.obj["repo"]
    github_api_url: str = ctx.obj["github_api_url"]
    github_pat_token: str | None = ctx.obj["github_pat_token"]

    async def find_deployment() -> FindDeploymentResult:
        adapter = await GitHubKitAdapter.create(repo=repo, github_pat_token=github_pat_token, github_api_url=github_api_url)
        return await run_find_deployment_workflow(adapter, environment, nth=nth, policy=policy, page_delay=page_delay)

    try:
        result = asyncio.run(find_deployment())
    except Exception as exc:
        logger.error("find-deployment failed", error=str(exc), error_type=type(exc).__name__)
        typer.echo(describe_failure(exc), err=True)
        raise typer.Exit(1) from exc

    if result.deployment_id is None:
        typer.echo(f"No active deployment found in environment {environment}")
        return
    publish_outputs(result.outputs())


@repo_app.command(name="create-release")
def create_release_cli(
    ctx: typer.Context,
    workspace: Annotated[str, Option(envvar="WORKSPACE", help="Turborepo workspace (package name) to release.")],
    prefix: Annotated[str | None, Option(envvar="PREFIX", help="Release title prefix. Defaults to the workspace name.")] = None,
    from_ref: Annotated[str | None, Option("--from", envvar="FROM_REF", help="Exclusive start of the commit range.")] = None,
    from_environment: Annotated[
        str | None,
        Option(envvar="FROM_ENVIRONMENT", help="Use the sha of the latest deployment in this environment as --from."),
    ] = None,
    to_ref: Annotated[str, Option("--to", envvar="TO_REF", help="Inclusive end of the commit range.")] = "HEAD",
    title: Annotated[str | None, Option(envvar="RELEASE_TITLE", help="Release title and tag. Defaults to <prefix>@<UTC timestamp>.")] = None,
    build_task: Annotated[str, Option(envvar="BUILD_TASK", help="Turborepo task used to detect affected packages.")] = DEFAULT_BUILD_TASK,
    repo_path: Annotated[Path, Option(envvar="REPO_PATH", help="Path to the local checkout.")] = Path("."),
) -> None:
    """Publish a release with notes built from the conventional commits that affect a workspace."""
    repo: str = ctx.obj["repo"]
    github_api_url: str = ctx.obj["github_api_url"]
    github_pat_token: str | None = ctx.obj["github_pat_token"]

    if from_ref is None and from_environment is None:
        error = RequiredConfigurationElementError(name="Commit range start", cli_name="--from", env_name="FROM_REF")
        typer.echo(str(error), err=True)
        raise typer.Exit(1)

    release_title = title or default_release_title(prefix or workspace)
    repository = GitRepository(repo_path)
    build_graph = TurboBuildGraph(task=build_task, cwd=repo_path)

    async def create_release() -> CreateReleaseResult:
        adapter = await GitHubKitAdapter.create(repo=repo, github_pat_token=github_pat_token, github_api_url=github_api_url)
        start_ref = from_ref
        if start_ref is None:
            start_ref = await resolve_previous_release_sha(adapter, from_environment, fallback_sha=to_ref)  # type: ignore[arg-type]
        return await run_create_release_workflow(
            github_adapter=adapter,
            repository=repository,
            build_graph=build_graph,
            from_ref=start_ref,
            to_ref=to_ref,
            workspace=workspace,
            title=release_title,
        )

    try:
        result = asyncio.run(create_release())
    except Exception as exc:
        logger.error("create-release failed", error=str(exc), error_type=type(exc).__name__)
        typer.echo(describe_failure(exc), err=True)
        raise typer.Exit(1) from exc

    if not result.released:
        typer.echo(f"No relevant commits for workspace {workspace}, no release created")
    publish_outputs(result.outputs())


# --- Register the repo_app as a sub-app of the main Typer app ---
typer_app.add_typer(repo_app, name="repo")


if __name__ == "__main__":
    typer_app()
