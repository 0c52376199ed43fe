# This file is intended to hold the setup for the authenticated githubkit client.

"""Sets up the authenticated githubkit client."""

from typing import TypeAlias

from githubkit import GitHub
from githubkit.auth import TokenAuthStrategy

GitHubClient: TypeAlias = GitHub[TokenAuthStrategy]


async def get_github_client(github_pat_token: str | None, github_api_url: str) -> GitHubClient:
    """Returns a GitHub client authenticated with a personal access or workflow token.

    Supports a custom base URL for GitHub Enterprise Server (GHES).
    """
    if not github_pat_token:
        raise RuntimeError("GitHub authentication requires a token (GITHUB_PAT_TOKEN or GITHUB_TOKEN).")
    # Disable HTTP caching to always get fresh deployment state
    return GitHub(auth=TokenAuthStrategy(github_pat_token), base_url=github_api_url, http_cache=False)
