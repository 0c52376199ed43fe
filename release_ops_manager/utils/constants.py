"""Shared constants used across the application."""

# Deployment Resolution Constants
# -------------------------------

DEPLOYMENT_PAGE_SIZE = 20
"""Number of deployments requested per GraphQL page."""

DEPLOYMENT_PAGE_DELAY_SECONDS = 1.0
"""Pause between consecutive deployment page requests to stay under GitHub rate limits."""

ACTIVE_DEPLOYMENT_STATE = "ACTIVE"
"""GraphQL DeploymentState of the deployment currently serving an environment."""

INACTIVE_DEPLOYMENT_STATE = "INACTIVE"
"""GraphQL DeploymentState of a deployment superseded by a newer one."""

# Release Constants
# -----------------

DEFAULT_BUILD_TASK = "build"
"""Turborepo task whose dry run decides whether a commit touches a workspace."""

RELEASE_TITLE_TIMESTAMP_FORMAT = "%Y.%m.%d-%H%M%S"
"""strftime format of the timestamp appended to the release prefix."""

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred"
"""Reported when a failure carries no message of its own."""
