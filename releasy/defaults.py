"""
Default values shared by the releasy commands.
"""

DEFAULT_MANIFEST_FILE_NAME = "repo-plan.toml"
DEFAULT_COMMIT_AUTHOR_NAME = "releasy"
DEFAULT_COMMIT_AUTHOR_EMAIL = "releasy@fuel.sh"
DEFAULT_BASE_BRANCH = "master"
DEFAULT_REMOTE = "origin"

GITHUB_API_URL = "https://api.github.com"
GITHUB_ACCEPT = "application/vnd.github+json"
USER_AGENT = "releasy"

# Prefix for branches a dependent repo keeps per upstream repo
TRACKING_BRANCH_PREFIX = "releasy"
