"""GitHub content store configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

GITHUB_API_URL = "https://api.github.com"
DEFAULT_GITHUB_BRANCH = "main"


@dataclass(frozen=True, slots=True)
class GitHubConfig:
    """Repository coordinates and credentials for the contents API."""

    token: str
    user: str
    repo: str
    branch: str = DEFAULT_GITHUB_BRANCH
    resilience: ResilienceConfig | None = None

    def resilience_config(self) -> ResilienceConfig:
        if self.resilience is not None:
            return self.resilience
        return ResilienceConfig(
            name="github",
            base_url=GITHUB_API_URL,
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            retry=RetryPolicy(total=3),
            default_headers={
                "Accept": "application/vnd.github+json",
                "Authorization": f"token {self.token}",
            },
        )


def get_github_config() -> GitHubConfig:
    values = require_env_vars(("GITHUB_TOKEN", "GITHUB_USER", "GITHUB_REPO"))
    return GitHubConfig(
        token=values["GITHUB_TOKEN"],
        user=values["GITHUB_USER"],
        repo=values["GITHUB_REPO"],
        branch=optional_env_var("GITHUB_BRANCH", DEFAULT_GITHUB_BRANCH) or DEFAULT_GITHUB_BRANCH,
    )
