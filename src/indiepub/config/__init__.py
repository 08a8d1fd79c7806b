"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .github import GitHubConfig, get_github_config
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .publication import (
    DEFAULT_POST_TYPES,
    PostType,
    PublicationConfig,
    SyndicationTarget,
    load_publication_config,
    merge_post_types,
)
from .storage import StorageConfig, get_database_uri, get_storage_config

__all__ = [
    "DEFAULT_POST_TYPES",
    "CacheConfig",
    "ConfigurationError",
    "GitHubConfig",
    "MissingConfigurationError",
    "PostType",
    "PublicationConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "SyndicationTarget",
    "configure_logging",
    "get_database_uri",
    "get_github_config",
    "get_storage_config",
    "load_publication_config",
    "merge_post_types",
    "optional_env_var",
    "require_env_vars",
]
