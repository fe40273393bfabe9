"""
Configuration - Single source of truth for the client.

Everything the client needs is explicit here. The library itself never
reads a base URL from config: callers pass one per call. `base_url` is
used by the CLI only.
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Optional

from .exceptions import ConfigurationError


def _env_number(name: str, default, cast):
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")


@dataclass
class Config:
    """
    Client configuration. Create once, pass everywhere.

    Usage:
        config = Config.from_env()
        client = NeuronGraphQueryClient.from_config(config)
    """

    # Service (CLI default target)
    base_url: str = "http://localhost:60000/"
    access_token: Optional[str] = None

    # Retry
    retry_count: int = 3
    retry_base_delay: float = 0.1  # seconds; delay before retry k is base * 2**k

    # Transport
    request_timeout: float = 30.0

    # Collection queries
    default_limit: Optional[int] = 1000

    def __post_init__(self):
        if self.retry_count < 0:
            raise ConfigurationError(f"retry_count must be >= 0, got {self.retry_count}")
        if self.retry_base_delay < 0:
            raise ConfigurationError(f"retry_base_delay must be >= 0, got {self.retry_base_delay}")
        if self.request_timeout <= 0:
            raise ConfigurationError(f"request_timeout must be > 0, got {self.request_timeout}")
        if self.default_limit is not None and self.default_limit < 0:
            raise ConfigurationError(f"default_limit must be >= 0, got {self.default_limit}")

    @classmethod
    def from_env(cls) -> 'Config':
        """Create config from environment variables."""
        return cls(
            base_url=os.environ.get("CORTEX_GRAPH_BASE_URL", "http://localhost:60000/"),
            access_token=os.environ.get("CORTEX_GRAPH_ACCESS_TOKEN") or None,
            retry_count=_env_number("CORTEX_GRAPH_RETRY_COUNT", 3, int),
            retry_base_delay=_env_number("CORTEX_GRAPH_RETRY_BASE_DELAY", 0.1, float),
            request_timeout=_env_number("CORTEX_GRAPH_TIMEOUT", 30.0, float),
            default_limit=_env_number("CORTEX_GRAPH_DEFAULT_LIMIT", 1000, int),
        )

    @classmethod
    def for_testing(cls, **overrides) -> 'Config':
        """Create config for tests: no backoff delay unless overridden."""
        known = {f.name for f in fields(cls)}
        for key in overrides:
            if key not in known:
                raise ConfigurationError(f"Unknown config field: {key}")
        overrides.setdefault("retry_base_delay", 0.0)
        return replace(cls.from_env(), **overrides)
