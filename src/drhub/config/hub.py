"""Hub API server configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_flag, optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

HUB_TIMEOUT_SECONDS = 15.0


@dataclass(frozen=True, slots=True)
class HubConfig:
    """Connection settings for the hub cluster's API server."""

    api_url: str
    token: str
    resilience: ResilienceConfig


def get_hub_config(*, resilience: ResilienceConfig | None = None) -> HubConfig:
    values = require_env_vars(("DRHUB_API_URL", "DRHUB_TOKEN"))
    api_url = values["DRHUB_API_URL"].rstrip("/")
    token = values["DRHUB_TOKEN"].strip()

    verify: str | bool = (
        False
        if env_flag("DRHUB_INSECURE_SKIP_VERIFY")
        else optional_env_var("DRHUB_CA_BUNDLE") or True
    )

    return HubConfig(
        api_url=api_url,
        token=token,
        resilience=resilience
        or ResilienceConfig(
            name="hub",
            base_url=api_url,
            timeout_seconds=HUB_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=3),
            ratelimit=RateLimit(max_calls=20, per_seconds=1.0),
            verify=verify,
            default_headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
            },
        ),
    )
