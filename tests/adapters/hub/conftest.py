"""Shared fixtures for hub adapter tests."""

from __future__ import annotations

import pytest

from drhub.adapters.http_resilience import ResilienceConfig, RetryPolicy
from drhub.adapters.hub import HubClient
from drhub.config import HubConfig
from tests.helpers.http import FakeApiServer, make_client_factory

API_URL = "https://hub.example.test"


@pytest.fixture
def hub_config() -> HubConfig:
    return HubConfig(
        api_url=API_URL,
        token="token",
        resilience=ResilienceConfig(name="hub-test", base_url=API_URL, retry=RetryPolicy(total=0)),
    )


@pytest.fixture
def api_server() -> FakeApiServer:
    return FakeApiServer()


@pytest.fixture
def hub_client(hub_config: HubConfig, api_server: FakeApiServer) -> HubClient:
    return HubClient(config=hub_config, client_factory=make_client_factory(api_server.handle))
