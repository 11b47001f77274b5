"""
Shared fixtures for catalog client tests.
"""
import pytest
from unittest.mock import AsyncMock, MagicMock

from catalog_client.models.settings import Config, Credentials, EndpointConfig, RuntimePolicy
from catalog_client.services.endpoint_resolver import EndpointResolver

TEST_DOMAIN = "https://shop.example.com"


def make_config(**policy) -> Config:
    """Config with three templates and test credentials."""
    policy.setdefault("retry_delay_ms", 0)
    return Config(
        endpoints=EndpointConfig.from_domain(TEST_DOMAIN),
        credentials=Credentials(consumer_key="ck_test", consumer_secret="cs_test"),
        policy=RuntimePolicy(**policy),
    )


def create_mock_response(status=200, body=b"", reason="OK"):
    """Helper to create a mocked aiohttp response."""
    mock_response = MagicMock()
    mock_response.status = status
    mock_response.reason = reason
    mock_response.read = AsyncMock(return_value=body)
    return mock_response


def create_mock_session(response=None, side_effect=None):
    mock_session = MagicMock()
    mock_session.closed = False
    mock_session.close = AsyncMock()
    mock_session.request = AsyncMock(return_value=response, side_effect=side_effect)
    return mock_session


@pytest.fixture
def config():
    return make_config()


@pytest.fixture
def resolver(config):
    return EndpointResolver(config.endpoints, config.credentials)
