from dataclasses import replace
from unittest.mock import MagicMock, patch

from catalog_client.sentry import (
    _enrich_sentry_event,
    capture_synthetic_fallback,
    initialize_sentry,
    scrub_secrets,
)
from catalog_client.errors import NetworkFailure

from conftest import make_config


def test_skipped_without_dsn():
    with patch("catalog_client.sentry.sentry_sdk.init") as mock_init:
        assert initialize_sentry(make_config()) is False
        mock_init.assert_not_called()


def test_initialized_with_dsn():
    config = replace(make_config(), sentry_dsn="https://key@sentry.example/1", environment="test")

    with patch("catalog_client.sentry._enabled", False), \
         patch("catalog_client.sentry.sentry_sdk.init") as mock_init:
        assert initialize_sentry(config) is True
        mock_init.assert_called_once()
        assert mock_init.call_args.kwargs["environment"] == "test"


def test_event_is_tagged_and_scrubbed():
    event = {
        "request": {"url": "https://shop.example.com/wp-json/wc/v3/products?consumer_key=ck_x&consumer_secret=cs_y"},
        "tags": {},
    }

    enriched = _enrich_sentry_event(event, {})

    assert enriched["tags"]["system"] == "catalog-client"
    assert "ck_x" not in enriched["request"]["url"]
    assert "cs_y" not in enriched["request"]["url"]


def test_scrub_secrets_leaves_other_values():
    assert scrub_secrets("per_page=10&consumer_secret=abc") == "per_page=10&consumer_secret=***"
    assert scrub_secrets(42) == 42


def test_capture_is_noop_when_disabled():
    with patch("catalog_client.sentry._enabled", False), \
         patch("catalog_client.sentry.sentry_sdk.capture_message") as mock_capture:
        capture_synthetic_fallback("products", "GET", [NetworkFailure("down")])
        mock_capture.assert_not_called()


def test_capture_synthetic_fallback():
    with patch("catalog_client.sentry._enabled", True), \
         patch("catalog_client.sentry.sentry_sdk.new_scope", return_value=MagicMock()), \
         patch("catalog_client.sentry.sentry_sdk.capture_message") as mock_capture:
        capture_synthetic_fallback("products/categories", "GET", [NetworkFailure("down")])

    mock_capture.assert_called_once()
    assert "products/categories" in mock_capture.call_args.args[0]
