"""
Sentry initialization for centralized error tracking.
Observes degraded catalog calls, never controls logic.
"""
import logging
import re
from typing import Any, Dict, List

import sentry_sdk
from sentry_sdk.integrations.asyncio import AsyncioIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from catalog_client.logger import logger
from catalog_client.models.settings import Config

_SECRET_QUERY_RE = re.compile(r"(consumer_(?:key|secret)=)[^&\s\"']+")

_enabled = False


def initialize_sentry(config: Config) -> bool:
    """Initialize Sentry SDK if DSN is configured."""
    global _enabled

    if not config.has_sentry:
        logger.info("Sentry not configured, skipping initialization")
        return False

    try:
        sentry_sdk.init(
            dsn=config.sentry_dsn,
            environment=config.environment,
            integrations=[
                AsyncioIntegration(),
                LoggingIntegration(level=logging.INFO, event_level=logging.ERROR)
            ],
            traces_sample_rate=0.1,
            send_default_pii=False,
            debug=False,
            before_send=_enrich_sentry_event
        )
    except Exception as e:
        logger.error(f"Failed to initialize Sentry: {e}")
        return False

    _enabled = True
    logger.info("Sentry initialized for error tracking")
    return True


def scrub_secrets(value: Any) -> Any:
    """Mask consumer credentials anywhere inside an event payload."""
    if isinstance(value, str):
        return _SECRET_QUERY_RE.sub(r"\1***", value)
    if isinstance(value, list):
        return [scrub_secrets(item) for item in value]
    if isinstance(value, dict):
        return {key: scrub_secrets(item) for key, item in value.items()}
    return value


def _enrich_sentry_event(event: Dict[str, Any], hint: Dict[str, Any]) -> Dict[str, Any]:
    """Tag events with system context and strip credentials."""
    event = scrub_secrets(event)
    event.setdefault("tags", {})
    event["tags"]["system"] = "catalog-client"
    return event


def capture_synthetic_fallback(resource_path: str, method: str, failures: List[Exception]):
    """Report that a request was answered with synthetic data."""
    if not _enabled:
        return

    with sentry_sdk.new_scope() as scope:
        scope.set_tag("resource_path", resource_path)
        scope.set_tag("synthetic_fallback", "true")
        scope.set_extra("method", method)
        scope.set_extra("failures", [f"{type(f).__name__}: {f}" for f in failures])
        scope.set_level("warning")

        sentry_sdk.capture_message(
            f"Synthetic catalog data used for {method} {resource_path}",
            "warning"
        )


def capture_retry_exhaustion(resource_path: str, attempts: int, error: str):
    """Capture retry exhaustion in Sentry."""
    if not _enabled:
        return

    with sentry_sdk.new_scope() as scope:
        scope.set_tag("resource_path", resource_path)
        scope.set_tag("retry_exhausted", "true")
        scope.set_extra("attempts", attempts)
        scope.set_extra("error", scrub_secrets(error))
        scope.set_level("error")

        sentry_sdk.capture_message(
            f"Retry exhausted for {resource_path} after {attempts} attempts",
            "error"
        )
