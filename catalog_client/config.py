import os
from typing import Mapping, Optional

from dotenv import load_dotenv

from catalog_client.errors import ConfigError
from catalog_client.models.settings import (
    Config,
    Credentials,
    EndpointConfig,
    RuntimePolicy,
)

DEFAULT_DOMAIN = "https://example.com"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _get(environ: Mapping[str, str], name: str, default: str = "") -> str:
    # The front-end build exposes the same settings under a REACT_APP_ prefix
    value = environ.get(name)
    if value is None:
        value = environ.get(f"REACT_APP_{name}")
    return default if value is None else value


def _get_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = _get(environ, name, str(default)).strip()
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


def _get_bool(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = _get(environ, name, "true" if default else "false").strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def load_config(environ: Optional[Mapping[str, str]] = None) -> Config:
    """
    Build the client configuration from the environment.

    Args:
        environ: Mapping to read from (default: os.environ after loading .env)

    Raises:
        ConfigError: If a numeric or boolean setting cannot be parsed
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    debug = _get_bool(environ, "DEBUG", False)
    log_level = "DEBUG" if debug else _get(environ, "LOG_LEVEL", "INFO").upper()

    endpoints = EndpointConfig.from_domain(
        _get(environ, "WOOCOMMERCE_URL", DEFAULT_DOMAIN) or DEFAULT_DOMAIN,
        include_alternatives=_get_bool(environ, "CATALOG_TRY_ALTERNATIVE_DOMAINS", True),
    )
    credentials = Credentials(
        consumer_key=_get(environ, "WOOCOMMERCE_CONSUMER_KEY"),
        consumer_secret=_get(environ, "WOOCOMMERCE_CONSUMER_SECRET"),
    )
    policy = RuntimePolicy(
        timeout_ms=_get_int(environ, "CATALOG_REQUEST_TIMEOUT_MS", 15000),
        max_retries=_get_int(environ, "CATALOG_MAX_RETRIES", 3),
        retry_delay_ms=_get_int(environ, "CATALOG_RETRY_DELAY_MS", 1000),
        use_synthetic_fallback=_get_bool(environ, "CATALOG_USE_SYNTHETIC_FALLBACK", True),
        show_fallback_warnings=_get_bool(environ, "CATALOG_SHOW_FALLBACK_WARNINGS", True),
        log_level=log_level,
    )

    return Config(
        endpoints=endpoints,
        credentials=credentials,
        policy=policy,
        sentry_dsn=_get(environ, "SENTRY_DSN"),
        environment=_get(environ, "ENVIRONMENT", "development"),
    )


# Create an instance
config = load_config()
