"""
Immutable settings contracts.
Built once at startup and shared by reference.
"""
from dataclasses import dataclass, field
from typing import Tuple
from urllib.parse import urlsplit

from catalog_client.errors import ConfigError


API_PREFIX = "wp-json/wc/v3"
FRONT_CONTROLLER_PREFIX = "index.php/wp-json/wc/v3"


def alternative_domains(url: str) -> Tuple[str, ...]:
    """
    Derive the www / non-www counterpart of a domain.

    Returns an empty tuple when the URL cannot be parsed.
    """
    if not url:
        return ()
    try:
        parts = urlsplit(url)
    except ValueError:
        return ()
    if not parts.scheme or not parts.hostname:
        return ()

    if parts.hostname.startswith("www."):
        return (url.replace("www.", "", 1),)
    return (url.replace("://", "://www.", 1),)


def build_templates(primary_domain: str, alternatives: Tuple[str, ...] = ()) -> Tuple[str, ...]:
    """Endpoint templates in the order they are tried."""
    primary = primary_domain.rstrip("/")
    templates = [
        f"{primary}/{API_PREFIX}",
        f"{primary}/{FRONT_CONTROLLER_PREFIX}",
    ]
    for domain in alternatives:
        templates.append(f"{domain.rstrip('/')}/{API_PREFIX}")
    return tuple(templates)


@dataclass(frozen=True)
class EndpointConfig:
    """Candidate base URLs for one logical catalog API."""
    primary_domain: str
    alternative_domains: Tuple[str, ...] = ()
    templates: Tuple[str, ...] = ()

    def __post_init__(self):
        if not self.templates:
            raise ConfigError("At least one endpoint template is required")

    @classmethod
    def from_domain(cls, primary_domain: str, include_alternatives: bool = True) -> "EndpointConfig":
        alternatives = alternative_domains(primary_domain) if include_alternatives else ()
        return cls(
            primary_domain=primary_domain,
            alternative_domains=alternatives,
            templates=build_templates(primary_domain, alternatives),
        )


@dataclass(frozen=True)
class Credentials:
    """Consumer key/secret pair. Missing values stay empty strings."""
    consumer_key: str = ""
    consumer_secret: str = ""

    def as_params(self) -> dict:
        return {
            "consumer_key": self.consumer_key or "",
            "consumer_secret": self.consumer_secret or "",
        }

    def __repr__(self) -> str:
        key = "set" if self.consumer_key else "empty"
        secret = "set" if self.consumer_secret else "empty"
        return f"Credentials(consumer_key={key}, consumer_secret={secret})"


@dataclass(frozen=True)
class RuntimePolicy:
    """Transport and fallback policy, read-only after startup."""
    timeout_ms: int = 15000
    max_retries: int = 3
    retry_delay_ms: int = 1000
    use_synthetic_fallback: bool = True
    show_fallback_warnings: bool = True
    log_level: str = "INFO"

    def __post_init__(self):
        if self.timeout_ms <= 0:
            raise ConfigError(f"timeout_ms must be positive, got {self.timeout_ms}")
        if self.max_retries < 0:
            raise ConfigError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.retry_delay_ms < 0:
            raise ConfigError(f"retry_delay_ms must be >= 0, got {self.retry_delay_ms}")

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000


@dataclass(frozen=True)
class Config:
    """Everything the client needs, in one immutable value."""
    endpoints: EndpointConfig
    credentials: Credentials = field(default_factory=Credentials)
    policy: RuntimePolicy = field(default_factory=RuntimePolicy)
    sentry_dsn: str = ""
    environment: str = "development"

    @property
    def has_sentry(self) -> bool:
        return bool(self.sentry_dsn)
