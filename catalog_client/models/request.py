"""
Per-call request contracts.
A descriptor is immutable so one call can replay it against every template.
"""
import json
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from catalog_client.errors import ConfigError
from catalog_client.utils.cancellation import CancellationToken


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @property
    def has_body(self) -> bool:
        return self in (HttpMethod.POST, HttpMethod.PUT)


@dataclass(frozen=True)
class RequestDescriptor:
    """One logical catalog call."""
    resource_path: str
    query_params: Mapping[str, Any] = field(default_factory=dict)
    method: HttpMethod = HttpMethod.GET
    body: Optional[Any] = None

    def __post_init__(self):
        # Freeze a private copy so later mutation of the caller's dict is not seen
        object.__setattr__(self, "query_params", MappingProxyType(dict(self.query_params or {})))
        object.__setattr__(self, "method", HttpMethod(self.method))
        if self.method.has_body and self.body is not None:
            # Fail once here instead of once per template; raises TypeError
            json.dumps(self.body)

    @classmethod
    def for_method(cls, method: HttpMethod, resource_path: str,
                   params: Optional[Mapping[str, Any]] = None,
                   body: Optional[Any] = None) -> "RequestDescriptor":
        """Apply the verb defaults: GET/DELETE carry params, POST/PUT carry a body."""
        method = HttpMethod(method)
        if method.has_body:
            return cls(resource_path=resource_path, method=method,
                       body=body if body is not None else {})
        return cls(resource_path=resource_path, query_params=params or {}, method=method)


@dataclass(frozen=True)
class RequestOptions:
    """Per-call overrides of the runtime policy."""
    use_synthetic_fallback: Optional[bool] = None
    timeout_ms: Optional[int] = None
    retry: bool = False
    cancel_token: Optional[CancellationToken] = None

    def __post_init__(self):
        if self.timeout_ms is not None and self.timeout_ms <= 0:
            raise ConfigError(f"timeout_ms must be positive, got {self.timeout_ms}")
