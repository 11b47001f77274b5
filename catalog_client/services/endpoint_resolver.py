"""
Builds authenticated candidate URLs for a catalog resource.
Pure string work, no network.
"""
from typing import Any, List, Mapping, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from catalog_client.models.settings import Credentials, EndpointConfig

SECRET_PARAMS = ("consumer_key", "consumer_secret")


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_format_value(item) for item in value)
    return str(value)


def redact_url(url: str) -> str:
    """Mask credential values so a URL can be logged."""
    parts = urlsplit(url)
    if not parts.query:
        return url
    query = [
        (key, "***" if key in SECRET_PARAMS and value else value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(query=urlencode(query, safe="*")))


class EndpointResolver:
    """Combines an endpoint template, a resource path and query parameters."""

    def __init__(self, endpoints: EndpointConfig, credentials: Credentials):
        self.endpoints = endpoints
        self.credentials = credentials

    @property
    def template_count(self) -> int:
        return len(self.endpoints.templates)

    def resolve(self, resource_path: str, query_params: Optional[Mapping[str, Any]] = None,
                template_index: int = 0) -> str:
        """
        Build the URL for one template.

        Out-of-range indexes fall back to the first template. Parameters
        whose value is None are skipped; credentials are always present.
        """
        templates = self.endpoints.templates
        if not 0 <= template_index < len(templates):
            template_index = 0
        base = templates[template_index].rstrip("/")

        all_params = {**self.credentials.as_params(), **dict(query_params or {})}
        query = [
            (key, _format_value(value))
            for key, value in all_params.items()
            if value is not None
        ]

        url = f"{base}/{resource_path.lstrip('/')}"
        if query:
            url = f"{url}?{urlencode(query)}"
        return url

    def candidates(self, resource_path: str,
                   query_params: Optional[Mapping[str, Any]] = None) -> List[str]:
        """All candidate URLs, in the order they are tried."""
        return [
            self.resolve(resource_path, query_params, index)
            for index in range(self.template_count)
        ]
