"""
Client facade for the product catalog.
The UI and filtering code only ever talk to this class.
"""
from typing import Any, Mapping, Optional

from catalog_client.config import config as default_config
from catalog_client.logger import configure_logging, logger
from catalog_client.models.request import HttpMethod, RequestDescriptor, RequestOptions
from catalog_client.models.settings import Config
from catalog_client.sentry import initialize_sentry
from catalog_client.services.cascade import CascadeController
from catalog_client.services.endpoint_resolver import EndpointResolver
from catalog_client.services.synthetic_data import SyntheticCatalog
from catalog_client.services.transport import CatalogTransport


class CatalogClient:
    """
    Verb-shaped access to the catalog API.

    Example:
        async with CatalogClient() as client:
            categories = await client.read("products/categories", {"per_page": 100})
    """

    def __init__(self, config: Optional[Config] = None,
                 transport: Optional[CatalogTransport] = None,
                 synthesizer: Optional[SyntheticCatalog] = None):
        self.config = config or default_config
        configure_logging(self.config.policy.log_level)

        self.transport = transport or CatalogTransport(self.config.policy)
        self.controller = CascadeController(
            self.config.policy,
            EndpointResolver(self.config.endpoints, self.config.credentials),
            self.transport,
            synthesizer,
        )

    async def initialize(self):
        """Open the HTTP session and error tracking (called after startup)."""
        initialize_sentry(self.config)
        await self.transport.initialize()
        logger.info(
            f"Catalog client initialized with {len(self.config.endpoints.templates)} endpoint templates"
        )

    async def close(self):
        await self.transport.close()

    async def __aenter__(self) -> "CatalogClient":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def read(self, resource_path: str, params: Optional[Mapping[str, Any]] = None,
                   *, options: Optional[RequestOptions] = None) -> Any:
        return await self._request(HttpMethod.GET, resource_path, params=params, options=options)

    async def create(self, resource_path: str, body: Optional[Any] = None,
                     *, options: Optional[RequestOptions] = None) -> Any:
        return await self._request(HttpMethod.POST, resource_path, body=body, options=options)

    async def update(self, resource_path: str, body: Optional[Any] = None,
                     *, options: Optional[RequestOptions] = None) -> Any:
        return await self._request(HttpMethod.PUT, resource_path, body=body, options=options)

    async def delete(self, resource_path: str, params: Optional[Mapping[str, Any]] = None,
                     *, options: Optional[RequestOptions] = None) -> Any:
        return await self._request(HttpMethod.DELETE, resource_path, params=params, options=options)

    async def _request(self, method: HttpMethod, resource_path: str,
                       params: Optional[Mapping[str, Any]] = None, body: Optional[Any] = None,
                       options: Optional[RequestOptions] = None) -> Any:
        descriptor = RequestDescriptor.for_method(method, resource_path, params=params, body=body)
        return await self.controller.request(descriptor, options)


# Global client instance
catalog_client = CatalogClient()
