"""
Services package initialization.
Centralizes service imports.
"""

from catalog_client.services.catalog_client import CatalogClient, catalog_client
from catalog_client.services.synthetic_data import SyntheticCatalog, synthetic_catalog

__all__ = [
    'CatalogClient',
    'catalog_client',
    'SyntheticCatalog',
    'synthetic_catalog'
]
