"""
Catalog Client - resilient async client for a WooCommerce product catalog.
"""

__version__ = "1.0.0"
__author__ = "Engineering Team"

# Export main components for easy import
from catalog_client.config import config
from catalog_client.logger import logger
from catalog_client.errors import (
    ConfigError,
    CatalogError,
    CatalogFailure,
    TimeoutFailure,
    NetworkFailure,
    HttpStatusFailure,
    DecodeFailure,
    RetryExhaustedError,
    RequestCancelledError
)
from catalog_client.models.request import RequestOptions
from catalog_client.utils.cancellation import CancellationToken

__all__ = [
    'config',
    'logger',
    'ConfigError',
    'CatalogError',
    'CatalogFailure',
    'TimeoutFailure',
    'NetworkFailure',
    'HttpStatusFailure',
    'DecodeFailure',
    'RetryExhaustedError',
    'RequestCancelledError',
    'RequestOptions',
    'CancellationToken'
]
