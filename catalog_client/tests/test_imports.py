"""
Test that all modules import correctly.
Catches circular imports early.
"""
import importlib

import pytest


MODULES = [
    "catalog_client",
    "catalog_client.config",
    "catalog_client.errors",
    "catalog_client.logger",
    "catalog_client.sentry",
    "catalog_client.models.settings",
    "catalog_client.models.request",
    "catalog_client.services",
    "catalog_client.services.endpoint_resolver",
    "catalog_client.services.transport",
    "catalog_client.services.cascade",
    "catalog_client.services.synthetic_data",
    "catalog_client.services.catalog_client",
    "catalog_client.utils.retry",
    "catalog_client.utils.cancellation",
]


@pytest.mark.parametrize("module_name", MODULES)
def test_imports(module_name):
    """Test importing all client modules."""
    importlib.import_module(module_name)


def test_failure_taxonomy():
    from catalog_client import (
        CatalogError,
        CatalogFailure,
        DecodeFailure,
        HttpStatusFailure,
        NetworkFailure,
        RequestCancelledError,
        RetryExhaustedError,
        TimeoutFailure,
    )

    for failure in (TimeoutFailure, NetworkFailure, HttpStatusFailure, DecodeFailure, RetryExhaustedError):
        assert issubclass(failure, CatalogFailure)
    assert issubclass(RequestCancelledError, CatalogError)
    assert not issubclass(RequestCancelledError, CatalogFailure)
    assert HttpStatusFailure(503).code == 503
