"""
Request contract and logging tests.
"""
import asyncio
import json
import logging
from contextlib import contextmanager
from decimal import Decimal

import pytest

from catalog_client.errors import ConfigError
from catalog_client.logger import StructuredFormatter, configure_logging, logger, setup_logger
from catalog_client.models.request import HttpMethod, RequestDescriptor, RequestOptions
from catalog_client.utils.cancellation import CancellationToken


def test_descriptor_freezes_query_params():
    params = {"category": "53"}
    descriptor = RequestDescriptor("products", params)
    params["category"] = "49"

    assert descriptor.query_params["category"] == "53"
    with pytest.raises(TypeError):
        descriptor.query_params["search"] = "gate"


def test_descriptor_is_immutable():
    descriptor = RequestDescriptor("products")
    with pytest.raises(AttributeError):
        descriptor.resource_path = "orders"


def test_verb_defaults():
    get = RequestDescriptor.for_method(HttpMethod.GET, "products", params={"search": "gate"})
    post = RequestDescriptor.for_method(HttpMethod.POST, "products", params={"x": 1}, body={"name": "Gate"})
    put = RequestDescriptor.for_method(HttpMethod.PUT, "products/1")
    delete = RequestDescriptor.for_method("DELETE", "products/1", params={"force": True})

    assert dict(get.query_params) == {"search": "gate"} and get.body is None
    assert dict(post.query_params) == {} and post.body == {"name": "Gate"}
    assert put.body == {}
    assert delete.method is HttpMethod.DELETE and delete.body is None


@pytest.mark.asyncio
async def test_cancellation_token_wakes_waiters():
    token = CancellationToken()
    waiter = asyncio.ensure_future(token.wait())
    await asyncio.sleep(0)
    assert not waiter.done()

    token.cancel()
    await asyncio.wait_for(waiter, timeout=1)

    assert token.is_cancelled()


@pytest.mark.asyncio
async def test_cancellation_token_already_cancelled():
    token = CancellationToken()
    token.cancel()

    await asyncio.wait_for(token.wait(), timeout=1)


def test_structured_formatter_merges_extra():
    record = logging.LogRecord("catalog_client", logging.DEBUG, __file__, 1, "attempt", None, None)
    record.extra = {"outcome": "timeout", "method": "GET"}

    data = json.loads(StructuredFormatter().format(record))

    assert data["message"] == "attempt"
    assert data["outcome"] == "timeout"
    assert data["level"] == "DEBUG"


def test_configure_logging_accepts_names():
    previous = logger.level
    try:
        configure_logging("debug")
        assert logger.level == logging.DEBUG
        configure_logging("nonsense")
        assert logger.level == logging.INFO
    finally:
        logger.setLevel(previous)


def test_unserializable_body_rejected_at_construction():
    with pytest.raises(TypeError):
        RequestDescriptor.for_method(HttpMethod.POST, "products", body={"price": Decimal("9.99")})


@pytest.mark.parametrize("timeout_ms", [0, -5])
def test_options_reject_non_positive_timeout(timeout_ms):
    with pytest.raises(ConfigError):
        RequestOptions(timeout_ms=timeout_ms)


def console_handlers():
    return [h for h in logger.handlers if getattr(h, "_catalog_console", False)]


@contextmanager
def root_handlers(*handlers):
    """Swap the root logger's handlers in place for the duration of the block."""
    root = logging.getLogger()
    saved = root.handlers[:]
    root.handlers[:] = handlers
    try:
        yield
    finally:
        root.handlers[:] = saved


@pytest.fixture
def restore_logger():
    level, handlers = logger.level, logger.handlers[:]
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


def test_console_handler_skipped_when_root_configured(restore_logger):
    with root_handlers(logging.NullHandler()):
        setup_logger()

    assert console_handlers() == []
    assert logger.propagate


def test_console_handler_added_when_root_bare(restore_logger):
    with root_handlers():
        setup_logger()
        configure_logging("INFO")

    assert len(console_handlers()) == 1


def test_configure_logging_drops_console_once_root_configured(restore_logger):
    with root_handlers():
        setup_logger()
    assert len(console_handlers()) == 1

    with root_handlers(logging.NullHandler()):
        configure_logging("INFO")

    assert console_handlers() == []
