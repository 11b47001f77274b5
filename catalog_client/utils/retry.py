"""
Caller-level retry around a whole cascade pass.
Bounded retries, linear backoff, never applied per template.
"""
import asyncio
import functools
from typing import Awaitable, Callable, Optional

from catalog_client.errors import RetryExhaustedError
from catalog_client.logger import logger


def async_retry(
    max_retries: int,
    retry_delay_ms: int,
    exceptions: tuple = (Exception,),
    sleep: Optional[Callable[[float], Awaitable[None]]] = None
):
    """
    Retry decorator for async functions.

    Args:
        max_retries: Extra attempts after the first one
        retry_delay_ms: Base delay; attempt N waits retry_delay_ms * N
        exceptions: Exceptions to catch and retry
        sleep: Awaitable used for the backoff wait (default asyncio.sleep)

    Raises:
        RetryExhaustedError: Chained to the last caught exception
    """
    def decorator(func: Callable):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            last_exception = None

            for attempt in range(max_retries + 1):
                try:
                    if attempt > 0:
                        logger.info(
                            f"Retry attempt {attempt}/{max_retries} for {func.__name__}"
                        )

                    return await func(*args, **kwargs)

                except exceptions as e:
                    last_exception = e

                    if attempt == max_retries:
                        break

                    delay = retry_delay_ms * (attempt + 1) / 1000
                    logger.warning(
                        f"Attempt {attempt + 1}/{max_retries + 1} failed for {func.__name__}. "
                        f"Retrying in {delay:.2f}s. Error: {e}"
                    )

                    await (sleep or asyncio.sleep)(delay)

            logger.error(
                f"Max retries ({max_retries}) exhausted for {func.__name__}: {last_exception}"
            )
            raise RetryExhaustedError(
                f"{func.__name__} failed after {max_retries} retries: {last_exception}",
                method=getattr(last_exception, "method", None),
                url=getattr(last_exception, "url", None),
            ) from last_exception

        return wrapper
    return decorator
