"""
Single bounded HTTP attempt against one candidate URL.
Classifies every outcome into the failure taxonomy.
All network logic is isolated here.
"""
import aiohttp
import asyncio
import json
import time
from typing import Any, Optional

from catalog_client.errors import (
    CatalogFailure,
    DecodeFailure,
    HttpStatusFailure,
    NetworkFailure,
    TimeoutFailure,
)
from catalog_client.logger import logger
from catalog_client.models.request import HttpMethod
from catalog_client.models.settings import RuntimePolicy
from catalog_client.services.endpoint_resolver import redact_url

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class CatalogTransport:
    """
    Wrapper for catalog HTTP calls.
    The cascade never touches aiohttp directly.
    """

    def __init__(self, policy: RuntimePolicy):
        self.policy = policy
        self.session: Optional[aiohttp.ClientSession] = None

    async def initialize(self):
        """Initialize HTTP session."""
        if self.session is not None and not self.session.closed:
            return

        # Deadlines are enforced per attempt in invoke()
        self.session = aiohttp.ClientSession(
            headers=DEFAULT_HEADERS,
            timeout=aiohttp.ClientTimeout(total=None),
        )
        logger.debug("Catalog transport session initialized")

    async def close(self):
        """Close HTTP session."""
        if self.session:
            await self.session.close()
            self.session = None

    async def invoke(self, url: str, method: HttpMethod = HttpMethod.GET,
                     body: Optional[Any] = None, timeout_ms: Optional[int] = None) -> Any:
        """
        Issue one HTTP call with a hard deadline.

        Args:
            url: Fully resolved candidate URL
            method: HTTP method
            body: JSON-serializable body, sent for POST/PUT only
            timeout_ms: Deadline (default from policy)

        Returns:
            Parsed JSON body

        Raises:
            TimeoutFailure: No response within the deadline
            NetworkFailure: Transport-level fault
            HttpStatusFailure: Non-2xx status
            DecodeFailure: 2xx body is not valid JSON
        """
        method = HttpMethod(method)
        if timeout_ms is None:
            timeout_ms = self.policy.timeout_ms
        safe_url = redact_url(url)

        if self.session is None or self.session.closed:
            await self.initialize()

        started = time.monotonic()
        attempt = asyncio.ensure_future(self._send(url, safe_url, method, body))
        try:
            done, _ = await asyncio.wait({attempt}, timeout=timeout_ms / 1000)
        except asyncio.CancelledError:
            attempt.cancel()
            raise

        if not done:
            # Do not wait for the cancelled attempt to unwind
            attempt.cancel()
            self._log_outcome(method, safe_url, "timeout", started)
            raise TimeoutFailure(
                f"No response within {timeout_ms}ms", method=method.value, url=safe_url
            )

        try:
            data = attempt.result()
        except HttpStatusFailure as e:
            self._log_outcome(method, safe_url, f"http_{e.code}", started)
            raise
        except CatalogFailure as e:
            self._log_outcome(method, safe_url, _outcome_name(e), started)
            raise
        except Exception:
            self._log_outcome(method, safe_url, "error", started)
            raise

        self._log_outcome(method, safe_url, "ok", started)
        return data

    async def _send(self, url: str, safe_url: str, method: HttpMethod, body: Optional[Any]) -> Any:
        kwargs = {"headers": DEFAULT_HEADERS}
        if method.has_body and body is not None:
            kwargs["data"] = json.dumps(body)

        try:
            response = await self.session.request(method.value, url, **kwargs)
            try:
                if not 200 <= response.status < 300:
                    raise HttpStatusFailure(
                        response.status,
                        f"API Error: {response.status} {response.reason or ''}".strip(),
                        method=method.value,
                        url=safe_url,
                    )
                raw = await response.read()
            finally:
                response.release()
        # ServerTimeoutError is both a ClientError and a TimeoutError
        except asyncio.TimeoutError as e:
            raise TimeoutFailure(
                f"Timeout calling catalog: {e}", method=method.value, url=safe_url
            ) from e
        except aiohttp.ClientError as e:
            raise NetworkFailure(
                f"Network error calling catalog: {e}", method=method.value, url=safe_url
            ) from e

        if not raw or not raw.strip():
            return None

        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DecodeFailure(
                f"Invalid JSON response from catalog: {e}", method=method.value, url=safe_url
            ) from e

    def _log_outcome(self, method: HttpMethod, safe_url: str, outcome: str, started: float):
        logger.debug(
            f"[Catalog API] {method.value} {safe_url} -> {outcome}",
            extra={"extra": {
                "method": method.value,
                "url": safe_url,
                "outcome": outcome,
                "elapsed_ms": round((time.monotonic() - started) * 1000, 1),
            }}
        )


def _outcome_name(failure: CatalogFailure) -> str:
    if isinstance(failure, TimeoutFailure):
        return "timeout"
    if isinstance(failure, DecodeFailure):
        return "decode_error"
    return "network_error"
