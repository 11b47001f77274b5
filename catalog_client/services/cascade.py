"""
Fallback cascade across endpoint templates.

Templates are tried once each, in declaration order. The first success
short-circuits the rest; when every template fails the call either
substitutes synthetic data or raises the last failure.
"""
import asyncio
from typing import Any, List, Optional

from catalog_client.errors import CatalogFailure, RequestCancelledError, RetryExhaustedError
from catalog_client.logger import logger
from catalog_client.models.request import RequestDescriptor, RequestOptions
from catalog_client.models.settings import RuntimePolicy
from catalog_client.sentry import capture_retry_exhaustion, capture_synthetic_fallback
from catalog_client.services.endpoint_resolver import EndpointResolver, redact_url
from catalog_client.services.synthetic_data import SyntheticCatalog
from catalog_client.services.transport import CatalogTransport
from catalog_client.utils.cancellation import CancellationToken
from catalog_client.utils.retry import async_retry


class CascadeController:
    """Orchestrates the resolver, the transport and the synthetic catalog."""

    def __init__(self, policy: RuntimePolicy, resolver: EndpointResolver,
                 transport: CatalogTransport, synthesizer: Optional[SyntheticCatalog] = None):
        self.policy = policy
        self.resolver = resolver
        self.transport = transport
        self.synthesizer = synthesizer or SyntheticCatalog()

    async def request(self, descriptor: RequestDescriptor,
                      options: Optional[RequestOptions] = None) -> Any:
        """
        Run the cascade for one descriptor.

        Returns:
            Parsed JSON from the first template that answered, or synthetic data

        Raises:
            CatalogFailure: Last failure, when synthetic fallback is disabled
            RetryExhaustedError: Retry wrapper gave up, when fallback is disabled
            RequestCancelledError: The caller cancelled the request
        """
        options = options or RequestOptions()
        use_fallback = options.use_synthetic_fallback
        if use_fallback is None:
            use_fallback = self.policy.use_synthetic_fallback

        logger.debug(
            f"[Catalog API] {descriptor.method.value} {descriptor.resource_path}",
            extra={"extra": {"params": dict(descriptor.query_params)}}
        )

        # Each call owns its failure list
        failures: List[CatalogFailure] = []

        try:
            if options.retry and self.policy.max_retries > 0:
                retrying_pass = async_retry(
                    max_retries=self.policy.max_retries,
                    retry_delay_ms=self.policy.retry_delay_ms,
                    exceptions=(CatalogFailure,),
                    sleep=lambda delay: self._backoff(descriptor, delay, options.cancel_token),
                )(self._cascade_pass)
                return await retrying_pass(descriptor, options, failures)
            return await self._cascade_pass(descriptor, options, failures)

        except RetryExhaustedError as e:
            capture_retry_exhaustion(descriptor.resource_path, self.policy.max_retries + 1, str(e))
            if not use_fallback:
                raise
            return self._substitute(descriptor, failures)

        except CatalogFailure:
            if not use_fallback:
                raise
            return self._substitute(descriptor, failures)

    async def _cascade_pass(self, descriptor: RequestDescriptor, options: RequestOptions,
                            failures: List[CatalogFailure]) -> Any:
        """One pass over every template. Raises the last failure on exhaustion."""
        timeout_ms = options.timeout_ms
        if timeout_ms is None:
            timeout_ms = self.policy.timeout_ms
        token = options.cancel_token
        last_failure: Optional[CatalogFailure] = None

        for template_index in range(self.resolver.template_count):
            if token is not None and token.is_cancelled():
                raise RequestCancelledError(f"Request for {descriptor.resource_path} was cancelled")

            url = self.resolver.resolve(
                descriptor.resource_path, descriptor.query_params, template_index
            )

            try:
                data = await self._attempt(descriptor, url, timeout_ms, token)
            except CatalogFailure as failure:
                failures.append(failure)
                last_failure = failure
                logger.warning(
                    f"[Catalog API] Template {template_index + 1}/{self.resolver.template_count} "
                    f"failed for {descriptor.resource_path}: {failure}",
                    extra={"extra": {
                        "template_index": template_index,
                        "url": redact_url(url),
                        "failure": type(failure).__name__,
                    }}
                )
                continue

            if template_index > 0:
                logger.info(
                    f"[Catalog API] {descriptor.resource_path} answered by template {template_index + 1}"
                )
            return data

        raise last_failure

    async def _backoff(self, descriptor: RequestDescriptor, delay: float,
                       token: Optional[CancellationToken]):
        """Wait between retry passes, cut short by cancellation."""
        if token is None:
            await asyncio.sleep(delay)
            return

        cancelled = asyncio.ensure_future(token.wait())
        try:
            await asyncio.wait({cancelled}, timeout=delay)
        finally:
            cancelled.cancel()

        if token.is_cancelled():
            raise RequestCancelledError(f"Request for {descriptor.resource_path} was cancelled")

    async def _attempt(self, descriptor: RequestDescriptor, url: str, timeout_ms: int,
                       token: Optional[CancellationToken]) -> Any:
        invocation = self.transport.invoke(url, descriptor.method, descriptor.body, timeout_ms)
        if token is None:
            return await invocation

        attempt = asyncio.ensure_future(invocation)
        cancelled = asyncio.ensure_future(token.wait())
        try:
            await asyncio.wait({attempt, cancelled}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            attempt.cancel()
            raise
        finally:
            cancelled.cancel()

        if not attempt.done():
            attempt.cancel()
            raise RequestCancelledError(f"Request for {descriptor.resource_path} was cancelled")
        return attempt.result()

    def _substitute(self, descriptor: RequestDescriptor, failures: List[CatalogFailure]) -> Any:
        if self.policy.show_fallback_warnings:
            logger.warning(
                f"[Catalog API] Using synthetic data for {descriptor.resource_path}",
                extra={"extra": {
                    "method": descriptor.method.value,
                    "failed_attempts": len(failures),
                }}
            )
        capture_synthetic_fallback(descriptor.resource_path, descriptor.method.value, failures)
        return self.synthesizer.synthesize(descriptor.resource_path, descriptor.query_params)
