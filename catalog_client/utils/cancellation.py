"""Cooperative cancellation for catalog requests.

A :class:`CancellationToken` is handed to a request through its options.
The cascade checks it before every template and races each in-flight
attempt against it, so cancelling the token stops the whole multi-template
request, not just the current attempt.
"""

import asyncio
from typing import Optional


class CancellationToken:
    """Cancellation token scoped to one request.

    Examples:
        >>> token = CancellationToken()
        >>> # From another task
        >>> token.cancel()
        >>> token.is_cancelled()
        True
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._event: Optional[asyncio.Event] = None

    def cancel(self) -> None:
        """Signal that cancellation has been requested."""
        self._cancelled = True
        if self._event is not None:
            self._event.set()

    def is_cancelled(self) -> bool:
        return self._cancelled

    async def wait(self) -> None:
        """Suspend until the token is cancelled."""
        # Created lazily so the event binds to the running loop
        if self._event is None:
            self._event = asyncio.Event()
            if self._cancelled:
                self._event.set()
        await self._event.wait()
