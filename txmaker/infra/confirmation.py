"""
Transaction confirmation polling

Turns Soroban RPC's asynchronous submission model into a single awaitable
result: poll getTransaction until the status leaves NOT_FOUND.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from stellar_sdk.soroban_rpc import GetTransactionStatus

from ..errors import TransactionError

logger = logging.getLogger(__name__)


async def wait_for_confirmation(
    tx_hash: str,
    server: Any,
    poll_interval: float = 1.0,
    timeout: Optional[float] = 60.0,
    cancel_event: Optional[asyncio.Event] = None,
) -> Any:
    """
    Wait until the tracking service reports a terminal status for tx_hash

    Args:
        tx_hash: Hash of the submitted transaction
        server: Object with an async get_transaction(hash) (SorobanServerAsync)
        poll_interval: Seconds to suspend between NOT_FOUND polls
        timeout: Deadline in seconds; None polls with no deadline
        cancel_event: Optional event that aborts the wait when set

    Returns:
        The GetTransactionResponse with SUCCESS or FAILED status

    Raises:
        TransactionError: deadline reached or wait cancelled
        Any transport error raised by get_transaction (not retried)
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout if timeout is not None else None
    attempt = 0

    while True:
        if cancel_event is not None and cancel_event.is_set():
            raise TransactionError.confirmation_cancelled(tx_hash)

        attempt += 1
        response = await server.get_transaction(tx_hash)
        if response.status != GetTransactionStatus.NOT_FOUND:
            logger.info(f"Transaction {tx_hash} reached {response.status.value} after {attempt} poll(s)")
            return response

        logger.debug(f"Transaction {tx_hash} not found yet (poll {attempt})")

        wait = poll_interval
        if deadline is not None:
            remaining = deadline - loop.time()
            if remaining <= 0:
                logger.warning(f"Transaction {tx_hash} not confirmed within {timeout}s")
                raise TransactionError.confirmation_timeout(tx_hash, timeout)
            # Last interval is shortened so the final poll lands on the deadline
            wait = min(poll_interval, remaining)

        if cancel_event is None:
            await asyncio.sleep(wait)
        else:
            try:
                await asyncio.wait_for(cancel_event.wait(), wait)
            except asyncio.TimeoutError:
                pass  # interval elapsed
