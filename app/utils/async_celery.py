"""
Shared event loop for running the async sync services from Celery tasks.

Async SQLAlchemy engines bind connections to the loop that created them, so
every task invocation in a worker process reuses one loop.
"""
import asyncio
import logging
from typing import Any, Coroutine, TypeVar

from celery.signals import worker_process_shutdown

logger = logging.getLogger(__name__)

_loop: asyncio.AbstractEventLoop | None = None

T = TypeVar("T")


def get_event_loop() -> asyncio.AbstractEventLoop:
    """Get or create the worker's shared event loop."""
    global _loop

    if _loop is None or _loop.is_closed():
        _loop = asyncio.new_event_loop()
        asyncio.set_event_loop(_loop)
        logger.debug("Created new shared event loop for Celery tasks")

    return _loop


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine to completion on the shared loop."""
    return get_event_loop().run_until_complete(coro)


@worker_process_shutdown.connect
def cleanup_event_loop(**kwargs: Any) -> None:
    """Cancel pending tasks and close the shared loop on worker shutdown."""
    global _loop

    if _loop is None or _loop.is_closed():
        return
    try:
        pending = asyncio.all_tasks(_loop)
        for task in pending:
            task.cancel()
        if pending:
            _loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
        _loop.close()
        logger.info("Shared event loop closed")
    finally:
        _loop = None
