"""
Internal utility functions for amedasmap.
"""

import inspect
from typing import Any, Awaitable, Callable, TypeVar

R = TypeVar("R")


def add_sync_version(
    async_fn: Callable[..., Awaitable[R]],
) -> Callable[..., Awaitable[R]]:
    """Attach a blocking ``.sync`` twin that opens its own client if needed."""
    from .sync import AsyncSyncBridge

    def sync_wrapper(*args: Any, **kwargs: Any) -> R:
        client_class = None
        if "client" not in kwargs:
            param = inspect.signature(async_fn).parameters.get("client")
            if param is not None:
                client_class = AsyncSyncBridge.extract_client_class(param.annotation)

        return AsyncSyncBridge.run_async(
            async_fn, args=args, kwargs=kwargs, client_class=client_class
        )

    async_fn.sync = sync_wrapper  # type: ignore
    return async_fn
