"""
Synchronous wrapper functions for amedasmap.

For scripts and notebooks that cannot use async/await. Under the hood these
run the async fetchers in a fresh event loop.

Usage:
    # Instead of this async code:
    async with AmedasClient() as client:
        result = await fetch_stations(client=client)

    # Use this sync code:
    from amedasmap.sync import fetch_stations_sync
    result = fetch_stations_sync()
"""

import asyncio
import inspect
from datetime import datetime
from typing import Any, Awaitable, Callable, Optional, TypeVar, Union, get_args, get_origin

from .models import FetchResult

R = TypeVar("R")


class AsyncSyncBridge:
    """Handles conversion of async functions to synchronous versions.

    This class runs async code synchronously and handles client instantiation
    for functions that accept an optional ``client``.
    """

    @staticmethod
    def run_async(
        async_fn: Callable[..., Awaitable[R]],
        args: tuple = (),
        kwargs: Optional[dict] = None,
        client_class: Optional[type] = None,
    ) -> R:
        """Run an async function synchronously.

        Args:
            async_fn: Async function to run
            args: Positional arguments for the function
            kwargs: Keyword arguments for the function
            client_class: Optional client class to instantiate if not provided

        Returns:
            Result of running the async function

        Raises:
            RuntimeError: If called from within an existing event loop
        """
        if kwargs is None:
            kwargs = {}

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            pass
        else:
            raise RuntimeError(
                "Cannot use sync version from within an existing asyncio event loop. "
                "Use the async version instead."
            )

        async def _call_and_cleanup() -> R:
            # The client is created inside the loop that will use it
            temp_client = None
            call_kwargs = dict(kwargs)
            if client_class:
                sig = inspect.signature(async_fn)
                if "client" in sig.parameters and "client" not in call_kwargs:
                    temp_client = client_class()
                    call_kwargs["client"] = temp_client
            try:
                return await async_fn(*args, **call_kwargs)
            finally:
                if temp_client:
                    await temp_client.close()

        return asyncio.run(_call_and_cleanup())

    @staticmethod
    def extract_client_class(annotation: Any) -> Optional[type]:
        """Extract client class from type annotation.

        Handles Optional, Union, and direct type annotations.
        """
        if annotation is None or annotation is inspect.Parameter.empty:
            return None

        origin = get_origin(annotation)
        if origin is Union:
            args = get_args(annotation)
            non_none_args = [arg for arg in args if arg is not type(None)]
            if non_none_args:
                arg = non_none_args[0]
                if isinstance(arg, type):
                    return arg
        elif isinstance(annotation, type):
            return annotation

        return None


def fetch_latest_time_sync(client: Optional[Any] = None) -> Optional[datetime]:
    """Synchronous version of fetch_latest_time."""
    from .client import AmedasClient
    from .fetch import fetch_latest_time

    return AsyncSyncBridge.run_async(
        fetch_latest_time,
        kwargs={"client": client} if client else {},
        client_class=AmedasClient,
    )


def fetch_stations_sync(
    as_of: Optional[datetime] = None,
    client: Optional[Any] = None,
    raise_on_error: bool = False,
) -> FetchResult:
    """Synchronous version of fetch_stations.

    Args:
        as_of: Snapshot timestamp; the latest one is used when omitted
        client: Optional AmedasClient; a temporary one is opened otherwise
        raise_on_error: Raise the first source failure instead of degrading

    Returns:
        FetchResult with the joined station records
    """
    from .client import AmedasClient
    from .fetch import fetch_stations

    kwargs: dict = {"as_of": as_of, "raise_on_error": raise_on_error}
    if client:
        kwargs["client"] = client
    return AsyncSyncBridge.run_async(
        fetch_stations, kwargs=kwargs, client_class=AmedasClient
    )
