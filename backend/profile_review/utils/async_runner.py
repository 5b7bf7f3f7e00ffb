"""
Deadline runner for Flask sync routes.
Runs a blocking callable in a shared thread pool and stops waiting for it
once the request deadline has passed.
"""
from __future__ import annotations

import concurrent.futures
from typing import Any, Callable, Optional


_thread_pool = concurrent.futures.ThreadPoolExecutor(
    max_workers=10,
    thread_name_prefix="request_runner"
)


def run_with_timeout(fn: Callable[..., Any], *args: Any, timeout: Optional[float] = None, **kwargs: Any) -> Any:
    """
    Run fn(*args, **kwargs) in the thread pool and wait at most timeout seconds.

    The worker is not interrupted on timeout; it finishes in the background
    and its result is discarded.

    Args:
        fn: The callable to run
        timeout: Optional timeout in seconds. If None, no timeout is applied.

    Returns:
        The result of fn

    Raises:
        TimeoutError: If timeout is exceeded
        Exception: Any exception raised by fn
    """
    future = _thread_pool.submit(fn, *args, **kwargs)
    try:
        return future.result(timeout=timeout)
    except concurrent.futures.TimeoutError as e:
        future.cancel()
        raise TimeoutError(f"Operation exceeded the {timeout}s deadline") from e
