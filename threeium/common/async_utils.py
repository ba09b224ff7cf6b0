from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, TypeVar

from .logging import log_event

T = TypeVar("T")


async def guarded_call(
    action: Callable[[], Awaitable[T] | T],
    *,
    logger: logging.Logger,
    event: str,
    message: str,
    wrap_error: Callable[[Exception], Exception],
    level: str = "warning",
    **fields: Any,
) -> T:
    """Run ``action`` and re-raise any failure as ``wrap_error(error)``.

    Cancellation is re-raised untouched; it is never logged, wrapped or retried.
    """
    try:
        result = action()
        if inspect.isawaitable(result):
            return await result
        return result
    except asyncio.CancelledError:
        raise
    except Exception as error:
        log_event(
            logger,
            level=level,
            event=event,
            message=message,
            error=str(error),
            error_type=type(error).__name__,
            **fields,
        )
        raise wrap_error(error) from error
