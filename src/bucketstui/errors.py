"""Error types and the error boundary used at the UI composition root."""

import asyncio
import inspect
from functools import wraps
from typing import Any, Callable

from loguru import logger

Reporter = Callable[[Exception], None]


class BucketsTUIError(Exception):
    """Base class for all application errors."""


class ConfigError(BucketsTUIError, ValueError):
    """Raised when the configuration file or CLI options are invalid."""


class BucketActionError(BucketsTUIError):
    """Raised when a create, update or delete against S3 fails."""

    def __init__(self, action: str, bucket_name: str, cause: Exception | None = None):
        self.action = action
        self.bucket_name = bucket_name
        self.cause = cause
        message = f"Failed to {action} bucket '{bucket_name}'"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class CreateInProgressError(BucketsTUIError):
    """Raised when a bucket is submitted while a previous create is pending."""


class UnknownSortTypeError(BucketsTUIError, KeyError):
    """Raised when no comparator is registered for a sort type."""


def error_boundary(report: Reporter) -> Callable:
    """Wrap a sync or async callable so unexpected errors are reported, not raised.

    The wrapped callable returns ``None`` when the underlying call fails.
    """

    def decorator(func: Callable) -> Callable:
        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                try:
                    return await func(*args, **kwargs)
                except asyncio.CancelledError:
                    raise
                except Exception as e:
                    logger.exception(f"Unhandled error in {func.__qualname__}")
                    report(e)
                    return None

            return async_wrapper

        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.exception(f"Unhandled error in {func.__qualname__}")
                report(e)
                return None

        return wrapper

    return decorator


class ErrorBoundary:
    """Proxy that applies :func:`error_boundary` to every public method of ``target``.

    Attribute reads that are not callables pass straight through, so the
    proxy can stand in for the wrapped object wherever it is consumed.
    """

    def __init__(self, target: Any, report: Reporter) -> None:
        self._target = target
        self._report = report
        self._guard = error_boundary(report)

    @property
    def target(self) -> Any:
        return self._target

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self._target, name)
        if name.startswith("_") or not callable(attr):
            return attr
        return self._guard(attr)
