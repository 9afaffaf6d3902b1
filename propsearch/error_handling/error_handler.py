"""
Error handler for calls to external collaborators.

Bounds every network round trip with a timeout and maps timeouts and
transport errors onto the failure type of the calling pipeline stage.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional
from datetime import datetime


# Configure logging
logger = logging.getLogger(__name__)


@dataclass
class TimeoutConfig:
    """
    Timeouts applied to external collaborator calls.

    Attributes:
        language_model_seconds: Bound for one language model round trip
        geocoding_seconds: Bound for one geocoding round trip
        signing_seconds: Bound for minting one signed URL
    """
    language_model_seconds: float = 10.0
    geocoding_seconds: float = 10.0
    signing_seconds: float = 5.0


class ErrorHandler:
    """
    Runs collaborator calls under a timeout with diagnostic logging.

    No retries: a failed call is reported once and the caller decides whether
    the failure is recoverable.
    """

    def __init__(self, default_timeout_seconds: float = 10.0):
        """
        Initialize error handler.

        Args:
            default_timeout_seconds: Timeout used when a call does not pass one
        """
        self.default_timeout_seconds = default_timeout_seconds

    async def run_with_timeout(
        self,
        operation: Callable[..., Awaitable[Any]],
        *args,
        timeout_seconds: Optional[float] = None,
        failure: Optional[Callable[[Exception], Exception]] = None,
        passthrough: tuple = (),
        **kwargs
    ) -> Any:
        """
        Await an operation, bounded by a timeout.

        Args:
            operation: Async callable to execute
            *args: Positional arguments for the operation
            timeout_seconds: Bound for the call (default: handler default)
            failure: Factory turning the caught exception into the exception
                to raise instead; when None the original exception propagates
            passthrough: Exception types re-raised untouched
            **kwargs: Keyword arguments for the operation

        Returns:
            Result from the operation

        Raises:
            Exception: The mapped failure, or the original exception
        """
        timeout = timeout_seconds if timeout_seconds is not None else self.default_timeout_seconds
        name = getattr(operation, "__name__", repr(operation))

        try:
            return await asyncio.wait_for(operation(*args, **kwargs), timeout=timeout)
        except passthrough:
            raise
        except Exception as e:
            self._log_error(name, timeout, e, args)
            if failure is None:
                raise
            raise failure(e) from e

    def _log_error(
        self,
        operation_name: str,
        timeout_seconds: float,
        error: Exception,
        args: tuple
    ) -> None:
        """
        Log error with timestamp, context, and diagnostic data.

        Args:
            operation_name: Name of the operation that failed
            timeout_seconds: Timeout the call ran under
            error: The exception that occurred
            args: Positional arguments passed to the operation
        """
        is_timeout = isinstance(error, asyncio.TimeoutError)
        context = {
            'timestamp': datetime.now().isoformat(),
            'operation': operation_name,
            'timeout_seconds': timeout_seconds,
            'error_type': 'Timeout' if is_timeout else type(error).__name__,
            'error_message': str(error),
            'args': str(args) if args else 'None',
        }

        if is_timeout:
            logger.warning(f"Operation timed out: {operation_name} after {timeout_seconds}s")
        else:
            logger.warning(
                f"Operation failed: {operation_name} | "
                f"Error: {type(error).__name__}: {str(error)}"
            )
        logger.debug(f"Full error context: {context}")
