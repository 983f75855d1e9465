"""
Execution strategies for the side effects around a camera mutation.

- run_best_effort: advisory work (stream stop, cache clear, notifications).
  Failures are logged as warnings and never reach the caller.
- run_required: work the mutation depends on (archival before permanent
  deletion). Failures are logged and raised as the given error type so the
  mutation is aborted.
"""
# Standard library imports
import logging
from typing import Any, Awaitable, Callable, Type

# Local application imports
from ....domain.exceptions import CameraArchiveError

logger = logging.getLogger(__name__)


async def run_best_effort(description: str, operation: Callable[[], Awaitable[Any]]) -> bool:
    """
    Run an advisory side effect

    Args:
        description: Human-readable step name used in logs
        operation: Zero-argument coroutine factory

    Returns:
        True if the step completed, False if it failed (already logged)
    """
    try:
        await operation()
        return True
    except Exception as e:
        logger.warning(f"Non-critical error during {description}: {e}", exc_info=True)
        return False


async def run_required(
    description: str,
    operation: Callable[[], Awaitable[Any]],
    error_type: Type[Exception] = CameraArchiveError,
) -> Any:
    """
    Run a side effect the surrounding mutation cannot proceed without

    Returns:
        Whatever the operation returns

    Raises:
        error_type: Wrapping the original failure
    """
    try:
        return await operation()
    except Exception as e:
        logger.error(f"Required step '{description}' failed: {e}", exc_info=True)
        raise error_type(f"{description} failed: {e}") from e
