"""
Performance monitoring utilities.
"""

import time
from functools import wraps
from typing import Callable
import structlog

logger = structlog.get_logger()


def log_execution_time(operation_name: str = None):
    """
    Decorator to log execution time of engine operations.

    Usage:
        @log_execution_time("analyze")
        def analyze(...):
            ...
    """
    def decorator(func: Callable):
        name = operation_name or func.__name__

        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.info(
                    "operation_complete",
                    operation=name,
                    duration_ms=round(duration_ms, 2),
                    status="success"
                )
                return result
            except Exception as e:
                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.error(
                    "operation_failed",
                    operation=name,
                    duration_ms=round(duration_ms, 2),
                    status="error",
                    error=str(e)
                )
                raise

        return wrapper

    return decorator
