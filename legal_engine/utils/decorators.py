"""
Decorators for engine components.

Provides reusable decorators for common patterns like error translation.
"""

import logging
from functools import wraps
from typing import Callable, TypeVar

from legal_engine.services.errors import LegalEngineError, MalformedInputError

logger = logging.getLogger(__name__)

T = TypeVar('T')


def translate_errors(stage: str) -> Callable:
    """
    Decorator for consistent error handling inside a processing stage.

    Wraps a function to:
    - Re-raise LegalEngineError unchanged
    - Convert UnicodeError and ValueError to MalformedInputError
    - Log the conversion with the function name

    Args:
        stage: Stage name recorded in the error details

    Example:
        @translate_errors("normalization")
        def normalize(text):
            ...
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except LegalEngineError:
                raise
            except (UnicodeError, ValueError) as e:
                logger.warning(f"Malformed input in {func.__name__}: {e}")
                raise MalformedInputError(
                    f"Failed during {stage}: {e}",
                    {"stage": stage},
                ) from e
        return wrapper
    return decorator
