from functools import wraps
from typing import Callable, TypeVar, ParamSpec


P = ParamSpec('P')
R = TypeVar('R')


def retry_on(
        exception_type: type[Exception] | tuple[type[Exception], ...],
        attempts: int = 2,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Decorator factory that retries a call when it raises the given exception type(s).

    Retry strategy:
    - A fixed number of attempts, retried immediately (no backoff)
    - The exception from the final attempt is re-raised
    - Any other exception propagates on the first occurrence

    Args:
        exception_type: The exception class (or tuple of classes) that triggers a retry
        attempts: Total number of attempts, including the first

    Returns:
        The decorator
    """
    if attempts < 1:
        raise ValueError(f"attempts must be at least 1, got {attempts}")

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            attempt = 0

            while True:
                attempt += 1
                try:
                    return func(*args, **kwargs)
                except exception_type as e:
                    if attempt >= attempts:
                        raise
                    print(f"    ⚠️  {func.__name__} failed on attempt {attempt} of {attempts}: {e} - retrying")

        return wrapper

    return decorator
