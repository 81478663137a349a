"""Utility functions for timing store calls"""
import time
import functools
from logging import getLogger

logger = getLogger(__name__)

# Timing decorator
def time_function(func_name: str = None):
    """Decorator to log execution time of a blocking function"""
    def decorator(func):
        name = func_name or func.__name__

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.warning("%s failed after %.2fms: %s", name, (time.perf_counter() - start_time) * 1000, e)
                raise
            logger.debug("%s completed in %.2fms", name, (time.perf_counter() - start_time) * 1000)
            return result
        return wrapper
    return decorator
