"""Error handling utilities."""
import logging
from functools import wraps
from typing import Any, Callable

import requests

from ..exceptions import UpstreamError


def upstream_error_handler(service: str) -> Callable:
    """Decorator turning transport failures of an external API into ``UpstreamError``."""
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            try:
                return func(*args, **kwargs)
            except requests.RequestException as e:
                logging.error(f"{service} API error in {func.__name__}: {str(e)}")
                raise UpstreamError(f"Could not contact {service}") from e
        return wrapper
    return decorator
