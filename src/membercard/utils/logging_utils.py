"""
Logging helpers shared by the member card services.
"""

import logging
import traceback
from collections.abc import Callable
from functools import wraps
from time import perf_counter
from typing import Any
from typing import TypeVar

from typing_extensions import ParamSpec


T = TypeVar('T')
P = ParamSpec('P')

def log_execution(level: str = 'DEBUG') -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Log entry, duration and failure of the wrapped callable."""
    log_level = getattr(logging, level)
    
    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        logger = logging.getLogger(func.__module__)
        
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            logger.log(log_level, f"Calling {func.__qualname__}")
            started = perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"{func.__qualname__} failed after {perf_counter() - started:.3f}s: {e!s}",
                    exc_info=True
                )
                raise
            logger.log(log_level, f"{func.__qualname__} completed in {perf_counter() - started:.3f}s")
            return result
        
        return wrapper
    return decorator

class LoggerMixin:
    """Per-class logger that appends keyword context to messages.

    ``self.info("Saved", card_id="42")`` logs ``Saved | Context: card_id=42``.
    """
    
    def __init__(self) -> None:
        self._logger = logging.getLogger(self.__class__.__module__)
    
    @property
    def logger(self) -> logging.Logger:
        return self._logger
    
    @staticmethod
    def _format_message(msg: str, **context: Any) -> str:
        if not context:
            return msg
        context_str = " | ".join(f"{k}={v}" for k, v in context.items())
        return f"{msg} | Context: {context_str}"
    
    def debug(self, msg: str, **context: Any) -> None:
        self.logger.debug(self._format_message(msg, **context))
    
    def info(self, msg: str, **context: Any) -> None:
        self.logger.info(self._format_message(msg, **context))
    
    def warning(self, msg: str, **context: Any) -> None:
        self.logger.warning(self._format_message(msg, **context))
    
    def error(self, msg: str, exc_info: bool | BaseException | None = None, **context: Any) -> None:
        """Log an error, with the traceback attached when ``exc_info`` is given.

        ``exc_info=True`` uses the exception being handled, an exception
        instance is logged with its own traceback.
        """
        if isinstance(exc_info, BaseException):
            context['error'] = str(exc_info)
            context['traceback'] = "".join(traceback.format_tb(exc_info.__traceback__))
            exc_info = None
        self.logger.error(self._format_message(msg, **context), exc_info=bool(exc_info))
