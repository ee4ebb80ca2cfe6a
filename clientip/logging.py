"""
Centralized logging configuration for clientip.

Logging is disabled by default (NullHandler), as a library should be.
Users can turn it on via:
1. Standard Python logging (configure_logging)
2. Custom handler callback (set_error_handler)

Examples:
    # See which header each request was resolved from
    from clientip import configure_logging
    import logging
    configure_logging(logging.DEBUG)

    # Route validator/predicate failures to loguru
    from clientip import set_error_handler
    from loguru import logger

    def loguru_handler(name, exc, ctx):
        logger.opt(exception=exc).error(f"[{name}] Error", **ctx)

    set_error_handler(loguru_handler)
"""

import logging
from typing import Optional, Callable, Any

# Root logger for the library - silent by default
_root_logger = logging.getLogger('clientip')
_root_logger.addHandler(logging.NullHandler())
_root_logger.propagate = False

# Custom error handler (optional)
_error_handler: Optional[Callable[[str, Exception, dict], None]] = None

# Set by configure_logging; handlers attached by others (e.g. test capture) do not count
_configured = False


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance for a module.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def set_error_handler(handler: Optional[Callable[[str, Exception, dict], None]]) -> None:
    """
    Set custom error handler for failures raised by user-supplied callbacks.

    Header validators and trust predicates are user code; when one raises,
    resolution carries on and the exception is reported here.

    Args:
        handler: Callable(logger_name, exception, context_dict) or None to disable
    """
    global _error_handler
    _error_handler = handler


def configure_logging(
    level: int = logging.INFO,
    handler: Optional[logging.Handler] = None,
    format_string: Optional[str] = None
) -> None:
    """
    Configure standard Python logging for clientip.

    Removes NullHandler and sets up proper logging output.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        handler: Custom handler or None for StreamHandler
        format_string: Custom format string or None for default

    Examples:
        import logging
        from clientip import configure_logging
        configure_logging(logging.DEBUG)

        configure_logging(
            logging.DEBUG,
            format_string='%(asctime)s [%(name)s] %(levelname)s: %(message)s'
        )
    """
    global _configured
    _root_logger.handlers.clear()

    if handler is None:
        handler = logging.StreamHandler()

    if format_string is None:
        format_string = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    handler.setFormatter(logging.Formatter(format_string))

    _root_logger.addHandler(handler)
    _root_logger.setLevel(level)
    _root_logger.propagate = False
    _configured = True


def disable_logging() -> None:
    """
    Disable all clientip logging.

    Resets to default state (NullHandler only).
    """
    global _error_handler, _configured
    _error_handler = None
    _configured = False
    _root_logger.handlers.clear()
    _root_logger.addHandler(logging.NullHandler())
    _root_logger.propagate = False


def log_error(logger_name: str, exception: Exception, **context: Any) -> None:
    """
    Internal error logging with custom handler support.

    Falls back to standard logging if no custom handler is set.

    Args:
        logger_name: Name of the logger/module
        exception: Exception that occurred
        **context: Additional context information

    Examples:
        log_error(
            'clientip.resolver',
            ValueError("validator failed"),
            header='x-custom-ip'
        )
    """
    if _error_handler:
        try:
            _error_handler(logger_name, exception, context)
        except Exception:
            # If custom handler fails, fall back to standard logging
            _root_logger.debug(
                f"[{logger_name}] Error handler failed. Original error: {exception.__class__.__name__}: {exception}",
                exc_info=False
            )
    else:
        _root_logger.debug(
            f"[{logger_name}] {exception.__class__.__name__}: {exception}",
            extra=context,
            exc_info=False
        )


def is_logging_enabled() -> bool:
    """
    Check if logging was enabled through configure_logging or set_error_handler.

    Returns:
        True if logging is configured, False in the default silent state
    """
    return _error_handler is not None or _configured
