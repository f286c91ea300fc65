import inspect
import logging
from typing import Optional

from colorama import Style

from .colors import get_color, init_colorama

LOGGER_NAMES = ("progress", "verbose")


class ColorFormatter(logging.Formatter):
    """Custom formatter that colorizes log messages based on log_type.

    Applies colorama color codes to messages and caller info based on the
    log_type attribute (info, warning, error, success, etc.).
    """

    def format(self, record: logging.LogRecord) -> str:
        """Adds color codes to log messages based on log_type."""
        log_type = getattr(record, "log_type", "default")
        message_color = get_color(log_type)
        caller_color = get_color("caller")
        message = record.getMessage()
        caller_info = getattr(record, "caller_info", "")
        return f"{message_color}{message}{Style.RESET_ALL} {caller_color}{caller_info}{Style.RESET_ALL}"


class CustomFormatter(logging.Formatter):
    """Formatter that safely handles optional caller_info attribute."""

    def format(self, record: logging.LogRecord) -> str:
        """Formats the record, safely handling the 'caller_info' attribute."""
        base_message = super().format(record)
        caller_info = getattr(record, "caller_info", "")
        if caller_info:
            return f"{base_message} {caller_info}"
        return base_message


def setup_loggers(log_file: Optional[str] = None, level: int = logging.INFO) -> tuple[logging.Logger, logging.Logger]:
    """Sets up the 'progress' and 'verbose' loggers.

    Both loggers get a coloured console handler. If ``log_file`` is given,
    both also write to that file. Existing handlers are replaced, so calling
    this twice does not duplicate output.

    Args:
        log_file: Optional path of a log file shared by both loggers.
        level: Logging level for both loggers.

    Returns:
        Tuple of (progress_logger, verbose_logger).
    """
    init_colorama()

    console_formatter = ColorFormatter()
    file_handler = None
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(CustomFormatter("%(asctime)s - %(levelname)s - %(message)s"))

    loggers = []
    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()

        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(console_formatter)
        logger.addHandler(stream_handler)
        if file_handler is not None:
            logger.addHandler(file_handler)
        logger.propagate = False
        loggers.append(logger)

    progress_logger, verbose_logger = loggers
    return progress_logger, verbose_logger


def shutdown_loggers():
    """Safely shuts down all logging handlers to release file locks."""
    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)


class LoggingMixin:
    """A mixin class that provides a standardized logging interface.

    Provides a `_log` method that directs messages to the appropriate logger
    ('progress' or 'verbose'). Classes may assign their own loggers; the
    module-level named loggers are used otherwise.
    """

    progress_logger: logging.Logger = logging.getLogger("progress")
    verbose_logger: logging.Logger = logging.getLogger("verbose")

    def _log(self, message: str, level: str = "verbose", log_type: str = "default"):
        """Logs a message with a specified level and color-coding type.

        Args:
            message: The message to be logged.
            level: The logging level ('progress' or 'verbose').
            log_type: A string key that maps to a color for terminal output.
        """
        extra = {"log_type": log_type}
        log_origin = ""

        current_frame = inspect.currentframe()
        if current_frame:
            caller_frame = current_frame.f_back
            if caller_frame:
                caller_method_name = caller_frame.f_code.co_name
                if "self" in caller_frame.f_locals:
                    caller_class_name = caller_frame.f_locals["self"].__class__.__name__
                    log_origin = f"{caller_class_name}.{caller_method_name}"
                else:
                    log_origin = caller_method_name
        extra["caller_info"] = f"[{log_origin}]"

        if level == "progress":
            self.progress_logger.info(message, extra=extra)
        else:  # verbose
            self.verbose_logger.info(message, extra=extra)
