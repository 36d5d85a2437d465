import logging
import sys

_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


class FlushFileHandler(logging.FileHandler):
    """File handler that flushes after each record."""

    def emit(self, record: logging.LogRecord) -> None:
        super().emit(record)
        self.flush()


class Log:
    """Centralized logging with structured format."""

    _logger: logging.Logger = logging.getLogger("omniextract")

    @classmethod
    def configure(cls, log_level: str, log_file: str | None = None) -> None:
        """Configure the logger with a stdout handler and an optional log file.

        Calling it again replaces the handlers installed by the previous call.
        """
        cls._logger.setLevel(log_level.upper())
        for handler in list(cls._logger.handlers):
            cls._logger.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(_FORMAT)
        handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
        if log_file:
            handlers.append(FlushFileHandler(log_file, encoding="utf-8"))
        for handler in handlers:
            handler.setFormatter(formatter)
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        """Log an info message."""
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        """Log an error message."""
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        """Log a warning message."""
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        """Log a debug message."""
        cls._logger.debug(message, extra=kwargs)
