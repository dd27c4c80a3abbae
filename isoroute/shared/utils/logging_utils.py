"""Logging utilities for IsoRoute."""
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Dict, List, MutableMapping, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from ..configuration.settings import LoggingSettings

# Handlers installed by setup_logging carry one of these names so a second
# call replaces them without touching handlers owned by the host program.
CONSOLE_HANDLER_NAME = "isoroute.console"
FILE_HANDLER_NAME = "isoroute.file"


def _level(name: str) -> int:
    return getattr(logging, name.upper())


def _console_handler(formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(CONSOLE_HANDLER_NAME)
    handler.setFormatter(formatter)
    return handler


def _file_handler(settings: "LoggingSettings",
                  formatter: logging.Formatter) -> Optional[logging.Handler]:
    log_path = Path(settings.log_file).expanduser()
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            filename=str(log_path),
            maxBytes=int(settings.max_file_size_mb * 1024 * 1024),
            backupCount=int(settings.backup_count),
            encoding='utf-8'
        )
    except OSError as e:
        logging.getLogger(__name__).error(f"File logging disabled, cannot open {log_path}: {e}")
        return None

    handler.set_name(FILE_HANDLER_NAME)
    handler.setFormatter(formatter)
    return handler


def setup_logging(settings: "LoggingSettings") -> List[logging.Handler]:
    """Install IsoRoute's console and rotating file handlers on the root logger.

    Handlers from an earlier call are closed and replaced. Per-component
    levels from settings.component_levels are applied to the named loggers.

    Args:
        settings: Logging settings configuration

    Returns:
        The handlers that were installed
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if handler.get_name() in (CONSOLE_HANDLER_NAME, FILE_HANDLER_NAME):
            root_logger.removeHandler(handler)
            handler.close()

    root_logger.setLevel(_level(settings.level))
    formatter = logging.Formatter(fmt=settings.format_string, datefmt=settings.date_format)

    installed = []
    if settings.console_output:
        installed.append(_console_handler(formatter))
    if settings.file_output:
        file_handler = _file_handler(settings, formatter)
        if file_handler is not None:
            installed.append(file_handler)

    for handler in installed:
        root_logger.addHandler(handler)

    for component, component_level in settings.component_levels.items():
        logging.getLogger(component).setLevel(_level(component_level))

    root_logger.debug(
        f"Logging at {settings.level.upper()} to "
        f"{', '.join(h.get_name() for h in installed) or 'no isoroute handlers'}"
    )
    return installed


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that prefixes each message with key=value context."""

    def __init__(self, logger: logging.Logger, context: Dict[str, Any]):
        super().__init__(logger, context)
        self.context = context

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        if not self.context:
            return msg, kwargs
        prefix = " ".join(f"{key}={value}" for key, value in self.context.items())
        return f"[{prefix}] {msg}", kwargs


def get_context_logger(name: str, **context) -> ContextLogger:
    """Get a logger that tags messages with context, e.g. the entity being moved."""
    return ContextLogger(logging.getLogger(name), context)
