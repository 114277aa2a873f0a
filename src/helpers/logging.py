"""Logger module."""

import logging
import sys

import colorlog

loggers: dict[str, logging.Logger] = {}

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

default_level = "INFO"
default_color = False


def parse_log_level(log_level: str) -> int:
    """Translate a level name into a logging level.

    Args:
        log_level: Level name, case-insensitive. WARN is accepted for WARNING.

    Returns:
        int: The logging module level.

    Raises:
        ValueError: If the level name is unknown.
    """
    level = LOG_LEVELS.get(log_level.upper())
    if level is None:
        err_msg = f"Invalid log level: {log_level}"
        raise ValueError(err_msg)
    return level


def configure_logging(log_level: str = "INFO", *, log_color: bool = False) -> None:
    """Set the defaults for new loggers and re-level the existing ones.

    Args:
        log_level: The logging level name.
        log_color: Whether new loggers use coloured output.

    Raises:
        ValueError: If the level name is unknown.
    """
    global default_level, default_color

    level = parse_log_level(log_level)
    default_level = log_level.upper()
    default_color = log_color

    for logger in loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)


def get_logger(
    name: str,
    log_handler: str = "stdout",
    log_level: str | None = None,
    log_color: bool | None = None,
) -> logging.Logger:
    """Get logger.

    Args:
        name: The name of the logger.
        log_handler: The log handler type ('stdout').
        log_level: The logging level ('DEBUG', 'INFO', 'WARN', 'WARNING', 'ERROR',
            'CRITICAL'). Defaults to the level set by configure_logging.
        log_color: Whether to use colored output. Defaults to the value set by
            configure_logging.

    Returns:
        logging.Logger: Configured logger instance.

    Raises:
        ValueError: If invalid handler or log level is provided.
    """
    if name in loggers:
        return loggers[name]

    if log_level is None:
        log_level = default_level
    if log_color is None:
        log_color = default_color

    logger = logging.getLogger(name) if not log_color else colorlog.getLogger(name)

    if log_handler == "stdout" and not log_color:
        handler = logging.StreamHandler(sys.stdout)
    elif log_handler == "stdout" and log_color:
        handler = colorlog.StreamHandler(sys.stdout)
    else:
        err_msg = f"Invalid handler: {log_handler}"
        raise ValueError(err_msg)

    level = parse_log_level(log_level)

    logger.setLevel(level)
    handler.setLevel(level)

    if not log_color:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    else:
        formatter = colorlog.ColoredFormatter(
            "%(log_color)s %(asctime)s - %(name)s - %(levelname)s - %(message)s",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "red,bg_white",
            },
        )

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    loggers[name] = logger
    return logger
