import logging

_LOGGERS: dict[str, logging.Logger] = {}
_CONSOLE: logging.Handler | None = None

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_logger(name: str) -> logging.Logger:
    """
    Create or retrieve a named logger.

    Parameters:
    - name: logger namespace (e.g. movienight.ballot, movienight.session)

    Library loggers carry no handlers or level of their own; records
    propagate to whatever the host application configured.
    """
    if name in _LOGGERS:
        return _LOGGERS[name]

    logger = logging.getLogger(name)
    _LOGGERS[name] = logger

    return logger


def configure_logging(level: int = logging.INFO, *, namespace: str = "movienight") -> logging.Logger:
    """
    Send the package's log records to the console.

    Meant for scripts; calling it again only updates the level.
    """
    global _CONSOLE

    logger = logging.getLogger(namespace)
    logger.setLevel(level)

    if _CONSOLE is None:
        _CONSOLE = logging.StreamHandler()
        _CONSOLE.setFormatter(logging.Formatter(LOG_FORMAT))
    if _CONSOLE not in logger.handlers:
        logger.addHandler(_CONSOLE)

    return logger
