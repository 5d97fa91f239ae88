# listaprecios/logging_setup.py
import os, logging, sys

_LEVEL_MAP = {
    "ERROR":   logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO":    logging.INFO,
    "DEBUG":   logging.DEBUG,
}

# Se fijan con init_logging(); hasta entonces se leen del entorno.
_LOG_DIR: str | None = None
_LOG_LEVEL: str | None = None
_CONFIGURED: list[logging.Logger] = []


def _build_formatter() -> logging.Formatter:
    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    return logging.Formatter(fmt, datefmt)


def _current_level() -> int:
    name = _LOG_LEVEL or os.environ.get("LOG_LEVEL", "INFO")
    return _LEVEL_MAP.get(str(name).upper(), logging.INFO)


def _current_log_dir() -> str:
    if _LOG_DIR:
        return _LOG_DIR
    env_dir = os.environ.get("LOG_DIR", "").strip()
    if env_dir:
        return env_dir
    from .config import default_log_dir
    return default_log_dir()


def _get_log_file() -> str | None:
    log_dir = _current_log_dir()
    try:
        os.makedirs(log_dir, exist_ok=True)
    except OSError:
        return None
    return os.path.join(log_dir, "app.log")


def _attach_handlers(logger: logging.Logger) -> None:
    level = _current_level()
    logger.setLevel(level)

    # File handler
    path = _get_log_file()
    if path:
        fh = logging.FileHandler(path, encoding="utf-8")
        fh.setLevel(level); fh.setFormatter(_build_formatter())
        logger.addHandler(fh)
    # Console handler (stderr)
    ch = logging.StreamHandler(stream=sys.stderr)
    ch.setLevel(level); ch.setFormatter(_build_formatter())
    logger.addHandler(ch)

    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    _attach_handlers(logger)
    _CONFIGURED.append(logger)
    return logger


def init_logging(level: str = "INFO", log_dir: str | None = None) -> None:
    """
    Fija nivel y carpeta de logs. Los loggers ya creados con get_logger
    se reconfiguran para escribir en la nueva carpeta.
    """
    global _LOG_DIR, _LOG_LEVEL
    _LOG_LEVEL = str(level or "INFO").upper()
    if log_dir:
        _LOG_DIR = log_dir

    for logger in _CONFIGURED:
        for h in list(logger.handlers):
            logger.removeHandler(h)
            h.close()
        _attach_handlers(logger)
