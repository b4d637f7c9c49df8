import logging, json, sys, time, os


def _resolve_level(name):
    if isinstance(name, int):
        return name
    if name.isdigit():
        return int(name)
    level = logging.getLevelName(name.upper())
    # getLevelName returns "Level X" for unknown names
    if not isinstance(level, int):
        raise ValueError(f"unknown log level: {name}")
    return level


def _level_from_env(default=logging.WARNING):
    name = os.getenv("SV_LOG_LEVEL")
    if not name:
        return default
    try:
        return _resolve_level(name)
    except ValueError:
        return default


def get_logger(name="sv", level=None, to_file=None):
    """Structured JSON logger shared by all sv components.

    Writes to stderr: stdout carries envelope output and must stay clean.
    """
    logger = logging.getLogger(name)
    if level is None:
        level = _level_from_env()
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(
            fmt=json.dumps({
                "ts": "%(asctime)s",
                "level": "%(levelname)s",
                "name": "%(name)s",
                "msg": "%(message)s"
            }),
            datefmt="%Y-%m-%dT%H:%M:%SZ",
        )
        formatter.converter = time.gmtime  # UTC timestamps
        handler.setFormatter(formatter)
        logger.addHandler(handler)

        if to_file:
            dir_path = os.path.dirname(to_file)
            if dir_path:
                os.makedirs(dir_path, exist_ok=True)
            file_handler = logging.FileHandler(to_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger


def set_level(level, prefix="sv"):
    """Re-level every logger created under `prefix` (e.g. from --log-level)."""
    level = _resolve_level(level)
    for name in list(logging.Logger.manager.loggerDict):
        if name == prefix or name.startswith(prefix + "."):
            logging.getLogger(name).setLevel(level)
