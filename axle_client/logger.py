import logging, json, sys, time, os

from axle_client.constants import DEFAULT_LOG_LEVEL

_NAMES = set()


def resolve_level(level):
    """Level name for `level`, falling back to the default for unknown names."""
    if isinstance(level, int):
        return level
    name = str(level or DEFAULT_LOG_LEVEL).strip().upper()
    return name if isinstance(logging.getLevelName(name), int) else DEFAULT_LOG_LEVEL


def get_logger(name="Axle", level=None, to_file=None):
    """Unified structured logger for all axle_client components."""
    logger = logging.getLogger(name)
    logger.setLevel(resolve_level(level or os.getenv("AXLE_LOG_LEVEL", DEFAULT_LOG_LEVEL)))
    _NAMES.add(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
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
            os.makedirs(os.path.dirname(to_file) or ".", exist_ok=True)
            file_handler = logging.FileHandler(to_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger


def set_level(level):
    """Apply `level` to every logger handed out by get_logger."""
    resolved = resolve_level(level)
    for name in _NAMES:
        logging.getLogger(name).setLevel(resolved)
