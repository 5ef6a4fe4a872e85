from __future__ import annotations
import logging, logging.handlers, sys
import structlog
from .errors import ConfigError
from .paths import get_dirs

def setup_logging(level: str = "WARNING"):
    level = level.upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"unknown log level: {level}")
    dirs = get_dirs()
    logfile = dirs["logs"] / "tagtranslit.log"

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    rot = logging.handlers.RotatingFileHandler(
        logfile, maxBytes=5_000_000, backupCount=3, encoding="utf-8"
    )
    # stdout carries the per-file report; diagnostics go to stderr
    stream = logging.StreamHandler(sys.stderr)
    fmt = logging.Formatter("%(message)s")
    rot.setFormatter(fmt)
    stream.setFormatter(fmt)
    root.addHandler(rot)
    root.addHandler(stream)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level)),
    )
    return structlog.get_logger()
