import logging
import sys
from pathlib import Path

from app.core.config import LOG_FILE, LOG_LEVEL

_NOISY_LOGGERS = ("sqlalchemy.engine", "uvicorn.access", "multipart")


def setup_logging(level: str = LOG_LEVEL, log_file: str = LOG_FILE) -> None:
    """
    Configure the root logger once, early at startup.

    - console handler on stderr at the requested level
    - optional file handler that keeps DEBUG records as well
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates on reload.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(path), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.captureWarnings(True)
