"""
Logging setup for the party planner site.

:func:`setup_logging` is called by ``create_app`` with
``settings.log_level`` and ``settings.log_file`` (``LOG_LEVEL`` and
``LOG_FILE`` in the environment).  Records go to the console and, when a
log file is configured, to that file as well.  Actions log rejected
forms at INFO and persistence failures with their traceback, services
log every write, so INFO is the useful level in production.

Configuration happens once per process: if the root logger already has
handlers (a test runner, a second ``create_app`` call) nothing changes.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that flood DEBUG output with connection details.
QUIET_LOGGERS = ("pymongo", "urllib3")


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Attach the console (and optional file) handler to the root logger.

    ``level`` is a level name such as ``"DEBUG"``; unknown names fall
    back to INFO.  The directory of ``logfile`` is created if missing.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric_level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.INFO))
