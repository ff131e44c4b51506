from __future__ import annotations

"""Logging setup shared by the CLI and the Streamlit app.

Records go to the console and to `<log_dir>/run.log`. The file is appended
to, since the UI and CLI may write to it in turn.
"""

import logging
from pathlib import Path


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_FILENAME = "run.log"

# Libraries that flood DEBUG output with font and image details
NOISY_LOGGERS = ("matplotlib", "PIL")


def configure_logging(log_dir: Path, debug: bool = False) -> Path:
    """Configure root logging and return the log file path.

    Calling it again (a Streamlit rerun, several CLI invocations in one
    process) only adjusts the level; handlers are never duplicated.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILENAME
    level = logging.DEBUG if debug else logging.INFO

    root = logging.getLogger()
    root.setLevel(level)
    has_file = any(
        isinstance(h, logging.FileHandler) and Path(h.baseFilename) == log_file.absolute()
        for h in root.handlers
    )
    if not has_file:
        formatter = logging.Formatter(LOG_FORMAT)
        handlers = [logging.FileHandler(log_file, mode="a", encoding="utf-8")]
        if not any(type(h) is logging.StreamHandler for h in root.handlers):
            handlers.append(logging.StreamHandler())
        for handler in handlers:
            handler.setFormatter(formatter)
            root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return log_file
