"""Logging setup for the command line entry point."""
import logging
from pathlib import Path


def setup_logger(log_dir=None, level=logging.INFO) -> logging.Logger:
    """
    Configure and return the `ironcoder` logger.

    Library modules log through child loggers (`ironcoder.auth.store`, ...)
    and never add handlers themselves; calling this more than once is safe.
    """
    logger = logging.getLogger("ironcoder")
    logger.setLevel(level)

    # Prevent adding multiple handlers if called more than once
    if not logger.handlers:
        if log_dir is not None:
            log_dir = Path(log_dir)
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_dir / "ironcoder.log", encoding="utf-8")
            file_handler.setFormatter(logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            ))
            logger.addHandler(file_handler)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(console_handler)

    return logger
