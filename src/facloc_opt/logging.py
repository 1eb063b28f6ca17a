import logging
from pathlib import Path


def setup_logger(name: str = "facloc_opt", log_dir: str | None = None, log_file: str = "run.log",
                 console_level: str = "INFO", file_level: str = "DEBUG"):
    """
    Set up the facloc_opt logger.

    Logs go to the console only, unless log_dir is given, in which case a
    file handler for log_dir/log_file (at file_level) is added as well. Calling it again for
    the same name keeps the existing handlers.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)  # Capture all levels, handlers will filter

    # Avoid duplicate handlers
    if not logger.handlers:
        # Console handler
        ch = logging.StreamHandler()
        ch.setLevel(getattr(logging, console_level.upper(), logging.INFO))
        ch_fmt = logging.Formatter("[%(levelname)s] %(message)s")
        ch.setFormatter(ch_fmt)
        logger.addHandler(ch)

        # File handler
        if log_dir:
            Path(log_dir).mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(Path(log_dir) / log_file, encoding="utf-8")
            fh.setLevel(getattr(logging, file_level.upper(), logging.DEBUG))
            fh_fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
            fh.setFormatter(fh_fmt)
            logger.addHandler(fh)

    return logger
