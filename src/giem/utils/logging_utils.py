# giem/utils/logging_utils.py

import logging
import sys
from giem.utils.config import LOG_FILE, LOG_LEVEL

log_formatter = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s] - %(message)s'
)


def setup_logger(level: str | None = None, log_file: str | None = None) -> logging.Logger:
    """Configures the application logger once; Streamlit reruns reuse the handlers."""
    logger = logging.getLogger("giem")
    if not logger.handlers:
        logger.setLevel(level or LOG_LEVEL)

        stdout_handler = logging.StreamHandler(sys.stdout)
        stdout_handler.setFormatter(log_formatter)
        logger.addHandler(stdout_handler)

        log_file = log_file or LOG_FILE
        if log_file:
            file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
            file_handler.setFormatter(log_formatter)
            logger.addHandler(file_handler)
    return logger


# Module-level logger shared by the package; handlers are attached by setup_logger()
log = logging.getLogger("giem")
