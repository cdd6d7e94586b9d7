"""
Logging setup for the scoutboard client.

Console output always goes to stdout. A daily log file is added only when
Config.LOG_DIR is set, so importing a service never touches the filesystem.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from scoutboard.config import Config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def log_file_path(log_dir: str, today: Optional[datetime] = None) -> Path:
    """Daily log file inside log_dir."""
    today = today or datetime.now()
    return Path(log_dir) / f'scoutboard_{today.strftime("%Y%m%d")}.log'


def setup_logger(name: str) -> logging.Logger:
    """Setup a logger with consistent formatting"""

    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    log_level = logging.DEBUG if Config.DEBUG else logging.INFO
    logger.setLevel(log_level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if Config.LOG_DIR:
        path = log_file_path(Config.LOG_DIR)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
