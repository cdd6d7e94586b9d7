"""
Tests for logger setup.
"""

import logging
from datetime import datetime

from scoutboard.config import Config
from scoutboard.utils.logger import log_file_path, setup_logger


def _reset(logger):
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_console_only_without_log_dir(monkeypatch, tmp_path):
    monkeypatch.setattr(Config, 'LOG_DIR', None)
    monkeypatch.chdir(tmp_path)

    logger = setup_logger('scoutboard.tests.console_only')
    try:
        assert [type(handler) for handler in logger.handlers] == [logging.StreamHandler]
        assert not (tmp_path / 'logs').exists()
    finally:
        _reset(logger)


def test_log_dir_adds_daily_file(monkeypatch, tmp_path):
    log_dir = tmp_path / 'nested' / 'logs'
    monkeypatch.setattr(Config, 'LOG_DIR', str(log_dir))

    logger = setup_logger('scoutboard.tests.with_file')
    try:
        logger.info("leaderboard rebuilt")
        for handler in logger.handlers:
            handler.flush()
        log_file = log_file_path(str(log_dir))
        assert log_file.exists()
        assert "leaderboard rebuilt" in log_file.read_text(encoding='utf-8')
    finally:
        _reset(logger)


def test_setup_is_idempotent(monkeypatch):
    monkeypatch.setattr(Config, 'LOG_DIR', None)
    logger = setup_logger('scoutboard.tests.idempotent')
    try:
        assert setup_logger('scoutboard.tests.idempotent') is logger
        assert len(logger.handlers) == 1
    finally:
        _reset(logger)


def test_log_file_path_uses_date():
    path = log_file_path('/var/log/scoutboard', datetime(2024, 6, 11))
    assert path.name == 'scoutboard_20240611.log'
