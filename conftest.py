from __future__ import absolute_import

import logging
import os.path

import pytest


@pytest.fixture
def project_root():
    return os.path.dirname(os.path.abspath(__file__))


@pytest.fixture(autouse=True)
def no_sentry_dsn(monkeypatch):
    monkeypatch.delenv('SENTRY_DSN', raising=False)


@pytest.fixture(autouse=True)
def quiet_skua_loggers():
    # keep expected delivery failures out of the test output
    loggers = [logging.getLogger(name) for name in ('skua', 'skua.errors')]
    levels = [logger.level for logger in loggers]
    for logger in loggers:
        logger.setLevel(logging.CRITICAL)
    yield
    for logger, level in zip(loggers, levels):
        logger.setLevel(level)
