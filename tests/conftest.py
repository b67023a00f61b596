"""Shared pytest fixtures."""

import logging

import pytest


@pytest.fixture(autouse=True)
def restore_package_log_level():
    """Undo package logger level changes made by configuration objects."""
    package_logger = logging.getLogger("markup_core")
    previous = package_logger.level
    yield
    package_logger.setLevel(previous)
