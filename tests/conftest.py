"""
Pytest configuration for Brand Kit tests.

PR-0: Basic setup for Django test environment.
"""

import os

import django
import pytest


def pytest_configure():
    """Configure Django settings before tests run."""
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "brandkit.settings_test")
    django.setup()


@pytest.fixture(autouse=True)
def reset_config_cache():
    """Engine tunables are cached; drop the cache around every test."""
    from brandkit.kit.config import clear_config_cache

    clear_config_cache()
    yield
    clear_config_cache()
