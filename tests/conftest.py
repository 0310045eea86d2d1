"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from the real log, config and data
directories.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from tododesk.adapters.sqlite import SqliteCategoryRepository, SqliteTaskRepository, Store
from tododesk.services.config_service import ConfigService, get_config_service
from tododesk.services.task_service import TaskService


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_log_dir(tmp_path):
    """Keep the rotating log file out of the real user log directory."""
    import tododesk.utils.logger as logger_module

    logger_module._logger = None
    with patch.object(logger_module, "user_log_dir", return_value=str(tmp_path / "logs")):
        yield
    if logger_module._logger is not None:
        for handler in list(logger_module._logger.handlers):
            handler.close()
            logger_module._logger.removeHandler(handler)
    logger_module._logger = None


@pytest.fixture(autouse=True)
def isolated_user_dirs(tmp_path):
    """Default config and data directories point inside tmp_path."""
    import tododesk.services.config_service as config_module

    get_config_service.cache_clear()
    with patch.object(
        config_module, "user_config_dir", return_value=str(tmp_path / "user-config")
    ), patch.object(config_module, "user_data_dir", return_value=str(tmp_path / "user-data")):
        yield
    get_config_service.cache_clear()


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory."""
    get_config_service.cache_clear()
    service = ConfigService(config_dir=tmp_path / "config", data_dir=tmp_path / "data")
    yield service
    get_config_service.cache_clear()


@pytest.fixture()
def cli_config(tmp_config):
    """Point every command module at the temporary ConfigService."""
    with patch("tododesk.commands.utils.get_config_service", return_value=tmp_config), patch(
        "tododesk.commands.config.get_config_service", return_value=tmp_config
    ), patch("tododesk.main.get_config_service", return_value=tmp_config):
        yield tmp_config


# ---------------------------------------------------------------------------
# Database fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def store():
    """In-memory store, seeded with the default categories on first use."""
    with Store(":memory:") as s:
        yield s


@pytest.fixture()
def file_store(tmp_path):
    """Store backed by a temporary database file."""
    with Store(tmp_path / "data" / "tasks.db") as s:
        yield s


@pytest.fixture()
def category_repo(store):
    return SqliteCategoryRepository(store)


@pytest.fixture()
def task_repo(store):
    return SqliteTaskRepository(store)


@pytest.fixture()
def service(store):
    return TaskService.from_store(store)
