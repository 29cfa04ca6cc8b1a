# tests/test_logging_setup.py

from __future__ import annotations

import logging

import pytest

from modest_todo.logging_setup import _ConsoleNoiseFilter


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


@pytest.mark.parametrize(
    ("name", "level", "passes"),
    [
        ("modest_todo", logging.DEBUG, True),
        ("modest_todo.tasks.task_file", logging.INFO, True),
        ("modest_todo_other", logging.INFO, False),
        ("py.warnings", logging.WARNING, False),
        ("py.warnings", logging.ERROR, True),
        ("urllib3", logging.WARNING, False),
        ("urllib3", logging.CRITICAL, True),
    ],
)
def test_console_filter_keeps_app_logs_and_only_foreign_errors(name: str, level: int, passes: bool) -> None:
    assert _ConsoleNoiseFilter().filter(_record(name, level)) is passes
