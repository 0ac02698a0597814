import asyncio
import logging

import pytest
from pythonjsonlogger.json import JsonFormatter
from rich.logging import RichHandler

from flagtree.utils import get_callable_name, run_callable, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def test_run_callable_sync_and_async():
    async def double(value):
        await asyncio.sleep(0)
        return value * 2

    assert run_callable(lambda value: value + 1, 1) == 2
    assert run_callable(double, 4) == 8


def test_run_callable_rejects_non_callable():
    with pytest.raises(TypeError):
        run_callable("nope")


def test_get_callable_name():
    def action(ctx):
        pass

    class Hook:
        def __call__(self, ctx):
            pass

    assert get_callable_name(action) == "action"
    assert get_callable_name(Hook()) == "Hook"


def test_setup_logging_cli_mode():
    setup_logging(mode="cli", console_log_level=logging.INFO)

    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0], RichHandler)
    assert handlers[0].level == logging.INFO


def test_setup_logging_json_mode_from_env(monkeypatch):
    monkeypatch.setenv("FLAGTREE_LOG_MODE", "json")
    setup_logging()

    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0].formatter, JsonFormatter)


def test_setup_logging_file_handler(tmp_path):
    log_file = tmp_path / "flagtree.log"
    setup_logging(mode="cli", log_filename=str(log_file), json_log_to_file=True)

    file_handlers = [
        handler
        for handler in logging.getLogger().handlers
        if isinstance(handler, logging.FileHandler)
    ]
    assert len(file_handlers) == 1
    assert isinstance(file_handlers[0].formatter, JsonFormatter)

    logging.getLogger("flagtree").warning("written")
    file_handlers[0].flush()
    file_handlers[0].close()
    assert '"message": "written"' in log_file.read_text(encoding="UTF-8")


def test_setup_logging_invalid_mode():
    with pytest.raises(ValueError, match="Invalid log mode"):
        setup_logging(mode="xml")
