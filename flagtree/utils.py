# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""utils.py"""
from __future__ import annotations

import asyncio
import inspect
import logging
import os
from typing import Any, Callable

import pythonjsonlogger.json
from rich.logging import RichHandler


def is_coroutine(function: Callable[..., Any]) -> bool:
    return inspect.iscoroutinefunction(function)


def run_callable(function: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Call `function`, driving it to completion with `asyncio.run` if it is async."""
    if not callable(function):
        raise TypeError(f"{function} is not callable")
    if is_coroutine(function):
        return asyncio.run(function(*args, **kwargs))
    return function(*args, **kwargs)


def get_callable_name(function: Callable[..., Any]) -> str:
    return getattr(function, "__name__", type(function).__name__)


def running_in_container() -> bool:
    try:
        with open("/proc/1/cgroup", "r", encoding="UTF-8") as f:
            content = f.read()
            return (
                "docker" in content
                or "kubepods" in content
                or "containerd" in content
                or "podman" in content
            )
    except OSError:
        return False


def setup_logging(
    mode: str | None = None,
    log_filename: str | None = None,
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
    console_log_level: int = logging.WARNING,
):
    """
    Configure logging for a Flagtree application with support for both
    CLI-friendly and structured JSON output.

    Flagtree never calls this itself; applications call it from `main` (or a
    before hook) once they know how verbose to be.

    Args:
        mode (str | None):
            Logging output mode. Can be:
                - "cli": human-readable Rich console logs (default outside containers)
                - "json": machine-readable JSON logs (default inside containers)
            If not provided, it will use the `FLAGTREE_LOG_MODE` environment
            variable or fall back based on container detection.
        log_filename (str | None):
            Path to a log file. No file handler is installed when None.
        json_log_to_file (bool):
            Whether to format file logs as JSON instead of plain text.
        file_log_level (int):
            Logging level for file output. Defaults to `logging.DEBUG`.
        console_log_level (int):
            Logging level for console output. Defaults to `logging.WARNING`.

    Raises:
        ValueError: If an invalid logging `mode` is passed.

    Environment Variables:
        FLAGTREE_LOG_MODE: Can override `mode` to enforce "cli" or "json" logging.
    """
    if not mode:
        mode = os.getenv("FLAGTREE_LOG_MODE") or (
            "json" if running_in_container() else "cli"
        )

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    if root.hasHandlers():
        root.handlers.clear()

    if mode == "cli":
        console_handler: RichHandler | logging.StreamHandler = RichHandler(
            rich_tracebacks=True,
            show_time=True,
            show_level=True,
            show_path=False,
            markup=False,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
    elif mode == "json":
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            pythonjsonlogger.json.JsonFormatter(
                "%(asctime)s %(name)s %(levelname)s %(message)s"
            )
        )
    else:
        raise ValueError(f"Invalid log mode: {mode}")

    console_handler.setLevel(console_log_level)
    root.addHandler(console_handler)

    if log_filename:
        file_handler = logging.FileHandler(log_filename, "a", "UTF-8")
        file_handler.setLevel(file_log_level)
        if json_log_to_file:
            file_handler.setFormatter(
                pythonjsonlogger.json.JsonFormatter(
                    "%(asctime)s %(name)s %(levelname)s %(message)s"
                )
            )
        else:
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s [%(name)s] [%(levelname)s] %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
        root.addHandler(file_handler)

    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logger = logging.getLogger("flagtree")
    logger.propagate = True
    logger.debug("Logging initialized in '%s' mode.", mode)
