# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `HookManager` used by `App` to run before hooks.

Before hooks run after the app-level flags are resolved and before any
subcommand is resolved or any action runs. They are kept as an explicit,
ordered list: hooks run in registration order, and the first one that raises
stops the rest and the action. The exception is reported exactly like an
action error.

Usage:
    hooks = HookManager()
    hooks.register(load_settings)
    hooks.trigger(context)
"""
from __future__ import annotations

from typing import Any, Awaitable, Callable, Union

from flagtree.context import Context
from flagtree.exceptions import InvalidHookError
from flagtree.logger import logger
from flagtree.utils import get_callable_name, run_callable

Hook = Union[Callable[[Context], Any], Callable[[Context], Awaitable[Any]]]


class HookManager:
    """
    Ordered collection of before hooks.

    Both sync and async hooks are supported; async hooks are run to completion
    before the next hook starts.

    Methods:
        register(hook, first): Append a hook, or insert it at the front.
        clear(): Remove every hook.
        trigger(context): Run every hook in order, stopping at the first failure.
    """

    def __init__(self) -> None:
        self._hooks: list[Hook] = []

    def register(self, hook: Hook, first: bool = False) -> None:
        """
        Append a hook; it runs after every hook registered before it.

        With `first=True` the hook is inserted ahead of every registered hook.

        Raises:
            InvalidHookError: If the hook is not callable.
        """
        if not callable(hook):
            raise InvalidHookError(f"Hook must be callable, got {type(hook).__name__}")
        if first:
            self._hooks.insert(0, hook)
        else:
            self._hooks.append(hook)

    def clear(self) -> None:
        self._hooks = []

    def trigger(self, context: Context) -> None:
        """
        Run every hook in registration order.

        Raises:
            Exception: Whatever the first failing hook raised; later hooks do
                not run.
        """
        for hook in self._hooks:
            logger.debug(
                "[Hook:%s] running for '%s'.", get_callable_name(hook), context.command.name
            )
            try:
                run_callable(hook, context)
            except Exception as hook_error:
                logger.warning(
                    "[Hook:%s] raised an exception for '%s': %s",
                    get_callable_name(hook),
                    context.command.name,
                    hook_error,
                )
                raise

    def __len__(self) -> int:
        return len(self._hooks)

    def __str__(self) -> str:
        """Return a formatted string of registered hooks."""
        names = ", ".join(get_callable_name(hook) for hook in self._hooks)
        return f"<HookManager> before: {names or '—'}"
