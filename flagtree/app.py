# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Main class for constructing and running Flagtree command-line applications.

This module defines the `App` class, which owns the root of a command tree
and drives one invocation from a raw argument vector to an exit code.

One call to `App.run(argv)` goes through these stages:

- Init: the command tree is validated (duplicate flag names, bad defaults).
- Before hooks: the root command's tokens are resolved, then every registered
  before hook runs with a context built from those app-level flags.
- Resolving: the remaining tokens walk down the subcommand tree, one
  `FlagParser` pass per command level.
- Executing: the action of the last command resolved is called.
- Reporting: any exception raised along the way becomes an exit code, through
  the custom error handler if one is set or the default policy otherwise.

The default policy writes a non-empty error message followed by one newline to
stderr and exits 1; an error with an empty message still exits 1 but writes
nothing.

Example:
    app = App(name="deploy")
    app.add_flag("verbose", kind=FlagKind.BOOL)
    app.add_subcommand(Command("push", action=push))
    sys.exit(app.run(sys.argv))
"""
from __future__ import annotations

import os
import sys
from typing import Any, Callable, Iterable, Sequence, TextIO

from flagtree.command import Action, Command
from flagtree.context import Context
from flagtree.exceptions import DeclarationError, FlagtreeError, MissingActionError
from flagtree.flag.flag import Flag
from flagtree.flag.flag_kind import FlagKind
from flagtree.flag.parser_types import ResolvedValues
from flagtree.help import render_help
from flagtree.hook_manager import Hook, HookManager
from flagtree.logger import logger
from flagtree.signals import HelpSignal
from flagtree.utils import get_callable_name, run_callable

ErrorHandler = Callable[[Context, Exception], int]
Option = Callable[["App"], None]

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


class App:
    """
    Entry point of a Flagtree application.

    The app's own flags and action are those of its root `Command`; app-level
    flags are not inherited by subcommands, which reach them through
    `ctx.root`.

    Args:
        name (str): Program name. Defaults to the basename of `sys.argv[0]`.
        usage (str): One-line description shown in help output.
        flags (Iterable[Flag] | None): Flags of the root command.
        action (Callable[[Context], Any] | None): Action run when no
            subcommand is selected.
        subcommands (Iterable[Command] | None): Children of the root command.
        before (Hook | list[Hook] | None): Before hooks, run in order.
        error_handler (Callable[[Context, Exception], int] | None): Maps
            an error to an exit code and owns any diagnostic output.
        stdin (TextIO | None): Input stream. Defaults to `sys.stdin`.
        stdout (TextIO | None): Output stream. Defaults to `sys.stdout`.
        stderr (TextIO | None): Error stream. Defaults to `sys.stderr`.
        options (Iterable[Callable[[App], None]] | None): Callables applied
            to the app after construction, in order.

    Methods:
        run(argv): Run one invocation and return its exit code.
        main(argv): Run and exit the process with the exit code.
        add_flag(...): Declare a flag on the root command.
        add_subcommand(command): Attach a subcommand to the root command.
        before(hook): Register a before hook.
        apply(*options): Apply configuration options.
    """

    def __init__(
        self,
        name: str = "",
        usage: str = "",
        flags: Iterable[Flag] | None = None,
        action: Action | None = None,
        subcommands: Iterable[Command] | None = None,
        before: Hook | list[Hook] | None = None,
        error_handler: ErrorHandler | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        options: Iterable[Option] | None = None,
    ) -> None:
        self.root: Command = Command(
            name=name or os.path.basename(sys.argv[0]) or "app",
            flags=flags,
            subcommands=subcommands,
            action=action,
            usage=usage,
        )
        self.hooks: HookManager = HookManager()
        if callable(before):
            self.hooks.register(before)
        else:
            for hook in before or []:
                self.hooks.register(hook)
        self.error_handler: ErrorHandler | None = error_handler
        self.stdin: TextIO = stdin or sys.stdin
        self.stdout: TextIO = stdout or sys.stdout
        self.stderr: TextIO = stderr or sys.stderr
        self.apply(*(options or []))

    @property
    def name(self) -> str:
        return self.root.name

    @name.setter
    def name(self, name: str) -> None:
        self.root.name = name

    @property
    def action(self) -> Action | None:
        return self.root.action

    @action.setter
    def action(self, action: Action | None) -> None:
        self.root.action = action

    @property
    def flags(self) -> list[Flag]:
        return self.root.flags

    @property
    def subcommands(self) -> dict[str, Command]:
        return self.root.subcommands

    def add_flag(
        self,
        name: str,
        kind: FlagKind | str = FlagKind.STRING,
        default: Any = None,
        required: bool = False,
        help: str = "",
    ) -> Flag:
        return self.root.add_flag(
            name, kind=kind, default=default, required=required, help=help
        )

    def add_subcommand(self, command: Command) -> Command:
        return self.root.add_subcommand(command)

    def before(self, hook: Hook, first: bool = False) -> Hook:
        """
        Register a before hook. Returns the hook so it can be used as a decorator.

        With `first=True` the hook runs ahead of every hook already registered.
        """
        self.hooks.register(hook, first=first)
        return hook

    def apply(self, *options: Option) -> App:
        for option in options:
            option(self)
        return self

    def _create_context(
        self,
        command: Command,
        values: ResolvedValues,
        parent: Context | None = None,
    ) -> Context:
        return Context(
            command,
            values,
            stdin=self.stdin,
            stdout=self.stdout,
            stderr=self.stderr,
            parent=parent,
        )

    def run(self, argv: Sequence[str]) -> int:
        """
        Run one invocation.

        Args:
            argv (Sequence[str]): Argument vector; element 0 is the program name
                and is not parsed.

        Returns:
            int: 0 on success, 1 on parse errors and default-handled errors,
            the custom error handler's value otherwise, 130 on interrupt.
        """
        args = list(argv[1:])
        program = os.path.basename(argv[0]) if argv else self.name
        command = self.root
        path = [program]
        context: Context | None = None
        try:
            self.root.validate()

            result = command.get_parser().parse(args)
            context = self._create_context(command, result.values)
            self.hooks.trigger(context)

            while result.subcommand is not None:
                subcommand = command.get_subcommand(result.subcommand)
                if subcommand is None:
                    raise DeclarationError(
                        f"Command '{command.name}' has no subcommand '{result.subcommand}'"
                    )
                command = subcommand
                path.append(result.subcommand)
                logger.debug("Resolving subcommand '%s'.", " ".join(path))
                result = command.get_parser().parse(result.remaining)
                context = self._create_context(command, result.values, parent=context)

            if command.action is None:
                raise MissingActionError(
                    f"Command '{' '.join(path)}' has no action to run"
                )
            logger.info(
                "Running '%s' (%s).", " ".join(path), get_callable_name(command.action)
            )
            run_callable(command.action, context)
        except HelpSignal:
            render_help(command, path, self.stdout)
            return EXIT_SUCCESS
        except KeyboardInterrupt:
            logger.info("[KeyboardInterrupt] <- Exiting '%s'.", " ".join(path))
            return EXIT_INTERRUPTED
        except Exception as error:
            if context is None:
                context = self._create_context(command, ResolvedValues())
            return self._report(context, error)
        logger.debug("'%s' completed.", " ".join(path))
        return EXIT_SUCCESS

    def _report(self, context: Context, error: Exception) -> int:
        if isinstance(error, FlagtreeError):
            logger.debug("'%s' failed: %r", context.command.name, error)
        else:
            logger.debug(
                "'%s' raised %s.",
                context.command.name,
                type(error).__name__,
                exc_info=error,
            )

        if self.error_handler is not None:
            try:
                return int(self.error_handler(context, error))
            except Exception as handler_error:
                logger.error(
                    "Error handler %s failed: %s",
                    get_callable_name(self.error_handler),
                    handler_error,
                )
                return EXIT_FAILURE

        message = str(error)
        if message:
            self.stderr.write(f"{message}\n")
        return EXIT_FAILURE

    def main(self, argv: Sequence[str] | None = None) -> None:
        """Run with `sys.argv` (or `argv`) and exit the process with the exit code."""
        sys.exit(self.run(sys.argv if argv is None else argv))

    def __repr__(self) -> str:
        return (
            f"App(name={self.name!r}, subcommands={list(self.subcommands)!r}, "
            f"hooks={len(self.hooks)})"
        )
