# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Execution context for Flagtree actions and hooks.

A `Context` is the read-only, per-invocation view handed to before hooks,
actions and error handlers. It wraps the `ResolvedValues` of one command level
and the stream triple configured on the `App`.

Lookups are strict: asking for a flag the command never declared, or reading a
flag through the accessor of another kind, raises `FlagLookupError`. That is
always a mismatch between action code and flag declarations, never a user
input problem.

Enclosing levels stay reachable through `parent` and `root`, which is how a
subcommand reads app-level flags without inheriting them.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, TextIO

from flagtree.exceptions import FlagLookupError
from flagtree.flag.flag import Flag
from flagtree.flag.flag_kind import FlagKind
from flagtree.flag.parser_types import ResolvedValues
from flagtree.flag.utils import format_value

if TYPE_CHECKING:
    from flagtree.command import Command


class Context:
    """
    Read-only view over the values resolved for one command level.

    Attributes:
        command (Command): The command these values were resolved for.
        values (ResolvedValues): The resolved values.
        parent (Context | None): Context of the enclosing command, if any.
        stdin (TextIO): Input stream configured on the app.
        stdout (TextIO): Output stream configured on the app.
        stderr (TextIO): Error stream configured on the app.

    Methods:
        string(name): Value of a STRING or POSITIONAL flag.
        bool(name): Value of a BOOL flag.
        slice(name): Value of a STRING_LIST flag.
        is_set(name): Whether the flag appeared on the command line.
        render_value(name): Display form of any flag's value.
        printf(fmt, *args): %-format and write to stdout.
        errorf(fmt, *args): %-format and write to stderr.
    """

    def __init__(
        self,
        command: Command,
        values: ResolvedValues,
        stdin: TextIO,
        stdout: TextIO,
        stderr: TextIO,
        parent: Context | None = None,
    ) -> None:
        self._command = command
        self._values = values
        self._flags: dict[str, Flag] = {flag.name: flag for flag in command.flags}
        self._parent = parent
        self.stdin = stdin
        self.stdout = stdout
        self.stderr = stderr

    @property
    def command(self) -> Command:
        return self._command

    @property
    def values(self) -> ResolvedValues:
        return self._values

    @property
    def parent(self) -> Context | None:
        return self._parent

    @property
    def root(self) -> Context:
        context = self
        while context.parent is not None:
            context = context.parent
        return context

    @property
    def command_path(self) -> list[str]:
        """Names of the commands from the root down to this one."""
        path = []
        context: Context | None = self
        while context is not None:
            path.append(context.command.name)
            context = context.parent
        return list(reversed(path))

    @property
    def args(self) -> tuple[str, ...]:
        """Every positional token given to this command, in order."""
        return self._values.positionals

    def _lookup(self, name: str, *kinds: FlagKind) -> Flag:
        flag = self._flags.get(name)
        if flag is None:
            raise FlagLookupError(
                f"Flag '{name}' is not declared on command '{self._command.name}'"
            )
        if kinds and flag.kind not in kinds:
            raise FlagLookupError(
                f"Flag '{name}' on command '{self._command.name}' is {flag.kind}, "
                f"not {' or '.join(str(kind) for kind in kinds)}"
            )
        return flag

    def string(self, name: str) -> str:
        flag = self._lookup(name, FlagKind.STRING, FlagKind.POSITIONAL)
        return self._values.string_values.get(name, flag.default)

    def bool(self, name: str) -> bool:
        flag = self._lookup(name, FlagKind.BOOL)
        return self._values.bool_values.get(name, flag.default)

    def slice(self, name: str) -> list[str]:
        flag = self._lookup(name, FlagKind.STRING_LIST)
        return list(self._values.list_values.get(name, flag.default))

    def is_set(self, name: str) -> bool:
        self._lookup(name)
        return name in self._values.seen

    def render_value(self, name: str) -> str:
        """Render the value of any declared flag for display."""
        flag = self._lookup(name)
        value: Any
        if flag.kind is FlagKind.BOOL:
            value = self.bool(name)
        elif flag.kind is FlagKind.STRING_LIST:
            value = self.slice(name)
        else:
            value = self.string(name)
        return format_value(flag.kind, value)

    def printf(self, fmt: str, *args: Any) -> None:
        self.stdout.write(fmt % args if args else fmt)

    def errorf(self, fmt: str, *args: Any) -> None:
        self.stderr.write(fmt % args if args else fmt)

    def __repr__(self) -> str:
        return (
            f"Context(command={self._command.name!r}, "
            f"path={' '.join(self.command_path)!r}, args={list(self.args)!r})"
        )
