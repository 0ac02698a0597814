# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""command.py

Defines the `Command` node of a Flagtree command tree.

A Command holds its own flags, an optional action and any number of named
subcommands. Command resolution walks the tree by handing each node's tokens
to a `FlagParser` built from that node's flags only; flags are never inherited
from an ancestor.

The tree is built once, before `App.run`, and is never mutated while running,
so the same tree can serve concurrent runs.
"""
from __future__ import annotations

from typing import Any, Callable, Iterable

from flagtree.context import Context
from flagtree.exceptions import (
    DeclarationError,
    DuplicateCommandError,
    DuplicateFlagError,
)
from flagtree.flag.flag import Flag
from flagtree.flag.flag_kind import FlagKind
from flagtree.flag.flag_parser import FlagParser

Action = Callable[[Context], Any]


class Command:
    """
    A node in the command tree.

    Attributes:
        name (str): Name matched against the token that selects this command.
        flags (list[Flag]): Flags declared on this command, in order.
        subcommands (dict[str, Command]): Child commands by name.
        action (Callable[[Context], Any] | None): Called when this command is
            the last one resolved. Raising an exception fails the invocation.
        usage (str): One-line description shown in help output.
        aliases (list[str]): Alternate names that also select this command.

    Methods:
        add_flag(...): Declare a new flag.
        add_subcommand(command): Attach a child command.
        get_subcommand(token): Find a child by name or alias.
        validate(): Check the whole subtree for declaration errors.
    """

    def __init__(
        self,
        name: str,
        flags: Iterable[Flag] | None = None,
        subcommands: Iterable[Command] | None = None,
        action: Action | None = None,
        usage: str = "",
        aliases: list[str] | None = None,
    ) -> None:
        self.name: str = name
        self.flags: list[Flag] = list(flags or [])
        self.subcommands: dict[str, Command] = {}
        self.action: Action | None = action
        self.usage: str = usage
        self.aliases: list[str] = aliases or []
        for command in subcommands or []:
            self.add_subcommand(command)

    def add_flag(
        self,
        name: str,
        kind: FlagKind | str = FlagKind.STRING,
        default: Any = None,
        required: bool = False,
        help: str = "",
    ) -> Flag:
        """
        Declare a flag on this command.

        Args:
            name (str): Flag name without the leading `--`.
            kind (FlagKind | str): Value shape of the flag.
            default (Any): Value used when absent. Defaults to the kind's zero value.
            required (bool): Whether resolution fails when the flag is absent.
            help (str): Help text.

        Returns:
            Flag: The registered flag.

        Raises:
            DeclarationError: If the flag is invalid or its name is taken.
        """
        flag = Flag(
            name=name,
            kind=kind,
            default=default,
            required=required,
            help=help,
        )
        flag.validate()
        if self.get_flag(name) is not None:
            raise DuplicateFlagError(
                f"Flag '{name}' is already declared on command '{self.name}'"
            )
        self.flags.append(flag)
        return flag

    def get_flag(self, name: str) -> Flag | None:
        return next((flag for flag in self.flags if flag.name == name), None)

    def add_subcommand(self, command: Command) -> Command:
        if not isinstance(command, Command):
            raise DeclarationError(
                f"Subcommand must be a Command, got {type(command).__name__}"
            )
        for name in (command.name, *command.aliases):
            if self.get_subcommand(name) is not None:
                raise DuplicateCommandError(
                    f"Subcommand '{name}' is already declared on command '{self.name}'"
                )
        self.subcommands[command.name] = command
        return command

    def get_subcommand(self, token: str) -> Command | None:
        command = self.subcommands.get(token)
        if command is not None:
            return command
        return next(
            (sub for sub in self.subcommands.values() if token in sub.aliases), None
        )

    def subcommand_names(self) -> set[str]:
        names = set(self.subcommands)
        for command in self.subcommands.values():
            names.update(command.aliases)
        return names

    def get_parser(self) -> FlagParser:
        return FlagParser(self.flags, subcommands=self.subcommand_names())

    def validate(self) -> None:
        """
        Check this command and every descendant for declaration errors.

        Raises:
            DeclarationError: On an unnamed subcommand, a non-callable action, an
                invalid flag, or a duplicate flag name within one command.
        """
        if self.action is not None and not callable(self.action):
            raise DeclarationError(f"Action for command '{self.name}' is not callable")
        seen: set[str] = set()
        for flag in self.flags:
            if not isinstance(flag, Flag):
                raise DeclarationError(
                    f"Command '{self.name}' has a flag of unsupported type "
                    f"{type(flag).__name__}"
                )
            flag.validate()
            if flag.name in seen:
                raise DuplicateFlagError(
                    f"Flag '{flag.name}' is declared more than once on command "
                    f"'{self.name}'"
                )
            seen.add(flag.name)
        for name, command in self.subcommands.items():
            if not name:
                raise DeclarationError(
                    f"Command '{self.name}' has a subcommand with an empty name"
                )
            command.validate()

    def __repr__(self) -> str:
        return (
            f"Command(name={self.name!r}, flags={[flag.name for flag in self.flags]!r}, "
            f"subcommands={list(self.subcommands)!r}, aliases={self.aliases!r})"
        )
