# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `Flag` dataclass used by `Command` to describe one accepted flag or
positional parameter.

Flags should be created through the kind-specific helpers (`bool_flag`,
`string_flag`, `string_list`, `string_param`) or `Command.add_flag()`, which
fill in the default value for the kind when none is given.

Key Attributes:
- `name`: Name matched against `--name` tokens and used for `Context` lookups
- `kind`: `FlagKind` deciding how tokens are consumed
- `default`: Value used when the flag is absent
- `required`: Whether resolution fails when the flag is absent
- `help`: Help text shown by `--help`
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from flagtree.exceptions import DeclarationError
from flagtree.flag.flag_kind import FlagKind


def default_for_kind(kind: FlagKind) -> Any:
    """Return the zero value for a flag kind."""
    if kind is FlagKind.BOOL:
        return False
    if kind in (FlagKind.STRING, FlagKind.POSITIONAL):
        return ""
    if kind is FlagKind.STRING_LIST:
        return []
    raise DeclarationError(f"Unsupported flag kind: {kind!r}")


@dataclass
class Flag:
    """
    Represents a declared flag or positional parameter.

    Attributes:
        name (str): Name of the flag without the leading `--`.
        kind (FlagKind): Value shape of the flag.
        default (Any): Value used when the flag is absent. Defaults to the zero
            value of the kind.
        required (bool): True if resolution fails when the flag is absent.
        help (str): Help text for the flag.
    """

    name: str
    kind: FlagKind = FlagKind.STRING
    default: Any = None
    required: bool = False
    help: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.kind, FlagKind):
            try:
                self.kind = FlagKind(self.kind)
            except ValueError as error:
                raise DeclarationError(str(error)) from error
        if self.default is None:
            self.default = default_for_kind(self.kind)

    def validate(self) -> None:
        """Check the declaration is usable, raising `DeclarationError` if not."""
        if not isinstance(self.name, str) or not self.name:
            raise DeclarationError("Flag name must be a non-empty string")
        if self.name.startswith("-"):
            raise DeclarationError(
                f"Flag name '{self.name}' must not include the leading dashes"
            )
        if self.kind is FlagKind.BOOL:
            if not isinstance(self.default, bool):
                raise DeclarationError(
                    f"Default for bool flag '{self.name}' must be a bool, "
                    f"got {type(self.default).__name__}"
                )
        elif self.kind in (FlagKind.STRING, FlagKind.POSITIONAL):
            if not isinstance(self.default, str):
                raise DeclarationError(
                    f"Default for {self.kind} flag '{self.name}' must be a str, "
                    f"got {type(self.default).__name__}"
                )
        elif self.kind is FlagKind.STRING_LIST:
            if not isinstance(self.default, (list, tuple)) or not all(
                isinstance(item, str) for item in self.default
            ):
                raise DeclarationError(
                    f"Default for string_list flag '{self.name}' must be a list of str"
                )
        else:
            raise DeclarationError(f"Unsupported flag kind: {self.kind!r}")
        if self.required and self.kind is FlagKind.BOOL:
            raise DeclarationError(f"Bool flag '{self.name}' cannot be required")

    @property
    def positional(self) -> bool:
        return self.kind is FlagKind.POSITIONAL

    def get_metavar(self) -> str:
        """Get the value placeholder shown in help output."""
        if self.kind is FlagKind.BOOL:
            return ""
        if self.kind is FlagKind.STRING_LIST:
            return f"{self.name.upper()} ..."
        return self.name.upper()

    def get_display_name(self) -> str:
        """Get the flag as it is typed on the command line."""
        if self.positional:
            return f"<{self.name}>"
        metavar = self.get_metavar()
        return f"--{self.name} {metavar}" if metavar else f"--{self.name}"


def bool_flag(name: str, default: bool = False, help: str = "") -> Flag:
    return Flag(name=name, kind=FlagKind.BOOL, default=default, help=help)


def string_flag(
    name: str, default: str = "", required: bool = False, help: str = ""
) -> Flag:
    return Flag(
        name=name, kind=FlagKind.STRING, default=default, required=required, help=help
    )


def string_list(
    name: str,
    default: list[str] | None = None,
    required: bool = False,
    help: str = "",
) -> Flag:
    return Flag(
        name=name,
        kind=FlagKind.STRING_LIST,
        default=list(default or []),
        required=required,
        help=help,
    )


def string_param(
    name: str, default: str = "", required: bool = False, help: str = ""
) -> Flag:
    return Flag(
        name=name,
        kind=FlagKind.POSITIONAL,
        default=default,
        required=required,
        help=help,
    )
