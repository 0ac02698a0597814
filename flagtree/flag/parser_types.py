# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
State and result models for the flag tokenizer.

Contents:
- `FlagState`: Tracks whether a declared `Flag` has been seen while parsing.
- `ResolvedValues`: The immutable, name-indexed values for one command level.
- `ParseResult`: What one tokenizer pass hands back to command resolution.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from flagtree.flag.flag import Flag


@dataclass
class FlagState:
    """Tracks a flag and whether it appeared on the command line."""

    flag: Flag
    seen: bool = False

    def set_seen(self) -> None:
        self.seen = True


@dataclass(frozen=True)
class ResolvedValues:
    """
    Values resolved for one command level.

    Populated once per invocation and read-only afterwards; the mappings are
    `MappingProxyType` views and list values are tuples.

    Attributes:
        string_values (Mapping[str, str]): STRING and POSITIONAL flag values.
        bool_values (Mapping[str, bool]): BOOL flag values.
        list_values (Mapping[str, tuple[str, ...]]): STRING_LIST flag values.
        positionals (tuple[str, ...]): Every positional token, in encounter order.
        seen (frozenset[str]): Names of flags that appeared on the command line.
    """

    string_values: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )
    bool_values: Mapping[str, bool] = field(default_factory=lambda: MappingProxyType({}))
    list_values: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    positionals: tuple[str, ...] = ()
    seen: frozenset[str] = frozenset()

    @classmethod
    def build(
        cls,
        string_values: dict[str, str],
        bool_values: dict[str, bool],
        list_values: dict[str, list[str]],
        positionals: list[str],
        seen: set[str],
    ) -> ResolvedValues:
        return cls(
            string_values=MappingProxyType(dict(string_values)),
            bool_values=MappingProxyType(dict(bool_values)),
            list_values=MappingProxyType(
                {name: tuple(values) for name, values in list_values.items()}
            ),
            positionals=tuple(positionals),
            seen=frozenset(seen),
        )


@dataclass(frozen=True)
class ParseResult:
    """Outcome of tokenizing one command level.

    `subcommand` is the token that selected a child command, and `remaining`
    the tokens left for that child. Both are empty when this level is final.
    """

    values: ResolvedValues
    subcommand: str | None = None
    remaining: tuple[str, ...] = ()
