# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `FlagParser`, the tokenizer that resolves one command
level's tokens against that command's declared flags.

Tokens are read left to right:
- `--name` / `--name=value` tokens are matched against declared flags. The
  token splits at the first `=` whose left side is a declared name, and an
  inline-valued token ending in `=` is a missing value.
- The lone token `--` ends flag parsing; everything after it is positional.
- Any other token is positional and kept verbatim. The first positional token
  that names a subcommand stops the pass and hands the remaining tokens to
  that subcommand.

Once the tokens for the level are consumed, positional tokens are bound to
POSITIONAL flags one each in declaration order, and whatever is left is
appended to the first STRING_LIST flag, which acts as the variadic sink.

Example Usage:
    parser = FlagParser([string_flag("name"), bool_flag("bool", default=True)])
    result = parser.parse(["--name=foo=bar", "--bool=false"])

    # result.values.string_values == {"name": "foo=bar"}
    # result.values.bool_values == {"bool": False}
"""
from __future__ import annotations

from copy import deepcopy
from typing import Container, Sequence

from flagtree.exceptions import (
    DuplicateFlagError,
    MalformedBoolError,
    MissingFlagValueError,
    MissingRequiredFlagError,
    UnrecognizedFlagError,
)
from flagtree.flag.flag import Flag
from flagtree.flag.flag_kind import FlagKind
from flagtree.flag.parser_types import FlagState, ParseResult, ResolvedValues
from flagtree.flag.utils import parse_bool, split_flag_token
from flagtree.logger import logger
from flagtree.signals import HelpSignal

END_OF_FLAGS = "--"
HELP_FLAG = "help"


class FlagParser:
    """
    Tokenizer for a single command level.

    Flags are resolved strictly against the flags given here; nothing is
    inherited from enclosing commands.

    Args:
        flags (Sequence[Flag]): Flags declared on the command.
        subcommands (Container[str]): Names (and aliases) of child commands.
        help_enabled (bool): Whether an undeclared `--help` raises `HelpSignal`.
    """

    def __init__(
        self,
        flags: Sequence[Flag],
        subcommands: Container[str] = (),
        help_enabled: bool = True,
    ) -> None:
        self._flags: list[Flag] = list(flags)
        self._keyword: dict[str, Flag] = {}
        self._positional: list[Flag] = []
        for flag in self._flags:
            if flag.positional:
                self._positional.append(flag)
            elif flag.name in self._keyword:
                raise DuplicateFlagError(f"Duplicate flag name: {flag.name}")
            else:
                self._keyword[flag.name] = flag
        self._sink: Flag | None = next(
            (flag for flag in self._flags if flag.kind is FlagKind.STRING_LIST), None
        )
        self._subcommands = subcommands
        self._help_enabled = help_enabled and HELP_FLAG not in self._keyword

    def parse(self, tokens: Sequence[str]) -> ParseResult:
        """
        Resolve `tokens` against the declared flags.

        Args:
            tokens (Sequence[str]): Tokens left after the program name and the
                command path consumed so far.

        Returns:
            ParseResult: The resolved values for this level and, if a
            subcommand token was found, its name and the tokens after it.

        Raises:
            CommandArgumentError: On an unrecognized flag, a missing or
                malformed value, or a missing required flag.
            HelpSignal: On an undeclared `--help`.
        """
        tokens = list(tokens)
        states = {flag.name: FlagState(flag) for flag in self._flags}
        strings: dict[str, str] = {}
        bools: dict[str, bool] = {}
        lists: dict[str, list[str]] = {}
        positionals: list[str] = []
        subcommand: str | None = None
        remaining: list[str] = []

        end_of_flags = False
        i = 0
        while i < len(tokens):
            token = tokens[i]
            if not end_of_flags and token == END_OF_FLAGS:
                end_of_flags = True
                i += 1
            elif not end_of_flags and token.startswith("--"):
                i = self._handle_flag(token, tokens, i, states, strings, bools, lists)
            else:
                if not positionals and not end_of_flags and token in self._subcommands:
                    subcommand = token
                    remaining = tokens[i + 1 :]
                    logger.debug("Token '%s' selects a subcommand.", token)
                    break
                positionals.append(token)
                i += 1

        self._bind_positionals(positionals, states, strings, lists)
        self._check_required(states)
        self._apply_defaults(states, strings, bools, lists)

        values = ResolvedValues.build(
            string_values=strings,
            bool_values=bools,
            list_values=lists,
            positionals=positionals,
            seen={name for name, state in states.items() if state.seen},
        )
        return ParseResult(values=values, subcommand=subcommand, remaining=tuple(remaining))

    def _handle_flag(
        self,
        token: str,
        tokens: list[str],
        i: int,
        states: dict[str, FlagState],
        strings: dict[str, str],
        bools: dict[str, bool],
        lists: dict[str, list[str]],
    ) -> int:
        name, inline_value = split_flag_token(token, self._keyword.__contains__)
        flag = self._keyword.get(name)
        if flag is None:
            if self._help_enabled and name == HELP_FLAG:
                raise HelpSignal()
            raise UnrecognizedFlagError(f"Unrecognized flag: {token}")
        if inline_value is not None and token.endswith("="):
            raise MissingFlagValueError(name)

        # keyword flags are never POSITIONAL, so this is BOOL
        if not flag.kind.takes_value:
            if inline_value is None:
                bools[name] = True
            else:
                try:
                    bools[name] = parse_bool(inline_value)
                except ValueError as error:
                    raise MalformedBoolError(name, inline_value, str(error)) from error
            states[name].set_seen()
            return i + 1

        if inline_value is not None:
            value = inline_value
            next_i = i + 1
        else:
            if i + 1 >= len(tokens):
                raise MissingFlagValueError(name)
            value = tokens[i + 1]
            next_i = i + 2

        if flag.kind is FlagKind.STRING_LIST:
            lists.setdefault(name, []).append(value)
        else:
            strings[name] = value
        states[name].set_seen()
        return next_i

    def _bind_positionals(
        self,
        positionals: list[str],
        states: dict[str, FlagState],
        strings: dict[str, str],
        lists: dict[str, list[str]],
    ) -> None:
        for flag, token in zip(self._positional, positionals):
            strings[flag.name] = token
            states[flag.name].set_seen()
        rest = positionals[len(self._positional) :]
        if rest and self._sink is not None:
            lists.setdefault(self._sink.name, []).extend(rest)
            states[self._sink.name].set_seen()

    def _check_required(self, states: dict[str, FlagState]) -> None:
        for state in states.values():
            if state.flag.required and not state.seen:
                if state.flag.positional:
                    raise MissingRequiredFlagError(
                        f"Missing required parameter <{state.flag.name}>"
                    )
                raise MissingRequiredFlagError(
                    f"Missing required flag --{state.flag.name}"
                )

    def _apply_defaults(
        self,
        states: dict[str, FlagState],
        strings: dict[str, str],
        bools: dict[str, bool],
        lists: dict[str, list[str]],
    ) -> None:
        for name, state in states.items():
            if state.seen:
                continue
            kind = state.flag.kind
            if kind is FlagKind.BOOL:
                bools[name] = state.flag.default
            elif kind is FlagKind.STRING_LIST:
                lists[name] = deepcopy(list(state.flag.default))
            else:
                strings[name] = state.flag.default
