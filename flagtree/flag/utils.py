# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Value helpers for the flag tokenizer.

Only strings, booleans and string lists are ever produced, so the only lexical
conversion needed is the boolean one. `format_value` goes the other way for
help output and diagnostics.
"""
from __future__ import annotations

from typing import Any, Callable

from flagtree.exceptions import DeclarationError
from flagtree.flag.flag_kind import FlagKind

TRUE_STRINGS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
FALSE_STRINGS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def parse_bool(value: str) -> bool:
    """
    Parse a boolean in its standard lexical forms.

    Accepts `1 t T TRUE true True` and `0 f F FALSE false False`.

    Raises:
        ValueError: If `value` is none of the accepted forms.
    """
    if value in TRUE_STRINGS:
        return True
    if value in FALSE_STRINGS:
        return False
    raise ValueError(f'invalid boolean value "{value}"')


def split_flag_token(
    token: str, is_declared: Callable[[str], bool]
) -> tuple[str, str | None]:
    """
    Split a `--name[=value]` token into a flag name and inline value.

    The token is split at the first `=` whose left side is a declared flag
    name, so `--a=b=c` yields `("a", "b=c")` when `a` is declared and
    `("a=b", "c")` when only `a=b` is. When no split point names a declared
    flag, the whole token body is returned as the name with no inline value.
    """
    body = token[2:]
    start = 0
    while (index := body.find("=", start)) != -1:
        if is_declared(body[:index]):
            return body[:index], body[index + 1 :]
        start = index + 1
    return body, None


def format_value(kind: FlagKind, value: Any) -> str:
    """
    Render a resolved flag value for display.

    Bools render as `true`/`false`, string lists as `[a b c]`, strings as-is.

    Raises:
        DeclarationError: For a kind this function does not know how to render.
    """
    if kind is FlagKind.BOOL:
        return "true" if value else "false"
    if kind in (FlagKind.STRING, FlagKind.POSITIONAL):
        return str(value)
    if kind is FlagKind.STRING_LIST:
        return f"[{' '.join(value)}]"
    raise DeclarationError(f"Unsupported flag kind: {kind!r}")
