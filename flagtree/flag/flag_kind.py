# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `FlagKind`, the closed set of value shapes a declared flag can have.

Each member decides how the tokenizer treats a matching token and which
`Context` accessor reads the resolved value back.

Supports alias coercion for shorthand or config-friendly values:

Example:
    FlagKind("bool")   → FlagKind.BOOL
    FlagKind("list")   → FlagKind.STRING_LIST (via alias)
    FlagKind("param")  → FlagKind.POSITIONAL (via alias)
"""
from __future__ import annotations

from enum import Enum


class FlagKind(Enum):
    """
    Value shape of a flag.

    Members:
        BOOL: `--name` alone means True; `--name=<bool>` sets it explicitly.
        STRING: Takes one value; the last occurrence wins.
        STRING_LIST: Takes one value per occurrence; every occurrence appends.
        POSITIONAL: Never matches `--name`; bound to a bare positional token.

    Aliases:
        - "str" → "string"
        - "list" / "slice" → "string_list"
        - "param" → "positional"
    """

    BOOL = "bool"
    STRING = "string"
    STRING_LIST = "string_list"
    POSITIONAL = "positional"

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "str": "string",
            "list": "string_list",
            "slice": "string_list",
            "param": "positional",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> FlagKind:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    @property
    def takes_value(self) -> bool:
        """Whether a `--name` occurrence of this kind needs an explicit value."""
        return self in (FlagKind.STRING, FlagKind.STRING_LIST)

    def __str__(self) -> str:
        """Return the string representation of the flag kind."""
        return self.value
