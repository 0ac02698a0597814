"""
Flagtree CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .flag import Flag, bool_flag, string_flag, string_list, string_param
from .flag_kind import FlagKind
from .flag_parser import FlagParser
from .parser_types import ParseResult, ResolvedValues

__all__ = [
    "Flag",
    "FlagKind",
    "FlagParser",
    "ParseResult",
    "ResolvedValues",
    "bool_flag",
    "string_flag",
    "string_list",
    "string_param",
]
