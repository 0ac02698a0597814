"""
Flagtree CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .app import App
from .command import Command
from .context import Context, ResolvedValues
from .exceptions import InvocationError
from .flag import Flag, FlagKind
from .logger import logger

__all__ = [
    "App",
    "Command",
    "Context",
    "Flag",
    "FlagKind",
    "InvocationError",
    "ResolvedValues",
    "logger",
]
