# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Rich-powered help rendering for Flagtree commands.

`render_help` prints the usage line, the command's usage text, its subcommands
and its flags to the app's stdout. Help is requested with `--help` on any
command that does not declare its own `help` flag.
"""
from __future__ import annotations

from typing import TextIO

from rich.console import Console
from rich.markup import escape
from rich.padding import Padding
from rich.table import Table

from flagtree.command import Command
from flagtree.flag.flag import Flag
from flagtree.flag.flag_kind import FlagKind
from flagtree.flag.utils import format_value


def get_usage(command: Command, path: list[str]) -> str:
    """Build the plain-text usage line for `command` reached through `path`."""
    parts = [" ".join(path)]
    if command.subcommands:
        parts.append("<command>")
    if any(not flag.positional for flag in command.flags):
        parts.append("[flags]")
    for flag in command.flags:
        if flag.positional:
            parts.append(f"<{flag.name}>" if flag.required else f"[{flag.name}]")
    return " ".join(parts)


def _get_default_text(flag: Flag) -> str:
    if flag.required:
        return "(required)"
    if flag.default in ("", [], False):
        return ""
    return f"(default: {format_value(flag.kind, flag.default)})"


def render_help(command: Command, path: list[str], stdout: TextIO) -> None:
    """
    Render help for a resolved command.

    Args:
        command (Command): The command to describe.
        path (list[str]): Program name followed by the command names used to
            reach `command`.
        stdout (TextIO): Stream to write to.
    """
    console = Console(file=stdout, highlight=False, soft_wrap=True)
    console.print(f"[bold]usage:[/bold] {escape(get_usage(command, path))}")
    if command.usage:
        console.print(Padding(escape(command.usage), (1, 0, 0, 2)))

    if command.subcommands:
        console.print("\n[bold]commands:[/bold]")
        table = Table.grid(padding=(0, 2))
        for name, subcommand in command.subcommands.items():
            names = ", ".join([name, *subcommand.aliases])
            table.add_row(f"  {escape(names)}", escape(subcommand.usage))
        console.print(table)

    keyword = [flag for flag in command.flags if flag.kind is not FlagKind.POSITIONAL]
    positional = [flag for flag in command.flags if flag.kind is FlagKind.POSITIONAL]
    for title, flags in (("parameters", positional), ("flags", keyword)):
        rows = [
            (
                flag.get_display_name(),
                " ".join(text for text in (flag.help, _get_default_text(flag)) if text),
            )
            for flag in flags
        ]
        if title == "flags" and command.get_flag("help") is None:
            rows.append(("--help", "Show this help message."))
        if not rows:
            continue
        console.print(f"\n[bold]{title}:[/bold]")
        table = Table.grid(padding=(0, 2))
        for display_name, help_text in rows:
            table.add_row(f"  {escape(display_name)}", escape(help_text))
        console.print(table)
