# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines flow control signals used internally by the Flagtree CLI framework.

These signals interrupt the normal run without being treated as failures.
All signals inherit from `FlowSignal`, which is a subclass of `BaseException`
to ensure they bypass standard `except Exception` blocks in user actions.

Signals:
- HelpSignal: Stop resolution and display help for the current command.
"""


class FlowSignal(BaseException):
    """Base class for all flow control signals in Flagtree."""


class HelpSignal(FlowSignal):
    """Raised when `--help` is seen while resolving a command."""

    def __init__(self, message: str = "Help signal received."):
        super().__init__(message)
