# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used in the Flagtree CLI framework.

Errors fall into three families:

- Declaration errors: the static command tree itself is wrong (duplicate flag
  names, a terminal command without an action, an accessor used for a flag the
  command never declared). These are programming errors.
- Argument errors: the user's argument vector could not be resolved against
  the declared flags.
- Invocation errors: raised by actions and hooks to signal failure. The
  message may be empty; an empty message is still a failure.

Exception Hierarchy:
- FlagtreeError
    ├── DeclarationError
    │   ├── DuplicateFlagError
    │   ├── DuplicateCommandError
    │   ├── MissingActionError
    │   └── FlagLookupError
    ├── CommandArgumentError
    │   ├── UnrecognizedFlagError
    │   ├── MissingFlagValueError
    │   ├── MalformedBoolError
    │   └── MissingRequiredFlagError
    ├── InvocationError
    ├── InvalidHookError
    └── ConfigError

Every one of these is turned into an exit code by `App.run`.
"""


class FlagtreeError(Exception):
    """Base exception for the Flagtree framework."""


class DeclarationError(FlagtreeError):
    """Exception raised when a command tree or flag declaration is invalid."""


class DuplicateFlagError(DeclarationError):
    """Exception raised when a command declares two flags with the same name."""


class DuplicateCommandError(DeclarationError):
    """Exception raised when two subcommands share a name or alias."""


class MissingActionError(DeclarationError):
    """Exception raised when the resolved command has no action to run."""


class FlagLookupError(DeclarationError, KeyError):
    """Exception raised when an action reads a flag its command does not declare."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class CommandArgumentError(FlagtreeError):
    """Exception raised when the argument vector cannot be parsed."""


class UnrecognizedFlagError(CommandArgumentError):
    """Exception raised for a `--flag` token with no matching declaration."""


class MissingFlagValueError(CommandArgumentError):
    """Exception raised when a value-taking flag is given no value."""

    def __init__(self, name: str):
        super().__init__(f"Missing value for flag --{name}")
        self.name = name


class MalformedBoolError(CommandArgumentError):
    """Exception raised when a boolean flag's explicit value is not a boolean."""

    def __init__(self, name: str, value: str, reason: str):
        super().__init__(f"--{name}: {reason}")
        self.name = name
        self.value = value


class MissingRequiredFlagError(CommandArgumentError):
    """Exception raised when a required flag or parameter is absent."""


class InvocationError(FlagtreeError):
    """Exception raised by actions and hooks to fail with a message.

    An empty message is allowed; the invocation still counts as failed.
    """

    def __init__(self, message: str = ""):
        super().__init__(message)


class InvalidHookError(FlagtreeError):
    """Exception raised when a hook is not callable."""


class ConfigError(FlagtreeError):
    """Exception raised when configuration cannot be read or validated."""
