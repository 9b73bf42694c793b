"""Error messages, exit statuses and exceptions of the shell."""

from __future__ import annotations

from enum import IntEnum

from .model import Arg, Redirect, Token

PREFIX = "minishell: "


class ErrorKind(IntEnum):
    """Kinds of command errors, each with its own message and status."""

    GENERIC = 0
    NOT_FOUND = 1
    PERMISSION_DENIED = 2
    NO_SUCH_FILE = 3
    IS_DIRECTORY = 4
    NOT_DIRECTORY = 5
    FILENAME_REQUIRED = 6


_SUFFIXES = {
    ErrorKind.GENERIC: "",
    ErrorKind.NOT_FOUND: ": command not found\n",
    ErrorKind.PERMISSION_DENIED: ": Permission denied\n",
    ErrorKind.NO_SUCH_FILE: ": No such file or directory\n",
    ErrorKind.IS_DIRECTORY: ": is a directory\n",
    ErrorKind.NOT_DIRECTORY: ": Not a directory\n",
    ErrorKind.FILENAME_REQUIRED: (
        ": filename argument required\n.: usage: . filename [arguments]\n"
    ),
}

_STATUSES = {
    ErrorKind.NOT_FOUND: 127,
    ErrorKind.NO_SUCH_FILE: 127,
    ErrorKind.PERMISSION_DENIED: 126,
    ErrorKind.IS_DIRECTORY: 126,
    ErrorKind.NOT_DIRECTORY: 126,
    ErrorKind.FILENAME_REQUIRED: 2,
}


def error_message(subject: str, kind: ErrorKind = ErrorKind.GENERIC) -> str:
    """Full diagnostic text for an error about ``subject``."""
    return PREFIX + subject + _SUFFIXES[ErrorKind(kind)]


def error_status(kind: ErrorKind) -> int:
    """Exit status that goes with an error of ``kind``."""
    return _STATUSES.get(ErrorKind(kind), 1)


class CommandError(Exception):
    """A command could not be run; carries its message and exit status."""

    def __init__(self, subject: str, kind: ErrorKind = ErrorKind.GENERIC) -> None:
        self.subject = subject
        self.kind = ErrorKind(kind)
        super().__init__(error_message(subject, self.kind))

    @property
    def status(self) -> int:
        return error_status(self.kind)

    def message(self) -> str:
        return error_message(self.subject, self.kind)


class CommandKind(IntEnum):
    """How a command name is to be run."""

    BUILTIN = 1
    SEARCH_PATH = 2
    PATH = 3


def classify_command(token: Token) -> CommandKind:
    """Decide whether a command is a path, a built-in, or to be looked up in PATH."""
    name = token.argv[0] if token.argv else (token.cmd_str or "")
    if "/" in name:
        return CommandKind.PATH
    if token.cmd_id > 0:
        return CommandKind.BUILTIN
    return CommandKind.SEARCH_PATH


class ShellSyntaxError(Exception):
    """The input line is not a valid command line."""

    status = 258

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"{PREFIX}syntax error near unexpected token `{token}'")


def redirect_syntax_error(arg: Arg) -> ShellSyntaxError:
    """Syntax error naming the operator found at ``arg``."""
    if arg.redirect is not Redirect.NONE:
        return ShellSyntaxError(Redirect(arg.redirect).symbol)
    if arg.pipe:
        return ShellSyntaxError("|")
    return ShellSyntaxError("")