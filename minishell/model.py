"""Data shared by the lexer, parser and executor."""

from __future__ import annotations

import contextlib
import os
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

HEREDOC_PREFIX = "heredoc_temp_"


class Redirect(IntEnum):
    """Kind of redirection operator carried by a lexed argument."""

    NONE = 0
    L_ONE = 1
    L_TWO = 2
    R_ONE = 3
    R_TWO = 4

    @property
    def symbol(self) -> str:
        return _REDIRECT_SYMBOLS[self]


_REDIRECT_SYMBOLS = {
    Redirect.NONE: "",
    Redirect.L_ONE: "<",
    Redirect.L_TWO: "<<",
    Redirect.R_ONE: ">",
    Redirect.R_TWO: ">>",
}


class FileMode(IntEnum):
    """How a redirection target is opened."""

    INFILE = 1
    OUTFILE = 2
    APPEND = 3


class BuiltinId(IntEnum):
    """Identifiers of the built-in commands; NONE marks an external command."""

    NONE = 0
    ECHO = 1
    CD = 2
    EXPORT = 3
    UNSET = 4
    ENV = 5
    EXIT = 6
    PWD = 7


@dataclass
class Arg:
    """One lexed word of the input line."""

    text: str = ""
    quote: int = 0
    redirect: Redirect = Redirect.NONE
    pipe: bool = False
    expand: bool = False
    counter: int = 0


@dataclass
class Token:
    """One command of a pipeline with its arguments and redirections."""

    order: int = 0
    cmd_id: BuiltinId = BuiltinId.NONE
    cmd_str: str | None = None
    argv: list[str] = field(default_factory=list)
    redirections: list[tuple[FileMode, str]] = field(default_factory=list)
    error: bool = False

    @property
    def infiles(self) -> int:
        return sum(1 for mode, _ in self.redirections if mode is FileMode.INFILE)

    @property
    def outfiles(self) -> int:
        return sum(1 for mode, _ in self.redirections if mode is not FileMode.INFILE)

    @property
    def is_builtin(self) -> bool:
        return self.cmd_id is not BuiltinId.NONE


def heredoc_name(order: int) -> str:
    """Name of the temporary file holding the here-document of command ``order``."""
    return f"{HEREDOC_PREFIX}{order}"


@dataclass
class ShellState:
    """State kept across prompts: environment, last status and parsed commands."""

    env: Any = None
    status: int = 0
    tokens: list[Token] = field(default_factory=list)

    def remove_heredocs(self) -> None:
        """Delete the here-document files of the current commands, if present."""
        for order in range(len(self.tokens)):
            with contextlib.suppress(OSError):
                os.unlink(heredoc_name(order))