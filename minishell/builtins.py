"""The built-in commands: echo, pwd, env, cd, export, unset and exit."""

from __future__ import annotations

import os
import string
import sys
from collections.abc import Sequence
from typing import TextIO

from .environment import Environment, split_assignment
from .expand import expand_variables
from .model import BuiltinId, ShellState, Token
from .textutil import c_compare, parse_int

_NAME_START = frozenset(string.ascii_letters + "_")
_NAME_CHARS = frozenset(string.ascii_letters + string.digits + "_")
_LONG_MAX = "9223372036854775807"
_LONG_MIN = "-9223372036854775808"


class ShellExit(Exception):
    """Raised by ``exit`` to end the shell with ``status``."""

    def __init__(self, status: int) -> None:
        super().__init__(f"exit {status}")
        self.status = status


def _stdout(out: TextIO | None) -> TextIO:
    return sys.stdout if out is None else out


def _stderr(err: TextIO | None) -> TextIO:
    return sys.stderr if err is None else err


def valid_export_name(name: str) -> bool:
    """True when the part of ``name`` before the first '=' is a valid identifier."""
    if not name or name[0] not in _NAME_START:
        return False
    identifier = name.partition("=")[0]
    return all(ch in _NAME_CHARS for ch in identifier)


def numeric_argument(text: str) -> bool:
    """True when ``text`` is an optionally signed number that fits a 64-bit long."""
    if text.startswith("-"):
        limit = _LONG_MIN
    else:
        limit = _LONG_MAX
    if len(text) > len(limit):
        return False
    if len(text) == len(limit) and c_compare(text, limit, len(limit)) > 0:
        return False
    body = text[1:] if text[:1] in ("+", "-") else text
    return all("0" <= ch <= "9" for ch in body)


def _is_n_flag(arg: str) -> bool:
    if not arg.startswith("-n"):
        return False
    for ch in arg[2:]:
        if ch == " ":
            break
        if ch != "n":
            return False
    return True


def builtin_echo(
    args: Sequence[str], env: Environment, status: int, out: TextIO | None = None
) -> int:
    """Print the arguments separated by spaces; ``-n`` drops the newline."""
    out = _stdout(out)
    words = list(args[1:])
    newline = True
    while words and _is_n_flag(words[0]):
        newline = False
        words.pop(0)
    printed = [word for word in words if word]
    pieces = [
        expand_variables("$HOME", env, status) if word == "~" else word
        for word in printed
    ]
    out.write(" ".join(pieces))
    if newline:
        out.write("\n")
    return 0


def builtin_pwd(out: TextIO | None = None) -> int:
    """Print the current working directory."""
    out = _stdout(out)
    try:
        cwd = os.getcwd()
    except OSError:
        out.write(".\n")
        return 1
    out.write(cwd + "\n")
    return 0


def builtin_env(
    args: Sequence[str],
    env: Environment,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int | None:
    """Print the variables that have a value.

    Returns None, leaving the status as it was, when given an argument.
    """
    if len(args) > 1:
        _stderr(err).write(f"env: {args[1]}: No such file or directory\n")
        return None
    out = _stdout(out)
    for name, value in env:
        if name and value:
            out.write(f"{name}={value}\n")
    return 0


def _current_dir() -> str | None:
    try:
        return os.getcwd()
    except OSError:
        return None


def builtin_cd(args: Sequence[str], env: Environment, err: TextIO | None = None) -> int:
    """Change directory, keeping OLDPWD and PWD up to date."""
    err = _stderr(err)
    before = _current_dir()
    if before is not None:
        env.replace("OLDPWD", before, True)
    target = args[1] if len(args) > 1 else ""
    if not target:
        home = env.get("HOME")
        try:
            if home is None:
                raise FileNotFoundError("HOME")
            os.chdir(home)
        except OSError:
            err.write("minishell: HOME not set\n")
            return 1
    else:
        try:
            os.chdir(target)
        except OSError:
            err.write(f"cd: no such file or directory: {target}\n")
            return 1
    after = _current_dir()
    if after is not None:
        env.replace("PWD", after, True)
    return 0


def _declare_all(env: Environment, out: TextIO) -> None:
    for name, value in env:
        if value:
            out.write(f'declare -x {name}="{value}"\n')
        else:
            out.write(f"declare -x {name}\n")


def builtin_export(
    args: Sequence[str],
    env: Environment,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Set variables from ``NAME[=value]`` arguments, or list them all."""
    if len(args) < 2:
        _declare_all(env, _stdout(out))
        return 0
    err = _stderr(err)
    status = 0
    for arg in args[1:]:
        if not valid_export_name(arg):
            status = 1
            err.write(f"minishell: export: {arg}: not a valid identifier\n")
            continue
        name, value = split_assignment(arg)
        if not env.replace(name, value, "=" in arg):
            env.append(name, value)
    return status


def _valid_unset_name(name: str) -> bool:
    return bool(name) and name[0] in _NAME_START and "=" not in name


def builtin_unset(
    args: Sequence[str], env: Environment, err: TextIO | None = None
) -> int | None:
    """Remove the named variables.

    Returns None when the status is to stay as it was.
    """
    if len(args) < 2:
        return 0
    err = _stderr(err)
    status: int | None = None
    for name in args[1:]:
        entries = list(env)
        if not entries:
            continue
        if not _valid_unset_name(name):
            err.write(f"minishell: unset: {name}: not a valid identifier\n")
            status = 1
            continue
        match = next(
            (
                pos
                for pos, (entry_name, _) in enumerate(entries)
                if c_compare(name, entry_name, len(name)) == 0
            ),
            None,
        )
        if match != 0:
            status = 0
        if match is not None:
            env.remove(name)
    return status


def builtin_exit(
    args: Sequence[str],
    status: int,
    announce: bool,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Raise ShellExit; returns 1 instead when given too many arguments."""
    if announce:
        _stdout(out).write("exit\n")
    code = status
    if len(args) > 1:
        if not numeric_argument(args[1]):
            _stderr(err).write(
                f"minishell: exit: {args[1]} numeric argument required\n"
            )
            code = 255
        elif len(args) > 2:
            _stderr(err).write("minishell: exit: too many arguments\n")
            return 1
        else:
            code = parse_int(args[1]) & 0xFF
    raise ShellExit(code)


def run_builtin(
    token: Token,
    state: ShellState,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> bool:
    """Run ``token`` if it is a built-in, updating ``state.status``.

    Returns False when the command is not a built-in.
    """
    env: Environment = state.env
    args = token.argv
    cmd = token.cmd_id
    result: int | None
    if cmd is BuiltinId.ECHO:
        result = builtin_echo(args, env, state.status, out)
    elif cmd is BuiltinId.PWD:
        result = builtin_pwd(out)
    elif cmd is BuiltinId.ENV:
        result = builtin_env(args, env, out, err)
    elif cmd is BuiltinId.CD:
        result = builtin_cd(args, env, err)
    elif cmd is BuiltinId.EXPORT:
        result = builtin_export(args, env, out, err)
    elif cmd is BuiltinId.UNSET:
        result = builtin_unset(args, env, err)
    elif cmd is BuiltinId.EXIT:
        result = builtin_exit(args, state.status, len(state.tokens) == 1, out, err)
    else:
        return False
    if result is not None:
        state.status = result
    return True