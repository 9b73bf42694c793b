"""Syntax checks on a lexed command line."""

from __future__ import annotations

from collections.abc import Sequence

from .errors import ShellSyntaxError, redirect_syntax_error
from .model import Arg, Redirect


def _is_redirect(arg: Arg) -> bool:
    return arg.redirect is not Redirect.NONE


def _check_pipes(args: Sequence[Arg]) -> None:
    if args[0].pipe or args[-1].pipe:
        raise ShellSyntaxError("|")
    if any(a.pipe and b.pipe for a, b in zip(args, args[1:])):
        raise ShellSyntaxError("|")


def _check_redirects(args: Sequence[Arg]) -> None:
    if _is_redirect(args[0]) and len(args) < 2:
        raise ShellSyntaxError("newline")
    for current, following in zip(args, args[1:]):
        if _is_redirect(current) and (_is_redirect(following) or following.pipe):
            raise redirect_syntax_error(following)
    if _is_redirect(args[-1]):
        raise redirect_syntax_error(args[-1])


def check_syntax(args: Sequence[Arg]) -> None:
    """Raise ShellSyntaxError for misplaced pipes and redirections."""
    if not args:
        return
    _check_pipes(args)
    _check_redirects(args)