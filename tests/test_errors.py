import pytest

from minishell.errors import (
    CommandError,
    CommandKind,
    ErrorKind,
    ShellSyntaxError,
    classify_command,
    error_message,
    error_status,
    redirect_syntax_error,
)
from minishell.model import Arg, BuiltinId, Redirect, Token


def test_not_found_message_and_status():
    assert error_message("ls", ErrorKind.NOT_FOUND) == "minishell: ls: command not found\n"
    assert error_status(ErrorKind.NOT_FOUND) == 127


def test_generic_message_keeps_subject_verbatim():
    assert error_message("malloc error\n") == "minishell: malloc error\n"
    assert error_status(ErrorKind.GENERIC) == 1


@pytest.mark.parametrize(
    "kind, suffix",
    [
        (ErrorKind.PERMISSION_DENIED, ": Permission denied\n"),
        (ErrorKind.NO_SUCH_FILE, ": No such file or directory\n"),
        (ErrorKind.IS_DIRECTORY, ": is a directory\n"),
        (ErrorKind.NOT_DIRECTORY, ": Not a directory\n"),
    ],
)
def test_suffixes(kind, suffix):
    assert error_message("x", kind) == "minishell: x" + suffix


@pytest.mark.parametrize(
    "kind, status",
    [
        (ErrorKind.PERMISSION_DENIED, 126),
        (ErrorKind.IS_DIRECTORY, 126),
        (ErrorKind.NOT_DIRECTORY, 126),
        (ErrorKind.NO_SUCH_FILE, 127),
        (ErrorKind.FILENAME_REQUIRED, 2),
    ],
)
def test_statuses(kind, status):
    assert error_status(kind) == status


def test_filename_required_message():
    text = error_message(".", ErrorKind.FILENAME_REQUIRED)
    assert text.startswith("minishell: .: filename argument required\n")
    assert text.endswith(".: usage: . filename [arguments]\n")


def test_command_error_carries_message_and_status():
    err = CommandError("/tmp", ErrorKind.IS_DIRECTORY)
    assert err.status == 126
    assert err.message() == "minishell: /tmp: is a directory\n"
    assert str(err) == err.message()


def test_classify_command():
    assert classify_command(Token(argv=["/bin/ls"])) is CommandKind.PATH
    assert classify_command(Token(argv=["./run"], cmd_id=BuiltinId.NONE)) is CommandKind.PATH
    assert classify_command(Token(argv=["echo"], cmd_id=BuiltinId.ECHO)) is CommandKind.BUILTIN
    assert classify_command(Token(argv=["ls"])) is CommandKind.SEARCH_PATH


@pytest.mark.parametrize(
    "redirect, symbol",
    [
        (Redirect.L_ONE, "<"),
        (Redirect.L_TWO, "<<"),
        (Redirect.R_ONE, ">"),
        (Redirect.R_TWO, ">>"),
    ],
)
def test_redirect_syntax_error(redirect, symbol):
    err = redirect_syntax_error(Arg(symbol, redirect=redirect))
    assert isinstance(err, ShellSyntaxError)
    assert str(err) == f"minishell: syntax error near unexpected token `{symbol}'"
    assert err.status == 258


def test_pipe_syntax_error():
    err = redirect_syntax_error(Arg("|", pipe=True))
    assert err.token == "|"
    assert str(err) == "minishell: syntax error near unexpected token `|'"


def test_newline_syntax_error():
    err = ShellSyntaxError("newline")
    assert str(err) == "minishell: syntax error near unexpected token `newline'"