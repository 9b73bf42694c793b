import pytest

from minishell.errors import ShellSyntaxError
from minishell.lexer import is_blank, tokenize
from minishell.model import Redirect


def texts(line):
    return [arg.text for arg in tokenize(line)]


def test_plain_words():
    assert texts("echo hello world") == ["echo", "hello", "world"]


def test_blank_line_gives_nothing():
    assert tokenize("   \t ") == []


def test_pipe_without_spaces():
    args = tokenize("ls|wc")
    assert [a.text for a in args] == ["ls", "|", "wc"]
    assert [a.pipe for a in args] == [False, True, False]


def test_pipe_after_later_word():
    assert texts("echo hello|wc -l") == ["echo", "hello", "|", "wc", "-l"]


def test_pipe_with_spaces():
    assert texts("a | b") == ["a", "|", "b"]


def test_redirections_without_spaces():
    args = tokenize("cat<in>out")
    assert [a.text for a in args] == ["cat", "<", "in", ">", "out"]
    assert [a.redirect for a in args] == [
        Redirect.NONE,
        Redirect.L_ONE,
        Redirect.NONE,
        Redirect.R_ONE,
        Redirect.NONE,
    ]


def test_double_operators():
    args = tokenize("cat << EOF >> log")
    assert [a.text for a in args] == ["cat", "<<", "EOF", ">>", "log"]
    assert args[1].redirect is Redirect.L_TWO
    assert args[3].redirect is Redirect.R_TWO


def test_double_quotes_keep_spaces():
    args = tokenize('echo "a b"')
    assert [a.text for a in args] == ["echo", '"a b"']
    assert args[1].quote == 2
    assert args[1].expand is False


def test_single_quotes_mark_expand():
    arg = tokenize("'$HOME'")[0]
    assert arg.text == "'$HOME'"
    assert arg.quote == 1
    assert arg.expand is True
    assert arg.counter == 1


def test_operators_inside_quotes_are_text():
    assert texts('a"|"b') == ['a"|"b']
    assert texts('"x"<y') == ['"x"<y']


def test_unclosed_double_quote():
    with pytest.raises(ShellSyntaxError) as info:
        tokenize('echo "abc')
    assert info.value.token == '"'


def test_unclosed_single_quote():
    with pytest.raises(ShellSyntaxError) as info:
        tokenize("echo 'abc")
    assert info.value.token == ""


@pytest.mark.parametrize("ch", [" ", "\t", "\n", "\v", "\f", "\r"])
def test_is_blank_true(ch):
    assert is_blank(ch) is True


@pytest.mark.parametrize("ch", ["a", "|", "\x08", "\x0e"])
def test_is_blank_false(ch):
    assert is_blank(ch) is False