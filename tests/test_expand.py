from minishell.environment import Environment
from minishell.expand import expand_args, expand_quoted, expand_variables
from minishell.model import Arg

HOME = "/home/user"


def make_env():
    return Environment([("HOME", HOME), ("USER", "tester")])


def test_plain_variable():
    assert expand_variables("$HOME", make_env(), 0) == HOME


def test_status_variable():
    assert expand_variables("$?", make_env(), 42) == "42"
    assert expand_variables("$?x", make_env(), 7) == "7x"


def test_lone_dollars_stay():
    assert expand_variables("$", make_env(), 0) == "$"
    assert expand_variables("$$", make_env(), 0) == "$"


def test_text_before_variable_is_kept():
    assert expand_variables("pre$HOME", make_env(), 0) == "pre" + HOME


def test_two_variables():
    assert expand_variables("$HOME$USER", make_env(), 0) == HOME + "tester"


def test_digit_and_special_leaders_are_dropped():
    assert expand_variables("$1abc", make_env(), 0) == "abc"
    assert expand_variables("$_HOME", make_env(), 0) == "HOME"


def test_non_alnum_leader_keeps_dollar():
    assert expand_variables("$-", make_env(), 0) == "$-"
    assert expand_variables("a $ b", make_env(), 0) == "a $ b"


def test_unknown_variable_drops_name_only():
    assert expand_variables("$NOPE", make_env(), 0) == ""
    assert expand_variables("$NOPE/x", make_env(), 0) == "/x"


def test_name_followed_by_underscore_still_matches():
    assert expand_variables("$HOME_x", make_env(), 0) == HOME + "_x"


def test_longer_name_does_not_match_prefix():
    assert expand_variables("$HOMEX", make_env(), 0) == ""


def test_first_matching_entry_wins():
    env = Environment([("A", "first"), ("A", "second")])
    assert expand_variables("$A", env, 0) == "first"


def test_single_quotes_block_expansion():
    assert expand_quoted("'$HOME'", make_env(), 0) == "$HOME"


def test_double_quotes_expand():
    assert expand_quoted('"$HOME"', make_env(), 0) == HOME


def test_mixed_segments():
    assert expand_quoted('a"$HOME"b', make_env(), 0) == "a" + HOME + "b"
    assert expand_quoted("x'$USER'\"$USER\"", make_env(), 0) == "x$USERtester"


def test_other_quote_inside_double_quotes_is_kept():
    assert expand_quoted('"it\'s"', make_env(), 0) == "it's"


def test_empty_leading_segment_stops_processing():
    assert expand_quoted("''\"$HOME\"", make_env(), 0) == '"$HOME"'


def test_expand_args_in_place():
    args = [
        Arg(text="$HOME"),
        Arg(text="'$HOME'", quote=1),
        Arg(text="|", pipe=True),
        Arg(text="plain"),
    ]
    result = expand_args(args, make_env(), 0)
    assert result is args
    assert [a.text for a in args] == [HOME, "$HOME", "|", "plain"]