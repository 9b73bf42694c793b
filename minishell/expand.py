"""Expansion of ``$`` variables and removal of quotes in lexed arguments."""

from __future__ import annotations

import string
from collections.abc import Iterable, MutableSequence

from .model import Arg
from .textutil import split_fields

_ALNUM = frozenset(string.ascii_letters + string.digits)
_DROPPED_LEADERS = frozenset(string.digits + "!@_")
_QUOTES = "'\""


def _lookup(field: str, env: Iterable[tuple[str, str]]) -> str:
    """Replace a leading variable name in ``field`` by its value.

    The first variable whose name starts the field and is not followed by a
    letter or digit wins. Without a match the leading run of letters and
    digits is dropped.
    """
    for name, value in env:
        size = len(name)
        if field.startswith(name) and field[size : size + 1] not in _ALNUM:
            return value + field[size:]
    for pos, ch in enumerate(field):
        if ch not in _ALNUM:
            return field[pos:]
    return ""


def _expand_field(field: str, env: Iterable[tuple[str, str]], status: int) -> str:
    head = field[0]
    if head == "?":
        return str(status) + field[1:]
    if head in _DROPPED_LEADERS:
        return field[1:]
    if head not in _ALNUM:
        return "$" + field
    return _lookup(field, env)


def expand_variables(text: str, env: Iterable[tuple[str, str]], status: int) -> str:
    """Replace every ``$NAME`` and ``$?`` in ``text``.

    Runs of '$' count as one. A text made only of '$' gives "$".
    """
    fields = split_fields(text, "$")
    if text.startswith("$"):
        if not fields:
            return "$"
        literal, variables = [], fields
    else:
        literal, variables = fields[:1], fields[1:]
    expanded = [_expand_field(field, env, status) for field in variables]
    return "".join(literal + expanded)


def _segment_end(text: str, start: int) -> int:
    ch = text[start]
    if ch in _QUOTES:
        close = text.find(ch, start + 1)
        return len(text) if close < 0 else close + 1
    end = start + 1
    while end < len(text) and text[end] not in _QUOTES:
        end += 1
    return end


def expand_quoted(text: str, env: Iterable[tuple[str, str]], status: int) -> str:
    """Strip quotes from ``text`` and expand variables outside single quotes.

    The text is handled segment by segment: quoted parts lose their quotes,
    and parts outside single quotes have their variables expanded. Work stops
    early when the text before the next segment has become empty.
    """
    pos = 0
    while pos < len(text):
        quote = text[pos]
        end = _segment_end(text, pos)
        body = text[pos:end]
        if quote in _QUOTES:
            body = body.replace(quote, "")
        if quote != "'" and "$" in body:
            body = expand_variables(body, env, status)
        text = text[:pos] + body + text[end:]
        pos += len(body)
        if pos == 0:
            break
    return text


def expand_args(
    args: MutableSequence[Arg], env: Iterable[tuple[str, str]], status: int
) -> MutableSequence[Arg]:
    """Expand the text of every argument in place and return the arguments."""
    for arg in args:
        if arg.quote:
            arg.text = expand_quoted(arg.text, env, status)
        elif "$" in arg.text:
            arg.text = expand_variables(arg.text, env, status)
    return args