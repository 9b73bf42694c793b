"""Split an input line into words, operators and quoted strings."""

from __future__ import annotations

from enum import Enum

from .errors import ShellSyntaxError
from .model import Arg, Redirect

_NODE_SKIP = frozenset("\t\n\v\f ")


def is_blank(ch: str) -> bool:
    """True for space and the control characters tab through carriage return."""
    return ch == " " or "\t" <= ch <= "\r"


class _Mark(Enum):
    NONE = 0
    ENDS_WORD = 1
    IS_OPERATOR = 2


class _Lexer:
    def __init__(self, line: str) -> None:
        self.line = line
        self.pipe_mark = _Mark.NONE
        self.redir_mark = _Mark.NONE

    def run(self) -> list[Arg]:
        args: list[Arg] = []
        pos = 0
        while pos < len(self.line):
            if self.line[pos] not in _NODE_SKIP:
                arg, pos = self._read_arg(pos)
                args.append(arg)
            pos += 1
        return args

    def _read_arg(self, start: int) -> tuple[Arg, int]:
        arg = Arg()
        end, length = self._scan(arg, start)
        if arg.redirect is not Redirect.NONE:
            arg.text = arg.redirect.symbol
        else:
            arg.text = self._node_text(end - length, length)
        if self.pipe_mark is _Mark.ENDS_WORD:
            end -= 1
        if self.redir_mark is _Mark.ENDS_WORD:
            end -= 1
            self.pipe_mark = _Mark.NONE
            self.redir_mark = _Mark.NONE
        return arg, end

    def _scan(self, arg: Arg, start: int) -> tuple[int, int]:
        line = self.line
        pos = start
        length = 0
        while pos < len(line) and not is_blank(line[pos]):
            ch = line[pos]
            length += 1
            if ch in "<>" and arg.quote == 0:
                if pos == start:
                    return self._operator(arg, pos), length - 1
                self.redir_mark = _Mark.ENDS_WORD
                return pos, length - 1
            if ch == "|":
                if pos == start:
                    arg.pipe = True
                    self.pipe_mark = _Mark.IS_OPERATOR
                else:
                    self.pipe_mark = _Mark.ENDS_WORD
                return pos, length
            if ch in "\"'":
                if ch == "'":
                    if arg.counter == 0:
                        arg.expand = True
                    arg.quote = 1
                else:
                    arg.quote = 2
                arg.counter += 1
                close = line.find(ch, pos + 1)
                if close < 0:
                    raise ShellSyntaxError('"' if ch == '"' else "")
                length += close - pos
                pos = close
            pos += 1
        return pos, length

    def _operator(self, arg: Arg, pos: int) -> int:
        ch = self.line[pos]
        doubled = self.line[pos + 1 : pos + 2] == ch
        if ch == "<":
            arg.redirect = Redirect.L_TWO if doubled else Redirect.L_ONE
        else:
            arg.redirect = Redirect.R_TWO if doubled else Redirect.R_ONE
        self.redir_mark = _Mark.IS_OPERATOR
        return pos + 1 if doubled else pos

    def _node_text(self, start: int, length: int) -> str:
        if start == -1:
            start = 0
        if self.pipe_mark is _Mark.IS_OPERATOR:
            self.pipe_mark = _Mark.NONE
            return "|"
        if self.pipe_mark is _Mark.ENDS_WORD:
            length -= 1
            if start != 0:
                start += 1
        return self.line[start : start + length]


def tokenize(line: str) -> list[Arg]:
    """Split ``line`` into lexed arguments.

    Raises ShellSyntaxError when a quote is left open.
    """
    return _Lexer(line).run()