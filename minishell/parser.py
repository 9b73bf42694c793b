"""Group lexed arguments into commands with their arguments and redirections."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from .errors import CommandError, ShellSyntaxError
from .model import Arg, BuiltinId, FileMode, Redirect, Token, heredoc_name

ReadLine = Callable[[str], "str | None"]

HEREDOC_PROMPT = "> "

_BUILTIN_NAMES = {
    "echo": BuiltinId.ECHO,
    "cd": BuiltinId.CD,
    "export": BuiltinId.EXPORT,
    "unset": BuiltinId.UNSET,
    "env": BuiltinId.ENV,
    "exit": BuiltinId.EXIT,
    "pwd": BuiltinId.PWD,
}

_FILE_MODES = {
    Redirect.L_ONE: FileMode.INFILE,
    Redirect.R_ONE: FileMode.OUTFILE,
    Redirect.R_TWO: FileMode.APPEND,
}


class ParseError(Exception):
    """The line cannot be run; no diagnostic is printed for it."""

    def __init__(self, tokens: Iterable[Token] = (), message: str = "empty command") -> None:
        super().__init__(message)
        self.tokens = list(tokens)


class HeredocInterrupted(ParseError):
    """Reading a here-document was interrupted by the user."""

    status = 1

    def __init__(self, tokens: Iterable[Token] = ()) -> None:
        super().__init__(tokens, "here-document interrupted")


def _read_stdin(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def command_id(name: str) -> BuiltinId:
    """Built-in identifier for a command name, NONE for external commands."""
    return _BUILTIN_NAMES.get(name, BuiltinId.NONE)


def collect_heredoc(delimiter: str, path: str, read_line: ReadLine = _read_stdin) -> None:
    """Read lines until ``delimiter`` or end of input and store them in ``path``."""
    try:
        handle = open(path, "w", encoding="utf-8")
    except OSError:
        raise CommandError("open error\n") from None
    with handle:
        while True:
            try:
                line = read_line(HEREDOC_PROMPT)
            except KeyboardInterrupt:
                raise HeredocInterrupted() from None
            if line is None or line == delimiter:
                break
            try:
                handle.write(line + "\n")
            except OSError:
                raise CommandError("write error\n") from None


class _TokenBuilder:
    def __init__(self, order: int, read_line: ReadLine) -> None:
        self.token = Token(order=order)
        self.read_line = read_line
        self.found_command = False
        self.words = 0
        self.interrupted = False

    def add_word(self, text: str) -> None:
        if not self.found_command:
            self.token.cmd_str = text
            self.token.cmd_id = command_id(text)
            self.found_command = True
        if self.words == 0:
            self.token.argv = [text]
        else:
            self.token.argv.append(text)
        self.words += 1

    def add_redirect(self, operator: Arg, target: Arg) -> None:
        kind = Redirect(operator.redirect)
        if kind is Redirect.L_TWO:
            path = heredoc_name(self.token.order)
            try:
                collect_heredoc(target.text, path, self.read_line)
            except HeredocInterrupted:
                self.interrupted = True
            self.token.redirections.append((FileMode.INFILE, path))
            return
        self.token.redirections.append((_FILE_MODES[kind], target.text))
        if self.words == 0:
            self.token.argv = [operator.text]


def _settle_command_name(token: Token) -> bool:
    """Drop an empty first word; False when no command name is left."""
    if not token.argv or token.argv[0]:
        return True
    if len(token.argv) > 1 and token.argv[1]:
        token.argv = token.argv[1:]
        if not token.cmd_str:
            token.cmd_str = token.argv[0]
        return True
    return False


def parse(args: Sequence[Arg], read_line: ReadLine | None = None) -> list[Token]:
    """Build the commands of a pipeline from expanded arguments.

    Here-documents are read with ``read_line`` into temporary files. Raises
    HeredocInterrupted when one is interrupted and ParseError when a command
    is left without a name.
    """
    reader = read_line or _read_stdin
    finished: list[_TokenBuilder] = []
    current: _TokenBuilder | None = None
    stream = iter(args)
    for arg in stream:
        if current is None:
            current = _TokenBuilder(len(finished), reader)
        if arg.pipe:
            finished.append(current)
            current = None
        elif arg.redirect:
            target = next(stream, None)
            if target is None:
                raise ShellSyntaxError("newline")
            current.add_redirect(arg, target)
        else:
            current.add_word(arg.text)
    if current is not None:
        finished.append(current)

    tokens = [builder.token for builder in finished]
    named = all(_settle_command_name(token) for token in tokens)
    if any(builder.interrupted for builder in finished):
        raise HeredocInterrupted(tokens)
    if not named:
        raise ParseError(tokens)
    return tokens