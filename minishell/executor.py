"""Running parsed commands: redirections, PATH lookup and pipelines."""

from __future__ import annotations

import copy
import io
import os
import subprocess
import sys
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from typing import BinaryIO

from .builtins import ShellExit, run_builtin
from .environment import Environment
from .errors import PREFIX, CommandError, CommandKind, ErrorKind, classify_command
from .model import FileMode, ShellState, Token


class RedirectionError(Exception):
    """A redirection target could not be opened."""

    status = 1

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{PREFIX}{path}: {reason}")


def open_redirections(token: Token) -> tuple[BinaryIO | None, BinaryIO | None]:
    """Open the redirection targets of ``token`` in order.

    Returns the last input file and the last output file, or None where the
    command has none. Every earlier target is opened (and output files are
    created) and then closed again.
    """
    source: BinaryIO | None = None
    sink: BinaryIO | None = None
    try:
        for mode, path in token.redirections:
            if mode == FileMode.INFILE:
                try:
                    opened = open(path, "rb")
                except OSError:
                    raise RedirectionError(path, "No such file or directory") from None
                if source is not None:
                    source.close()
                source = opened
            else:
                flags = "ab" if mode == FileMode.APPEND else "wb"
                try:
                    opened = open(path, flags)
                except OSError:
                    token.error = True
                    raise RedirectionError(path, "Permission denied") from None
                if sink is not None:
                    sink.close()
                sink = opened
    except RedirectionError:
        for handle in (source, sink):
            if handle is not None:
                handle.close()
        raise
    return source, sink


def _command_name(token: Token) -> str:
    if token.cmd_str:
        return token.cmd_str
    return token.argv[0] if token.argv else ""


def resolve_command(token: Token, env: Environment) -> str | None:
    """Path of the program to run for ``token``; None for a built-in.

    Raises CommandError when the command cannot be run.
    """
    name = _command_name(token)
    kind = classify_command(token)
    if kind is CommandKind.BUILTIN:
        return None
    if kind is CommandKind.SEARCH_PATH:
        path = env.find_executable(name)
        if path is None:
            raise CommandError(name, ErrorKind.NOT_FOUND)
        if os.path.isdir(path):
            if name == ".":
                raise CommandError(name, ErrorKind.FILENAME_REQUIRED)
            raise CommandError(name, ErrorKind.NOT_FOUND)
        return path
    if not os.access(name, os.F_OK):
        raise CommandError(name, ErrorKind.NO_SUCH_FILE)
    if not os.access(name, os.X_OK):
        raise CommandError(name, ErrorKind.PERMISSION_DENIED)
    if os.path.isdir(name):
        raise CommandError(name, ErrorKind.IS_DIRECTORY)
    return name


@dataclass
class _Finished:
    status: int
    writer: threading.Thread | None = None

    def wait(self) -> int:
        if self.writer is not None:
            self.writer.join()
        return self.status


@dataclass
class _Running:
    process: subprocess.Popen

    def wait(self) -> int:
        code = self.process.wait()
        # A child killed by a signal reports 128 plus the signal number.
        return 128 - code if code < 0 else code


def _drain(fd: int, data: bytes) -> None:
    try:
        view = memoryview(data)
        while view:
            written = os.write(fd, view)
            view = view[written:]
    except OSError:
        pass
    finally:
        os.close(fd)


def _builtin_job(
    token: Token, state: ShellState, tokens: Sequence[Token], out_fd: int | None
) -> _Finished:
    """Run a built-in of a pipeline without touching the shell's own state."""
    child = ShellState(
        env=copy.deepcopy(state.env), status=state.status, tokens=list(tokens)
    )
    buffer = io.StringIO()
    cwd = os.getcwd()
    try:
        run_builtin(token, child, buffer)
        status = child.status
    except ShellExit as exc:
        status = exc.status
    finally:
        os.chdir(cwd)
    text = buffer.getvalue()
    if out_fd is None:
        sys.stdout.write(text)
        sys.stdout.flush()
        return _Finished(status)
    writer = threading.Thread(
        target=_drain, args=(os.dup(out_fd), text.encode("utf-8")), daemon=True
    )
    writer.start()
    return _Finished(status, writer)


def _spawn(token: Token, env: Environment, in_fd: int | None, out_fd: int | None) -> _Running:
    path = resolve_command(token, env)
    name = _command_name(token)
    try:
        process = subprocess.Popen(
            token.argv,
            executable=path,
            stdin=in_fd,
            stdout=out_fd,
            env=dict(iter(env)),
        )
    except OSError as exc:
        if classify_command(token) is CommandKind.PATH:
            kind = ErrorKind.NO_SUCH_FILE
        elif isinstance(exc, PermissionError) and name == ".":
            kind = ErrorKind.FILENAME_REQUIRED
        else:
            kind = ErrorKind.NOT_FOUND
        raise CommandError(name, kind) from None
    return _Running(process)


def _launch(
    token: Token,
    state: ShellState,
    tokens: Sequence[Token],
    stdin_fd: int | None,
    stdout_fd: int | None,
) -> _Finished | _Running:
    try:
        source, sink = open_redirections(token)
    except RedirectionError as exc:
        sys.stderr.write(f"{exc}\n")
        return _Finished(exc.status)
    try:
        if token.cmd_str is None:
            return _Finished(state.status)
        in_fd = source.fileno() if source is not None else stdin_fd
        out_fd = sink.fileno() if sink is not None else stdout_fd
        if classify_command(token) is CommandKind.BUILTIN:
            return _builtin_job(token, state, tokens, out_fd)
        return _spawn(token, state.env, in_fd, out_fd)
    except CommandError as exc:
        sys.stderr.write(exc.message())
        return _Finished(exc.status)
    finally:
        for handle in (source, sink):
            if handle is not None:
                handle.close()


def _run_single_builtin(token: Token, state: ShellState) -> int:
    try:
        source, sink = open_redirections(token)
    except RedirectionError as exc:
        sys.stderr.write(f"{exc}\n")
        return exc.status
    if source is not None:
        source.close()
    if sink is None:
        run_builtin(token, state)
        return state.status
    with io.TextIOWrapper(sink, encoding="utf-8", write_through=True) as out:
        run_builtin(token, state, out)
    return state.status


def run_pipeline(tokens: Sequence[Token], state: ShellState) -> int:
    """Run the commands of a pipeline and return the status of the last one.

    A lone built-in runs in the shell itself and may raise ShellExit; inside
    a longer pipeline built-ins run on a copy of the shell state.
    """
    if not tokens:
        return state.status
    if len(tokens) == 1 and tokens[0].is_builtin and not tokens[0].error:
        state.status = _run_single_builtin(tokens[0], state)
        return state.status
    sys.stdout.flush()
    sys.stderr.flush()
    jobs: list[_Finished | _Running] = []
    upstream: int | None = None
    last = len(tokens) - 1
    for pos, token in enumerate(tokens):
        read_end = write_end = None
        if pos < last:
            read_end, write_end = os.pipe()
        try:
            job = _launch(token, state, tokens, upstream, write_end)
        except BaseException:
            if read_end is not None:
                os.close(read_end)
            raise
        finally:
            for fd in (upstream, write_end):
                if fd is not None:
                    os.close(fd)
        jobs.append(job)
        upstream = read_end
    statuses = [job.wait() for job in jobs]
    state.status = statuses[-1]
    return state.status