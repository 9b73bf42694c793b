# minishell

The pieces of a small POSIX-style command shell, usable from Python. A command
line goes through these stages:

1. `minishell.lexer.tokenize(line)` splits it into words, quoted strings,
   pipes and redirection operators. An unclosed quote raises
   `minishell.errors.ShellSyntaxError`.
2. `minishell.checker.check_syntax(args)` rejects misplaced pipes and
   redirections by raising `ShellSyntaxError`. Its `status` is 258.
3. `minishell.expand.expand_args(args, env, status)` expands `$NAME` and `$?`
   and removes quotes. Text in single quotes is kept literally.
4. `minishell.parser.parse(args, read_line)` groups the words into `Token`
   commands with their redirections. It reads here-documents (`<< DELIM`)
   line by line with `read_line` into files named `heredoc_temp_<n>` in the
   current directory. It raises `ParseError` when a command has no name and
   `HeredocInterrupted` when reading is interrupted.
5. `minishell.executor.run_pipeline(tokens, state)` opens the redirections
   (`<`, `>`, `>>`) and connects the commands with pipes. Commands are looked
   up on `PATH` or run from an explicit path. The function returns the status
   of the last command.

The builtins `echo` (with `-n`), `cd`, `pwd`, `export`, `unset`, `env` and
`exit` live in `minishell.builtins`. A lone builtin runs on the shell state
itself. `exit` raises `minishell.builtins.ShellExit`, which carries the exit
status. Inside a longer pipeline a builtin runs on a copy of the state.

Environment variables are held in order by `minishell.environment.Environment`.

## Installation

```
pip install .
```

## Example

```python
import os

from minishell.checker import check_syntax
from minishell.environment import Environment
from minishell.executor import run_pipeline
from minishell.expand import expand_args
from minishell.lexer import tokenize
from minishell.model import ShellState
from minishell.parser import parse

state = ShellState(env=Environment.from_mapping(os.environ))
args = tokenize('echo "$HOME" | cat > out.txt')
check_syntax(args)
expand_args(args, state.env, state.status)
state.tokens = parse(args)
status = run_pipeline(state.tokens, state)
state.remove_heredocs()
```

## What it does not do

This package is a library only. It has no interactive prompt and installs no
command. There is no line editing and no history. It does not install
handlers for Ctrl-C or Ctrl-D. A program that wants a shell loop has to read
lines itself and pass each one through the stages above.

## Running the tests

```
pip install .[test]
pytest
```