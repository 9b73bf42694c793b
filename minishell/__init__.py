"""Lexing, expansion, parsing, builtins and pipeline execution for a small shell."""

__version__ = "1.0.0"
__all__ = [
    "builtins",
    "checker",
    "environment",
    "errors",
    "executor",
    "expand",
    "lexer",
    "model",
    "parser",
    "textutil",
]