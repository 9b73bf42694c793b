"""The shell's ordered list of environment variables."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from .textutil import c_compare, split_fields


@dataclass
class _Entry:
    name: str
    value: str


def split_assignment(arg: str) -> tuple[str, str]:
    """Split an ``export`` argument into its name and the text after the first '='.

    Leading '=' characters are skipped. A missing value comes back as "".
    """
    stripped = arg.lstrip("=")
    if not stripped:
        return "", ""
    name, _, value = stripped.partition("=")
    return name, value


class Environment:
    """Environment variables kept in insertion order."""

    def __init__(self, entries: Iterable[tuple[str, str]] = ()) -> None:
        self._entries = [_Entry(name, value) for name, value in entries]

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> Environment:
        """Build from ``NAME=value`` pairs, keeping only the first '='-field as value.

        Variables whose name or value would be empty are left out.
        """
        pairs = []
        for name, value in mapping.items():
            fields = split_fields(f"{name}={value}", "=")
            if len(fields) >= 2:
                pairs.append((fields[0], fields[1]))
        return cls(pairs)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter([(entry.name, entry.value) for entry in self._entries])

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, name: str) -> str | None:
        """Value of the first variable whose name begins with ``name``."""
        for entry in self._entries:
            if c_compare(name, entry.name, len(name)) == 0:
                return entry.value
        return None

    def replace(self, name: str, value: str, has_value: bool) -> bool:
        """Set an existing variable; return False if there is none of that name.

        An empty ``value`` without ``has_value`` leaves the variable untouched.
        """
        for entry in self._entries:
            if entry.name == name:
                if value == "" and not has_value:
                    return True
                entry.value = value
                return True
        return False

    def append(self, name: str, value: str) -> None:
        """Add a new variable at the end."""
        self._entries.append(_Entry(name, value))

    def remove(self, name: str) -> bool:
        """Remove the first variable whose name begins with ``name``."""
        for pos, entry in enumerate(self._entries):
            if c_compare(name, entry.name, len(name)) == 0:
                del self._entries[pos]
                return True
        return False

    def to_envp(self) -> list[str]:
        """The variables as ``NAME=value`` strings for a child process."""
        return [f"{entry.name}={entry.value}" for entry in self._entries]

    def find_executable(self, command: str) -> str | None:
        """Look ``command`` up in the directories listed in PATH."""
        if not command:
            return None
        path_entry = next(
            (e for e in self._entries if c_compare(e.name, "PATH", 4) == 0), None
        )
        if path_entry is None:
            return None
        for directory in split_fields(path_entry.value, ":"):
            candidate = f"{directory}/{command}"
            if os.access(candidate, os.X_OK):
                return candidate
        return None