# This file is part of bezier-superpowers.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from __future__ import annotations

import math
import re
from typing import Final

_argument_counts: Final = {
    "M": 2,
    "L": 2,
    "H": 1,
    "V": 1,
    "Z": 0,
    "C": 6,
    "S": 4,
    "Q": 4,
    "T": 2,
    "A": 7,
}
# Positions of the large-arc and sweep flags in an arc command.
_arc_flags: Final = frozenset({3, 4})

_separator: Final = re.compile(r"[\s,]*")
_command: Final = re.compile(r"[MmLlHhVvZzCcSsQqTtAa]")
_number: Final = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_flag: Final = re.compile(r"[01]")


class PathParser:
    """
    Tokenizer for SVG path data.

    The result keeps the numbers as strings so callers decide how to convert
    them. Implicitly repeated commands are expanded, where additional pairs
    after a move become line commands of the same relativity.
    """

    @staticmethod
    def parse(path: str) -> list[list[str]]:
        """
        Split SVG path data into commands.

        :param path: Path data such as ``"M 0 0 L 10 10 Z"``.
        :return: One list per command: the command letter followed by its
                 arguments.
        :raises ValueError: If the path data is malformed.
        """
        return _Scanner(path).commands()


class _Scanner:
    def __init__(self, path: str) -> None:
        self.path = path
        self.pos = 0

    def _skip_separators(self) -> None:
        m = _separator.match(self.path, self.pos)
        assert m is not None
        self.pos = m.end()

    def _at_end(self) -> bool:
        self._skip_separators()
        return self.pos >= len(self.path)

    def _error(self, reason: str, pos: int | None = None) -> ValueError:
        pos = self.pos if pos is None else pos
        return ValueError(f"malformed path (position {pos}): {reason}")

    def _take(self, pattern: re.Pattern[str], what: str) -> str:
        self._skip_separators()
        m = pattern.match(self.path, self.pos)
        if m is None:
            raise self._error(f"expected {what}")
        self.pos = m.end()
        return m.group(0)

    def _take_number(self) -> str:
        value = self._take(_number, "number")
        if not math.isfinite(float(value)):
            raise self._error("number out of range", self.pos - len(value))
        return value

    def _next_is_number(self) -> bool:
        self._skip_separators()
        return _number.match(self.path, self.pos) is not None

    def _arguments(self, key: str) -> list[str]:
        args: list[str] = []
        for idx in range(_argument_counts[key]):
            if key == "A" and idx in _arc_flags:
                args.append(self._take(_flag, "arc flag"))
            else:
                args.append(self._take_number())
        return args

    def commands(self) -> list[list[str]]:
        result: list[list[str]] = []
        while not self._at_end():
            cmd = self._take(_command, "command")
            if not result and cmd not in "Mm":
                raise self._error("path has to start with a move command")

            key = cmd.upper()
            result.append([cmd, *self._arguments(key)])
            if key == "Z":
                continue

            while self._next_is_number():
                if key == "M":
                    cmd = "l" if cmd.islower() else "L"
                    key = "L"
                result.append([cmd, *self._arguments(key)])
        return result
