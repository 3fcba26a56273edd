"""Option parsing for the command-line subcommands."""

from __future__ import annotations

import enum
import math
import re
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_NAME_WIDTH = 20


class UsageError(ValueError):
    """Raised when the options given to a subcommand cannot be accepted."""


class ArgType(enum.Enum):
    """The kind of value an option takes."""

    BOOL = ""
    STRING = " (string)"
    STRING_LIST = " (string)"
    INT = " (int)"
    DOUBLE = " (double)"

    def __new__(cls, suffix: str) -> ArgType:
        member = object.__new__(cls)
        member._value_ = len(cls.__members__)
        member.suffix = suffix
        return member

    @property
    def takes_value(self) -> bool:
        return self is not ArgType.BOOL


def _convert_int(text: str) -> int:
    stripped = text.strip()
    if not _INT_PATTERN.fullmatch(stripped):
        raise ValueError(text)
    value = int(stripped)
    if not _INT_MIN <= value <= _INT_MAX:
        raise ValueError(text)
    return value


def _convert_double(text: str) -> float:
    stripped = text.strip()
    if not stripped or "_" in stripped:
        raise ValueError(text)
    value = float(stripped)
    if math.isinf(value) and not stripped.lstrip("+-").lower().startswith("inf"):
        raise ValueError(text)
    return value


@dataclass(frozen=True)
class Argument:
    """One ``--name`` option of a subcommand."""

    name: str
    description: str
    type: ArgType
    required: bool = False

    def default(self) -> Any:
        return False if self.type is ArgType.BOOL else None

    def convert(self, text: str) -> Any:
        """Turn the option's raw text into its value; raises UsageError."""
        try:
            if self.type is ArgType.INT:
                return _convert_int(text)
            if self.type is ArgType.DOUBLE:
                return _convert_double(text)
        except ValueError:
            raise UsageError(
                f"invalid value for --{self.name}: {text!r}"
            ) from None
        return text


class ArgumentList:
    """The options a subcommand accepts, in the order they are listed."""

    def __init__(self, arguments: Iterable[Argument]) -> None:
        self._arguments: dict[str, Argument] = {}
        for argument in arguments:
            if argument.name in self._arguments:
                raise ValueError(f"duplicate option: --{argument.name}")
            self._arguments[argument.name] = argument

    @property
    def arguments(self) -> dict[str, Argument]:
        return dict(self._arguments)

    def parse(self, args: Sequence[str]) -> dict[str, Any]:
        """Parse the words after the subcommand into a value per option.

        Flags default to False and other options to None; a list option
        collects every value given. Raises UsageError on anything unknown,
        malformed or missing.
        """
        values = {name: arg.default() for name, arg in self._arguments.items()}
        given: set[str] = set()
        words = iter(args)
        for word in words:
            if not word.startswith("--"):
                raise UsageError(f"unexpected argument: {word!r}")
            name = word[2:]
            argument = self._arguments.get(name)
            if argument is None:
                raise UsageError(f"unknown option: {word}")
            if not argument.type.takes_value:
                values[name] = True
                given.add(name)
                continue
            try:
                text = next(words)
            except StopIteration:
                raise UsageError(f"option {word} needs a value") from None
            value = argument.convert(text)
            if argument.type is ArgType.STRING_LIST:
                if values[name] is None:
                    values[name] = []
                values[name].append(value)
            else:
                values[name] = value
            given.add(name)
        missing = [
            name
            for name, argument in self._arguments.items()
            if argument.required and name not in given
        ]
        if missing:
            raise UsageError(
                "missing required option(s): "
                + ", ".join(f"--{name}" for name in missing)
            )
        return values

    def usage(self, prog: str, command: str) -> str:
        """The usage text printed when parsing fails."""
        lines = [f"Usage: {prog} {command} [options...]"]
        for argument in self._arguments.values():
            label = (argument.name + argument.type.suffix).ljust(_NAME_WIDTH)
            lines.append(f"  --{label} {argument.description}")
        return "\n".join(lines) + "\n"