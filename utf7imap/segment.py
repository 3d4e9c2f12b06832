"""Splits plain text into the runs that modified UTF-7 treats differently:
printable US-ASCII, which represents itself, and everything else, which must
be shifted into modified base64.

See Also:
    `RFC 3501 5.1.3 <https://tools.ietf.org/html/rfc3501#section-5.1.3>`_

"""

from __future__ import annotations

import re
from abc import ABCMeta
from typing import Final

__all__ = ['Run', 'AsciiRun', 'NonAsciiRun', 'segment', 'is_printable']

_run_pattern: Final = re.compile(r'([\x20-\x7e]+)|([^\x20-\x7e]+)')


def is_printable(char: str) -> bool:
    """True if the character is printable US-ASCII, and so represents itself
    in modified UTF-7.

    Args:
        char: A single character.

    """
    return 0x20 <= ord(char) <= 0x7e


class Run(metaclass=ABCMeta):
    """A maximal span of input characters of the same class.

    Args:
        text: The characters of the run, as they appeared in the input.

    """

    __slots__ = ['text']

    def __init__(self, text: str) -> None:
        super().__init__()
        self.text: Final = text

    def __hash__(self) -> int:
        return hash((type(self), self.text))

    def __eq__(self, other) -> bool:
        if isinstance(other, Run):
            return type(self) is type(other) and self.text == other.text
        return NotImplemented

    def __len__(self) -> int:
        return len(self.text)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.text!r})'


class AsciiRun(Run):
    """A run of printable US-ASCII characters."""

    __slots__: list[str] = []

    @property
    def encoded(self) -> str:
        """The run with every ``&`` escaped as ``&-``."""
        return self.text.replace('&', '&-')


class NonAsciiRun(Run):
    """A run of characters that must be encoded in modified base64."""

    __slots__: list[str] = []


def segment(text: str) -> list[Run]:
    """Split the text into alternating :class:`AsciiRun` and
    :class:`NonAsciiRun` objects. Runs are maximal, so two runs of the same
    class are never adjacent, and joining the :attr:`~Run.text` of every run
    gives back the original text.

    Args:
        text: The plain text to split.

    """
    runs: list[Run] = []
    for match in _run_pattern.finditer(text):
        ascii_text, other_text = match.groups()
        if ascii_text is not None:
            runs.append(AsciiRun(ascii_text))
        else:
            runs.append(NonAsciiRun(other_text))
    return runs
