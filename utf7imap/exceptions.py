"""Exceptions raised when text cannot be converted to or from modified
UTF-7.

"""

from __future__ import annotations

from typing import Final, Optional

__all__ = ['Utf7Error', 'MalformedPayload', 'OddByteBuffer',
           'UnpairedSurrogate', 'UnterminatedShiftSequence']


class Utf7Error(ValueError):
    """The base exception for all modified UTF-7 conversion errors.

    Args:
        text: The full input that failed to convert.
        start: Index in ``text`` where the offending span starts.
        end: Index in ``text`` where the offending span ends.
        reason: Description of what was wrong with the span.

    """

    error_indicator = '[:ERROR:]'

    __slots__ = ['text', 'start', 'end', 'reason', '_rendered']

    def __init__(self, text: str, start: int = 0, end: Optional[int] = None,
                 reason: str = 'invalid modified UTF-7') -> None:
        super().__init__(reason)
        self.text: Final = text
        self.start: Final = start
        self.end: Final = len(text) if end is None else end
        self.reason: Final = reason
        self._rendered: Optional[str] = None

    @property
    def span(self) -> str:
        """The substring of :attr:`.text` that caused the error."""
        return self.text[self.start:self.end]

    def with_offset(self, text: str, offset: int) -> Utf7Error:
        """Copy the error, moving its span into a larger input that contained
        the original input at ``offset``.

        Args:
            text: The larger input.
            offset: Where the original input begins within ``text``.

        """
        return type(self)(text, self.start + offset, self.end + offset,
                          self.reason)

    def __str__(self) -> str:
        if self._rendered is not None:
            return self._rendered
        marked = self.error_indicator.join(
            (self.text[:self.start], self.text[self.start:]))
        self._rendered = rendered = f'{self.reason}: {marked!r}'
        return rendered


class MalformedPayload(Utf7Error):
    """The payload of a shift sequence is not valid modified base64, or the
    encoded input contains something other than printable ASCII and shift
    sequences.

    """
    pass


class OddByteBuffer(Utf7Error):
    """The payload decoded to an odd number of bytes, which cannot be split
    into UTF-16 code units.

    """
    pass


class UnpairedSurrogate(Utf7Error):
    """A UTF-16 high surrogate was not followed by a low surrogate, or a low
    surrogate appeared on its own.

    """
    pass


class UnterminatedShiftSequence(Utf7Error):
    """A ``&`` shift character was never followed by the ``-`` that shifts
    back to ASCII.

    """
    pass
