"""Wraps modified base64 payloads in ``&`` and ``-`` shift characters, and
finds those shift sequences again when decoding.

"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Final, Optional, TypeAlias

from .exceptions import Utf7Error, MalformedPayload, \
    UnterminatedShiftSequence
from .segment import Run, AsciiRun
from .transcode import encode_payload, decode_payload

__all__ = ['ShiftSpan', 'ErrorCallback', 'frame', 'unframe', 'unframe_partial',
           'iter_spans']

_log = logging.getLogger(__name__)

_shift_pattern: Final = re.compile(r'&([^&-]*)(-?)')
_non_ascii_pattern: Final = re.compile(r'[^\x00-\x7f]')

#: Called with each error found while decoding, returns the replacement text
#: for the offending input.
ErrorCallback: TypeAlias = Callable[[Utf7Error], str]


@dataclass(frozen=True)
class ShiftSpan:
    """The position of a shift sequence within encoded text.

    Args:
        start: Index of the ``&`` that opens the shift sequence.
        end: Index just past the ``-`` that closes the shift sequence, or
            past the last payload character if it was never closed.
        payload: The characters between the ``&`` and the ``-``.
        terminated: False if the shift sequence had no closing ``-``.

    """

    start: int
    end: int
    payload: str
    terminated: bool = True

    @property
    def is_escape(self) -> bool:
        """True if the shift sequence is ``&-``, a literal ``&``."""
        return self.terminated and not self.payload


def frame(runs: Iterable[Run]) -> str:
    """Produce the modified UTF-7 string for a sequence of runs. ASCII runs
    are copied with ``&`` escaped, other runs are encoded as a shift
    sequence.

    Args:
        runs: The runs of plain text, in order.

    """
    parts: list[str] = []
    for run in runs:
        if isinstance(run, AsciiRun):
            parts.append(run.encoded)
        else:
            parts.extend(('&', encode_payload(run.text), '-'))
    return ''.join(parts)


def iter_spans(text: str) -> Iterator[ShiftSpan]:
    """Find every shift sequence in the encoded text, from left to right.

    Every ``&`` in the text starts a span. A span that does not end with a
    ``-`` is still produced, with :attr:`~ShiftSpan.terminated` set to
    False.

    Args:
        text: The modified UTF-7 string.

    """
    for match in _shift_pattern.finditer(text):
        payload, dash = match.groups()
        yield ShiftSpan(match.start(), match.end(), payload, bool(dash))


def _decode_span(text: str, span: ShiftSpan) -> str:
    if not span.terminated:
        if span.end == len(text):
            raise UnterminatedShiftSequence(
                text, span.start, span.end, 'shift sequence missing "-"')
        raise MalformedPayload(text, span.start, span.end + 1,
                               'unexpected "&" in shift sequence')
    elif span.is_escape:
        return '&'
    try:
        return decode_payload(span.payload)
    except Utf7Error as exc:
        raise exc.with_offset(text, span.start + 1) from exc


def _recover(exc: Utf7Error, on_error: Optional[ErrorCallback]) -> str:
    _log.debug('Malformed input at %d: %s', exc.start, exc.reason)
    if on_error is None:
        raise exc
    return on_error(exc)


def _copy_text(text: str, start: int, end: int,
               on_error: Optional[ErrorCallback],
               ascii_only: bool) -> Iterator[str]:
    pos = start
    if ascii_only:
        for match in _non_ascii_pattern.finditer(text, start, end):
            yield text[pos:match.start()]
            exc = MalformedPayload(text, match.start(), match.end(),
                                   'non-ASCII character')
            yield _recover(exc, on_error)
            pos = match.end()
    yield text[pos:end]


def unframe_partial(text: str, on_error: Optional[ErrorCallback] = None, *,
                    final: bool = True, ascii_only: bool = False) \
        -> tuple[str, int]:
    """Decode a modified UTF-7 string in a single left-to-right pass. Text
    outside of shift sequences is copied unchanged and each shift sequence
    is replaced by the text it encodes, at its own position.

    Args:
        text: The modified UTF-7 string.
        on_error: If given, called with each error instead of raising it,
            and its return value replaces the offending input.
        final: If False, a shift sequence left open at the end of the text
            is not decoded, because more input may still close it.
        ascii_only: Report non-ASCII characters outside of shift sequences
            as :exc:`~utf7imap.exceptions.MalformedPayload`.

    Returns:
        The decoded text and the number of characters of ``text`` consumed.

    Raises:
        :exc:`~utf7imap.exceptions.Utf7Error`

    """
    parts: list[str] = []
    pos = 0
    end = len(text)
    for span in iter_spans(text):
        if not final and not span.terminated and span.end == len(text):
            end = span.start
            break
        parts.extend(_copy_text(text, pos, span.start, on_error, ascii_only))
        try:
            parts.append(_decode_span(text, span))
        except Utf7Error as exc:
            parts.append(_recover(exc, on_error))
        pos = span.end
    parts.extend(_copy_text(text, pos, end, on_error, ascii_only))
    return ''.join(parts), end


def unframe(text: str, on_error: Optional[ErrorCallback] = None, *,
            ascii_only: bool = False) -> str:
    """Decode an entire modified UTF-7 string. Either the whole string is
    decoded, or the first error raises (or goes to ``on_error``).

    See Also:
        :func:`unframe_partial`

    """
    decoded, _ = unframe_partial(text, on_error, ascii_only=ascii_only)
    return decoded
