"""Implements the modified UTF-7 specification used for encoding and decoding
mailbox names in IMAP, and registers it as a Python codec.

Once :mod:`utf7imap` is imported, the codec is available by name::

    >>> 'Entwürfe'.encode('imap4-utf-7')
    b'Entw&APw-rfe'
    >>> b'Entw&APw-rfe'.decode('imap4-utf-7')
    'Entwürfe'

See Also:
    `RFC 3501 5.1.3 <https://tools.ietf.org/html/rfc3501#section-5.1.3>`_

"""

from __future__ import annotations

import codecs
import logging
import re
from typing import Final, Optional

from .exceptions import Utf7Error
from .framing import ErrorCallback, frame, unframe, unframe_partial
from .segment import is_printable, segment

__all__ = ['CODEC_NAME', 'CODEC_NAMES', 'encode', 'decode', 'encode_bytes',
           'decode_bytes', 'search_function']

_log = logging.getLogger(__name__)

#: The canonical name of the registered codec.
CODEC_NAME: Final = 'imap4-utf-7'

#: Every name the codec is found by, normalized the way :mod:`codecs`
#: normalizes names before calling search functions.
CODEC_NAMES: Final = frozenset({'imap4_utf_7', 'imap_utf_7', 'utf_7_imap'})

_surrogate_pattern: Final = re.compile('[\ud800-\udfff]')


def encode(text: str) -> str:
    """Encode the string using modified UTF-7.

    Args:
        text: The input string to encode.

    Raises:
        :exc:`~utf7imap.exceptions.UnpairedSurrogate`

    """
    return frame(segment(text))


def decode(text: str) -> str:
    """Decode the modified UTF-7 string. Either the entire string is decoded,
    or the first malformed shift sequence raises an exception.

    Args:
        text: The encoded string to decode.

    Raises:
        :exc:`~utf7imap.exceptions.Utf7Error`

    """
    return unframe(text)


def encode_bytes(text: str) -> bytes:
    """Encode the string using modified UTF-7, as the ASCII bytes sent on the
    wire.

    Args:
        text: The input string to encode.

    """
    return encode(text).encode('ascii')


def decode_bytes(data: bytes) -> str:
    """Decode the modified UTF-7 bytestring. Non-ASCII bytes are malformed
    input, and are reported in order with any malformed shift sequence.

    Args:
        data: The encoded bytestring to decode.

    Raises:
        :exc:`~utf7imap.exceptions.Utf7Error`

    """
    decoded, _ = _decode_with(data, 'strict')
    return decoded


def _replace_surrogates(text: str, errors: str) -> str:
    handler = codecs.lookup_error(errors)
    parts: list[str] = []
    pos = 0
    for match in _surrogate_pattern.finditer(text, pos):
        if match.start() < pos:
            continue
        parts.append(text[pos:match.start()])
        exc = UnicodeEncodeError(CODEC_NAME, text, match.start(),
                                 match.end(), 'surrogates not allowed')
        replacement, pos = handler(exc)
        if pos < 0:
            pos += len(text)
        if isinstance(replacement, bytes):
            replacement = str(replacement, 'ascii')
        parts.append(replacement)
    parts.append(text[pos:])
    return ''.join(parts)


def _error_callback(data: bytes, errors: str) -> ErrorCallback:
    handler = codecs.lookup_error(errors)

    def callback(err: Utf7Error) -> str:
        exc = UnicodeDecodeError(CODEC_NAME, data, err.start, err.end,
                                 err.reason)
        replacement, _ = handler(exc)
        if isinstance(replacement, bytes):
            return str(replacement, 'ascii')
        return replacement
    return callback


def _encode_with(text: str, errors: str) -> bytes:
    if errors != 'strict':
        text = _replace_surrogates(text, errors)
    return encode_bytes(text)


def _decode_with(data: bytes, errors: str, final: bool = True) \
        -> tuple[str, int]:
    # Each byte maps to one character, so indexes match the input bytes.
    text = str(data, 'ascii', 'surrogateescape')
    on_error = None if errors == 'strict' else _error_callback(data, errors)
    return unframe_partial(text, on_error, final=final, ascii_only=True)


class Codec(codecs.Codec):
    """Stateless modified UTF-7 codec."""

    def encode(self, input: str, errors: str = 'strict') \
            -> tuple[bytes, int]:
        return _encode_with(input, errors), len(input)

    def decode(self, input: bytes, errors: str = 'strict') \
            -> tuple[str, int]:
        return _decode_with(bytes(input), errors)


class IncrementalEncoder(codecs.BufferedIncrementalEncoder):
    """Holds back a trailing non-ASCII run until more input or the final
    call, so that a run split across chunks still gets one shift sequence.

    """

    def _buffer_encode(self, input: str, errors: str, final: bool) \
            -> tuple[bytes, int]:
        end = len(input)
        if not final:
            while end > 0 and not is_printable(input[end - 1]):
                end -= 1
        return _encode_with(input[:end], errors), end


class IncrementalDecoder(codecs.BufferedIncrementalDecoder):
    """Holds back an unterminated shift sequence until more input or the
    final call.

    """

    def _buffer_decode(self, input: bytes, errors: str, final: bool) \
            -> tuple[str, int]:
        return _decode_with(bytes(input), errors, final)


class StreamWriter(Codec, codecs.StreamWriter):
    pass


class StreamReader(Codec, codecs.StreamReader):
    """Holds back an unterminated shift sequence until more of the stream is
    read. Bytes still held back once the stream is exhausted are decoded as
    final input, so a shift sequence that is never closed raises.

    """

    _held = b''

    def decode(self, input: bytes, errors: str = 'strict') \
            -> tuple[str, int]:
        data = bytes(input)
        # At the end of the stream, only the held bytes are passed again.
        final = bool(self._held) and data == self._held
        decoded, consumed = _decode_with(data, errors, final)
        self._held = data[consumed:]
        return decoded, consumed

    def reset(self) -> None:
        super().reset()
        self._held = b''


def search_function(name: str) -> Optional[codecs.CodecInfo]:
    """The function registered with :func:`codecs.register` to find the
    modified UTF-7 codec.

    Args:
        name: The requested codec name.

    """
    normalized = name.lower().replace('-', '_').replace(' ', '_')
    if normalized not in CODEC_NAMES:
        return None
    _log.debug('Found codec %s for %r', CODEC_NAME, name)
    codec = Codec()
    return codecs.CodecInfo(
        name=CODEC_NAME,
        encode=codec.encode,
        decode=codec.decode,
        incrementalencoder=IncrementalEncoder,
        incrementaldecoder=IncrementalDecoder,
        streamwriter=StreamWriter,
        streamreader=StreamReader)


codecs.register(search_function)
