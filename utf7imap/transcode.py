"""Converts runs of non-ASCII text to and from the modified base64 payload
carried inside a shift sequence.

The payload is the standard base64 encoding of the run's UTF-16BE code
units, with ``/`` replaced by ``,`` and all ``=`` padding removed.

"""

from __future__ import annotations

import binascii
import re
from base64 import b64decode, b64encode
from typing import Final

from .exceptions import MalformedPayload, OddByteBuffer, UnpairedSurrogate

__all__ = ['encode_payload', 'decode_payload']

_invalid_pattern: Final = re.compile(r'[^A-Za-z0-9+,]')


def encode_payload(text: str) -> str:
    """Encode a run of characters into a modified base64 payload.

    Args:
        text: The characters to encode.

    Raises:
        UnpairedSurrogate: The string contains a lone surrogate code point,
            which has no UTF-16 representation.

    """
    try:
        utf16 = text.encode('utf-16-be')
    except UnicodeEncodeError as exc:
        raise UnpairedSurrogate(text, exc.start, exc.end,
                                'lone surrogate code point') from exc
    b64 = b64encode(utf16).rstrip(b'=')
    return str(b64.replace(b'/', b','), 'ascii')


def decode_payload(payload: str) -> str:
    """Decode a modified base64 payload back into the characters it encodes.

    Args:
        payload: The payload, without its ``&`` and ``-`` delimiters.

    Raises:
        MalformedPayload: The payload is not valid modified base64.
        OddByteBuffer: The payload does not decode to whole UTF-16 code units.
        UnpairedSurrogate: The UTF-16 code units contain a lone surrogate.

    """
    invalid = _invalid_pattern.search(payload)
    if invalid is not None:
        raise MalformedPayload(payload, invalid.start(), invalid.end(),
                               'invalid modified base64 character')
    elif len(payload) % 4 == 1:
        raise MalformedPayload(payload, reason='truncated modified base64')
    b64 = payload.replace(',', '/').encode('ascii')
    b64 += b'=' * (-len(b64) % 4)
    try:
        utf16 = b64decode(b64, validate=True)
    except binascii.Error as exc:
        raise MalformedPayload(payload, reason=str(exc)) from exc
    if len(utf16) % 2 != 0:
        raise OddByteBuffer(payload, reason='odd number of UTF-16 bytes')
    try:
        return utf16.decode('utf-16-be')
    except UnicodeDecodeError as exc:
        raise UnpairedSurrogate(payload, reason=exc.reason) from exc
