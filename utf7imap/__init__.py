"""Encoding and decoding of IMAP mailbox names with modified UTF-7.

Importing this package also registers the ``imap4-utf-7`` codec.

See Also:
    `RFC 3501 5.1.3 <https://tools.ietf.org/html/rfc3501#section-5.1.3>`_
    `PEP 396 <https://www.python.org/dev/peps/pep-0396/>`_

"""

from importlib.metadata import distribution

from .codec import encode, decode, encode_bytes, decode_bytes
from .exceptions import Utf7Error, MalformedPayload, OddByteBuffer, \
    UnpairedSurrogate, UnterminatedShiftSequence

__all__ = ['__version__', 'encode', 'decode', 'encode_bytes', 'decode_bytes',
           'Utf7Error', 'MalformedPayload', 'OddByteBuffer',
           'UnpairedSurrogate', 'UnterminatedShiftSequence']

#: The package version string.
__version__: str = distribution(__package__).version
