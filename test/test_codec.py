
import codecs
import io
import random
import unittest

import utf7imap
from utf7imap import encode, decode, encode_bytes, decode_bytes
from utf7imap.codec import CODEC_NAME, search_function
from utf7imap.exceptions import MalformedPayload, UnpairedSurrogate, \
    UnterminatedShiftSequence


class TestModUtf7(unittest.TestCase):

    tests = [
        ('', ''),
        ('Foo Bar', 'Foo Bar'),
        ('Stuff & Things', 'Stuff &- Things'),
        ('a&b', 'a&-b'),
        ('Отправленные', '&BB4EQgQ,BEAEMAQyBDsENQQ9BD0ESwQ1-'),
        ('Šiukšliadėžė', '&AWA-iuk&AWE-liad&ARcBfgEX-'),
        ('théâtre', 'th&AOkA4g-tre'),
        ('Entwürfe', 'Entw&APw-rfe'),
        ('Hello\xffworld', 'Hello&AP8-world'),
        ('\xff\xfe\xfd\xfc', '&AP8A,gD9APw-'),
        ('~peter/mail/日本語/台北',
         '~peter/mail/&ZeVnLIqe-/&U,BTFw-'),
        ('\x00foo', '&AAA-foo'),
        ('foo\r\n\nbar\n', 'foo&AA0ACgAK-bar&AAo-'),
        ('\U0001f600', '&2D3eAA-'),
        ('&\U0001f600&', '&-&2D3eAA-&-')]

    def test_encode(self) -> None:
        for plain, encoded in self.tests:
            self.assertEqual(encoded, encode(plain))

    def test_decode(self) -> None:
        for plain, encoded in self.tests:
            self.assertEqual(plain, decode(encoded))

    def test_printable_singletons(self) -> None:
        for char in map(chr, range(0x20, 0x7f)):
            if char == '&':
                continue
            self.assertEqual(char, encode(char))
            self.assertEqual(char, decode(char))
        self.assertEqual('&-', encode('&'))
        self.assertEqual('&', decode('&-'))

    def test_encoded_literal(self) -> None:
        self.assertEqual('&-AOk-', encode('&AOk-'))
        self.assertEqual('&AOk-', decode('&-AOk-'))

    def test_round_trip(self) -> None:
        rand = random.Random(3501)
        for _ in range(500):
            chars = []
            for _ in range(rand.randint(0, 24)):
                if rand.random() < 0.4:
                    chars.append(chr(rand.randint(0x20, 0x7e)))
                else:
                    code = rand.randint(0, 0x10ffff - 0x800)
                    if code >= 0xd800:
                        code += 0x800
                    chars.append(chr(code))
            text = ''.join(chars)
            encoded = encode(text)
            self.assertTrue(encoded.isascii())
            self.assertEqual(text, decode(encoded))
            self.assertEqual(encoded, encode(decode(encoded)))

    def test_decode_malformed(self) -> None:
        with self.assertRaises(MalformedPayload):
            decode('&@-')
        with self.assertRaises(UnterminatedShiftSequence):
            decode('Drafts&AOk')

    def test_encode_lone_surrogate(self) -> None:
        with self.assertRaises(UnpairedSurrogate):
            encode('abc\udc00')

    def test_bytes(self) -> None:
        self.assertEqual(b'th&AOkA4g-tre', encode_bytes('théâtre'))
        self.assertEqual('théâtre', decode_bytes(b'th&AOkA4g-tre'))
        self.assertEqual(b'', encode_bytes(''))
        self.assertEqual('', decode_bytes(b''))

    def test_bytes_non_ascii(self) -> None:
        with self.assertRaises(MalformedPayload) as raised:
            decode_bytes(b'th\xe9\xe2tre')
        self.assertEqual(2, raised.exception.start)

    def test_bytes_leftmost_error(self) -> None:
        with self.assertRaises(MalformedPayload) as raised:
            decode_bytes(b'&@-\xff')
        self.assertEqual(1, raised.exception.start)
        with self.assertRaises(MalformedPayload) as raised:
            decode_bytes(b'\xff&@-')
        self.assertEqual(0, raised.exception.start)

    def test_version(self) -> None:
        self.assertIsInstance(utf7imap.__version__, str)


class TestCodecRegistration(unittest.TestCase):

    def test_lookup(self) -> None:
        for name in ('imap4-utf-7', 'IMAP4_UTF_7', 'imap-utf-7',
                     'imap_utf_7', 'utf-7-imap'):
            self.assertEqual(CODEC_NAME, codecs.lookup(name).name)

    def test_search_function_unknown(self) -> None:
        self.assertIsNone(search_function('utf-7'))
        self.assertIsNone(search_function('imap4'))

    def test_str_encode(self) -> None:
        self.assertEqual(b'Entw&APw-rfe', 'Entwürfe'.encode('imap4-utf-7'))
        self.assertEqual('Entwürfe', b'Entw&APw-rfe'.decode('imap4-utf-7'))
        self.assertEqual('é', codecs.decode(memoryview(b'&AOk-'),
                                            'imap4-utf-7'))

    def test_strict_errors(self) -> None:
        with self.assertRaises(MalformedPayload):
            b'&@-'.decode('imap4-utf-7')
        with self.assertRaises(UnpairedSurrogate):
            '\ud800'.encode('imap4-utf-7')

    def test_decode_errors_handler(self) -> None:
        self.assertEqual('a\ufffdb', b'a&@-b'.decode('imap4-utf-7',
                                                    'replace'))
        self.assertEqual('ab', b'a&@-b'.decode('imap4-utf-7', 'ignore'))
        self.assertEqual('\ufffdé', b'\xff&AOk-'.decode('imap4-utf-7',
                                                       'replace'))

    def test_encode_errors_handler(self) -> None:
        self.assertEqual(b'a?&AOk-', 'a\ud800é'.encode('imap4-utf-7',
                                                      'replace'))
        self.assertEqual(b'a&AOk-', 'a\ud800é'.encode('imap4-utf-7',
                                                     'ignore'))

    def test_incremental_encoder(self) -> None:
        encoder = codecs.getincrementalencoder('imap4-utf-7')()
        self.assertEqual(b'th', encoder.encode('th\xe9'))
        self.assertEqual(b'', encoder.encode('\xe2'))
        self.assertEqual(b'&AOkA4g-tre', encoder.encode('tre', final=True))

    def test_incremental_decoder(self) -> None:
        decoder = codecs.getincrementaldecoder('imap4-utf-7')()
        self.assertEqual('th', decoder.decode(b'th&AOk'))
        self.assertEqual('éâtre', decoder.decode(b'A4g-tre'))
        with self.assertRaises(UnterminatedShiftSequence):
            decoder.decode(b'&AOk', final=True)

    def test_iterencode(self) -> None:
        chunks = ['Šiuk', 'š', 'liadė', 'žė']
        encoded = b''.join(codecs.iterencode(chunks, 'imap4-utf-7'))
        self.assertEqual(b'&AWA-iuk&AWE-liad&ARcBfgEX-', encoded)

    def test_stream(self) -> None:
        buf = io.BytesIO()
        writer = codecs.getwriter('imap4-utf-7')(buf)
        writer.write('théâtre')
        self.assertEqual(b'th&AOkA4g-tre', buf.getvalue())
        reader = codecs.getreader('imap4-utf-7')(
            io.BytesIO(b'&BB4EQgQ,BEAEMAQyBDsENQQ9BD0ESwQ1-'))
        self.assertEqual('Отправленные', reader.read())

    def test_stream_unterminated(self) -> None:
        reader = codecs.getreader('imap4-utf-7')(io.BytesIO(b'abc&AOk'))
        with self.assertRaises(UnterminatedShiftSequence):
            reader.read()

    def test_stream_chunked(self) -> None:
        reader = codecs.getreader('imap4-utf-7')(
            io.BytesIO(b'th&AOkA4g-tre'))
        self.assertEqual('théât', reader.read(5))
        self.assertEqual('re', reader.read())

    def test_incremental_decoder_interrupted(self) -> None:
        decoder = codecs.getincrementaldecoder('imap4-utf-7')()
        with self.assertRaises(MalformedPayload) as raised:
            decoder.decode(b'&AB&C')
        self.assertEqual(0, raised.exception.start)
        self.assertEqual(4, raised.exception.end)
        with self.assertRaises(MalformedPayload):
            decode('&AB&C-')

    def test_encode_negative_resume(self) -> None:
        def resume_from_end(exc: UnicodeError) -> tuple[str, int]:
            return '?', -2
        codecs.register_error('utf7imap-test-resume-from-end',
                              resume_from_end)
        self.assertEqual(b'a?bc', 'a\ud800bc'.encode(
            'imap4-utf-7', 'utf7imap-test-resume-from-end'))
