import unittest

from arscparser.bytecode import ARSCHeader
from arscparser.stringblock import StringBlock
from tests import arsc_builder


def _decode(raw):
    return StringBlock(raw, ARSCHeader(raw, 0))


class StringBlockTest(unittest.TestCase):
    def testUtf16(self):
        pool = _decode(arsc_builder.string_pool(['app_name', 'Hello', 'Ünïcode']))
        self.assertFalse(pool.m_isUTF8)
        self.assertEqual(3, len(pool))
        self.assertEqual({0: 'app_name', 1: 'Hello', 2: 'Ünïcode'}, pool.get_strings())

    def testUtf8(self):
        pool = _decode(arsc_builder.string_pool(['héllo', 'wörld'], utf8=True))
        self.assertTrue(pool.m_isUTF8)
        self.assertEqual('héllo', pool.getRaw(0))
        self.assertEqual('wörld', pool.getRaw(1))

    def testEmptyStrings(self):
        pool = _decode(arsc_builder.string_pool(['', 'x', '']))
        self.assertEqual(['', 'x', ''], [pool.getRaw(i) for i in range(3)])
        pool = _decode(arsc_builder.string_pool(['', 'x'], utf8=True))
        self.assertEqual(['', 'x'], [pool.getRaw(i) for i in range(2)])

    def testStringsAreTrimmed(self):
        pool = _decode(arsc_builder.string_pool(['  padded \n', '\tx']))
        self.assertEqual('padded', pool.getRaw(0))
        self.assertEqual('x', pool.getRaw(1))

    def testEmptyPool(self):
        pool = _decode(arsc_builder.string_pool([]))
        self.assertEqual({}, pool.get_strings())
        self.assertIsNone(pool.getRaw(0))

    def testPoolNotAtBufferStart(self):
        raw = b'\x00' * 8 + arsc_builder.string_pool(['a', 'bc'])
        pool = StringBlock(raw, ARSCHeader(raw, 8))
        self.assertEqual({0: 'a', 1: 'bc'}, pool.get_strings())
        self.assertEqual(8 + 28 + 8, pool.end)

    def testLoneSurrogatesAreReplaced(self):
        pool = _decode(arsc_builder.string_pool(['a\ud800b', '\udc00', '\ud800']))
        self.assertEqual(['a\ufffdb', '\ufffd', '\ufffd'], [pool.getRaw(i) for i in range(3)])
        for s in pool.get_strings().values():
            s.encode('utf-8')

    def testUtf8_OneByteLengthPrefix(self):
        pool = _decode(arsc_builder.string_pool(['a' * 127], utf8=True))
        self.assertEqual('a' * 127, pool.getRaw(0))

    def testUtf8_LongStringReadsLowLengthByteOnly(self):
        # 200 bytes are stored as 0x80 0xc8 0x80 0xc8 + data; the decode
        # starts after the first two bytes and reads 0xc8 bytes from there.
        raw = arsc_builder.string_pool(['a' * 200], utf8=True)
        self.assertEqual(b'\x80\xc8\x80\xc8', raw[32:36])
        pool = _decode(raw)
        self.assertEqual('\ufffd\ufffd' + 'a' * 198, pool.getRaw(0))


if __name__ == '__main__':
    unittest.main()
