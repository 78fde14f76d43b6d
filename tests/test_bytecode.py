import struct
import unittest

from arscparser import bytecode
from arscparser.errors import BufferUnderrunError


class BytecodeTest(unittest.TestCase):
    def testReadUint8(self):
        self.assertEqual((0xab, 2), bytecode.read_uint8(b'\x00\xab', 1))

    def testReadUint16_LittleEndian(self):
        self.assertEqual((0x1234, 2), bytecode.read_uint16(b'\x34\x12', 0))

    def testReadUint32_LittleEndian(self):
        self.assertEqual((0xdeadbeef, 5), bytecode.read_uint32(b'\x00\xef\xbe\xad\xde', 1))

    def testReadBytes(self):
        self.assertEqual((b'bc', 3), bytecode.read_bytes(b'abcd', 1, 2))

    def testReadPastEnd(self):
        with self.assertRaises(BufferUnderrunError):
            bytecode.read_uint32(b'\x00\x00\x00', 0)
        with self.assertRaises(BufferUnderrunError):
            bytecode.read_uint16(b'\x00\x00', 1)
        with self.assertRaises(BufferUnderrunError):
            bytecode.read_bytes(b'abc', 2, 2)

    def testReadNegativeOffset(self):
        with self.assertRaises(BufferUnderrunError):
            bytecode.read_uint8(b'\x00', -1)

    def testToInt32(self):
        self.assertEqual(-1, bytecode.to_int32(0xFFFFFFFF))
        self.assertEqual(0x7FFFFFFF, bytecode.to_int32(0x7FFFFFFF))
        self.assertEqual(-0x80000000, bytecode.to_int32(0x80000000))

    def testStripPadding(self):
        self.assertEqual('com.example', bytecode.strip_padding('\x00 com.example\x00\x00\t'))
        self.assertEqual('', bytecode.strip_padding('\x00' * 8))

    def testChunkHeader(self):
        buff = b'\xff' * 4 + struct.pack('<HHI', 0x0201, 0x54, 0x100)
        header = bytecode.ARSCHeader(buff, 4)
        self.assertEqual(0x0201, header.type)
        self.assertEqual(0x54, header.header_size)
        self.assertEqual(0x100, header.size)
        self.assertEqual(12, header.end)
        self.assertEqual(0x104, header.get_next())


if __name__ == '__main__':
    unittest.main()
