# This file is part of Androguard.
#
# Copyright (C) 2012, Anthony Desnos <desnos at t0t0.fr>
# All rights reserved.
#
# Androguard is free software: you can redistribute it and/or modify
# it under the terms of the GNU Lesser General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# Androguard is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public License
# along with Androguard.  If not, see <http://www.gnu.org/licenses/>.

from arscparser.bytecode import read_uint8, read_uint16, read_uint32, read_bytes, strip_padding

RES_STRING_POOL_TYPE = 0x0001

SORTED_FLAG = 1 << 0
UTF8_FLAG = 1 << 8


class StringBlock:
    """Decodes a ResStringPool chunk into an ordinal -> string mapping.

    `header` is the already-read chunk header; decoding starts right after
    it. Offsets in the index are relative to `stringsStart` plus the chunk
    start. Style spans are not decoded.
    """

    def __init__(self, buff, header):
        self.start = header.start
        self.header = header

        offset = header.end
        self.stringCount, offset = read_uint32(buff, offset)
        self.styleCount, offset = read_uint32(buff, offset)
        self.flags, offset = read_uint32(buff, offset)
        self.m_isSorted = (self.flags & SORTED_FLAG) != 0
        self.m_isUTF8 = (self.flags & UTF8_FLAG) != 0
        self.stringsStart, offset = read_uint32(buff, offset)
        self.stylesStart, offset = read_uint32(buff, offset)

        self.m_strings = {}
        for i in range(0, self.stringCount):
            string_offset, offset = read_uint32(buff, offset)
            string_offset += self.stringsStart + self.start

            if self.m_isUTF8:
                s = self.decode_utf8(buff, string_offset)
            else:
                s = self.decode_utf16(buff, string_offset)
            self.m_strings[i] = strip_padding(s)

        self.end = offset

    def decode_utf16(self, buff, offset):
        length, offset = read_uint16(buff, offset)
        if length == 0:
            return ""

        data, _ = read_bytes(buff, offset, length * 2)
        return data.decode('utf-16-le', errors='replace')

    def decode_utf8(self, buff, offset):
        # The first byte is the length in characters; only the second one,
        # the encoded length, is used. Lengths above 127 use a two-byte
        # form that is not handled here.
        length, offset = read_uint8(buff, offset + 1)
        if length == 0:
            return ""

        data, _ = read_bytes(buff, offset, length)
        return data.decode('utf-8', errors='replace')

    def getRaw(self, idx):
        return self.m_strings.get(idx)

    def get_strings(self):
        return self.m_strings

    def __len__(self):
        return len(self.m_strings)

