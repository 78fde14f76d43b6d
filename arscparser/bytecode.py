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

from struct import unpack_from

from arscparser.errors import BufferUnderrunError

# Characters java.lang.String.trim() removes: everything up to and
# including the space.
PADDING_CHARS = ''.join(chr(i) for i in range(0x21))


def _check(buff, offset, size):
    if offset < 0 or offset + size > len(buff):
        raise BufferUnderrunError(
            "read of %d bytes at 0x%x past end of buffer (0x%x)" % (size, offset, len(buff)))


def read_uint8(buff, offset):
    _check(buff, offset, 1)
    return buff[offset], offset + 1


def read_uint16(buff, offset):
    _check(buff, offset, 2)
    return unpack_from('<H', buff, offset)[0], offset + 2


def read_uint32(buff, offset):
    _check(buff, offset, 4)
    return unpack_from('<I', buff, offset)[0], offset + 4


def read_bytes(buff, offset, size):
    _check(buff, offset, size)
    return bytes(buff[offset:offset + size]), offset + size


def to_int32(value):
    value &= 0xFFFFFFFF
    if value & 0x80000000:
        return value - 0x100000000
    return value


def strip_padding(s):
    return s.strip(PADDING_CHARS)


class ARSCHeader:
    """Common chunk header: type, header size and total chunk size.

    `size` covers the header and the payload, so `start + size` is always
    the offset of the next sibling chunk.
    """

    SIZE = 8

    def __init__(self, buff, offset):
        self.start = offset
        self.type, offset = read_uint16(buff, offset)
        self.header_size, offset = read_uint16(buff, offset)
        self.size, offset = read_uint32(buff, offset)
        self.end = offset

    def get_next(self):
        return self.start + self.size

    def __repr__(self):
        return "<ARSCHeader type=0x%x header_size=0x%x size=0x%x at 0x%x>" % (
            self.type, self.header_size, self.size, self.start)
