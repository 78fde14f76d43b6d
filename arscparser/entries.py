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

from arscparser.bytecode import read_uint8, read_uint16, read_uint32, strip_padding
from arscparser.config import ARSCResTableConfig
from arscparser.errors import MalformedValueError, UnsupportedFeatureError

RES_TABLE_PACKAGE_TYPE = 0x0200
RES_TABLE_TYPE_TYPE = 0x0201
RES_TABLE_TYPE_SPEC_TYPE = 0x0202

NO_ENTRY = 0xFFFFFFFF

# ResTable_type flags
FLAG_SPARSE = 0x01
FLAG_OFFSET16 = 0x02

# ResTable_entry flags
FLAG_COMPLEX = 0x0001
FLAG_PUBLIC = 0x0002
FLAG_WEAK = 0x0004
FLAG_COMPACT = 0x0008

ENTRY_SIZE = 0x8
MAP_ENTRY_SIZE = 0x10


class ARSCResTablePackage:
    def __init__(self, buff, header):
        self.start = header.start
        self.header = header

        offset = header.end
        self.id, offset = read_uint32(buff, offset)
        chars = []
        for i in range(0, 128):
            c, offset = read_uint16(buff, offset)
            chars.append(chr(c))
        self.name = strip_padding(''.join(chars))
        self.typeStrings, offset = read_uint32(buff, offset)
        self.lastPublicType, offset = read_uint32(buff, offset)
        self.keyStrings, offset = read_uint32(buff, offset)
        self.lastPublicKey, offset = read_uint32(buff, offset)
        self.end = offset


class ARSCResTypeSpec:
    def __init__(self, buff, header, parent):
        self.start = header.start
        self.header = header

        offset = header.end
        self.id, offset = read_uint8(buff, offset)
        if self.id == 0:
            parent.raise_format_violation("File format violation in type spec table: id is zero", offset - 1)
        self.res0, offset = read_uint8(buff, offset)
        if self.res0 != 0:
            parent.raise_format_violation("File format violation in type spec table: res0 is not zero", offset - 1)
        self.typesCount, offset = read_uint16(buff, offset)
        self.entryCount, offset = read_uint32(buff, offset)
        self.end = offset


class ARSCResType:
    """ResTable_type header, its configuration and its entry index table."""

    def __init__(self, buff, header, parent):
        self.start = header.start
        self.header = header

        offset = header.end
        self.id, offset = read_uint8(buff, offset)
        if self.id == 0:
            parent.raise_format_violation("File format violation in type table: id is zero", offset - 1)
        self.flags, offset = read_uint8(buff, offset)
        if self.flags & FLAG_OFFSET16:
            raise UnsupportedFeatureError(
                "Unsupported resource type entry: FLAG_OFFSET16 at offset=0x%x" % (offset - 1))
        if self.flags & ~FLAG_SPARSE:
            parent.raise_format_violation("File format violation in type table: flags is not zero or one",
                                          offset - 1)
        self.reserved, offset = read_uint16(buff, offset)
        if self.reserved != 0:
            parent.raise_format_violation("File format violation in type table: reserved is not zero", offset - 2)
        self.entryCount, offset = read_uint32(buff, offset)
        self.entriesStart, offset = read_uint32(buff, offset)

        self.config = ARSCResTableConfig(buff, offset)
        self.end = self.config.end

    def is_sparse(self):
        return (self.flags & FLAG_SPARSE) == FLAG_SPARSE

    def get_entries(self, buff):
        """Yields (entry index, absolute entry offset) for present entries.

        Dense tables hold one u32 offset per index; sparse tables hold
        (u16 index, u16 offset / 4) pairs for the entries that exist.
        """
        offset = self.end
        base = self.start + self.entriesStart
        for i in range(0, self.entryCount):
            if self.is_sparse():
                idx, offset = read_uint16(buff, offset)
                entry_offset, offset = read_uint16(buff, offset)
                entry_offset *= 4
            else:
                idx = i
                entry_offset, offset = read_uint32(buff, offset)

            if entry_offset == NO_ENTRY:
                continue

            yield idx, base + entry_offset


class ARSCResTableEntry:
    """ResTable_entry, or ResTable_map_entry when `size` is 16.

    `end` points at the Res_value of a simple entry, or at the first
    ResTable_map of a map entry.
    """

    def __init__(self, buff, offset, parent):
        self.start = offset
        self.size, offset = read_uint16(buff, offset)
        if self.size not in (ENTRY_SIZE, MAP_ENTRY_SIZE):
            raise MalformedValueError("Unknown entry type of size 0x%x at offset=0x%x" % (self.size, self.start))

        self.flags, offset = read_uint16(buff, offset)
        if self.flags & FLAG_WEAK:
            parent.warn_once("FLAG_WEAK", "Unsupported ResTable entry flags encountered: FLAG_WEAK")
        if self.flags & FLAG_COMPACT:
            parent.warn_once("FLAG_COMPACT", "Unsupported ResTable entry flags encountered: FLAG_COMPACT")

        self.key, offset = read_uint32(buff, offset)

        self.parent = 0
        self.count = 0
        if self.size == MAP_ENTRY_SIZE:
            self.parent, offset = read_uint32(buff, offset)
            self.count, offset = read_uint32(buff, offset)

        self.end = self.start + self.size

    def is_complex(self):
        return (self.flags & FLAG_COMPLEX) == FLAG_COMPLEX

    def is_public(self):
        return (self.flags & FLAG_PUBLIC) == FLAG_PUBLIC
