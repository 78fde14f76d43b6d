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


class ResParserError(Exception):
    """Exception raised when parsing a resource table fails."""
    pass


class BufferUnderrunError(ResParserError):
    """Exception raised when trying to read beyond available buffer data."""
    pass


class TruncatedStreamError(ResParserError, IOError):
    """The stream ended before the size declared by the table header."""
    pass


class FormatViolationError(ResParserError):
    """A reserved or must-be-zero field holds a non-zero value."""

    def __init__(self, message, offset):
        super().__init__("%s offset=0x%x" % (message, offset))
        self.offset = offset


class UnsupportedFeatureError(ResParserError):
    """The table uses an encoding this parser does not implement."""
    pass


class StructuralInconsistencyError(ResParserError):
    """Chunks are missing, misplaced or reference undeclared items."""
    pass


class MalformedValueError(ResParserError):
    """A single entry cannot be decoded; the entry is skipped."""
    pass


class TableStateError(ResParserError):
    pass
