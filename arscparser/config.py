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

from arscparser import androconf
from arscparser.bytecode import read_uint8, read_uint16, read_uint32, read_bytes

# Size of the fields every configuration record carries, `size` included.
BASE_CONFIG_SIZE = 28
# Size up to which every field is known; anything after is reserved.
KNOWN_CONFIG_SIZE = 48

DENSITIES = {
    120: 'ldpi',
    160: 'mdpi',
    213: 'tvdpi',
    240: 'hdpi',
    320: 'xhdpi',
    480: 'xxhdpi',
    640: 'xxxhdpi',
    0xfffe: 'anydpi',
    0xffff: 'nodpi',
}

ORIENTATIONS = {1: 'port', 2: 'land', 3: 'square'}

TOUCHSCREENS = {1: 'notouch', 2: 'finger', 3: 'stylus'}

KEYBOARDS = {1: 'nokeys', 2: 'qwerty', 3: '12key'}

NAVIGATIONS = {1: 'nonav', 2: 'dpad', 3: 'trackball', 4: 'wheel'}

KEYS_HIDDEN = {1: 'keysexposed', 2: 'keyshidden', 3: 'keyssoft'}

SCREEN_SIZES = {1: 'small', 2: 'normal', 3: 'large', 4: 'xlarge'}

SCREEN_LONG = {1: 'notlong', 2: 'long'}

LAYOUT_DIRS = {1: 'ldltr', 2: 'ldrtl'}

UI_MODE_TYPES = {
    2: 'desk',
    3: 'car',
    4: 'television',
    5: 'appliance',
    6: 'watch',
    7: 'vrheadset',
}

UI_MODE_NIGHT = {1: 'notnight', 2: 'night'}

FIELDS = (
    "size", "mcc", "mnc", "language", "country", "orientation",
    "touchscreen", "density", "keyboard", "navigation", "inputFlags",
    "inputPad0", "screenWidth", "screenHeight", "sdkVersion", "minorVersion",
    "screenLayout", "uiMode", "smallestScreenWidthDp", "screenWidthDp",
    "screenHeightDp", "localeScript", "localeVariant",
)


def _chars(buff, offset, count):
    data, offset = read_bytes(buff, offset, count)
    return ''.join(chr(c) for c in data), offset


def _unpack_locale_code(code, base):
    # Two letters are stored as plain ASCII; three letters are packed into
    # 5-bit units with the high bit of the first byte set.
    first, second = ord(code[0]), ord(code[1])
    if first & 0x80 == 0:
        return code.rstrip('\x00')
    return ''.join(chr(base + c) for c in (second & 0x1f,
                                           ((first & 0x3) << 3) | (second >> 5),
                                           (first >> 2) & 0x1f))


class ARSCResTableConfig:
    """A ResTable_config record.

    The record grew over platform releases, so `size` says which trailing
    fields are present. Fields the record does not hold keep their zero
    default. Once parsed, `end` is the offset right after the last byte
    consumed.
    """

    def __init__(self, buff=None, offset=0):
        self.start = offset
        self.size = 0
        self.mcc = 0
        self.mnc = 0
        self.language = '\x00\x00'
        self.country = '\x00\x00'
        self.orientation = 0
        self.touchscreen = 0
        self.density = 0
        self.keyboard = 0
        self.navigation = 0
        self.inputFlags = 0
        self.inputPad0 = 0
        self.screenWidth = 0
        self.screenHeight = 0
        self.sdkVersion = 0
        self.minorVersion = 0
        self.screenLayout = 0
        self.uiMode = 0
        self.smallestScreenWidthDp = 0
        self.screenWidthDp = 0
        self.screenHeightDp = 0
        self.localeScript = '\x00' * 4
        self.localeVariant = '\x00' * 8
        self.end = offset

        if buff is not None:
            self.end = self._parse(buff, offset)

    def _parse(self, buff, offset):
        self.size, offset = read_uint32(buff, offset)
        self.mcc, offset = read_uint16(buff, offset)
        self.mnc, offset = read_uint16(buff, offset)
        self.language, offset = _chars(buff, offset, 2)
        self.country, offset = _chars(buff, offset, 2)
        self.orientation, offset = read_uint8(buff, offset)
        self.touchscreen, offset = read_uint8(buff, offset)
        self.density, offset = read_uint16(buff, offset)
        self.keyboard, offset = read_uint8(buff, offset)
        self.navigation, offset = read_uint8(buff, offset)
        self.inputFlags, offset = read_uint8(buff, offset)
        self.inputPad0, offset = read_uint8(buff, offset)
        self.screenWidth, offset = read_uint16(buff, offset)
        self.screenHeight, offset = read_uint16(buff, offset)
        self.sdkVersion, offset = read_uint16(buff, offset)
        self.minorVersion, offset = read_uint16(buff, offset)
        if self.size <= 28:
            return offset

        self.screenLayout, offset = read_uint8(buff, offset)
        self.uiMode, offset = read_uint8(buff, offset)
        self.smallestScreenWidthDp, offset = read_uint16(buff, offset)
        if self.size <= 32:
            return offset

        self.screenWidthDp, offset = read_uint16(buff, offset)
        self.screenHeightDp, offset = read_uint16(buff, offset)
        if self.size <= 36:
            return offset

        self.localeScript, offset = _chars(buff, offset, 4)
        if self.size <= 40:
            return offset

        self.localeVariant, offset = _chars(buff, offset, 8)
        if self.size <= KNOWN_CONFIG_SIZE:
            return offset

        exceeding_size = self.size - KNOWN_CONFIG_SIZE
        padding, offset = read_bytes(buff, offset, exceeding_size)
        if any(padding):
            androconf.debug("Excessive %d non-null bytes in ResTable_config ignored: 0x%s" % (
                exceeding_size, padding.hex()))
        return offset

    def get_language(self):
        return self.language

    def get_country(self):
        return self.country

    def get_locale_script(self):
        return self.localeScript.rstrip('\x00')

    def get_locale_variant(self):
        return self.localeVariant.rstrip('\x00')

    def get_qualifier_tokens(self):
        if self.mcc:
            yield 'mcc%d' % self.mcc
        if self.mnc:
            yield 'mnc%d' % self.mnc

        language = _unpack_locale_code(self.language, ord('a'))
        if language:
            country = _unpack_locale_code(self.country, ord('0'))
            script = self.get_locale_script()
            variant = self.get_locale_variant()
            if not script and not variant:
                yield language + ('-r' + country if country else '')
            else:
                yield '+'.join(['b', language] + [t for t in (script, country, variant) if t])

        yield from self._token(self.screenLayout >> 6, LAYOUT_DIRS, 'layoutDir=%d')
        if self.smallestScreenWidthDp:
            yield 'sw%ddp' % self.smallestScreenWidthDp
        if self.screenWidthDp:
            yield 'w%ddp' % self.screenWidthDp
        if self.screenHeightDp:
            yield 'h%ddp' % self.screenHeightDp
        yield from self._token(self.screenLayout & 0xf, SCREEN_SIZES, 'screenLayoutSize=%d')
        yield from self._token((self.screenLayout >> 4) & 0x3, SCREEN_LONG, 'screenLayoutLong=%d')
        yield from self._token(self.orientation, ORIENTATIONS, 'orientation=%d')
        yield from self._token(self.uiMode & 0xf, UI_MODE_TYPES, 'uiModeType=%d')
        yield from self._token((self.uiMode >> 4) & 0x3, UI_MODE_NIGHT, 'uiModeNight=%d')
        yield from self._token(self.density, DENSITIES, '%ddpi')
        yield from self._token(self.touchscreen, TOUCHSCREENS, 'touchscreen=%d')
        yield from self._token(self.inputFlags & 0x3, KEYS_HIDDEN, 'keysHidden=%d')
        yield from self._token(self.keyboard, KEYBOARDS, 'keyboard=%d')
        yield from self._token(self.navigation, NAVIGATIONS, 'navigation=%d')

        if self.screenWidth or self.screenHeight:
            yield '%dx%d' % (self.screenWidth, self.screenHeight)
        if self.sdkVersion:
            yield 'v%d' % self.sdkVersion + ('.%d' % self.minorVersion if self.minorVersion else '')

    def _token(self, value, names, fmt):
        if value:
            yield names.get(value, fmt % value)

    def _fields(self):
        return tuple(getattr(self, name) for name in FIELDS)

    def __eq__(self, other):
        if not isinstance(other, ARSCResTableConfig):
            return NotImplemented
        return self._fields() == other._fields()

    def __hash__(self):
        return hash(self._fields())

    def __str__(self):
        return '-'.join(self.get_qualifier_tokens())

    def __repr__(self):
        return "<ARSCResTableConfig '%s' size=%d>" % (str(self) or 'default', self.size)
