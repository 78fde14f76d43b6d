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

from struct import pack, unpack

from arscparser.bytecode import read_uint8, read_uint16, read_uint32, to_int32
from arscparser.errors import MalformedValueError

TYPE_NULL               = 0x00
TYPE_REFERENCE          = 0x01
TYPE_ATTRIBUTE          = 0x02
TYPE_STRING             = 0x03
TYPE_FLOAT              = 0x04
TYPE_DIMENSION          = 0x05
TYPE_FRACTION           = 0x06
TYPE_FIRST_INT          = 0x10
TYPE_INT_DEC            = 0x10
TYPE_INT_HEX            = 0x11
TYPE_INT_BOOLEAN        = 0x12
TYPE_FIRST_COLOR_INT    = 0x1c
TYPE_INT_COLOR_ARGB8    = 0x1c
TYPE_INT_COLOR_RGB8     = 0x1d
TYPE_INT_COLOR_ARGB4    = 0x1e
TYPE_INT_COLOR_RGB4     = 0x1f
TYPE_LAST_COLOR_INT     = 0x1f
TYPE_LAST_INT           = 0x1f

COMPLEX_UNIT_SHIFT      = 0
COMPLEX_UNIT_MASK       = 0xf
COMPLEX_RADIX_SHIFT     = 4
COMPLEX_RADIX_MASK      = 0x3
COMPLEX_MANTISSA_SHIFT  = 8
COMPLEX_MANTISSA_MASK   = 0xffffff

COMPLEX_UNIT_FRACTION   = 0

# One multiplier per radix (23p0, 16p7, 8p15, 0p23); each also undoes the
# mantissa shift.
MANTISSA_MULT           = 1.0 / (1 << COMPLEX_MANTISSA_SHIFT)
RADIX_MULTS             = [1.0 * MANTISSA_MULT, 1.0 / (1 << 7) * MANTISSA_MULT,
                           1.0 / (1 << 15) * MANTISSA_MULT, 1.0 / (1 << 23) * MANTISSA_MULT]

DIMENSION_UNITS         = ["px", "dip", "sp", "pt", "in", "mm"]

FRACTION                = "%"
FRACTION_PARENT         = "%p"

INVALID_RESOURCE_NAME   = "<INVALID RESOURCE>"

KIND_NULL               = "null"
KIND_REFERENCE          = "reference"
KIND_ATTRIBUTE          = "attribute"
KIND_STRING             = "string"
KIND_INTEGER            = "integer"
KIND_FLOAT              = "float"
KIND_BOOLEAN            = "boolean"
KIND_COLOR              = "color"
KIND_DIMENSION          = "dimension"
KIND_FRACTION           = "fraction"
KIND_ARRAY              = "array"
KIND_COMPLEX            = "complex"


def complex_to_float(xcomplex):
    return to_int32(xcomplex & (COMPLEX_MANTISSA_MASK << COMPLEX_MANTISSA_SHIFT)) \
        * RADIX_MULTS[(xcomplex >> COMPLEX_RADIX_SHIFT) & COMPLEX_RADIX_MASK]


def get_package_prefix(resource_id):
    if resource_id >> 24 == 1:
        return "android:"
    return ""


class AbstractResource:
    """Common part of every resource variant.

    `kind` is the variant tag. Two resources are equal when they have the
    same tag, name, id and payload.
    """

    kind = None

    def __init__(self):
        self.resource_name = INVALID_RESOURCE_NAME
        self.resource_id = 0
        self.public = False

    def get_resource_name(self):
        return self.resource_name

    def get_resource_id(self):
        return self.resource_id

    def _payload(self):
        return ()

    def _key(self):
        return (self.kind, self.resource_name, self.resource_id) + self._payload()

    def __eq__(self, other):
        if not isinstance(other, AbstractResource):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return "<%s 0x%08x %s=%s>" % (self.__class__.__name__, self.resource_id, self.resource_name, self)


class NullResource(AbstractResource):
    kind = KIND_NULL

    def __str__(self):
        return "@null"


class ReferenceResource(AbstractResource):
    kind = KIND_REFERENCE

    def __init__(self, reference_id):
        super().__init__()
        self.reference_id = reference_id

    def _payload(self):
        return (self.reference_id,)

    def __str__(self):
        return "@%s%08X" % (get_package_prefix(self.reference_id), self.reference_id)


class AttributeResource(AbstractResource):
    kind = KIND_ATTRIBUTE

    def __init__(self, attribute_id):
        super().__init__()
        self.attribute_id = attribute_id

    def _payload(self):
        return (self.attribute_id,)

    def __str__(self):
        return "?%s%08X" % (get_package_prefix(self.attribute_id), self.attribute_id)


class StringResource(AbstractResource):
    kind = KIND_STRING

    def __init__(self, value):
        super().__init__()
        self.value = value

    def _payload(self):
        return (self.value,)

    def __str__(self):
        return "%s" % self.value


class IntegerResource(AbstractResource):
    kind = KIND_INTEGER

    def __init__(self, value):
        super().__init__()
        self.value = value

    def _payload(self):
        return (self.value,)

    def __str__(self):
        return "%d" % self.value


class FloatResource(AbstractResource):
    kind = KIND_FLOAT

    def __init__(self, value):
        super().__init__()
        self.value = value

    def _payload(self):
        return (self.value,)

    def __str__(self):
        return "%f" % self.value


class BooleanResource(AbstractResource):
    kind = KIND_BOOLEAN

    def __init__(self, value):
        super().__init__()
        self.value = value

    def _payload(self):
        return (self.value,)

    def __str__(self):
        if self.value:
            return "true"
        return "false"


class ColorResource(AbstractResource):
    kind = KIND_COLOR

    def __init__(self, a, r, g, b):
        super().__init__()
        self.a = a
        self.r = r
        self.g = g
        self.b = b

    def get_argb(self):
        # Decoded colors keep the whole data word in the alpha channel.
        if self.a > 0xFF:
            return self.a & 0xFFFFFFFF
        return ((self.a << 24) | (self.r << 16) | (self.g << 8) | self.b) & 0xFFFFFFFF

    def _payload(self):
        return (self.a, self.r, self.g, self.b)

    def __str__(self):
        return "#%08x" % self.get_argb()


class DimensionResource(AbstractResource):
    kind = KIND_DIMENSION

    def __init__(self, value, unit):
        super().__init__()
        self.value = value
        self.unit = unit

    def _payload(self):
        return (self.value, self.unit)

    def __str__(self):
        return "%f%s" % (self.value, self.unit)


class FractionResource(AbstractResource):
    kind = KIND_FRACTION

    def __init__(self, fraction_type, value):
        super().__init__()
        self.fraction_type = fraction_type
        self.value = value

    def _payload(self):
        return (self.fraction_type, self.value)

    def __str__(self):
        return "%f%s" % (self.value, self.fraction_type)


class ArrayResource(AbstractResource):
    kind = KIND_ARRAY

    def __init__(self, elements=None):
        super().__init__()
        self.elements = elements if elements is not None else []

    def add(self, resource):
        self.elements.append(resource)

    def get_elements(self):
        return tuple(self.elements)

    def _payload(self):
        return (tuple(self.elements),)

    def __str__(self):
        return "[%s]" % ", ".join(str(e) for e in self.elements)


class ComplexResource(AbstractResource):
    kind = KIND_COMPLEX

    def __init__(self, res_type, value=None):
        super().__init__()
        self.res_type = res_type
        self.value = value if value is not None else {}

    def get_value(self):
        return self.value

    def _payload(self):
        return (self.res_type, tuple(sorted(self.value.items())))

    def __str__(self):
        return "{%s}" % ", ".join("%s=%s" % (k, v) for k, v in self.value.items())


class ARSCResValue:
    """A Res_value record: size, res0, dataType and data."""

    SIZE = 8

    def __init__(self, buff, offset, parent):
        self.start = offset
        self.size, offset = read_uint16(buff, offset)
        if self.size > self.SIZE:
            raise MalformedValueError("Res_value at offset=0x%x has size %d" % (self.start, self.size))

        self.res0, offset = read_uint8(buff, offset)
        if self.res0 != 0:
            parent.raise_format_violation("File format violation: res0 is not zero", offset - 1)
        self.data_type, offset = read_uint8(buff, offset)
        self.data, offset = read_uint32(buff, offset)
        self.end = offset


def _parse_color(data):
    # Channel masks are applied to shifted constants rather than to shifted
    # data: alpha keeps the whole word, red, green and blue the low byte.
    return ColorResource(data, data & 0xFF, data & 0xFF, data & 0xFF)


def _parse_dimension(data):
    unit = (data >> COMPLEX_UNIT_SHIFT) & COMPLEX_UNIT_MASK
    if unit >= len(DIMENSION_UNITS):
        raise MalformedValueError("Invalid dimension: %d" % unit)
    return DimensionResource(complex_to_float(data), DIMENSION_UNITS[unit])


def _parse_fraction(data):
    if (data >> COMPLEX_UNIT_SHIFT) & COMPLEX_UNIT_MASK == COMPLEX_UNIT_FRACTION:
        return FractionResource(FRACTION, complex_to_float(data))
    return FractionResource(FRACTION_PARENT, complex_to_float(data))


VALUE_PARSERS = {
    TYPE_NULL: lambda data, strings: NullResource(),
    TYPE_REFERENCE: lambda data, strings: ReferenceResource(data),
    TYPE_ATTRIBUTE: lambda data, strings: AttributeResource(data),
    TYPE_STRING: lambda data, strings: StringResource(strings.get(data)),
    TYPE_FLOAT: lambda data, strings: FloatResource(unpack("<f", pack("<I", data))[0]),
    TYPE_DIMENSION: lambda data, strings: _parse_dimension(data),
    TYPE_FRACTION: lambda data, strings: _parse_fraction(data),
    TYPE_INT_DEC: lambda data, strings: IntegerResource(to_int32(data)),
    TYPE_INT_HEX: lambda data, strings: IntegerResource(data),
    TYPE_INT_BOOLEAN: lambda data, strings: BooleanResource(data != 0),
    TYPE_INT_COLOR_ARGB8: lambda data, strings: _parse_color(data),
    TYPE_INT_COLOR_RGB8: lambda data, strings: _parse_color(data),
    TYPE_INT_COLOR_ARGB4: lambda data, strings: _parse_color(data),
    TYPE_INT_COLOR_RGB4: lambda data, strings: _parse_color(data),
}


def parse_value(value, strings):
    """Turns an ARSCResValue into a resource, resolving strings in `strings`."""
    try:
        parser = VALUE_PARSERS[value.data_type]
    except KeyError:
        raise MalformedValueError("Unsupported data type: 0x%x" % value.data_type)
    return parser(value.data, strings)


def parse_complex(buff, entry, type_name, strings, parent):
    """Decodes the ResTable_map records that follow a map entry."""
    res = ComplexResource(type_name)
    offset = entry.end
    for i in range(0, entry.count):
        name, offset = read_uint32(buff, offset)
        value = ARSCResValue(buff, offset, parent)
        offset = value.end

        map_name = str(name)
        item = parse_value(value, strings)
        if type_name == "array" and item.kind == KIND_STRING:
            existing = res.value.get(map_name)
            if existing is None:
                existing = ArrayResource()
                res.value[map_name] = existing
            if existing.kind == KIND_ARRAY:
                existing.add(item)
        else:
            res.value[map_name] = item
    return res
