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

import collections
import copy
import io
from xml.sax.saxutils import escape, quoteattr

from arscparser import androconf
from arscparser.bytecode import ARSCHeader, read_uint32
from arscparser.entries import (ARSCResTablePackage, ARSCResTableEntry, ARSCResType, ARSCResTypeSpec,
                                RES_TABLE_PACKAGE_TYPE, RES_TABLE_TYPE_SPEC_TYPE, RES_TABLE_TYPE_TYPE)
from arscparser.errors import (FormatViolationError, MalformedValueError, StructuralInconsistencyError,
                               TableStateError, TruncatedStreamError)
from arscparser.stringblock import StringBlock, RES_STRING_POOL_TYPE
from arscparser.values import ARSCResValue, INVALID_RESOURCE_NAME, KIND_STRING, parse_complex, parse_value

RES_TABLE_TYPE = 0x0002

# ResTable_header: chunk header plus packageCount
TABLE_HEADER_SIZE = ARSCHeader.SIZE + 4

STATE_NEW = "new"
STATE_BUILDING = "building"
STATE_READY = "ready"

DEFAULT_LOCALE = '\x00\x00'


class ResourceId(collections.namedtuple('ResourceId', 'package_id,type_id,item_index')):
    __slots__ = ()

    def __str__(self):
        return "Package %d, type %d, item %d" % self


def make_resource_id(package_id, type_id, item_index):
    return (package_id << 24) | (type_id << 16) | item_index


def parse_resource_id(resource_id):
    return ResourceId((resource_id & 0xFF000000) >> 24, (resource_id & 0x00FF0000) >> 16,
                      resource_id & 0x0000FFFF)


class ResConfig:
    def __init__(self, config):
        self.config = config
        self.resources = []

    def get_config(self):
        return self.config

    def get_resources(self):
        return self.resources

    def add_all(self, other):
        self.resources.extend(copy.deepcopy(other.resources))

    def __eq__(self, other):
        if not isinstance(other, ResConfig):
            return NotImplemented
        return self.config == other.config and self.resources == other.resources

    __hash__ = None

    def __repr__(self):
        return "<ResConfig '%s' %d resources>" % (str(self.config) or 'default', len(self.resources))


class ResType:
    def __init__(self, type_id, name):
        self.id = type_id
        self.name = name
        self.configurations = []
        self._resource_ids = {}

    def get_type_name(self):
        return self.name

    def get_configurations(self):
        return self.configurations

    def get_configuration(self, config):
        for c in self.configurations:
            if c.config == config:
                return c
        return None

    def get_resource_id(self, package_id, index):
        """Returns the id of entry `index`, fixed the first time it is seen."""
        if index not in self._resource_ids:
            self._resource_ids[index] = make_resource_id(package_id, self.id, index)
        return self._resource_ids[index]

    def get_all_resources(self):
        """Resources of every configuration, one per name, first seen wins."""
        resources = {}
        for rc in self.configurations:
            for res in rc.resources:
                if res.resource_name not in resources:
                    resources[res.resource_name] = res
        return list(resources.values())

    def get_all_resource_names(self):
        return set(res.resource_name for rc in self.configurations for res in rc.resources)

    def get_all_resources_by_id(self, resource_id):
        return [res for rc in self.configurations for res in rc.resources if res.resource_id == resource_id]

    def get_first_resource(self, resource_id):
        for rc in self.configurations:
            for res in rc.resources:
                if res.resource_id == resource_id:
                    return res
        return None

    def get_resource_by_name(self, resource_name):
        for rc in self.configurations:
            for res in rc.resources:
                if res.resource_name == resource_name:
                    return res
        return None

    def add_all(self, other):
        for config in other.configurations:
            existing = self.get_configuration(config.config)
            if existing is None:
                self.configurations.append(copy.deepcopy(config))
            else:
                existing.add_all(config)
        for index, resource_id in other._resource_ids.items():
            self._resource_ids.setdefault(index, resource_id)

    def __str__(self):
        return "%s" % self.name

    def __repr__(self):
        return "<ResType %d %s>" % (self.id, self.name)


class ResPackage:
    def __init__(self, package_id, name):
        self.id = package_id
        self.name = name
        self.types = []

    def get_package_id(self):
        return self.id

    def get_package_name(self):
        return self.name

    def get_declared_types(self):
        return self.types

    def get_resource_type(self, type_name):
        for res_type in self.types:
            if res_type.name == type_name:
                return res_type
        return None

    def get_type(self, type_id, type_name):
        for res_type in self.types:
            if res_type.id == type_id and res_type.name == type_name:
                return res_type
        return None

    def get_type_by_id(self, type_id):
        for res_type in self.types:
            if res_type.id == type_id:
                return res_type
        return None

    def add_all(self, other):
        for tp in other.types:
            existing = self.get_type(tp.id, tp.name)
            if existing is None:
                self.types.append(copy.deepcopy(tp))
            else:
                existing.add_all(tp)

    def __repr__(self):
        return "<ResPackage 0x%02x %s>" % (self.id, self.name)


class ARSCParser:
    """Reader for a compiled resource table (resources.arsc).

    A parser is filled by exactly one call to parse(); afterwards it answers
    lookups and can absorb other parsed tables through add_all().

    `strict` decides what a non-zero reserved field does: raise
    FormatViolationError, or log it and go on. It defaults to
    androconf.CONF["STRICT_MODE"].
    """

    def __init__(self, strict=None, block_size=None):
        if strict is None:
            strict = androconf.CONF["STRICT_MODE"]
        if block_size is None:
            block_size = androconf.CONF["BLOCK_SIZE"]

        self.strict = strict
        self.block_size = block_size
        self.packageCount = 0
        self.stringpool_main = {}
        self.packages = []

        self._state = STATE_NEW
        self._warned = set()

    @classmethod
    def from_buff(cls, raw_buff, strict=None):
        parser = cls(strict=strict)
        parser.parse_buff(raw_buff)
        return parser

    def parse_file(self, filename):
        with open(filename, "rb") as fd:
            self.parse(fd)

    def parse_buff(self, raw_buff):
        self.parse(io.BytesIO(raw_buff))

    def parse(self, stream):
        if self._state != STATE_NEW:
            raise TableStateError("parse() called on a table in state %s" % self._state)
        self._state = STATE_BUILDING

        raw = stream.read(TABLE_HEADER_SIZE)
        if len(raw) < TABLE_HEADER_SIZE:
            raise TruncatedStreamError("Resource table header is truncated")

        header = ARSCHeader(raw, 0)
        if header.type != RES_TABLE_TYPE:
            raise StructuralInconsistencyError("Not a resource table: chunk type 0x%x" % header.type)
        self.packageCount, _ = read_uint32(raw, ARSCHeader.SIZE)
        androconf.debug("Package Groups (%d)" % self.packageCount)

        if header.header_size > TABLE_HEADER_SIZE:
            self._read_block(stream, header.header_size - TABLE_HEADER_SIZE)

        remaining_size = header.size - header.header_size
        if remaining_size > 0:
            buff = self._read_block(stream, remaining_size)
            self.stringpool_main = self._parse_chunks(buff)

        self._state = STATE_READY

    def _read_block(self, stream, size):
        data = bytearray()
        while len(data) < size:
            block = stream.read(min(self.block_size, size - len(data)))
            if not block:
                androconf.error("Could not read block from resource file")
                raise TruncatedStreamError("Stream ended after %d of %d bytes" % (len(data), size))
            data += block
        return bytes(data)

    def _next_chunk(self, buff, offset):
        header = ARSCHeader(buff, offset)
        if header.size < ARSCHeader.SIZE:
            raise StructuralInconsistencyError(
                "Chunk at offset=0x%x has size 0x%x, smaller than its header" % (offset, header.size))
        return header

    def _parse_chunks(self, buff):
        strings = {}
        offset = 0
        while offset < len(buff) - 1:
            header = self._next_chunk(buff, offset)

            if header.type == RES_STRING_POOL_TYPE:
                strings.update(StringBlock(buff, header).get_strings())
            elif header.type == RES_TABLE_PACKAGE_TYPE:
                self._parse_package(buff, header, strings)
            else:
                androconf.debug("Skipping chunk of type 0x%x at offset=0x%x" % (header.type, offset))

            offset = header.get_next()
        return strings

    def _read_package_pool(self, buff, offset, role):
        header = ARSCHeader(buff, offset)
        if header.type != RES_STRING_POOL_TYPE:
            raise StructuralInconsistencyError("Unexpected block type for package %s strings" % role)
        return StringBlock(buff, header)

    def _parse_package(self, buff, header, strings):
        table_package = ARSCResTablePackage(buff, header)
        androconf.debug("\tPackage %d id=%d name=%s" % (len(self.packages), table_package.id, table_package.name))

        package = self.get_package(table_package.id, table_package.name)
        if package is None:
            package = ResPackage(table_package.id, table_package.name)
            self.packages.append(package)

        type_pool = self._read_package_pool(buff, header.start + table_package.typeStrings, "type")
        key_pool = self._read_package_pool(buff, header.start + table_package.keyStrings, "key")
        type_strings = type_pool.get_strings()
        key_strings = key_pool.get_strings()

        offset = key_pool.header.get_next()
        while offset < header.get_next():
            inner = self._next_chunk(buff, offset)

            if inner.type == RES_TABLE_TYPE_SPEC_TYPE:
                type_spec = ARSCResTypeSpec(buff, inner, self)
                type_name = type_strings.get(type_spec.id - 1)
                if package.get_type(type_spec.id, type_name) is None:
                    package.types.append(ResType(type_spec.id, type_name))
            elif inner.type == RES_TABLE_TYPE_TYPE:
                self._parse_type(buff, inner, package, strings, key_strings)

            offset = inner.get_next()

        if androconf.get_debug():
            for res_type in package.types:
                androconf.debug("\t\tType %s (%d), configCount=%d, entryCount=%d" % (
                    res_type.name, res_type.id - 1, len(res_type.configurations),
                    len(res_type.configurations[0].resources) if res_type.configurations else 0))

    def _parse_type(self, buff, header, package, strings, key_strings):
        type_chunk = ARSCResType(buff, header, self)

        res_type = package.get_type_by_id(type_chunk.id)
        if res_type is None:
            raise StructuralInconsistencyError(
                "Reference to undeclared type %d found at offset=0x%x" % (type_chunk.id, header.start))

        config = res_type.get_configuration(type_chunk.config)
        if config is None:
            config = ResConfig(type_chunk.config)
            res_type.configurations.append(config)

        for index, entry_offset in type_chunk.get_entries(buff):
            try:
                res = self._parse_entry(buff, entry_offset, res_type, strings, key_strings)
            except MalformedValueError as e:
                androconf.warning("Could not parse entry %d of type %s, skipping entry: %s" % (
                    index, res_type.name, e))
                continue

            res.resource_id = res_type.get_resource_id(package.id, index)
            config.resources.append(res)

    def _parse_entry(self, buff, offset, res_type, strings, key_strings):
        entry = ARSCResTableEntry(buff, offset, self)

        if entry.is_complex():
            res = parse_complex(buff, entry, res_type.name, strings, self)
        else:
            res = parse_value(ARSCResValue(buff, entry.end, self), strings)

        res.resource_name = key_strings.get(entry.key, INVALID_RESOURCE_NAME)
        res.public = entry.is_public()
        return res

    def raise_format_violation(self, message, offset):
        if self.strict:
            raise FormatViolationError(message, offset)
        androconf.error("%s offset=0x%x" % (message, offset))

    def warn_once(self, kind, message):
        if kind not in self._warned:
            self._warned.add(kind)
            androconf.warning(message)

    def is_ready(self):
        return self._state == STATE_READY

    def get_global_string_pool(self):
        return self.stringpool_main

    def get_packages(self):
        return self.packages

    def get_package(self, package_id, package_name):
        for package in self.packages:
            if package.id == package_id and package.name == package_name:
                return package
        return None

    def _find_package(self, package_id):
        for package in self.packages:
            if package.id == package_id:
                return package
        return None

    def find_resource(self, resource_id):
        rid = parse_resource_id(resource_id)
        package = self._find_package(rid.package_id)
        if package is not None:
            res_type = package.get_type_by_id(rid.type_id)
            if res_type is not None:
                return res_type.get_first_resource(resource_id)
        return None

    def find_all_resources(self, resource_id):
        resources = []
        rid = parse_resource_id(resource_id)
        package = self._find_package(rid.package_id)
        if package is not None:
            for res_type in package.types:
                if res_type.id == rid.type_id:
                    resources.extend(res_type.get_all_resources_by_id(resource_id))
        return resources

    def find_resource_type(self, resource_id):
        rid = parse_resource_id(resource_id)
        package = self._find_package(rid.package_id)
        if package is not None:
            return package.get_type_by_id(rid.type_id)
        return None

    def find_resource_by_name(self, type_name, resource_name):
        for package in self.packages:
            res_type = package.get_resource_type(type_name)
            if res_type is not None:
                for res in res_type.get_all_resources():
                    if res.resource_name == resource_name:
                        return res
        return None

    def find_string_resource(self, resource_name):
        res = self.find_resource_by_name("string", resource_name)
        if res is not None and res.kind == KIND_STRING:
            return res.value
        return None

    def find_resources_by_type(self, type_name):
        resources = []
        for package in self.packages:
            res_type = package.get_resource_type(type_name)
            if res_type is not None:
                resources.extend(res_type.get_all_resources())
        return resources

    def parse_resource_id(self, resource_id):
        return parse_resource_id(resource_id)

    def add_all(self, other):
        if not self.is_ready() or not other.is_ready():
            raise TableStateError("add_all() needs two parsed tables")

        for package in other.packages:
            existing = self.get_package(package.id, package.name)
            if existing is None:
                self.packages.append(copy.deepcopy(package))
            else:
                existing.add_all(package)
        self.stringpool_main.update(other.stringpool_main)

    def _iter_locale(self, locale, type_name=None):
        for package in self.packages:
            for res_type in package.types:
                if type_name is not None and res_type.name != type_name:
                    continue
                for rc in res_type.configurations:
                    if rc.config.get_language() == locale:
                        for res in rc.resources:
                            yield res_type, res

    def get_locales(self):
        locales = []
        for package in self.packages:
            for res_type in package.types:
                for rc in res_type.configurations:
                    if rc.config.get_language() not in locales:
                        locales.append(rc.config.get_language())
        return locales

    def get_string_resources(self, locale=DEFAULT_LOCALE):
        buff = '<?xml version="1.0" encoding="utf-8"?>\n'
        buff += '<resources>\n'

        for res_type, res in self._iter_locale(locale, "string"):
            if res.kind == KIND_STRING:
                buff += '<string name=%s>%s</string>\n' % (quoteattr(res.resource_name), escape(res.value or ''))

        buff += '</resources>\n'

        return buff.encode('utf-8')

    def get_public_resources(self, locale=DEFAULT_LOCALE):
        buff = '<?xml version="1.0" encoding="utf-8"?>\n'
        buff += '<resources>\n'

        for res_type, res in self._iter_locale(locale):
            if res.public:
                buff += '<public type=%s name=%s id="0x%08x" />\n' % (
                    quoteattr(res_type.name or ''), quoteattr(res.resource_name), res.resource_id)

        buff += '</resources>\n'

        return buff.encode('utf-8')
