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

import argparse
import sys

from arscparser import androconf
from arscparser.errors import ResParserError
from arscparser.table import ARSCParser


def _locale(value):
    # "" selects the default configuration; "en" or "fr" select a language.
    return value.ljust(2, '\x00')[:2]


def dump_table(parser, out):
    for package in parser.get_packages():
        out.write("Package 0x%02x %s\n" % (package.id, package.name))
        for res_type in package.get_declared_types():
            out.write("  Type %s (0x%02x)\n" % (res_type.name, res_type.id))
            for rc in res_type.get_configurations():
                out.write("    config %s\n" % (str(rc.get_config()) or 'default'))
                for res in rc.get_resources():
                    out.write("      0x%08x %s = %s\n" % (res.resource_id, res.resource_name, res))


def main(argv=None):
    parser = argparse.ArgumentParser(description='Dump the contents of a compiled resource table.')
    parser.add_argument('input', help='Input resources.arsc file path.')
    parser.add_argument('--lenient', action='store_true',
                        help='Log reserved-field violations instead of aborting.')
    parser.add_argument('--strings', metavar='LOCALE', type=_locale,
                        help='Print the string resources of LOCALE as XML ("" for the default).')
    parser.add_argument('--public', metavar='LOCALE', type=_locale,
                        help='Print the public resources of LOCALE as XML ("" for the default).')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging.')
    args = parser.parse_args(argv)

    if args.verbose:
        androconf.set_debug()

    arsc = ARSCParser(strict=not args.lenient)
    try:
        arsc.parse_file(args.input)
    except (ResParserError, IOError) as e:
        androconf.error("Could not parse %s: %s" % (args.input, e))
        return 1

    if args.strings is not None:
        sys.stdout.write(arsc.get_string_resources(args.strings).decode('utf-8'))
    elif args.public is not None:
        sys.stdout.write(arsc.get_public_resources(args.public).decode('utf-8'))
    else:
        dump_table(arsc, sys.stdout)
    return 0
