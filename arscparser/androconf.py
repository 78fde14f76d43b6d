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

import logging

CONF = {
    # Abort the parse on a non-zero reserved field instead of logging it
    "STRICT_MODE": True,
    # Granularity of the bulk read of the table payload
    "BLOCK_SIZE": 2048,
}

log_andro = logging.getLogger("arscparser")
log_andro.setLevel(logging.WARNING)

console_handler = logging.StreamHandler()
console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
log_andro.addHandler(console_handler)

log_runtime = logging.getLogger("arscparser.runtime")


def set_debug():
    log_andro.setLevel(logging.DEBUG)


def set_info():
    log_andro.setLevel(logging.INFO)


def get_debug():
    return log_andro.getEffectiveLevel() == logging.DEBUG


def debug(x):
    log_runtime.debug(x)


def info(x):
    log_runtime.info(x)


def warning(x):
    log_runtime.warning(x)


def error(x):
    log_runtime.error(x)
