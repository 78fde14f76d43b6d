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

from arscparser.errors import (ResParserError, BufferUnderrunError, TruncatedStreamError, FormatViolationError,
                               UnsupportedFeatureError, StructuralInconsistencyError, MalformedValueError,
                               TableStateError)
from arscparser.table import (ARSCParser, ResPackage, ResType, ResConfig, ResourceId, make_resource_id,
                              parse_resource_id)
