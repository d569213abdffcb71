# Copyright DataStax, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

# Name of the document field holding the identifier
DEFAULT_ID_FIELD = "_id"

# Key used to wrap a single raw value into a decodable document
DISTINCT_VALUE_KEY = "value"

# Pipeline stage designating an output collection for aggregations
AGGREGATE_OUT_STAGE = "$out"

# Index name that, given to a drop-index command, drops all indexes
DROP_ALL_INDEXES_NAME = "*"

# Orderedness defaults for multi-document writes
DEFAULT_INSERT_MANY_ORDERED = True
DEFAULT_BULK_WRITE_ORDERED = True

# Deprecation bookkeeping
DEPRECATED_ALIAS_DEPRECATED_IN = "1.1.0"
DEPRECATED_ALIAS_REMOVED_IN = "2.0.0"
