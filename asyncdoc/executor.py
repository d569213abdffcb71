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

from typing import Any, Awaitable, Optional

from pymongo.read_preferences import _ServerMode
from typing_extensions import Protocol, runtime_checkable

from asyncdoc.commands import Operation


@runtime_checkable
class AsyncOperationExecutor(Protocol):
    """
    The execution backend running operation descriptors against the database.

    `execute` must not block: it returns an awaitable (a coroutine, a Task or
    a Future) that completes with the raw result of the operation, or fails
    with the error that prevented it. Errors that are specific to the
    database are expected to be subclasses of
    `asyncdoc.exceptions.AsyncDocException`.

    Raw results, by operation kind:
        - count: an int;
        - distinct: a list of BSON-compatible values;
        - find, aggregate, inline map-reduce, list-indexes: an iterable of
          documents (RawBSONDocument, bytes or mappings);
        - insert, update, delete: a `WriteConcernResult`;
        - mixed bulk write: a `asyncdoc.results.BulkWriteResult`;
        - find-and-modify: a document or None;
        - administrative operations, and writes to collections
          (aggregate-to-collection, map-reduce-to-collection): anything,
          the result is discarded.
    """

    def execute(
        self,
        operation: Operation,
        read_preference: Optional[_ServerMode] = None,
    ) -> Awaitable[Any]: ...
