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

"""
Operation descriptors: fully-populated, immutable descriptions of what the
execution backend is asked to do, and the acknowledgement it returns for
single-kind writes.

Descriptors only carry canonical (encoded) documents. They are split into
read operations, sent together with a read preference, and write
operations, sent without one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, List, Optional, Union

from bson.code import Code
from bson.raw_bson import RawBSONDocument
from pymongo.write_concern import WriteConcern

from asyncdoc.constants import MapReduceAction
from asyncdoc.namespace import Namespace
from asyncdoc.write_requests import (
    DeleteRequest,
    InsertRequest,
    UpdateRequest,
    WriteRequest,
)

HintType = Union[str, RawBSONDocument, None]


@dataclass(frozen=True)
class WriteConcernResult:
    """
    The acknowledgement returned by the backend for insert, update and
    delete operations.

    Attributes:
        acknowledged: whether the write was acknowledged. If False, none of
            the other fields carries meaningful information.
        count: the number of documents affected (inserted, matched or deleted).
        updated_existing: for updates, whether an existing document was updated.
        upserted_id: for updates, the identifier of the upserted document, if any.
    """

    acknowledged: bool
    count: int = 0
    updated_existing: bool = False
    upserted_id: Any = None

    @staticmethod
    def unacknowledged() -> WriteConcernResult:
        return WriteConcernResult(acknowledged=False)


class ReadOperation:
    """Marker base class for operations dispatched with a read preference."""

    command_name: ClassVar[str]


class WriteOperation:
    """Marker base class for operations dispatched without a read preference."""

    command_name: ClassVar[str]


@dataclass(frozen=True)
class CountOperation(ReadOperation):
    command_name: ClassVar[str] = "count"

    namespace: Namespace
    filter: RawBSONDocument
    skip: int = 0
    limit: int = 0
    max_time_ms: int = 0
    hint: HintType = None


@dataclass(frozen=True)
class DistinctOperation(ReadOperation):
    command_name: ClassVar[str] = "distinct"

    namespace: Namespace
    field_name: str
    filter: RawBSONDocument
    max_time_ms: int = 0


@dataclass(frozen=True)
class FindOperation(ReadOperation):
    command_name: ClassVar[str] = "find"

    namespace: Namespace
    filter: RawBSONDocument
    projection: Optional[RawBSONDocument] = None
    sort: Optional[RawBSONDocument] = None
    skip: int = 0
    limit: int = 0
    batch_size: int = 0
    max_time_ms: int = 0


@dataclass(frozen=True)
class AggregateOperation(ReadOperation):
    command_name: ClassVar[str] = "aggregate"

    namespace: Namespace
    pipeline: List[RawBSONDocument]
    allow_disk_use: Optional[bool] = None
    batch_size: Optional[int] = None
    max_time_ms: int = 0
    use_cursor: Optional[bool] = None


@dataclass(frozen=True)
class AggregateToCollectionOperation(WriteOperation):
    command_name: ClassVar[str] = "aggregate"

    namespace: Namespace
    pipeline: List[RawBSONDocument]
    allow_disk_use: Optional[bool] = None
    max_time_ms: int = 0


@dataclass(frozen=True)
class MapReduceWithInlineResultsOperation(ReadOperation):
    command_name: ClassVar[str] = "mapReduce"

    namespace: Namespace
    map_function: Code
    reduce_function: Code
    finalize_function: Optional[Code] = None
    filter: Optional[RawBSONDocument] = None
    limit: int = 0
    max_time_ms: int = 0
    js_mode: bool = False
    scope: Optional[RawBSONDocument] = None
    sort: Optional[RawBSONDocument] = None
    verbose: bool = True


@dataclass(frozen=True)
class MapReduceToCollectionOperation(WriteOperation):
    command_name: ClassVar[str] = "mapReduce"

    namespace: Namespace
    map_function: Code
    reduce_function: Code
    collection_name: str
    finalize_function: Optional[Code] = None
    filter: Optional[RawBSONDocument] = None
    limit: int = 0
    max_time_ms: int = 0
    js_mode: bool = False
    scope: Optional[RawBSONDocument] = None
    sort: Optional[RawBSONDocument] = None
    verbose: bool = True
    action: MapReduceAction = MapReduceAction.REPLACE
    non_atomic: bool = False
    sharded: bool = False
    database_name: Optional[str] = None


@dataclass(frozen=True)
class InsertOperation(WriteOperation):
    command_name: ClassVar[str] = "insert"

    namespace: Namespace
    ordered: bool
    write_concern: WriteConcern
    requests: List[InsertRequest]


@dataclass(frozen=True)
class UpdateOperation(WriteOperation):
    command_name: ClassVar[str] = "update"

    namespace: Namespace
    ordered: bool
    write_concern: WriteConcern
    requests: List[UpdateRequest]


@dataclass(frozen=True)
class DeleteOperation(WriteOperation):
    command_name: ClassVar[str] = "delete"

    namespace: Namespace
    ordered: bool
    write_concern: WriteConcern
    requests: List[DeleteRequest]


@dataclass(frozen=True)
class MixedBulkWriteOperation(WriteOperation):
    command_name: ClassVar[str] = "bulkWrite"

    namespace: Namespace
    requests: List[WriteRequest]
    ordered: bool
    write_concern: WriteConcern


@dataclass(frozen=True)
class FindAndDeleteOperation(WriteOperation):
    command_name: ClassVar[str] = "findAndModify"

    namespace: Namespace
    filter: RawBSONDocument
    projection: Optional[RawBSONDocument] = None
    sort: Optional[RawBSONDocument] = None
    max_time_ms: int = 0


@dataclass(frozen=True)
class FindAndReplaceOperation(WriteOperation):
    command_name: ClassVar[str] = "findAndModify"

    namespace: Namespace
    filter: RawBSONDocument
    replacement: RawBSONDocument
    projection: Optional[RawBSONDocument] = None
    sort: Optional[RawBSONDocument] = None
    return_original: bool = True
    upsert: bool = False
    max_time_ms: int = 0


@dataclass(frozen=True)
class FindAndUpdateOperation(WriteOperation):
    command_name: ClassVar[str] = "findAndModify"

    namespace: Namespace
    filter: RawBSONDocument
    update: RawBSONDocument
    projection: Optional[RawBSONDocument] = None
    sort: Optional[RawBSONDocument] = None
    return_original: bool = True
    upsert: bool = False
    max_time_ms: int = 0


@dataclass(frozen=True)
class CreateIndexOperation(WriteOperation):
    command_name: ClassVar[str] = "createIndexes"

    namespace: Namespace
    keys: RawBSONDocument
    name: Optional[str] = None
    background: bool = False
    unique: bool = False
    sparse: bool = False
    expire_after_seconds: Optional[int] = None
    version: Optional[int] = None
    weights: Optional[RawBSONDocument] = None
    default_language: Optional[str] = None
    language_override: Optional[str] = None
    text_index_version: Optional[int] = None
    sphere_index_version: Optional[int] = None
    bits: Optional[int] = None
    min: Optional[float] = None
    max: Optional[float] = None
    bucket_size: Optional[float] = None


@dataclass(frozen=True)
class ListIndexesOperation(ReadOperation):
    command_name: ClassVar[str] = "listIndexes"

    namespace: Namespace


@dataclass(frozen=True)
class DropIndexOperation(WriteOperation):
    command_name: ClassVar[str] = "dropIndexes"

    namespace: Namespace
    index_name: str


@dataclass(frozen=True)
class DropCollectionOperation(WriteOperation):
    command_name: ClassVar[str] = "drop"

    namespace: Namespace


@dataclass(frozen=True)
class RenameCollectionOperation(WriteOperation):
    command_name: ClassVar[str] = "renameCollection"

    namespace: Namespace
    new_namespace: Namespace
    drop_target: bool = False


Operation = Union[ReadOperation, WriteOperation]
