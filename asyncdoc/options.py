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

from dataclasses import dataclass
from typing import Any, Mapping

from pymongo.read_preferences import ReadPreference, _ServerMode
from pymongo.write_concern import WriteConcern

from asyncdoc.codecs import CodecRegistry, default_codec_registry
from asyncdoc.constants import (
    MapReduceAction,
    ProjectionType,
    ReturnDocument,
    SortType,
)
from asyncdoc.settings.defaults import (
    DEFAULT_BULK_WRITE_ORDERED,
    DEFAULT_INSERT_MANY_ORDERED,
)
from asyncdoc.utils.unset import _UNSET, UnsetType


def _check_non_negative(**kwargs: int | None) -> None:
    for name, value in kwargs.items():
        if value is not None and value < 0:
            raise ValueError(f"Option '{name}' cannot be negative (got {value}).")


@dataclass
class OperationOptions:
    """
    The settings inherited by all operations of a collection.

    This is the "partial" version of the class, used to override specific
    settings: attributes left unset keep the values of the options object
    being overridden. See `FullOperationOptions.with_override`.

    Attributes:
        read_preference: the `pymongo.ReadPreference` mode used to select
            the server for read operations.
        write_concern: the `pymongo.WriteConcern` attached to write operations.
        codec_registry: the registry converting between domain objects
            and canonical documents.

    Example:
        >>> from pymongo import ReadPreference
        >>> from asyncdoc.options import OperationOptions
        >>>
        >>> my_collection.with_options(
        ...     options=OperationOptions(
        ...         read_preference=ReadPreference.SECONDARY_PREFERRED,
        ...     ),
        ... )
    """

    read_preference: _ServerMode | UnsetType = _UNSET
    write_concern: WriteConcern | UnsetType = _UNSET
    codec_registry: CodecRegistry | UnsetType = _UNSET


@dataclass
class FullOperationOptions(OperationOptions):
    """
    The settings inherited by all operations of a collection.

    This is the "full" version of the class, with the guarantee that all of
    its members have defined values: this is what a collection carries in its
    `.options` attribute.

    Attributes:
        read_preference: the `pymongo.ReadPreference` mode used to select
            the server for read operations.
        write_concern: the `pymongo.WriteConcern` attached to write operations.
        codec_registry: the registry converting between domain objects
            and canonical documents.
    """

    read_preference: _ServerMode
    write_concern: WriteConcern
    codec_registry: CodecRegistry

    def __init__(
        self,
        *,
        read_preference: _ServerMode,
        write_concern: WriteConcern,
        codec_registry: CodecRegistry,
    ) -> None:
        OperationOptions.__init__(
            self,
            read_preference=read_preference,
            write_concern=write_concern,
            codec_registry=codec_registry,
        )

    def with_override(
        self, other: OperationOptions | None | UnsetType
    ) -> FullOperationOptions:
        """
        Given an "overriding" set of options, possibly not defined in all its
        attributes, apply the override logic and return a new full options object.

        Args:
            other: a not-necessarily-fully-specified options object. All its defined
                settings take precedence.
        """

        if isinstance(other, UnsetType) or other is None:
            return self

        return FullOperationOptions(
            read_preference=(
                other.read_preference
                if not isinstance(other.read_preference, UnsetType)
                else self.read_preference
            ),
            write_concern=(
                other.write_concern
                if not isinstance(other.write_concern, UnsetType)
                else self.write_concern
            ),
            codec_registry=(
                other.codec_registry
                if not isinstance(other.codec_registry, UnsetType)
                else self.codec_registry
            ),
        )


def defaultOperationOptions() -> FullOperationOptions:
    return FullOperationOptions(
        read_preference=ReadPreference.PRIMARY,
        write_concern=WriteConcern(),
        codec_registry=default_codec_registry(),
    )


@dataclass
class CountOptions:
    """
    Options for `count`.

    Attributes:
        hint: an index name, or an index specification, to use.
        limit: the maximum number of documents to count (0 for no limit).
        skip: the number of matching documents to skip before counting.
        max_time_ms: the server-side time limit for the operation
            (0 for no limit).
    """

    hint: str | Mapping[str, Any] | None = None
    limit: int = 0
    skip: int = 0
    max_time_ms: int = 0

    def __post_init__(self) -> None:
        _check_non_negative(
            limit=self.limit, skip=self.skip, max_time_ms=self.max_time_ms
        )


@dataclass
class DistinctOptions:
    max_time_ms: int = 0

    def __post_init__(self) -> None:
        _check_non_negative(max_time_ms=self.max_time_ms)


@dataclass
class FindOptions:
    """
    Options for `find`. The same settings can be changed later through
    the fluent methods of the returned FindIterable.

    Attributes:
        batch_size: the number of documents per batch (0 for the server default).
        limit: the maximum number of documents to return (0 for no limit).
        skip: the number of documents to skip.
        max_time_ms: the server-side time limit for the query.
        projection: the fields to return, as a mapping or as a list of names.
        sort: the sort specification.
    """

    batch_size: int = 0
    limit: int = 0
    skip: int = 0
    max_time_ms: int = 0
    projection: ProjectionType | None = None
    sort: SortType | None = None

    def __post_init__(self) -> None:
        _check_non_negative(
            batch_size=self.batch_size,
            limit=self.limit,
            skip=self.skip,
            max_time_ms=self.max_time_ms,
        )


@dataclass
class AggregateOptions:
    """
    Options for `aggregate`. Settings left to None are not sent
    and the server defaults apply.
    """

    allow_disk_use: bool | None = None
    batch_size: int | None = None
    max_time_ms: int = 0
    use_cursor: bool | None = None

    def __post_init__(self) -> None:
        _check_non_negative(batch_size=self.batch_size, max_time_ms=self.max_time_ms)


@dataclass
class MapReduceOptions:
    """
    Options for `map_reduce`.

    When `collection_name` is None the results are returned inline,
    otherwise they are written to that collection (in database
    `database_name`, if given, or in the collection's own database)
    and read back from there.

    Attributes:
        collection_name: the output collection, None for inline results.
        finalize_function: the JavaScript source of a finalize function.
        scope: global variables accessible to the JavaScript functions.
        sort: a sort specification applied to the input documents.
        filter: a filter selecting the input documents.
        limit: the maximum number of input documents (0 for no limit).
        max_time_ms: the server-side time limit for the operation.
        js_mode: whether to skip the BSON conversion between map and reduce.
        verbose: whether to include timing information in the result.
        action: what to do with pre-existing documents in the output collection.
        database_name: the database of the output collection.
        sharded: whether the output collection is sharded.
        non_atomic: whether the output phase may yield (merge/reduce actions only).
    """

    collection_name: str | None = None
    finalize_function: str | None = None
    scope: Mapping[str, Any] | None = None
    sort: SortType | None = None
    filter: Any = None
    limit: int = 0
    max_time_ms: int = 0
    js_mode: bool = False
    verbose: bool = True
    action: MapReduceAction | str = MapReduceAction.REPLACE
    database_name: str | None = None
    sharded: bool = False
    non_atomic: bool = False

    def __post_init__(self) -> None:
        _check_non_negative(limit=self.limit, max_time_ms=self.max_time_ms)
        self.action = MapReduceAction.coerce(self.action)

    @property
    def is_inline(self) -> bool:
        return self.collection_name is None


@dataclass
class BulkWriteOptions:
    """
    Attributes:
        ordered: if True, the writes are applied in sequence and the first
            failure stops the batch; if False the backend may apply them
            in any order and keeps going after failures.
    """

    ordered: bool = DEFAULT_BULK_WRITE_ORDERED


@dataclass
class InsertManyOptions:
    ordered: bool = DEFAULT_INSERT_MANY_ORDERED


@dataclass
class UpdateOptions:
    """
    Attributes:
        upsert: whether to insert a new document when nothing matches.
    """

    upsert: bool = False


@dataclass
class FindOneAndDeleteOptions:
    projection: ProjectionType | None = None
    sort: SortType | None = None
    max_time_ms: int = 0

    def __post_init__(self) -> None:
        _check_non_negative(max_time_ms=self.max_time_ms)


@dataclass
class FindOneAndReplaceOptions:
    """
    Attributes:
        projection: the fields of the returned document.
        sort: determines which document is replaced if several match.
        upsert: whether to insert the replacement when nothing matches.
        return_document: whether to return the document as it was
            before the replacement (the default) or after it.
        max_time_ms: the server-side time limit for the operation.
    """

    projection: ProjectionType | None = None
    sort: SortType | None = None
    upsert: bool = False
    return_document: ReturnDocument | str = ReturnDocument.BEFORE
    max_time_ms: int = 0

    def __post_init__(self) -> None:
        _check_non_negative(max_time_ms=self.max_time_ms)
        self.return_document = ReturnDocument.coerce(self.return_document)


@dataclass
class FindOneAndUpdateOptions:
    projection: ProjectionType | None = None
    sort: SortType | None = None
    upsert: bool = False
    return_document: ReturnDocument | str = ReturnDocument.BEFORE
    max_time_ms: int = 0

    def __post_init__(self) -> None:
        _check_non_negative(max_time_ms=self.max_time_ms)
        self.return_document = ReturnDocument.coerce(self.return_document)


@dataclass
class CreateIndexOptions:
    """
    Options for `create_index`. Settings left to None are not sent.
    """

    name: str | None = None
    background: bool = False
    unique: bool = False
    sparse: bool = False
    expire_after_seconds: int | None = None
    version: int | None = None
    weights: Mapping[str, Any] | None = None
    default_language: str | None = None
    language_override: str | None = None
    text_index_version: int | None = None
    sphere_index_version: int | None = None
    bits: int | None = None
    min: float | None = None
    max: float | None = None
    bucket_size: float | None = None

    def __post_init__(self) -> None:
        _check_non_negative(expire_after_seconds=self.expire_after_seconds)


@dataclass
class RenameCollectionOptions:
    drop_target: bool = False
