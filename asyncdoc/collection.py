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

import asyncio
import logging
from typing import Any, Callable, Generic, Iterable, Mapping, TypeVar

from bson.code import Code
from bson.raw_bson import RawBSONDocument
from pymongo.read_preferences import ReadPreference, _ServerMode

from asyncdoc import __version__
from asyncdoc.codecs import DocumentCodec
from asyncdoc.coercion import (
    as_document,
    as_document_list,
    as_hint,
    as_index_keys,
    as_optional_document,
    as_projection,
)
from asyncdoc.commands import (
    AggregateOperation,
    AggregateToCollectionOperation,
    CountOperation,
    CreateIndexOperation,
    DeleteOperation,
    DistinctOperation,
    DropCollectionOperation,
    DropIndexOperation,
    FindAndDeleteOperation,
    FindAndReplaceOperation,
    FindAndUpdateOperation,
    InsertOperation,
    ListIndexesOperation,
    MapReduceToCollectionOperation,
    MapReduceWithInlineResultsOperation,
    MixedBulkWriteOperation,
    Operation,
    RenameCollectionOperation,
    UpdateOperation,
)
from asyncdoc.composition import (
    compose,
    decode_documents,
    decode_optional_document,
    decode_values,
    discard,
    fire_and_forget,
    passthrough,
    start_operation,
    to_delete_result,
    to_insert_many_result,
    to_insert_one_result,
    to_update_result,
)
from asyncdoc.constants import (
    DOC,
    DOC2,
    FilterType,
    IndexKeysType,
    PipelineType,
    ReturnDocument,
)
from asyncdoc.cursors import FindIterable, OperationIterable, QueryIterable
from asyncdoc.executor import AsyncOperationExecutor
from asyncdoc.namespace import Namespace
from asyncdoc.operations import (
    DeleteMany,
    DeleteOne,
    InsertOne,
    ReplaceOne,
    UpdateMany,
    UpdateOne,
)
from asyncdoc.options import (
    AggregateOptions,
    BulkWriteOptions,
    CountOptions,
    CreateIndexOptions,
    DistinctOptions,
    FindOneAndDeleteOptions,
    FindOneAndReplaceOptions,
    FindOneAndUpdateOptions,
    FindOptions,
    FullOperationOptions,
    InsertManyOptions,
    MapReduceOptions,
    OperationOptions,
    RenameCollectionOptions,
    UpdateOptions,
)
from asyncdoc.results import (
    BulkWriteResult,
    DeleteResult,
    InsertManyResult,
    InsertOneResult,
    UpdateResult,
)
from asyncdoc.settings.defaults import (
    AGGREGATE_OUT_STAGE,
    DEFAULT_ID_FIELD,
    DROP_ALL_INDEXES_NAME,
)
from asyncdoc.translation import translate_write_models
from asyncdoc.utils.meta import deprecated_alias
from asyncdoc.utils.unset import _UNSET, UnsetType
from asyncdoc.write_requests import DeleteRequest, InsertRequest, UpdateRequest

logger = logging.getLogger(__name__)

R = TypeVar("R")


class AsyncCollection(Generic[DOC]):
    """
    A collection of a document database, the object to issue queries,
    writes and administrative commands against it.
    This class has an asynchronous interface.

    Every method sending an operation to the backend returns an
    `asyncio.Future` right away (hence it must be called with a running event
    loop). Errors found while preparing the operation, such as a filter that
    cannot be encoded or an unsupported write model, are raised directly by
    the method call and nothing is sent to the backend in that case. Errors
    occurring later (backend failures, undecodable results) are raised when
    awaiting the future.

    Methods taking an `options` parameter treat `None` exactly as a
    default-constructed options object of the appropriate type.

    Args:
        namespace: the database and collection names.
        document_class: the type of the documents in this collection. A codec
            for this type must be registered in the options' codec registry.
        options: the read preference, write concern and codec registry.
        executor: the execution backend.

    Example:
        >>> from asyncdoc import AsyncCollection, Namespace
        >>> from asyncdoc.options import defaultOperationOptions
        >>>
        >>> my_collection = AsyncCollection(
        ...     namespace=Namespace("shop", "orders"),
        ...     document_class=dict,
        ...     options=defaultOperationOptions(),
        ...     executor=my_executor,
        ... )
        >>> async def main() -> None:
        ...     await my_collection.insert_one({"item": "pen", "qty": 3})
        ...     print(await my_collection.count({"item": "pen"}))
        ...
        >>> asyncio.run(main())
        1
    """

    def __init__(
        self,
        *,
        namespace: Namespace,
        document_class: type[DOC],
        options: FullOperationOptions,
        executor: AsyncOperationExecutor,
    ) -> None:
        self._namespace = namespace
        self._document_class = document_class
        self._options = options
        self._executor = executor

    def __repr__(self) -> str:
        return (
            f'{self.__class__.__name__}(namespace="{self._namespace}", '
            f"document_class={self._document_class.__name__}, "
            f"options={self._options})"
        )

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, AsyncCollection):
            return all(
                [
                    self._namespace == other._namespace,
                    self._document_class == other._document_class,
                    self._options == other._options,
                    self._executor is other._executor,
                ]
            )
        else:
            return False

    @property
    def namespace(self) -> Namespace:
        return self._namespace

    @property
    def name(self) -> str:
        return self._namespace.collection_name

    @property
    def database_name(self) -> str:
        return self._namespace.database_name

    @property
    def full_name(self) -> str:
        return self._namespace.full_name

    @property
    def document_class(self) -> type[DOC]:
        return self._document_class

    @property
    def options(self) -> FullOperationOptions:
        return self._options

    @property
    def executor(self) -> AsyncOperationExecutor:
        return self._executor

    def with_options(
        self,
        options: OperationOptions | UnsetType = _UNSET,
    ) -> AsyncCollection[DOC]:
        """
        Create a clone of this collection with some changed settings.

        Args:
            options: an OperationOptions object whose set attributes
                override those of this collection.

        Returns:
            a new AsyncCollection instance.
        """

        return AsyncCollection(
            namespace=self._namespace,
            document_class=self._document_class,
            options=self._options.with_override(options),
            executor=self._executor,
        )

    def with_document_class(self, document_class: type[DOC2]) -> AsyncCollection[DOC2]:
        """Create a clone of this collection handling another document type."""
        return AsyncCollection(
            namespace=self._namespace,
            document_class=document_class,
            options=self._options,
            executor=self._executor,
        )

    def _codec(self) -> DocumentCodec[DOC]:
        return self._options.codec_registry.get(self._document_class)

    def _as_document(self, value: Any) -> RawBSONDocument:
        return as_document(value, self._options.codec_registry)

    def _as_optional_document(self, value: Any) -> RawBSONDocument | None:
        return as_optional_document(value, self._options.codec_registry)

    def _derived_read_options(self) -> FullOperationOptions:
        return self._options.with_override(
            OperationOptions(read_preference=ReadPreference.PRIMARY)
        )

    def _dispatch(
        self,
        label: str,
        operation: Operation,
        transform: Callable[[Any], R],
        *,
        read_preference: _ServerMode | None = None,
    ) -> asyncio.Future[R]:
        full_name = self.full_name
        logger.info(f"{label} on '{full_name}'")

        def _finish(raw_result: Any) -> R:
            logger.info(f"finished {label} on '{full_name}'")
            return transform(raw_result)

        return compose(
            start_operation(
                lambda: self._executor.execute(operation, read_preference)
            ),
            _finish,
        )

    def _fire_and_forget(self, label: str, operation: Operation) -> asyncio.Task[Any]:
        logger.info(f"{label} on '{self.full_name}' (background)")
        return fire_and_forget(
            start_operation(lambda: self._executor.execute(operation, None)),
            description=f"{label} on '{self.full_name}'",
        )

    def _inserted_id(self, document: Any, encoded: RawBSONDocument) -> Any:
        codec = self._codec()
        collectible = codec.as_collectible()
        if collectible is not None and isinstance(document, codec.document_class):
            return collectible.get_document_id(document)
        return encoded.get(DEFAULT_ID_FIELD)

    def count(
        self,
        filter: FilterType | None = None,
        options: CountOptions | None = None,
    ) -> asyncio.Future[int]:
        """
        Count the documents in the collection matching a filter.

        Args:
            filter: a filter. None (the default) counts all documents.
            options: a CountOptions object (skip, limit, hint, max_time_ms).

        Returns:
            a future for the number of matching documents.
        """

        _options = options or CountOptions()
        registry = self._options.codec_registry
        operation = CountOperation(
            namespace=self._namespace,
            filter=self._as_document(filter),
            skip=_options.skip,
            limit=_options.limit,
            max_time_ms=_options.max_time_ms,
            hint=as_hint(_options.hint, registry),
        )
        return self._dispatch(
            "count",
            operation,
            passthrough,
            read_preference=self._options.read_preference,
        )

    def distinct(
        self,
        field_name: str,
        filter: FilterType | None = None,
        options: DistinctOptions | None = None,
    ) -> asyncio.Future[list[Any]]:
        """
        Return the distinct values of a field across the documents matching
        a filter.

        Each value is decoded through the codec registry. If any of the
        values cannot be decoded, the whole operation fails with
        DecodeException: partial results are never returned.

        Args:
            field_name: the name of the field (dotted notation allowed).
            filter: a filter. None (the default) considers all documents.
            options: a DistinctOptions object.

        Returns:
            a future for the list of distinct values.
        """

        _options = options or DistinctOptions()
        operation = DistinctOperation(
            namespace=self._namespace,
            field_name=field_name,
            filter=self._as_document(filter),
            max_time_ms=_options.max_time_ms,
        )
        return self._dispatch(
            "distinct",
            operation,
            decode_values(self._options.codec_registry),
            read_preference=self._options.read_preference,
        )

    def find(
        self,
        filter: FilterType | None = None,
        options: FindOptions | None = None,
        *,
        document_class: type[DOC2] | None = None,
    ) -> FindIterable[Any]:
        """
        Find documents matching a filter. Nothing is executed until the
        returned handle is iterated.

        Args:
            filter: a filter. None (the default) matches all documents.
            options: a FindOptions object.
            document_class: the type to decode results into, if not the
                collection's document class.

        Returns:
            a FindIterable.
        """

        return FindIterable(
            self._namespace,
            options=self._options,
            executor=self._executor,
            filter=filter,
            find_options=options or FindOptions(),
            document_class=document_class or self._document_class,
        )

    def _out_namespace(self, pipeline: list[RawBSONDocument]) -> Namespace | None:
        if not pipeline:
            return None
        out_target = pipeline[-1].get(AGGREGATE_OUT_STAGE)
        if out_target is None:
            return None
        if isinstance(out_target, str):
            return self._namespace.sibling(out_target)
        if isinstance(out_target, Mapping) and "coll" in out_target:
            return Namespace(
                out_target.get("db", self.database_name),
                out_target["coll"],
            )
        raise ValueError(
            f"Unsupported value for the {AGGREGATE_OUT_STAGE} stage: {out_target!r}."
        )

    def aggregate(
        self,
        pipeline: PipelineType,
        options: AggregateOptions | None = None,
        *,
        document_class: type[DOC2] | None = None,
    ) -> QueryIterable[Any]:
        """
        Run an aggregation pipeline.

        If the last stage of the pipeline is an `$out` stage, the aggregation
        is started at once, in the background, and the returned handle is a
        query on the output collection (read from the primary) which, when
        executed, first waits for the aggregation to complete. Otherwise the
        aggregation runs when the returned handle is executed.

        Args:
            pipeline: the stages of the pipeline.
            options: an AggregateOptions object.
            document_class: the type to decode results into, if not the
                collection's document class.

        Returns:
            a query handle.
        """

        _options = options or AggregateOptions()
        _document_class = document_class or self._document_class
        # fails before dispatching if results could not be decoded
        self._options.codec_registry.decoder_for(_document_class)
        pipeline_documents = as_document_list(pipeline, self._options.codec_registry)
        out_namespace = self._out_namespace(pipeline_documents)
        if out_namespace is not None:
            to_collection_operation = AggregateToCollectionOperation(
                namespace=self._namespace,
                pipeline=pipeline_documents,
                allow_disk_use=_options.allow_disk_use,
                max_time_ms=_options.max_time_ms,
            )
            background_task = self._fire_and_forget(
                "aggregate", to_collection_operation
            )
            return FindIterable(
                out_namespace,
                options=self._derived_read_options(),
                executor=self._executor,
                filter=None,
                find_options=FindOptions(),
                document_class=_document_class,
                prerequisite=background_task,
            )
        else:
            return OperationIterable(
                AggregateOperation(
                    namespace=self._namespace,
                    pipeline=pipeline_documents,
                    allow_disk_use=_options.allow_disk_use,
                    batch_size=_options.batch_size,
                    max_time_ms=_options.max_time_ms,
                    use_cursor=_options.use_cursor,
                ),
                options=self._options,
                executor=self._executor,
                document_class=_document_class,
            )

    def map_reduce(
        self,
        map_function: str,
        reduce_function: str,
        options: MapReduceOptions | None = None,
        *,
        document_class: type[DOC2] | None = None,
    ) -> QueryIterable[Any]:
        """
        Run a map-reduce over the collection.

        With inline output (no `collection_name` in the options) the
        map-reduce runs when the returned handle is executed. Otherwise it
        starts at once, in the background, writing to the output collection,
        and the returned handle is a query on that collection (read from the
        primary) which waits for the map-reduce to complete.

        Args:
            map_function: the JavaScript source of the map function.
            reduce_function: the JavaScript source of the reduce function.
            options: a MapReduceOptions object.
            document_class: the type to decode results into, if not the
                collection's document class.

        Returns:
            a query handle.
        """

        _options = options or MapReduceOptions()
        _document_class = document_class or self._document_class
        # fails before dispatching if results could not be decoded
        self._options.codec_registry.decoder_for(_document_class)
        finalize_function = (
            Code(_options.finalize_function)
            if _options.finalize_function is not None
            else None
        )
        filter = self._as_optional_document(_options.filter)
        scope = self._as_optional_document(_options.scope)
        sort = self._as_optional_document(_options.sort)
        if _options.collection_name is None:
            return OperationIterable(
                MapReduceWithInlineResultsOperation(
                    namespace=self._namespace,
                    map_function=Code(map_function),
                    reduce_function=Code(reduce_function),
                    finalize_function=finalize_function,
                    filter=filter,
                    limit=_options.limit,
                    max_time_ms=_options.max_time_ms,
                    js_mode=_options.js_mode,
                    scope=scope,
                    sort=sort,
                    verbose=_options.verbose,
                ),
                options=self._options,
                executor=self._executor,
                document_class=_document_class,
            )
        else:
            to_collection_operation = MapReduceToCollectionOperation(
                namespace=self._namespace,
                map_function=Code(map_function),
                reduce_function=Code(reduce_function),
                collection_name=_options.collection_name,
                finalize_function=finalize_function,
                filter=filter,
                limit=_options.limit,
                max_time_ms=_options.max_time_ms,
                js_mode=_options.js_mode,
                scope=scope,
                sort=sort,
                verbose=_options.verbose,
                action=_options.action,  # type: ignore[arg-type]
                non_atomic=_options.non_atomic,
                sharded=_options.sharded,
                database_name=_options.database_name,
            )
            background_task = self._fire_and_forget(
                "mapReduce", to_collection_operation
            )
            return FindIterable(
                Namespace(
                    _options.database_name or self.database_name,
                    _options.collection_name,
                ),
                options=self._derived_read_options(),
                executor=self._executor,
                filter=None,
                find_options=FindOptions(),
                document_class=_document_class,
                prerequisite=background_task,
            )

    def bulk_write(
        self,
        requests: Iterable[Any],
        options: BulkWriteOptions | None = None,
    ) -> asyncio.Future[BulkWriteResult]:
        """
        Execute a batch of mixed write operations as a single bulk write.

        Args:
            requests: a sequence of write models: InsertOne, InsertMany,
                ReplaceOne, UpdateOne, UpdateMany, DeleteOne, DeleteMany
                (from `asyncdoc.operations`). Documents to insert receive
                a generated identifier, in place, when lacking one.
            options: a BulkWriteOptions object. With `ordered=True` (the
                default) the backend applies the writes in sequence and
                stops at the first failure.

        Returns:
            a future for the BulkWriteResult produced by the backend.

        Raises:
            UnsupportedWriteModelException: if any of the requests is not one
                of the supported write models. Nothing is sent in that case.
            EncodingException: if any filter, document or update cannot be
                encoded. Nothing is sent in that case.
        """

        _options = options or BulkWriteOptions()
        write_requests = translate_write_models(
            requests,
            codec=self._codec(),
            registry=self._options.codec_registry,
        )
        if not write_requests:
            raise ValueError("Cannot execute an empty bulk write.")
        operation = MixedBulkWriteOperation(
            namespace=self._namespace,
            requests=write_requests,
            ordered=_options.ordered,
            write_concern=self._options.write_concern,
        )
        return self._dispatch("bulkWrite", operation, passthrough)

    def insert_one(self, document: DOC) -> asyncio.Future[InsertOneResult]:
        """
        Insert a single document in the collection.

        Args:
            document: the document to insert. If the collection codec
                supports it and the document has no identifier, one is
                generated and set on the document itself.

        Returns:
            a future for an InsertOneResult.
        """

        insert_requests = [
            request
            for request in translate_write_models(
                [InsertOne(document)],
                codec=self._codec(),
                registry=self._options.codec_registry,
            )
            if isinstance(request, InsertRequest)
        ]
        inserted_id = self._inserted_id(document, insert_requests[0].documents[0])
        operation = InsertOperation(
            namespace=self._namespace,
            ordered=True,
            write_concern=self._options.write_concern,
            requests=insert_requests,
        )
        return self._dispatch(
            "insertOne", operation, to_insert_one_result(inserted_id)
        )

    def insert_many(
        self,
        documents: Iterable[DOC],
        options: InsertManyOptions | None = None,
    ) -> asyncio.Future[InsertManyResult]:
        """
        Insert a list of documents into the collection.

        Args:
            documents: the documents to insert, identifiers being generated
                as for `insert_one`.
            options: an InsertManyOptions object. With `ordered=True` (the
                default) insertion stops at the first failure.

        Returns:
            a future for an InsertManyResult.
        """

        _options = options or InsertManyOptions()
        _documents = list(documents)
        if not _documents:
            raise ValueError("Cannot insert an empty list of documents.")
        insert_requests = [
            request
            for request in translate_write_models(
                [InsertOne(document) for document in _documents],
                codec=self._codec(),
                registry=self._options.codec_registry,
            )
            if isinstance(request, InsertRequest)
        ]
        inserted_ids = [
            self._inserted_id(document, request.documents[0])
            for document, request in zip(_documents, insert_requests)
        ]
        operation = InsertOperation(
            namespace=self._namespace,
            ordered=_options.ordered,
            write_concern=self._options.write_concern,
            requests=insert_requests,
        )
        return self._dispatch(
            "insertMany", operation, to_insert_many_result(inserted_ids)
        )

    def _delete(self, label: str, model: Any) -> asyncio.Future[DeleteResult]:
        delete_requests = [
            request
            for request in translate_write_models(
                [model],
                codec=self._codec(),
                registry=self._options.codec_registry,
            )
            if isinstance(request, DeleteRequest)
        ]
        operation = DeleteOperation(
            namespace=self._namespace,
            ordered=True,
            write_concern=self._options.write_concern,
            requests=delete_requests,
        )
        return self._dispatch(label, operation, to_delete_result)

    def delete_one(self, filter: FilterType | None) -> asyncio.Future[DeleteResult]:
        """
        Delete at most one document matching a filter.

        Returns:
            a future for a DeleteResult. If the write is not acknowledged,
            the result says so and carries no count.
        """

        return self._delete("deleteOne", DeleteOne(filter))

    def delete_many(self, filter: FilterType | None) -> asyncio.Future[DeleteResult]:
        """
        Delete all documents matching a filter. Passing None (or an empty
        filter) deletes every document in the collection.

        Returns:
            a future for a DeleteResult.
        """

        return self._delete("deleteMany", DeleteMany(filter))

    def _update(self, label: str, model: Any) -> asyncio.Future[UpdateResult]:
        update_requests = [
            request
            for request in translate_write_models(
                [model],
                codec=self._codec(),
                registry=self._options.codec_registry,
            )
            if isinstance(request, UpdateRequest)
        ]
        operation = UpdateOperation(
            namespace=self._namespace,
            ordered=True,
            write_concern=self._options.write_concern,
            requests=update_requests,
        )
        return self._dispatch(label, operation, to_update_result)

    def replace_one(
        self,
        filter: FilterType,
        replacement: DOC,
        options: UpdateOptions | None = None,
    ) -> asyncio.Future[UpdateResult]:
        """
        Replace a single document matching a filter.

        Args:
            filter: a filter selecting the document to replace.
            replacement: the new document.
            options: an UpdateOptions object; with `upsert=True` the
                replacement is inserted when nothing matches.

        Returns:
            a future for an UpdateResult.
        """

        _options = options or UpdateOptions()
        return self._update(
            "replaceOne", ReplaceOne(filter, replacement, upsert=_options.upsert)
        )

    def update_one(
        self,
        filter: FilterType,
        update: Any,
        options: UpdateOptions | None = None,
    ) -> asyncio.Future[UpdateResult]:
        """
        Update a single document matching a filter.

        Args:
            filter: a filter selecting the document to update.
            update: the update prescription, e.g. `{"$set": {"a": 1}}`.
            options: an UpdateOptions object; with `upsert=True` a document
                is created when nothing matches.

        Returns:
            a future for an UpdateResult. Its `modified_count` is None, the
            backend acknowledgement not telling this information.
        """

        _options = options or UpdateOptions()
        return self._update(
            "updateOne", UpdateOne(filter, update, upsert=_options.upsert)
        )

    def update_many(
        self,
        filter: FilterType,
        update: Any,
        options: UpdateOptions | None = None,
    ) -> asyncio.Future[UpdateResult]:
        """
        Update all documents matching a filter. See `update_one`.
        """

        _options = options or UpdateOptions()
        return self._update(
            "updateMany", UpdateMany(filter, update, upsert=_options.upsert)
        )

    def find_one_and_delete(
        self,
        filter: FilterType,
        options: FindOneAndDeleteOptions | None = None,
    ) -> asyncio.Future[DOC | None]:
        """
        Atomically find a document and delete it.

        Returns:
            a future for the deleted document, decoded into the collection's
            document class, or None if nothing matched.
        """

        _options = options or FindOneAndDeleteOptions()
        registry = self._options.codec_registry
        operation = FindAndDeleteOperation(
            namespace=self._namespace,
            filter=self._as_document(filter),
            projection=as_projection(_options.projection, registry),
            sort=self._as_optional_document(_options.sort),
            max_time_ms=_options.max_time_ms,
        )
        return self._dispatch(
            "findOneAndDelete",
            operation,
            decode_optional_document(self._document_class, registry),
        )

    def find_one_and_replace(
        self,
        filter: FilterType,
        replacement: DOC,
        options: FindOneAndReplaceOptions | None = None,
    ) -> asyncio.Future[DOC | None]:
        """
        Atomically find a document and replace it.

        Returns:
            a future for the document as it was before the replacement, or
            as it is after it if the options say `ReturnDocument.AFTER`.
            None if nothing matched (and no upsert took place).
        """

        _options = options or FindOneAndReplaceOptions()
        registry = self._options.codec_registry
        operation = FindAndReplaceOperation(
            namespace=self._namespace,
            filter=self._as_document(filter),
            replacement=self._as_document(replacement),
            projection=as_projection(_options.projection, registry),
            sort=self._as_optional_document(_options.sort),
            return_original=_options.return_document == ReturnDocument.BEFORE,
            upsert=_options.upsert,
            max_time_ms=_options.max_time_ms,
        )
        return self._dispatch(
            "findOneAndReplace",
            operation,
            decode_optional_document(self._document_class, registry),
        )

    def find_one_and_update(
        self,
        filter: FilterType,
        update: Any,
        options: FindOneAndUpdateOptions | None = None,
    ) -> asyncio.Future[DOC | None]:
        """
        Atomically find a document and update it. See `find_one_and_replace`
        for the returned value.
        """

        _options = options or FindOneAndUpdateOptions()
        registry = self._options.codec_registry
        operation = FindAndUpdateOperation(
            namespace=self._namespace,
            filter=self._as_document(filter),
            update=self._as_document(update),
            projection=as_projection(_options.projection, registry),
            sort=self._as_optional_document(_options.sort),
            return_original=_options.return_document == ReturnDocument.BEFORE,
            upsert=_options.upsert,
            max_time_ms=_options.max_time_ms,
        )
        return self._dispatch(
            "findOneAndUpdate",
            operation,
            decode_optional_document(self._document_class, registry),
        )

    def drop(self) -> asyncio.Future[None]:
        """Drop the collection, with all its documents and indexes."""
        return self._dispatch(
            "drop", DropCollectionOperation(namespace=self._namespace), discard
        )

    @deprecated_alias("drop", current_version=__version__)
    def drop_collection(self) -> asyncio.Future[None]:
        """Drop the collection. Deprecated alias of `drop`."""
        return self.drop()

    def create_index(
        self,
        keys: IndexKeysType | str,
        options: CreateIndexOptions | None = None,
    ) -> asyncio.Future[None]:
        """
        Create an index on the collection.

        Args:
            keys: the index specification, as a mapping such as
                `{"name": 1, "date": -1}`, as a list of (field, direction)
                pairs, or as a single field name for an ascending index.
            options: a CreateIndexOptions object.
        """

        _options = options or CreateIndexOptions()
        registry = self._options.codec_registry
        operation = CreateIndexOperation(
            namespace=self._namespace,
            keys=as_index_keys(keys, registry),
            name=_options.name,
            background=_options.background,
            unique=_options.unique,
            sparse=_options.sparse,
            expire_after_seconds=_options.expire_after_seconds,
            version=_options.version,
            weights=self._as_optional_document(_options.weights),
            default_language=_options.default_language,
            language_override=_options.language_override,
            text_index_version=_options.text_index_version,
            sphere_index_version=_options.sphere_index_version,
            bits=_options.bits,
            min=_options.min,
            max=_options.max,
            bucket_size=_options.bucket_size,
        )
        return self._dispatch("createIndex", operation, discard)

    def list_indexes(
        self,
        document_class: type[DOC2] = dict,  # type: ignore[assignment]
    ) -> asyncio.Future[list[DOC2]]:
        """
        List the indexes of the collection.

        Args:
            document_class: the type to decode each index description into.

        Returns:
            a future for the list of index descriptions.
        """

        return self._dispatch(
            "listIndexes",
            ListIndexesOperation(namespace=self._namespace),
            decode_documents(document_class, self._options.codec_registry),
            read_preference=self._options.read_preference,
        )

    @deprecated_alias("list_indexes", current_version=__version__)
    def get_indexes(
        self,
        document_class: type[DOC2] = dict,  # type: ignore[assignment]
    ) -> asyncio.Future[list[DOC2]]:
        """List the indexes of the collection. Deprecated alias of `list_indexes`."""
        return self.list_indexes(document_class)

    def drop_index(self, index_name: str) -> asyncio.Future[None]:
        """Drop the index with the given name."""
        return self._dispatch(
            "dropIndex",
            DropIndexOperation(namespace=self._namespace, index_name=index_name),
            discard,
        )

    def drop_indexes(self) -> asyncio.Future[None]:
        """Drop all indexes of the collection (except the one on the identifier)."""
        return self.drop_index(DROP_ALL_INDEXES_NAME)

    def rename_collection(
        self,
        new_namespace: Namespace | str,
        options: RenameCollectionOptions | None = None,
    ) -> asyncio.Future[None]:
        """
        Rename the collection.

        Args:
            new_namespace: the new namespace, or just a new collection name
                within the same database.
            options: a RenameCollectionOptions object; with `drop_target=True`
                an existing collection with the new name is dropped first.
        """

        _options = options or RenameCollectionOptions()
        _new_namespace = (
            self._namespace.sibling(new_namespace)
            if isinstance(new_namespace, str)
            else new_namespace
        )
        operation = RenameCollectionOperation(
            namespace=self._namespace,
            new_namespace=_new_namespace,
            drop_target=_options.drop_target,
        )
        return self._dispatch("renameCollection", operation, discard)
