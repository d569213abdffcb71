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
import dataclasses
import logging
from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Generic, Optional

from pymongo.read_preferences import _ServerMode
from typing_extensions import override

from asyncdoc.coercion import as_document, as_optional_document, as_projection
from asyncdoc.commands import FindOperation, ReadOperation
from asyncdoc.composition import decode_documents
from asyncdoc.constants import DOC, ProjectionType, SortType
from asyncdoc.executor import AsyncOperationExecutor
from asyncdoc.namespace import Namespace
from asyncdoc.options import FindOptions, FullOperationOptions

logger = logging.getLogger(__name__)


class QueryIterable(ABC, Generic[DOC]):
    """
    A handle on a query: it knows which read operation to dispatch and how
    to decode the documents it returns, but nothing is executed until the
    handle is iterated (with `async for`) or `to_list`/`first` is awaited.
    Each execution dispatches the operation anew.

    A handle can depend on a "prerequisite" task (such as an aggregation
    writing into the collection being queried): the task is awaited before
    the query runs, and its failure is raised in place of the query results.

    Building a handle for a document class with no codec in the registry
    raises CodecConfigurationException at once.
    """

    def __init__(
        self,
        *,
        options: FullOperationOptions,
        executor: AsyncOperationExecutor,
        document_class: type[DOC],
        prerequisite: Optional[asyncio.Future[Any]] = None,
    ) -> None:
        self._options = options
        self._executor = executor
        self._document_class = document_class
        self._prerequisite = prerequisite
        self._decode = decode_documents(document_class, options.codec_registry)

    @property
    @abstractmethod
    def operation(self) -> ReadOperation:
        """The read operation dispatched when this handle is executed."""
        ...

    @property
    def namespace(self) -> Namespace:
        namespace: Namespace = getattr(self.operation, "namespace")
        return namespace

    @property
    def options(self) -> FullOperationOptions:
        return self._options

    @property
    def read_preference(self) -> _ServerMode:
        return self._options.read_preference

    @property
    def document_class(self) -> type[DOC]:
        return self._document_class

    @property
    def prerequisite(self) -> Optional[asyncio.Future[Any]]:
        return self._prerequisite

    async def to_list(self) -> list[DOC]:
        """Execute the query and return all resulting documents, decoded."""

        if self._prerequisite is not None:
            await self._prerequisite
        operation = self.operation
        logger.info(f"{operation.command_name} on '{self.namespace}'")
        raw_documents = await self._executor.execute(operation, self.read_preference)
        logger.info(f"finished {operation.command_name} on '{self.namespace}'")
        return self._decode(raw_documents)

    async def first(self) -> Optional[DOC]:
        """Execute the query and return its first document, or None."""

        documents = await self.to_list()
        if documents:
            return documents[0]
        return None

    def __aiter__(self) -> AsyncIterator[DOC]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[DOC]:
        for document in await self.to_list():
            yield document


class OperationIterable(QueryIterable[DOC]):
    """
    A query handle over a ready-made read operation, such as an inline
    aggregation or an inline map-reduce.
    """

    def __init__(
        self,
        operation: ReadOperation,
        *,
        options: FullOperationOptions,
        executor: AsyncOperationExecutor,
        document_class: type[DOC],
    ) -> None:
        super().__init__(
            options=options,
            executor=executor,
            document_class=document_class,
        )
        self._operation = operation

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(operation={self._operation.command_name}, "
            f'namespace="{self.namespace}")'
        )

    @property
    @override
    def operation(self) -> ReadOperation:
        return self._operation


class FindIterable(QueryIterable[DOC]):
    """
    A query handle for `find`, with fluent methods to refine the query.
    Each fluent method returns a new handle, leaving the original unchanged.

    Example:
        >>> async def get_names(acol: AsyncCollection) -> list[str]:
        ...     handle = acol.find({"kind": "person"}).limit(10)
        ...     handle = handle.sort({"name": SortMode.DESCENDING})
        ...     return [doc["name"] async for doc in handle]
    """

    def __init__(
        self,
        namespace: Namespace,
        *,
        options: FullOperationOptions,
        executor: AsyncOperationExecutor,
        filter: Any,
        find_options: FindOptions,
        document_class: type[DOC],
        prerequisite: Optional[asyncio.Future[Any]] = None,
    ) -> None:
        super().__init__(
            options=options,
            executor=executor,
            document_class=document_class,
            prerequisite=prerequisite,
        )
        registry = options.codec_registry
        self._operation = FindOperation(
            namespace=namespace,
            filter=as_document(filter, registry),
            projection=as_projection(find_options.projection, registry),
            sort=as_optional_document(find_options.sort, registry),
            skip=find_options.skip,
            limit=find_options.limit,
            batch_size=find_options.batch_size,
            max_time_ms=find_options.max_time_ms,
        )

    def __repr__(self) -> str:
        return (
            f'{self.__class__.__name__}(namespace="{self.namespace}", '
            f"document_class={self._document_class.__name__})"
        )

    @property
    @override
    def operation(self) -> FindOperation:
        return self._operation

    def _copy(self, **changes: Any) -> FindIterable[DOC]:
        new_iterable: FindIterable[DOC] = object.__new__(self.__class__)
        new_iterable.__dict__.update(self.__dict__)
        new_iterable._operation = dataclasses.replace(self._operation, **changes)
        return new_iterable

    def filter(self, filter: Any) -> FindIterable[DOC]:
        return self._copy(filter=as_document(filter, self._options.codec_registry))

    def projection(self, projection: Optional[ProjectionType]) -> FindIterable[DOC]:
        return self._copy(
            projection=as_projection(projection, self._options.codec_registry)
        )

    def sort(self, sort: Optional[SortType]) -> FindIterable[DOC]:
        return self._copy(
            sort=as_optional_document(sort, self._options.codec_registry)
        )

    def skip(self, skip: int) -> FindIterable[DOC]:
        if skip < 0:
            raise ValueError("Parameter 'skip' cannot be negative.")
        return self._copy(skip=skip)

    def limit(self, limit: int) -> FindIterable[DOC]:
        if limit < 0:
            raise ValueError("Parameter 'limit' cannot be negative.")
        return self._copy(limit=limit)

    def batch_size(self, batch_size: int) -> FindIterable[DOC]:
        if batch_size < 0:
            raise ValueError("Parameter 'batch_size' cannot be negative.")
        return self._copy(batch_size=batch_size)

    def max_time_ms(self, max_time_ms: int) -> FindIterable[DOC]:
        if max_time_ms < 0:
            raise ValueError("Parameter 'max_time_ms' cannot be negative.")
        return self._copy(max_time_ms=max_time_ms)

    @override
    async def first(self) -> Optional[DOC]:
        documents = await self.limit(1).to_list()
        if documents:
            return documents[0]
        return None
