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
Main conftest for shared fixtures: a recording execution backend and
collections built on top of it.
"""

from __future__ import annotations

import asyncio
import functools
import warnings
from collections import defaultdict, deque
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Callable, Deque, Dict, Optional

import pytest
from blockbuster import BlockBuster, blockbuster_ctx
from bson.objectid import ObjectId
from deprecation import UnsupportedWarning
from pymongo.read_preferences import _ServerMode

from asyncdoc import (
    AsyncCollection,
    Namespace,
    OperationOptions,
    defaultOperationOptions,
)
from asyncdoc.codecs import CollectibleCodec, DocumentCodec
from asyncdoc.commands import (
    CountOperation,
    DeleteOperation,
    DistinctOperation,
    InsertOperation,
    MixedBulkWriteOperation,
    Operation,
    UpdateOperation,
    WriteConcernResult,
)
from asyncdoc.constants import DefaultDocumentType
from asyncdoc.results import BulkWriteResult

DefaultAsyncCollection = AsyncCollection[DefaultDocumentType]

TEST_NAMESPACE = Namespace("test_db", "test_coll")


@pytest.fixture(autouse=True)
def blockbuster() -> Iterator[BlockBuster]:
    with blockbuster_ctx("asyncdoc") as bb:
        yield bb


def sync_fail_if_not_removed(method: Callable[..., Any]) -> Callable[..., Any]:
    """
    Decorate a test sync method to track removal of deprecated code.

    This is a typed version of the deprecation package's
    `fail_if_not_removed` decorator (see), with added minimal typing.
    """

    @functools.wraps(method)
    def test_inner(*args: Any, **kwargs: Any) -> Any:
        with warnings.catch_warnings(record=True) as caught_warnings:
            warnings.simplefilter("always")
            rv = method(*args, **kwargs)

        for warning in caught_warnings:
            if warning.category == UnsupportedWarning:
                raise AssertionError(
                    f"{method} uses a function that should be removed: {str(warning.message)}"
                )
        return rv

    return test_inner


def _default_result(operation: Operation) -> Any:
    if isinstance(operation, CountOperation):
        return 0
    if isinstance(operation, DistinctOperation):
        return []
    if isinstance(operation, (InsertOperation, UpdateOperation, DeleteOperation)):
        return WriteConcernResult(acknowledged=True, count=len(operation.requests))
    if isinstance(operation, MixedBulkWriteOperation):
        return BulkWriteResult(acknowledged=True)
    if operation.command_name in {"find", "aggregate", "mapReduce", "listIndexes"}:
        return []
    return None


class RecordingExecutor:
    """
    An execution backend recording every operation it receives, in order,
    and answering from scripted outcomes (results or exceptions) queued per
    operation type. Unscripted operations get a plausible default result.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[Operation, Optional[_ServerMode]]] = []
        self._outcomes: Dict[type, Deque[Any]] = defaultdict(deque)
        self.gate: Optional[asyncio.Event] = None

    @property
    def operations(self) -> list[Operation]:
        return [operation for operation, _ in self.calls]

    def will_return(self, operation_type: type, *outcomes: Any) -> None:
        self._outcomes[operation_type].extend(outcomes)

    def execute(
        self,
        operation: Operation,
        read_preference: Optional[_ServerMode] = None,
    ) -> Any:
        self.calls.append((operation, read_preference))
        return self._respond(operation)

    async def _respond(self, operation: Operation) -> Any:
        if self.gate is not None:
            await self.gate.wait()
        else:
            await asyncio.sleep(0)
        queue = self._outcomes[type(operation)]
        if not queue:
            return _default_result(operation)
        outcome = queue.popleft()
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@dataclass
class Person:
    name: str
    age: int
    id: Optional[ObjectId] = None


class PersonCodec(CollectibleCodec[Person]):
    def __init__(self) -> None:
        self.document_class = Person

    def to_document(self, value: Person) -> Dict[str, Any]:
        document: Dict[str, Any] = {"name": value.name, "age": value.age}
        if value.id is not None:
            document["_id"] = value.id
        return document

    def from_document(self, document: Dict[str, Any]) -> Person:
        return Person(name=document["name"], age=document["age"], id=document.get("_id"))

    def document_has_id(self, document: Person) -> bool:
        return document.id is not None

    def get_document_id(self, document: Person) -> Any:
        return document.id

    def generate_id_if_absent(self, document: Person) -> Person:
        if document.id is None:
            document.id = ObjectId()
        return document


@dataclass
class Point:
    x: float
    y: float


class PointCodec(DocumentCodec[Point]):
    """A codec without identifier support."""

    def __init__(self) -> None:
        self.document_class = Point

    def to_document(self, value: Point) -> Dict[str, Any]:
        return {"x": value.x, "y": value.y}

    def from_document(self, document: Dict[str, Any]) -> Point:
        return Point(x=document["x"], y=document["y"])


@pytest.fixture
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def collection(executor: RecordingExecutor) -> DefaultAsyncCollection:
    return AsyncCollection(
        namespace=TEST_NAMESPACE,
        document_class=dict,
        options=defaultOperationOptions(),
        executor=executor,
    )


@pytest.fixture
def person_collection(
    collection: DefaultAsyncCollection,
) -> AsyncCollection[Person]:
    registry = collection.options.codec_registry.with_codecs(
        PersonCodec(), PointCodec()
    )
    return collection.with_options(
        OperationOptions(codec_registry=registry)
    ).with_document_class(Person)


__all__ = [
    "DefaultAsyncCollection",
    "Person",
    "PersonCodec",
    "Point",
    "PointCodec",
    "RecordingExecutor",
    "TEST_NAMESPACE",
    "sync_fail_if_not_removed",
]
