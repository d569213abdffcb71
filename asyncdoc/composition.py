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
Asynchronous composition of backend results into the values handed to the
caller.

`compose` chains a transformation onto the awaitable returned by the
execution backend, in a task of its own, so that callers get a future
immediately. The transformations below are pure functions of the raw
result and of the (immutable) codec registry: they can run on behalf of any
number of concurrent operations.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Iterable, Mapping, Optional, Set, TypeVar

import bson
from bson.raw_bson import RawBSONDocument

from asyncdoc.codecs import CodecRegistry
from asyncdoc.commands import WriteConcernResult
from asyncdoc.exceptions import AsyncDocException, DecodeException
from asyncdoc.results import (
    DeleteResult,
    InsertManyResult,
    InsertOneResult,
    UpdateResult,
)
from asyncdoc.settings.defaults import DISTINCT_VALUE_KEY

logger = logging.getLogger(__name__)

R = TypeVar("R")
S = TypeVar("S")
T = TypeVar("T")

# Strong references to fire-and-forget tasks, dropped upon completion
_BACKGROUND_TASKS: Set[asyncio.Task[Any]] = set()


def compose(
    awaitable: Awaitable[R],
    transform: Callable[[R], S],
) -> asyncio.Future[S]:
    """
    Return a future resolving to `transform(result)` once `awaitable`
    completes. Failures of the awaitable propagate as they are; failures of
    the transformation propagate as raised by it.

    Must be called with a running event loop.
    """

    async def _composed() -> S:
        return transform(await awaitable)

    return asyncio.ensure_future(_composed())


def start_operation(start: Callable[[], Awaitable[R]]) -> Awaitable[R]:
    """
    Invoke `start` at once and return the awaitable it produces. If the
    invocation itself raises, the returned awaitable raises the same error
    when awaited, so that it reaches the caller through the future like any
    other backend failure.
    """

    try:
        return start()
    except Exception as exc:
        return _raise_when_awaited(exc)


async def _raise_when_awaited(exc: Exception) -> Any:
    raise exc


def passthrough(result: T) -> T:
    return result


def discard(result: Any) -> None:
    return None


def fire_and_forget(awaitable: Awaitable[Any], description: str) -> asyncio.Task[Any]:
    """
    Start running `awaitable` without waiting for it.

    The returned task can still be awaited by whoever is interested in the
    outcome; in any case a failure is logged, so that it is never lost.
    """

    async def _wrapped() -> Any:
        return await awaitable

    task = asyncio.ensure_future(_wrapped())
    _BACKGROUND_TASKS.add(task)

    def _on_done(done_task: asyncio.Task[Any]) -> None:
        _BACKGROUND_TASKS.discard(done_task)
        if done_task.cancelled():
            logger.warning(f"background {description} was cancelled")
            return
        exc = done_task.exception()
        if exc is not None:
            logger.warning(f"background {description} failed: {exc!r}")
        else:
            logger.info(f"finished background {description}")

    task.add_done_callback(_on_done)
    return task


def to_delete_result(write_concern_result: WriteConcernResult) -> DeleteResult:
    if not write_concern_result.acknowledged:
        return DeleteResult.unacknowledged()
    return DeleteResult.from_count(write_concern_result.count)


def to_update_result(write_concern_result: WriteConcernResult) -> UpdateResult:
    if not write_concern_result.acknowledged:
        return UpdateResult.unacknowledged()
    upserted_id = write_concern_result.upserted_id
    # the upserted document is included in the count
    matched_count = max(
        write_concern_result.count - (1 if upserted_id is not None else 0), 0
    )
    # the acknowledgement does not report how many documents were modified
    return UpdateResult(
        acknowledged=True,
        matched_count=matched_count,
        modified_count=None,
        upserted_id=upserted_id,
    )


def to_insert_one_result(
    inserted_id: Any,
) -> Callable[[WriteConcernResult], InsertOneResult]:
    def _transform(write_concern_result: WriteConcernResult) -> InsertOneResult:
        return InsertOneResult(
            acknowledged=write_concern_result.acknowledged,
            inserted_id=inserted_id,
        )

    return _transform


def to_insert_many_result(
    inserted_ids: list[Any],
) -> Callable[[WriteConcernResult], InsertManyResult]:
    def _transform(write_concern_result: WriteConcernResult) -> InsertManyResult:
        return InsertManyResult(
            acknowledged=write_concern_result.acknowledged,
            inserted_ids=list(inserted_ids),
        )

    return _transform


def _document_bytes(document: Any, registry: CodecRegistry) -> bytes:
    if isinstance(document, RawBSONDocument):
        return document.raw
    if isinstance(document, (bytes, bytearray, memoryview)):
        return bytes(document)
    if isinstance(document, Mapping):
        return bson.encode(document, codec_options=registry.codec_options)
    raise TypeError(f"Unexpected raw document of type {type(document).__name__}.")


def _decoding(what: str, function: Callable[[], T]) -> T:
    # domain errors pass through, anything else is a decoding failure
    try:
        return function()
    except AsyncDocException:
        raise
    except Exception as exc:
        logger.debug(f"error decoding {what}: {exc!r}")
        raise DecodeException(f"Error when decoding {what}", cause=exc) from exc


def decode_values(registry: CodecRegistry) -> Callable[[Iterable[Any]], list[Any]]:
    """
    Decode raw values one by one: each is wrapped into a single-field
    document, decoded with the registry's dictionary codec, and unwrapped.
    Either all values are decoded, in order, or DecodeException is raised.
    """

    codec = registry.decoder_for(dict)

    def _decode_one(value: Any) -> Any:
        data = bson.encode(
            {DISTINCT_VALUE_KEY: value}, codec_options=registry.codec_options
        )
        return codec.decode(data, registry.codec_options)[DISTINCT_VALUE_KEY]

    def _transform(values: Iterable[Any]) -> list[Any]:
        return _decoding(
            "distinct results",
            lambda: [_decode_one(value) for value in values],
        )

    return _transform


def decode_documents(
    document_class: type[T],
    registry: CodecRegistry,
) -> Callable[[Iterable[Any]], list[T]]:
    """
    Decode raw documents into instances of `document_class`, all or nothing.

    The codec is looked up at once: CodecConfigurationException is raised
    by this call if the registry has none for `document_class`.
    """

    codec = registry.decoder_for(document_class)

    def _transform(documents: Iterable[Any]) -> list[T]:
        return _decoding(
            f"{document_class.__name__} documents",
            lambda: [
                codec.decode(
                    _document_bytes(document, registry), registry.codec_options
                )
                for document in documents
            ],
        )

    return _transform


def decode_optional_document(
    document_class: type[T],
    registry: CodecRegistry,
) -> Callable[[Optional[Any]], Optional[T]]:
    codec = registry.decoder_for(document_class)

    def _transform(document: Optional[Any]) -> Optional[T]:
        if document is None:
            return None
        return _decoding(
            f"{document_class.__name__} document",
            lambda: codec.decode(
                _document_bytes(document, registry), registry.codec_options
            ),
        )

    return _transform
