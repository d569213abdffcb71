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

from typing import Any, Iterable, Mapping

from bson.raw_bson import RawBSONDocument

from asyncdoc.codecs import CodecRegistry, raw_codec_options
from asyncdoc.constants import ProjectionType, normalize_optional_projection
from asyncdoc.exceptions import AsyncDocException, EncodingException


def _empty_document(registry: CodecRegistry) -> RawBSONDocument:
    # the 5-byte encoding of {}
    return RawBSONDocument(
        b"\x05\x00\x00\x00\x00",
        codec_options=raw_codec_options(registry.codec_options),
    )


def as_document(value: Any, registry: CodecRegistry) -> RawBSONDocument:
    """
    Coerce a user-supplied filter, document, update or pipeline stage into
    its canonical form. A missing value (None) stands for the empty document,
    i.e. for "match all" when used as a filter.

    Raises:
        EncodingException: if no codec is registered for the value's type,
            or if encoding fails for any reason.
    """

    if value is None:
        return _empty_document(registry)
    if isinstance(value, RawBSONDocument):
        return value
    try:
        return registry.encode(value)
    except AsyncDocException:
        raise
    except Exception as exc:
        raise EncodingException(
            f"Cannot encode value of type {type(value).__name__}: {exc}",
            value_type=type(value),
        ) from exc


def as_optional_document(
    value: Any, registry: CodecRegistry
) -> RawBSONDocument | None:
    """Like `as_document`, but a missing value stays missing."""
    if value is None:
        return None
    return as_document(value, registry)


def as_document_list(
    values: Iterable[Any], registry: CodecRegistry
) -> list[RawBSONDocument]:
    return [as_document(value, registry) for value in values]


def as_projection(
    projection: ProjectionType | None, registry: CodecRegistry
) -> RawBSONDocument | None:
    return as_optional_document(normalize_optional_projection(projection), registry)


def as_hint(hint: str | Any | None, registry: CodecRegistry) -> str | RawBSONDocument | None:
    """An index name is kept as a string, an index specification is encoded."""
    if isinstance(hint, str):
        return hint
    return as_optional_document(hint, registry)


def as_index_keys(keys: Any, registry: CodecRegistry) -> RawBSONDocument:
    """
    Index keys can be given as a mapping, or as a list of (field, direction)
    pairs as customary with ordered specifications.
    """

    if isinstance(keys, str):
        keys = {keys: 1}
    elif isinstance(keys, list) and all(
        isinstance(item, tuple) and len(item) == 2 for item in keys
    ):
        keys = dict(keys)
    if isinstance(keys, Mapping) and not keys:
        raise EncodingException("Index keys cannot be empty.", value_type=type(keys))
    return as_document(keys, registry)
