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

from typing import Any, Dict, Iterable, List, Mapping, Tuple, TypeVar, Union

from asyncdoc.utils.str_enum import StrEnum

DefaultDocumentType = Dict[str, Any]
FilterType = Union[Mapping[str, Any], Any]
SortType = Mapping[str, Any]
ProjectionType = Union[Iterable[str], Mapping[str, Any]]
IndexKeysType = Union[Mapping[str, Any], List[Tuple[str, Any]]]
PipelineType = List[Any]

DOC = TypeVar("DOC")
DOC2 = TypeVar("DOC2")


def normalize_optional_projection(
    projection: ProjectionType | None,
) -> Mapping[str, Any] | None:
    if projection is None:
        return None
    if isinstance(projection, Mapping):
        # already a dictionary
        return projection
    if isinstance(projection, str):
        return {projection: True}
    # an iterable over strings: coerce to allow-list projection
    return {field: True for field in projection}


class ReturnDocument(StrEnum):
    """
    Admitted values for the `return_document` option of the
    `find_one_and_replace` and `find_one_and_update` collection methods.
    """

    BEFORE = "before"
    AFTER = "after"


class SortMode:
    """
    Admitted values in the `sort` specification of queries,
    e.g. `sort={"field": SortMode.ASCENDING}`.
    """

    def __init__(self) -> None:
        raise NotImplementedError

    ASCENDING = 1
    DESCENDING = -1


class MapReduceAction(StrEnum):
    """
    What a map-reduce writing to a collection does with pre-existing
    documents in the output collection.
    """

    REPLACE = "replace"
    MERGE = "merge"
    REDUCE = "reduce"


class DefaultIdType(StrEnum):
    """
    Kinds of identifiers generated for inserted documents lacking one.
    """

    OBJECTID = "objectId"
    UUID = "uuid"
    UUIDV6 = "uuidv6"
    UUIDV7 = "uuidv7"
    DEFAULT = "objectId"
