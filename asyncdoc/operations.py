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
Write models: caller-level descriptions of single write operations, to be
passed (possibly mixed) to the `bulk_write` method of a collection.
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass
from typing import Any, Generic, List, Union

from asyncdoc.constants import DOC


class BaseOperation(ABC):
    """
    Base class for all write models amenable to be used in bulk writes.
    """

    pass


@dataclass(frozen=True)
class InsertOne(BaseOperation, Generic[DOC]):
    """
    Represents an `insert_one` operation on a collection.
    See the documentation on the collection method for more information.

    Attributes:
        document: the document to insert. If the collection codec supports
            it, an identifier is generated (in place) when missing.
    """

    document: DOC


@dataclass(frozen=True)
class InsertMany(BaseOperation, Generic[DOC]):
    """
    Represents an `insert_many` operation on a collection.
    See the documentation on the collection method for more information.

    Attributes:
        documents: the documents to insert, in order.
    """

    documents: List[DOC]


@dataclass(frozen=True)
class ReplaceOne(BaseOperation, Generic[DOC]):
    """
    Represents a `replace_one` operation on a collection.
    See the documentation on the collection method for more information.

    Attributes:
        filter: a filter condition to select a target document.
        replacement: the replacement document.
        upsert: controls what to do when no documents are found.
    """

    filter: Any
    replacement: DOC
    upsert: bool = False


@dataclass(frozen=True)
class UpdateOne(BaseOperation):
    """
    Represents an `update_one` operation on a collection.
    See the documentation on the collection method for more information.

    Attributes:
        filter: a filter condition to select a target document.
        update: an update prescription to apply to the document.
        upsert: controls what to do when no documents are found.
    """

    filter: Any
    update: Any
    upsert: bool = False


@dataclass(frozen=True)
class UpdateMany(BaseOperation):
    """
    Represents an `update_many` operation on a collection.
    See the documentation on the collection method for more information.

    Attributes:
        filter: a filter condition to select target documents.
        update: an update prescription to apply to the documents.
        upsert: controls what to do when no documents are found.
    """

    filter: Any
    update: Any
    upsert: bool = False


@dataclass(frozen=True)
class DeleteOne(BaseOperation):
    """
    Represents a `delete_one` operation on a collection.
    See the documentation on the collection method for more information.

    Attributes:
        filter: a filter condition to select a target document.
    """

    filter: Any


@dataclass(frozen=True)
class DeleteMany(BaseOperation):
    """
    Represents a `delete_many` operation on a collection.
    See the documentation on the collection method for more information.

    Attributes:
        filter: a filter condition to select target documents.
    """

    filter: Any


WriteModel = Union[
    InsertOne[Any],
    InsertMany[Any],
    ReplaceOne[Any],
    UpdateOne,
    UpdateMany,
    DeleteOne,
    DeleteMany,
]
