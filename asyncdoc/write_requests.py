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
Canonical write requests: the uniform, already-encoded representation of
single writes consumed by the execution backend.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Union

from bson.raw_bson import RawBSONDocument


class WriteRequestType(Enum):
    INSERT = "insert"
    UPDATE = "update"
    REPLACE = "replace"
    DELETE = "delete"


@dataclass(frozen=True)
class InsertRequest:
    """
    Insertion of one or more documents, in the given order.

    Attributes:
        documents: the encoded documents.
    """

    documents: List[RawBSONDocument]

    @property
    def type(self) -> WriteRequestType:
        return WriteRequestType.INSERT


@dataclass(frozen=True)
class UpdateRequest:
    """
    An update (with operators) or a whole-document replacement.

    Attributes:
        filter: the encoded filter selecting the target document(s).
        update: the encoded update prescription or replacement document.
        update_type: WriteRequestType.UPDATE or WriteRequestType.REPLACE.
        multi: whether all matching documents are affected, or just one.
            Always False for replacements.
        upsert: whether to insert a document when nothing matches.
    """

    filter: RawBSONDocument
    update: RawBSONDocument
    update_type: WriteRequestType
    multi: bool = False
    upsert: bool = False

    def __post_init__(self) -> None:
        if self.update_type not in {WriteRequestType.UPDATE, WriteRequestType.REPLACE}:
            raise ValueError(f"Invalid update type {self.update_type}.")
        if self.update_type == WriteRequestType.REPLACE and self.multi:
            raise ValueError("A replacement cannot affect multiple documents.")

    @property
    def type(self) -> WriteRequestType:
        return self.update_type


@dataclass(frozen=True)
class DeleteRequest:
    """
    Attributes:
        filter: the encoded filter selecting the document(s) to delete.
        multi: whether all matching documents are deleted, or just one.
    """

    filter: RawBSONDocument
    multi: bool = False

    @property
    def type(self) -> WriteRequestType:
        return WriteRequestType.DELETE


WriteRequest = Union[InsertRequest, UpdateRequest, DeleteRequest]
