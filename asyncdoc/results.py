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

from dataclasses import dataclass, field
from typing import Any


@dataclass
class OperationResult:
    """
    Class that represents the generic result of a write operation.

    Attributes:
        acknowledged: whether the backend acknowledged the write. When this is
            False, the counts and identifiers of the result are None: an
            unacknowledged write carries no reliable information about
            its effects.
    """

    acknowledged: bool

    def _piecewise_repr(self, pieces: list[str | None]) -> str:
        return f"{self.__class__.__name__}({', '.join(pc for pc in pieces if pc)})"


@dataclass
class DeleteResult(OperationResult):
    """
    Class that represents the result of delete operations.

    Attributes:
        deleted_count: number of deleted documents, None if unacknowledged.
        acknowledged: whether the write was acknowledged.
    """

    deleted_count: int | None = None

    def __repr__(self) -> str:
        if not self.acknowledged:
            return self._piecewise_repr(["acknowledged=False"])
        return self._piecewise_repr([f"deleted_count={self.deleted_count}"])

    @staticmethod
    def from_count(deleted_count: int) -> DeleteResult:
        return DeleteResult(acknowledged=True, deleted_count=deleted_count)

    @staticmethod
    def unacknowledged() -> DeleteResult:
        return DeleteResult(acknowledged=False)


@dataclass
class UpdateResult(OperationResult):
    """
    Class that represents the result of update and replace operations.

    Attributes:
        matched_count: number of documents matched by the filter, None if
            unacknowledged. An upserted document is not counted as matched.
        modified_count: number of documents actually modified. None whenever
            it is unknown, which is the case unless the backend reports it
            explicitly, and always when unacknowledged.
        upserted_id: the identifier of the upserted document, if any.
        acknowledged: whether the write was acknowledged.
    """

    matched_count: int | None = None
    modified_count: int | None = None
    upserted_id: Any = None

    def __repr__(self) -> str:
        if not self.acknowledged:
            return self._piecewise_repr(["acknowledged=False"])
        return self._piecewise_repr(
            [
                f"matched_count={self.matched_count}",
                (
                    f"modified_count={self.modified_count}"
                    if self.modified_count is not None
                    else None
                ),
                (
                    f"upserted_id={self.upserted_id}"
                    if self.upserted_id is not None
                    else None
                ),
            ]
        )

    @staticmethod
    def unacknowledged() -> UpdateResult:
        return UpdateResult(acknowledged=False)


@dataclass
class InsertOneResult(OperationResult):
    """
    Class that represents the result of insert_one operations.

    Attributes:
        inserted_id: the ID of the inserted document (None if the document
            had no identifier and none could be generated).
        acknowledged: whether the write was acknowledged.
    """

    inserted_id: Any = None

    def __repr__(self) -> str:
        return self._piecewise_repr(
            [
                f"inserted_id={self.inserted_id}",
                "acknowledged=False" if not self.acknowledged else None,
            ]
        )


@dataclass
class InsertManyResult(OperationResult):
    """
    Class that represents the result of insert_many operations.

    Attributes:
        inserted_ids: list of the IDs of the documents sent for insertion,
            in order.
        acknowledged: whether the write was acknowledged.
    """

    inserted_ids: list[Any] = field(default_factory=list)

    def __repr__(self) -> str:
        _ins_ids_str: str
        if len(self.inserted_ids) > 5:
            _ins_ids_str = (
                f"[{', '.join(str(_iid) for _iid in self.inserted_ids[:5])} "
                f"... ({len(self.inserted_ids)} total)]"
            )
        else:
            _ins_ids_str = str(self.inserted_ids)
        return self._piecewise_repr(
            [
                f"inserted_ids={_ins_ids_str}",
                "acknowledged=False" if not self.acknowledged else None,
            ]
        )


@dataclass
class BulkWriteUpsert:
    """
    An upsert performed as part of a bulk write.

    Attributes:
        index: the position, in the bulk write, of the request that upserted.
        id: the identifier of the upserted document.
    """

    index: int
    id: Any


@dataclass
class BulkWriteResult(OperationResult):
    """
    Class that represents the result of a bulk write. It is produced by the
    execution backend and handed to the caller unchanged.

    Attributes:
        inserted_count: number of inserted documents.
        matched_count: number of documents matched by updates and replacements.
        modified_count: number of documents modified, None if unknown.
        deleted_count: number of deleted documents.
        upserts: the upserts performed, ordered by index.
        acknowledged: whether the write was acknowledged. If False, all
            counts are None and `upserts` is empty.
    """

    inserted_count: int | None = None
    matched_count: int | None = None
    modified_count: int | None = None
    deleted_count: int | None = None
    upserts: list[BulkWriteUpsert] = field(default_factory=list)

    def __repr__(self) -> str:
        if not self.acknowledged:
            return self._piecewise_repr(["acknowledged=False"])
        return self._piecewise_repr(
            [
                f"inserted_count={self.inserted_count}",
                f"matched_count={self.matched_count}",
                (
                    f"modified_count={self.modified_count}"
                    if self.modified_count is not None
                    else None
                ),
                f"deleted_count={self.deleted_count}",
                f"upserts={self.upserts}" if self.upserts else None,
            ]
        )

    @property
    def upserted_count(self) -> int | None:
        if not self.acknowledged:
            return None
        return len(self.upserts)

    @property
    def upserted_ids(self) -> dict[int, Any]:
        return {upsert.index: upsert.id for upsert in self.upserts}

    @staticmethod
    def unacknowledged() -> BulkWriteResult:
        return BulkWriteResult(acknowledged=False)
