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

from typing import Any, Callable
from uuid import UUID, uuid1, uuid3, uuid4, uuid5

from bson.objectid import ObjectId
from uuid6 import uuid6, uuid7, uuid8

from asyncdoc.constants import DefaultIdType

IdFactory = Callable[[], Any]


def _std_uuid(factory: Callable[[], UUID]) -> IdFactory:
    # uuid6 returns its own UUID subclass: normalize to the standard type
    def _factory() -> UUID:
        return UUID(bytes=factory().bytes)

    return _factory


_ID_FACTORY_MAP: dict[DefaultIdType, IdFactory] = {
    DefaultIdType.OBJECTID: ObjectId,
    DefaultIdType.UUID: uuid4,
    DefaultIdType.UUIDV6: _std_uuid(uuid6),
    DefaultIdType.UUIDV7: _std_uuid(uuid7),
}


def id_factory_for(default_id_type: DefaultIdType | str) -> IdFactory:
    """
    Return a zero-argument callable generating identifiers of the given kind.

    Args:
        default_id_type: a DefaultIdType value, or its string equivalent
            such as "objectId" or "uuidv7".
    """

    return _ID_FACTORY_MAP[DefaultIdType.coerce(default_id_type)]


__all__ = [
    "IdFactory",
    "ObjectId",
    "UUID",
    "id_factory_for",
    "uuid1",
    "uuid3",
    "uuid4",
    "uuid5",
    "uuid6",
    "uuid7",
    "uuid8",
]
