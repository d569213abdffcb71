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

from dataclasses import dataclass

from asyncdoc.exceptions import InvalidNamespaceException

_FORBIDDEN_DATABASE_CHARACTERS = set('/\\. "$')


@dataclass(frozen=True)
class Namespace:
    """
    The (database name, collection name) pair identifying a collection.

    Attributes:
        database_name: the name of the database.
        collection_name: the name of the collection within the database.
    """

    database_name: str
    collection_name: str

    def __post_init__(self) -> None:
        if not self.database_name:
            raise InvalidNamespaceException("Database name cannot be empty.")
        if _FORBIDDEN_DATABASE_CHARACTERS & set(self.database_name):
            raise InvalidNamespaceException(
                f"Invalid database name '{self.database_name}'."
            )
        if not self.collection_name:
            raise InvalidNamespaceException("Collection name cannot be empty.")

    def __str__(self) -> str:
        return self.full_name

    @property
    def full_name(self) -> str:
        return f"{self.database_name}.{self.collection_name}"

    @staticmethod
    def from_full_name(full_name: str) -> Namespace:
        """
        Parse a "database.collection" string. The collection part may
        itself contain dots, as in "db.system.indexes".
        """

        database_name, sep, collection_name = full_name.partition(".")
        if not sep:
            raise InvalidNamespaceException(
                f"Namespace '{full_name}' lacks a collection name."
            )
        return Namespace(database_name, collection_name)

    def sibling(self, collection_name: str) -> Namespace:
        """A namespace for another collection in the same database."""
        return Namespace(self.database_name, collection_name)
