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

from enum import Enum
from typing import TypeVar

T = TypeVar("T", bound="StrEnum")


class StrEnum(str, Enum):
    """
    A string-valued enum whose members compare equal to their plain values
    and which can be built leniently from user input.
    """

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def coerce(cls: type[T], value: str | T) -> T:
        """
        Accept either a member of the enum or a string matching one of the
        member names or values (case-insensitively).

        Raises:
            ValueError: if the string does not match any member.
        """

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            u_value = value.upper()
            for name, member in cls.__members__.items():
                if u_value in {name.upper(), str(member.value).upper()}:
                    return member
        raise ValueError(
            f"Invalid value '{value}' for {cls.__name__}. "
            f"Allowed values are: {[e.value for e in cls]}"
        )
