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

from typing import Callable, TypeVar

import deprecation
from typing_extensions import ParamSpec  # compatible with pre-3.10 Python

from asyncdoc.settings.defaults import (
    DEPRECATED_ALIAS_DEPRECATED_IN,
    DEPRECATED_ALIAS_REMOVED_IN,
)

P = ParamSpec("P")
R = TypeVar("R")

ALIAS_DEPRECATION_DETAILS_TEMPLATE = "Please use '{new_name}' instead."


def deprecated_alias(
    new_name: str,
    *,
    current_version: str,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Mark a method as a deprecated alias of another one.

    Invoking the decorated method issues a `deprecation.DeprecatedWarning`
    and otherwise behaves exactly as the undecorated body.

    Args:
        new_name: the name of the method to use in place of the alias.
        current_version: the version of the package, used by `deprecation`
            to decide between "deprecated" and "unsupported" warnings.
    """

    decorator: Callable[[Callable[P, R]], Callable[P, R]] = deprecation.deprecated(
        deprecated_in=DEPRECATED_ALIAS_DEPRECATED_IN,
        removed_in=DEPRECATED_ALIAS_REMOVED_IN,
        current_version=current_version,
        details=ALIAS_DEPRECATION_DETAILS_TEMPLATE.format(new_name=new_name),
    )
    return decorator
