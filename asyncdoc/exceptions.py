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
from typing import Any


class AsyncDocException(Exception):
    """
    Any exception specific to asyncdoc and to the document database it
    talks to, such as:
      - a write model of an unsupported kind is passed to a bulk write,
      - a document cannot be encoded or decoded,
      - the execution backend reports a failed operation,
    but not, for instance,
      - a programming error in a user-provided callback.

    Execution backends are expected to raise subclasses of this class
    (see `BackendException`) for failures of the operations they run:
    such errors travel to the caller unchanged.
    """

    pass


@dataclass
class BackendException(AsyncDocException):
    """
    An operation dispatched to the execution backend failed.

    Attributes:
        text: a text message about the exception.
        operation_name: the name of the failed operation, if known.
    """

    text: str
    operation_name: str | None

    def __init__(self, text: str, *, operation_name: str | None = None) -> None:
        super().__init__(text)
        self.text = text
        self.operation_name = operation_name


class UnsupportedWriteModelException(AsyncDocException, TypeError):
    """
    An object that is not one of the supported write models (InsertOne,
    InsertMany, ReplaceOne, UpdateOne, UpdateMany, DeleteOne, DeleteMany)
    was passed to a bulk write. Nothing is sent to the backend in this case.
    """

    def __init__(self, write_model: Any) -> None:
        self.write_model_type = type(write_model)
        super().__init__(
            f"Write model of type {self.write_model_type.__name__} is not supported."
        )


@dataclass
class EncodingException(AsyncDocException, ValueError):
    """
    A value supplied to an operation (filter, document, update, ...)
    could not be converted into a canonical BSON document.
    This is raised before any request reaches the backend.

    Attributes:
        text: a text message about the exception.
        value_type: the runtime type of the value that failed to encode.
    """

    text: str
    value_type: type | None

    def __init__(self, text: str, *, value_type: type | None = None) -> None:
        super().__init__(text)
        self.text = text
        self.value_type = value_type


class CodecConfigurationException(EncodingException):
    """
    No codec is registered for the type of a value to encode, or for the
    type results are to be decoded into. In both cases this is raised when
    the operation is requested, before anything reaches the backend.
    """

    pass


@dataclass
class DecodeException(AsyncDocException):
    """
    A value returned by the backend could not be decoded into the
    requested type. The underlying error is available both as `cause`
    and as the exception's `__cause__`.

    Attributes:
        text: a text message about the exception.
        cause: the error raised by the decoding machinery.
    """

    text: str
    cause: BaseException | None

    def __init__(self, text: str, *, cause: BaseException | None = None) -> None:
        super().__init__(text)
        self.text = text
        self.cause = cause


class InvalidNamespaceException(AsyncDocException, ValueError):
    """
    A database or collection name is not acceptable as part of a namespace.
    """

    pass


__all__ = [
    "AsyncDocException",
    "BackendException",
    "CodecConfigurationException",
    "DecodeException",
    "EncodingException",
    "InvalidNamespaceException",
    "UnsupportedWriteModelException",
]
