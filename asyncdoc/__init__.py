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

__version__: str = "1.2.0"


import asyncdoc.constants  # noqa: E402
import asyncdoc.cursors  # noqa: E402
import asyncdoc.ids  # noqa: E402
import asyncdoc.operations  # noqa: F401, E402
from asyncdoc.codecs import (  # noqa: E402
    CodecRegistry,
    DictCodec,
    DocumentCodec,
    default_codec_registry,
)
from asyncdoc.executor import AsyncOperationExecutor  # noqa: E402
from asyncdoc.namespace import Namespace  # noqa: E402
from asyncdoc.options import (  # noqa: E402
    FullOperationOptions,
    OperationOptions,
    defaultOperationOptions,
)

# The collection module needs __version__, hence it comes last:
from asyncdoc.collection import AsyncCollection  # noqa: E402

__all__ = [
    "AsyncCollection",
    "AsyncOperationExecutor",
    "CodecRegistry",
    "DictCodec",
    "DocumentCodec",
    "FullOperationOptions",
    "Namespace",
    "OperationOptions",
    "__version__",
    "default_codec_registry",
    "defaultOperationOptions",
]
