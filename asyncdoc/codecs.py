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
The encoding registry: per-type codecs converting between domain values and
canonical BSON documents (`bson.raw_bson.RawBSONDocument`), and the registry
resolving a codec for a runtime type.

A codec may additionally be "collectible", i.e. able to inspect and generate
the identifier of the documents it handles. Whether a codec has this
capability is asked through `DocumentCodec.as_collectible()`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Iterable, Mapping, TypeVar

import bson
from bson.binary import UuidRepresentation
from bson.codec_options import CodecOptions
from bson.raw_bson import RawBSONDocument
from typing_extensions import override

from asyncdoc.constants import DefaultIdType
from asyncdoc.exceptions import CodecConfigurationException
from asyncdoc.ids import IdFactory, id_factory_for
from asyncdoc.settings.defaults import DEFAULT_ID_FIELD

T = TypeVar("T")
C = TypeVar("C")

DEFAULT_CODEC_OPTIONS: CodecOptions[Dict[str, Any]] = CodecOptions(
    document_class=dict,
    tz_aware=False,
    uuid_representation=UuidRepresentation.STANDARD,
)


def raw_codec_options(codec_options: CodecOptions[Any]) -> CodecOptions[Any]:
    """The same options, with RawBSONDocument as the document class."""
    return codec_options.with_options(document_class=RawBSONDocument)


class DocumentCodec(ABC, Generic[T]):
    """
    Converts values of one type (`document_class`) to and from documents.

    Subclasses provide `to_document` and `from_document`; the BSON
    serialization itself is handled here according to the `CodecOptions`
    passed in by the registry.
    """

    document_class: type[T]

    @abstractmethod
    def to_document(self, value: T) -> Mapping[str, Any]: ...

    @abstractmethod
    def from_document(self, document: Dict[str, Any]) -> T: ...

    def encode(self, value: T, codec_options: CodecOptions[Any]) -> RawBSONDocument:
        data = bson.encode(self.to_document(value), codec_options=codec_options)
        return RawBSONDocument(data, codec_options=raw_codec_options(codec_options))

    def decode(self, data: bytes, codec_options: CodecOptions[Any]) -> T:
        return self.from_document(bson.decode(data, codec_options=codec_options))

    def as_collectible(self) -> CollectibleCodec[T] | None:
        """
        Return this codec as a CollectibleCodec if it supports identifier
        generation, None otherwise.
        """
        return None


class CollectibleCodec(DocumentCodec[T]):
    """
    A codec for documents that carry an identifier and for which one
    can be generated when missing.
    """

    @abstractmethod
    def document_has_id(self, document: T) -> bool: ...

    @abstractmethod
    def get_document_id(self, document: T) -> Any: ...

    @abstractmethod
    def generate_id_if_absent(self, document: T) -> T:
        """
        Set a newly-generated identifier on the document, in place, if and
        only if it has none. Return the (same) document.
        """
        ...

    @override
    def as_collectible(self) -> CollectibleCodec[T]:
        return self


class DictCodec(CollectibleCodec[Dict[str, Any]]):
    """
    The codec for plain dictionaries. Missing identifiers are generated
    with the configured `id_factory` and stored under `id_field`.

    Args:
        id_factory: a zero-argument callable returning a new identifier.
            Defaults to `bson.ObjectId`.
        id_field: the name of the identifier field.
    """

    def __init__(
        self,
        *,
        id_factory: IdFactory | None = None,
        id_field: str = DEFAULT_ID_FIELD,
    ) -> None:
        self.document_class = dict
        self.id_factory = id_factory or id_factory_for(DefaultIdType.OBJECTID)
        self.id_field = id_field

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id_field={self.id_field!r})"

    @override
    def to_document(self, value: Dict[str, Any]) -> Mapping[str, Any]:
        return value

    @override
    def from_document(self, document: Dict[str, Any]) -> Dict[str, Any]:
        return document

    @override
    def document_has_id(self, document: Dict[str, Any]) -> bool:
        return self.id_field in document

    @override
    def get_document_id(self, document: Dict[str, Any]) -> Any:
        return document.get(self.id_field)

    @override
    def generate_id_if_absent(self, document: Dict[str, Any]) -> Dict[str, Any]:
        if not self.document_has_id(document):
            document[self.id_field] = self.id_factory()
        return document


class RawBSONDocumentCodec(DocumentCodec[RawBSONDocument]):
    """
    Pass-through codec for documents that are already in canonical form.
    Being immutable, such documents cannot receive a generated identifier.
    """

    def __init__(self) -> None:
        self.document_class = RawBSONDocument

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"

    @override
    def to_document(self, value: RawBSONDocument) -> Mapping[str, Any]:
        return value

    @override
    def from_document(self, document: Dict[str, Any]) -> RawBSONDocument:
        return RawBSONDocument(bson.encode(document))

    @override
    def encode(
        self, value: RawBSONDocument, codec_options: CodecOptions[Any]
    ) -> RawBSONDocument:
        return value

    @override
    def decode(self, data: bytes, codec_options: CodecOptions[Any]) -> RawBSONDocument:
        return RawBSONDocument(data, codec_options=raw_codec_options(codec_options))


class CodecRegistry:
    """
    A collection of codecs, one per document class, together with the
    `bson.codec_options.CodecOptions` governing BSON serialization
    (custom type encoders/decoders, UUID representation, timezones).

    Codec resolution for a type walks its MRO, so that a codec registered
    for `dict` also serves subclasses of `dict`; failing that, a codec whose
    class is a (virtual) base of the type is used.

    Args:
        codecs: the codecs. For duplicated document classes, the last wins.
        codec_options: the BSON options. The document class is always
            forced to `dict`.
    """

    def __init__(
        self,
        codecs: Iterable[DocumentCodec[Any]],
        *,
        codec_options: CodecOptions[Any] | None = None,
    ) -> None:
        self._codecs: dict[type, DocumentCodec[Any]] = {
            codec.document_class: codec for codec in codecs
        }
        _codec_options = codec_options or DEFAULT_CODEC_OPTIONS
        if _codec_options.document_class is not dict:
            _codec_options = _codec_options.with_options(document_class=dict)
        self.codec_options: CodecOptions[Dict[str, Any]] = _codec_options

    def __repr__(self) -> str:
        _classes = ", ".join(cls.__name__ for cls in self._codecs)
        return f"{self.__class__.__name__}([{_classes}])"

    @property
    def codecs(self) -> list[DocumentCodec[Any]]:
        return list(self._codecs.values())

    def with_codecs(self, *codecs: DocumentCodec[Any]) -> CodecRegistry:
        """Return a new registry with additional (or overriding) codecs."""
        return CodecRegistry(
            [*self._codecs.values(), *codecs],
            codec_options=self.codec_options,
        )

    def get(self, document_class: type[C]) -> DocumentCodec[C]:
        for klass in getattr(document_class, "__mro__", (document_class,)):
            if klass in self._codecs:
                return self._codecs[klass]
        for klass, codec in self._codecs.items():
            if isinstance(document_class, type) and issubclass(document_class, klass):
                return codec
        raise CodecConfigurationException(
            f"Can't find a codec for {getattr(document_class, '__name__', document_class)}.",
            value_type=document_class,
        )

    def encoder_for(self, document_class: type[C]) -> DocumentCodec[C]:
        return self.get(document_class)

    def decoder_for(self, document_class: type[C]) -> DocumentCodec[C]:
        return self.get(document_class)

    def encode(self, value: Any) -> RawBSONDocument:
        return self.encoder_for(type(value)).encode(value, self.codec_options)

    def decode(self, data: RawBSONDocument | bytes, document_class: type[C]) -> C:
        _data = data.raw if isinstance(data, RawBSONDocument) else data
        return self.decoder_for(document_class).decode(_data, self.codec_options)


def default_codec_registry(
    *,
    default_id_type: DefaultIdType | str = DefaultIdType.DEFAULT,
    codec_options: CodecOptions[Any] | None = None,
) -> CodecRegistry:
    """
    Build the standard registry: plain dictionaries (with identifier
    generation according to `default_id_type`) and pass-through
    RawBSONDocument instances.
    """

    return CodecRegistry(
        [
            DictCodec(id_factory=id_factory_for(default_id_type)),
            RawBSONDocumentCodec(),
        ],
        codec_options=codec_options,
    )
