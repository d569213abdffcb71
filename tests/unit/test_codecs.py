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
Unit tests for codecs, the codec registry and identifier factories.
"""

from __future__ import annotations

import datetime
from collections import OrderedDict
from typing import Any

import bson
import pytest
from bson.binary import UuidRepresentation
from bson.codec_options import CodecOptions
from bson.raw_bson import RawBSONDocument

from asyncdoc.codecs import (
    CodecRegistry,
    DictCodec,
    RawBSONDocumentCodec,
    default_codec_registry,
)
from asyncdoc.constants import DefaultIdType
from asyncdoc.exceptions import CodecConfigurationException
from asyncdoc.ids import UUID, ObjectId, id_factory_for

from ..conftest import Person, PersonCodec, Point, PointCodec


class TestIds:
    @pytest.mark.describe("test of id factories by id type")
    def test_id_factories(self) -> None:
        assert isinstance(id_factory_for(DefaultIdType.OBJECTID)(), ObjectId)
        assert isinstance(id_factory_for("objectId")(), ObjectId)
        assert isinstance(id_factory_for(DefaultIdType.DEFAULT)(), ObjectId)

        u4 = id_factory_for(DefaultIdType.UUID)()
        assert type(u4) is UUID
        assert u4.version == 4

        u6 = id_factory_for("uuidv6")()
        assert type(u6) is UUID
        assert u6.version == 6

        u7 = id_factory_for("UUIDV7")()
        assert type(u7) is UUID
        assert u7.version == 7

        with pytest.raises(ValueError):
            id_factory_for("autoincrement")

    @pytest.mark.describe("test of uniqueness of generated ids")
    def test_id_uniqueness(self) -> None:
        for id_type in ["objectId", "uuid", "uuidv6", "uuidv7"]:
            factory = id_factory_for(id_type)
            assert len({factory() for _ in range(50)}) == 50


class TestCodecs:
    @pytest.mark.describe("test of the dict codec and id generation")
    def test_dict_codec(self) -> None:
        codec = DictCodec()
        assert codec.as_collectible() is codec

        doc: dict[str, Any] = {"a": 1}
        assert not codec.document_has_id(doc)
        assert codec.get_document_id(doc) is None
        same_doc = codec.generate_id_if_absent(doc)
        assert same_doc is doc
        assert isinstance(doc["_id"], ObjectId)

        generated_id = doc["_id"]
        codec.generate_id_if_absent(doc)
        assert doc["_id"] == generated_id

        doc_with_id = {"_id": "custom", "a": 1}
        codec.generate_id_if_absent(doc_with_id)
        assert doc_with_id["_id"] == "custom"

        doc_with_null_id = {"_id": None}
        codec.generate_id_if_absent(doc_with_null_id)
        assert doc_with_null_id["_id"] is None

    @pytest.mark.describe("test of the dict codec with custom id factory and field")
    def test_dict_codec_custom(self) -> None:
        codec = DictCodec(id_factory=lambda: "fixed", id_field="key")
        doc: dict[str, Any] = {}
        codec.generate_id_if_absent(doc)
        assert doc == {"key": "fixed"}

    @pytest.mark.describe("test of the pass-through codec for raw documents")
    def test_raw_codec(self) -> None:
        codec = RawBSONDocumentCodec()
        assert codec.as_collectible() is None
        raw = RawBSONDocument(bson.encode({"x": 1}))
        registry = default_codec_registry()
        assert codec.encode(raw, registry.codec_options) is raw
        decoded = registry.decode(raw.raw, RawBSONDocument)
        assert isinstance(decoded, RawBSONDocument)
        assert decoded.raw == raw.raw

    @pytest.mark.describe("test of registry encoding and decoding")
    def test_registry_roundtrip(self) -> None:
        registry = default_codec_registry().with_codecs(PersonCodec())
        person = Person(name="Ada", age=36, id=ObjectId("65f9cfa0d7fabb3f255c25a1"))
        encoded = registry.encode(person)
        assert isinstance(encoded, RawBSONDocument)
        assert encoded["name"] == "Ada"
        assert encoded["_id"] == person.id
        assert registry.decode(encoded, Person) == person
        assert registry.decode(encoded.raw, dict) == {
            "_id": person.id,
            "name": "Ada",
            "age": 36,
        }

    @pytest.mark.describe("test of codec resolution along the class hierarchy")
    def test_registry_resolution(self) -> None:
        registry = default_codec_registry()
        dict_codec = registry.get(dict)
        assert isinstance(dict_codec, DictCodec)
        assert registry.get(OrderedDict) is dict_codec
        assert isinstance(registry.get(RawBSONDocument), RawBSONDocumentCodec)

        with pytest.raises(CodecConfigurationException) as exc:
            registry.get(Point)
        assert exc.value.value_type is Point

        extended = registry.with_codecs(PointCodec())
        assert isinstance(extended.get(Point), PointCodec)
        assert extended.get(Point).as_collectible() is None
        # the original registry is unchanged
        with pytest.raises(CodecConfigurationException):
            registry.get(Point)

    @pytest.mark.describe("test of codec overriding in registries")
    def test_registry_override(self) -> None:
        custom_dict_codec = DictCodec(id_field="pk")
        registry = default_codec_registry().with_codecs(custom_dict_codec)
        assert registry.get(dict) is custom_dict_codec
        assert len(registry.codecs) == 2

    @pytest.mark.describe("test of registry codec options")
    def test_registry_codec_options(self) -> None:
        registry = CodecRegistry(
            [DictCodec()],
            codec_options=CodecOptions(
                document_class=OrderedDict,
                tz_aware=True,
                uuid_representation=UuidRepresentation.STANDARD,
            ),
        )
        assert registry.codec_options.document_class is dict
        stamp = datetime.datetime(2024, 1, 2, 3, 4, 5, tzinfo=datetime.timezone.utc)
        encoded = registry.encode({"when": stamp})
        decoded = registry.decode(encoded, dict)
        assert decoded["when"] == stamp
        assert decoded["when"].tzinfo is not None

    @pytest.mark.describe("test of default id type of the default registry")
    def test_default_registry_id_type(self) -> None:
        registry = default_codec_registry(default_id_type=DefaultIdType.UUIDV7)
        codec = registry.get(dict).as_collectible()
        assert codec is not None
        doc: dict[str, Any] = {}
        codec.generate_id_if_absent(doc)
        assert isinstance(doc["_id"], UUID)
        assert doc["_id"].version == 7
        # UUIDs travel in the standard binary representation
        assert registry.decode(registry.encode(doc), dict) == doc
