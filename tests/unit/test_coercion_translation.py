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
Unit tests for the coercion of user values and the translation of write
models into canonical write requests.
"""

from __future__ import annotations

from typing import Any

import bson
import pytest
from bson.raw_bson import RawBSONDocument

from asyncdoc.codecs import default_codec_registry
from asyncdoc.coercion import (
    as_document,
    as_document_list,
    as_hint,
    as_index_keys,
    as_optional_document,
    as_projection,
)
from asyncdoc.exceptions import (
    CodecConfigurationException,
    EncodingException,
    UnsupportedWriteModelException,
)
from asyncdoc.ids import ObjectId
from asyncdoc.operations import (
    DeleteMany,
    DeleteOne,
    InsertMany,
    InsertOne,
    ReplaceOne,
    UpdateMany,
    UpdateOne,
)
from asyncdoc.translation import (
    SUPPORTED_WRITE_MODELS,
    check_write_models,
    translate_write_models,
)
from asyncdoc.write_requests import (
    DeleteRequest,
    InsertRequest,
    UpdateRequest,
    WriteRequestType,
)

from ..conftest import Person, PersonCodec, Point, PointCodec

REGISTRY = default_codec_registry().with_codecs(PersonCodec(), PointCodec())


def _raw(document: dict[str, Any]) -> RawBSONDocument:
    return RawBSONDocument(bson.encode(document))


class InsertOneSubclass(InsertOne[Any]):
    pass


class TestCoercion:
    @pytest.mark.describe("test of coercion of missing values")
    def test_missing_values(self) -> None:
        empty = as_document(None, REGISTRY)
        assert isinstance(empty, RawBSONDocument)
        assert empty.raw == b"\x05\x00\x00\x00\x00"
        assert empty == as_document({}, REGISTRY)
        assert as_optional_document(None, REGISTRY) is None
        assert as_projection(None, REGISTRY) is None
        assert as_hint(None, REGISTRY) is None

    @pytest.mark.describe("test of coercion of documents")
    def test_documents(self) -> None:
        assert as_document({"a": 1}, REGISTRY) == _raw({"a": 1})
        raw = _raw({"b": 2})
        assert as_document(raw, REGISTRY) is raw
        assert as_document(Point(x=1, y=2), REGISTRY) == _raw({"x": 1, "y": 2})
        assert as_document_list([{"$match": {}}, {"$limit": 3}], REGISTRY) == [
            _raw({"$match": {}}),
            _raw({"$limit": 3}),
        ]

    @pytest.mark.describe("test of coercion failures")
    def test_coercion_failures(self) -> None:
        with pytest.raises(EncodingException) as exc:
            as_document({"a": {1, 2}}, REGISTRY)
        assert exc.value.value_type is dict
        assert exc.value.__cause__ is not None

        with pytest.raises(CodecConfigurationException):
            as_document(3.14, REGISTRY)

        with pytest.raises(CodecConfigurationException):
            as_document(Point(x=0, y=0), default_codec_registry())

    @pytest.mark.describe("test of coercion of projections and hints")
    def test_projections_and_hints(self) -> None:
        assert as_projection({"a": 1}, REGISTRY) == _raw({"a": 1})
        assert as_projection(["a", "b"], REGISTRY) == _raw({"a": True, "b": True})
        assert as_projection("a", REGISTRY) == _raw({"a": True})
        assert as_hint("a_1", REGISTRY) == "a_1"
        assert as_hint({"a": 1}, REGISTRY) == _raw({"a": 1})

    @pytest.mark.describe("test of coercion of index keys")
    def test_index_keys(self) -> None:
        assert as_index_keys("name", REGISTRY) == _raw({"name": 1})
        assert as_index_keys([("a", 1), ("b", -1)], REGISTRY) == _raw(
            {"a": 1, "b": -1}
        )
        assert list(as_index_keys([("b", 1), ("a", -1)], REGISTRY).keys()) == [
            "b",
            "a",
        ]
        assert as_index_keys({"loc": "2dsphere"}, REGISTRY) == _raw(
            {"loc": "2dsphere"}
        )
        with pytest.raises(EncodingException):
            as_index_keys({}, REGISTRY)
        with pytest.raises(EncodingException):
            as_index_keys([], REGISTRY)


class TestTranslation:
    @pytest.mark.describe("test of translation of all write model kinds, in order")
    def test_translate_all_kinds(self) -> None:
        doc1 = {"_id": 1, "a": 1}
        doc2 = {"_id": 2}
        doc3 = {"_id": 3}
        requests = translate_write_models(
            [
                InsertOne(doc1),
                InsertMany([doc2, doc3]),
                ReplaceOne({"_id": 1}, {"a": 10}, upsert=True),
                UpdateOne({"a": 1}, {"$set": {"b": 1}}),
                UpdateMany({"a": 1}, {"$set": {"c": 1}}, upsert=True),
                DeleteOne({"a": 1}),
                DeleteMany({"a": 2}),
            ],
            codec=REGISTRY.get(dict),
            registry=REGISTRY,
        )
        assert [request.type for request in requests] == [
            WriteRequestType.INSERT,
            WriteRequestType.INSERT,
            WriteRequestType.REPLACE,
            WriteRequestType.UPDATE,
            WriteRequestType.UPDATE,
            WriteRequestType.DELETE,
            WriteRequestType.DELETE,
        ]
        assert requests[0] == InsertRequest(documents=[_raw(doc1)])
        assert requests[1] == InsertRequest(documents=[_raw(doc2), _raw(doc3)])
        assert requests[2] == UpdateRequest(
            filter=_raw({"_id": 1}),
            update=_raw({"a": 10}),
            update_type=WriteRequestType.REPLACE,
            multi=False,
            upsert=True,
        )
        assert requests[3] == UpdateRequest(
            filter=_raw({"a": 1}),
            update=_raw({"$set": {"b": 1}}),
            update_type=WriteRequestType.UPDATE,
            multi=False,
            upsert=False,
        )
        assert requests[4] == UpdateRequest(
            filter=_raw({"a": 1}),
            update=_raw({"$set": {"c": 1}}),
            update_type=WriteRequestType.UPDATE,
            multi=True,
            upsert=True,
        )
        assert requests[5] == DeleteRequest(filter=_raw({"a": 1}), multi=False)
        assert requests[6] == DeleteRequest(filter=_raw({"a": 2}), multi=True)

    @pytest.mark.describe("test of translation of an empty list of write models")
    def test_translate_empty(self) -> None:
        assert translate_write_models([], codec=REGISTRY.get(dict), registry=REGISTRY) == []

    @pytest.mark.describe("test of id generation upon translation")
    def test_translate_id_generation(self) -> None:
        doc: dict[str, Any] = {"a": 1}
        (request,) = translate_write_models(
            [InsertOne(doc)], codec=REGISTRY.get(dict), registry=REGISTRY
        )
        assert isinstance(doc["_id"], ObjectId)
        assert isinstance(request, InsertRequest)
        assert request.documents[0]["_id"] == doc["_id"]

        # translating again does not replace the identifier
        generated_id = doc["_id"]
        (request2,) = translate_write_models(
            [InsertOne(doc)], codec=REGISTRY.get(dict), registry=REGISTRY
        )
        assert doc["_id"] == generated_id
        assert request2 == request

        # replacements never receive an identifier
        replacement = {"a": 2}
        translate_write_models(
            [ReplaceOne({}, replacement)], codec=REGISTRY.get(dict), registry=REGISTRY
        )
        assert "_id" not in replacement

    @pytest.mark.describe("test of id generation with custom collectible codecs")
    def test_translate_custom_codec(self) -> None:
        person = Person(name="Ada", age=36)
        (request,) = translate_write_models(
            [InsertOne(person)], codec=REGISTRY.get(Person), registry=REGISTRY
        )
        assert person.id is not None
        assert isinstance(request, InsertRequest)
        assert request.documents[0]["_id"] == person.id

        point = Point(x=1, y=1)
        (point_request,) = translate_write_models(
            [InsertOne(point)], codec=REGISTRY.get(Point), registry=REGISTRY
        )
        assert isinstance(point_request, InsertRequest)
        assert "_id" not in point_request.documents[0]

    @pytest.mark.describe("test of translation of raw documents to insert")
    def test_translate_raw_documents(self) -> None:
        raw = _raw({"a": 1})
        (request,) = translate_write_models(
            [InsertOne(raw)], codec=REGISTRY.get(dict), registry=REGISTRY
        )
        assert isinstance(request, InsertRequest)
        assert request.documents[0] is raw

    @pytest.mark.describe("test of rejection of unsupported write models")
    def test_unsupported_write_models(self) -> None:
        doc: dict[str, Any] = {"a": 1}
        for bad_model in [{"insertOne": {}}, "deleteMany", None, InsertOneSubclass({})]:
            with pytest.raises(UnsupportedWriteModelException) as exc:
                translate_write_models(
                    [InsertOne(doc), bad_model],
                    codec=REGISTRY.get(dict),
                    registry=REGISTRY,
                )
            assert exc.value.write_model_type is type(bad_model)
        # nothing was translated, hence no identifier was generated
        assert "_id" not in doc

        with pytest.raises(TypeError):
            check_write_models([DeleteOne({}), 42])
        assert len(SUPPORTED_WRITE_MODELS) == 7

    @pytest.mark.describe("test of translation with unencodable values")
    def test_translate_encoding_failure(self) -> None:
        with pytest.raises(EncodingException):
            translate_write_models(
                [DeleteOne({"a": 1}), UpdateOne({"a": {1, 2}}, {"$set": {"b": 1}})],
                codec=REGISTRY.get(dict),
                registry=REGISTRY,
            )

    @pytest.mark.describe("test of validation of canonical write requests")
    def test_write_request_validation(self) -> None:
        with pytest.raises(ValueError):
            UpdateRequest(
                filter=_raw({}),
                update=_raw({"a": 1}),
                update_type=WriteRequestType.REPLACE,
                multi=True,
            )
        with pytest.raises(ValueError):
            UpdateRequest(
                filter=_raw({}),
                update=_raw({"a": 1}),
                update_type=WriteRequestType.DELETE,
            )
