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

import logging
from typing import Any, Callable, Dict, Iterable, List

from bson.raw_bson import RawBSONDocument

from asyncdoc.codecs import CodecRegistry, DocumentCodec
from asyncdoc.coercion import as_document
from asyncdoc.exceptions import UnsupportedWriteModelException
from asyncdoc.operations import (
    DeleteMany,
    DeleteOne,
    InsertMany,
    InsertOne,
    ReplaceOne,
    UpdateMany,
    UpdateOne,
)
from asyncdoc.write_requests import (
    DeleteRequest,
    InsertRequest,
    UpdateRequest,
    WriteRequest,
    WriteRequestType,
)

logger = logging.getLogger(__name__)


class _WriteModelTranslator:
    """
    Binds a codec (for insertable documents) and a registry (for everything
    else) to the per-kind translation rules.
    """

    def __init__(self, codec: DocumentCodec[Any], registry: CodecRegistry) -> None:
        self.codec = codec
        self.registry = registry
        self.collectible = codec.as_collectible()

    def encode_insertable(self, document: Any) -> RawBSONDocument:
        # documents of other types (e.g. raw documents) are sent as they are
        if self.collectible is not None and isinstance(
            document, self.codec.document_class
        ):
            self.collectible.generate_id_if_absent(document)
        return as_document(document, self.registry)

    def insert_one(self, model: InsertOne[Any]) -> WriteRequest:
        return InsertRequest(documents=[self.encode_insertable(model.document)])

    def insert_many(self, model: InsertMany[Any]) -> WriteRequest:
        return InsertRequest(
            documents=[self.encode_insertable(doc) for doc in model.documents]
        )

    def replace_one(self, model: ReplaceOne[Any]) -> WriteRequest:
        return UpdateRequest(
            filter=as_document(model.filter, self.registry),
            update=as_document(model.replacement, self.registry),
            update_type=WriteRequestType.REPLACE,
            multi=False,
            upsert=model.upsert,
        )

    def update_one(self, model: UpdateOne) -> WriteRequest:
        return UpdateRequest(
            filter=as_document(model.filter, self.registry),
            update=as_document(model.update, self.registry),
            update_type=WriteRequestType.UPDATE,
            multi=False,
            upsert=model.upsert,
        )

    def update_many(self, model: UpdateMany) -> WriteRequest:
        return UpdateRequest(
            filter=as_document(model.filter, self.registry),
            update=as_document(model.update, self.registry),
            update_type=WriteRequestType.UPDATE,
            multi=True,
            upsert=model.upsert,
        )

    def delete_one(self, model: DeleteOne) -> WriteRequest:
        return DeleteRequest(filter=as_document(model.filter, self.registry), multi=False)

    def delete_many(self, model: DeleteMany) -> WriteRequest:
        return DeleteRequest(filter=as_document(model.filter, self.registry), multi=True)


# Lookup is on the exact class: subclasses of the models are not supported.
_DISPATCH: Dict[type, Callable[[_WriteModelTranslator, Any], WriteRequest]] = {
    InsertOne: _WriteModelTranslator.insert_one,
    InsertMany: _WriteModelTranslator.insert_many,
    ReplaceOne: _WriteModelTranslator.replace_one,
    UpdateOne: _WriteModelTranslator.update_one,
    UpdateMany: _WriteModelTranslator.update_many,
    DeleteOne: _WriteModelTranslator.delete_one,
    DeleteMany: _WriteModelTranslator.delete_many,
}

SUPPORTED_WRITE_MODELS = tuple(_DISPATCH.keys())


def check_write_models(models: Iterable[Any]) -> None:
    """
    Raise UnsupportedWriteModelException for the first object that is not
    one of the supported write models.
    """

    for model in models:
        if type(model) not in _DISPATCH:
            raise UnsupportedWriteModelException(model)


def translate_write_models(
    models: Iterable[Any],
    *,
    codec: DocumentCodec[Any],
    registry: CodecRegistry,
) -> List[WriteRequest]:
    """
    Translate write models into canonical write requests, one per model
    and in the same order.

    Documents to insert receive a generated identifier (in place) when
    lacking one, provided the codec is collectible. The translation is
    all-or-nothing: the kinds of all models are checked before anything is
    encoded, and any error aborts the whole translation.

    Args:
        models: the write models (InsertOne, InsertMany, ReplaceOne,
            UpdateOne, UpdateMany, DeleteOne, DeleteMany).
        codec: the codec of the collection's document class, used for
            identifier generation.
        registry: the registry used for encoding.

    Returns:
        the list of write requests.

    Raises:
        UnsupportedWriteModelException: for models of any other type.
        EncodingException: if some filter, document or update cannot be encoded.
    """

    _models = list(models)
    check_write_models(_models)
    translator = _WriteModelTranslator(codec, registry)
    requests = [_DISPATCH[type(model)](translator, model) for model in _models]
    logger.debug(f"translated {len(requests)} write models")
    return requests
