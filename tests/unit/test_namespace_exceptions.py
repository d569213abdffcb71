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
Unit tests for namespaces and the exception hierarchy.
"""

from __future__ import annotations

import pytest

from asyncdoc.exceptions import (
    AsyncDocException,
    BackendException,
    CodecConfigurationException,
    DecodeException,
    EncodingException,
    InvalidNamespaceException,
    UnsupportedWriteModelException,
)
from asyncdoc.namespace import Namespace


class TestNamespace:
    @pytest.mark.describe("test of namespace full name and parsing")
    def test_namespace_full_name(self) -> None:
        nsp = Namespace("shop", "orders")
        assert nsp.full_name == "shop.orders"
        assert str(nsp) == "shop.orders"
        assert Namespace.from_full_name("shop.orders") == nsp

        dotted = Namespace.from_full_name("shop.system.indexes")
        assert dotted.database_name == "shop"
        assert dotted.collection_name == "system.indexes"

        assert nsp.sibling("archive") == Namespace("shop", "archive")

    @pytest.mark.describe("test of namespace validation")
    def test_namespace_validation(self) -> None:
        with pytest.raises(InvalidNamespaceException):
            Namespace("", "orders")
        with pytest.raises(InvalidNamespaceException):
            Namespace("shop", "")
        with pytest.raises(InvalidNamespaceException):
            Namespace("my shop", "orders")
        with pytest.raises(InvalidNamespaceException):
            Namespace("sh$op", "orders")
        with pytest.raises(InvalidNamespaceException):
            Namespace.from_full_name("shop")
        with pytest.raises(ValueError):
            Namespace("a.b", "orders")

    @pytest.mark.describe("test of namespace hashability")
    def test_namespace_hashable(self) -> None:
        nsps = {Namespace("a", "b"), Namespace("a", "b"), Namespace("a", "c")}
        assert len(nsps) == 2


class TestExceptions:
    @pytest.mark.describe("test of the exception hierarchy")
    def test_exception_hierarchy(self) -> None:
        assert issubclass(BackendException, AsyncDocException)
        assert issubclass(EncodingException, AsyncDocException)
        assert issubclass(EncodingException, ValueError)
        assert issubclass(CodecConfigurationException, EncodingException)
        assert issubclass(DecodeException, AsyncDocException)
        assert issubclass(UnsupportedWriteModelException, AsyncDocException)
        assert issubclass(UnsupportedWriteModelException, TypeError)
        assert issubclass(InvalidNamespaceException, ValueError)

    @pytest.mark.describe("test of exception attributes")
    def test_exception_attributes(self) -> None:
        b_exc = BackendException("boom", operation_name="count")
        assert str(b_exc) == "boom"
        assert b_exc.text == "boom"
        assert b_exc.operation_name == "count"

        e_exc = EncodingException("no way", value_type=set)
        assert e_exc.value_type is set
        assert str(e_exc) == "no way"

        cause = KeyError("name")
        d_exc = DecodeException("bad document", cause=cause)
        assert d_exc.cause is cause

        u_exc = UnsupportedWriteModelException(42)
        assert u_exc.write_model_type is int
        assert "int" in str(u_exc)
