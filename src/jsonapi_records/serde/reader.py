"""
:py:mod:`jsonapi_records.serde.reader` turns a JSON:API document that has been
decoded from JSON into the internal representation defined in
:py:mod:`jsonapi_records.serde.models`.

Only the structure needed to rebuild records is checked; anything else in the
document is carried over without validation.
"""

import collections.abc
import typing

from ..exceptions import DeserializationError, DeserializationErrorItem
from ..types import JSONValue
from ..utils import UNDEFINED, JSONPointer
from .models import (
    CollectionDocumentRepr,
    DocumentReprBase,
    LinkageData,
    LinkageRepr,
    ResourceIdRepr,
    ResourceRepr,
    SingletonDocumentRepr,
)


class ReaderContext:
    errors: typing.List[DeserializationErrorItem]

    def error(self, pointer: JSONPointer, message: str) -> None:
        self.errors.append(DeserializationErrorItem(pointer, message))

    def __init__(self):
        self.errors = []


def _type_name(value: JSONValue) -> str:
    if value is None:
        return "null"
    elif isinstance(value, collections.abc.Mapping):
        return "object"
    elif isinstance(value, (list, tuple)):
        return "array"
    elif isinstance(value, str):
        return "string"
    elif isinstance(value, bool):
        return "boolean"
    else:
        return "number"


class DocumentReader:
    def _read_mapping(
        self, ctx: ReaderContext, pointer: JSONPointer, value: JSONValue
    ) -> typing.Optional[typing.Mapping[str, typing.Any]]:
        if not isinstance(value, collections.abc.Mapping):
            ctx.error(pointer, f"value must be an object, got {_type_name(value)}")
            return None
        return value

    def _read_optional_mapping(
        self, ctx: ReaderContext, pointer: JSONPointer, node: typing.Mapping[str, typing.Any], key: str
    ) -> typing.Optional[typing.Dict[str, typing.Any]]:
        value = node.get(key)
        if value is None:
            return None
        _value = self._read_mapping(ctx, pointer / key, value)
        return dict(_value) if _value is not None else None

    def _read_type(
        self, ctx: ReaderContext, pointer: JSONPointer, node: typing.Mapping[str, typing.Any]
    ) -> typing.Optional[str]:
        if "type" not in node:
            ctx.error(pointer, 'value must have a property "type"')
            return None
        type_ = node["type"]
        if not isinstance(type_, str):
            ctx.error(pointer / "type", f"value must be a string, got {_type_name(type_)}")
            return None
        return type_

    def _read_resource_id(
        self, ctx: ReaderContext, pointer: JSONPointer, value: JSONValue
    ) -> typing.Optional[ResourceIdRepr]:
        node = self._read_mapping(ctx, pointer, value)
        if node is None:
            return None
        type_ = self._read_type(ctx, pointer, node)
        if type_ is None:
            return None
        return ResourceIdRepr(
            type=type_,
            id=node.get("id"),
            meta=self._read_optional_mapping(ctx, pointer, node, "meta"),
            _source_=pointer,
        )

    def _read_linkage(
        self, ctx: ReaderContext, pointer: JSONPointer, value: JSONValue
    ) -> typing.Optional[LinkageRepr]:
        node = self._read_mapping(ctx, pointer, value)
        if node is None:
            return None
        data: typing.Any = UNDEFINED
        if "data" in node:
            _data = node["data"]
            if _data is None:
                data = None
            elif isinstance(_data, (list, tuple)):
                data = tuple(
                    r
                    for r in (
                        self._read_resource_id(ctx, (pointer / "data")[i], item)
                        for i, item in enumerate(_data)
                    )
                    if r is not None
                )
            else:
                data = self._read_resource_id(ctx, pointer / "data", _data)
        return LinkageRepr(
            data=typing.cast(LinkageData, data),
            links=self._read_optional_mapping(ctx, pointer, node, "links"),
            meta=self._read_optional_mapping(ctx, pointer, node, "meta"),
            _source_=pointer,
        )

    def _read_resource(
        self, ctx: ReaderContext, pointer: JSONPointer, value: JSONValue
    ) -> typing.Optional[ResourceRepr]:
        node = self._read_mapping(ctx, pointer, value)
        if node is None:
            return None
        type_ = self._read_type(ctx, pointer, node)

        attributes = self._read_optional_mapping(ctx, pointer, node, "attributes") or {}

        relationships: typing.List[typing.Tuple[str, LinkageRepr]] = []
        _relationships = self._read_optional_mapping(ctx, pointer, node, "relationships")
        if _relationships is not None:
            for k, v in _relationships.items():
                linkage = self._read_linkage(ctx, pointer / "relationships" / k, v)
                if linkage is not None:
                    relationships.append((k, linkage))

        if type_ is None:
            return None
        return ResourceRepr(
            type=type_,
            id=node.get("id"),
            attributes=attributes.items(),
            relationships=relationships,
            links=self._read_optional_mapping(ctx, pointer, node, "links"),
            meta=self._read_optional_mapping(ctx, pointer, node, "meta"),
            _source_=pointer,
        )

    def _read_included(
        self, ctx: ReaderContext, pointer: JSONPointer, value: JSONValue
    ) -> typing.Sequence[ResourceRepr]:
        if not isinstance(value, (list, tuple)):
            ctx.error(pointer, f"value must be an array, got {_type_name(value)}")
            return ()
        return tuple(
            r
            for r in (self._read_resource(ctx, pointer[i], item) for i, item in enumerate(value))
            if r is not None
        )

    def __call__(self, document: JSONValue) -> DocumentReprBase:
        """
        Reads ``document`` into either a :py:class:`SingletonDocumentRepr` or
        a :py:class:`CollectionDocumentRepr`, depending on its primary data.

        :param JSONValue document: a decoded JSON:API document.
        :return: the internal representation of the document.
        :raises DeserializationError: if the document is structurally malformed.
        """
        ctx = ReaderContext()
        pointer = JSONPointer()
        retval: typing.Optional[DocumentReprBase] = None

        node = self._read_mapping(ctx, pointer, document)
        if node is not None:
            if "data" not in node:
                ctx.error(pointer, 'value must have a property "data"')
            else:
                included: typing.Sequence[ResourceRepr] = ()
                if node.get("included") is not None:
                    included = self._read_included(ctx, pointer / "included", node["included"])
                links = self._read_optional_mapping(ctx, pointer, node, "links")
                meta = self._read_optional_mapping(ctx, pointer, node, "meta")
                data = node["data"]
                if isinstance(data, (list, tuple)):
                    retval = CollectionDocumentRepr(
                        data=tuple(
                            r
                            for r in (
                                self._read_resource(ctx, (pointer / "data")[i], item)
                                for i, item in enumerate(data)
                            )
                            if r is not None
                        ),
                        included=included,
                        links=links,
                        meta=meta,
                        _source_=pointer,
                    )
                else:
                    retval = SingletonDocumentRepr(
                        data=(
                            self._read_resource(ctx, pointer / "data", data)
                            if data is not None
                            else None
                        ),
                        included=included,
                        links=links,
                        meta=meta,
                        _source_=pointer,
                    )

        if ctx.errors:
            raise DeserializationError(document, ctx.errors)
        return typing.cast(DocumentReprBase, retval)
