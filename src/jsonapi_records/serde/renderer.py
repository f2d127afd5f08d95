"""
:py:mod:`jsonapi_records.serde.renderer` turns the internal representation of a
JSON:API document into plain dicts and lists that :py:func:`json.dumps` accepts.

Synopsis
--------

.. code-block:: python

   import json

   from jsonapi_records.serde.renderer import ReprRenderer

   renderer = ReprRenderer()

   document = SingletonDocumentRepr(
       links={"self": "/users/1"},
       data=ResourceRepr(
           type="users",
           id="1",
           attributes=[("first-name", "Sandro")],
           relationships=[
               (
                   "books",
                   LinkageRepr(
                       data=[
                           ResourceIdRepr(type="books", id="1"),
                           ResourceIdRepr(type="books", id="2"),
                       ],
                   ),
               ),
           ],
       ),
   )

   print(json.dumps(renderer(document)))

"""

import base64
import collections.abc
import datetime
import decimal
import typing
from collections import OrderedDict

from ..types import JSONScalar, MutableJSONObject
from .models import (
    CollectionDocumentRepr,
    DocumentReprBase,
    ErrorDocumentRepr,
    ErrorRepr,
    LinkageRepr,
    NodeRepr,
    ResourceIdRepr,
    ResourceRepr,
    SingletonDocumentRepr,
)


class TZLocalizer(typing.Protocol):
    def localize(self, dt: datetime.datetime) -> datetime.datetime:
        ...  # pragma: nocover


ScalarRenderer = typing.Callable[["ReprRenderer", typing.Any], typing.Any]


class ReprRenderer:
    """
    :param bool render_decimal_as_str: renders :py:class:`decimal.Decimal` as
                                       a string instead of a float.
    :param Optional[tzinfo] assume_naive_timezone_as: the timezone given to
                                       naive datetimes before they are converted
                                       to UTC; if omitted, naive datetimes are
                                       rendered as they are.
    """

    _render_decimal_as_str: bool = True
    _assume_naive_timezone_as: typing.Optional[datetime.tzinfo] = None

    def _object(self, items: typing.Iterable[typing.Tuple[str, typing.Any]]) -> MutableJSONObject:
        return OrderedDict(items)

    def _datetime(self, value: datetime.datetime) -> JSONScalar:
        if value.tzinfo is None:
            tz = self._assume_naive_timezone_as
            if tz is None:
                return value.isoformat()
            if hasattr(tz, "localize"):
                value = typing.cast(TZLocalizer, tz).localize(value)
            else:
                value = value.replace(tzinfo=tz)
        return value.astimezone(datetime.timezone.utc).isoformat()

    def _date(self, value: datetime.date) -> JSONScalar:
        return value.isoformat()

    def _decimal(self, value: decimal.Decimal) -> JSONScalar:
        return str(value) if self._render_decimal_as_str else float(value)

    def _bytes(self, value: bytes) -> JSONScalar:
        return base64.b64encode(value).decode("ascii")

    # datetime precedes date as the former is a subclass of the latter
    _scalar_renderers: typing.ClassVar[typing.Dict[type, ScalarRenderer]] = {
        datetime.datetime: _datetime,
        datetime.date: _date,
        decimal.Decimal: _decimal,
        bytes: _bytes,
    }

    def render_value(self, value: typing.Any) -> typing.Any:
        """
        Renders an arbitrary attribute value, descending into mappings and
        sequences.  Scalars of a type without a renderer are returned as they
        are, for the JSON encoder to handle.
        """
        if isinstance(value, collections.abc.Mapping):
            return self._object((str(k), self.render_value(v)) for k, v in value.items())
        if isinstance(value, (list, tuple)):
            return [self.render_value(v) for v in value]

        r = self._scalar_renderers.get(type(value))
        if r is None:
            for type_, candidate in self._scalar_renderers.items():
                if isinstance(value, type_):
                    r = candidate
                    break
            else:
                return value
        return r(self, value)

    def _add_links_and_meta(self, target: MutableJSONObject, repr_: NodeRepr) -> None:
        if repr_.links:
            target["links"] = self.render_value(repr_.links)
        if repr_.meta:
            target["meta"] = self.render_value(repr_.meta)

    def _identifier(self, repr_: ResourceIdRepr) -> MutableJSONObject:
        retval: MutableJSONObject = {"type": repr_.type, "id": repr_.id}
        if repr_.meta:
            retval["meta"] = self.render_value(repr_.meta)
        return retval

    def _linkage(self, repr_: LinkageRepr) -> MutableJSONObject:
        retval: MutableJSONObject = {}
        if repr_.has_data:
            data = repr_.data
            if data is None:
                retval["data"] = None
            elif isinstance(data, ResourceIdRepr):
                retval["data"] = self._identifier(data)
            else:
                retval["data"] = [
                    self._identifier(item)
                    for item in typing.cast(typing.Sequence[ResourceIdRepr], data)
                ]
        self._add_links_and_meta(retval, repr_)
        return retval

    def _resource(self, repr_: ResourceRepr) -> MutableJSONObject:
        retval: MutableJSONObject = {"type": repr_.type}
        if repr_.id is not None:
            retval["id"] = repr_.id
        if repr_.attributes:
            retval["attributes"] = self.render_value(repr_.attributes)
        if repr_.relationships:
            retval["relationships"] = self._object(
                (name, self._linkage(linkage)) for name, linkage in repr_.relationships.items()
            )
        self._add_links_and_meta(retval, repr_)
        return retval

    _error_members: typing.ClassVar[typing.Tuple[str, ...]] = (
        "id",
        "status",
        "code",
        "title",
        "detail",
    )

    def _error(self, repr_: ErrorRepr) -> MutableJSONObject:
        retval: MutableJSONObject = {}
        for name in self._error_members:
            value = getattr(repr_, name)
            if value is not None:
                retval[name] = value
        if repr_.source is not None:
            source = {"pointer": repr_.source.pointer, "parameter": repr_.source.parameter}
            retval["source"] = {k: v for k, v in source.items() if v is not None}
        self._add_links_and_meta(retval, repr_)
        return retval

    def __call__(self, repr_: DocumentReprBase) -> MutableJSONObject:
        """
        Renders a document.

        Singleton documents always carry ``data`` (``null`` for no resource) and
        error documents always carry ``errors``; ``included`` is present only
        when it is not empty.
        """
        retval: MutableJSONObject = {}
        if isinstance(repr_, SingletonDocumentRepr):
            retval["data"] = self._resource(repr_.data) if repr_.data is not None else None
        elif isinstance(repr_, CollectionDocumentRepr):
            retval["data"] = [self._resource(r) for r in repr_.data]
        elif not isinstance(repr_, ErrorDocumentRepr):
            raise AssertionError("never get here")

        if repr_.errors or isinstance(repr_, ErrorDocumentRepr):
            retval["errors"] = [self._error(e) for e in repr_.errors]
        self._add_links_and_meta(retval, repr_)
        if repr_.included:
            retval["included"] = [self._resource(r) for r in repr_.included]
        return retval

    def __init__(
        self,
        render_decimal_as_str: bool = True,
        assume_naive_timezone_as: typing.Optional[datetime.tzinfo] = None,
    ):
        self._render_decimal_as_str = render_decimal_as_str
        self._assume_naive_timezone_as = assume_naive_timezone_as
