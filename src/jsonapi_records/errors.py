"""
Error objects: a flat mapping of error fields to the ``errors`` member of a
JSON:API document, and an exception class that carries one such object.
"""

import collections.abc
import http
import typing

from .serde.models import ErrorDocumentRepr, ErrorRepr, SourceRepr
from .serde.renderer import ReprRenderer
from .types import MutableJSONObject

ErrorFields = typing.Mapping[str, typing.Any]


def _text(value: typing.Any) -> typing.Optional[str]:
    return str(value) if value else None


def build_error_repr(fields: ErrorFields) -> ErrorRepr:
    """
    Builds an :py:class:`ErrorRepr` from a mapping with keys ``id``, ``status``,
    ``code``, ``title``, ``detail``, ``source`` (``pointer`` and ``parameter``),
    ``links`` (``about``) and ``meta``.  Falsy fields are dropped.
    """
    source: typing.Optional[SourceRepr] = None
    _source = fields.get("source")
    if _source and (_source.get("pointer") or _source.get("parameter")):
        source = SourceRepr(
            pointer=_text(_source.get("pointer")),
            parameter=_text(_source.get("parameter")),
        )
    links = None
    _links = fields.get("links")
    if _links:
        links = {"about": _links.get("about")}
    return ErrorRepr(
        id=_text(fields.get("id")),
        status=_text(fields.get("status")),
        code=_text(fields.get("code")),
        title=_text(fields.get("title")),
        detail=_text(fields.get("detail")),
        source=source,
        links=links,
        meta=dict(fields["meta"]) if fields.get("meta") else None,
    )


class ErrorSerializer:
    _renderer: ReprRenderer

    def __call__(
        self, errors: typing.Union[ErrorFields, typing.Iterable[ErrorFields], None] = None
    ) -> MutableJSONObject:
        """
        :param errors: a mapping of error fields or an iterable of them.
        :return: a document with the ``errors`` member.
        """
        items: typing.Iterable[ErrorFields]
        if errors is None:
            items = ()
        elif isinstance(errors, collections.abc.Mapping):
            items = (errors,)
        else:
            items = errors
        return self._renderer(ErrorDocumentRepr(errors=[build_error_repr(f) for f in items]))

    def __init__(self, renderer: typing.Optional[ReprRenderer] = None):
        self._renderer = renderer if renderer is not None else ReprRenderer()


class JSONAPIError(Exception):
    """
    An exception that renders as a single JSON:API error object.  ``title`` is
    the reason phrase of ``status``.
    """

    status: int
    error: ErrorRepr

    def to_dict(self) -> MutableJSONObject:
        return ReprRenderer()(ErrorDocumentRepr(errors=[self.error]))["errors"][0]

    def __init__(
        self,
        status: int = 500,
        detail: typing.Any = "",
        code: typing.Any = "",
        id: typing.Any = "",
        meta: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        source_pointer: str = "",
        source_parameter: str = "",
        links_about: str = "",
    ):
        try:
            title: typing.Optional[str] = http.HTTPStatus(int(status)).phrase
        except ValueError:
            title = None
        self.status = int(status)
        self.error = build_error_repr(
            {
                "id": id,
                "status": status,
                "code": code,
                "title": title,
                "detail": detail,
                "source": {"pointer": source_pointer, "parameter": source_parameter},
                "links": {"about": links_about} if links_about else None,
                "meta": meta,
            }
        )
        super().__init__(detail or title or str(status))


class NotFoundError(JSONAPIError):
    def __init__(
        self,
        detail: typing.Any = "",
        code: typing.Any = "",
        id: typing.Any = "",
        meta: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        source_pointer: str = "",
        source_parameter: str = "",
        links_about: str = "",
    ):
        super().__init__(
            404, detail, code, id, meta, source_pointer, source_parameter, links_about
        )
