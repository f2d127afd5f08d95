"""
Dataclasses standing for the members of a JSON:API document, independent of
how the document is encoded.

Both directions go through them: the serializer fills them through
:py:mod:`jsonapi_records.serde.builders` before rendering, and the deserializer
reads a decoded document into them before extracting records.
"""

import dataclasses
import typing
from collections import OrderedDict

from ..utils import UNDEFINED, JSONPointer, UndefinedType

Source = typing.Union[JSONPointer, str]
Links = typing.Dict[str, typing.Any]
Meta = typing.Dict[str, typing.Any]


@dataclasses.dataclass
class Repr:
    """
    ``_source_`` tells where a node was read from, if it was read at all.
    """

    _source_: typing.Optional[Source] = None


@dataclasses.dataclass(init=False)
class NodeRepr(Repr):
    links: typing.Optional[Links] = None
    meta: Meta = dataclasses.field(default_factory=dict)

    def __init__(
        self,
        *,
        links: typing.Optional[Links] = None,
        meta: typing.Optional[Meta] = None,
        _source_: typing.Optional[Source] = None,
    ):
        super().__init__(_source_=_source_)
        self.links = links
        self.meta = meta if meta is not None else {}


@dataclasses.dataclass(init=False)
class ResourceIdRepr(NodeRepr):
    """
    A resource identifier object: ``{"type": ..., "id": ...}`` as found in
    relationship linkage.  Identifiers read from a document keep their ``id``
    as found, so it is not necessarily a string.
    """

    type: str  # type: ignore
    id: typing.Any  # type: ignore

    def as_identifier(self) -> typing.Dict[str, typing.Any]:
        return {"type": self.type, "id": self.id}

    def __init__(
        self,
        *,
        type: str,
        id: typing.Any,
        meta: typing.Optional[Meta] = None,
        _source_: typing.Optional[Source] = None,
    ):
        super().__init__(meta=meta, _source_=_source_)
        self.type = type
        self.id = id


LinkageData = typing.Union[None, ResourceIdRepr, typing.Sequence[ResourceIdRepr]]


@dataclasses.dataclass(init=False)
class LinkageRepr(NodeRepr):
    """
    A relationship object.

    ``data`` is :py:const:`None` for an empty to-one relationship, a
    sequence for a to-many relationship, and :py:data:`UNDEFINED` when the
    relationship has no ``data`` member at all (links or meta only).
    """

    data: typing.Union[LinkageData, UndefinedType] = UNDEFINED

    @property
    def has_data(self) -> bool:
        return self.data is not UNDEFINED

    @property
    def is_to_many(self) -> bool:
        return isinstance(self.data, (list, tuple))

    def __init__(
        self,
        *,
        data: typing.Union[LinkageData, UndefinedType] = UNDEFINED,
        links: typing.Optional[Links] = None,
        meta: typing.Optional[Meta] = None,
        _source_: typing.Optional[Source] = None,
    ):
        super().__init__(links=links, meta=meta, _source_=_source_)
        self.data = data


@dataclasses.dataclass(init=False)
class ResourceRepr(NodeRepr):
    """
    A resource object.  Attributes and relationships keep the order in which
    they were given.

    :param str type: the resource type.
    :param Any id: the resource id; :py:const:`None` for a resource without one.
    :param Iterable[Tuple[str, Any]] attributes: attribute name-value pairs.
    :param Iterable[Tuple[str, LinkageRepr]] relationships: relationship name-object pairs.
    """

    type: str  # type: ignore
    id: typing.Any  # type: ignore
    attributes: typing.Mapping[str, typing.Any] = dataclasses.field(default_factory=OrderedDict)  # type: ignore
    relationships: typing.Mapping[str, LinkageRepr] = dataclasses.field(default_factory=OrderedDict)  # type: ignore

    @property
    def identity(self) -> str:
        return f"{self.type}:{self.id}"

    def __init__(
        self,
        *,
        type: str,
        id: typing.Any,
        attributes: typing.Iterable[typing.Tuple[str, typing.Any]] = (),
        relationships: typing.Iterable[typing.Tuple[str, LinkageRepr]] = (),
        links: typing.Optional[Links] = None,
        meta: typing.Optional[Meta] = None,
        _source_: typing.Optional[Source] = None,
    ):
        super().__init__(links=links, meta=meta, _source_=_source_)
        self.type = type
        self.id = id
        self.attributes = OrderedDict(attributes)
        self.relationships = OrderedDict(relationships)


@dataclasses.dataclass(init=False)
class SourceRepr(Repr):
    pointer: typing.Optional[str] = None
    parameter: typing.Optional[str] = None

    def __init__(
        self,
        pointer: typing.Optional[str] = None,
        parameter: typing.Optional[str] = None,
        _source_: typing.Optional[Source] = None,
    ):
        super().__init__(_source_=_source_)
        self.pointer = pointer
        self.parameter = parameter


@dataclasses.dataclass(init=False)
class ErrorRepr(NodeRepr):
    """
    An error object.  Members left as :py:const:`None` are not rendered.
    """

    id: typing.Optional[str] = None
    status: typing.Optional[str] = None
    code: typing.Optional[str] = None
    title: typing.Optional[str] = None
    detail: typing.Optional[str] = None
    source: typing.Optional[SourceRepr] = None

    def __init__(
        self,
        *,
        id: typing.Optional[str] = None,
        status: typing.Optional[str] = None,
        code: typing.Optional[str] = None,
        title: typing.Optional[str] = None,
        detail: typing.Optional[str] = None,
        source: typing.Optional[SourceRepr] = None,
        links: typing.Optional[Links] = None,
        meta: typing.Optional[Meta] = None,
        _source_: typing.Optional[Source] = None,
    ):
        super().__init__(links=links, meta=meta, _source_=_source_)
        self.id = id
        self.status = status
        self.code = code
        self.title = title
        self.detail = detail
        self.source = source


@dataclasses.dataclass(init=False)
class DocumentReprBase(NodeRepr):
    """
    Members shared by every kind of top-level document.  ``included`` is empty
    when the document has no such member.
    """

    errors: typing.Sequence[ErrorRepr] = ()
    included: typing.Sequence[ResourceRepr] = ()

    def __init__(
        self,
        *,
        errors: typing.Optional[typing.Sequence[ErrorRepr]] = None,
        included: typing.Sequence[ResourceRepr] = (),
        links: typing.Optional[Links] = None,
        meta: typing.Optional[Meta] = None,
        _source_: typing.Optional[Source] = None,
    ):
        super().__init__(links=links, meta=meta, _source_=_source_)
        self.errors = errors or ()
        self.included = included


@dataclasses.dataclass(init=False)
class SingletonDocumentRepr(DocumentReprBase):
    """
    A document whose primary data is a single resource, or ``null`` when
    ``data`` is :py:const:`None`.
    """

    data: typing.Optional[ResourceRepr] = None

    def __init__(
        self,
        *,
        data: typing.Optional[ResourceRepr] = None,
        errors: typing.Optional[typing.Sequence[ErrorRepr]] = None,
        included: typing.Sequence[ResourceRepr] = (),
        links: typing.Optional[Links] = None,
        meta: typing.Optional[Meta] = None,
        _source_: typing.Optional[Source] = None,
    ):
        super().__init__(errors=errors, included=included, links=links, meta=meta, _source_=_source_)
        self.data = data


@dataclasses.dataclass(init=False)
class CollectionDocumentRepr(DocumentReprBase):
    data: typing.Sequence[ResourceRepr] = ()

    def __init__(
        self,
        *,
        data: typing.Sequence[ResourceRepr] = (),
        errors: typing.Optional[typing.Sequence[ErrorRepr]] = None,
        included: typing.Sequence[ResourceRepr] = (),
        links: typing.Optional[Links] = None,
        meta: typing.Optional[Meta] = None,
        _source_: typing.Optional[Source] = None,
    ):
        super().__init__(errors=errors, included=included, links=links, meta=meta, _source_=_source_)
        self.data = data


@dataclasses.dataclass(init=False)
class ErrorDocumentRepr(DocumentReprBase):
    def __init__(
        self,
        *,
        errors: typing.Sequence[ErrorRepr],
        meta: typing.Optional[Meta] = None,
        _source_: typing.Optional[Source] = None,
    ):
        super().__init__(errors=errors, meta=meta, _source_=_source_)
