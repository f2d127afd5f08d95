import abc
import typing
from collections import OrderedDict

from ..utils import UNDEFINED, UndefinedType
from .models import (
    CollectionDocumentRepr,
    LinkageData,
    LinkageRepr,
    Links,
    Repr,
    ResourceIdRepr,
    ResourceRepr,
    SingletonDocumentRepr,
)


class ReprBuilder(metaclass=abc.ABCMeta):
    parent: typing.Optional["ReprBuilder"] = None
    meta: typing.Dict[str, typing.Any]

    @abc.abstractmethod
    def __call__(self) -> Repr:
        ...  # pragma: nocover

    def __init__(self, parent: typing.Optional["ReprBuilder"] = None):
        self.parent = parent
        self.meta = {}


class NodeReprBuilder(ReprBuilder):
    links: typing.Optional[Links] = None

    def __init__(self, parent: typing.Optional["ReprBuilder"] = None):
        super().__init__(parent)
        self.links = None


class LinkageReprBuilder(NodeReprBuilder):
    data: typing.Union[LinkageData, UndefinedType]

    def set_to_one(self, identifier: typing.Optional[ResourceIdRepr]) -> None:
        self.data = identifier

    def set_to_many(self, identifiers: typing.Iterable[ResourceIdRepr]) -> None:
        self.data = tuple(identifiers)

    def __bool__(self) -> bool:
        return bool(self.data) or bool(self.links) or bool(self.meta)

    def __call__(self) -> LinkageRepr:
        return LinkageRepr(
            data=self.data,
            links=self.links,
            meta=self.meta,
        )

    def __init__(self, parent: typing.Optional[ReprBuilder] = None):
        super().__init__(parent)
        self.data = UNDEFINED


class ResourceReprBuilder(NodeReprBuilder):
    type: typing.Optional[str] = None
    id: typing.Optional[str] = None
    attributes: "OrderedDict[str, typing.Any]"
    relationships: "OrderedDict[str, LinkageReprBuilder]"

    @property
    def identity(self) -> str:
        return f"{self.type}:{self.id}"

    def set_type(self, type: str):
        self.type = type

    def set_id(self, id: typing.Optional[str]):
        self.id = id

    def add_attribute(self, name: str, value: typing.Any):
        self.attributes[name] = value

    def next_relationship(self, name: str) -> LinkageReprBuilder:
        self.relationships[name] = rel = LinkageReprBuilder(self)
        return rel

    def merge(self, other: "ResourceReprBuilder") -> None:
        """
        Shallow-merges the attributes and relationships of ``other`` into this
        builder.  Only truthy values of ``other`` overwrite existing entries.
        """
        for k, v in other.attributes.items():
            if v or k not in self.attributes:
                self.attributes[k] = v
        for k, rel in other.relationships.items():
            if rel or k not in self.relationships:
                rel.parent = self
                self.relationships[k] = rel
        if other.links:
            self.links = dict(self.links or {}, **other.links)

    def __call__(self) -> ResourceRepr:
        return ResourceRepr(
            type=typing.cast(str, self.type),
            id=self.id,
            links=self.links,
            meta=self.meta,
            attributes=tuple((k, v) for k, v in self.attributes.items()),
            relationships=tuple((k, v()) for k, v in self.relationships.items()),
        )

    def __init__(self, parent: typing.Optional[ReprBuilder] = None):
        super().__init__(parent)
        self.attributes = OrderedDict()
        self.relationships = OrderedDict()


class DocumentBuilder(NodeReprBuilder, metaclass=abc.ABCMeta):
    included: typing.List[ResourceReprBuilder]

    def add_included(self, builder: ResourceReprBuilder) -> None:
        builder.parent = self
        self.included.append(builder)

    def __init__(self):
        super().__init__(None)
        self.included = []


class CollectionDocumentBuilder(DocumentBuilder):
    data: typing.List["ResourceReprBuilder"]

    def next(self) -> "ResourceReprBuilder":
        builder = ResourceReprBuilder(self)
        self.data.append(builder)
        return builder

    def __call__(self) -> CollectionDocumentRepr:
        return CollectionDocumentRepr(
            data=tuple(b() for b in self.data),
            links=self.links,
            meta=self.meta,
            included=tuple(r() for r in self.included),
        )

    def __init__(self):
        super().__init__()
        self.data = []


class SingletonDocumentBuilder(DocumentBuilder):
    data: typing.Optional["ResourceReprBuilder"]

    def set(self) -> "ResourceReprBuilder":
        self.data = builder = ResourceReprBuilder(self)
        return builder

    def __call__(self) -> SingletonDocumentRepr:
        return SingletonDocumentRepr(
            data=self.data() if self.data is not None else None,
            links=self.links,
            meta=self.meta,
            included=tuple(r() for r in self.included),
        )

    def __init__(self):
        super().__init__()
        self.data = None
