"""
Configuration trees driving both directions of the transform.

A :py:class:`ResourceConfig` describes which fields of a record are rendered and
how; a field whose child node carries ``ref`` becomes a relationship, any other
field with a child node becomes an embedded object.  A
:py:class:`DeserializerConfig` describes how a document is turned back into records.

Synopsis
--------

.. code-block:: python

   config = ResourceConfig.from_mapping(
       {
           "attributes": ["firstName", "lastName", "address"],
           "address": {
               "ref": "id",
               "attributes": ["addressLine1", "country"],
           },
       }
   )

"""

import collections.abc
import dataclasses
import typing

from .exceptions import InvalidConfigurationError
from .naming import KeyCasePolicy, KeyFormatter, TypeForAttribute, TypeResolver
from .types import Record
from .utils import english_enumerate


class RefExtractor(typing.Protocol):
    def __call__(self, parent: Record, item: typing.Any) -> typing.Any:
        ...  # pragma: nocover


class RecordTransform(typing.Protocol):
    def __call__(self, record: typing.Any) -> typing.Any:
        ...  # pragma: nocover


class ValueForRelationship(typing.Protocol):
    def __call__(
        self, identifier: typing.Mapping[str, typing.Any], resolved: typing.Any
    ) -> typing.Union[typing.Any, typing.Awaitable[typing.Any]]:
        ...  # pragma: nocover


Ref = typing.Union[bool, str, RefExtractor]
ValueOrHook = typing.Union[typing.Any, typing.Callable[..., typing.Any]]
HookMapping = typing.Mapping[str, ValueOrHook]


def _check_mapping(value: typing.Any, path: typing.Sequence[str]) -> typing.Mapping:
    if not isinstance(value, collections.abc.Mapping):
        raise InvalidConfigurationError(f"expected a mapping, got {value!r}", path)
    return value


def _check_attributes(value: typing.Any, path: typing.Sequence[str]) -> typing.Sequence[str]:
    if isinstance(value, str) or not isinstance(value, collections.abc.Sequence):
        raise InvalidConfigurationError("attributes must be a list of names", path)
    for name in value:
        if not isinstance(name, str):
            raise InvalidConfigurationError(f"attribute name must be a string: {name!r}", path)
    return tuple(value)


@dataclasses.dataclass
class ResourceConfig:
    """
    A node of the serializer configuration tree.

    Naming options (``id``, ``key_for_attribute``, ``type_for_attribute`` and
    ``pluralize_type``) left as :py:const:`None` are inherited from the parent
    node by :py:meth:`resolve`.
    """

    attributes: typing.Optional[typing.Sequence[str]] = None
    ref: typing.Optional[Ref] = None
    id: typing.Optional[str] = None
    key_for_attribute: KeyCasePolicy = None
    type_for_attribute: typing.Optional[TypeForAttribute] = None
    pluralize_type: typing.Optional[bool] = None
    included: bool = True
    ignore_relationship_data: bool = False
    null_if_missing: bool = False
    relationship_links: typing.Optional[HookMapping] = None
    relationship_meta: typing.Optional[HookMapping] = None
    included_links: typing.Optional[HookMapping] = None
    data_links: typing.Optional[HookMapping] = None
    data_meta: typing.Optional[HookMapping] = None
    top_level_links: typing.Optional[HookMapping] = None
    meta: typing.Optional[HookMapping] = None
    transform: typing.Optional[RecordTransform] = None
    children: typing.Dict[str, "ResourceConfig"] = dataclasses.field(default_factory=dict)

    formatter: KeyFormatter = dataclasses.field(
        default_factory=KeyFormatter, init=False, repr=False, compare=False
    )
    type_resolver: TypeResolver = dataclasses.field(
        default_factory=TypeResolver, init=False, repr=False, compare=False
    )

    @property
    def is_relationship(self) -> bool:
        return bool(self.ref)

    @property
    def id_key(self) -> str:
        return self.id or "id"

    def child(self, name: str) -> typing.Optional["ResourceConfig"]:
        return self.children.get(name)

    def resolve(self, parent: typing.Optional["ResourceConfig"] = None) -> "ResourceConfig":
        """
        Returns a copy of the tree rooted at this node with naming options
        inherited down from ``parent`` and the naming policies instantiated.
        """
        inherited = {}
        if parent is not None:
            for name in ("id", "key_for_attribute", "type_for_attribute", "pluralize_type"):
                if getattr(self, name) is None:
                    inherited[name] = getattr(parent, name)
        node = dataclasses.replace(self, **inherited)
        node.formatter = KeyFormatter(node.key_for_attribute)
        node.type_resolver = TypeResolver(
            node.type_for_attribute,
            node.pluralize_type if node.pluralize_type is not None else True,
        )
        node.children = {name: c.resolve(node) for name, c in self.children.items()}
        return node

    _reserved: typing.ClassVar[typing.FrozenSet[str]] = frozenset(
        [
            "attributes",
            "ref",
            "id",
            "key_for_attribute",
            "type_for_attribute",
            "pluralize_type",
            "included",
            "ignore_relationship_data",
            "null_if_missing",
            "relationship_links",
            "relationship_meta",
            "included_links",
            "data_links",
            "data_meta",
            "top_level_links",
            "meta",
            "transform",
        ]
    )
    _hook_mappings: typing.ClassVar[typing.Tuple[str, ...]] = (
        "relationship_links",
        "relationship_meta",
        "included_links",
        "data_links",
        "data_meta",
        "top_level_links",
        "meta",
    )

    @classmethod
    def from_mapping(
        cls, options: typing.Mapping[str, typing.Any], path: typing.Sequence[str] = ()
    ) -> "ResourceConfig":
        """
        Builds a configuration tree from a plain mapping.  Reserved keys map to
        the fields of the same name; any other key must hold a mapping, which
        becomes the child node of that name.

        :param Mapping[str, Any] options: the mapping.
        :param Sequence[str] path: names leading to this node, used in error messages.
        :return: a :py:class:`ResourceConfig`.
        :raises InvalidConfigurationError: if the mapping is malformed.
        """
        _check_mapping(options, path)
        kwargs: typing.Dict[str, typing.Any] = {}
        children: typing.Dict[str, ResourceConfig] = {}
        unknown: typing.List[str] = []

        for k, v in options.items():
            if k in cls._reserved:
                kwargs[k] = v
            elif isinstance(v, ResourceConfig):
                children[k] = v
            elif isinstance(v, collections.abc.Mapping):
                children[k] = cls.from_mapping(v, tuple(path) + (k,))
            else:
                unknown.append(k)

        if unknown:
            raise InvalidConfigurationError(
                "unknown options " + english_enumerate(unknown, quote='"'), path
            )
        if kwargs.get("attributes") is not None:
            kwargs["attributes"] = _check_attributes(kwargs["attributes"], path)
        for k in cls._hook_mappings:
            if kwargs.get(k) is not None:
                _check_mapping(kwargs[k], tuple(path) + (k,))
        return cls(children=children, **kwargs)


@dataclasses.dataclass
class TypeOptions:
    """
    Per-type options of :py:class:`DeserializerConfig`.
    """

    value_for_relationship: typing.Optional[ValueForRelationship] = None


@dataclasses.dataclass
class DeserializerConfig:
    key_for_attribute: KeyCasePolicy = None
    id: str = "id"
    type_as_attribute: bool = False
    transform: typing.Optional[RecordTransform] = None
    types: typing.Dict[str, TypeOptions] = dataclasses.field(default_factory=dict)

    def value_for_relationship(self, type: str) -> typing.Optional[ValueForRelationship]:
        options = self.types.get(type)
        return options.value_for_relationship if options is not None else None

    _reserved: typing.ClassVar[typing.FrozenSet[str]] = frozenset(
        ["key_for_attribute", "id", "type_as_attribute", "transform"]
    )

    @classmethod
    def from_mapping(cls, options: typing.Mapping[str, typing.Any]) -> "DeserializerConfig":
        """
        Builds a configuration from a plain mapping.  Any key other than the
        reserved ones names a resource type and holds its :py:class:`TypeOptions`
        (either an instance or a mapping of its fields).
        """
        _check_mapping(options, ())
        kwargs: typing.Dict[str, typing.Any] = {}
        types: typing.Dict[str, TypeOptions] = {}
        for k, v in options.items():
            if k in cls._reserved:
                kwargs[k] = v
            elif isinstance(v, TypeOptions):
                types[k] = v
            else:
                _v = _check_mapping(v, (k,))
                unknown = [n for n in _v if n != "value_for_relationship"]
                if unknown:
                    raise InvalidConfigurationError(
                        "unknown options " + english_enumerate(unknown, quote='"'), (k,)
                    )
                types[k] = TypeOptions(**_v)
        return cls(types=types, **kwargs)
