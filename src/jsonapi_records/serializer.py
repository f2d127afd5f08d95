"""
The serialize direction: records in, JSON:API documents out.

Synopsis
--------

.. code-block:: python

   from jsonapi_records import Serializer

   serializer = Serializer(
       "users",
       {
           "attributes": ["firstName", "lastName", "address"],
           "address": {"ref": "id", "attributes": ["addressLine1", "country"]},
       },
   )

   document = serializer.serialize(
       {
           "id": "1",
           "firstName": "Sandro",
           "lastName": "Munda",
           "address": {"id": "2", "addressLine1": "X", "country": "USA"},
       }
   )

"""

import collections.abc
import logging
import typing

from .config import HookMapping, Ref, ResourceConfig
from .included import IncludedSet
from .serde.builders import (
    CollectionDocumentBuilder,
    DocumentBuilder,
    ResourceReprBuilder,
    SingletonDocumentBuilder,
)
from .serde.models import ResourceIdRepr
from .serde.renderer import ReprRenderer
from .types import MutableJSONObject, Record

logger = logging.getLogger(__name__)


def evaluate_hooks(hooks: HookMapping, *args: typing.Any) -> typing.Dict[str, typing.Any]:
    """
    Returns a copy of ``hooks`` in which every callable value is replaced by
    the result of calling it with ``args``.
    """
    return {k: (v(*args) if callable(v) else v) for k, v in hooks.items()}


def _split_attribute(entry: str) -> typing.Tuple[str, str]:
    field, _, alias = entry.partition(":")
    return field, (alias or field)


def _is_sequence(value: typing.Any) -> bool:
    return isinstance(value, (list, tuple))


def _destination_view(builder: ResourceReprBuilder) -> typing.Dict[str, typing.Any]:
    return {"type": builder.type, "id": builder.id, "attributes": dict(builder.attributes)}


class ResourceTransformer:
    """
    Renders records into resource builders as directed by a configuration
    tree.  One instance serves a single serialize call, so that every record of
    the call shares the same :py:class:`IncludedSet`.
    """

    collection_name: str
    config: ResourceConfig
    included: IncludedSet
    _record: typing.Any = None

    def _extract_ref(self, parent: Record, item: typing.Any, ref: Ref) -> typing.Optional[str]:
        id_: typing.Any
        if ref is True:
            id_ = item
        elif isinstance(ref, str):
            id_ = item.get(ref) if isinstance(item, collections.abc.Mapping) else None
        else:
            id_ = typing.cast(typing.Callable, ref)(parent, item)
        return str(id_) if id_ is not None else None

    def _serialize_ref(
        self, parent: Record, name: str, item: typing.Any, node: ResourceConfig
    ) -> typing.Optional[ResourceIdRepr]:
        if node.transform is not None:
            item = node.transform(item)
        id_ = self._extract_ref(parent, item, typing.cast(Ref, node.ref))
        if id_ is None:
            return None
        type_ = node.type_resolver(name, item)

        if node.attributes and isinstance(item, collections.abc.Mapping):
            builder = ResourceReprBuilder()
            builder.set_type(type_)
            builder.set_id(id_)
            self._serialize_members(builder, node, item)
            has_plain_attributes = any(
                node.child(_split_attribute(entry)[1]) is None for entry in node.attributes
            )
            if has_plain_attributes and node.included:
                if node.included_links is not None:
                    builder.links = evaluate_hooks(node.included_links, self._record, item)
                self.included.upsert(builder)

        return ResourceIdRepr(type=type_, id=id_)

    def _serialize_relationship(
        self,
        dest: ResourceReprBuilder,
        parent_node: ResourceConfig,
        parent: Record,
        name: str,
        value: typing.Any,
        node: ResourceConfig,
    ) -> None:
        """
        Serializes the relationship ``name`` of ``parent`` into ``dest``.

        Callables in ``relationship_links`` receive the record being
        serialized, the value of the relationship and a dict with the
        ``type``, ``id`` and ``attributes`` serialized so far of the resource
        that holds the relationship.
        """
        rel = dest.next_relationship(parent_node.formatter.key(name))
        if _is_sequence(value):
            identifiers = [self._serialize_ref(parent, name, item, node) for item in value]
            if not node.ignore_relationship_data:
                rel.set_to_many(i for i in identifiers if i is not None)
        else:
            identifier = (
                self._serialize_ref(parent, name, value, node) if value is not None else None
            )
            if not node.ignore_relationship_data:
                rel.set_to_one(identifier)

        if node.relationship_links is not None:
            rel.links = evaluate_hooks(
                node.relationship_links, self._record, value, _destination_view(dest)
            )
        if node.relationship_meta is not None:
            rel.meta = evaluate_hooks(node.relationship_meta, self._record, value)

    def _serialize_embedded(self, node: ResourceConfig, value: typing.Any) -> typing.Any:
        if node.transform is not None:
            value = node.transform(value)
        if node.attributes is None or not isinstance(value, collections.abc.Mapping):
            return node.formatter(value)
        scratch = ResourceReprBuilder()
        self._serialize_members(scratch, node, value)
        # an embedded object has no relationships member of its own
        return dict(scratch.attributes)

    def _serialize_members(
        self, dest: ResourceReprBuilder, node: ResourceConfig, record: Record
    ) -> None:
        for entry in node.attributes or ():
            field, name = _split_attribute(entry)
            child = node.child(name)
            if field in record:
                value = record[field]
            elif child is not None and child.null_if_missing:
                value = None
            else:
                continue

            if child is not None and child.is_relationship:
                self._serialize_relationship(dest, node, record, name, value, child)
                continue

            key = node.formatter.key(name)
            if child is not None and isinstance(value, collections.abc.Mapping):
                dest.add_attribute(key, self._serialize_embedded(child, value))
            elif child is not None and _is_sequence(value):
                dest.add_attribute(
                    key,
                    [
                        self._serialize_embedded(child, item)
                        if isinstance(item, collections.abc.Mapping)
                        else item
                        for item in value
                    ],
                )
            else:
                dest.add_attribute(key, node.formatter(value))

    def render(self, builder: ResourceReprBuilder, record: Record) -> None:
        """
        Fills ``builder`` with the resource object that represents ``record``.

        :param ResourceReprBuilder builder: the builder of the primary data resource.
        :param Record record: the record.
        """
        config = self.config
        if config.transform is not None:
            record = config.transform(record)
        self._record = record

        builder.set_type(config.type_resolver(self.collection_name, record))
        id_ = record.get(config.id_key)
        if id_ is not None:
            builder.set_id(str(id_))
        if config.data_links is not None:
            builder.links = evaluate_hooks(config.data_links, record)
        if config.data_meta is not None:
            builder.meta = evaluate_hooks(config.data_meta, record)

        self._serialize_members(builder, config, record)

    def __init__(self, collection_name: str, config: ResourceConfig, included: IncludedSet):
        self.collection_name = collection_name
        self.config = config
        self.included = included


class Serializer:
    """
    Serializes records of a collection into JSON:API documents.

    :param str collection_name: the name of the collection, from which the
                                ``type`` of primary data resources is derived.
    :param Union[ResourceConfig, Mapping[str, Any]] config: the configuration tree.
    :param Optional[ReprRenderer] renderer: renders the document into JSON-compatible values.
    """

    collection_name: str
    config: ResourceConfig
    _renderer: ReprRenderer

    def serialize(
        self, records: typing.Union[None, Record, typing.Sequence[Record]]
    ) -> MutableJSONObject:
        """
        Serializes ``records`` into a JSON:API document.

        :param records: a record, a list of records, or :py:const:`None`.
        :return: the document, ready to be passed to :py:func:`json.dumps`.
        """
        document: DocumentBuilder
        if _is_sequence(records):
            logger.debug("serializing %d %s", len(records), self.collection_name)  # type: ignore
            collection = CollectionDocumentBuilder()
            transformer = ResourceTransformer(
                self.collection_name, self.config, IncludedSet(collection)
            )
            for record in typing.cast(typing.Sequence[Record], records):
                if record is None:
                    continue
                transformer.render(collection.next(), record)
            document = collection
        else:
            logger.debug("serializing a single %s", self.collection_name)
            singleton = SingletonDocumentBuilder()
            if records is not None:
                transformer = ResourceTransformer(
                    self.collection_name, self.config, IncludedSet(singleton)
                )
                transformer.render(singleton.set(), typing.cast(Record, records))
            document = singleton

        if self.config.top_level_links is not None:
            document.links = evaluate_hooks(self.config.top_level_links, records)
        if self.config.meta is not None:
            document.meta = evaluate_hooks(self.config.meta, records)
        return self._renderer(document())

    def __init__(
        self,
        collection_name: str,
        config: typing.Union[ResourceConfig, typing.Mapping[str, typing.Any], None] = None,
        renderer: typing.Optional[ReprRenderer] = None,
    ):
        if config is None:
            config = ResourceConfig()
        elif not isinstance(config, ResourceConfig):
            config = ResourceConfig.from_mapping(config)
        self.collection_name = collection_name
        self.config = config.resolve()
        self._renderer = renderer if renderer is not None else ReprRenderer()
