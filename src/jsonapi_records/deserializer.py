"""
The deserialize direction: JSON:API documents in, records out.

Relationships are resolved against the document's ``included`` member; the
resolved resources are merged into the record under the relationship's name.
Resolution may be overridden per resource type with a ``value_for_relationship``
hook, which is allowed to return an awaitable when the document is deserialized
through :py:meth:`Deserializer.deserialize`.

Synopsis
--------

.. code-block:: python

   from jsonapi_records import Deserializer

   deserializer = Deserializer({"key_for_attribute": "camelCase"})

   record = deserializer.deserialize_sync(document)
   record = await deserializer.deserialize(document)

"""

import logging
import typing

from .config import DeserializerConfig
from .deferred import Resolution, run_immediately
from .exceptions import AsynchronousResolverError
from .naming import KeyFormatter
from .serde.models import (
    CollectionDocumentRepr,
    DocumentReprBase,
    ResourceIdRepr,
    ResourceRepr,
    SingletonDocumentRepr,
)
from .serde.reader import DocumentReader
from .types import JSONValue, MutableRecord

logger = logging.getLogger(__name__)


class VisitedPathSet:
    """
    Records the relationship edges expanded during a single deserialize call.
    An edge is identified by ``fromType/fromId/relationshipName/toType/toId``.
    """

    _paths: typing.Set[str]

    @staticmethod
    def key(from_: ResourceRepr, relationship_name: str, to: ResourceIdRepr) -> str:
        return "/".join(
            str(c) for c in (from_.type, from_.id, relationship_name, to.type, to.id)
        )

    def visit(self, path: str) -> bool:
        """
        Marks ``path`` as visited.

        :return: :py:const:`False` if the path has been visited already.
        """
        if path in self._paths:
            return False
        self._paths.add(path)
        return True

    def __init__(self):
        self._paths = set()


class RelationshipResolver:
    config: DeserializerConfig
    formatter: KeyFormatter
    visited: VisitedPathSet
    immediate: bool
    _included: typing.Optional[typing.Dict[typing.Tuple[str, typing.Any], ResourceRepr]]

    def _index(
        self, included: typing.Optional[typing.Sequence[ResourceRepr]]
    ) -> typing.Optional[typing.Dict[typing.Tuple[str, typing.Any], ResourceRepr]]:
        if included is None:
            return None
        index: typing.Dict[typing.Tuple[str, typing.Any], ResourceRepr] = {}
        for resource in included:
            index.setdefault((resource.type, resource.id), resource)
        return index

    def _extract_attributes(self, resource: ResourceRepr) -> MutableRecord:
        record: MutableRecord = self.formatter(resource.attributes)
        if resource.id is not None:
            record[self.config.id] = resource.id
        if self.config.type_as_attribute:
            record["type"] = resource.type
        if resource.meta:
            record["meta"] = self.formatter(resource.meta)
        return record

    async def _override(
        self, identifier: ResourceIdRepr, resolved: typing.Any
    ) -> typing.Any:
        hook = self.config.value_for_relationship(identifier.type)
        if hook is None:
            return resolved
        outcome: Resolution[typing.Any] = Resolution(hook(identifier.as_identifier(), resolved))
        if self.immediate:
            if not outcome.immediate:
                outcome.discard()
                raise AsynchronousResolverError(identifier.type)
            return outcome()
        return await outcome.wait()

    async def resolve(
        self,
        identifier: typing.Optional[ResourceIdRepr],
        relationship_name: str,
        from_: ResourceRepr,
    ) -> typing.Any:
        """
        Resolves a resource identifier into a record.

        :param Optional[ResourceIdRepr] identifier: the identifier found in the relationship.
        :param str relationship_name: the name of the relationship, as found in the document.
        :param ResourceRepr from_: the resource holding the relationship.
        :return: the record, or :py:const:`None` if the identifier cannot be resolved
                 or the edge has been expanded already.
        """
        if identifier is None:
            return None
        resolved: typing.Any = None
        if self._included is not None:
            path = VisitedPathSet.key(from_, relationship_name, identifier)
            if not self.visited.visit(path):
                logger.debug("edge %s has been expanded already", path)
                return None
            target = self._included.get((identifier.type, identifier.id))
            if target is not None:
                resolved = await self.extract(target)
            else:
                logger.debug("no included resource for %s:%s", identifier.type, identifier.id)
        return await self._override(identifier, resolved)

    async def extract(self, resource: ResourceRepr) -> MutableRecord:
        """
        Builds the record of ``resource``: its attributes merged with its
        resolved relationships, in order of appearance.
        """
        record = self._extract_attributes(resource)
        for name, linkage in resource.relationships.items():
            if not linkage.has_data:
                continue
            key = self.formatter.key(name)
            if linkage.data is None:
                record[key] = None
            elif linkage.is_to_many:
                record[key] = [
                    await self.resolve(identifier, name, resource)
                    for identifier in typing.cast(typing.Sequence[ResourceIdRepr], linkage.data)
                ]
            else:
                value = await self.resolve(
                    typing.cast(ResourceIdRepr, linkage.data), name, resource
                )
                if value is not None:
                    record[key] = value
        return record

    def __init__(
        self,
        config: DeserializerConfig,
        document: DocumentReprBase,
        immediate: bool = False,
        formatter: typing.Optional[KeyFormatter] = None,
    ):
        self.config = config
        self.formatter = formatter if formatter is not None else KeyFormatter(config.key_for_attribute)
        self.visited = VisitedPathSet()
        self.immediate = immediate
        self._included = self._index(document.included if document.included else None)


class Deserializer:
    """
    Deserializes JSON:API documents into records.

    :param Union[DeserializerConfig, Mapping[str, Any], None] config: the configuration.
    """

    config: DeserializerConfig
    _formatter: KeyFormatter
    _reader: DocumentReader

    def _finish(self, record: MutableRecord) -> typing.Any:
        if self.config.transform is not None:
            return self.config.transform(record)
        return record

    async def _perform(self, document: JSONValue, immediate: bool) -> typing.Any:
        repr_ = self._reader(document)
        resolver = RelationshipResolver(self.config, repr_, immediate, self._formatter)
        if isinstance(repr_, CollectionDocumentRepr):
            return [self._finish(await resolver.extract(resource)) for resource in repr_.data]

        singleton = typing.cast(SingletonDocumentRepr, repr_)
        if singleton.data is None:
            return None
        record = await resolver.extract(singleton.data)
        if singleton.links:
            record["links"] = singleton.links
        return self._finish(record)

    async def deserialize(
        self,
        document: JSONValue,
        callback: typing.Optional[typing.Callable[[typing.Any], None]] = None,
    ) -> typing.Any:
        """
        Deserializes ``document``, awaiting any awaitable returned by
        ``value_for_relationship`` hooks.

        :param JSONValue document: a decoded JSON:API document.
        :param callback: called with the result once the document is deserialized.
        :return: a record, a list of records, or :py:const:`None` for a null primary data.
        :raises DeserializationError: if the document is structurally malformed.
        """
        result = await self._perform(document, immediate=False)
        if callback is not None:
            callback(result)
        return result

    def deserialize_sync(self, document: JSONValue) -> typing.Any:
        """
        Deserializes ``document`` without suspending.

        :param JSONValue document: a decoded JSON:API document.
        :return: a record, a list of records, or :py:const:`None` for a null primary data.
        :raises DeserializationError: if the document is structurally malformed.
        :raises AsynchronousResolverError: if a ``value_for_relationship`` hook returns an awaitable.
        """
        return run_immediately(self._perform(document, immediate=True))

    def __init__(
        self,
        config: typing.Union[DeserializerConfig, typing.Mapping[str, typing.Any], None] = None,
    ):
        if config is None:
            config = DeserializerConfig()
        elif not isinstance(config, DeserializerConfig):
            config = DeserializerConfig.from_mapping(config)
        self.config = config
        self._formatter = KeyFormatter(config.key_for_attribute)
        self._reader = DocumentReader()
