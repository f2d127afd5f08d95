import logging
from collections import OrderedDict

from .serde.builders import DocumentBuilder, ResourceReprBuilder

logger = logging.getLogger(__name__)


class IncludedSet:
    """
    Keeps at most one entry of ``included`` per resource identity
    (``type:id``) during a single serialize call.

    A resource that is met again is merged into the entry pushed first, so that
    it accumulates the attributes and relationships observed through every
    path that reaches it.
    """

    _document: DocumentBuilder
    _entries: "OrderedDict[str, ResourceReprBuilder]"

    def upsert(self, builder: ResourceReprBuilder) -> ResourceReprBuilder:
        """
        Appends ``builder`` to the document's ``included`` unless a resource
        with the same identity is already there, in which case ``builder`` is
        merged into the existing entry.

        :param ResourceReprBuilder builder: a builder of the included resource.
        :return: the builder that represents the resource in ``included``.
        """
        identity = builder.identity
        existing = self._entries.get(identity)
        if existing is None:
            self._entries[identity] = builder
            self._document.add_included(builder)
            return builder
        logger.debug("merging repeated resource %s into included", identity)
        existing.merge(builder)
        return existing

    def __init__(self, document: DocumentBuilder):
        self._document = document
        self._entries = OrderedDict()
