"""Project — the aggregate root written to ``project.pbxproj``.

A project is built incrementally: every ``add_object`` call stores the
object and mints its ID in one step. It is then encoded once.

INVARIANT: ``objects`` iterates in insertion order, which is also ID order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING

from pbxwrite.domain.ids import ObjectID
from pbxwrite.domain.objects import PBXObject
from pbxwrite.encoding.contract import Serializable

if TYPE_CHECKING:
    from pbxwrite.config.settings import PbxSettings
    from pbxwrite.encoding.serializer import Serializer

logger = logging.getLogger(__name__)

DEFAULT_ARCHIVE_VERSION = 1
DEFAULT_OBJECT_VERSION = 55


class Project(Serializable):
    """Archive/object versions, the object table, and the root object.

    Not synchronized: build it from a single writer, then encode.
    """

    def __init__(
        self,
        archive_version: int = DEFAULT_ARCHIVE_VERSION,
        object_version: int = DEFAULT_OBJECT_VERSION,
    ) -> None:
        self.archive_version = archive_version
        self.object_version = object_version
        self._objects: dict[ObjectID, PBXObject] = {}
        self._root_object: ObjectID | None = None

    @classmethod
    def default(cls) -> Project:
        return cls(DEFAULT_ARCHIVE_VERSION, DEFAULT_OBJECT_VERSION)

    @classmethod
    def from_settings(cls, settings: PbxSettings) -> Project:
        """New empty project stamped with the configured versions."""
        return cls(settings.project.archive_version, settings.project.object_version)

    @property
    def objects(self) -> Mapping[ObjectID, PBXObject]:
        return self._objects

    @property
    def root_object(self) -> ObjectID | None:
        return self._root_object

    def add_object(self, obj: PBXObject) -> ObjectID:
        """Store *obj* and return its newly assigned ID."""
        object_id = ObjectID(len(self._objects))
        self._objects[object_id] = obj
        logger.debug("Added %s as object %d", obj.plist_tag(), object_id.value)
        return object_id

    def set_root_object(self, object_id: ObjectID) -> None:
        """Point ``rootObject`` at *object_id*, replacing any previous root.

        Membership is not checked here; run ``CheckService`` for that.
        """
        self._root_object = object_id

    def get(self, object_id: ObjectID) -> PBXObject | None:
        return self._objects.get(object_id)

    def __len__(self) -> int:
        return len(self._objects)

    def __contains__(self, object_id: object) -> bool:
        return object_id in self._objects

    def __iter__(self) -> Iterator[tuple[ObjectID, PBXObject]]:
        return iter(self._objects.items())

    def serialize(self, serializer: Serializer) -> None:
        with serializer.serialize_struct("PBXProject", 4) as struct:
            struct.field("archiveVersion", self.archive_version)
            struct.field("objectVersion", self.object_version)
            struct.field("objects", self._objects)
            struct.field("rootObject", self._root_object)


def build_settings(
    pairs: Iterable[tuple[str, str]] | Mapping[str, str],
) -> dict[str, str]:
    """Ordered build-setting dict from an association list.

    Usage::

        build_settings([("SWIFT_VERSION", "5.0"), ("SDKROOT", "macosx")])
    """
    items = pairs.items() if isinstance(pairs, Mapping) else pairs
    return {key: value for key, value in items}
