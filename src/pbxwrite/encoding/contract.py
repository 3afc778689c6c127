"""Value model contract between domain types and the serializer.

A type describes itself to the engine by implementing
:class:`Serializable`. ``serialize`` calls exactly one of the
``Serializer.serialize_*`` methods (or opens one compound writer) and
never writes text itself.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pbxwrite.encoding.serializer import Serializer


class Serializable(ABC):
    """Anything that can describe itself to a :class:`Serializer`.

    Usage::

        class Point(Serializable):
            def serialize(self, serializer: Serializer) -> None:
                with serializer.serialize_struct("Point", 2) as s:
                    s.field("x", self.x)
                    s.field("y", self.y)
    """

    __slots__ = ()

    @abstractmethod
    def serialize(self, serializer: Serializer) -> None:
        """Describe this value by calling into *serializer*."""
