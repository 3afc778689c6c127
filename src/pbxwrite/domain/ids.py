"""Object identifiers.

IDs are positional: the Nth object added to a project gets ``ObjectID(N)``
counting from zero.

INVARIANT: IDs are permanent. Once assigned, an ID never changes and is
never reused within its project.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pbxwrite.encoding.contract import Serializable

if TYPE_CHECKING:
    from pbxwrite.encoding.serializer import Serializer


@dataclass(frozen=True, order=True)
class ObjectID(Serializable):
    """Opaque handle for one object in a project; encodes as its integer."""

    value: int

    def __post_init__(self) -> None:
        # bool is an int subclass but would encode as true/false
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            msg = f"ObjectID value must be an int, got {type(self.value).__name__}"
            raise TypeError(msg)

    def __int__(self) -> int:
        return self.value

    def serialize(self, serializer: Serializer) -> None:
        serializer.serialize_newtype_struct("ObjectID", self.value)
