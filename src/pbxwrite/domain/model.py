"""PlistModel — pydantic base that serializes as a tagged struct.

Fields are written in declaration order under their camelCase alias
(``explicit_file_type`` -> ``explicitFileType``). A subclass that returns
a tag from :meth:`PlistModel.plist_tag` gets an ``isa`` entry first.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from pbxwrite.encoding.contract import Serializable

if TYPE_CHECKING:
    from pbxwrite.encoding.serializer import Serializer

TAG_FIELD = "isa"


class PlistModel(BaseModel, Serializable):
    """Frozen record whose plist form is a struct of its fields."""

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    def plist_tag(self) -> str | None:
        return None

    def plist_fields(self) -> list[tuple[str, Any]]:
        """``(external_name, value)`` pairs in declaration order."""
        return [
            (info.alias or name, getattr(self, name))
            for name, info in type(self).model_fields.items()
        ]

    def serialize(self, serializer: Serializer) -> None:
        tag = self.plist_tag()
        fields = self.plist_fields()
        length = len(fields) + (1 if tag is not None else 0)
        with serializer.serialize_struct(type(self).__name__, length) as struct:
            if tag is not None:
                struct.field(TAG_FIELD, tag)
            for name, value in fields:
                struct.field(name, value)
