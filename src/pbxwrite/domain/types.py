"""Value types used inside object records.

``DstSubfolderSpec`` carries the numeric codes the project format expects
rather than symbolic names. ``Setting`` is the union of per-file build
setting shapes; only the list form exists today.
"""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Any, TypeAlias, Union

from pydantic import Field, model_validator

from pbxwrite.domain.model import PlistModel

if TYPE_CHECKING:
    from pbxwrite.encoding.serializer import Serializer


class DstSubfolderSpec(IntEnum):
    """Copy-files destination, encoded as its integer code."""

    WRAPPER = 1
    EXECUTABLES = 6
    RESOURCES = 7
    FRAMEWORKS = 10
    SHARED_FRAMEWORKS = 11
    SHARED_SUPPORT = 12
    PLUGINS = 13


class ListSetting(PlistModel):
    """A setting whose value is a list of strings, e.g. ``ATTRIBUTES``.

    Encoded untagged: the plist shows only the sequence.
    """

    values: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _wrap_bare_list(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            return {"values": list(data)}
        return data

    def serialize(self, serializer: Serializer) -> None:
        with serializer.serialize_seq(len(self.values)) as seq:
            for item in self.values:
                seq.element(item)


# New setting shapes join this union; the encoding of existing ones is fixed.
Setting: TypeAlias = Union[ListSetting]  # noqa: UP007
