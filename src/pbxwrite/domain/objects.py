"""Project object kinds.

Each kind is a frozen record keyed by ``isa`` in the project file. The
tag is the class name, so the Python class and the external kind never
drift apart.

Reference fields hold :class:`ObjectID` values; nothing here checks that
a referenced object exists (see ``pbxwrite.services.check``).
"""

from __future__ import annotations

from typing import TypeAlias

from pydantic import Field

from pbxwrite.domain.ids import ObjectID
from pbxwrite.domain.model import PlistModel
from pbxwrite.domain.types import DstSubfolderSpec, Setting


class PBXObject(PlistModel):
    """Base for every object stored in ``Project.objects``."""

    def plist_tag(self) -> str:
        return type(self).__name__

    def references(self) -> list[tuple[str, ObjectID]]:
        """Every ``(external_field_name, ObjectID)`` this object points at."""
        refs: list[tuple[str, ObjectID]] = []
        for name, value in self.plist_fields():
            if isinstance(value, ObjectID):
                refs.append((name, value))
            elif isinstance(value, list):
                refs.extend((name, item) for item in value if isinstance(item, ObjectID))
        return refs


# --- Files ---


class PBXFileReference(PBXObject):
    path: str
    explicit_file_type: str
    source_tree: str


class PBXBuildFile(PBXObject):
    file_ref: ObjectID
    settings: dict[str, Setting] = Field(default_factory=dict)


# --- Project structure ---


class PBXProject(PBXObject):
    build_configuration_list: ObjectID
    targets: list[ObjectID] = Field(default_factory=list)


class PBXNativeTarget(PBXObject):
    name: str
    product_name: str
    product_reference: ObjectID
    product_type: str
    build_configuration_list: ObjectID
    build_phases: list[ObjectID] = Field(default_factory=list)
    build_rules: list[ObjectID] = Field(default_factory=list)
    dependencies: list[ObjectID] = Field(default_factory=list)


class XCBuildConfiguration(PBXObject):
    name: str
    build_settings: dict[str, str] = Field(default_factory=dict)


class XCConfigurationList(PBXObject):
    build_configurations: list[ObjectID] = Field(default_factory=list)


# --- Build phases ---


class PBXSourcesBuildPhase(PBXObject):
    files: list[ObjectID] = Field(default_factory=list)


class PBXFrameworksBuildPhase(PBXObject):
    files: list[ObjectID] = Field(default_factory=list)


class PBXShellScriptBuildPhase(PBXObject):
    shell_path: str
    shell_script: str


class PBXCopyFilesBuildPhase(PBXObject):
    files: list[ObjectID] = Field(default_factory=list)
    dst_path: str
    dst_subfolder_spec: DstSubfolderSpec


class PBXResourcesBuildPhase(PBXObject):
    files: list[ObjectID] = Field(default_factory=list)


Object: TypeAlias = (
    PBXFileReference
    | PBXBuildFile
    | PBXProject
    | PBXNativeTarget
    | XCBuildConfiguration
    | XCConfigurationList
    | PBXSourcesBuildPhase
    | PBXFrameworksBuildPhase
    | PBXShellScriptBuildPhase
    | PBXCopyFilesBuildPhase
    | PBXResourcesBuildPhase
)
