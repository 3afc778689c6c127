"""pbxwrite — encode build-project object graphs as ASCII property lists."""

from pbxwrite.config.models import EncodeOptions
from pbxwrite.domain.ids import ObjectID
from pbxwrite.domain.model import PlistModel
from pbxwrite.domain.objects import (
    Object,
    PBXBuildFile,
    PBXCopyFilesBuildPhase,
    PBXFileReference,
    PBXFrameworksBuildPhase,
    PBXNativeTarget,
    PBXObject,
    PBXProject,
    PBXResourcesBuildPhase,
    PBXShellScriptBuildPhase,
    PBXSourcesBuildPhase,
    XCBuildConfiguration,
    XCConfigurationList,
)
from pbxwrite.domain.project import Project, build_settings
from pbxwrite.domain.types import DstSubfolderSpec, ListSetting, Setting
from pbxwrite.encoding import EncodeError, Serializable, Serializer, encode

__version__ = "0.1.0"

__all__ = [
    "DstSubfolderSpec",
    "EncodeError",
    "EncodeOptions",
    "ListSetting",
    "Object",
    "ObjectID",
    "PBXBuildFile",
    "PBXCopyFilesBuildPhase",
    "PBXFileReference",
    "PBXFrameworksBuildPhase",
    "PBXNativeTarget",
    "PBXObject",
    "PBXProject",
    "PBXResourcesBuildPhase",
    "PBXShellScriptBuildPhase",
    "PBXSourcesBuildPhase",
    "PlistModel",
    "Project",
    "Serializable",
    "Serializer",
    "Setting",
    "XCBuildConfiguration",
    "XCConfigurationList",
    "build_settings",
    "encode",
]
