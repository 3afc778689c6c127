"""Shared pytest fixtures for pbxwrite tests."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from pbxwrite.domain.objects import (
    PBXBuildFile,
    PBXCopyFilesBuildPhase,
    PBXFileReference,
    PBXFrameworksBuildPhase,
    PBXNativeTarget,
    PBXProject,
    PBXResourcesBuildPhase,
    PBXShellScriptBuildPhase,
    PBXSourcesBuildPhase,
    XCBuildConfiguration,
    XCConfigurationList,
)
from pbxwrite.domain.project import Project, build_settings
from pbxwrite.domain.types import DstSubfolderSpec, ListSetting
from pbxwrite.services.telemetry import disable_telemetry


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's PBXWRITE_* environment out of the tests."""
    for var in ("PBXWRITE_CONFIG", "PBXWRITE_VERBOSE", "PBXWRITE_LOG_JSON"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def _reset_telemetry() -> Generator[None]:
    yield
    disable_telemetry()


@pytest.fixture
def app_project() -> Project:
    """A small but complete app target using every object kind."""
    project = Project.default()

    main_swift = project.add_object(
        PBXFileReference(
            path="main.swift",
            explicit_file_type="sourcecode.swift",
            source_tree="<group>",
        )
    )
    framework = project.add_object(
        PBXFileReference(
            path="Kit.framework",
            explicit_file_type="wrapper.framework",
            source_tree="BUILT_PRODUCTS_DIR",
        )
    )
    app = project.add_object(
        PBXFileReference(
            path="Demo.app",
            explicit_file_type="wrapper.application",
            source_tree="BUILT_PRODUCTS_DIR",
        )
    )
    main_build = project.add_object(PBXBuildFile(file_ref=main_swift))
    framework_build = project.add_object(
        PBXBuildFile(
            file_ref=framework,
            settings={"ATTRIBUTES": ListSetting(values=["CodeSignOnCopy"])},
        )
    )

    sources = project.add_object(PBXSourcesBuildPhase(files=[main_build]))
    frameworks = project.add_object(PBXFrameworksBuildPhase(files=[framework_build]))
    embed = project.add_object(
        PBXCopyFilesBuildPhase(
            files=[framework_build],
            dst_path="",
            dst_subfolder_spec=DstSubfolderSpec.FRAMEWORKS,
        )
    )
    resources = project.add_object(PBXResourcesBuildPhase())
    script = project.add_object(
        PBXShellScriptBuildPhase(shell_path="/bin/sh", shell_script="echo done")
    )

    debug = project.add_object(
        XCBuildConfiguration(
            name="Debug",
            build_settings=build_settings([("SWIFT_VERSION", "5.0"), ("SDKROOT", "macosx")]),
        )
    )
    target_configs = project.add_object(XCConfigurationList(build_configurations=[debug]))
    target = project.add_object(
        PBXNativeTarget(
            name="Demo",
            product_name="Demo",
            product_reference=app,
            product_type="com.apple.product-type.application",
            build_configuration_list=target_configs,
            build_phases=[sources, frameworks, embed, resources, script],
        )
    )
    project_configs = project.add_object(XCConfigurationList(build_configurations=[debug]))
    root = project.add_object(
        PBXProject(build_configuration_list=project_configs, targets=[target])
    )
    project.set_root_object(root)
    return project
