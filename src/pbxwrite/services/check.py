"""CheckService — reference integrity for a project graph.

The encoder never validates; this pass is run separately, before
rendering, when the caller wants it. Two categories: root object and
object references. Nothing is modified.
"""

from __future__ import annotations

import logging

from pbxwrite.domain.objects import PBXProject
from pbxwrite.domain.project import Project
from pbxwrite.services.result import Issue, ServiceResult
from pbxwrite.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Issue severity and category constants
# ---------------------------------------------------------------------------

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"

CAT_ROOT = "root_object"
CAT_REFERENCES = "references"


class CheckService:
    """Reports dangling IDs and a missing or misplaced root object."""

    @traced
    def check(self, project: Project) -> ServiceResult:
        """Report integrity issues without modifying anything."""
        issues: list[Issue] = []
        with trace_span("root_object"):
            issues.extend(self._check_root(project))
        with trace_span("references"):
            issues.extend(self._check_references(project))

        errors = sum(1 for i in issues if i.severity == SEVERITY_ERROR)
        logger.debug("Check found %d issues (%d errors)", len(issues), errors)
        return ServiceResult.success(
            "check", {"count": len(issues), "errors": errors}, issues=issues
        )

    def _check_root(self, project: Project) -> list[Issue]:
        root = project.root_object
        if root is None:
            return [
                Issue(category=CAT_ROOT, severity=SEVERITY_WARNING, message="No root object set")
            ]

        target = project.get(root)
        if target is None:
            return [
                Issue(
                    category=CAT_ROOT,
                    severity=SEVERITY_ERROR,
                    object_id=root.value,
                    message=f"Root object {root.value} is not in the object table",
                )
            ]
        if not isinstance(target, PBXProject):
            return [
                Issue(
                    category=CAT_ROOT,
                    severity=SEVERITY_WARNING,
                    object_id=root.value,
                    message=(
                        f"Root object {root.value} is {target.plist_tag()}, expected PBXProject"
                    ),
                )
            ]
        return []

    def _check_references(self, project: Project) -> list[Issue]:
        issues: list[Issue] = []
        for object_id, obj in project:
            for field_name, target in obj.references():
                if target in project:
                    continue
                issues.append(
                    Issue(
                        category=CAT_REFERENCES,
                        severity=SEVERITY_ERROR,
                        object_id=object_id.value,
                        field=field_name,
                        target_id=target.value,
                        message=(
                            f"{obj.plist_tag()} {object_id.value} references missing "
                            f"object {target.value} via {field_name}"
                        ),
                    )
                )
        return issues
