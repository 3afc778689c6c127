"""RenderService — encode a value and report the outcome as a ServiceResult.

Projects are checked first; integrity issues ride along on the result
and never block rendering.
"""

from __future__ import annotations

import logging
from typing import Any

from pbxwrite.config.models import EncodeOptions
from pbxwrite.config.settings import PbxSettings
from pbxwrite.domain.project import Project
from pbxwrite.encoding.errors import EncodeError
from pbxwrite.encoding.serializer import encode
from pbxwrite.services.check import CheckService
from pbxwrite.services.result import ENCODE_FAILED, Issue, ServiceError, ServiceResult
from pbxwrite.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


class RenderService:
    """Turns object graphs into plist text."""

    def __init__(self, options: EncodeOptions | None = None) -> None:
        self._options = options or EncodeOptions()

    @classmethod
    def from_settings(cls, settings: PbxSettings) -> RenderService:
        return cls(settings.encode)

    @traced
    def render(self, value: Any) -> ServiceResult:
        """Encode *value*. ``data["text"]`` holds the output on success."""
        issues: list[Issue] = []
        if isinstance(value, Project):
            issues = CheckService().check(value).issues

        with trace_span("encode") as span:
            try:
                text = encode(value, options=self._options)
            except EncodeError as exc:
                logger.warning("Render of %s failed: %s", type(value).__name__, exc.message)
                error = ServiceError(
                    code=ENCODE_FAILED,
                    message=exc.message,
                    value_type=type(value).__name__,
                )
                return ServiceResult.failure("render", error, issues=issues)
            if span is not None:
                span.annotate("chars", len(text))

        return ServiceResult.success("render", {"text": text, "length": len(text)}, issues=issues)
