"""Exception hierarchy for reqnorm.

Every error carries a stable code (``REQ-xxxx``, ``CODEC-xxxx``,
``BODY-xxxx``), a category and a context dict so that hosts can log or
serialize them without string parsing.

Only body decoding failures are meant to escape a request: lookup misses
(unknown content type, no decoder for a format, nothing negotiated) are
handled inside the filter and never raised.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

BODY_SNIPPET_LENGTH = 100


class NormalizerError(Exception):
    """Base class for all reqnorm errors."""

    code = "REQ-0000"
    category = "general"

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ):
        self.message = message
        self.context = context or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc)
        super().__init__(message)

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.context:
            details = ", ".join(f"{k}={v}" for k, v in self.context.items())
            result = f"{result} ({details})"
        return result

    def to_dict(self) -> dict[str, Any]:
        return {
            "error_code": self.code,
            "error_category": self.category,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "cause": str(self.cause) if self.cause is not None else None,
        }


# ============================================================================
# Configuration errors
# ============================================================================


class ConfigurationError(NormalizerError):
    code = "REQ-0001"
    category = "configuration"


class ConfigFileNotFoundError(ConfigurationError):
    code = "REQ-0002"

    def __init__(self, file_path: str, cause: BaseException | None = None):
        super().__init__(
            f"Configuration file not found: {file_path}",
            context={"file_path": file_path},
            cause=cause,
        )


class ConfigValidationError(ConfigurationError):
    code = "REQ-0003"

    def __init__(
        self,
        message: str,
        errors: list[str] | None = None,
        field: str | None = None,
    ):
        context: dict[str, Any] = {"errors": errors or []}
        if field is not None:
            context["field"] = field
        super().__init__(message, context=context)


class EnvironmentVariableError(ConfigurationError):
    code = "REQ-0004"

    def __init__(self, variable: str):
        super().__init__(
            f"Required environment variable not set: {variable}",
            context={"variable": variable},
        )


# ============================================================================
# Codec errors
# ============================================================================


class CodecError(NormalizerError):
    code = "CODEC-1000"
    category = "codec"


class CodecNotFoundError(CodecError):
    """A codec locator could not be resolved to a factory."""

    code = "CODEC-1001"

    def __init__(
        self,
        locator: str,
        format: str | None = None,
        cause: BaseException | None = None,
    ):
        context: dict[str, Any] = {"locator": locator}
        if format is not None:
            context["format"] = format
        super().__init__(f"Unknown codec: {locator}", context=context, cause=cause)


# ============================================================================
# Body decoding errors
# ============================================================================


class BodyDecodeError(NormalizerError):
    """The request body is malformed for its declared format.

    This is a client error: hosts should answer with ``status_code``.
    """

    code = "BODY-2000"
    category = "body_decoding"
    status_code = 400

    def __init__(
        self,
        message: str,
        format: str | None = None,
        content_type: str | None = None,
        body_snippet: str | bytes | None = None,
        cause: BaseException | None = None,
    ):
        context: dict[str, Any] = {}
        if format is not None:
            context["format"] = format
        if content_type is not None:
            context["content_type"] = content_type
        if body_snippet is not None:
            if isinstance(body_snippet, bytes):
                body_snippet = body_snippet.decode("utf-8", errors="replace")
            context["body_snippet"] = body_snippet[:BODY_SNIPPET_LENGTH]
        super().__init__(message, context=context, cause=cause)


class InvalidJSONError(BodyDecodeError):
    code = "BODY-2001"


class InvalidXMLError(BodyDecodeError):
    code = "BODY-2002"
