from __future__ import annotations
from enum import Enum
from typing import Optional


class ValidationError(ValueError):
    """Input rejected before any correction is attempted."""

    @property
    def message(self) -> str:
        return str(self)


class RemoteErrorKind(str, Enum):
    TIMEOUT = "timeout"
    SERVICE_UNAVAILABLE = "service_unavailable"
    UNREACHABLE = "unreachable"


REMOTE_ERROR_MESSAGES = {
    RemoteErrorKind.TIMEOUT: "LanguageTool service is taking too long to respond. Please try again.",
    RemoteErrorKind.SERVICE_UNAVAILABLE: "LanguageTool service is currently unavailable. Please try again later.",
    RemoteErrorKind.UNREACHABLE: "Unable to connect to grammar service. Using basic corrections instead.",
}


class RemoteError(Exception):
    """The remote checker could not produce a usable result."""

    def __init__(self, kind: RemoteErrorKind, detail: Optional[str] = None):
        self.kind = kind
        self.detail = detail
        super().__init__(self.message)

    @property
    def message(self) -> str:
        return REMOTE_ERROR_MESSAGES[self.kind]

    def __repr__(self) -> str:
        return f"RemoteError(kind={self.kind.value!r}, detail={self.detail!r})"
