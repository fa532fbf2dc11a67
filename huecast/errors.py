"""Error codes and error handling utilities for Huecast."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for Huecast operations."""

    # Resolution errors
    THEME_NOT_FOUND = auto()
    WALLPAPER_NOT_FOUND = auto()
    THEME_INVALID = auto()

    # Adapter errors
    ADAPTER_GENERATE_FAILED = auto()
    ADAPTER_NOTIFY_FAILED = auto()
    ADAPTER_DUPLICATE = auto()
    HOOK_FAILED = auto()

    # Wallpaper errors
    WALLPAPER_APPLY_FAILED = auto()

    # Commit errors
    SYMLINK_FAILED = auto()
    STATE_WRITE_FAILED = auto()

    # File system errors
    FILE_NOT_FOUND = auto()
    FILE_ACCESS_DENIED = auto()
    DISK_FULL = auto()

    # Operation errors
    OPERATION_CANCELLED = auto()
    OPERATION_FAILED = auto()

    # Configuration errors
    CONFIG_INVALID = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.THEME_NOT_FOUND: "The theme was not found in the bundled or custom theme folders.",
    ErrorCode.WALLPAPER_NOT_FOUND: "The wallpaper file was not found. It may have been moved or deleted.",
    ErrorCode.THEME_INVALID: "The theme folder is invalid. Check its theme.json file.",

    ErrorCode.ADAPTER_GENERATE_FAILED: "Could not generate the app configuration for this theme.",
    ErrorCode.ADAPTER_NOTIFY_FAILED: "The app could not be told to reload its theme.",
    ErrorCode.ADAPTER_DUPLICATE: "Two app adapters were registered with the same name.",
    ErrorCode.HOOK_FAILED: "The hook script failed. Check that it exists and is executable.",

    ErrorCode.WALLPAPER_APPLY_FAILED: "The wallpaper could not be applied with any available method.",

    ErrorCode.SYMLINK_FAILED: "Could not switch the current theme link. Check folder permissions.",
    ErrorCode.STATE_WRITE_FAILED: "The theme was switched but the saved state could not be updated.",

    ErrorCode.FILE_NOT_FOUND: "The file was not found. It may have been moved or deleted.",
    ErrorCode.FILE_ACCESS_DENIED: "Access denied. Check file permissions or if the file is read-only.",
    ErrorCode.DISK_FULL: "The destination disk is full. Free up space and try again.",

    ErrorCode.OPERATION_CANCELLED: "Operation was cancelled by user.",
    ErrorCode.OPERATION_FAILED: "Operation failed. See details for more information.",

    ErrorCode.CONFIG_INVALID: "Configuration is invalid. Reset to defaults?",
}


@dataclass
class HuecastError(Exception):
    """Base exception for Huecast with error code and context."""

    code: ErrorCode
    message: str = ""
    path: Path | None = None
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")
        if not self.suggestion and self.code in ERROR_MESSAGES:
            self.suggestion = ERROR_MESSAGES[self.code]

    def __str__(self) -> str:
        parts = [self.message]
        if self.path:
            parts.append(f"\nFile: {self.path}")
        if self.details:
            details_str = " | ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"\nDetails: {details_str}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging or UI display."""
        return {
            "code": self.code.name,
            "message": self.message,
            "path": str(self.path) if self.path else None,
            "details": self.details,
            "suggestion": self.suggestion,
        }


class ResolutionError(HuecastError):
    """A theme or wallpaper could not be located. Nothing was changed."""


class AdapterError(HuecastError):
    """Generation or notification failed for a single app."""


class WallpaperError(HuecastError):
    """Every attempted wallpaper strategy failed."""


class CommitError(HuecastError):
    """The current-theme link or the saved state could not be written."""


class RegistrationError(HuecastError):
    """Adapter registry misconfiguration detected at startup."""


def classify_exception(exc: Exception, path: Path | None = None) -> HuecastError:
    """Classify a generic exception into a HuecastError with appropriate code."""
    if isinstance(exc, HuecastError):
        return exc

    exc_str = str(exc).lower()

    if isinstance(exc, FileNotFoundError) or "no such file" in exc_str:
        return HuecastError(ErrorCode.FILE_NOT_FOUND, path=path, details={"original": exc_str})
    if isinstance(exc, PermissionError) or "permission denied" in exc_str:
        return HuecastError(ErrorCode.FILE_ACCESS_DENIED, path=path, details={"original": exc_str})
    if "disk full" in exc_str or "no space left" in exc_str:
        return HuecastError(ErrorCode.DISK_FULL, path=path, details={"original": exc_str})

    return HuecastError(
        ErrorCode.OPERATION_FAILED,
        message=f"{type(exc).__name__}: {exc}",
        path=path,
        details={"original": exc_str},
    )


def format_error_for_user(error: HuecastError | Exception) -> str:
    """Format an error for display to the user with actionable suggestions."""
    if isinstance(error, HuecastError):
        parts = [error.message]
        if error.suggestion and error.suggestion != error.message:
            parts.append(f"\n\n{error.suggestion}")
        if error.path:
            parts.append(f"\n\nFile: {error.path.name}")
        return "".join(parts)

    classified = classify_exception(error)
    return format_error_for_user(classified)
