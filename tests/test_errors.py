from __future__ import annotations

from pathlib import Path

from huecast.errors import (
    ERROR_MESSAGES,
    CommitError,
    ErrorCode,
    HuecastError,
    ResolutionError,
    classify_exception,
    format_error_for_user,
)


def test_every_code_has_a_message() -> None:
    assert set(ERROR_MESSAGES) == set(ErrorCode)


def test_default_message_filled_from_code() -> None:
    error = ResolutionError(ErrorCode.THEME_NOT_FOUND)
    assert error.message == ERROR_MESSAGES[ErrorCode.THEME_NOT_FOUND]
    assert isinstance(error, HuecastError)


def test_str_includes_path_and_details() -> None:
    error = CommitError(ErrorCode.SYMLINK_FAILED, message="boom", path=Path("/x/current"), details={"target": "/t"})
    text = str(error)
    assert "boom" in text
    assert "/x/current" in text
    assert "target=/t" in text


def test_to_dict() -> None:
    data = HuecastError(ErrorCode.HOOK_FAILED, path=Path("/h.sh")).to_dict()
    assert data["code"] == "HOOK_FAILED"
    assert data["path"] == "/h.sh"


def test_classify_os_errors() -> None:
    assert classify_exception(FileNotFoundError("gone")).code is ErrorCode.FILE_NOT_FOUND
    assert classify_exception(PermissionError("no")).code is ErrorCode.FILE_ACCESS_DENIED
    assert classify_exception(OSError("No space left on device")).code is ErrorCode.DISK_FULL
    assert classify_exception(RuntimeError("weird")).code is ErrorCode.OPERATION_FAILED


def test_classify_passes_through_huecast_errors() -> None:
    error = ResolutionError(ErrorCode.THEME_NOT_FOUND)
    assert classify_exception(error) is error


def test_format_for_user_shows_file_name() -> None:
    error = ResolutionError(
        ErrorCode.WALLPAPER_NOT_FOUND,
        message="Wallpaper not found",
        path=Path("/pics/beach.png"),
    )
    text = format_error_for_user(error)
    assert text.startswith("Wallpaper not found")
    assert "File: beach.png" in text
