from __future__ import annotations

from pathlib import Path

from huecast.core.hooks import run_hook_script


def _script(tmp_path: Path, body: str, mode: int = 0o755) -> Path:
    path = tmp_path / "hook.sh"
    path.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
    path.chmod(mode)
    return path


def test_hook_receives_theme_name(tmp_path: Path) -> None:
    out = tmp_path / "out.txt"
    script = _script(tmp_path, f'echo "$1" > "{out}"')
    messages: list[str] = []

    assert run_hook_script(script, "tokyo-night", messages.append) is True
    assert out.read_text(encoding="utf-8").strip() == "tokyo-night"
    assert messages == ["Hook script executed"]


def test_missing_hook_fails(tmp_path: Path) -> None:
    messages: list[str] = []
    assert run_hook_script(tmp_path / "missing.sh", "x", messages.append) is False
    assert messages == ["Hook script failed: not found"]


def test_non_executable_hook_fails(tmp_path: Path) -> None:
    script = _script(tmp_path, "exit 0", mode=0o644)
    assert run_hook_script(script, "x") is False


def test_non_zero_exit_fails(tmp_path: Path) -> None:
    script = _script(tmp_path, "exit 3")
    messages: list[str] = []
    assert run_hook_script(script, "x", messages.append) is False
    assert messages == ["Hook script failed: exit 3"]
