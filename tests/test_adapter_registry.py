"""Tests for the adapter contract and registry."""

from __future__ import annotations

from pathlib import Path

import pytest

from conftest import make_adapter, static_generator
from huecast.apps.adapter import (
    Capability,
    content_has_integration,
    has_integration_markers,
    resolve_config_path,
)
from huecast.apps.registry import AdapterRegistry
from huecast.errors import ErrorCode, RegistrationError


class TestAdapterContract:
    """Identity validation and capability queries."""

    def test_name_must_be_lowercase(self):
        with pytest.raises(ValueError):
            make_adapter("WezTerm")

    def test_name_must_not_be_empty(self):
        with pytest.raises(ValueError):
            make_adapter("")

    def test_install_paths_required(self):
        with pytest.raises(ValueError):
            make_adapter("bare", install_paths=())

    def test_capabilities_reflect_filled_callables(self):
        adapter = make_adapter("gen", generate=static_generator("gen.conf"))
        assert adapter.supports(Capability.GENERATE)
        assert not adapter.supports(Capability.NOTIFY)
        assert adapter.capabilities == frozenset({Capability.GENERATE})

    def test_is_installed_any_path(self, tmp_path: Path):
        present = tmp_path / "App.app"
        present.mkdir()
        adapter = make_adapter("app", install_paths=(tmp_path / "missing", present))
        assert adapter.is_installed()


class TestConfigPathResolution:
    """First existing candidate wins, else the first candidate, else the primary path."""

    def test_only_second_candidate_exists(self, tmp_path: Path):
        first, second = tmp_path / "a.toml", tmp_path / "b.toml"
        second.write_text("", encoding="utf-8")
        adapter = make_adapter("app", config_path=tmp_path / "primary", config_paths=(first, second))
        assert resolve_config_path(adapter) == second

    def test_no_candidate_exists(self, tmp_path: Path):
        first, second = tmp_path / "a.toml", tmp_path / "b.toml"
        adapter = make_adapter("app", config_path=tmp_path / "primary", config_paths=(first, second))
        assert resolve_config_path(adapter) == first

    def test_both_exist_prefers_first(self, tmp_path: Path):
        first, second = tmp_path / "a.toml", tmp_path / "b.toml"
        first.write_text("", encoding="utf-8")
        second.write_text("", encoding="utf-8")
        adapter = make_adapter("app", config_paths=(first, second))
        assert adapter.resolve_config_path() == first

    def test_no_candidates_uses_primary(self, tmp_path: Path):
        adapter = make_adapter("app", config_path=tmp_path / "primary")
        assert resolve_config_path(adapter) == tmp_path / "primary"


class TestIntegrationDetection:
    """Default marker search and detector error handling."""

    def test_markers_case_insensitive(self):
        assert content_has_integration('dofile("~/Library/Application Support/HUECAST/x")')
        assert content_has_integration("local p = 'wezterm-colors.lua'")
        assert not content_has_integration("return {}")

    def test_missing_file_is_not_integrated(self, tmp_path: Path):
        assert has_integration_markers(tmp_path / "missing.lua") is False

    def test_directory_is_not_integrated(self, tmp_path: Path):
        assert has_integration_markers(tmp_path) is False

    def test_default_detector_reads_config(self, tmp_path: Path):
        config = tmp_path / "wezterm.lua"
        config.write_text("-- Huecast WezTerm integration\n", encoding="utf-8")
        adapter = make_adapter("app", config_path=config)
        assert adapter.check_integration() is True

    def test_raising_detector_counts_as_not_integrated(self, tmp_path: Path):
        def explode(path: Path) -> bool:
            raise PermissionError("denied")

        adapter = make_adapter("app", detect=explode, config_path=tmp_path / "x")
        assert adapter.check_integration() is False


class TestAdapterRegistry:
    """Registration, lookup and capability filtering."""

    def test_get_is_case_insensitive(self):
        registry = AdapterRegistry([make_adapter("wezterm")])
        assert registry.get("WezTerm") is not None
        assert "WEZTERM" in registry
        assert registry.get("missing") is None

    def test_all_keeps_insertion_order(self):
        registry = AdapterRegistry([make_adapter("zeta"), make_adapter("alpha"), make_adapter("mid")])
        assert [adapter.name for adapter in registry.all()] == ["zeta", "alpha", "mid"]
        assert registry.names() == ["zeta", "alpha", "mid"]
        assert len(registry) == 3

    def test_duplicate_registration_fails_without_mutation(self):
        original = make_adapter("wezterm", generate=static_generator("a.lua"))
        registry = AdapterRegistry([original])
        duplicate = make_adapter("wezterm")

        with pytest.raises(RegistrationError) as excinfo:
            registry.register(duplicate)

        assert excinfo.value.code is ErrorCode.ADAPTER_DUPLICATE
        assert registry.get("wezterm") is original
        assert len(registry) == 1

    def test_frozen_registry_rejects_registration(self):
        registry = AdapterRegistry([make_adapter("one")]).freeze()
        assert registry.frozen
        with pytest.raises(RegistrationError):
            registry.register(make_adapter("two"))
        assert registry.names() == ["one"]

    def test_all_with_capability(self):
        registry = AdapterRegistry(
            [
                make_adapter("gen", generate=static_generator("g")),
                make_adapter("both", generate=static_generator("b"), notify=lambda d, log=None: True),
                make_adapter("plain"),
            ]
        )
        assert [a.name for a in registry.all_with_capability(Capability.GENERATE)] == ["gen", "both"]
        assert [a.name for a in registry.all_with_capability(Capability.NOTIFY)] == ["both"]
        assert registry.all_with_capability(Capability.DETECT) == []

    def test_mapping_view_is_read_only(self):
        registry = AdapterRegistry([make_adapter("one")])
        with pytest.raises(TypeError):
            registry.as_mapping()["two"] = make_adapter("two")
