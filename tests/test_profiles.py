"""Tests for profile matchers and registry resolution."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from srcscan.populators import PythonPackageBuilder
from srcscan.profiles import (
    ALL_PROFILES,
    FileInDir,
    FileSuffix,
    FileSuffixInDir,
    Profile,
    resolve_profiles,
)


def test_file_in_dir_matches_exact_names_only() -> None:
    matcher = FileInDir("package.json")

    assert matcher.dir_matches("/x", ["index.js", "package.json"])
    assert not matcher.dir_matches("/x", ["package.json.bak", "index.js"])
    assert not matcher.dir_matches("/x", [])


def test_file_suffix_in_dir_matches_any_suffix() -> None:
    matcher = FileSuffixInDir(".gemspec")

    assert matcher.dir_matches("/x", ["README", "rails.gemspec"])
    assert not matcher.dir_matches("/x", ["gemspec.rb"])


def test_file_suffix_looks_at_the_file_name() -> None:
    matcher = FileSuffix(".py")

    assert matcher.file_matches("/src/tool.py")
    assert not matcher.file_matches("/src.py/tool.txt")


def test_profile_requires_a_matcher() -> None:
    with pytest.raises(ValueError):
        Profile(name="empty", builder=PythonPackageBuilder())


def test_all_profiles_order() -> None:
    assert [profile.name for profile in ALL_PROFILES] == [
        "nodejs",
        "python-package",
        "python-module",
        "go",
        "ruby-gem",
        "ruby-app",
        "java-maven",
    ]


def test_resolve_profiles_returns_everything_by_default() -> None:
    assert resolve_profiles() == list(ALL_PROFILES)


def test_resolve_profiles_keeps_registry_order() -> None:
    profiles = resolve_profiles(["go", "NodeJS"])

    assert [profile.name for profile in profiles] == ["nodejs", "go"]


def test_resolve_profiles_raises_for_unknown_name() -> None:
    with pytest.raises(ValueError) as excinfo:
        resolve_profiles(["cobol"])
    assert "cobol" in str(excinfo.value)


class _DummyEntryPoints(list):
    def select(self, **kwargs):
        if kwargs.get("group") == "srcscan.profiles":
            return self
        return []


def test_resolve_profiles_loads_entry_points(monkeypatch: pytest.MonkeyPatch) -> None:
    cargo = Profile(
        name="cargo",
        description="Rust crate",
        dir_matcher=FileInDir("Cargo.toml"),
        builder=PythonPackageBuilder(),
    )
    entry = SimpleNamespace(name="cargo", load=lambda: (lambda: cargo))
    monkeypatch.setattr(
        "srcscan.profiles.metadata.entry_points",
        lambda: _DummyEntryPoints([entry]),
    )

    assert resolve_profiles(["cargo"]) == [cargo]
    assert resolve_profiles()[-1] is cargo


def test_resolve_profiles_rejects_bad_entry_point(monkeypatch: pytest.MonkeyPatch) -> None:
    entry = SimpleNamespace(name="broken", load=lambda: "not a profile")
    monkeypatch.setattr(
        "srcscan.profiles.metadata.entry_points",
        lambda: _DummyEntryPoints([entry]),
    )

    with pytest.raises(TypeError):
        resolve_profiles()
