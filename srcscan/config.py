"""Scan configuration and loading of overrides from ``.srcscan.yml``."""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .gobuild import GoBuildInfoProvider, SourceTreeProvider
from .profiles import Profile, resolve_profiles

CONFIG_FILENAME = ".srcscan.yml"

DEFAULT_SKIP_DIRS = ("node_modules", "vendor", "testdata", "site-packages", "bower_components")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class NodeJSPackageConfig:
    """Directory names and suffixes that decide a .js file's category."""

    test_dirs: List[str] = field(
        default_factory=lambda: ["test", "tests", "spec", "specs", "unit", "mocha", "karma", "testdata"]
    )
    test_suffixes: List[str] = field(
        default_factory=lambda: ["test.js", "tests.js", "spec.js", "specs.js"]
    )
    support_dirs: List[str] = field(default_factory=lambda: ["build_support"])
    support_filenames: List[str] = field(
        default_factory=lambda: ["Gruntfile.js", "build.js", "Makefile.dryice.js", "build.config.js"]
    )
    example_dirs: List[str] = field(
        default_factory=lambda: ["example", "examples", "sample", "samples", "doc", "docs", "demo", "demos"]
    )
    script_dirs: List[str] = field(
        default_factory=lambda: ["bin", "script", "scripts", "tool", "tools"]
    )
    generated_dirs: List[str] = field(default_factory=lambda: ["build", "dist"])
    generated_suffixes: List[str] = field(
        default_factory=lambda: [".min.js", "-min.js", ".optimized.js", "-optimized.js"]
    )
    vendor_dirs: List[str] = field(
        default_factory=lambda: [
            "vendor",
            "bower_components",
            "node_modules",
            "assets",
            "public",
            "static",
            "resources",
        ]
    )


@dataclass
class RubyConfig:
    """Conventional source and test directories for gems and apps."""

    test_dirs: List[str] = field(default_factory=lambda: ["spec", "specs", "test", "tests"])
    gem_src_dirs: List[str] = field(default_factory=lambda: ["lib"])
    app_src_dirs: List[str] = field(default_factory=lambda: ["app", "lib", "config", "db"])


def _default_go_source_roots() -> List[str]:
    gopath = os.environ.get("GOPATH", "")
    roots = [entry for entry in gopath.split(os.pathsep) if entry]
    if not roots:
        roots = [str(Path.home() / "go")]
    # GOROOT comes first so standard-library packages resolve like the go tool does.
    goroot = os.environ.get("GOROOT", "")
    if goroot:
        roots.insert(0, goroot)
    return roots


@dataclass
class GoPackageConfig:
    """Go source roots and the provider used to read package metadata."""

    source_roots: List[str] = field(default_factory=_default_go_source_roots)
    provider: Optional[GoBuildInfoProvider] = None

    def build_provider(self) -> GoBuildInfoProvider:
        if self.provider is not None:
            return self.provider
        return SourceTreeProvider(self.source_roots)


@dataclass
class ScanConfig:
    """Options for a single scan; each scan reads only the instance it is given."""

    base: Optional[str] = None
    profiles: Optional[List[Profile]] = None
    skip_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_SKIP_DIRS))
    path_independent: bool = False
    skip_bad_manifests: bool = False
    node: NodeJSPackageConfig = field(default_factory=NodeJSPackageConfig)
    go: GoPackageConfig = field(default_factory=GoPackageConfig)
    ruby: RubyConfig = field(default_factory=RubyConfig)

    def replace(self, **changes: Any) -> "ScanConfig":
        return dataclasses.replace(self, **changes)

    def skip_dir(self, name: str) -> bool:
        return name in self.skip_dirs

    def resolved_base(self) -> str:
        return os.path.abspath(self.base if self.base else os.getcwd())


def default_config() -> ScanConfig:
    """Return a fresh configuration populated with the documented defaults."""
    return ScanConfig()


def load_config(config_path: Path) -> ScanConfig:
    """Load configuration overrides from disk on top of the defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent

    config = default_config()
    if not config_file.exists():
        return config

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    base = _as_str(data.get("base"))
    if base:
        config.base = str((root / base).resolve())

    if "skip_dirs" in data:
        config.skip_dirs = _as_str_list(data.get("skip_dirs"))

    path_independent = _as_bool(data.get("path_independent"))
    if path_independent is not None:
        config.path_independent = path_independent

    skip_bad_manifests = _as_bool(data.get("skip_bad_manifests"))
    if skip_bad_manifests is not None:
        config.skip_bad_manifests = skip_bad_manifests

    if "profiles" in data:
        try:
            config.profiles = resolve_profiles(_as_str_list(data.get("profiles")))
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc

    _apply_list_overrides(config.node, _as_dict(data.get("node")))
    _apply_list_overrides(config.ruby, _as_dict(data.get("ruby")))

    go_data = _as_dict(data.get("go"))
    if "source_roots" in go_data:
        config.go.source_roots = [
            str((root / entry).resolve()) for entry in _as_str_list(go_data["source_roots"])
        ]

    return config


def _apply_list_overrides(target: object, overrides: Dict[str, Any]) -> None:
    known = {item.name for item in dataclasses.fields(target)}  # type: ignore[arg-type]
    for key, value in overrides.items():
        if key not in known:
            raise ConfigError(f"Unknown option '{key}' for {type(target).__name__}")
        setattr(target, key, _as_str_list(value))


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_SKIP_DIRS",
    "GoPackageConfig",
    "NodeJSPackageConfig",
    "RubyConfig",
    "ScanConfig",
    "default_config",
    "load_config",
]
