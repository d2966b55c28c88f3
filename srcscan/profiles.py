"""Profiles: declarative matchers paired with the builder for a unit type."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from importlib import metadata
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from .populators import (
    GoPackageBuilder,
    JavaMavenProjectBuilder,
    NodeJSPackageBuilder,
    PythonModuleBuilder,
    PythonPackageBuilder,
    RubyAppBuilder,
    RubyGemBuilder,
    UnitBuilder,
)

_ENTRY_POINT_GROUP = "srcscan.profiles"


class DirMatcher(ABC):
    """Pure predicate over a directory and the names it immediately contains."""

    @abstractmethod
    def dir_matches(self, path: str, filenames: Sequence[str]) -> bool:
        """Return True when the directory at ``path`` is a unit root."""


class FileMatcher(ABC):
    """Pure predicate over a single file path."""

    @abstractmethod
    def file_matches(self, path: str) -> bool:
        """Return True when the file at ``path`` is a unit."""


@dataclass(frozen=True)
class FileInDir(DirMatcher):
    """Matches directories containing a file with exactly this name."""

    filename: str

    def dir_matches(self, path: str, filenames: Sequence[str]) -> bool:
        return self.filename in filenames


@dataclass(frozen=True)
class FileSuffixInDir(DirMatcher):
    """Matches directories containing any name ending in this suffix."""

    suffix: str

    def dir_matches(self, path: str, filenames: Sequence[str]) -> bool:
        return any(name.endswith(self.suffix) for name in filenames)


@dataclass(frozen=True)
class FileSuffix(FileMatcher):
    """Matches files whose name ends in this suffix."""

    suffix: str

    def file_matches(self, path: str) -> bool:
        return os.path.basename(path).endswith(self.suffix)


@dataclass(frozen=True)
class Profile:
    """Criteria for a source unit plus the builder that creates it.

    ``top_level_only`` stops a profile walk from descending below a
    directory it matched. For a file-only profile it restricts matching to
    files directly inside the scan root.
    """

    name: str
    builder: UnitBuilder
    dir_matcher: Optional[DirMatcher] = None
    file_matcher: Optional[FileMatcher] = None
    top_level_only: bool = False
    description: str = ""

    def __post_init__(self) -> None:
        if self.dir_matcher is None and self.file_matcher is None:
            raise ValueError(f"Profile '{self.name}' needs a directory or file matcher")


ALL_PROFILES: Tuple[Profile, ...] = (
    Profile(
        name="nodejs",
        description="node.js package",
        dir_matcher=FileInDir("package.json"),
        builder=NodeJSPackageBuilder(),
    ),
    Profile(
        name="python-package",
        description="Python package",
        dir_matcher=FileInDir("__init__.py"),
        builder=PythonPackageBuilder(),
    ),
    Profile(
        name="python-module",
        description="Python module",
        file_matcher=FileSuffix(".py"),
        top_level_only=True,
        builder=PythonModuleBuilder(),
    ),
    Profile(
        name="go",
        description="Go package",
        dir_matcher=FileSuffixInDir(".go"),
        builder=GoPackageBuilder(),
    ),
    Profile(
        name="ruby-gem",
        description="Ruby gem",
        dir_matcher=FileSuffixInDir(".gemspec"),
        top_level_only=True,
        builder=RubyGemBuilder(),
    ),
    Profile(
        name="ruby-app",
        description="Ruby app",
        dir_matcher=FileInDir("config.ru"),
        top_level_only=True,
        builder=RubyAppBuilder(),
    ),
    Profile(
        name="java-maven",
        description="Java Maven project",
        dir_matcher=FileInDir("pom.xml"),
        builder=JavaMavenProjectBuilder(),
    ),
)


def resolve_profiles(names: Sequence[str] | None = None) -> List[Profile]:
    """Return registered profiles in order, honoring optional names.

    Built-in profiles come first, then any published under the
    ``srcscan.profiles`` entry-point group.
    """

    wanted: Set[str] | None = None
    if names is not None:
        wanted = {name.lower() for name in names}

    profiles: List[Profile] = []
    seen: Set[str] = set()

    def _add(profile: Profile) -> None:
        key = profile.name.lower()
        if wanted is not None and key not in wanted:
            return
        if key in seen:
            return
        profiles.append(profile)
        seen.add(key)

    for profile in ALL_PROFILES:
        _add(profile)

    for entry in _iter_entry_points():
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover - defensive guard
            raise RuntimeError(f"Failed to load profile entry point '{entry.name}': {exc}") from exc
        _add(_coerce_profile(entry.name, loaded))

    if wanted is not None:
        missing = wanted - seen
        if missing:
            raise ValueError(f"Unknown profiles requested: {', '.join(sorted(missing))}")

    return profiles


def _coerce_profile(name: str, obj: object) -> Profile:
    if isinstance(obj, Profile):
        return obj
    if callable(obj):
        instance = obj()
        if isinstance(instance, Profile):
            return instance
    raise TypeError(f"Profile entry point '{name}' must be a Profile or a factory returning one")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "ALL_PROFILES",
    "DirMatcher",
    "FileInDir",
    "FileMatcher",
    "FileSuffix",
    "FileSuffixInDir",
    "Profile",
    "resolve_profiles",
]
