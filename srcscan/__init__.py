"""Discover source units (packages, modules, projects) in a directory tree."""

from __future__ import annotations

from .config import (
    ConfigError,
    GoPackageConfig,
    NodeJSPackageConfig,
    RubyConfig,
    ScanConfig,
    default_config,
    load_config,
)
from .errors import GoPackageError, ManifestError, ScanError
from .profiles import ALL_PROFILES, Profile, resolve_profiles
from .scanner import Scanner, scan
from .units import (
    GoPackage,
    JavaProject,
    NodeJSPackage,
    PythonModule,
    PythonPackage,
    RubyApp,
    RubyGem,
    Unit,
    UnknownUnitTypeError,
    sort_units,
    unit_from_dict,
    unit_to_dict,
    unit_type,
)

__all__ = [
    "ALL_PROFILES",
    "ConfigError",
    "GoPackage",
    "GoPackageConfig",
    "GoPackageError",
    "JavaProject",
    "ManifestError",
    "NodeJSPackage",
    "NodeJSPackageConfig",
    "Profile",
    "PythonModule",
    "PythonPackage",
    "RubyApp",
    "RubyConfig",
    "RubyGem",
    "ScanConfig",
    "ScanError",
    "Scanner",
    "Unit",
    "UnknownUnitTypeError",
    "default_config",
    "load_config",
    "resolve_profiles",
    "scan",
    "sort_units",
    "unit_from_dict",
    "unit_to_dict",
    "unit_type",
]
