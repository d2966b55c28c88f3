"""Per-ecosystem populators that build and fill in source units."""

from __future__ import annotations

from .base import UnitBuilder, collect_files
from .golang import GoPackageBuilder
from .java import JavaMavenProjectBuilder
from .node import NodeJSPackageBuilder, classify_js_file
from .python import PythonModuleBuilder, PythonPackageBuilder
from .ruby import RubyAppBuilder, RubyGemBuilder

__all__ = [
    "GoPackageBuilder",
    "JavaMavenProjectBuilder",
    "NodeJSPackageBuilder",
    "PythonModuleBuilder",
    "PythonPackageBuilder",
    "RubyAppBuilder",
    "RubyGemBuilder",
    "UnitBuilder",
    "classify_js_file",
    "collect_files",
]
