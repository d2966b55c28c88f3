"""Maven project populator."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from ..units import JavaProject
from .base import UnitBuilder, collect_files

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..config import ScanConfig

PROJECT_CLASSPATH = "target/classes"
SOURCE_DIR = ("src", "main", "java")
TEST_DIR = ("src", "test", "java")


class JavaMavenProjectBuilder(UnitBuilder):
    def build(self, abs_path: str, rel_path: str, config: "ScanConfig") -> JavaProject:
        return JavaProject(
            dir=rel_path,
            project_classpath=PROJECT_CLASSPATH,
            src_files=collect_files(abs_path, os.path.join(abs_path, *SOURCE_DIR), ".java"),
            test_files=collect_files(abs_path, os.path.join(abs_path, *TEST_DIR), ".java"),
        )


__all__ = ["JavaMavenProjectBuilder", "PROJECT_CLASSPATH"]
