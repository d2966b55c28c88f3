"""Python package and module populators."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..units import PythonModule, PythonPackage
from .base import UnitBuilder

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..config import ScanConfig


class PythonPackageBuilder(UnitBuilder):
    def build(self, abs_path: str, rel_path: str, config: "ScanConfig") -> PythonPackage:
        return PythonPackage(dir=rel_path)


class PythonModuleBuilder(UnitBuilder):
    def build(self, abs_path: str, rel_path: str, config: "ScanConfig") -> PythonModule:
        return PythonModule(file=rel_path)


__all__ = ["PythonModuleBuilder", "PythonPackageBuilder"]
