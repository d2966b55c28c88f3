"""Go package populator backed by a build-info provider."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Optional

from ..gobuild import GoBuildInfoProvider
from ..logging import get_logger
from ..units import GoPackage
from .base import UnitBuilder

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..config import ScanConfig


class GoPackageBuilder(UnitBuilder):
    """Describes a Go package using the configured (or injected) provider.

    Import positions reported by the provider are dropped. Provider
    problems with individual files are logged and the package is kept.
    """

    def __init__(self, provider: Optional[GoBuildInfoProvider] = None) -> None:
        self._provider = provider
        self.logger = get_logger("populators.go")

    def build(self, abs_path: str, rel_path: str, config: "ScanConfig") -> GoPackage:
        provider = self._provider or config.go.build_provider()
        info = provider.import_dir(abs_path)
        for problem in info.errors:
            self.logger.warning(
                "Problem importing Go package at %s: %s", abs_path, problem
            )

        package = GoPackage(
            dir=rel_path,
            name=info.name,
            go_files=list(info.go_files),
            imports=list(info.imports),
            test_go_files=list(info.test_go_files),
            test_imports=list(info.test_imports),
            xtest_go_files=list(info.xtest_go_files),
            xtest_imports=list(info.xtest_imports),
        )

        import_path, root = provider.resolve_import_path(abs_path)
        if import_path:
            package.import_path = import_path
            package.root = root
            package.src_root = os.path.join(root, "src")
            package.pkg_root = os.path.join(root, "pkg")
            package.bin_dir = os.path.join(root, "bin")

        if config.path_independent:
            package.root = ""
            package.src_root = ""
            package.pkg_root = ""
            package.bin_dir = ""
        return package


__all__ = ["GoPackageBuilder"]
