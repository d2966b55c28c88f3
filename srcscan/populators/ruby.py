"""Ruby gem and application populators."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Iterable, List

from ..units import RubyApp, RubyGem
from .base import UnitBuilder, collect_files

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..config import ScanConfig

RUBY_SUFFIX = ".rb"


def _collect_ruby_files(unit_dir: str, subdirs: Iterable[str]) -> List[str]:
    files: List[str] = []
    for subdir in subdirs:
        files.extend(collect_files(unit_dir, os.path.join(unit_dir, subdir), RUBY_SUFFIX))
    return files


class RubyGemBuilder(UnitBuilder):
    """Gem sources live under the gem source dirs (``lib``), tests under the test dirs."""

    def build(self, abs_path: str, rel_path: str, config: "ScanConfig") -> RubyGem:
        return RubyGem(
            dir=rel_path,
            src_files=_collect_ruby_files(abs_path, config.ruby.gem_src_dirs),
            test_files=_collect_ruby_files(abs_path, config.ruby.test_dirs),
        )


class RubyAppBuilder(UnitBuilder):
    """Application sources are gathered from every configured app source dir."""

    def build(self, abs_path: str, rel_path: str, config: "ScanConfig") -> RubyApp:
        return RubyApp(
            dir=rel_path,
            src_files=_collect_ruby_files(abs_path, config.ruby.app_src_dirs),
            test_files=_collect_ruby_files(abs_path, config.ruby.test_dirs),
        )


__all__ = ["RubyAppBuilder", "RubyGemBuilder"]
