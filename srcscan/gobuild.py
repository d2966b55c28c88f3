"""Go build-info provider: package metadata and import path resolution.

The scanner treats this as an external collaborator. :class:`SourceTreeProvider`
is the default implementation; it reads the package clause and import
declarations of each ``.go`` file and resolves import paths against a list of
GOPATH-style source roots (each containing a ``src`` directory). Build
constraints are not evaluated, so every ``.go`` file in the directory counts.
"""

from __future__ import annotations

import os
import re
import stat
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from .errors import GoPackageError, ScanError
from .pathutil import has_subdir, is_dir

_SOURCE_NOISE = re.compile(
    r'"(?:\\.|[^"\\\n])*"|`[^`]*`|\'(?:\\.|[^\'\\\n])*\'|//[^\n]*|/\*.*?\*/', re.S
)
_PACKAGE_CLAUSE = re.compile(r"\s*package\s+([A-Za-z_]\w*)")
_IMPORT_KEYWORD = re.compile(r"[\s;]*import\b\s*")
_IMPORT_SPEC = re.compile(r'\s*(?:([A-Za-z_]\w*|\.)\s+)?("(?:\\.|[^"\\\n])*"|`[^`]*`)[ \t]*;?')
_GROUP_END = re.compile(r"[\s;]*\)")


@dataclass
class GoPackageInfo:
    """Package metadata as read from a single directory."""

    name: str = ""
    go_files: List[str] = field(default_factory=list)
    imports: List[str] = field(default_factory=list)
    test_go_files: List[str] = field(default_factory=list)
    test_imports: List[str] = field(default_factory=list)
    xtest_go_files: List[str] = field(default_factory=list)
    xtest_imports: List[str] = field(default_factory=list)
    import_pos: Dict[str, List[str]] = field(default_factory=dict)
    test_import_pos: Dict[str, List[str]] = field(default_factory=dict)
    xtest_import_pos: Dict[str, List[str]] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)


class GoBuildInfoProvider(ABC):
    """Contract for anything that can describe the Go package in a directory."""

    @abstractmethod
    def import_dir(self, directory: str) -> GoPackageInfo:
        """Return package metadata for the absolute ``directory``.

        Problems with individual files are reported through
        ``GoPackageInfo.errors``; unreadable directories raise ``ScanError``.
        """

    @abstractmethod
    def resolve_import_path(self, directory: str) -> Tuple[str, str]:
        """Return ``(import_path, root)`` for ``directory`` or ``("", "")``."""


def parse_go_source(text: str) -> Tuple[str, List[Tuple[str, int]]]:
    """Return the package name and ``(import, line)`` pairs of a Go file."""
    clean = _SOURCE_NOISE.sub(_blank_comment, text)
    match = _PACKAGE_CLAUSE.match(clean)
    if match is None:
        raise GoPackageError("expected 'package' clause")

    imports: List[Tuple[str, int]] = []
    pos = match.end()
    while True:
        keyword = _IMPORT_KEYWORD.match(clean, pos)
        if keyword is None:
            break
        pos = keyword.end()
        if clean.startswith("(", pos):
            pos += 1
            while True:
                end = _GROUP_END.match(clean, pos)
                if end is not None:
                    pos = end.end()
                    break
                pos = _read_import_spec(clean, pos, imports)
        else:
            pos = _read_import_spec(clean, pos, imports)
    return match.group(1), imports


def _blank_comment(match: re.Match[str]) -> str:
    token = match.group(0)
    if token.startswith(("//", "/*")):
        return re.sub(r"[^\n]", " ", token)
    return token


def _read_import_spec(source: str, pos: int, imports: List[Tuple[str, int]]) -> int:
    spec = _IMPORT_SPEC.match(source, pos)
    if spec is None:
        line = source.count("\n", 0, pos) + 1
        raise GoPackageError(f"malformed import declaration near line {line}")
    literal = spec.group(2)
    line = source.count("\n", 0, spec.start(2)) + 1
    imports.append((literal[1:-1], line))
    return spec.end()


class SourceTreeProvider(GoBuildInfoProvider):
    """Reads Go packages straight from source, GOPATH style."""

    def __init__(self, source_roots: Sequence[str]) -> None:
        self.source_roots = [os.path.abspath(root) for root in source_roots]

    def import_dir(self, directory: str) -> GoPackageInfo:
        info = GoPackageInfo()
        imports: Dict[str, Dict[str, List[str]]] = {"": {}, "test": {}, "xtest": {}}

        try:
            names = sorted(os.listdir(directory))
        except OSError as exc:
            raise ScanError(f"read Go package directory {directory}: {exc}") from exc

        for filename in names:
            if not filename.endswith(".go") or filename.startswith(("_", ".")):
                continue
            path = os.path.join(directory, filename)
            try:
                if not stat.S_ISREG(os.stat(path).st_mode):
                    continue
                with open(path, encoding="utf-8", errors="replace") as handle:
                    source = handle.read()
            except OSError as exc:
                raise ScanError(f"read {path}: {exc}") from exc

            try:
                package_name, file_imports = parse_go_source(source)
            except GoPackageError as exc:
                info.errors.append(f"{filename}: {exc}")
                continue

            is_test = filename.endswith("_test.go")
            is_xtest = False
            if is_test and package_name.endswith("_test") and info.name != package_name:
                is_xtest = True
                package_name = package_name[: -len("_test")]

            if not info.name:
                info.name = package_name
            elif package_name != info.name:
                info.errors.append(
                    f"found packages {info.name} and {package_name} in {directory} ({filename})"
                )
                continue

            if is_xtest:
                group = "xtest"
                info.xtest_go_files.append(filename)
            elif is_test:
                group = "test"
                info.test_go_files.append(filename)
            else:
                group = ""
                info.go_files.append(filename)

            for import_path, line in file_imports:
                imports[group].setdefault(import_path, []).append(f"{filename}:{line}")

        if not (info.go_files or info.test_go_files or info.xtest_go_files) and not info.errors:
            info.errors.append(f"no buildable Go source files in {directory}")

        info.imports = sorted(imports[""])
        info.test_imports = sorted(imports["test"])
        info.xtest_imports = sorted(imports["xtest"])
        info.import_pos = imports[""]
        info.test_import_pos = imports["test"]
        info.xtest_import_pos = imports["xtest"]
        return info

    def resolve_import_path(self, directory: str) -> Tuple[str, str]:
        directory = os.path.abspath(directory)
        for index, root in enumerate(self.source_roots):
            sub, ok = has_subdir(os.path.join(root, "src"), directory)
            if not ok:
                continue
            # A directory with the same import path under an earlier root would
            # shadow this one, so the import path is left unresolved.
            for earlier in self.source_roots[:index]:
                if is_dir(os.path.join(earlier, "src", *sub.split("/"))):
                    return "", ""
            return sub, root
        return "", ""


__all__ = [
    "GoBuildInfoProvider",
    "GoPackageInfo",
    "SourceTreeProvider",
    "parse_go_source",
]
