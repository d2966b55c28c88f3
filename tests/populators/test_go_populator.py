"""Tests for the Go package populator."""

from __future__ import annotations

from typing import List, Tuple

from srcscan.gobuild import GoBuildInfoProvider, GoPackageInfo
from srcscan.populators import GoPackageBuilder
from srcscan.profiles import resolve_profiles
from srcscan.units import GoPackage, unit_to_dict
from tests._fixtures.tree_builder import TreeBuilder


def _write_gopath(tree_builder: TreeBuilder) -> None:
    tree_builder.write(
        {
            "gopath/src/example.com/hello/hello.go": """
                package hello

                import "strings"
                """,
            "gopath/src/example.com/hello/hello_test.go": "package hello\n",
        }
    )


def test_go_package_resolves_import_path_against_source_roots(tree_builder: TreeBuilder) -> None:
    _write_gopath(tree_builder)
    gopath = str(tree_builder.path("gopath"))
    config = tree_builder.config(profiles=resolve_profiles(["go"]))
    config.go.source_roots = [gopath]

    (package,) = tree_builder.scan(config)

    assert package == GoPackage(
        dir="gopath/src/example.com/hello",
        name="hello",
        import_path="example.com/hello",
        root=gopath,
        src_root=f"{gopath}/src",
        pkg_root=f"{gopath}/pkg",
        bin_dir=f"{gopath}/bin",
        go_files=["hello.go"],
        imports=["strings"],
        test_go_files=["hello_test.go"],
    )


def test_path_independent_clears_root_fields(tree_builder: TreeBuilder) -> None:
    _write_gopath(tree_builder)
    config = tree_builder.config(profiles=resolve_profiles(["go"]), path_independent=True)
    config.go.source_roots = [str(tree_builder.path("gopath"))]

    (package,) = tree_builder.scan(config)

    assert package.import_path == "example.com/hello"
    assert (package.root, package.src_root, package.pkg_root, package.bin_dir) == ("", "", "", "")


def test_unresolved_package_has_empty_import_path(tree_builder: TreeBuilder) -> None:
    tree_builder.write({"cmd/tool/main.go": "package main\n"})
    config = tree_builder.config(profiles=resolve_profiles(["go"]))
    config.go.source_roots = [str(tree_builder.path("elsewhere"))]

    (package,) = tree_builder.scan(config)

    assert package.dir == "cmd/tool"
    assert package.import_path == ""
    assert package.root == ""


class _FakeProvider(GoBuildInfoProvider):
    def __init__(self) -> None:
        self.imported: List[str] = []

    def import_dir(self, directory: str) -> GoPackageInfo:
        self.imported.append(directory)
        return GoPackageInfo(
            name="fake",
            go_files=["fake.go"],
            imports=["fmt"],
            import_pos={"fmt": ["fake.go:3"]},
            errors=["fake.go: something odd"],
        )

    def resolve_import_path(self, directory: str) -> Tuple[str, str]:
        return "example.com/fake", "/gopath"


def test_builder_uses_injected_provider_and_drops_positions(tree_builder: TreeBuilder, srcscan_logs) -> None:
    provider = _FakeProvider()
    builder = GoPackageBuilder(provider)

    package = builder.build("/anywhere/fake", "fake", tree_builder.config())

    assert provider.imported == ["/anywhere/fake"]
    assert package.name == "fake"
    assert package.import_path == "example.com/fake"
    assert package.root == "/gopath"
    assert "ImportPos" not in unit_to_dict(package)
    assert any("something odd" in record.getMessage() for record in srcscan_logs.records)


def test_config_provider_is_used_by_default_builder(tree_builder: TreeBuilder) -> None:
    tree_builder.write({"pkg/x.go": "package x\n"})
    provider = _FakeProvider()
    config = tree_builder.config(profiles=resolve_profiles(["go"]))
    config.go.provider = provider

    (package,) = tree_builder.scan(config)

    assert package.name == "fake"
    assert provider.imported == [str(tree_builder.path("pkg"))]
