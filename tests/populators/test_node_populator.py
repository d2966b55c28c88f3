"""Tests for the node.js package populator."""

from __future__ import annotations

import os

import pytest

from srcscan.config import NodeJSPackageConfig
from srcscan.errors import ManifestError
from srcscan.populators import NodeJSPackageBuilder, classify_js_file
from srcscan.units import NodeJSPackage, unit_type
from tests._fixtures.tree_builder import TreeBuilder


@pytest.mark.parametrize(
    ("rel_path", "expected"),
    [
        ("index.js", "lib"),
        ("lib/util.js", "lib"),
        ("vendor/jquery.js", "vendor"),
        ("examples/vendor/jquery.js", "vendor"),
        ("lib/vendor/jquery.min.js", "vendor"),
        ("examples/dist/app.js", "generated"),
        ("examples/app.min.js", "generated"),
        ("build/app.js", "generated"),
        ("bin/cli.js", "script"),
        ("tools/test/helper.js", "script"),
        ("examples/basic.js", "example"),
        ("docs/test/setup.js", "example"),
        ("test/unit.js", "test"),
        ("src/widget.spec.js", "test"),
        ("test/examples/fixture.js", "test"),
        ("build_support/task.js", "support"),
        ("Gruntfile.js", "support"),
        ("lib/build.config.js", "support"),
    ],
)
def test_classify_js_file(rel_path: str, expected: str) -> None:
    assert classify_js_file(rel_path, NodeJSPackageConfig()) == expected


def test_classify_js_file_checks_test_suffix_before_later_script_dir() -> None:
    # Categories three to six are tried segment by segment, so the file's own
    # test suffix is seen while looking at the first segment.
    assert classify_js_file("lib/bin/run_test.js", NodeJSPackageConfig()) == "test"


def test_classify_js_file_honours_custom_rules() -> None:
    rules = NodeJSPackageConfig(vendor_dirs=["third_party"], test_dirs=["qa"])

    assert classify_js_file("third_party/x.js", rules) == "vendor"
    assert classify_js_file("vendor/x.js", rules) == "lib"
    assert classify_js_file("qa/x.js", rules) == "test"


def test_node_package_partitions_every_js_file(tree_builder: TreeBuilder) -> None:
    scripts = [
        "a.js",
        "lib/a.js",
        "vendor/a.js",
        "test/b.js",
        "a_test.js",
        "dist/a.js",
        "a.min.js",
        "bin/run.js",
        "examples/demo.js",
        "build_support/task.js",
    ]
    tree_builder.write({"package.json": '{"name": "pkg"}\n', "README.md": "# pkg\n"})
    tree_builder.touch(scripts)
    tree_builder.touch(["lib/data.json", "lib/style.css"])

    (package,) = tree_builder.scan(tree_builder.config(profiles=None))

    assert isinstance(package, NodeJSPackage)
    assert package.lib_files == ["a.js", "lib/a.js"]
    assert package.vendor_files == ["vendor/a.js"]
    assert package.test_files == ["a_test.js", "test/b.js"]
    assert package.generated_files == ["a.min.js", "dist/a.js"]
    assert package.script_files == ["bin/run.js"]
    assert package.example_files == ["examples/demo.js"]
    assert package.support_files == ["build_support/task.js"]
    assert sorted(package.all_files()) == sorted(scripts)
    assert len(package.all_files()) == len(set(package.all_files()))


def test_node_package_keeps_raw_manifest_bytes(tree_builder: TreeBuilder) -> None:
    manifest = '{\n  "name": "pkg",\n  "private": true\n}\n'
    tree_builder.write({"pkg/package.json": manifest})

    (package,) = tree_builder.scan()

    assert package.package_json == manifest.encode("utf-8")


def test_nested_packages_are_separate_units(tree_builder: TreeBuilder) -> None:
    tree_builder.write(
        {
            "package.json": '{"name": "outer"}',
            "packages/inner/package.json": '{"name": "inner"}',
        }
    )
    tree_builder.touch(["index.js", "packages/shared.js", "packages/inner/index.js", "packages/inner/test/t.js"])

    outer, inner = tree_builder.scan()

    assert (outer.path, inner.path) == (".", "packages/inner")
    assert outer.lib_files == ["index.js", "packages/shared.js"]
    assert inner.lib_files == ["index.js"]
    assert inner.test_files == ["test/t.js"]
    assert not any(path.startswith("packages/inner") for path in outer.all_files())


def test_node_modules_is_never_walked(tree_builder: TreeBuilder) -> None:
    tree_builder.write({"package.json": "{}"})
    tree_builder.touch(["index.js", "node_modules/dep/index.js", "lib/node_modules/x.js"])
    config = tree_builder.config(skip_dirs=[])
    builder = NodeJSPackageBuilder()

    package = builder.build(str(tree_builder.path()), ".", config)

    assert package.all_files() == ["index.js"]


def test_node_modules_is_not_read_at_all(tree_builder: TreeBuilder, monkeypatch: pytest.MonkeyPatch) -> None:
    tree_builder.write({"package.json": "{}"})
    tree_builder.touch(["index.js", "node_modules/dep/index.js"])
    cache = str(tree_builder.path("node_modules"))
    real_scandir = os.scandir

    def _scandir(path):
        if os.fspath(path) == cache:
            raise PermissionError(13, "Permission denied", cache)
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", _scandir)

    package = NodeJSPackageBuilder().build(str(tree_builder.path()), ".", tree_builder.config())

    assert package.all_files() == ["index.js"]


def test_package_rooted_in_a_node_modules_dir_keeps_its_files(tree_builder: TreeBuilder) -> None:
    tree_builder.write({"node_modules/package.json": "{}"})
    tree_builder.touch(["node_modules/index.js", "node_modules/node_modules/dep.js"])
    root = str(tree_builder.path("node_modules"))

    package = NodeJSPackageBuilder().build(root, "node_modules", tree_builder.config())

    assert package.all_files() == ["index.js"]


def test_unreadable_manifest_raises_manifest_error(tree_builder: TreeBuilder) -> None:
    builder = NodeJSPackageBuilder()

    with pytest.raises(ManifestError):
        builder.build(str(tree_builder.path()), ".", tree_builder.config())


def test_node_units_found_by_default_profiles(tree_builder: TreeBuilder) -> None:
    tree_builder.write({"web/package.json": "{}"})

    assert [unit_type(unit) for unit in tree_builder.scan()] == ["NodeJSPackage"]
