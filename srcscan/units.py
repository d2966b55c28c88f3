"""Source unit models and their type-tagged serialisation."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Type

_TYPE_KEY = "Type"


class UnknownUnitTypeError(ValueError):
    """Raised when a serialised unit carries a type tag we cannot rebuild."""


def _json_field(name: str, **kwargs: Any) -> Any:
    return field(metadata={"json": name}, **kwargs)


def _files(name: str) -> Any:
    return field(default_factory=list, metadata={"json": name})


class Unit(ABC):
    """A source unit: a package, module or project discovered by a scan."""

    @property
    @abstractmethod
    def path(self) -> str:
        """Path of the unit (directory or file), relative to the scan base."""


@dataclass
class NodeJSPackage(Unit):
    """A node.js package rooted at a directory holding ``package.json``."""

    dir: str = _json_field("Dir")
    package_json: bytes = _json_field("PackageJSON", default=b"")
    lib_files: List[str] = _files("LibFiles")
    script_files: List[str] = _files("ScriptFiles")
    support_files: List[str] = _files("SupportFiles")
    example_files: List[str] = _files("ExampleFiles")
    test_files: List[str] = _files("TestFiles")
    vendor_files: List[str] = _files("VendorFiles")
    generated_files: List[str] = _files("GeneratedFiles")

    @property
    def path(self) -> str:
        return self.dir

    def all_files(self) -> List[str]:
        return [
            *self.lib_files,
            *self.script_files,
            *self.support_files,
            *self.example_files,
            *self.test_files,
            *self.vendor_files,
            *self.generated_files,
        ]


@dataclass
class GoPackage(Unit):
    """A Go package described by the Go build-info provider."""

    dir: str = _json_field("Dir")
    name: str = _json_field("Name", default="")
    import_path: str = _json_field("ImportPath", default="")
    root: str = _json_field("Root", default="")
    src_root: str = _json_field("SrcRoot", default="")
    pkg_root: str = _json_field("PkgRoot", default="")
    bin_dir: str = _json_field("BinDir", default="")
    go_files: List[str] = _files("GoFiles")
    imports: List[str] = _files("Imports")
    test_go_files: List[str] = _files("TestGoFiles")
    test_imports: List[str] = _files("TestImports")
    xtest_go_files: List[str] = _files("XTestGoFiles")
    xtest_imports: List[str] = _files("XTestImports")

    @property
    def path(self) -> str:
        return self.dir


@dataclass
class PythonPackage(Unit):
    """A directory containing ``__init__.py``."""

    dir: str = _json_field("Dir")

    @property
    def path(self) -> str:
        return self.dir


@dataclass
class PythonModule(Unit):
    """A loose ``.py`` file found at the top of a scan."""

    file: str = _json_field("File")

    @property
    def path(self) -> str:
        return self.file


@dataclass
class RubyGem(Unit):
    """A Ruby gem rooted at the directory holding its ``*.gemspec``."""

    dir: str = _json_field("Dir")
    src_files: List[str] = _files("SrcFiles")
    test_files: List[str] = _files("TestFiles")

    @property
    def path(self) -> str:
        return self.dir


@dataclass
class RubyApp(Unit):
    """A Rack-style Ruby application rooted at its ``config.ru``."""

    dir: str = _json_field("Dir")
    src_files: List[str] = _files("SrcFiles")
    test_files: List[str] = _files("TestFiles")

    @property
    def path(self) -> str:
        return self.dir


@dataclass
class JavaProject(Unit):
    """A Maven project rooted at the directory holding ``pom.xml``."""

    dir: str = _json_field("Dir")
    project_classpath: str = _json_field("ProjectClasspath", default="")
    src_files: List[str] = _files("SrcFiles")
    test_files: List[str] = _files("TestFiles")

    @property
    def path(self) -> str:
        return self.dir


UNIT_TYPES: Dict[str, Type[Unit]] = {
    cls.__name__: cls
    for cls in (
        NodeJSPackage,
        GoPackage,
        PythonPackage,
        PythonModule,
        RubyGem,
        RubyApp,
        JavaProject,
    )
}


def unit_type(unit: Unit) -> str:
    """Return the variant name used to tag ``unit`` when serialised."""
    name = type(unit).__name__
    if name not in UNIT_TYPES:
        raise UnknownUnitTypeError(f"unhandled source unit type: {name}")
    return name


def unit_sort_key(unit: Unit) -> Tuple[str, str]:
    return unit_type(unit), unit.path


def sort_units(units: Iterable[Unit]) -> List[Unit]:
    """Return ``units`` in a stable display order (variant, then path)."""
    return sorted(units, key=unit_sort_key)


def unit_to_dict(unit: Unit) -> Dict[str, Any]:
    """Serialise ``unit`` to a JSON-ready mapping tagged with its type.

    Empty file lists and an empty manifest are omitted rather than written
    out as empty values.
    """
    payload: Dict[str, Any] = {}
    for item in fields(unit):  # type: ignore[arg-type]
        key = item.metadata["json"]
        value = getattr(unit, item.name)
        if isinstance(value, list):
            if not value:
                continue
            value = list(value)
        elif isinstance(value, bytes):
            if not value:
                continue
            value = value.decode("utf-8", "surrogateescape")
        payload[key] = value
    payload[_TYPE_KEY] = unit_type(unit)
    return payload


def unit_from_dict(data: Mapping[str, Any], type_name: str | None = None) -> Unit:
    """Rebuild a unit from :func:`unit_to_dict` output.

    ``type_name`` overrides the embedded ``Type`` tag when given.
    """
    name = type_name if type_name is not None else data.get(_TYPE_KEY)
    cls = UNIT_TYPES.get(name) if isinstance(name, str) else None
    if cls is None:
        raise UnknownUnitTypeError(f"unhandled source unit type: {name}")

    kwargs: Dict[str, Any] = {}
    for item in fields(cls):  # type: ignore[arg-type]
        key = item.metadata["json"]
        if key not in data:
            continue
        value = data[key]
        if item.name == "package_json":
            if not isinstance(value, str):
                raise ValueError(f"{key} must be a string, got {type(value).__name__}")
            kwargs[item.name] = value.encode("utf-8", "surrogateescape")
        elif isinstance(value, list):
            kwargs[item.name] = [str(entry) for entry in value]
        elif isinstance(value, str):
            kwargs[item.name] = value
        else:
            raise ValueError(f"{key} has unsupported value {value!r}")
    return cls(**kwargs)


def dumps_units(units: Iterable[Unit], *, indent: int | None = None) -> str:
    return json.dumps([unit_to_dict(unit) for unit in units], indent=indent)


def loads_units(text: str) -> List[Unit]:
    payload = json.loads(text)
    if not isinstance(payload, list):
        raise ValueError("Serialised units must be a JSON list")
    return [unit_from_dict(entry) for entry in payload]


__all__ = [
    "GoPackage",
    "JavaProject",
    "NodeJSPackage",
    "PythonModule",
    "PythonPackage",
    "RubyApp",
    "RubyGem",
    "UNIT_TYPES",
    "Unit",
    "UnknownUnitTypeError",
    "dumps_units",
    "loads_units",
    "sort_units",
    "unit_from_dict",
    "unit_sort_key",
    "unit_to_dict",
    "unit_type",
]
