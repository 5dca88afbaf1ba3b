"""Shared helpers and records for the code generators."""

from __future__ import annotations

import json
import os
import subprocess
from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "ORM_MODULE",
    "ARM_IMPORT",
    "HIM_IMPORT",
    "DAO_EXCEPTION_IMPORT",
    "GORM_IMPORT",
    "TIME_IMPORT",
    "TIME_NOW",
    "YES",
    "NO",
    "TableField",
    "Table",
    "Property",
    "ModelInfo",
    "EntityInfo",
    "GoModule",
    "GoRequire",
    "GoMod",
    "yes_no",
    "convert_field_type",
    "left_str_pad",
    "go_mod_child_path",
    "mod_info",
    "dirslice",
    "case_to_camel",
    "lcfirst",
    "ucfirst",
]

# Import root of the runtime library that generated code depends on.
ORM_MODULE = "example.com/orm"

ARM_IMPORT = f'"{ORM_MODULE}/arm"'
HIM_IMPORT = f'"{ORM_MODULE}/him"'
DAO_EXCEPTION_IMPORT = f'"{ORM_MODULE}/exception/DaoException"'
GORM_IMPORT = '"gorm.io/gorm"'
TIME_IMPORT = "time.Time"
TIME_NOW = "time.Now()"

YES = "yes"
NO = "no"


@dataclass
class TableField:
    """One row of ``SHOW FULL COLUMNS``."""

    field: str = ""
    type: str = ""
    null: str = ""
    key: str = ""
    default: str = ""
    extra: str = ""
    privileges: str = ""
    comment: str = ""


@dataclass
class Table:
    """A table name with its comment."""

    name: str = ""
    comment: str = ""


@dataclass
class Property:
    """A struct property derived from a table column."""

    is_primary_key: bool
    upper_property: str
    lower_property: str
    property_type: str
    table_field: str
    table_field_comment: str


@dataclass
class ModelInfo:
    model_import: str
    model_package: str


@dataclass
class EntityInfo:
    entity_import: str
    entity_package: str


@dataclass
class GoModule:
    path: str = ""
    version: str = ""


@dataclass
class GoRequire:
    path: str = ""
    version: str = ""
    indirect: bool = False


@dataclass
class GoMod:
    """The parts of a module description the generators use."""

    module: GoModule = field(default_factory=GoModule)
    go: str = ""
    require: list[GoRequire] = field(default_factory=list)
    exclude: list[GoModule] = field(default_factory=list)


def yes_no(value: str) -> bool:
    """Interpret a yes/no answer, case-insensitively."""
    lower = value.lower()
    if lower == YES:
        return True
    if lower == NO:
        return False
    raise ValueError("undefined Constant")


_TYPE_MAP = {
    **dict.fromkeys(("int", "smallint", "tinyint", "mediumint", "year"), "int"),
    "bit": "byte",
    "bigint": "int64",
    **dict.fromkeys(("decimal", "double", "float", "real", "numeric"), "float32"),
    **dict.fromkeys(("timestamp", "time", "datetime", "date"), TIME_IMPORT),
    **dict.fromkeys(("binary", "varbinary"), "[]byte"),
    **dict.fromkeys(
        ("char", "varchar", "text", "longtext", "mediumtext", "set", "enum"), "string"
    ),
    "boolean": "bool",
}


def convert_field_type(field: TableField) -> str:
    """Map a MySQL column type to the property type of generated code."""
    base = field.type.split("(", 1)[0]
    return _TYPE_MAP.get(base, "interface{}")


def left_str_pad(text: str, pad_length: int, pad_string: str) -> str:
    """Prefix ``text`` with ``pad_string`` repeated ``pad_length`` times."""
    return pad_string * max(pad_length, 0) + text


def go_mod_child_path(target_path: str) -> list[str]:
    """Return the directories between the nearest go.mod and ``target_path``."""
    current = os.path.abspath(target_path)
    children: list[str] = []
    while not os.path.exists(os.path.join(current, "go.mod")):
        parent = os.path.dirname(current)
        if parent == current:
            raise FileNotFoundError(f"no go.mod found above {target_path}")
        children.insert(0, os.path.basename(current))
        current = parent
    return children


def _module(data: dict[str, Any] | None) -> GoModule:
    data = data or {}
    return GoModule(path=data.get("Path", ""), version=data.get("Version", ""))


def _parse_go_mod(data: dict[str, Any]) -> GoMod:
    return GoMod(
        module=_module(data.get("Module")),
        go=data.get("Go", ""),
        require=[
            GoRequire(
                path=item.get("Path", ""),
                version=item.get("Version", ""),
                indirect=bool(item.get("Indirect", False)),
            )
            for item in data.get("Require") or []
        ],
        exclude=[_module(item) for item in data.get("Exclude") or []],
    )


def mod_info(cwd: str | None = None) -> GoMod:
    """Read the module description with ``go mod edit -json``."""
    completed = subprocess.run(
        ["go", "mod", "edit", "-json"],
        cwd=cwd,
        capture_output=True,
        text=True,
    )
    if completed.returncode != 0:
        raise RuntimeError(
            f"go mod edit failed: {completed.stdout}{completed.stderr}".strip()
        )
    return _parse_go_mod(json.loads(completed.stdout))


def dirslice(path: str) -> list[str]:
    """Split ``path`` on the platform path separator."""
    return path.split(os.sep)


def ucfirst(text: str) -> str:
    return text[:1].upper() + text[1:]


def lcfirst(text: str) -> str:
    return text[:1].lower() + text[1:]


def case_to_camel(name: str) -> str:
    """Turn ``snake_case`` into ``CamelCase``."""
    return "".join(ucfirst(part) for part in name.split("_") if part)