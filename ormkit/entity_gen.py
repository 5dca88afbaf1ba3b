"""Generation of entity source files from table properties."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from .dao_gen import write_file
from .genutils import (
    ARM_IMPORT,
    TIME_IMPORT,
    TIME_NOW,
    ModelInfo,
    Property,
    Table,
    left_str_pad,
)
from .stubs import load_stub

__all__ = ["EntityGenerator"]

ENTITY_STUB = "entity.stub"
ENTITY_PROPERTY_STUB = "entityProperty.stub"
ENTITY_EQUAL_STUB = "entityEqual.stub"
ENTITY_STRUCT_NAME = "Entity"


def _blank(max_len: int, text: str) -> str:
    return left_str_pad(" ", max_len - len(text), " ")


@dataclass
class EntityGenerator:
    """Fills the entity templates for one table and writes the result."""

    out_dir: str
    entity_package: str
    model_info: ModelInfo
    properties: list[Property] = field(default_factory=list)
    table: Table = field(default_factory=Table)
    upper_primary_key: str = ""
    field_max_len: int = 0
    property_type_max_len: int = 0
    upper_property_max_len: int = 0
    force: bool = False
    upper_create_time: str = "CreateTime"
    upper_update_time: str = "UpdateTime"
    entity_filename: str = "Entity.go"
    stub_dir: str | Path | None = None
    imports: list[str] = field(default_factory=list)
    flags: list[str] = field(default_factory=list)

    @property
    def outfile(self) -> str:
        return f"{self.out_dir}{os.sep}{self.entity_package}{os.sep}{self.entity_filename}"

    def _stub(self, filename: str) -> str:
        return load_stub(filename, self.stub_dir)

    def _row_property(self, prop: Property) -> str:
        stub = self._stub(ENTITY_PROPERTY_STUB)
        stub = stub.replace("%UPPER_PROPERTY%", prop.upper_property, 1)
        stub = stub.replace(
            "%BLANK_FIRST%", _blank(self.upper_property_max_len, prop.upper_property), 1
        )
        stub = stub.replace("%PROPERTY_TYPE%", prop.property_type, 1)
        stub = stub.replace(
            "%BLANK_SECOND%", _blank(self.property_type_max_len, prop.property_type), 1
        )
        stub = stub.replace(
            "%BLANK_THREE%", _blank(self.field_max_len, prop.table_field), 1
        )
        stub = stub.replace("%TABLE_FIELDS%", prop.table_field, 1)
        return stub.replace("%TABLE_FIELDS_COMMENT%", prop.table_field_comment, 1)

    def _import_block(self, extra: list[str]) -> str:
        base = sorted(
            left_str_pad(imp, 4, " ")
            for imp in (ARM_IMPORT, f'"{self.model_info.model_import}"')
        )
        return "\n".join([*base, *extra])

    def _flags_block(self) -> str:
        flags = [
            left_str_pad("FlagDelete arm.Flag = iota + 1", 4, " "),
            left_str_pad("FlagUpdate", 4, " "),
        ]
        return "\n".join([*flags, *self.flags])

    def _property_block(self, rows: list[str]) -> str:
        edit_blank = _blank(self.upper_property_max_len, "_edit")
        flag_blank = _blank(self.upper_property_max_len, "_flag")
        head = [
            left_str_pad(f"_edit{edit_blank}bool", 4, " "),
            left_str_pad(f"_flag{flag_blank}arm.Flag", 4, " "),
        ]
        return "\n".join([*head, *rows])

    def render(self) -> str:
        """Return the entity source text for the configured table."""
        imports: list[str] = []
        for imp in self.imports:
            padded = left_str_pad(imp, 4, " ")
            if padded not in imports:
                imports.append(padded)
        rows: list[str] = []
        equals: list[str] = []
        time_now = create_time = update_time = ""
        equal_stub = self._stub(ENTITY_EQUAL_STUB)

        for prop in self.properties:
            if prop.property_type == TIME_IMPORT:
                padded = left_str_pad('"time"', 4, " ")
                if padded not in imports:
                    imports.append(padded)
            if prop.upper_property == self.upper_create_time:
                time_now = TIME_NOW
                create_time = prop.upper_property
            elif prop.upper_property == self.upper_update_time:
                time_now = TIME_NOW
                update_time = prop.upper_property
            row = left_str_pad(self._row_property(prop), 4, " ")
            if row not in rows:
                rows.append(row)
            equal = equal_stub.replace("%UPPER_PROPERTY%", prop.upper_property)
            equals.append(left_str_pad(equal, 8, " ") if equals else equal)

        if time_now:
            time_now = "\n" + left_str_pad(f"tn := {time_now}", 4, " ")
        assignments = ", ".join(
            f"{name}: tn" for name in (create_time, update_time) if name
        )

        text = self._stub(ENTITY_STUB)
        text = text.replace("%PACKAGE%", self.entity_package, 1)
        text = text.replace("%IMPORT%", self._import_block(imports), 1)
        text = text.replace("%FLAGS%", self._flags_block(), 1)
        text = text.replace("%TABLE_COMMENT%", self.table.comment, 1)
        text = text.replace("%PROPERTY%", self._property_block(rows), 1)
        text = text.replace("%TIME_NOW%", time_now, 1)
        text = text.replace("%CREATE_UPDATE_TIME%", assignments, 1)
        text = text.replace("%UPPER_PRIMARY_KEY%", self.upper_primary_key, 1)
        text = text.replace("%MODEL_PACKAGE%", self.model_info.model_package)
        return text.replace("%EQUALS%", " &&\n".join(equals))

    def generate(self) -> str:
        """Write the entity file unless it exists and ``force`` is off; return its path."""
        content = self.render()
        outfile = self.outfile
        if not os.path.exists(outfile):
            write_file(outfile, content)
            print(f"Entity IDE {outfile} was created.")
        elif self.force:
            write_file(outfile, content)
            print(f"Entity IDE {outfile} was forced updated.")
        else:
            print(f"Entity IDE {outfile} was existent.")
        return outfile