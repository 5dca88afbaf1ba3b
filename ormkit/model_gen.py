"""Generation of model source files from table column descriptions."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from .dao_gen import DaoGenerator, write_file
from .entity_gen import EntityGenerator
from .genutils import (
    ARM_IMPORT,
    HIM_IMPORT,
    TIME_IMPORT,
    EntityInfo,
    ModelInfo,
    Property,
    Table,
    TableField,
    case_to_camel,
    convert_field_type,
    go_mod_child_path,
    lcfirst,
    left_str_pad,
    mod_info,
)
from .stubs import load_stub

__all__ = [
    "PropertyLayout",
    "collect_properties",
    "package_name",
    "import_path",
    "ModelGenerator",
]

MODEL_STUB = "model.stub"
MODEL_FIELDS_STUB = "modelFields.stub"
MODEL_PROPERTY_STUB = "modelProperty.stub"
MODEL_WITH_PROPERTY_STUB = "modelWithProperty.stub"
MODEL_EQUAL_STUB = "modelEqual.stub"
MODEL_FILENAME = "Model.go"

_GO_KEYWORDS = frozenset(
    {
        "break", "case", "chan", "const", "continue", "default", "defer",
        "else", "fallthrough", "for", "func", "go", "goto", "if", "import",
        "interface", "map", "package", "range", "return", "select", "struct",
        "switch", "type", "var",
    }
)


@dataclass
class PropertyLayout:
    """Properties of a table together with the widths used to align them."""

    properties: list[Property] = field(default_factory=list)
    upper_property_max_len: int = 0
    field_max_len: int = 0
    property_type_max_len: int = 0
    primary_key: str = ""
    upper_primary_key: str = ""


def collect_properties(fields: Iterable[TableField]) -> PropertyLayout:
    """Derive properties and column widths from table fields."""
    fields = list(fields)
    layout = PropertyLayout()
    types = [convert_field_type(f) for f in fields]
    uppers = [case_to_camel(f.field) for f in fields]
    layout.upper_property_max_len = max((len(u) for u in uppers), default=0)
    layout.field_max_len = max((len(f.field) for f in fields), default=0)
    layout.property_type_max_len = max((len(t) for t in types), default=0)

    is_primary_key = False
    for table_field, upper, property_type in zip(fields, uppers, types):
        if table_field.key == "PRI":
            layout.upper_primary_key = upper
            layout.primary_key = lcfirst(upper)
            # Stays set for every later column, as the generated code expects.
            is_primary_key = True
        layout.properties.append(
            Property(
                is_primary_key=is_primary_key,
                upper_property=upper,
                lower_property=lcfirst(upper),
                property_type=property_type,
                table_field=table_field.field,
                table_field_comment=table_field.comment,
            )
        )
    return layout


def package_name(table_name: str, prefix: str) -> str:
    """Model package name: the table name without its prefix, in CamelCase."""
    return case_to_camel(table_name.replace(prefix, "", 1))


def import_path(module_path: str, child_path: Iterable[str], directory: str) -> str:
    """Build an import path for ``directory`` inside the module."""
    if not module_path.endswith("/"):
        module_path += "/"
    children = list(child_path)
    child = f"/{'/'.join(children)}/" if children else ""
    joined = module_path + child + directory.replace("\\", "/")
    return joined.replace("//", "/")


def _append_unique(items: list[str], text: str) -> None:
    if text not in items:
        items.append(text)


@dataclass
class ModelGenerator:
    """Fills the model templates for a table and writes model, entity and dao files."""

    prefix: str = ""
    is_generate_dao: bool = True
    is_generate_entity: bool = True
    out_entity_dir: str = ""
    out_dao_dir: str = ""
    force: bool = False
    force_entity: bool = False
    force_dao: bool = False
    upper_create_time: str = "CreateTime"
    upper_update_time: str = "UpdateTime"
    stub_dir: str | Path | None = None
    module_path: str | None = None
    child_path: list[str] | None = None

    def _stub(self, filename: str) -> str:
        return load_stub(filename, self.stub_dir)

    def _row_field(self, prop: Property, blank: str) -> str:
        stub = self._stub(MODEL_FIELDS_STUB)
        stub = stub.replace("%UPPER_PROPERTY%", prop.upper_property, 1)
        stub = stub.replace("%BLANK_FIRST%", blank, 1)
        stub = stub.replace("%TABLE_FIELDS%", prop.table_field, 1)
        stub = stub.replace("%BLANK_SECOND%", blank, 1)
        return stub.replace("%TABLE_FIELDS_COMMENT%", prop.table_field_comment, 1)

    def _row_property(
        self, prop: Property, blank_first: str, blank_second: str, blank_three: str
    ) -> str:
        stub = self._stub(MODEL_PROPERTY_STUB)
        stub = stub.replace("%UPPER_PROPERTY%", prop.upper_property, 1)
        stub = stub.replace("%BLANK_FIRST%", blank_first, 1)
        stub = stub.replace("%PROPERTY_TYPE%", prop.property_type, 1)
        stub = stub.replace("%BLANK_SECOND%", blank_second, 1)
        stub = stub.replace("%BLANK_THREE%", blank_three, 1)
        stub = stub.replace("%BLANK_FOUR%", blank_three, 1)
        stub = stub.replace("%TABLE_FIELDS%", prop.table_field, 2)
        return stub.replace("%TABLE_FIELDS_COMMENT%", prop.table_field_comment, 1)

    def _row_with_property(self, prop: Property) -> str:
        lower = prop.lower_property
        if lower in _GO_KEYWORDS:
            lower = f"_{lower}"
        stub = self._stub(MODEL_WITH_PROPERTY_STUB)
        stub = stub.replace("%UPPER_PROPERTY%", prop.upper_property, 3)
        stub = stub.replace("%LOWER_PROPERTY%", lower, 2)
        stub = stub.replace("%PROPERTY_TYPE%", prop.property_type, 1)
        return stub.replace("%TABLE_FIELDS_COMMENT%", prop.table_field_comment, 1)

    def render(self, table: Table, fields: Iterable[TableField]) -> str:
        """Return the model source text for ``table``."""
        layout = collect_properties(fields)
        imports: list[str] = []
        field_rows: list[str] = []
        property_rows: list[str] = []
        with_rows: list[str] = []
        equals: list[str] = []
        equal_stub = self._stub(MODEL_EQUAL_STUB)

        for prop in layout.properties:
            if prop.property_type == TIME_IMPORT:
                _append_unique(imports, left_str_pad('"time"', 4, " "))
            blank_first = left_str_pad(
                " ", layout.upper_property_max_len - len(prop.upper_property), " "
            )
            blank_second = left_str_pad(
                " ", layout.property_type_max_len - len(prop.property_type), " "
            )
            blank_three = left_str_pad(
                " ", layout.field_max_len - len(prop.table_field), " "
            )
            _append_unique(
                field_rows, left_str_pad(self._row_field(prop, blank_first), 4, " ")
            )
            _append_unique(
                property_rows,
                left_str_pad(
                    self._row_property(prop, blank_first, blank_second, blank_three),
                    4,
                    " ",
                ),
            )
            _append_unique(with_rows, self._row_with_property(prop))
            equal = equal_stub.replace("%UPPER_PROPERTY%", prop.upper_property)
            equals.append(left_str_pad(equal, 8, " ") if equals else equal)

        import_block = [left_str_pad(ARM_IMPORT, 4, " "), left_str_pad(HIM_IMPORT, 4, " ")]
        text = self._stub(MODEL_STUB)
        text = text.replace("%PACKAGE%", package_name(table.name, self.prefix), 1)
        text = text.replace("%IMPORT%", "\n".join([*import_block, *imports]), 1)
        text = text.replace("%FIELDS%", "\n".join(field_rows), 1)
        text = text.replace("%TABLE_COMMENT%", table.comment, 1)
        text = text.replace("%PROPERTY%", "\n".join(property_rows), 1)
        text = text.replace("%TABLE_NAME%", table.name, 1)
        text = text.replace("%UPPER_PRIMARY_KEY%", layout.upper_primary_key, 1)
        text = text.replace("%WITH_PROPERTY%", "\n\n".join(with_rows), 1)
        return text.replace("%EQUALS%", " &&\n".join(equals))

    def _module_location(self) -> tuple[str, list[str]]:
        module_path = self.module_path
        if module_path is None:
            module_path = mod_info().module.path
        child_path = self.child_path
        if child_path is None:
            child_path = go_mod_child_path(os.getcwd())
        return module_path, list(child_path)

    def _entity_generator(
        self, table: Table, layout: PropertyLayout, entity_package: str, model_info: ModelInfo
    ) -> EntityGenerator:
        return EntityGenerator(
            out_dir=self.out_entity_dir,
            entity_package=entity_package,
            model_info=model_info,
            properties=layout.properties,
            table=table,
            upper_primary_key=layout.upper_primary_key,
            field_max_len=layout.field_max_len,
            property_type_max_len=layout.property_type_max_len,
            upper_property_max_len=layout.upper_property_max_len,
            force=self.force_entity,
            upper_create_time=self.upper_create_time,
            upper_update_time=self.upper_update_time,
            stub_dir=self.stub_dir,
        )

    def generate(
        self, table: Table, fields: Iterable[TableField], out_dir: str
    ) -> list[str]:
        """Write the model file and, as configured, the entity and dao; return the paths."""
        fields = list(fields)
        layout = collect_properties(fields)
        content = self.render(table, fields)
        model_package = package_name(table.name, self.prefix)
        outfile = f"{out_dir}{os.sep}{model_package}{os.sep}{MODEL_FILENAME}"
        if not os.path.exists(outfile):
            write_file(outfile, content)
            print(f"Model IDE {outfile} was created.")
        elif self.force:
            write_file(outfile, content)
            print(f"Model IDE {outfile} was forced updated.")
        else:
            print(f"Model IDE {outfile} was existent.")
        written = [outfile]

        if not (self.is_generate_dao or self.is_generate_entity):
            return written

        entity_package = f"{model_package}Entity"
        module_path, child_path = self._module_location()
        model_import = import_path(module_path, child_path, os.path.dirname(outfile))
        model_info = ModelInfo(model_import=model_import, model_package=model_package)

        written.append(
            self._entity_generator(table, layout, entity_package, model_info).generate()
        )
        if self.is_generate_dao:
            entity_import = import_path(
                module_path, child_path, f"{self.out_entity_dir}/{entity_package}"
            )
            dao = DaoGenerator(
                out_dir=self.out_dao_dir,
                dao_filename=f"{model_package}Dao.go",
                dao_package=os.path.basename(self.out_dao_dir),
                model_info=model_info,
                entity_info=EntityInfo(
                    entity_import=entity_import, entity_package=entity_package
                ),
                properties=layout.properties,
                table=table,
                primary_key=layout.primary_key,
                upper_primary_key=layout.upper_primary_key,
                field_max_len=layout.field_max_len,
                property_type_max_len=layout.property_type_max_len,
                upper_property_max_len=layout.upper_property_max_len,
                force=self.force_dao,
                upper_update_time=self.upper_update_time,
                stub_dir=self.stub_dir,
            )
            written.append(dao.generate())
        return written