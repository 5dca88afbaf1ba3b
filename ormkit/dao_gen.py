"""Generation of data-access-object source files from table properties."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from .genutils import (
    ARM_IMPORT,
    DAO_EXCEPTION_IMPORT,
    GORM_IMPORT,
    HIM_IMPORT,
    EntityInfo,
    ModelInfo,
    Property,
    Table,
    left_str_pad,
)
from .stubs import load_stub

__all__ = ["DaoGenerator", "write_file"]

DAO_STUB = "dao.stub"
DAO_PROPERTY_STUB = "daoProperty.stub"
DAO_INSERT_COLUMNS_STUB = "daoInsertColumns.stub"
DAO_VALUES_STUB = "daoValues.stub"
DAO_CASE_STUB = "daoCase.stub"
DAO_WHEN_STUB = "daoWhen.stub"
DAO_CASE_WHEN_STUB = "daoCaseWhen.stub"


def write_file(path: str | Path, content: str) -> None:
    """Write ``content`` to ``path``, creating missing parent directories."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(content.encode("utf-8"))


def _merge(items: list[str], text: str, pad: int, first_pad: int = 0) -> None:
    """Append ``text`` indented by ``pad`` (``first_pad`` when empty) unless present."""
    padded = left_str_pad(text, pad if items else first_pad, " ")
    if padded not in items:
        items.append(padded)


@dataclass
class DaoGenerator:
    """Fills the dao templates for one table and writes the result."""

    out_dir: str
    dao_filename: str
    dao_package: str
    model_info: ModelInfo
    entity_info: EntityInfo
    properties: list[Property] = field(default_factory=list)
    table: Table = field(default_factory=Table)
    primary_key: str = ""
    upper_primary_key: str = ""
    field_max_len: int = 0
    property_type_max_len: int = 0
    upper_property_max_len: int = 0
    force: bool = False
    upper_update_time: str = "UpdateTime"
    stub_dir: str | Path | None = None
    imports: list[str] = field(default_factory=list)

    @property
    def outfile(self) -> str:
        return f"{self.out_dir}{os.sep}{self.dao_filename}"

    def _stub(self, filename: str) -> str:
        return load_stub(filename, self.stub_dir)

    def _row_property(self, upper_property: str, blank_first: str, comment: str) -> str:
        stub = self._stub(DAO_PROPERTY_STUB)
        stub = stub.replace("%MODEL_PACKAGE%", self.model_info.model_package, 1)
        stub = stub.replace("%UPPER_PROPERTY%", upper_property, 2)
        stub = stub.replace("%BLANK_FIRST%", blank_first, 1)
        return stub.replace("%TABLE_FIELDS_COMMENT%", comment, 1)

    def _insert_column(self, upper_property: str) -> str:
        stub = self._stub(DAO_INSERT_COLUMNS_STUB)
        stub = stub.replace("%MODEL_PACKAGE%", self.model_info.model_package, 1)
        return stub.replace("%UPPER_PROPERTY%", upper_property, 1)

    def _value(self, upper_property: str) -> str:
        return self._stub(DAO_VALUES_STUB).replace("%UPPER_PROPERTY%", upper_property, 1)

    def _case(self, prop: Property) -> str:
        stub = self._stub(DAO_CASE_STUB)
        stub = stub.replace("%LOWER_PROPERTY%", prop.lower_property, 1)
        stub = stub.replace("%MODEL_PACKAGE%", self.model_info.model_package, 1)
        return stub.replace("%UPPER_PROPERTY%", prop.upper_property, 1)

    def _when(self, prop: Property) -> str:
        stub = self._stub(DAO_WHEN_STUB)
        stub = stub.replace("%LOWER_PROPERTY%", prop.lower_property, 1)
        stub = stub.replace("%MODEL_PACKAGE%", self.model_info.model_package, 1)
        stub = stub.replace("%UPPER_PRIMARY_KEY%", self.upper_primary_key, 2)
        return stub.replace("%UPPER_PROPERTY%", prop.upper_property, 1)

    def _case_when(self, prop: Property) -> str:
        return self._stub(DAO_CASE_WHEN_STUB).replace(
            "%LOWER_PROPERTY%", prop.lower_property, 1
        )

    def _import_block(self) -> str:
        imports = sorted(
            left_str_pad(imp, 4, " ")
            for imp in (
                ARM_IMPORT,
                DAO_EXCEPTION_IMPORT,
                HIM_IMPORT,
                GORM_IMPORT,
                f'"{self.entity_info.entity_import}"',
                f'"{self.model_info.model_import}"',
            )
        )
        return "\n".join([*imports, *self.imports])

    def render(self) -> str:
        """Return the dao source text for the configured table."""
        rows: list[str] = []
        insert_columns: list[str] = []
        values: list[str] = []
        cases: list[str] = []
        whens: list[str] = []
        case_whens: list[str] = []
        row_update_time = ""

        for prop in self.properties:
            width = (self.upper_property_max_len - len(prop.upper_property)) * 2
            blank_first = left_str_pad(" ", width, " ")
            row = self._row_property(
                prop.upper_property, blank_first, prop.table_field_comment
            )
            if prop.upper_property == self.upper_update_time:
                row_update_time = row
            _merge(rows, row, 12, first_pad=12)
            _merge(insert_columns, self._insert_column(prop.upper_property), 12)
            _merge(values, self._value(prop.upper_property), 16)
            _merge(cases, self._case(prop), 8)
            _merge(whens, self._when(prop), 12)
            _merge(case_whens, self._case_when(prop), 8)

        text = self._stub(DAO_STUB)
        text = text.replace("%PACKAGE%", self.dao_package, 1)
        text = text.replace("%IMPORT%", self._import_block(), 1)
        text = text.replace("%MODEL_PROPERTY%", "\n".join(rows), 1)
        text = text.replace("%INSERT_COLUMNS%", "\n".join(insert_columns), 1)
        text = text.replace("%VALUES%", "\n".join(values), 1)
        text = text.replace("%CASES%", "\n".join(cases), 1)
        text = text.replace("%WHENS%", "\n".join(whens), 1)
        text = text.replace("%CASE_WHEN%", "\n".join(case_whens), 1)
        text = text.replace("%PRIMARY_KEY%", self.primary_key)
        text = text.replace("%UPPER_PRIMARY_KEY%", self.upper_primary_key)
        text = text.replace("%MODEL_PACKAGE%", self.model_info.model_package)
        if row_update_time:
            row_update_time = "\n" + left_str_pad(row_update_time, 12, " ")
        return text.replace("%ROW_UPDATE_TIME%", row_update_time, 1)

    def generate(self) -> str:
        """Write the dao file unless it exists and ``force`` is off; return its path."""
        content = self.render()
        outfile = self.outfile
        if not os.path.exists(outfile):
            write_file(outfile, content)
            print(f"Dao IDE {outfile} was created.")
        elif self.force:
            write_file(outfile, content)
            print(f"Dao IDE {outfile} was forced updated.")
        else:
            print(f"Dao IDE {outfile} was existent.")
        return outfile