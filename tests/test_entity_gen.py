import os

import pytest

from ormkit.entity_gen import EntityGenerator
from ormkit.genutils import ARM_IMPORT, ModelInfo, Property, Table

ENTITY_STUB = (
    "package %PACKAGE%\n\nimport (\n%IMPORT%\n)\n\nconst (\n%FLAGS%\n)\n\n"
    "// %TABLE_COMMENT%\ntype Entity struct {\n%PROPERTY%\n}\n\n"
    "func New() *Entity {%TIME_NOW%\n    return &Entity{%CREATE_UPDATE_TIME%}\n}\n\n"
    "func (e *Entity) Key() { _ = e.%UPPER_PRIMARY_KEY% }\n"
    "// uses %MODEL_PACKAGE%\n"
    "func eq() bool {\n    return %EQUALS%\n}\n"
)
PROPERTY_STUB = (
    "%UPPER_PROPERTY%%BLANK_FIRST%%PROPERTY_TYPE%%BLANK_SECOND%"
    "`col:%TABLE_FIELDS%`%BLANK_THREE%// %TABLE_FIELDS_COMMENT%"
)
EQUAL_STUB = "a.%UPPER_PROPERTY% == b.%UPPER_PROPERTY%"


@pytest.fixture
def stub_dir(tmp_path):
    directory = tmp_path / "stubs"
    directory.mkdir()
    (directory / "entity.stub").write_text(ENTITY_STUB)
    (directory / "entityProperty.stub").write_text(PROPERTY_STUB)
    (directory / "entityEqual.stub").write_text(EQUAL_STUB)
    return directory


def _prop(upper, ptype, column, comment="c"):
    return Property(False, upper, upper[0].lower() + upper[1:], ptype, column, comment)


def _generator(stub_dir, out_dir, properties, **kwargs):
    return EntityGenerator(
        out_dir=str(out_dir),
        entity_package="UserEntity",
        model_info=ModelInfo("example.com/app/models/User", "User"),
        properties=properties,
        table=Table("ts_user", "users table"),
        upper_primary_key="Id",
        field_max_len=11,
        property_type_max_len=9,
        upper_property_max_len=10,
        stub_dir=stub_dir,
        **kwargs,
    )


PROPS = [
    _prop("Id", "int64", "id"),
    _prop("CreateTime", "time.Time", "create_time"),
    _prop("UpdateTime", "time.Time", "update_time"),
]


def test_render_fills_package_comment_and_primary_key(stub_dir, tmp_path):
    text = _generator(stub_dir, tmp_path, PROPS).render()
    assert text.startswith("package UserEntity\n")
    assert "// users table\n" in text
    assert "_ = e.Id }" in text
    assert "// uses User\n" in text
    assert "%" not in text


def test_render_imports_sorted_with_time_once(stub_dir, tmp_path):
    text = _generator(stub_dir, tmp_path, PROPS).render()
    block = text.split("import (\n", 1)[1].split("\n)", 1)[0].split("\n")
    assert block[:2] == sorted(block[:2])
    assert "    " + ARM_IMPORT in block
    assert block.count('    "time"') == 1
    assert block[-1] == '    "time"'


def test_render_time_now_and_assignments(stub_dir, tmp_path):
    text = _generator(stub_dir, tmp_path, PROPS).render()
    assert "\n    tn := time.Now()\n" in text
    assert "return &Entity{CreateTime: tn, UpdateTime: tn}" in text


def test_render_without_time_columns(stub_dir, tmp_path):
    text = _generator(stub_dir, tmp_path, [_prop("Id", "int64", "id")]).render()
    assert "tn :=" not in text
    assert "return &Entity{}" in text
    assert '"time"' not in text


def test_render_equals_joined_and_indented(stub_dir, tmp_path):
    text = _generator(stub_dir, tmp_path, PROPS[:2]).render()
    assert "return a.Id == b.Id &&\n        a.CreateTime == b.CreateTime\n" in text


def test_render_flags_and_property_head(stub_dir, tmp_path):
    text = _generator(stub_dir, tmp_path, PROPS).render()
    assert "    FlagDelete arm.Flag = iota + 1\n    FlagUpdate\n" in text
    struct = text.split("type Entity struct {\n", 1)[1].split("\n}", 1)[0].split("\n")
    assert struct[0].startswith("    _edit") and struct[0].endswith("bool")
    assert struct[1].startswith("    _flag") and struct[1].endswith("arm.Flag")
    assert len(struct) == 2 + len(PROPS)
    # Types line up in one column because padding follows the longest name.
    columns = {line.index("int64") if "int64" in line else line.index("time.Time")
               for line in struct[2:]}
    assert len(columns) == 1


def test_render_duplicate_rows_dropped(stub_dir, tmp_path):
    props = [PROPS[0], PROPS[0]]
    text = _generator(stub_dir, tmp_path, props).render()
    struct = text.split("type Entity struct {\n", 1)[1].split("\n}", 1)[0]
    assert struct.count("`col:id`") == 1
    assert text.count("a.Id == b.Id") == 2


def test_generate_creates_file(stub_dir, tmp_path, capsys):
    gen = _generator(stub_dir, tmp_path / "out", PROPS)
    path = gen.generate()
    assert path == os.path.join(str(tmp_path / "out"), "UserEntity", "Entity.go")
    with open(path, encoding="utf-8") as handle:
        assert handle.read() == gen.render()
    assert "was created." in capsys.readouterr().out


def test_generate_keeps_existing_without_force(stub_dir, tmp_path, capsys):
    gen = _generator(stub_dir, tmp_path, PROPS)
    path = gen.generate()
    with open(path, "w", encoding="utf-8") as handle:
        handle.write("custom")
    gen.generate()
    with open(path, encoding="utf-8") as handle:
        assert handle.read() == "custom"
    assert "was existent." in capsys.readouterr().out


def test_generate_force_overwrites(stub_dir, tmp_path, capsys):
    gen = _generator(stub_dir, tmp_path, PROPS, force=True)
    path = gen.generate()
    with open(path, "w", encoding="utf-8") as handle:
        handle.write("custom")
    gen.generate()
    with open(path, encoding="utf-8") as handle:
        assert handle.read() == gen.render()
    assert "was forced updated." in capsys.readouterr().out


def test_missing_stub_raises(tmp_path):
    gen = _generator(tmp_path / "nowhere", tmp_path, PROPS)
    with pytest.raises(FileNotFoundError):
        gen.render()