# ormkit

Tools for a table-driven data layer:

- **SQL fragments**: `Fields`, `AsField` and `TableName` build quoted column
  and table expressions for MySQL-style queries.
- **Table events**: register one handler per table and event type, then fire
  it with an `EventRecord`.
- **Source generation**: fill stub templates with table metadata to produce
  model, entity and DAO source files (`ModelGenerator`, `EntityGenerator`,
  `DaoGenerator`).

## SQL fragments

The package quotes names that have no back-quotes. It uses names that
already carry back-quotes unchanged.

```python
from ormkit.fields import Fields
from ormkit.table_name import TableName

name = Fields("name")
str(name)                    # "`name`"
name.eq("alice")             # "`name` = 'alice'"
name.in_(1, 2, 3)            # "`name` IN('1','2','3')"
name.not_in("a", "b")        # "`name` NOT IN('a','b')"
name.values()                # "`name` = VALUES(name)"
name.desc()                  # "`name` DESC"
name.count().as_("total")    # "COUNT(`name`) AS `total`"
name.pre("u")                # Fields("`u`.`name`")

table = TableName("user").as_alias("u").force_index("idx_name")
str(table)                   # "`user` AS `u` FORCE INDEX (`idx_name`)"
```

The module also has `Fields.distinct`, `Fields.isnull`, `Fields.field`,
`Fields.asc`, `Fields.sum` and the `as_handle` helper. `TableName.__str__`
returns a table name that already carries back-quotes unchanged, with no
alias or index.

## Table events

`ormkit.events` keeps one handler for each pair of event type and table. If
you register a second handler for the same pair, the first one stays. The
registry is safe to use from several threads.

```python
from ormkit.events import EventRecord, EventType, add_event, point

def audit(record):
    print(record.table, record.sql, record.rows_affected)

add_event(EventType.AFTER_INSERT, "user", audit)
point(EventType.AFTER_INSERT, EventRecord(table="user", sql="INSERT ...", rows_affected=1))
```

`point` runs the handler registered for that event type and the record's
table. It does nothing when no handler matches. You can also build `Event`
objects yourself and pass them to `register`. For a separate registry, use
`EventRepository` directly.

## Source generation

`ormkit.genutils` holds the metadata records:

- `Table`
- `TableField`, one row of `SHOW FULL COLUMNS`
- `Property`
- `ModelInfo`
- `EntityInfo`

It also holds these helpers:

- `convert_field_type` maps MySQL column types to property types.
- `case_to_camel`, `lcfirst`, `ucfirst` and `left_str_pad` are string helpers.
- `yes_no` reads a yes/no answer.
- `go_mod_child_path` finds the directories between the nearest `go.mod` and a path.
- `mod_info` runs `go mod edit -json` and returns a `GoMod`.

Generated imports of the runtime library start with the `ORM_MODULE` root.

`ormkit.model_gen` does the following:

- `collect_properties` turns table fields into a `PropertyLayout`, which holds the properties, the alignment widths and the primary key.
- `ModelGenerator.render(table, fields)` returns the model source text.
- `ModelGenerator.generate(table, fields, out_dir)` writes `<out_dir>/<Package>/Model.go`. Depending on its settings it also writes the entity file (through `EntityGenerator`) and the DAO file (through `DaoGenerator`). It returns the paths it handled.

When `module_path` or `child_path` is not given, `generate` finds them by
running `go mod edit -json` and looking upward for `go.mod`.

An existing file is rewritten only when generation is forced (`force`,
`force_entity`, `force_dao`). Otherwise it is left untouched and reported as
existent.

```python
from ormkit.genutils import Table, TableField
from ormkit.model_gen import ModelGenerator

generator = ModelGenerator(
    prefix="ts_",
    out_entity_dir="app/entity",
    out_dao_dir="app/dao",
    stub_dir="path/to/stubs",
    module_path="example.com/app",
    child_path=[],
)
fields = [
    TableField(field="id", type="bigint(20)", key="PRI", comment="id"),
    TableField(field="name", type="varchar(64)", comment="name"),
]
generator.generate(Table(name="ts_school", comment="schools"), fields, "app/models")
```

`ormkit.stubs.load_stub` reads the templates, and `Stub` caches one. Each
generator's `stub_dir` decides where they come from. When `stub_dir` is not
set, templates are read from a `stubs` directory beside the package.

## What the package does not do

- It ships no template files. Supply a directory with `model.stub`,
  `entity.stub`, `dao.stub` and the row templates they use.
- It does not connect to a database and does not read table metadata.
  Build `Table` and `TableField` values yourself.
- It has no query builder, transactions or model runtime. Its SQL support
  ends at the string fragments described above.
- It has no command-line tool and no interactive prompts.
- It does not merge regenerated code into files that already exist.

## Running the tests

Install the package with its `test` extra and run `pytest` from the project
root.